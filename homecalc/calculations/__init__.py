"""
Calculator Engine

Home-buyer calculators behind a single registry. Callers use
``CalculatorRegistry.list_calculator_types`` and
``CalculatorRegistry.process_calculation``.
"""

from homecalc.calculations.base import BaseCalculator, CallToAction
from homecalc.calculations.exceptions import (
    CalculationError,
    CalculatorError,
    UnknownCalculatorType,
    ValidationError,
)
from homecalc.calculations.registry import (
    CalculationOutcome,
    CalculatorRegistry,
    build_default_registry,
)

__all__ = [
    "BaseCalculator",
    "CallToAction",
    "CalculationError",
    "CalculatorError",
    "UnknownCalculatorType",
    "ValidationError",
    "CalculationOutcome",
    "CalculatorRegistry",
    "build_default_registry",
]
