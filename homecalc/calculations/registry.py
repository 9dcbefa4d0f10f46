"""
Calculator Registry

Holds one instance per calculator type and runs the
sanitize -> validate -> calculate pipeline for a request.

Build it once at start-up and pass it to callers; lookups need no locking
because the mapping is only replaced under ``_lock``.
"""

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from homecalc.calculations.affordability import AffordabilityCalculator
from homecalc.calculations.base import BaseCalculator, CallToAction
from homecalc.calculations.credit_simulator import CreditSimulator
from homecalc.calculations.dti import DTICalculator
from homecalc.calculations.exceptions import (
    CalculationError,
    CalculatorError,
    UnknownCalculatorType,
    ValidationError,
)
from homecalc.calculations.loan_readiness import LoanReadinessCalculator
from homecalc.calculations.savings import SavingsCalculator

logger = logging.getLogger(__name__)


@dataclass
class CalculationOutcome:
    """Result of ``process_calculation``: results on success, the error otherwise."""

    success: bool
    results: Optional[Dict[str, Any]] = None
    clean_input: Optional[Dict[str, Any]] = None
    error: Optional[CalculatorError] = field(default=None, repr=False)

    def to_dict(self) -> dict:
        if self.success:
            return {"success": True, "results": self.results}
        return self.error.to_dict()


class CalculatorRegistry:
    """Ordered mapping of calculator type to calculator instance."""

    def __init__(self, calculators: Optional[List[BaseCalculator]] = None):
        self._lock = threading.Lock()
        self._calculators: Dict[str, BaseCalculator] = {}
        for calculator in calculators or []:
            self.register(calculator)

    def register(self, calculator: BaseCalculator) -> None:
        """Add a calculator, replacing any existing one of the same type."""
        if not isinstance(calculator, BaseCalculator):
            raise TypeError(f"Expected a BaseCalculator, got {type(calculator).__name__}")

        with self._lock:
            calculators = dict(self._calculators)
            if calculator.type in calculators:
                logger.warning(f"Replacing calculator '{calculator.type}'")
            calculators[calculator.type] = calculator
            self._calculators = calculators

    def get_calculator(self, calculator_type: str) -> BaseCalculator:
        calculator = self._calculators.get(calculator_type)
        if calculator is None:
            raise UnknownCalculatorType(calculator_type)
        return calculator

    def has_calculator(self, calculator_type: str) -> bool:
        return calculator_type in self._calculators

    def list_calculator_types(self) -> List[str]:
        """Registered types in registration order."""
        return list(self._calculators)

    def get_calculator_options(self) -> Dict[str, str]:
        """Type -> display name, for building menus."""
        return {calc_type: calc.name for calc_type, calc in self._calculators.items()}

    def get_definitions(self) -> List[dict]:
        return [calculator.get_definition() for calculator in self._calculators.values()]

    def _execute(
        self, calculator_type: str, raw_input: Mapping[str, Any]
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        calculator = self.get_calculator(calculator_type)

        clean_input = calculator.sanitize_input(raw_input or {})

        validation = calculator.validate_input(clean_input)
        if not validation.valid:
            logger.debug(f"Validation failed for {calculator_type}: {validation.message}")
            raise ValidationError(validation.errors)

        try:
            results = calculator.calculate(clean_input)
        except Exception as e:
            logger.exception(f"Calculation failed for {calculator_type}")
            raise CalculationError(calculator_type) from e

        return clean_input, results

    def run_calculation(self, calculator_type: str, raw_input: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Sanitize, validate and calculate.

        Raises:
            UnknownCalculatorType: If the type is not registered
            ValidationError: If the input fails validation
            CalculationError: If the calculator raised
        """
        _, results = self._execute(calculator_type, raw_input)
        return results

    def process_calculation(
        self, calculator_type: str, raw_input: Mapping[str, Any]
    ) -> CalculationOutcome:
        """Run a calculation and report the outcome instead of raising."""
        try:
            clean_input, results = self._execute(calculator_type, raw_input)
        except CalculatorError as e:
            return CalculationOutcome(success=False, error=e)
        return CalculationOutcome(success=True, results=results, clean_input=clean_input)


def build_default_registry(
    cta: Optional[CallToAction] = None,
    rng: Optional[random.Random] = None,
) -> CalculatorRegistry:
    """Registry with the five built-in calculators."""
    return CalculatorRegistry(
        [
            LoanReadinessCalculator(cta),
            DTICalculator(cta),
            AffordabilityCalculator(cta),
            CreditSimulator(cta, rng=rng),
            SavingsCalculator(cta),
        ]
    )
