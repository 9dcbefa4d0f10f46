"""
Application services module.
"""

from homecalc.services.tracking import CalculationTracker, anonymize_input

__all__ = ["CalculationTracker", "anonymize_input"]
