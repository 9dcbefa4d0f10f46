"""
Calculator engine errors.

Only ``calculate`` may raise inside a calculator; the registry turns any
such failure into ``CalculationError``. Sanitization and validation always
return a result.
"""

from typing import List


class CalculatorError(Exception):
    """Base class for calculator engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class UnknownCalculatorType(CalculatorError):
    """Raised when a calculator type is not registered."""

    def __init__(self, calculator_type: str):
        super().__init__(f"Invalid calculator type: {calculator_type}")
        self.calculator_type = calculator_type


class ValidationError(CalculatorError):
    """Input failed field or business-rule validation. Recoverable by the caller."""

    def __init__(self, errors: List[str]):
        super().__init__(", ".join(errors))
        self.errors = list(errors)

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message, "errors": self.errors}


class CalculationError(CalculatorError):
    """
    A calculator raised while computing a result.

    The public message is generic; the underlying exception is
    kept as ``__cause__`` for diagnostics.
    """

    def __init__(self, calculator_type: str):
        super().__init__("An error occurred during calculation")
        self.calculator_type = calculator_type
