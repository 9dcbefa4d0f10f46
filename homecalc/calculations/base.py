"""
Base Calculator

Common behaviour for every calculator type: schema, sanitize/validate,
score classification and the call-to-action recommendation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from homecalc.calculations.fields import (
    FieldSpec,
    ValidationResult,
    ValidationRule,
    sanitize_input,
    validate_input,
)

# (minimum score, label, css class), checked top down
SCORE_CLASSIFICATIONS = [
    (90, "Excellent", "excellent"),
    (80, "Very Good", "very-good"),
    (70, "Good", "good"),
    (60, "Fair", "fair"),
    (50, "Poor", "poor"),
]
DEFAULT_CLASSIFICATION = ("Needs Improvement", "needs-improvement")


@dataclass(frozen=True)
class CallToAction:
    """Externally configured consultation link shown with recommendations."""

    url: str = "/consultation"
    text: str = "Get Professional Help"


def get_score_classification(score: float) -> Dict[str, str]:
    """Map a 0-100 score to its label."""
    for minimum, label, css_class in SCORE_CLASSIFICATIONS:
        if score >= minimum:
            return {"label": label, "class": css_class}
    label, css_class = DEFAULT_CLASSIFICATION
    return {"label": label, "class": css_class}


class BaseCalculator(ABC):
    """
    Base class for calculator types.

    Subclasses set ``type``, ``name``, ``description`` and ``fields`` and may
    add cross-field ``validation_rules``. Instances hold no per-request state.
    """

    type: str = ""
    name: str = ""
    description: str = ""
    fields: List[FieldSpec] = []
    validation_rules: List[ValidationRule] = []

    def __init__(self, cta: Optional[CallToAction] = None):
        self.cta = cta or CallToAction()

    def sanitize_input(self, raw_input: Mapping[str, Any]) -> Dict[str, Any]:
        return sanitize_input(self.fields, raw_input)

    def validate_input(self, clean_input: Mapping[str, Any]) -> ValidationResult:
        return validate_input(self.fields, clean_input, self.validation_rules)

    @abstractmethod
    def calculate(self, input_data: Mapping[str, Any]) -> Dict[str, Any]:
        """Compute the result for a validated clean input."""

    def get_definition(self) -> dict:
        return {
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "fields": [field.to_definition() for field in self.fields],
        }

    def generate_recommendations(self, score: float, threshold: float = 80) -> List[dict]:
        """Return the consultation call-to-action when the score is below threshold."""
        if score >= threshold:
            return []
        return [
            {
                "type": "cta",
                "title": "Get Professional Help",
                "description": (
                    "Our loan readiness experts can help you improve your score "
                    "and qualify for better rates."
                ),
                "action": self.cta.url,
                "action_text": self.cta.text,
                "priority": "high",
            }
        ]
