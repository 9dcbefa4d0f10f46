"""
Calculator usage tracking.

Stores completed calculations and interaction events for a session. Inputs
are anonymized before they are written: dollar amounts become ranges and
credit scores become bands.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session

from homecalc.db.models import CalculationRecord, CalculatorEvent

logger = logging.getLogger(__name__)

RANGED_FIELDS = {"income", "monthlyIncome", "grossIncome", "downPayment", "homePrice"}
CREDIT_SCORE_FIELDS = {"creditScore", "currentScore"}
RATIO_FIELDS = {"dtiRatio", "interestRate", "downPaymentPercent"}
PII_FIELDS = {"name", "email", "phone", "address"}

# (upper bound exclusive, label)
VALUE_RANGES = [
    (1_000, "0-1k"),
    (5_000, "1k-5k"),
    (10_000, "5k-10k"),
    (25_000, "10k-25k"),
    (50_000, "25k-50k"),
    (100_000, "50k-100k"),
    (250_000, "100k-250k"),
    (500_000, "250k-500k"),
    (1_000_000, "500k-1M"),
]

CREDIT_SCORE_BANDS = [
    (580, "Poor (300-579)"),
    (670, "Fair (580-669)"),
    (740, "Good (670-739)"),
    (800, "Very Good (740-799)"),
]


def get_value_range(value: float) -> str:
    for limit, label in VALUE_RANGES:
        if value < limit:
            return label
    return "1M+"


def get_credit_score_range(score: float) -> str:
    for limit, label in CREDIT_SCORE_BANDS:
        if int(score) < limit:
            return label
    return "Excellent (800-850)"


def anonymize_input(input_data: Mapping[str, Any]) -> Dict[str, Any]:
    """Replace identifying amounts with ranges and drop personal fields."""
    anonymized: Dict[str, Any] = {}

    for key, value in input_data.items():
        if key in RANGED_FIELDS:
            anonymized[f"{key}_range"] = get_value_range(float(value))
        elif key in CREDIT_SCORE_FIELDS:
            anonymized[f"{key}_range"] = get_credit_score_range(value)
        elif key in RATIO_FIELDS:
            anonymized[key] = round(float(value), 2)
        elif key not in PII_FIELDS:
            anonymized[key] = value

    return anonymized


class CalculationTracker:
    """Persists calculations and events; a disabled tracker records nothing."""

    def __init__(self, db: Session, enabled: bool = True):
        self.db = db
        self.enabled = enabled

    def save_calculation(
        self,
        session_id: str,
        calculator_type: str,
        clean_input: Mapping[str, Any],
        results: Optional[Mapping[str, Any]] = None,
    ) -> Optional[CalculationRecord]:
        """Store an anonymized calculation."""
        if not self.enabled:
            return None

        record = CalculationRecord(
            session_id=session_id,
            calculator_type=calculator_type,
            input_data=anonymize_input(clean_input),
            calculated_results=dict(results) if results is not None else None,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)

        logger.debug(f"Saved {calculator_type} calculation for session {session_id}")
        return record

    def track_event(
        self,
        session_id: str,
        event_type: str,
        event_data: Optional[Mapping[str, Any]] = None,
    ) -> Optional[CalculatorEvent]:
        """Store a user interaction event."""
        if not self.enabled:
            return None

        event = CalculatorEvent(
            session_id=session_id,
            event_type=event_type,
            event_data=dict(event_data or {}),
        )
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)

        logger.info(f"Tracked {event_type} event for session {session_id}")
        return event

    def track_calculation(
        self,
        session_id: str,
        calculator_type: str,
        clean_input: Mapping[str, Any],
        results: Mapping[str, Any],
    ) -> None:
        """Record a completed calculation and its calculation_complete event."""
        if not self.enabled:
            return

        self.save_calculation(session_id, calculator_type, clean_input, results)

        classification = results.get("classification")
        if isinstance(classification, dict):
            classification = classification.get("label")

        self.track_event(
            session_id,
            "calculation_complete",
            {
                "calculator_type": calculator_type,
                "score": results.get("score"),
                "result_classification": classification,
            },
        )
