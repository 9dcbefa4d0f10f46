"""
Credit Score Improvement Simulator

Point impacts are drawn at random from each action's range. Pass a seeded
``random.Random`` to get repeatable projections.
"""

import random
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from homecalc.calculations.base import BaseCalculator, CallToAction
from homecalc.calculations.fields import FieldSpec

MAX_SCORE = 850
MIN_TIMELINE_MONTHS = 3


@dataclass(frozen=True)
class ActionImpact:
    """Score effect of one improvement action."""

    title: str
    description: str
    min_points: int
    max_points: int
    months: int


# Impact ranges follow FICO weighting research
ACTION_IMPACTS = {
    "payOffCollection": ActionImpact(
        "Pay Off Collections",
        "Paying off collection accounts can significantly improve your score.",
        15, 25, 2,
    ),
    "reduceUtilization10": ActionImpact(
        "Reduce Utilization to 10%",
        "Keeping credit utilization below 10% shows excellent credit management.",
        8, 15, 1,
    ),
    "reduceUtilization30": ActionImpact(
        "Reduce Utilization to 30%",
        "Reducing credit utilization below 30% is a key factor in credit scoring.",
        20, 30, 1,
    ),
    "payOnTime6Months": ActionImpact(
        "6 Months On-Time Payments",
        "Consistent on-time payments demonstrate creditworthiness.",
        5, 15, 6,
    ),
    "addAuthorizedUser": ActionImpact(
        "Authorized User Status",
        "Being added to an account with good payment history can boost your score.",
        10, 20, 2,
    ),
    "payOffCreditCard": ActionImpact(
        "Pay Off Credit Cards",
        "Eliminating credit card debt improves your utilization ratio.",
        8, 20, 1,
    ),
}

ACTION_OPTIONS = {
    "payOffCollection": "Pay off collections",
    "reduceUtilization10": "Reduce credit utilization to 10%",
    "reduceUtilization30": "Reduce credit utilization to 30%",
    "payOnTime6Months": "Make on-time payments for 6 months",
    "addAuthorizedUser": "Become authorized user on aged account",
    "payOffCreditCard": "Pay off credit card balances",
}


class CreditSimulator(BaseCalculator):
    """Projects a credit score after a set of improvement actions."""

    type = "credit_simulator"
    name = "Credit Score Improvement Simulator"
    description = "Simulate how different actions can improve your credit score over time."

    fields = [
        FieldSpec(
            name="currentScore",
            label="Current Credit Score",
            type="range",
            min=300,
            max=850,
            default=650,
            required=True,
        ),
        FieldSpec(
            name="actions",
            label="Improvement Actions",
            type="checkboxes",
            options=ACTION_OPTIONS,
        ),
    ]

    def __init__(
        self,
        cta: Optional[CallToAction] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(cta)
        self.rng = rng or random.Random()

    def calculate(self, input_data: Mapping[str, Any]) -> Dict[str, Any]:
        current_score = round(input_data["currentScore"])
        projected_score = current_score
        timeline_months = 0
        actions = []

        for action in input_data.get("actions", []):
            impact = ACTION_IMPACTS.get(action)
            if impact is None:
                continue

            points = self.rng.randint(impact.min_points, impact.max_points)
            projected_score += points
            timeline_months = max(timeline_months, impact.months)

            actions.append(
                {
                    "type": action,
                    "title": impact.title,
                    "impact": points,
                    "months": impact.months,
                    "description": impact.description,
                }
            )

        projected_score = min(MAX_SCORE, projected_score)

        return {
            "currentScore": current_score,
            "projectedScore": projected_score,
            "improvement": projected_score - current_score,
            "timelineMonths": max(timeline_months, MIN_TIMELINE_MONTHS),
            "actions": actions,
        }
