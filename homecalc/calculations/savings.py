"""
Down Payment Savings Calculator

Month-by-month compounding projection toward a down payment goal.
"""

from typing import Any, Dict, Mapping

from homecalc.calculations.base import BaseCalculator
from homecalc.calculations.fields import FieldSpec

MAX_MONTHS = 600
DEFAULT_INTEREST_RATE = 2.5
DEFAULT_TIMELINE_MONTHS = 36


def required_monthly_deposit(
    target: float, current_savings: float, monthly_rate: float, months: int
) -> float:
    """
    Deposit needed each month to reach the target.

    Deposits are made at the start of each month (annuity due) and current
    savings keep compounding alongside them.
    """
    if months <= 0:
        return max(0.0, target - current_savings)

    growth = (1 + monthly_rate) ** months
    shortfall = target - current_savings * growth
    if shortfall <= 0:
        return 0.0

    if monthly_rate == 0:
        return shortfall / months

    annuity_due_factor = (growth - 1) / monthly_rate * (1 + monthly_rate)
    return shortfall / annuity_due_factor


def _home_price_positive(data: Mapping[str, Any]):
    if data.get("homePrice", 0) <= 0:
        return "Target home price must be greater than 0"
    return None


class SavingsCalculator(BaseCalculator):
    """Time to save a down payment, or the deposit needed to hit a deadline."""

    type = "savings"
    name = "Down Payment Savings Calculator"
    description = "Plan your down payment savings strategy with compound interest calculations."

    fields = [
        FieldSpec(
            name="homePrice",
            label="Target Home Price",
            type="currency",
            min=0,
            required=True,
            placeholder="300000",
        ),
        FieldSpec(
            name="downPaymentPercent",
            label="Down Payment Percentage",
            type="range",
            min=3.5,
            max=30,
            step=0.5,
            default=20,
        ),
        FieldSpec(
            name="currentSavings",
            label="Current Savings",
            type="currency",
            min=0,
            placeholder="5000",
        ),
        FieldSpec(
            name="monthlyDeposit",
            label="Monthly Savings",
            type="currency",
            min=0,
            required=True,
            placeholder="500",
        ),
        FieldSpec(
            name="interestRate",
            label="Interest Rate (%)",
            type="number",
            min=0,
            max=10,
            step=0.1,
            default=DEFAULT_INTEREST_RATE,
        ),
        FieldSpec(
            name="timelineMonths",
            label="Target Timeline (Months)",
            type="integer",
            min=1,
            max=MAX_MONTHS,
            default=DEFAULT_TIMELINE_MONTHS,
        ),
    ]

    validation_rules = [_home_price_positive]

    def calculate(self, input_data: Mapping[str, Any]) -> Dict[str, Any]:
        target = input_data["homePrice"] * input_data["downPaymentPercent"] / 100
        current_savings = input_data.get("currentSavings", 0.0)
        monthly_deposit = input_data.get("monthlyDeposit", 0.0)
        monthly_rate = input_data.get("interestRate", DEFAULT_INTEREST_RATE) / 100 / 12

        balance = current_savings
        months = 0
        while balance < target and months < MAX_MONTHS:
            balance = balance * (1 + monthly_rate) + monthly_deposit
            months += 1

        if balance < target:
            timeline = input_data.get("timelineMonths", DEFAULT_TIMELINE_MONTHS)
            payment = required_monthly_deposit(target, current_savings, monthly_rate, timeline)
            return {
                "canReachGoal": False,
                "requiredMonthlyPayment": round(payment, 2),
                "targetAmount": round(target, 2),
                "currentShortfall": round(target - current_savings, 2),
                "timelineMonths": timeline,
            }

        contributions = current_savings + monthly_deposit * months
        return {
            "canReachGoal": True,
            "monthsToGoal": months,
            "yearsToGoal": round(months / 12, 1),
            "finalAmount": round(balance, 2),
            "targetAmount": round(target, 2),
            "totalContributions": round(contributions, 2),
            "totalInterestEarned": round(balance - contributions, 2),
        }
