"""
Debt-to-Income Calculator
"""

from typing import Any, Dict, Mapping

from homecalc.calculations.base import BaseCalculator
from homecalc.calculations.fields import FieldSpec

# Debt field name -> breakdown key
DEBT_FIELDS = {
    "housingPayment": "housing",
    "creditCardMinimums": "creditCards",
    "carLoans": "carLoans",
    "studentLoans": "studentLoans",
    "personalLoans": "personalLoans",
    "otherDebts": "other",
}

# (upper bound inclusive, label)
DTI_CLASSIFICATIONS = [
    (28, "Excellent"),
    (36, "Good"),
    (43, "Acceptable"),
]
HIGH_RISK = "High Risk"

DTI_RECOMMENDATIONS = {
    "High Risk": [
        "Your DTI is too high for most conventional loans. Focus on paying down existing debt.",
        "Consider debt consolidation to lower monthly payments.",
        "Look for ways to increase your income through side jobs or salary negotiation.",
    ],
    "Acceptable": [
        "Your DTI is acceptable but could be better. Work on reducing credit card balances.",
        "Avoid taking on new debt before applying for a mortgage.",
    ],
    "Good": [
        "Your DTI is good. Small improvements could help you qualify for better rates.",
    ],
    "Excellent": [
        "Excellent DTI ratio! You should qualify for the best loan terms.",
        "Maintain your current financial discipline.",
    ],
}


def classify_dti(ratio: float) -> str:
    for limit, label in DTI_CLASSIFICATIONS:
        if ratio <= limit:
            return label
    return HIGH_RISK


def _debt_field(name: str, label: str, placeholder: str, help_text: str) -> FieldSpec:
    return FieldSpec(
        name=name,
        label=label,
        type="currency",
        min=0,
        placeholder=placeholder,
        help=help_text,
    )


def _income_positive(data: Mapping[str, Any]):
    if data.get("grossIncome", 0) <= 0:
        return "Gross income must be greater than 0"
    return None


class DTICalculator(BaseCalculator):
    """Debt-to-income ratio with lending-standard bands."""

    type = "dti"
    name = "Advanced DTI Calculator"
    description = (
        "Calculate your debt-to-income ratio to understand your borrowing "
        "capacity and loan qualification status."
    )

    fields = [
        FieldSpec(
            name="incomeFrequency",
            label="Income Frequency",
            type="select",
            options={"annual": "Annual", "monthly": "Monthly"},
            default="annual",
            required=True,
        ),
        FieldSpec(
            name="grossIncome",
            label="Gross Income",
            type="currency",
            min=0,
            required=True,
            placeholder="75000",
            help="Your gross income before taxes",
        ),
        _debt_field(
            "housingPayment",
            "Housing Payment",
            "1500",
            "Current or proposed monthly housing payment (rent/mortgage)",
        ),
        _debt_field(
            "creditCardMinimums",
            "Credit Card Minimum Payments",
            "200",
            "Total minimum monthly credit card payments",
        ),
        _debt_field("carLoans", "Car Loan Payments", "400", "Total monthly car loan payments"),
        _debt_field(
            "studentLoans", "Student Loan Payments", "300", "Total monthly student loan payments"
        ),
        _debt_field(
            "personalLoans", "Personal Loan Payments", "0", "Total monthly personal loan payments"
        ),
        _debt_field("otherDebts", "Other Monthly Debts", "0", "Any other monthly debt obligations"),
    ]

    validation_rules = [_income_positive]

    def calculate(self, input_data: Mapping[str, Any]) -> Dict[str, Any]:
        if input_data["incomeFrequency"] == "annual":
            monthly_income = input_data["grossIncome"] / 12
        else:
            monthly_income = input_data["grossIncome"]

        breakdown = {key: input_data.get(name, 0.0) for name, key in DEBT_FIELDS.items()}
        total_debt = sum(breakdown.values())

        ratio = total_debt / monthly_income * 100 if monthly_income > 0 else 0.0
        classification = classify_dti(ratio)

        return {
            "ratio": round(ratio, 2),
            "classification": classification,
            "monthlyIncome": monthly_income,
            "totalDebt": total_debt,
            "recommendations": list(DTI_RECOMMENDATIONS[classification]),
            "breakdown": breakdown,
        }
