"""
Loan Readiness Score

Weighted assessment of credit, debt-to-income, down payment and
documentation, each normalized to 0-100.
"""

from typing import Any, Dict, List, Mapping

from homecalc.calculations.amortization import loan_amount, monthly_payment
from homecalc.calculations.base import BaseCalculator, get_score_classification
from homecalc.calculations.fields import FieldSpec
from homecalc.calculations.formatting import format_currency, format_percentage

WEIGHTS = {
    "creditScore": 0.30,
    "dtiRatio": 0.30,
    "downPayment": 0.30,
    "documentation": 0.10,
}

REQUIRED_DOCUMENTS = {
    "tax_returns": "2 years of tax returns",
    "pay_stubs": "Recent pay stubs",
    "bank_statements": "Bank statements",
    "employment_verification": "Employment verification",
    "asset_documentation": "Asset documentation",
}

# Assumed terms for the insight figures
INSIGHT_RATE_PERCENT = 4.5
INSIGHT_TERM_YEARS = 30
FRONT_END_RATIO = 0.28
BACK_END_RATIO = 0.36

# Months needed to improve each component once it falls below its threshold
IMPROVEMENT_MONTHS = {
    "creditScore": 6,
    "dtiRatio": 3,
    "downPayment": 12,
    "documentation": 1,
}
IMPROVEMENT_THRESHOLDS = {
    "creditScore": 70,
    "dtiRatio": 70,
    "downPayment": 70,
    "documentation": 100,
}

CREDIT_TIPS = [
    (580, "Your credit score needs significant improvement. Focus on paying off collections, "
          "reducing credit utilization below 30%, and making all payments on time. "
          "Consider credit repair services."),
    (670, "Work on reducing credit card balances, avoid new credit applications, and ensure "
          "all payments are made on time. Consider becoming an authorized user on a family "
          "member's account."),
]
CREDIT_TIP_DEFAULT = (
    "Continue making on-time payments and keep credit utilization low. "
    "Small improvements can lead to better loan terms."
)

DTI_TIPS = [
    (43, "Your DTI is too high for most conventional loans. Focus on paying down existing "
         "debts or increasing your income. Consider debt consolidation to lower monthly payments."),
    (36, "Your DTI is acceptable but not ideal. Pay down credit cards and avoid taking on new "
         "debt. Even small reductions can improve your loan terms."),
]
DTI_TIP_DEFAULT = (
    "Your DTI is good but there's room for improvement. "
    "Lower debt payments will give you more borrowing power."
)

DOWN_PAYMENT_TIPS = [
    (5, "You need at least 3.5% for an FHA loan or 5% for conventional loans. Consider down "
        "payment assistance programs or gifts from family."),
    (10, "A larger down payment reduces your monthly payment and may eliminate PMI. Consider "
         "saving for a few more months or exploring down payment assistance."),
    (20, "Reaching 20% down payment eliminates PMI and provides better loan terms. Calculate "
         "if waiting to save more is worth the potential home price increases."),
]
DOWN_PAYMENT_TIP_DEFAULT = (
    "Your down payment is strong. Consider if you want to keep some funds "
    "for reserves or home improvements."
)


def _income_positive(data: Mapping[str, Any]):
    if data.get("monthlyIncome", 0) <= 0:
        return "Monthly income must be greater than 0"
    return None


def _debt_below_income(data: Mapping[str, Any]):
    if data.get("monthlyDebt", 0) >= data.get("monthlyIncome", 0):
        return "Monthly debt cannot exceed monthly income"
    return None


def _home_price_positive(data: Mapping[str, Any]):
    if data.get("homePrice", 0) <= 0:
        return "Home price must be greater than 0"
    return None


def credit_component(credit_score: float) -> int:
    """Map a 300-850 credit score onto 0-100."""
    normalized = (credit_score - 300) / 550 * 100

    if credit_score >= 740:
        normalized = min(100, normalized * 1.1)
    elif credit_score < 580:
        normalized = normalized * 0.8

    return min(100, max(0, round(normalized)))


def dti_component(monthly_debt: float, monthly_income: float) -> float:
    """Lower debt-to-income scores higher."""
    if monthly_income <= 0:
        return 0

    ratio = monthly_debt / monthly_income * 100

    if ratio <= 20:
        return 100
    elif ratio <= 28:
        return 90
    elif ratio <= 36:
        return 75
    elif ratio <= 43:
        return 50
    elif ratio <= 50:
        return 25
    return max(0, 100 - ratio * 2)


def down_payment_component(down_payment: float, home_price: float) -> float:
    """Score the down payment as a share of the home price."""
    if home_price <= 0:
        return 0

    ratio = down_payment / home_price * 100

    if ratio >= 20:
        return min(100, 80 + ratio)
    elif ratio >= 10:
        return 60 + (ratio - 10) * 2
    elif ratio >= 5:
        return 40 + (ratio - 5) * 4
    elif ratio >= 3.5:
        return 30 + (ratio - 3.5) * 6.67
    return ratio * 8.57


def documentation_component(documents: List[str]) -> int:
    present = len(set(documents or []) & set(REQUIRED_DOCUMENTS))
    return round(present / len(REQUIRED_DOCUMENTS) * 100)


def _lookup_tip(value: float, table, default: str) -> str:
    for limit, tip in table:
        if value < limit:
            return tip
    return default


def _dti_tip(ratio: float) -> str:
    for limit, tip in DTI_TIPS:
        if ratio > limit:
            return tip
    return DTI_TIP_DEFAULT


class LoanReadinessCalculator(BaseCalculator):
    """Holistic loan readiness score."""

    type = "loan_readiness"
    name = "Loan Readiness Score Calculator"
    description = (
        "Get your comprehensive loan readiness assessment with our proprietary "
        "scoring system that evaluates multiple financial factors."
    )

    fields = [
        FieldSpec(
            name="creditScore",
            label="Credit Score",
            type="range",
            min=300,
            max=850,
            step=1,
            default=650,
            required=True,
            help="Your current FICO credit score (300-850)",
        ),
        FieldSpec(
            name="monthlyIncome",
            label="Monthly Gross Income",
            type="currency",
            min=0,
            step=100,
            required=True,
            placeholder="5000",
            help="Your total monthly income before taxes",
        ),
        FieldSpec(
            name="monthlyDebt",
            label="Monthly Debt Payments",
            type="currency",
            min=0,
            step=50,
            required=True,
            placeholder="1500",
            help="Total monthly debt obligations (credit cards, loans, etc.)",
        ),
        FieldSpec(
            name="downPayment",
            label="Available Down Payment",
            type="currency",
            min=0,
            step=1000,
            required=True,
            placeholder="20000",
            help="Amount you have saved for down payment",
        ),
        FieldSpec(
            name="homePrice",
            label="Target Home Price",
            type="currency",
            min=0,
            step=5000,
            required=True,
            placeholder="300000",
            help="Price range of homes you are considering",
        ),
        FieldSpec(
            name="documentationReady",
            label="Documentation Readiness",
            type="checkboxes",
            options=REQUIRED_DOCUMENTS,
            help="Check all documents you have ready",
        ),
    ]

    validation_rules = [_income_positive, _debt_below_income, _home_price_positive]

    def calculate(self, input_data: Mapping[str, Any]) -> Dict[str, Any]:
        components = {
            "creditScore": credit_component(input_data["creditScore"]),
            "dtiRatio": dti_component(input_data["monthlyDebt"], input_data["monthlyIncome"]),
            "downPayment": down_payment_component(
                input_data["downPayment"], input_data["homePrice"]
            ),
            "documentation": documentation_component(input_data.get("documentationReady", [])),
        }

        score = round(sum(components[name] * weight for name, weight in WEIGHTS.items()))

        return {
            "score": score,
            "components": components,
            "classification": get_score_classification(score),
            "recommendations": self._recommendations(score, components, input_data),
            "insights": self._insights(input_data, components),
            "input_summary": self._input_summary(input_data),
        }

    def _recommendations(
        self, score: int, components: Dict[str, float], input_data: Mapping[str, Any]
    ) -> List[dict]:
        recommendations = []

        if score < 80:
            recommendations.append(
                {
                    "type": "cta",
                    "title": "Get Professional Loan Readiness Help",
                    "description": (
                        "Our experts can help you improve your loan readiness score and "
                        "qualify for better rates. Schedule a free consultation today."
                    ),
                    "action": self.cta.url,
                    "action_text": self.cta.text,
                    "priority": "high",
                }
            )

        if components["creditScore"] < 70:
            recommendations.append(
                {
                    "type": "improvement",
                    "title": "Improve Your Credit Score",
                    "description": _lookup_tip(
                        input_data["creditScore"], CREDIT_TIPS, CREDIT_TIP_DEFAULT
                    ),
                    "priority": "high",
                }
            )

        if components["dtiRatio"] < 70:
            ratio = input_data["monthlyDebt"] / input_data["monthlyIncome"] * 100
            recommendations.append(
                {
                    "type": "improvement",
                    "title": "Lower Your Debt-to-Income Ratio",
                    "description": _dti_tip(ratio),
                    "priority": "high",
                }
            )

        if components["downPayment"] < 70:
            percent = input_data["downPayment"] / input_data["homePrice"] * 100
            recommendations.append(
                {
                    "type": "improvement",
                    "title": "Increase Your Down Payment",
                    "description": _lookup_tip(
                        percent, DOWN_PAYMENT_TIPS, DOWN_PAYMENT_TIP_DEFAULT
                    ),
                    "priority": "medium",
                }
            )

        if components["documentation"] < 100:
            recommendations.append(
                {
                    "type": "action",
                    "title": "Complete Your Documentation",
                    "description": (
                        "Gather all required documents including tax returns, pay stubs, "
                        "and bank statements to speed up your loan application."
                    ),
                    "priority": "low",
                }
            )

        return recommendations

    def _insights(self, input_data: Mapping[str, Any], components: Dict[str, float]) -> dict:
        monthly_income = input_data["monthlyIncome"]
        monthly_debt = input_data["monthlyDebt"]
        down_payment = input_data["downPayment"]
        home_price = input_data["homePrice"]

        max_price = max_affordable_price(monthly_income, monthly_debt, down_payment)
        income_needed = required_income(home_price, down_payment, monthly_debt)

        return {
            "maxAffordablePrice": max_price,
            "targetPriceAffordable": home_price <= max_price,
            "requiredIncome": income_needed,
            "incomeGap": max(0, income_needed - monthly_income),
            "estimatedImprovementTime": estimate_improvement_time(components),
        }

    def _input_summary(self, input_data: Mapping[str, Any]) -> dict:
        monthly_income = input_data["monthlyIncome"]
        home_price = input_data["homePrice"]
        documents = input_data.get("documentationReady", [])
        return {
            "creditScore": input_data["creditScore"],
            "monthlyIncome": format_currency(monthly_income),
            "monthlyDebt": format_currency(input_data["monthlyDebt"]),
            "dtiRatio": format_percentage(input_data["monthlyDebt"] / monthly_income * 100),
            "downPayment": format_currency(input_data["downPayment"]),
            "homePrice": format_currency(home_price),
            "downPaymentPercent": format_percentage(input_data["downPayment"] / home_price * 100),
            "documentationComplete": set(REQUIRED_DOCUMENTS) <= set(documents),
        }


def max_affordable_price(monthly_income: float, monthly_debt: float, down_payment: float) -> int:
    """Highest home price the 28/36 rule allows at the assumed rate and term."""
    max_housing_payment = monthly_income * FRONT_END_RATIO
    available_for_housing = monthly_income * BACK_END_RATIO - monthly_debt
    affordable_payment = max(0, min(max_housing_payment, available_for_housing))

    # A quarter of the housing payment is set aside for taxes and insurance
    loan = loan_amount(affordable_payment * 0.75, INSIGHT_RATE_PERCENT, INSIGHT_TERM_YEARS)
    return round(loan + down_payment)


def required_income(home_price: float, down_payment: float, monthly_debt: float) -> int:
    """Monthly income the 28/36 rule needs for the target home."""
    loan = max(0, home_price - down_payment)
    payment = monthly_payment(loan, INSIGHT_RATE_PERCENT, INSIGHT_TERM_YEARS)
    housing_payment = payment * 1.25

    from_housing = housing_payment / FRONT_END_RATIO
    from_debt = (housing_payment + monthly_debt) / BACK_END_RATIO
    return round(max(from_housing, from_debt))


def estimate_improvement_time(components: Mapping[str, float]) -> int:
    months = 0
    for component, threshold in IMPROVEMENT_THRESHOLDS.items():
        if components[component] < threshold:
            months = max(months, IMPROVEMENT_MONTHS[component])
    return months
