"""
Mortgage Affordability Calculator

Sizes the largest home the 28/36 rule allows, accounting for taxes,
insurance, HOA dues and PMI, and compares down payment scenarios.
"""

from typing import Any, Dict, List, Mapping

from homecalc.calculations.amortization import loan_amount, monthly_payment
from homecalc.calculations.base import BaseCalculator
from homecalc.calculations.fields import FieldSpec

FRONT_END_RATIO = 0.28
BACK_END_RATIO = 0.36
PMI_ANNUAL_RATE = 0.005
PMI_THRESHOLD_PERCENT = 20
SCENARIO_PERCENTAGES = [5, 10, 15, 20]

DEFAULT_PROPERTY_TAX_RATE = 1.2
DEFAULT_INSURANCE = 1200


def monthly_pmi(loan: float) -> float:
    return loan * PMI_ANNUAL_RATE / 12


def presented_pmi(pmi: float) -> float:
    """Round PMI to cents; a charge that applies never shows as zero."""
    if pmi <= 0:
        return 0.0
    return max(0.01, round(pmi, 2))


def monthly_property_tax(home_price: float, tax_rate_percent: float) -> float:
    return home_price * tax_rate_percent / 100 / 12


def _income_positive(data: Mapping[str, Any]):
    if data.get("grossIncome", 0) <= 0:
        return "Annual gross income must be greater than 0"
    return None


def _down_payment_positive(data: Mapping[str, Any]):
    if data.get("downPayment", 0) <= 0:
        return "Down payment must be greater than 0"
    return None


class AffordabilityCalculator(BaseCalculator):
    """How much house the buyer can afford."""

    type = "affordability"
    name = "Mortgage Affordability Plus Calculator"
    description = (
        "Determine how much house you can afford based on your income, debts, "
        "down payment, and current interest rates."
    )

    fields = [
        FieldSpec(
            name="grossIncome",
            label="Annual Gross Income",
            type="currency",
            min=0,
            required=True,
            placeholder="75000",
            help="Your total annual income before taxes",
        ),
        FieldSpec(
            name="existingDebt",
            label="Monthly Debt Payments",
            type="currency",
            min=0,
            placeholder="500",
            help="Total monthly payments for existing debts (excluding housing)",
        ),
        FieldSpec(
            name="downPayment",
            label="Down Payment Amount",
            type="currency",
            min=0,
            required=True,
            placeholder="20000",
            help="Amount you have available for down payment",
        ),
        FieldSpec(
            name="interestRate",
            label="Interest Rate (%)",
            type="number",
            min=0,
            max=20,
            step=0.1,
            default=4.5,
            required=True,
            help="Current mortgage interest rate",
        ),
        FieldSpec(
            name="loanTerm",
            label="Loan Term (Years)",
            type="select",
            options={"15": "15 Years", "30": "30 Years"},
            default="30",
            required=True,
        ),
        FieldSpec(
            name="propertyTaxRate",
            label="Property Tax Rate (%)",
            type="number",
            min=0,
            max=5,
            step=0.1,
            default=DEFAULT_PROPERTY_TAX_RATE,
            help="Annual property tax rate as percentage of home value",
        ),
        FieldSpec(
            name="insuranceRate",
            label="Homeowners Insurance (Annual)",
            type="currency",
            min=0,
            default=DEFAULT_INSURANCE,
            help="Annual homeowners insurance cost",
        ),
        FieldSpec(
            name="hoaFees",
            label="HOA Fees (Monthly)",
            type="currency",
            min=0,
            default=0,
            help="Monthly homeowners association fees if applicable",
        ),
    ]

    validation_rules = [_income_positive, _down_payment_positive]

    def calculate(self, input_data: Mapping[str, Any]) -> Dict[str, Any]:
        monthly_income = input_data["grossIncome"] / 12
        existing_debt = input_data.get("existingDebt", 0.0)
        down_payment = input_data["downPayment"]
        rate = input_data["interestRate"]
        term = int(input_data["loanTerm"])
        tax_rate = input_data.get("propertyTaxRate", DEFAULT_PROPERTY_TAX_RATE)
        insurance = input_data.get("insuranceRate", DEFAULT_INSURANCE) / 12
        hoa = input_data.get("hoaFees", 0.0)

        max_housing_payment = monthly_income * FRONT_END_RATIO
        available_for_housing = monthly_income * BACK_END_RATIO - existing_debt
        affordable_payment = min(max_housing_payment, available_for_housing)

        # First pass ignores property tax, second pass charges tax on the first-pass price
        budget = max(0.0, affordable_payment - insurance - hoa)
        loan = loan_amount(budget, rate, term)
        home_price = loan + down_payment

        property_tax = monthly_property_tax(home_price, tax_rate)
        budget = max(0.0, affordable_payment - insurance - hoa - property_tax)
        loan = loan_amount(budget, rate, term)
        home_price = loan + down_payment

        principal_interest = monthly_payment(loan, rate, term)
        property_tax = monthly_property_tax(home_price, tax_rate)
        total_payment = principal_interest + property_tax + insurance + hoa

        dti_ratio = (total_payment + existing_debt) / monthly_income * 100

        down_payment_percent = round(down_payment / home_price * 100, 1)
        pmi = 0.0
        if down_payment_percent < PMI_THRESHOLD_PERCENT:
            pmi = monthly_pmi(loan)
            total_payment += pmi

        return {
            "homePrice": round(home_price, 2),
            "loanAmount": round(loan, 2),
            "monthlyPayment": round(total_payment, 2),
            "principalInterest": round(principal_interest, 2),
            "propertyTax": round(property_tax, 2),
            "insurance": round(insurance, 2),
            "hoa": round(hoa, 2),
            "pmi": presented_pmi(pmi),
            "dtiRatio": round(dti_ratio, 1),
            "downPaymentPercent": down_payment_percent,
            "scenarios": self._scenarios(down_payment, rate, term, tax_rate, insurance, hoa),
        }

    def _scenarios(
        self,
        down_payment: float,
        rate: float,
        term: int,
        tax_rate: float,
        insurance: float,
        hoa: float,
    ) -> List[dict]:
        """Price and payment if the same down payment were each target percentage."""
        scenarios = []

        for percent in SCENARIO_PERCENTAGES:
            home_price = down_payment / (percent / 100)
            loan = home_price - down_payment

            total_payment = (
                monthly_payment(loan, rate, term)
                + monthly_property_tax(home_price, tax_rate)
                + insurance
                + hoa
            )
            pmi = monthly_pmi(loan) if percent < PMI_THRESHOLD_PERCENT else 0.0
            total_payment += pmi

            scenarios.append(
                {
                    "downPaymentPercent": percent,
                    "downPayment": down_payment,
                    "homePrice": round(home_price, 2),
                    "loanAmount": round(loan, 2),
                    "pmi": presented_pmi(pmi),
                    "monthlyPayment": round(total_payment, 2),
                }
            )

        return scenarios
