"""
Tests for the calculator engine math and the individual calculators.
"""

import random

import pytest

from homecalc.calculations.affordability import AffordabilityCalculator, presented_pmi
from homecalc.calculations.amortization import loan_amount, monthly_payment
from homecalc.calculations.base import CallToAction, get_score_classification
from homecalc.calculations.credit_simulator import ACTION_IMPACTS, CreditSimulator
from homecalc.calculations.dti import DTICalculator, classify_dti
from homecalc.calculations.loan_readiness import (
    LoanReadinessCalculator,
    REQUIRED_DOCUMENTS,
    credit_component,
    documentation_component,
    down_payment_component,
    dti_component,
)
from homecalc.calculations.savings import SavingsCalculator, required_monthly_deposit

ALL_DOCUMENTS = list(REQUIRED_DOCUMENTS)


def run(calculator, raw_input):
    """Sanitize, validate and calculate, failing the test on validation errors."""
    clean = calculator.sanitize_input(raw_input)
    validation = calculator.validate_input(clean)
    assert validation.valid, validation.errors
    return calculator.calculate(clean)


class MaxRandom(random.Random):
    """Always picks the top of the range."""

    def randint(self, a, b):
        return b


class TestAmortization:
    """Test shared payment math."""

    def test_monthly_payment(self):
        """$200k at 6% for 30 years is about $1,199.10/month."""
        payment = monthly_payment(200000, 6, 30)
        assert abs(payment - 1199.10) < 0.01

    def test_loan_amount(self):
        loan = loan_amount(1199.10, 6, 30)
        assert abs(loan - 200000) < 5

    @pytest.mark.parametrize("principal,rate,years", [
        (250000, 4.5, 30),
        (100000, 7.25, 15),
        (1, 0.1, 1),
    ])
    def test_round_trip(self, principal, rate, years):
        payment = monthly_payment(principal, rate, years)
        assert loan_amount(payment, rate, years) == pytest.approx(principal)
        assert monthly_payment(loan_amount(principal, rate, years), rate, years) == pytest.approx(principal)

    def test_zero_rate_degrades_to_division(self):
        assert monthly_payment(36000, 0, 3) == 1000
        assert loan_amount(1000, 0, 3) == 36000

    def test_zero_term(self):
        assert monthly_payment(100000, 5, 0) == 0.0
        assert loan_amount(1000, 5, 0) == 0.0


class TestScoreClassification:
    """Test shared score bands."""

    @pytest.mark.parametrize("score,label", [
        (100, "Excellent"),
        (90, "Excellent"),
        (89, "Very Good"),
        (80, "Very Good"),
        (70, "Good"),
        (60, "Fair"),
        (50, "Poor"),
        (49, "Needs Improvement"),
        (0, "Needs Improvement"),
    ])
    def test_bands(self, score, label):
        assert get_score_classification(score)["label"] == label


class TestLoanReadinessComponents:
    """Test the four scoring components."""

    def test_credit_component(self):
        assert credit_component(850) == 100
        assert credit_component(300) == 0
        assert credit_component(700) == 73
        # 740+ gets a 10% bonus
        assert credit_component(740) == 88
        # Below 580 takes a 20% penalty
        assert credit_component(579) == 41

    def test_dti_component(self):
        assert dti_component(0, 10000) == 100
        assert dti_component(2500, 10000) == 90
        assert dti_component(3600, 10000) == 75
        assert dti_component(4000, 10000) == 50
        assert dti_component(4500, 10000) == 25
        assert dti_component(5500, 10000) == pytest.approx(0)
        assert dti_component(100, 0) == 0

    def test_down_payment_component(self):
        assert down_payment_component(20000, 100000) == 100
        assert down_payment_component(10000, 100000) == 60
        assert down_payment_component(5000, 100000) == 40
        assert down_payment_component(3500, 100000) == pytest.approx(30)
        assert down_payment_component(2000, 100000) == pytest.approx(17.14)
        assert down_payment_component(1000, 0) == 0

    def test_documentation_component(self):
        assert documentation_component(ALL_DOCUMENTS) == 100
        assert documentation_component(["tax_returns", "pay_stubs", "bank_statements"]) == 60
        assert documentation_component(["unknown"]) == 0
        assert documentation_component([]) == 0


class TestLoanReadinessCalculator:
    """Test the loan readiness score."""

    @pytest.fixture
    def calculator(self):
        return LoanReadinessCalculator(CallToAction(url="/book", text="Book Now"))

    def test_perfect_profile_scores_100(self, calculator):
        result = run(calculator, {
            "creditScore": 850,
            "monthlyIncome": 10000,
            "monthlyDebt": 0,
            "downPayment": 100000,
            "homePrice": 300000,
            "documentationReady": ALL_DOCUMENTS,
        })
        assert result["score"] == 100
        assert result["classification"]["label"] == "Excellent"
        assert result["recommendations"] == []
        assert result["insights"]["estimatedImprovementTime"] == 0
        assert result["insights"]["targetPriceAffordable"] is True
        assert result["insights"]["maxAffordablePrice"] > 300000
        assert result["insights"]["incomeGap"] == 0
        assert result["input_summary"]["monthlyIncome"] == "$10,000"
        assert result["input_summary"]["documentationComplete"] is True

    def test_weak_profile_recommendations(self, calculator):
        result = run(calculator, {
            "creditScore": 600,
            "monthlyIncome": 5000,
            "monthlyDebt": 2000,
            "downPayment": 10000,
            "homePrice": 200000,
        })
        assert result["components"]["dtiRatio"] == 50
        assert result["components"]["downPayment"] == 40
        assert result["components"]["documentation"] == 0
        assert result["classification"]["label"] == "Needs Improvement"

        recommendations = result["recommendations"]
        assert [rec["type"] for rec in recommendations] == [
            "cta", "improvement", "improvement", "improvement", "action",
        ]
        assert recommendations[0]["action"] == "/book"
        assert recommendations[0]["action_text"] == "Book Now"
        assert [rec["priority"] for rec in recommendations] == [
            "high", "high", "high", "medium", "low",
        ]
        assert "authorized user" in recommendations[1]["description"]
        assert "acceptable but not ideal" in recommendations[2]["description"]
        assert "PMI" in recommendations[3]["description"]
        assert result["insights"]["estimatedImprovementTime"] == 12

    def test_required_income_gap(self, calculator):
        result = run(calculator, {
            "creditScore": 720,
            "monthlyIncome": 3000,
            "monthlyDebt": 500,
            "downPayment": 20000,
            "homePrice": 500000,
            "documentationReady": ALL_DOCUMENTS,
        })
        insights = result["insights"]
        assert insights["targetPriceAffordable"] is False
        assert insights["requiredIncome"] > 3000
        assert insights["incomeGap"] == insights["requiredIncome"] - 3000

    def test_business_rules(self, calculator):
        clean = calculator.sanitize_input({
            "creditScore": 700,
            "monthlyIncome": 4000,
            "monthlyDebt": 4000,
            "downPayment": 0,
            "homePrice": 0,
        })
        validation = calculator.validate_input(clean)
        assert validation.errors == [
            "Monthly debt cannot exceed monthly income",
            "Home price must be greater than 0",
        ]


class TestDTICalculator:
    """Test debt-to-income ratio."""

    @pytest.fixture
    def calculator(self):
        return DTICalculator()

    def test_monthly_income_example(self, calculator):
        result = run(calculator, {
            "incomeFrequency": "monthly",
            "grossIncome": 5000,
            "housingPayment": 1000,
            "creditCardMinimums": 200,
            "carLoans": 0,
            "studentLoans": 0,
            "personalLoans": 0,
            "otherDebts": 0,
        })
        assert result["ratio"] == 24.0
        assert result["classification"] == "Excellent"
        assert result["monthlyIncome"] == 5000
        assert result["totalDebt"] == 1200
        assert result["breakdown"]["housing"] == 1000
        assert result["breakdown"]["creditCards"] == 200
        assert len(result["recommendations"]) == 2

    def test_annual_income_and_missing_debts(self, calculator):
        result = run(calculator, {"grossIncome": "60000", "carLoans": "2000"})
        assert result["monthlyIncome"] == 5000
        assert result["totalDebt"] == 2000
        assert result["ratio"] == 40.0
        assert result["classification"] == "Acceptable"
        assert result["breakdown"]["other"] == 0

    @pytest.mark.parametrize("ratio,label", [
        (28, "Excellent"),
        (28.01, "Good"),
        (36, "Good"),
        (43, "Acceptable"),
        (43.5, "High Risk"),
    ])
    def test_classification_bands(self, ratio, label):
        assert classify_dti(ratio) == label

    def test_high_risk_recommendations(self, calculator):
        result = run(calculator, {"incomeFrequency": "monthly", "grossIncome": 4000, "otherDebts": 2000})
        assert result["classification"] == "High Risk"
        assert len(result["recommendations"]) == 3

    def test_zero_income_rejected(self, calculator):
        validation = calculator.validate_input(calculator.sanitize_input({"grossIncome": "0"}))
        assert validation.errors == ["Gross income must be greater than 0"]


class TestAffordabilityCalculator:
    """Test mortgage affordability."""

    @pytest.fixture
    def calculator(self):
        return AffordabilityCalculator()

    @pytest.fixture
    def base_input(self):
        return {
            "grossIncome": 120000,
            "existingDebt": 500,
            "downPayment": 60000,
            "interestRate": 6,
            "loanTerm": "30",
        }

    def test_home_price_is_loan_plus_down_payment(self, calculator, base_input):
        result = run(calculator, base_input)
        assert result["homePrice"] == pytest.approx(result["loanAmount"] + 60000, abs=0.02)
        assert result["insurance"] == 100
        assert result["hoa"] == 0

    def test_payment_within_front_end_ratio(self, calculator, base_input):
        result = run(calculator, base_input)
        housing = result["principalInterest"] + result["propertyTax"] + result["insurance"]
        # Tax is re-estimated on the final (lower) price, so housing stays under 28%
        assert housing <= 10000 * 0.28 + 0.05

    def test_pmi_below_twenty_percent(self, calculator, base_input):
        result = run(calculator, base_input)
        assert result["downPaymentPercent"] < 20
        assert result["pmi"] == pytest.approx(result["loanAmount"] * 0.005 / 12, abs=0.01)
        assert result["pmi"] > 0

    def test_no_pmi_with_large_down_payment(self, calculator, base_input):
        base_input["downPayment"] = 400000
        result = run(calculator, base_input)
        assert result["downPaymentPercent"] >= 20
        assert result["pmi"] == 0

    @pytest.mark.parametrize("down_payment", [0.5, 5000, 20000, 60000, 150000, 400000])
    def test_pmi_iff_under_twenty_percent(self, calculator, base_input, down_payment):
        base_input["downPayment"] = down_payment
        result = run(calculator, base_input)
        assert (result["pmi"] > 0) == (result["downPaymentPercent"] < 20)
        for scenario in result["scenarios"]:
            assert (scenario["pmi"] > 0) == (scenario["downPaymentPercent"] < 20)

    def test_tiny_loan_still_shows_pmi(self, calculator):
        result = run(calculator, {
            "grossIncome": 1,
            "downPayment": 0.5,
            "interestRate": 6,
            "loanTerm": "30",
            "insuranceRate": 0,
            "propertyTaxRate": 0,
        })
        assert 0 < result["loanAmount"] < 10
        assert result["downPaymentPercent"] < 20
        assert result["pmi"] == 0.01

    def test_presented_pmi(self):
        assert presented_pmi(0.0) == 0.0
        assert presented_pmi(0.004) == 0.01
        assert presented_pmi(152.456) == 152.46

    def test_scenarios(self, calculator, base_input):
        scenarios = run(calculator, base_input)["scenarios"]
        assert [s["downPaymentPercent"] for s in scenarios] == [5, 10, 15, 20]
        assert scenarios[0]["homePrice"] == 1200000
        assert scenarios[0]["loanAmount"] == 1140000
        assert scenarios[3]["homePrice"] == 300000
        assert all(s["downPayment"] == 60000 for s in scenarios)
        # Cheaper homes cost less per month
        payments = [s["monthlyPayment"] for s in scenarios]
        assert payments == sorted(payments, reverse=True)

    def test_zero_interest_rate(self, calculator, base_input):
        base_input["interestRate"] = 0
        result = run(calculator, base_input)
        assert result["principalInterest"] == pytest.approx(result["loanAmount"] / 360, abs=0.01)

    def test_invalid_term_is_required_error(self, calculator, base_input):
        base_input["loanTerm"] = "20"
        validation = calculator.validate_input(calculator.sanitize_input(base_input))
        assert validation.errors == ["Loan Term (Years) is required"]

    def test_zero_down_payment_rejected(self, calculator, base_input):
        base_input["downPayment"] = 0
        validation = calculator.validate_input(calculator.sanitize_input(base_input))
        assert validation.errors == ["Down payment must be greater than 0"]


class TestCreditSimulator:
    """Test credit score projection."""

    def test_seeded_impacts_are_reproducible(self):
        actions = ["payOffCollection", "reduceUtilization10"]
        first = run(CreditSimulator(rng=random.Random(7)), {"currentScore": 600, "actions": actions})
        second = run(CreditSimulator(rng=random.Random(7)), {"currentScore": 600, "actions": actions})
        assert first == second

        expected = random.Random(7)
        impacts = [expected.randint(15, 25), expected.randint(8, 15)]
        assert [a["impact"] for a in first["actions"]] == impacts
        assert first["projectedScore"] == 600 + sum(impacts)
        assert first["improvement"] == sum(impacts)

    def test_impacts_stay_in_range(self):
        simulator = CreditSimulator()
        for _ in range(25):
            result = run(simulator, {"currentScore": 500, "actions": list(ACTION_IMPACTS)})
            for action in result["actions"]:
                impact = ACTION_IMPACTS[action["type"]]
                assert impact.min_points <= action["impact"] <= impact.max_points

    def test_projection_capped_at_850(self):
        result = run(
            CreditSimulator(rng=MaxRandom()),
            {"currentScore": 840, "actions": list(ACTION_IMPACTS)},
        )
        assert result["projectedScore"] == 850
        assert result["improvement"] == 10

    def test_timeline(self):
        simulator = CreditSimulator(rng=MaxRandom())
        assert run(simulator, {"currentScore": 650, "actions": ["reduceUtilization10"]})["timelineMonths"] == 3
        assert run(simulator, {"currentScore": 650, "actions": ["payOnTime6Months"]})["timelineMonths"] == 6
        assert run(simulator, {"currentScore": 650})["timelineMonths"] == 3

    def test_unknown_actions_ignored(self):
        result = run(
            CreditSimulator(rng=MaxRandom()),
            {"currentScore": 650, "actions": ["doNothing", "payOffCreditCard"]},
        )
        assert [a["type"] for a in result["actions"]] == ["payOffCreditCard"]
        assert result["projectedScore"] == 670

    def test_no_actions(self):
        result = run(CreditSimulator(), {"currentScore": "720"})
        assert result["currentScore"] == 720
        assert result["projectedScore"] == 720
        assert result["actions"] == []


class TestSavingsCalculator:
    """Test down payment savings projection."""

    @pytest.fixture
    def calculator(self):
        return SavingsCalculator()

    def test_reaches_goal_without_interest(self, calculator):
        result = run(calculator, {
            "homePrice": 100000,
            "downPaymentPercent": 20,
            "currentSavings": 0,
            "monthlyDeposit": 1000,
            "interestRate": 0,
        })
        assert result["canReachGoal"] is True
        assert result["monthsToGoal"] == 20
        assert result["yearsToGoal"] == 1.7
        assert result["finalAmount"] == 20000
        assert result["targetAmount"] == 20000
        assert result["totalInterestEarned"] == 0

    def test_interest_shortens_timeline(self, calculator):
        result = run(calculator, {
            "homePrice": 300000,
            "currentSavings": 10000,
            "monthlyDeposit": 500,
            "interestRate": 5,
        })
        assert result["canReachGoal"] is True
        # Without interest: (60000 - 10000) / 500 = 100 months
        assert result["monthsToGoal"] < 100
        assert result["totalInterestEarned"] > 0
        assert result["finalAmount"] >= 60000

    def test_already_saved(self, calculator):
        result = run(calculator, {"homePrice": 100000, "currentSavings": 25000, "monthlyDeposit": 0})
        assert result["canReachGoal"] is True
        assert result["monthsToGoal"] == 0

    def test_unreachable_goal_solves_required_payment(self, calculator):
        result = run(calculator, {
            "homePrice": 100000,
            "monthlyDeposit": 0,
            "interestRate": 0,
            "timelineMonths": 40,
        })
        assert result["canReachGoal"] is False
        assert result["requiredMonthlyPayment"] == 500
        assert result["currentShortfall"] == 20000
        assert result["timelineMonths"] == 40

    def test_required_deposit_reaches_target(self):
        target, savings, rate, months = 50000, 5000, 0.04 / 12, 36
        deposit = required_monthly_deposit(target, savings, rate, months)

        balance = savings
        for _ in range(months):
            balance = (balance + deposit) * (1 + rate)
        assert balance == pytest.approx(target)

    def test_required_deposit_when_savings_suffice(self):
        assert required_monthly_deposit(1000, 5000, 0.01, 12) == 0.0
