"""
Result Formatting

Turns raw calculator results into display rows for the presentation layer.
No markup is produced here.
"""

from typing import Any, Callable, Dict, List, Mapping

COMPONENT_LABELS = {
    "creditScore": "Credit Score",
    "dtiRatio": "DTI Ratio",
    "downPayment": "Down Payment",
    "documentation": "Documentation",
}


def format_currency(value: float, decimals: int = 0) -> str:
    """Format a dollar amount, e.g. $1,234."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def format_percentage(value: float, decimals: int = 2) -> str:
    """Format a percentage, e.g. 12.50%."""
    return f"{value:,.{decimals}f}%"


def get_component_label(component: str) -> str:
    if component in COMPONENT_LABELS:
        return COMPONENT_LABELS[component]
    return component.replace("_", " ").title()


def _row(label: str, value: Any) -> Dict[str, Any]:
    return {"label": label, "value": value}


def _format_loan_readiness(results: Mapping[str, Any]) -> List[dict]:
    rows = [
        _row("Loan Readiness Score", str(results["score"])),
        _row("Classification", results["classification"]["label"]),
    ]
    for component, score in results["components"].items():
        rows.append(_row(get_component_label(component), f"{round(score)}/100"))
    return rows


def _format_dti(results: Mapping[str, Any]) -> List[dict]:
    return [
        _row("Debt-to-Income Ratio", format_percentage(results["ratio"])),
        _row("Classification", results["classification"]),
        _row("Monthly Income", format_currency(results["monthlyIncome"])),
        _row("Total Monthly Debt", format_currency(results["totalDebt"])),
    ]


def _format_affordability(results: Mapping[str, Any]) -> List[dict]:
    rows = [
        _row("Maximum Home Price", format_currency(results["homePrice"])),
        _row("Loan Amount", format_currency(results["loanAmount"])),
        _row("Monthly Payment", format_currency(results["monthlyPayment"])),
        _row("DTI Ratio", format_percentage(results["dtiRatio"], 1)),
    ]
    for scenario in results.get("scenarios", []):
        rows.append(
            _row(
                f"{scenario['downPaymentPercent']}% Down",
                f"{format_currency(scenario['homePrice'])} at "
                f"{format_currency(scenario['monthlyPayment'])}/mo",
            )
        )
    return rows


def _format_credit_simulator(results: Mapping[str, Any]) -> List[dict]:
    rows = [
        _row("Current Score", str(results["currentScore"])),
        _row("Projected Score", str(results["projectedScore"])),
        _row(
            "Improvement",
            f"+{results['improvement']} points in {results['timelineMonths']} months",
        ),
    ]
    for action in results["actions"]:
        rows.append(_row(action["title"], f"+{action['impact']} points"))
    return rows


def _format_savings(results: Mapping[str, Any]) -> List[dict]:
    if results["canReachGoal"]:
        return [
            _row("Time to Goal", f"{results['yearsToGoal']} years"),
            _row("Final Amount", format_currency(results["finalAmount"])),
            _row("Interest Earned", format_currency(results["totalInterestEarned"])),
        ]
    return [
        _row("Required Monthly Savings", format_currency(results["requiredMonthlyPayment"])),
        _row("Target Amount", format_currency(results["targetAmount"])),
        _row("Current Shortfall", format_currency(results["currentShortfall"])),
    ]


FORMATTERS: Dict[str, Callable[[Mapping[str, Any]], List[dict]]] = {
    "loan_readiness": _format_loan_readiness,
    "dti": _format_dti,
    "affordability": _format_affordability,
    "credit_simulator": _format_credit_simulator,
    "savings": _format_savings,
}


def format_results(calculator_type: str, results: Mapping[str, Any]) -> List[dict]:
    """Display rows for a calculator result; unknown types get none."""
    formatter = FORMATTERS.get(calculator_type)
    if formatter is None:
        return []
    return formatter(results)
