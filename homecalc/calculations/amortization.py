"""
Mortgage Amortization Math

Fixed-rate payment and principal calculations shared by the calculators.
Rates are annual percentages (4.5 means 4.5%) compounded monthly.
Nothing is rounded here; callers round the values they present.
"""


def monthly_payment(
    principal: float, annual_rate_percent: float, term_years: float
) -> float:
    """
    Calculate the monthly payment that amortizes a loan.

    Args:
        principal: Loan principal amount
        annual_rate_percent: Annual interest rate in percent (e.g., 4.5)
        term_years: Loan term in years

    Returns:
        Monthly principal and interest payment
    """
    num_payments = term_years * 12
    if num_payments <= 0:
        return 0.0

    if annual_rate_percent == 0:
        return principal / num_payments

    monthly_rate = annual_rate_percent / 100 / 12
    growth = (1 + monthly_rate) ** num_payments

    return principal * (monthly_rate * growth) / (growth - 1)


def loan_amount(
    payment: float, annual_rate_percent: float, term_years: float
) -> float:
    """
    Calculate the principal a monthly payment can carry.

    Inverse of ``monthly_payment``.

    Args:
        payment: Monthly principal and interest payment
        annual_rate_percent: Annual interest rate in percent
        term_years: Loan term in years

    Returns:
        Loan principal amount
    """
    num_payments = term_years * 12
    if num_payments <= 0:
        return 0.0

    if annual_rate_percent == 0:
        return payment * num_payments

    monthly_rate = annual_rate_percent / 100 / 12
    growth = (1 + monthly_rate) ** num_payments

    return payment * (growth - 1) / (monthly_rate * growth)
