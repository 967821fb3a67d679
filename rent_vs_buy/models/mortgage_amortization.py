"""
Mortgage amortization calculations for the buy strategy.

This module holds every piece of loan math used by the projection engine:
the fixed-payment formula, the closed-form remaining balance, the
month-by-month schedule that accrues interest, and the payoff-time estimate.
Rates are annual percentages; compounding is monthly.
"""

import math
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidParameterError, NonAmortizingLoanError

MORTGAGE_TERM_YEARS = 30
MINIMUM_PAYOFF_YEARS = 0.1


class PaymentBreakdown(BaseModel):
    """Breakdown of a single monthly mortgage payment."""

    model_config = ConfigDict(frozen=True)

    payment_number: int = Field(..., ge=1, description="Payment number (1-based)")
    year: int = Field(..., ge=1, description="Loan year of payment (1-based)")
    month: int = Field(..., ge=1, le=12, description="Month within the loan year")
    beginning_balance: float = Field(
        ..., ge=0, description="Balance at beginning of period"
    )
    payment_amount: float = Field(..., description="Total payment applied")
    interest_payment: float = Field(
        ..., ge=0, description="Interest portion of payment"
    )
    principal_payment: float = Field(..., description="Principal portion of payment")
    ending_balance: float = Field(..., ge=0, description="Balance at end of period")
    cumulative_interest: float = Field(
        ..., ge=0, description="Cumulative interest paid"
    )


class AmortizationSchedule(BaseModel):
    """Month-by-month schedule for a loan with a fixed monthly payment."""

    model_config = ConfigDict(frozen=True)

    principal: float = Field(..., ge=0, description="Original loan amount")
    annual_rate_percent: float = Field(..., ge=0, description="Annual rate (%)")
    total_monthly_payment: float = Field(
        ..., ge=0, description="Base payment plus monthly share of extra payments"
    )
    payments: Tuple[PaymentBreakdown, ...] = Field(
        default=(), description="Payments in order"
    )

    @property
    def total_interest(self) -> float:
        if not self.payments:
            return 0.0
        return self.payments[-1].cumulative_interest

    @property
    def is_paid_off(self) -> bool:
        return not self.payments or self.payments[-1].ending_balance <= 0

    @property
    def payoff_months(self) -> int:
        """Number of payments made before the balance reached zero."""
        return len(self.payments)

    def balance_after_years(self, years: int) -> float:
        """Balance at the end of the given loan year."""
        if years >= MORTGAGE_TERM_YEARS:
            return 0.0
        months = years * 12
        if months <= 0:
            return self.principal
        if months > len(self.payments):
            return self.payments[-1].ending_balance if self.payments else 0.0
        return self.payments[months - 1].ending_balance

    def interest_after_years(self, years: int) -> float:
        """Interest accrued through the end of the given loan year."""
        months = min(years * 12, len(self.payments))
        if months <= 0:
            return 0.0
        return self.payments[months - 1].cumulative_interest


class MortgageCalculator:
    """Calculator for mortgage amortization and related calculations."""

    @staticmethod
    def monthly_rate(annual_rate_percent: float) -> float:
        """Convert an annual percentage rate to a monthly decimal rate."""
        if annual_rate_percent < 0 or not math.isfinite(annual_rate_percent):
            raise InvalidParameterError(
                f"Mortgage rate must be a non-negative percentage, got {annual_rate_percent}"
            )
        return annual_rate_percent / 100 / 12

    @staticmethod
    def calculate_monthly_payment(
        principal: float, annual_rate_percent: float, term_years: int
    ) -> float:
        """
        Calculate the monthly mortgage payment using the standard annuity formula.

        Args:
            principal: Loan principal amount
            annual_rate_percent: Annual interest rate (e.g., 5.5 for 5.5%)
            term_years: Loan term in years

        Returns:
            Monthly payment amount (unrounded)
        """
        if term_years <= 0:
            raise InvalidParameterError(f"Loan term must be positive, got {term_years}")
        if principal <= 0:
            return 0.0

        monthly_rate = MortgageCalculator.monthly_rate(annual_rate_percent)
        num_payments = term_years * 12

        if monthly_rate == 0:
            return principal / num_payments

        # expm1/log1p keep growth - 1 non-zero for tiny positive rates
        growth_less_one = math.expm1(num_payments * math.log1p(monthly_rate))
        return principal * (monthly_rate / growth_less_one) * (growth_less_one + 1)

    @staticmethod
    def calculate_remaining_balance(
        principal: float,
        annual_rate_percent: float,
        base_payment: float,
        extra_annual_payment: float,
        years_elapsed: float,
    ) -> float:
        """
        Closed-form balance after a number of years of payments.

        The base monthly payment is combined with a twelfth of the extra
        annual payment each month. The balance never goes below zero, and
        is exactly zero once the full term has elapsed.
        """
        if years_elapsed >= MORTGAGE_TERM_YEARS:
            return 0.0

        monthly_rate = MortgageCalculator.monthly_rate(annual_rate_percent)
        total_monthly_payment = base_payment + extra_annual_payment / 12
        months_paid = years_elapsed * 12

        if monthly_rate == 0:
            return max(0.0, principal - total_monthly_payment * months_paid)

        growth_less_one = math.expm1(months_paid * math.log1p(monthly_rate))
        remaining = principal * (growth_less_one + 1) - total_monthly_payment * (
            growth_less_one / monthly_rate
        )
        return max(0.0, remaining)

    @staticmethod
    def generate_amortization_schedule(
        principal: float,
        annual_rate_percent: float,
        base_payment: float,
        extra_annual_payment: float = 0.0,
        max_months: int = MORTGAGE_TERM_YEARS * 12,
    ) -> AmortizationSchedule:
        """
        Simulate the loan month by month.

        Interest accrues on the opening balance each month and the rest of
        the payment reduces principal. The final payment only covers what is
        owed, so the balance lands on exactly zero and stays there.

        Args:
            principal: Loan principal amount
            annual_rate_percent: Annual interest rate (%)
            base_payment: Scheduled monthly payment
            extra_annual_payment: Extra repayments per year, spread monthly
            max_months: Stop after this many payments even if not paid off

        Returns:
            Amortization schedule, ending at payoff or at max_months
        """
        monthly_rate = MortgageCalculator.monthly_rate(annual_rate_percent)
        total_monthly_payment = base_payment + extra_annual_payment / 12

        payments: List[PaymentBreakdown] = []
        balance = max(0.0, principal)
        cumulative_interest = 0.0
        payment_number = 1

        while balance > 0 and payment_number <= max_months:
            interest_payment = balance * monthly_rate
            # Never pay down more than is owed
            principal_payment = min(balance, total_monthly_payment - interest_payment)
            ending_balance = max(0.0, balance - principal_payment)
            cumulative_interest += interest_payment

            payments.append(
                PaymentBreakdown(
                    payment_number=payment_number,
                    year=(payment_number - 1) // 12 + 1,
                    month=(payment_number - 1) % 12 + 1,
                    beginning_balance=balance,
                    payment_amount=interest_payment + principal_payment,
                    interest_payment=interest_payment,
                    principal_payment=principal_payment,
                    ending_balance=ending_balance,
                    cumulative_interest=cumulative_interest,
                )
            )

            balance = ending_balance
            payment_number += 1

        return AmortizationSchedule(
            principal=max(0.0, principal),
            annual_rate_percent=annual_rate_percent,
            total_monthly_payment=max(0.0, total_monthly_payment),
            payments=tuple(payments),
        )

    @staticmethod
    def calculate_cumulative_interest(
        principal: float,
        annual_rate_percent: float,
        base_payment: float,
        extra_annual_payment: float,
        years_elapsed: int,
    ) -> float:
        """
        Total interest paid over the first years of the loan.

        Interest depends on how fast extra payments shrink the balance, so
        this walks the monthly schedule rather than using a closed form.
        """
        schedule = MortgageCalculator.generate_amortization_schedule(
            principal,
            annual_rate_percent,
            base_payment,
            extra_annual_payment,
            max_months=int(years_elapsed * 12),
        )
        return schedule.total_interest

    @staticmethod
    def calculate_payoff_time_years(
        principal: float,
        annual_rate_percent: float,
        base_payment: float,
        extra_annual_payment: float,
    ) -> float:
        """
        Estimate years until the loan is repaid.

        Without extra payments the loan runs its full term. Otherwise the
        logarithmic amortization identity gives the number of months.

        Raises:
            NonAmortizingLoanError: If the payment never exceeds the interest
        """
        if extra_annual_payment <= 0:
            return float(MORTGAGE_TERM_YEARS)

        monthly_rate = MortgageCalculator.monthly_rate(annual_rate_percent)
        total_monthly_payment = base_payment + extra_annual_payment / 12
        interest_only_payment = principal * monthly_rate

        if monthly_rate == 0 or interest_only_payment == 0:
            if total_monthly_payment <= 0:
                raise NonAmortizingLoanError(total_monthly_payment, 0.0)
            years = principal / (total_monthly_payment * 12)
            return max(MINIMUM_PAYOFF_YEARS, years)

        if total_monthly_payment <= interest_only_payment:
            raise NonAmortizingLoanError(total_monthly_payment, interest_only_payment)

        months = -math.log1p(-interest_only_payment / total_monthly_payment) / math.log1p(
            monthly_rate
        )
        return max(MINIMUM_PAYOFF_YEARS, months / 12)

    @staticmethod
    def calculate_equity(property_value: float, loan_balance: float) -> float:
        """Home equity: property value less the outstanding loan."""
        return property_value - loan_balance
