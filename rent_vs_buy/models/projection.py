"""
Year-by-year projection of the rent-and-invest and buy strategies.

This module provides the projection engine that turns a set of scenario
parameters into an ordered series of yearly net worth snapshots for both
strategies, plus the result model used for tables, charts and summaries.

The engine is pure: the same parameters always give the same result, so
results are memoized on the (frozen, hashable) parameter models.
"""

import logging
import math
from functools import lru_cache
from typing import Dict, List, Literal, Tuple

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, computed_field

from .mortgage_amortization import MORTGAGE_TERM_YEARS, MortgageCalculator
from .scenario import ScenarioParameters

logger = logging.getLogger(__name__)

Strategy = Literal["rent_and_invest", "buy"]


class HorizonPolicy(BaseModel):
    """How many years to project relative to the estimated payoff."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_years: int = Field(default=5, ge=1, le=100, description="Minimum years of output")
    years_past_payoff: int = Field(
        default=2, ge=0, le=100, description="Years to show after the estimated payoff"
    )

    def horizon_for(self, payoff_time_years: float) -> int:
        """Number of years to simulate for a given payoff estimate."""
        return max(
            self.min_years, math.ceil(payoff_time_years) + self.years_past_payoff
        )


DEFAULT_HORIZON_POLICY = HorizonPolicy()


class YearlyProjection(BaseModel):
    """Snapshot of both strategies at the end of one year."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, description="Year number, starting at 1")

    # Rent and invest
    stock_value: float = Field(..., description="Portfolio balance at year end")
    stock_growth: float = Field(..., description="Return earned on the prior balance")
    net_stock_contribution: float = Field(
        ..., description="Yearly investment less rent added this year"
    )
    cumulative_investment: float = Field(
        ..., description="Initial capital plus net contributions to date"
    )
    cumulative_rent_paid: float = Field(..., ge=0, description="Rent paid to date")
    stock_net_worth: float = Field(..., description="Net worth when renting")
    stock_total_cost: float = Field(
        ..., description="Rent plus opportunity cost of the initial capital"
    )

    # Buy
    property_value: float = Field(..., ge=0, description="Appraised value at year end")
    property_growth: float = Field(..., description="Appreciation during the year")
    mortgage_balance: float = Field(..., ge=0, description="Loan balance at year end")
    property_net_worth: float = Field(..., description="Property value less mortgage")
    annual_interest_paid: float = Field(..., ge=0, description="Interest this year")
    cumulative_interest_paid: float = Field(..., ge=0, description="Interest to date")
    cumulative_ownership_costs_paid: float = Field(
        ..., ge=0, description="Ownership costs to date"
    )
    property_total_cost: float = Field(
        ..., description="Interest plus ownership costs to date"
    )

    @computed_field
    @property
    def net_worth_difference(self) -> float:
        """Rent-and-invest net worth minus buy net worth."""
        return self.stock_net_worth - self.property_net_worth

    @computed_field
    @property
    def leader(self) -> Strategy:
        return "rent_and_invest" if self.net_worth_difference >= 0 else "buy"


class ProjectionSummary(BaseModel):
    """Derived loan figures shared by every year of a projection."""

    model_config = ConfigDict(frozen=True)

    loan_amount: float = Field(
        ..., description="House cost less initial net worth (may be negative)"
    )
    monthly_payment: float = Field(..., ge=0, description="Base monthly repayment")
    annual_housing_cost: float = Field(
        ..., ge=0, description="Yearly repayments plus ownership costs"
    )
    extra_annual_payment: float = Field(
        ..., ge=0, description="Budget left over for extra repayments each year"
    )
    payoff_time_years: float = Field(..., ge=0, description="Estimated payoff time")
    horizon_years: int = Field(..., ge=1, description="Years simulated at most")
    yearly_investment: float = Field(..., ge=0, description="Stated yearly budget")

    @computed_field
    @property
    def requires_mortgage(self) -> bool:
        return self.loan_amount > 0

    @computed_field
    @property
    def is_affordable(self) -> bool:
        """False when repayments plus ownership costs exceed the yearly budget."""
        return self.yearly_investment >= self.annual_housing_cost

    @computed_field
    @property
    def minimum_yearly_required(self) -> float:
        return self.annual_housing_cost


class ProjectionResult(BaseModel):
    """
    Complete projection for one scenario.

    Example:
        ```python
        result = project_scenario(DEFAULT_SCENARIO)
        result.winner              # "rent_and_invest" or "buy"
        result.final_advantage     # absolute net worth gap in the last year
        series = result.net_worth_series()
        ```
    """

    model_config = ConfigDict(frozen=True)

    parameters: ScenarioParameters = Field(..., description="Inputs of the run")
    summary: ProjectionSummary = Field(..., description="Derived loan figures")
    projections: Tuple[YearlyProjection, ...] = Field(
        ..., min_length=1, description="Yearly snapshots in ascending year order"
    )

    @property
    def years(self) -> int:
        return len(self.projections)

    @property
    def final_projection(self) -> YearlyProjection:
        """The comparison point for summary statistics."""
        return self.projections[-1]

    @property
    def winner(self) -> Strategy:
        return self.final_projection.leader

    @property
    def final_advantage(self) -> float:
        """Absolute net worth gap between the strategies in the final year."""
        return abs(self.final_projection.net_worth_difference)

    def net_worth_series(self) -> Dict[str, NDArray[np.float64]]:
        """Arrays for charting net worth against year."""
        return {
            "year": np.array([p.year for p in self.projections], dtype=np.int64),
            "stock_net_worth": np.array(
                [p.stock_net_worth for p in self.projections], dtype=np.float64
            ),
            "property_net_worth": np.array(
                [p.property_net_worth for p in self.projections], dtype=np.float64
            ),
        }

    def leader_changes(self) -> List[int]:
        """Years in which the leading strategy differs from the year before."""
        series = self.net_worth_series()
        rent_leads = series["stock_net_worth"] - series["property_net_worth"] >= 0
        flips = np.flatnonzero(rent_leads[1:] != rent_leads[:-1]) + 1
        return [int(series["year"][i]) for i in flips]

    def totals(self) -> Dict[str, float]:
        """Totals across all projected years, as shown under the yearly table."""
        final = self.final_projection
        return {
            "investment": self.parameters.yearly_investment * self.years,
            "rent": final.cumulative_rent_paid,
            "ownership_costs": final.cumulative_ownership_costs_paid,
            "interest": final.cumulative_interest_paid,
        }


def project_scenario(
    params: ScenarioParameters, policy: HorizonPolicy = DEFAULT_HORIZON_POLICY
) -> ProjectionResult:
    """
    Project net worth year by year for renting versus buying.

    Args:
        params: Validated scenario parameters
        policy: Horizon heuristic (minimum years, years shown past payoff)

    Returns:
        Projection result with one snapshot per simulated year

    Raises:
        NonAmortizingLoanError: If the repayments can never clear the loan
    """
    return _project_scenario(params, policy)


@lru_cache(maxsize=128)
def _project_scenario(
    params: ScenarioParameters, policy: HorizonPolicy
) -> ProjectionResult:
    loan_amount = params.loan_amount
    has_loan = loan_amount > 0

    base_payment = (
        MortgageCalculator.calculate_monthly_payment(
            loan_amount, params.mortgage_rate, MORTGAGE_TERM_YEARS
        )
        if has_loan
        else 0.0
    )
    annual_housing_cost = base_payment * 12 + params.annual_ownership_cost
    extra_annual_payment = max(0.0, params.yearly_investment - annual_housing_cost)
    payoff_time = (
        MortgageCalculator.calculate_payoff_time_years(
            loan_amount, params.mortgage_rate, base_payment, extra_annual_payment
        )
        if has_loan
        else 0.0
    )
    horizon = policy.horizon_for(payoff_time)

    # One monthly pass supplies both the yearly balances and the interest
    schedule = MortgageCalculator.generate_amortization_schedule(
        max(0.0, loan_amount),
        params.mortgage_rate,
        base_payment,
        extra_annual_payment,
        max_months=horizon * 12,
    )

    summary = ProjectionSummary(
        loan_amount=loan_amount,
        monthly_payment=base_payment,
        annual_housing_cost=annual_housing_cost,
        extra_annual_payment=extra_annual_payment,
        payoff_time_years=payoff_time,
        horizon_years=horizon,
        yearly_investment=params.yearly_investment,
    )
    if not summary.is_affordable:
        logger.debug(
            f"Scenario needs {annual_housing_cost:.2f}/year but budget is "
            f"{params.yearly_investment:.2f}; no extra repayments"
        )

    stock_return = params.stock_annual_return / 100
    house_growth = 1 + params.house_growth_rate / 100

    projections: List[YearlyProjection] = []
    stock_value = params.initial_net_worth
    property_value = params.house_cost
    cumulative_rent = 0.0
    cumulative_ownership_costs = 0.0
    interest_paid = 0.0

    for year in range(1, horizon + 1):
        # Rent and invest: growth on the prior balance, then the year's contribution
        rent_this_year = params.annual_rent
        cumulative_rent += rent_this_year
        net_contribution = params.yearly_investment - rent_this_year
        stock_growth = stock_value * stock_return
        stock_value = stock_value + stock_growth + net_contribution

        # Buy
        mortgage_balance = schedule.balance_after_years(year)
        previous_interest = interest_paid
        interest_paid = schedule.interest_after_years(year)
        cumulative_ownership_costs += params.annual_ownership_cost
        previous_property_value = property_value
        property_value = params.house_cost * house_growth**year

        projections.append(
            YearlyProjection(
                year=year,
                stock_value=stock_value,
                stock_growth=stock_growth,
                net_stock_contribution=net_contribution,
                cumulative_investment=params.initial_net_worth
                + net_contribution * year,
                cumulative_rent_paid=cumulative_rent,
                stock_net_worth=stock_value,
                stock_total_cost=cumulative_rent
                + params.initial_net_worth * stock_return * year,
                property_value=property_value,
                property_growth=property_value - previous_property_value,
                mortgage_balance=mortgage_balance,
                property_net_worth=MortgageCalculator.calculate_equity(
                    property_value, mortgage_balance
                ),
                annual_interest_paid=interest_paid - previous_interest,
                cumulative_interest_paid=interest_paid,
                cumulative_ownership_costs_paid=cumulative_ownership_costs,
                property_total_cost=interest_paid + cumulative_ownership_costs,
            )
        )

        # Stop once the loan is gone and the estimated payoff has passed
        if year >= policy.min_years and mortgage_balance <= 0 and year > payoff_time:
            break

    logger.debug(
        f"Projected {len(projections)} years (payoff {payoff_time:.2f}, horizon {horizon})"
    )

    return ProjectionResult(
        parameters=params, summary=summary, projections=tuple(projections)
    )
