"""Data models and projection engine for rent-versus-buy scenarios."""

from .exceptions import InvalidParameterError, NonAmortizingLoanError, ProjectionError
from .mortgage_amortization import (
    MORTGAGE_TERM_YEARS,
    AmortizationSchedule,
    MortgageCalculator,
    PaymentBreakdown,
)
from .projection import (
    DEFAULT_HORIZON_POLICY,
    HorizonPolicy,
    ProjectionResult,
    ProjectionSummary,
    YearlyProjection,
    project_scenario,
)
from .scenario import DEFAULT_SCENARIO, ScenarioParameters

__all__ = [
    "ScenarioParameters",
    "DEFAULT_SCENARIO",
    "ProjectionError",
    "InvalidParameterError",
    "NonAmortizingLoanError",
    "MORTGAGE_TERM_YEARS",
    "AmortizationSchedule",
    "MortgageCalculator",
    "PaymentBreakdown",
    "DEFAULT_HORIZON_POLICY",
    "HorizonPolicy",
    "ProjectionResult",
    "ProjectionSummary",
    "YearlyProjection",
    "project_scenario",
]
