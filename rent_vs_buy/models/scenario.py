"""
Pydantic models for rent-versus-buy scenarios.

A scenario is the full set of economic assumptions for one projection run.
All rates are annual percentages (5.5 means 5.5%), matching what a user
types into the comparison form.
"""

from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import InvalidParameterError

# Upper bound for monetary inputs; keeps projected values finite
MAX_AMOUNT = 1e12


class ScenarioParameters(BaseModel):
    """Economic assumptions shared by the rent and buy strategies."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    # General
    initial_net_worth: float = Field(
        ..., ge=0, le=MAX_AMOUNT, description="Starting capital, used as deposit or initial investment"
    )
    yearly_investment: float = Field(
        ..., ge=0, le=MAX_AMOUNT, description="Cash available each year for investing or extra repayments"
    )

    # Rent and invest
    weekly_rent: float = Field(
        ..., ge=0, le=MAX_AMOUNT, description="Weekly rent while renting"
    )
    stock_annual_return: float = Field(
        ..., gt=-100, le=100, description="Expected annual stock return (%)"
    )

    # Buy
    house_cost: float = Field(
        ..., ge=0, le=MAX_AMOUNT, description="Purchase price of the home"
    )
    mortgage_rate: float = Field(
        ..., ge=0, le=100, description="Annual mortgage interest rate (%)"
    )
    house_growth_rate: float = Field(
        ..., gt=-100, le=100, description="Annual property value growth (%)"
    )
    annual_ownership_cost: float = Field(
        ..., ge=0, le=MAX_AMOUNT, description="Strata, repairs, rates and insurance per year"
    )

    @property
    def loan_amount(self) -> float:
        """Amount borrowed after the deposit; zero or less means no mortgage."""
        return self.house_cost - self.initial_net_worth

    @property
    def annual_rent(self) -> float:
        return self.weekly_rent * 52

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ScenarioParameters":
        """Validate raw input, raising InvalidParameterError instead of ValidationError."""
        try:
            return cls(**dict(data))
        except ValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                }
                for error in e.errors()
            ]
            fields = ", ".join(error["field"] for error in errors)
            raise InvalidParameterError(
                f"Invalid scenario parameters: {fields}", errors=errors
            ) from e

    def with_overrides(self, overrides: Mapping[str, Any]) -> "ScenarioParameters":
        """Return a validated copy with some fields replaced."""
        data: Dict[str, Any] = self.model_dump()
        data.update(overrides)
        return ScenarioParameters.from_mapping(data)


DEFAULT_SCENARIO = ScenarioParameters(
    initial_net_worth=100000.0,
    yearly_investment=35000.0,
    weekly_rent=500.0,
    stock_annual_return=9.8,
    house_cost=500000.0,
    mortgage_rate=5.5,
    house_growth_rate=3.5,
    annual_ownership_cost=5000.0,
)
