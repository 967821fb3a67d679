"""
Projection service for rent-versus-buy comparisons.

This service sits between the HTTP layer and the projection engine: it
validates incoming parameters, runs the engine with the configured horizon
policy, and shapes the result into the payload that tables and charts use.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from rent_vs_buy.formatting import format_currency, format_percentage
from rent_vs_buy.models.exceptions import ProjectionError
from rent_vs_buy.models.projection import (
    DEFAULT_HORIZON_POLICY,
    HorizonPolicy,
    ProjectionResult,
    project_scenario,
)
from rent_vs_buy.models.scenario import DEFAULT_SCENARIO, ScenarioParameters
from rent_vs_buy.services.url_state import encode_scenario

logger = logging.getLogger(__name__)

STRATEGY_LABELS = {"rent_and_invest": "Rent + Stocks", "buy": "Own House"}


class ProjectionService:
    """Service for running and presenting scenario projections."""

    def __init__(
        self,
        horizon_policy: HorizonPolicy = DEFAULT_HORIZON_POLICY,
        currency_symbol: str = "$",
    ) -> None:
        """Initialize the projection service."""
        self.logger = logging.getLogger(__name__)
        self.horizon_policy = horizon_policy
        self.currency_symbol = currency_symbol

    def parameters_from_payload(
        self, payload: Optional[Mapping[str, Any]]
    ) -> ScenarioParameters:
        """Merge a JSON payload of scenario fields over the defaults.

        Raises:
            InvalidParameterError: If any field is unknown or out of range
        """
        if not payload:
            return DEFAULT_SCENARIO
        return DEFAULT_SCENARIO.with_overrides(payload)

    def run(self, params: ScenarioParameters) -> ProjectionResult:
        """Run the projection engine for one scenario.

        Args:
            params: Validated scenario parameters

        Returns:
            Projection result

        Raises:
            ProjectionError: If the scenario cannot be projected
        """
        try:
            result = project_scenario(params, self.horizon_policy)
        except ProjectionError as e:
            self.logger.warning(f"Projection failed: {e.message}")
            raise

        self.logger.info(
            f"Projected {result.years} years; {result.winner} leads by "
            f"{result.final_advantage:.2f}"
        )
        return result

    def warnings_for(self, result: ProjectionResult) -> List[str]:
        """User-facing warnings for a valid but flagged scenario."""
        warnings = []
        summary = result.summary
        if not summary.is_affordable:
            warnings.append(
                "This house price requires a minimum of "
                f"{self._currency(summary.minimum_yearly_required)}/year in "
                "mortgage payments and ownership costs"
            )
        return warnings

    def build_response(self, result: ProjectionResult) -> Dict[str, Any]:
        """Shape a projection result for JSON clients."""
        warnings = self.warnings_for(result)
        for warning in warnings:
            self.logger.info(f"Scenario flagged: {warning}")

        final = result.final_projection
        summary = result.summary
        return {
            "parameters": result.parameters.model_dump(),
            "summary": summary.model_dump(),
            "projections": [p.model_dump() for p in result.projections],
            "totals": result.totals(),
            "winner": result.winner,
            "final_advantage": result.final_advantage,
            "leader_changes": result.leader_changes(),
            "warnings": warnings,
            "share_query": encode_scenario(result.parameters),
            "display": {
                "headline": (
                    f"{STRATEGY_LABELS[result.winner]} comes out ahead by "
                    f"{self._currency(result.final_advantage)} after {final.year} years"
                ),
                "stock_net_worth": self._currency(final.stock_net_worth),
                "property_net_worth": self._currency(final.property_net_worth),
                "loan_amount": self._currency(max(0.0, summary.loan_amount)),
                "monthly_payment": self._currency(summary.monthly_payment),
                "annual_housing_cost": self._currency(summary.annual_housing_cost),
                "extra_annual_payment": self._currency(summary.extra_annual_payment),
                "payoff_time": f"{summary.payoff_time_years:.1f} years",
                "mortgage_rate": format_percentage(result.parameters.mortgage_rate),
                "stock_annual_return": format_percentage(
                    result.parameters.stock_annual_return
                ),
            },
        }

    def _currency(self, amount: float) -> str:
        return format_currency(amount, self.currency_symbol)
