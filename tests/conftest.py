"""
Pytest configuration and shared fixtures for the rent vs buy planner tests.
"""

import pytest

from rent_vs_buy import create_app
from rent_vs_buy.config import Settings
from rent_vs_buy.models.scenario import ScenarioParameters


@pytest.fixture
def scenario_a():
    """Affordable scenario with extra repayments (the default inputs)."""
    return ScenarioParameters(
        initial_net_worth=100000,
        yearly_investment=35000,
        weekly_rent=500,
        stock_annual_return=9.8,
        house_cost=500000,
        mortgage_rate=5.5,
        house_growth_rate=3.5,
        annual_ownership_cost=5000,
    )


@pytest.fixture
def scenario_b(scenario_a):
    """Scenario whose yearly budget does not cover the housing costs."""
    return scenario_a.with_overrides({"yearly_investment": 20000})


@pytest.fixture
def scenario_c(scenario_a):
    """Scenario where the deposit covers the whole house."""
    return scenario_a.with_overrides({"initial_net_worth": 600000})


@pytest.fixture
def app():
    """Create a Flask app configured for testing."""
    settings = Settings(_env_file=None, APP_ENV="testing")
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()
