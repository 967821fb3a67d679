"""
Tests for the projection blueprint.
"""

import json
from unittest.mock import patch

from rent_vs_buy.models.exceptions import NonAmortizingLoanError


class TestGetProjection:
    """Test cases for GET /api/projections."""

    def test_default_scenario(self, client):
        response = client.get("/api/projections")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert len(data["projections"]) == 25
        assert data["summary"]["loan_amount"] == 400000
        assert data["warnings"] == []

    def test_query_parameters(self, client):
        response = client.get("/api/projections?yearly=20000")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["parameters"]["yearly_investment"] == 20000
        assert data["summary"]["is_affordable"] is False
        assert len(data["warnings"]) == 1
        assert len(data["projections"]) == 31

    def test_invalid_query_parameter(self, client):
        response = client.get("/api/projections?rent=-1")

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data["error"] == "InvalidParameterError"
        assert data["details"][0]["field"] == "weekly_rent"

    def test_tiny_mortgage_rate(self, client):
        response = client.get("/api/projections?mortgageRate=0.0000000000001")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["parameters"]["mortgage_rate"] == 1e-13
        assert len(data["projections"]) == 14

    def test_oversized_amount_is_invalid(self, client):
        response = client.get("/api/projections?housePrice=1e308")

        assert response.status_code == 400
        data = json.loads(response.data)
        assert data["details"][0]["field"] == "house_cost"

    def test_non_amortizing_loan(self, client):
        error = NonAmortizingLoanError(1000.0, 1833.33)

        with patch(
            "rent_vs_buy.services.projection_service.project_scenario",
            side_effect=error,
        ):
            response = client.get("/api/projections")

        assert response.status_code == 422
        data = json.loads(response.data)
        assert data["error"] == "NonAmortizingLoanError"
        assert data["interest_only_payment"] == 1833.33

    def test_unexpected_error(self, client):
        with patch(
            "rent_vs_buy.services.projection_service.project_scenario",
            side_effect=RuntimeError("boom"),
        ):
            response = client.get("/api/projections")

        assert response.status_code == 500
        assert json.loads(response.data) == {"error": "Internal server error"}


class TestPostProjection:
    """Test cases for POST /api/projections."""

    def test_json_body(self, client):
        response = client.post(
            "/api/projections", json={"initial_net_worth": 600000}
        )

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["summary"]["requires_mortgage"] is False
        assert len(data["projections"]) == 5
        assert data["share_query"] == "deposit=600000"

    def test_empty_body_uses_defaults(self, client):
        response = client.post("/api/projections")

        assert response.status_code == 200
        assert len(json.loads(response.data)["projections"]) == 25

    def test_unknown_field(self, client):
        response = client.post("/api/projections", json={"bogus": 1})

        assert response.status_code == 400
        assert json.loads(response.data)["details"][0]["field"] == "bogus"

    def test_non_object_body(self, client):
        response = client.post("/api/projections", json=[1, 2, 3])

        assert response.status_code == 400


class TestShareScenario:
    """Test cases for POST /api/scenarios/share."""

    def test_share(self, client):
        response = client.post("/api/scenarios/share", json={"house_cost": 650000})

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data == {"query": "housePrice=650000", "path": "/?housePrice=650000"}

    def test_share_defaults(self, client):
        response = client.post("/api/scenarios/share", json={})

        assert json.loads(response.data) == {"query": "", "path": "/"}

    def test_share_invalid(self, client):
        response = client.post("/api/scenarios/share", json={"mortgage_rate": -3})

        assert response.status_code == 400
