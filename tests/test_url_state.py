"""
Tests for shareable URL state encoding.
"""

import pytest

from rent_vs_buy.models.exceptions import InvalidParameterError
from rent_vs_buy.models.scenario import DEFAULT_SCENARIO
from rent_vs_buy.services.url_state import (
    decode_scenario,
    encode_scenario,
    format_number,
    parse_number,
    share_path,
)


class TestEncoding:
    """Test cases for encoding scenarios."""

    def test_defaults_encode_to_empty_query(self):
        assert encode_scenario(DEFAULT_SCENARIO) == ""

    def test_only_changed_values_are_written(self):
        params = DEFAULT_SCENARIO.with_overrides(
            {"house_cost": 650000, "mortgage_rate": 6.25}
        )

        assert encode_scenario(params) == "housePrice=650000&mortgageRate=6.25"

    def test_format_number(self):
        assert format_number(100000.0) == "100000"
        assert format_number(9.8) == "9.8"
        assert format_number(0.1 + 0.2) == "0.30000000000000004"

    def test_share_path(self):
        params = DEFAULT_SCENARIO.with_overrides({"weekly_rent": 650})

        assert share_path("/", DEFAULT_SCENARIO) == "/"
        assert share_path("/", params) == "/?rent=650"


class TestDecoding:
    """Test cases for decoding scenarios."""

    def test_empty_query_gives_defaults(self):
        assert decode_scenario("") == DEFAULT_SCENARIO

    def test_decode_overrides_defaults(self):
        params = decode_scenario("?deposit=150000&stockReturn=7.5")

        assert params.initial_net_worth == 150000
        assert params.stock_annual_return == 7.5
        assert params.house_cost == DEFAULT_SCENARIO.house_cost

    def test_decode_mapping(self):
        params = decode_scenario({"fees": "4200", "houseGrowth": "2"})

        assert params.annual_ownership_cost == 4200
        assert params.house_growth_rate == 2

    def test_unknown_blank_and_bad_values_are_ignored(self):
        params = decode_scenario("deposit=abc&rent=&foo=1&yearly=inf")

        assert params == DEFAULT_SCENARIO

    def test_out_of_range_value_is_rejected(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            decode_scenario("rent=-5")

        assert exc_info.value.errors[0]["field"] == "weekly_rent"

    def test_parse_number(self):
        assert parse_number(" 12.5 ") == 12.5
        assert parse_number("") is None
        assert parse_number("nan") is None
        assert parse_number("1e3") == 1000


class TestRoundTrip:
    """Encoding then decoding reproduces the scenario."""

    def test_round_trip(self):
        params = DEFAULT_SCENARIO.with_overrides(
            {
                "initial_net_worth": 123456.78,
                "yearly_investment": 0,
                "weekly_rent": 612.5,
                "stock_annual_return": 7.3,
                "house_cost": 1_250_000,
                "mortgage_rate": 6.123456789,
                "house_growth_rate": -1.5,
                "annual_ownership_cost": 0.1 + 0.2,
            }
        )

        assert decode_scenario(encode_scenario(params)) == params
