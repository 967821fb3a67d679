"""
Shareable URL state for scenarios.

Scenarios are bookmarked as query strings using short parameter names.
Only values that differ from the defaults are written, so the default
scenario encodes to an empty query string.
"""

import math
from typing import Dict, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode

from rent_vs_buy.models.scenario import DEFAULT_SCENARIO, ScenarioParameters

# Scenario field -> query parameter name
URL_PARAM_MAP: Dict[str, str] = {
    "initial_net_worth": "deposit",
    "yearly_investment": "yearly",
    "weekly_rent": "rent",
    "stock_annual_return": "stockReturn",
    "house_cost": "housePrice",
    "mortgage_rate": "mortgageRate",
    "house_growth_rate": "houseGrowth",
    "annual_ownership_cost": "fees",
}

FIELD_FOR_PARAM: Dict[str, str] = {param: field for field, param in URL_PARAM_MAP.items()}


def format_number(value: float) -> str:
    """Shortest text that parses back to exactly the same float."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def parse_number(text: str) -> Optional[float]:
    """Parse a query value, returning None for blank or unparsable text."""
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def encode_scenario(
    params: ScenarioParameters, defaults: ScenarioParameters = DEFAULT_SCENARIO
) -> str:
    """Encode the fields that differ from the defaults as a query string."""
    pairs = []
    for field, param in URL_PARAM_MAP.items():
        value = getattr(params, field)
        if value != getattr(defaults, field):
            pairs.append((param, format_number(value)))
    return urlencode(pairs)


def decode_scenario(
    query: Union[str, Mapping[str, str]],
    defaults: ScenarioParameters = DEFAULT_SCENARIO,
) -> ScenarioParameters:
    """
    Decode a query string (or already-parsed mapping) into scenario parameters.

    Unknown parameters, empty values and unparsable numbers are ignored and
    the default is kept. Parsed values are validated.

    Raises:
        InvalidParameterError: If a parsed value is out of range
    """
    if isinstance(query, str):
        items = parse_qsl(query.lstrip("?"), keep_blank_values=True)
    else:
        items = list(query.items())

    overrides: Dict[str, float] = {}
    for param, text in items:
        field = FIELD_FOR_PARAM.get(param)
        if field is None:
            continue
        value = parse_number(text)
        if value is not None:
            overrides[field] = value

    if not overrides:
        return defaults
    return defaults.with_overrides(overrides)


def share_path(path: str, params: ScenarioParameters) -> str:
    """Bookmarkable path for a scenario, without a query for the defaults."""
    query = encode_scenario(params)
    return f"{path}?{query}" if query else path
