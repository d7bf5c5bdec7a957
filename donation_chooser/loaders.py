"""Reading input documents and writing output documents as JSON.

Input:

    {"assetSharePrices": {"VTI": 100.22, "BND": "12.35"},
     "lots": [{"assetName": "VTI", "date": "2019-01-02", "shares": 13, "shareCost": 50.55}]}

Output:

    {"donation": [...lots...], "assetSharePrices": {...},
     "totalValue": 199.02, "totalCapitalGains": 68.47}

JSON numbers are read straight into Decimal so no precision is lost.
"""

import json
from decimal import Decimal
from typing import IO, Any, Union

from .exceptions import ParseError
from .models import DonationInput, DonationResult, Lot
from .normalize import parse_decimal


def load_input(document: Union[str, bytes, IO[str]]) -> DonationInput:
    """Parse an input document.

    Args:
        document: JSON text (str or UTF-8 bytes), or a text stream to read it from.

    Returns:
        DonationInput with Decimal prices and costs.

    Raises:
        ParseError: If the input is not UTF-8, the JSON is invalid, or it does
            not have the expected shape.
    """
    try:
        if hasattr(document, "read"):
            document = document.read()
        data = json.loads(document, parse_float=Decimal)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"error decoding input JSON: {e}") from e

    return input_from_dict(data)


def input_from_dict(data: Any) -> DonationInput:
    if not isinstance(data, dict):
        raise ParseError("input must be a JSON object")

    raw_prices = data.get("assetSharePrices")
    if not isinstance(raw_prices, dict):
        raise ParseError("input must have an assetSharePrices object")
    raw_lots = data.get("lots", [])
    if not isinstance(raw_lots, list):
        raise ParseError("lots must be an array")

    prices = {
        name: parse_decimal(value, f"assetSharePrices[{name!r}]")
        for name, value in raw_prices.items()
    }
    lots = [_lot_from_dict(raw, m) for m, raw in enumerate(raw_lots)]
    return DonationInput(asset_share_prices=prices, lots=lots)


def _lot_from_dict(raw: Any, position: int) -> Lot:
    where = f"lots[{position}]"
    if not isinstance(raw, dict):
        raise ParseError(f"{where} must be an object")

    for key in ("assetName", "shares", "shareCost"):
        if key not in raw:
            raise ParseError(f"{where} is missing {key}")

    asset_name = raw["assetName"]
    if not isinstance(asset_name, str):
        raise ParseError(f"{where}.assetName must be a string")
    date = raw.get("date", "")
    if not isinstance(date, str):
        raise ParseError(f"{where}.date must be a string")

    shares = raw["shares"]
    if isinstance(shares, bool) or not isinstance(shares, int) or shares < 0:
        raise ParseError(f"{where}.shares must be a non-negative integer, got {shares!r}")

    return Lot(
        asset_name=asset_name,
        date=date,
        shares=shares,
        share_cost=parse_decimal(raw["shareCost"], f"{where}.shareCost"),
    )


def format_decimal(value: Decimal) -> str:
    """Plain notation without trailing zeros: 98.80 -> "98.8", 1E+2 -> "100"."""
    if value == 0:
        return "0"
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def lot_to_dict(lot: Lot) -> dict[str, Any]:
    return {
        "assetName": lot.asset_name,
        "date": lot.date,
        "shares": lot.shares,
        "shareCost": lot.share_cost,
    }


def result_to_dict(result: DonationResult) -> dict[str, Any]:
    return {
        "donation": [lot_to_dict(lot) for lot in result.donation],
        "assetSharePrices": dict(result.asset_share_prices),
        "totalValue": result.total_value,
        "totalCapitalGains": result.total_capital_gains,
    }


def _encode(value: Any, quote_decimals: bool) -> str:
    if isinstance(value, Decimal):
        text = format_decimal(value)
        return json.dumps(text) if quote_decimals else text
    if isinstance(value, dict):
        members = (
            f"{json.dumps(str(key))}:{_encode(item, quote_decimals)}"
            for key, item in value.items()
        )
        return "{" + ",".join(members) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_encode(item, quote_decimals) for item in value) + "]"
    return json.dumps(value)


def dump_result(result: DonationResult, quote_decimals: bool = False) -> str:
    """Serialize a result as one line of compact JSON.

    Prices are echoed in the order they were read rather than sorted by
    asset name.

    Args:
        result: The donation to serialize.
        quote_decimals: Write decimals as JSON strings instead of numbers.
    """
    return _encode(result_to_dict(result), quote_decimals)
