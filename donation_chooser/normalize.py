"""Exact integer normalization of lot prices, costs and the donation amount.

Every decimal in a calculation (asset prices, lot costs and the donation
target) is shifted by one shared exponent, the finest one found among them,
so that the selection engines can work on plain integers:

    E        = min(exponent(v) for v in prices + costs + [donation])
    int(v)   = v * 10 ** -E

Because ``E`` is the minimum exponent, the shift never leaves a remainder.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from .config import Objective
from .exceptions import InputError, ParseError
from .models import DonationInput, Lot

logger = logging.getLogger(__name__)


def parse_decimal(value: Any, name: str = "value") -> Decimal:
    """Convert a JSON number or numeric string into a finite, non-negative Decimal.

    Args:
        value: A Decimal, int, float or numeric string.
        name: Field name used in error messages.

    Returns:
        The parsed Decimal, keeping the precision it was written with.

    Raises:
        ParseError: If the value is not numeric, not finite, or negative.
    """
    if isinstance(value, bool):
        raise ParseError(f"{name} must be a number or numeric string, got {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        if "_" in value:
            raise ParseError(f"{name} is not a valid decimal: {value!r}")
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise ParseError(f"{name} is not a valid decimal: {value!r}") from None
    else:
        raise ParseError(f"{name} must be a number or numeric string, got {value!r}")

    if not result.is_finite():
        raise ParseError(f"{name} must be finite, got {value!r}")
    if result < 0:
        raise ParseError(f"{name} must not be negative, got {value!r}")
    return result


def parse_donation(amount: Any) -> Decimal:
    """Parse the requested donation amount."""
    return parse_decimal(amount, "donation amount")


def shift_to_integer(value: Decimal, exponent: int) -> int:
    """Return ``value * 10 ** -exponent`` as an int, truncating any remainder."""
    sign, digits, value_exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits)) or "0")
    if value_exponent >= exponent:
        shifted = coefficient * 10 ** (value_exponent - exponent)
    else:
        shifted = coefficient // 10 ** (exponent - value_exponent)
    return -shifted if sign else shifted


@dataclass
class NormalizedLot:
    """Integer view of one input lot.

    ``index`` points into ``DonationInput.lots``; two normalized lots are the
    same lot exactly when their indexes are equal.
    """

    index: int
    shares: int
    cost: int


class NormalizedLots:
    """Lots, prices and donation budget shifted into one integer domain."""

    def __init__(self, source: DonationInput, donation: Decimal) -> None:
        prices = source.asset_share_prices
        self.source = source

        exponent = donation.as_tuple().exponent
        for lot in source.lots:
            if lot.asset_name not in prices:
                raise InputError(
                    "lot has an assetName that does not appear in "
                    f"assetSharePrices: {lot.asset_name}"
                )
            if lot.shares < 0:
                raise InputError(f"lot {lot} has a negative share count")
            exponent = min(exponent, lot.share_cost.as_tuple().exponent)
        for price in prices.values():
            exponent = min(exponent, price.as_tuple().exponent)

        self.exponent: int = exponent
        self.donation: int = shift_to_integer(donation, exponent)
        self.share_prices: dict[str, int] = {
            name: shift_to_integer(price, exponent) for name, price in prices.items()
        }
        self.lots: list[NormalizedLot] = [
            NormalizedLot(index=m, shares=lot.shares, cost=shift_to_integer(lot.share_cost, exponent))
            for m, lot in enumerate(source.lots)
        ]

        logger.debug(
            "Normalized %d lots with exponent %d (donation budget %d)",
            len(self.lots),
            self.exponent,
            self.donation,
        )

    def lot(self, normalized: NormalizedLot) -> Lot:
        return self.source.lots[normalized.index]

    def share_price(self, normalized: NormalizedLot) -> int:
        return self.share_prices[self.lot(normalized).asset_name]

    def unit_capital_gains(self, normalized: NormalizedLot) -> int:
        return self.share_price(normalized) - normalized.cost

    def is_eligible(self, normalized: NormalizedLot, objective: Objective) -> bool:
        """Whether the lot can contribute to a donation under ``objective``."""
        if normalized.shares == 0:
            return False
        if self.share_price(normalized) > self.donation:
            return False
        return objective.sign * self.unit_capital_gains(normalized) > 0

    def filter_lots(self, objective: Objective) -> None:
        """Drop lots that cannot improve the objective, keeping survivor order."""
        before = len(self.lots)
        self.lots[:] = [lot for lot in self.lots if self.is_eligible(lot, objective)]
        logger.debug("Kept %d of %d lots for %s", len(self.lots), before, objective.value)

    def total_price(self) -> int:
        """Price of every remaining share, in normalized units."""
        return sum(self.share_price(lot) * lot.shares for lot in self.lots)

    def values(self, objective: Objective) -> list[int]:
        """Per-share value of each remaining lot, signed so that more is better."""
        return [objective.sign * self.unit_capital_gains(lot) for lot in self.lots]

    def prices(self) -> list[int]:
        return [self.share_price(lot) for lot in self.lots]

    def __repr__(self) -> str:
        return (
            f"NormalizedLots(lots={len(self.lots)}, exponent={self.exponent}, "
            f"donation={self.donation})"
        )
