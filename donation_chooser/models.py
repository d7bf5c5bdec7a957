"""Data models for the donation chooser."""

from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from decimal import MAX_PREC, Decimal, localcontext
from typing import Iterator


@contextmanager
def exact_arithmetic() -> Iterator[None]:
    """Decimal context in which sums and products of finite values never round."""
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        yield


@dataclass(frozen=True)
class Lot:
    """Shares of one asset bought at one cost on one occasion."""

    asset_name: str
    date: str
    shares: int
    share_cost: Decimal

    def with_shares(self, shares: int) -> "Lot":
        return replace(self, shares=shares)

    def __str__(self) -> str:
        return f"{self.asset_name} {self.shares}@{self.share_cost} ({self.date})"


@dataclass
class DonationInput:
    """Current asset prices and the lots available for donation."""

    asset_share_prices: dict[str, Decimal]
    lots: list[Lot] = field(default_factory=list)

    def unit_capital_gains(self, lot: Lot) -> Decimal:
        return self.asset_share_prices[lot.asset_name] - lot.share_cost


@dataclass(frozen=True)
class DonationResult:
    """The lots to donate and the totals they carry."""

    donation: list[Lot]
    asset_share_prices: dict[str, Decimal]
    total_value: Decimal
    total_capital_gains: Decimal

    @property
    def total_shares(self) -> int:
        return sum(lot.shares for lot in self.donation)
