import logging
from decimal import Decimal
from typing import Optional, Union

from .config import DonationConfig, StrategyName
from .models import DonationInput, DonationResult, Lot, exact_arithmetic
from .normalize import NormalizedLots, parse_donation
from .optimizers import (
    BoundedKnapsackStrategy,
    ExpandedKnapsackStrategy,
    MilpStrategy,
    SelectionStrategy,
)

logger = logging.getLogger(__name__)

STRATEGIES: dict[str, type[SelectionStrategy]] = {
    "expanded": ExpandedKnapsackStrategy,
    "bounded": BoundedKnapsackStrategy,
    "milp": MilpStrategy,
}


def get_strategy(name: StrategyName, max_table_cells: Optional[int] = None) -> SelectionStrategy:
    strategy_cls = STRATEGIES.get(name)
    if strategy_cls is None:
        raise ValueError(f"Unknown strategy: {name}")
    return strategy_cls(max_table_cells)


def assemble_result(source: DonationInput, donation: list[Lot]) -> DonationResult:
    """Total up the value and capital gains of ``donation`` at current prices."""
    total_value = Decimal("0")
    total_capital_gains = Decimal("0")
    with exact_arithmetic():
        for lot in donation:
            shares = Decimal(lot.shares)
            total_value += source.asset_share_prices[lot.asset_name] * shares
            total_capital_gains += source.unit_capital_gains(lot) * shares

    return DonationResult(
        donation=donation,
        asset_share_prices=source.asset_share_prices,
        total_value=total_value,
        total_capital_gains=total_capital_gains,
    )


class DonationChooser:
    """Chooses which lots to donate for a given donation amount."""

    def __init__(self, source: DonationInput, config: Optional[DonationConfig] = None) -> None:
        self.source = source
        self.config = config or DonationConfig()

    def choose(self, donation: Union[str, Decimal]) -> DonationResult:
        """Calculate the donation that best serves the configured objective.

        Args:
            donation: Target donation amount; the result never exceeds it.

        Returns:
            DonationResult listing the lots (with possibly fewer shares) to donate.

        Raises:
            ParseError: If the donation amount is malformed.
            InputError: If a lot names an asset without a price.
            CapacityError: If the selection table would be too large.
        """
        amount = parse_donation(donation)
        objective = self.config.objective

        normalized = NormalizedLots(self.source, amount)
        normalized.filter_lots(objective)

        shares = [lot.shares for lot in normalized.lots]
        if normalized.total_price() <= normalized.donation:
            logger.debug("All %d remaining lots fit within the donation", len(shares))
            chosen = list(enumerate(shares))
        else:
            strategy = get_strategy(self.config.strategy, self.config.max_table_cells)
            chosen = strategy.choose_shares(
                normalized.donation,
                normalized.prices(),
                normalized.values(objective),
                shares,
            )

        donation_lots = [
            normalized.lot(normalized.lots[m]).with_shares(count) for m, count in chosen
        ]
        logger.info(
            "Chose %d lots (%d shares) for a donation of %s",
            len(donation_lots),
            sum(count for _, count in chosen),
            amount,
        )
        return assemble_result(self.source, donation_lots)

    def __repr__(self) -> str:
        return (
            f"DonationChooser(lots={len(self.source.lots)}, "
            f"assets={list(self.source.asset_share_prices.keys())}, "
            f"config={self.config})"
        )


def choose_donation(
    source: DonationInput,
    donation: Union[str, Decimal],
    config: Optional[DonationConfig] = None,
) -> DonationResult:
    """Convenience wrapper around DonationChooser.choose()."""
    return DonationChooser(source, config).choose(donation)
