"""Abstract base class for share selection strategies."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence


class SelectionStrategy(ABC):
    """Chooses how many shares of each lot to donate within a budget."""

    def __init__(self, max_table_cells: Optional[int] = None) -> None:
        """Initialize with an optional limit on solver table size.

        Args:
            max_table_cells: Largest dynamic-programming table to allocate.
                None means unlimited.
        """
        self.max_table_cells = max_table_cells

    @abstractmethod
    def choose_shares(
        self,
        capacity: int,
        prices: Sequence[int],
        values: Sequence[int],
        shares: Sequence[int],
    ) -> list[tuple[int, int]]:
        """Pick shares so their total price stays within ``capacity``.

        Args:
            capacity: Donation budget in normalized units.
            prices: Normalized price of one share of each lot.
            values: Value of one share of each lot; the total is maximized.
            shares: Shares available in each lot.

        Returns:
            ``(lot, shares)`` pairs in lot order, where ``lot`` indexes the
            input sequences and ``shares`` is positive.
        """
        pass

    @staticmethod
    def _pairs_from_counts(counts: Sequence[int]) -> list[tuple[int, int]]:
        return [(m, int(count)) for m, count in enumerate(counts) if count > 0]
