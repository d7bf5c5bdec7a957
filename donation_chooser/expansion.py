"""Expansion of lots into single shares and recombination of chosen shares."""

from typing import NamedTuple, Sequence


class ShareItem(NamedTuple):
    """One share of a lot, as seen by the 0/1 selection engine."""

    lot: int
    weight: int
    value: int


def expand_lots(
    shares: Sequence[int], weights: Sequence[int], values: Sequence[int]
) -> list[ShareItem]:
    """Turn lot ``m`` with ``shares[m]`` shares into that many ShareItems.

    Items are emitted lot by lot, so all shares of one lot are contiguous.
    """
    items: list[ShareItem] = []
    for m, (count, weight, value) in enumerate(zip(shares, weights, values)):
        items.extend([ShareItem(m, weight, value)] * count)
    return items


def recombine_lots(items: Sequence[ShareItem]) -> list[tuple[int, int]]:
    """Collapse runs of shares from the same lot into ``(lot, shares)`` pairs.

    Only consecutive items are merged; a lot that reappears after another
    lot starts a new entry.
    """
    combined: list[tuple[int, int]] = []
    for item in items:
        if combined and combined[-1][0] == item.lot:
            combined[-1] = (item.lot, combined[-1][1] + 1)
        else:
            combined.append((item.lot, 1))
    return combined
