"""Dynamic-programming knapsack engines.

Both engines maximize total value subject to total weight <= capacity:

    0/1:      table[i][w] = max(table[i-1][w], table[i-1][w - weight[i]] + value[i])
    bounded:  table[j][w] = max over 0 <= c <= count[j] of
                            table[j-1][w - c * weight[j]] + c * value[j]

and recover the chosen items by walking the table backwards from
``table[-1][capacity]``. An item (or an extra share of a lot) is only taken
when it strictly improves on leaving it out, so among equally good answers
the one built from lower-indexed items wins. With lots expanded share by
share, the two engines therefore choose exactly the same shares.

Time and space are O(rows * capacity); ``max_cells`` bounds the table.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from .exceptions import CapacityError

logger = logging.getLogger(__name__)

INT64_MAX = np.iinfo(np.int64).max


def _check_table_size(rows: int, columns: int, max_cells: Optional[int]) -> None:
    if max_cells is not None and rows * columns > max_cells:
        raise CapacityError(rows, columns, max_cells)


def _table_dtype(values: Sequence[int], counts: Sequence[int]) -> type:
    """int64 when every partial sum fits, Python ints otherwise."""
    bound = sum(abs(v) * c for v, c in zip(values, counts))
    return np.int64 if bound < INT64_MAX else object


def _check_capacity(capacity: int) -> None:
    if capacity < 0:
        raise ValueError(f"capacity must not be negative, got {capacity}")


def solve_01(
    capacity: int,
    weights: Sequence[int],
    values: Sequence[int],
    max_cells: Optional[int] = None,
) -> list[int]:
    """Solve the 0/1 knapsack problem.

    Args:
        capacity: Maximum total weight.
        weights: Non-negative integer weight of each item.
        values: Integer value of each item (may be negative).
        max_cells: Refuse tables with more cells than this.

    Returns:
        Indexes of the chosen items in ascending order.

    Raises:
        CapacityError: If the table would exceed ``max_cells``.
    """
    _check_capacity(capacity)
    n = len(weights)
    if n == 0:
        return []

    _check_table_size(n + 1, capacity + 1, max_cells)
    dtype = _table_dtype(values, [1] * n)
    table = np.zeros((n + 1, capacity + 1), dtype=dtype)
    logger.debug("Solving 0/1 knapsack with a %d x %d table", n + 1, capacity + 1)

    for i in range(1, n + 1):
        weight, value = weights[i - 1], values[i - 1]
        prev, row = table[i - 1], table[i]
        row[:] = prev
        if weight <= capacity:
            np.maximum(
                prev[weight:], prev[: capacity + 1 - weight] + value, out=row[weight:]
            )

    chosen: list[int] = []
    w = capacity
    for i in range(n, 0, -1):
        if table[i, w] != table[i - 1, w]:
            chosen.append(i - 1)
            w -= weights[i - 1]
    chosen.reverse()
    return chosen


def solve_bounded(
    capacity: int,
    weights: Sequence[int],
    values: Sequence[int],
    counts: Sequence[int],
    max_cells: Optional[int] = None,
) -> list[int]:
    """Solve the bounded knapsack problem with up to ``counts[j]`` copies of item ``j``.

    Args:
        capacity: Maximum total weight.
        weights: Non-negative integer weight of one copy of each item.
        values: Integer value of one copy of each item.
        counts: How many copies of each item are available.
        max_cells: Refuse tables with more cells than this.

    Returns:
        Number of copies chosen for each item, aligned with ``weights``.
        For every item the smallest count that reaches the optimum is used.

    Raises:
        CapacityError: If the table would exceed ``max_cells``.
    """
    _check_capacity(capacity)
    n = len(weights)
    if n == 0:
        return []

    _check_table_size(n + 1, capacity + 1, max_cells)
    dtype = _table_dtype(values, counts)
    table = np.zeros((n + 1, capacity + 1), dtype=dtype)
    logger.debug("Solving bounded knapsack with a %d x %d table", n + 1, capacity + 1)

    for j in range(1, n + 1):
        weight, value, count = weights[j - 1], values[j - 1], counts[j - 1]
        prev, row = table[j - 1], table[j]
        row[:] = prev
        for c in range(1, count + 1):
            offset = c * weight
            if offset > capacity:
                break
            np.maximum(
                row[offset:], prev[: capacity + 1 - offset] + c * value, out=row[offset:]
            )

    chosen = [0] * n
    w = capacity
    for j in range(n, 0, -1):
        weight, value, count = weights[j - 1], values[j - 1], counts[j - 1]
        most = count if weight == 0 else min(count, w // weight)
        copies = np.arange(most + 1)
        reachable = table[j - 1, w - copies * weight] + copies.astype(dtype) * value
        c = int(np.flatnonzero(reachable == table[j, w])[0])
        chosen[j - 1] = c
        w -= c * weight
    return chosen
