"""Donation selection as a mixed-integer linear program.

Mathematical Formulation:

    maximize: sum(v[j] * x[j])

    subject to:
        sum(p[j] * x[j]) <= d                   (donation budget)
        0 <= x[j] <= n[j], integer              (whole shares from each lot)

    where:
        x[j]     = shares of lot j to donate (decision variable)
        p[j]     = normalized price of one share of lot j
        v[j]     = signed capital gain of one share of lot j
        n[j]     = shares available in lot j
        d        = normalized donation budget

The solver reaches the same optimum as the dynamic-programming strategies
without a table proportional to the budget, but when several selections tie
it may return a different one.
"""

import logging
from typing import Sequence

import numpy as np
from scipy.optimize import Bounds, LinearConstraint, milp

from .base import SelectionStrategy
from .bounded import BoundedKnapsackStrategy

logger = logging.getLogger(__name__)


class MilpStrategy(SelectionStrategy):
    """Maximize donated capital gain with scipy's HiGHS MILP solver."""

    def choose_shares(
        self,
        capacity: int,
        prices: Sequence[int],
        values: Sequence[int],
        shares: Sequence[int],
    ) -> list[tuple[int, int]]:
        n = len(prices)
        if n == 0:
            return []

        p = np.array(prices, dtype=float)
        v = np.array(values, dtype=float)

        # milp minimizes, so negate the gains
        c = -v

        budget_constraint = LinearConstraint(p.reshape(1, n), -np.inf, float(capacity))
        bounds = Bounds(np.zeros(n), np.array(shares, dtype=float))
        integrality = np.ones(n, dtype=int)

        result = milp(
            c=c,
            constraints=[budget_constraint],
            integrality=integrality,
            bounds=bounds,
            options={"mip_rel_gap": 0},
        )

        if result.success:
            counts = [int(x) for x in np.round(result.x)]
            spent = sum(price * count for price, count in zip(prices, counts))
            if spent <= capacity:
                return self._pairs_from_counts(counts)
            logger.warning("MILP solution spends %d over a budget of %d", spent, capacity)
        else:
            logger.warning("MILP solver failed (%s)", result.message)

        # Fall back to the exact dynamic program
        return BoundedKnapsackStrategy(self.max_table_cells).choose_shares(
            capacity, prices, values, shares
        )
