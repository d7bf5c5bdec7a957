"""
Donation Chooser - picks which lots of shares to donate to charity.

Given current asset prices, purchase lots and a target donation amount, it
chooses whole shares worth no more than the target that carry the most
capital gains (or, optionally, the most capital losses).

Exports:
    Lot: Dataclass representing a purchase lot
    DonationInput: Asset prices plus the lots available
    DonationResult: Lots to donate with their total value and capital gains
    DonationConfig: Options for a calculation
    Objective: Maximize gains or maximize losses
    DonationChooser: Main class for calculating a donation
    choose_donation: Function form of DonationChooser.choose()
    SelectionStrategy: Abstract base class for selection strategies
    ExpandedKnapsackStrategy: Per-share 0/1 knapsack (default)
    BoundedKnapsackStrategy: Per-lot bounded knapsack
    MilpStrategy: Mixed-integer linear program via scipy
"""

from .config import DonationConfig, Objective
from .exceptions import CapacityError, DonationError, InputError, ParseError
from .models import DonationInput, DonationResult, Lot
from .chooser import DonationChooser, choose_donation
from .loaders import dump_result, load_input
from .optimizers import (
    BoundedKnapsackStrategy,
    ExpandedKnapsackStrategy,
    MilpStrategy,
    SelectionStrategy,
)

__all__ = [
    "Lot",
    "DonationInput",
    "DonationResult",
    "DonationConfig",
    "Objective",
    "DonationChooser",
    "choose_donation",
    "load_input",
    "dump_result",
    "DonationError",
    "ParseError",
    "InputError",
    "CapacityError",
    "SelectionStrategy",
    "ExpandedKnapsackStrategy",
    "BoundedKnapsackStrategy",
    "MilpStrategy",
]
