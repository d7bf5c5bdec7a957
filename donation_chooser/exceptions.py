"""Errors raised while choosing donation lots."""


class DonationError(ValueError):
    """Base class for all donation chooser errors."""


class ParseError(DonationError):
    """A donation amount, decimal field, or input document is malformed."""


class InputError(DonationError):
    """The input document is well-formed but inconsistent."""


class CapacityError(DonationError):
    """The selection table would exceed the configured size limit."""

    def __init__(self, rows: int, columns: int, limit: int) -> None:
        self.rows = rows
        self.columns = columns
        self.limit = limit
        super().__init__(
            f"selection table of {rows} x {columns} cells exceeds the limit of "
            f"{limit} cells; lower the donation amount or raise the limit"
        )
