"""Exceptions raised by the strategy pricing engine."""


class StrategyError(Exception):
    """Base exception for strategy calculation errors."""

    pass


class MissingStrikeError(StrategyError, KeyError):
    """Raised when a requested strike is not present in the quote table."""

    def __init__(self, strike: float) -> None:
        self.strike = strike
        self.message = (
            f"Strike {strike} not found in quote table; "
            f"check that strikes exist in the quote table"
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.message
