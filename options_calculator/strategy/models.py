"""Data models for option quotes and strategy results."""
import math
from dataclasses import dataclass, fields
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Tuple

from .exceptions import MissingStrikeError


@dataclass(frozen=True)
class BidAsk:
    """Quoted bid/ask prices for one instrument at one strike."""
    bid: float
    ask: float

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate quoted prices.

        An inverted market (bid above ask) is accepted.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.bid < 0:
            return False, "Bid cannot be negative"
        if self.ask < 0:
            return False, "Ask cannot be negative"
        return True, None


@dataclass(frozen=True)
class StrikeQuote:
    """Call and put quotes at a single strike."""
    call: BidAsk
    put: BidAsk


class QuoteTable(Mapping):
    """Read-only mapping from strike price to StrikeQuote.

    Strikes that compare equal address the same entry, so ``22000`` and
    ``22000.0`` are interchangeable keys.
    """

    def __init__(self, quotes: Optional[Mapping[float, StrikeQuote]] = None):
        """Initialize the QuoteTable.

        Args:
            quotes: Mapping of strike price to StrikeQuote
        """
        self._quotes: Dict[float, StrikeQuote] = dict(quotes or {})

    @classmethod
    def from_dict(cls, data: Mapping[float, Mapping[str, Mapping[str, float]]]) -> 'QuoteTable':
        """Build a QuoteTable from plain nested dictionaries.

        Args:
            data: Mapping of strike to ``{"call": {"bid", "ask"}, "put": {"bid", "ask"}}``

        Returns:
            QuoteTable instance
        """
        quotes = {}
        for strike, quote in data.items():
            quotes[strike] = StrikeQuote(
                call=BidAsk(bid=float(quote['call']['bid']), ask=float(quote['call']['ask'])),
                put=BidAsk(bid=float(quote['put']['bid']), ask=float(quote['put']['ask'])),
            )
        return cls(quotes)

    def quote(self, strike: float) -> StrikeQuote:
        """Get the quote for a strike.

        Args:
            strike: Strike price to look up

        Returns:
            StrikeQuote at that strike

        Raises:
            MissingStrikeError: If the strike is not in the table
        """
        try:
            return self._quotes[strike]
        except KeyError:
            raise MissingStrikeError(strike) from None

    def strikes(self) -> list:
        """Return the table's strikes in ascending order."""
        return sorted(self._quotes)

    def __getitem__(self, strike: float) -> StrikeQuote:
        return self.quote(strike)

    def __iter__(self) -> Iterator[float]:
        return iter(self._quotes)

    def __len__(self) -> int:
        return len(self._quotes)

    def __repr__(self) -> str:
        return f"QuoteTable({self._quotes!r})"


@dataclass(frozen=True)
class StrategyResult:
    """Risk/reward metrics for one strategy.

    Only the fields relevant to the strategy are populated. Debit strategies
    report ``cost``, credit strategies report ``credit``. Vertical spreads
    report a single ``breakeven``, the rest report ``breakevens`` as an
    ordered (lower, upper) pair.
    """
    max_risk: float
    max_profit: float
    cost: Optional[float] = None
    credit: Optional[float] = None
    breakeven: Optional[float] = None
    breakevens: Optional[Tuple[float, float]] = None

    @property
    def is_credit(self) -> bool:
        """True if the strategy collects a net premium."""
        return self.credit is not None

    @property
    def is_unlimited_profit(self) -> bool:
        """True if max profit is unbounded."""
        return math.isinf(self.max_profit) and self.max_profit > 0

    @property
    def breakeven_points(self) -> Tuple[float, ...]:
        """All breakeven levels, lowest first."""
        if self.breakevens is not None:
            return tuple(self.breakevens)
        if self.breakeven is not None:
            return (self.breakeven,)
        return ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary of the populated fields only."""
        result = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None:
                continue
            result[field.name] = list(value) if isinstance(value, tuple) else value
        return result


@dataclass(frozen=True)
class QuoteRow:
    """One editable row of the quote table."""
    id: int
    strike: float
    call: BidAsk
    put: BidAsk

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate the row.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.strike < 0:
            return False, f"Strike {self.strike} cannot be negative"
        for side, prices in (('call', self.call), ('put', self.put)):
            is_valid, error = prices.validate()
            if not is_valid:
                return False, f"Strike {self.strike} {side}: {error}"
        return True, None

    def to_strike_quote(self) -> StrikeQuote:
        return StrikeQuote(call=self.call, put=self.put)


@dataclass
class StrategyInputs:
    """Strike selections for the six supported strategies."""
    straddle_strike: float
    strangle_put_strike: float
    strangle_call_strike: float
    bull_call_low_strike: float
    bull_call_high_strike: float
    bear_put_high_strike: float
    bear_put_low_strike: float
    condor_put_long_strike: float
    condor_put_short_strike: float
    condor_call_short_strike: float
    condor_call_long_strike: float
    butterfly_low_strike: float
    butterfly_mid_strike: float
    butterfly_high_strike: float

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate strike selections.

        Strike ordering is left to the caller; only the sign is checked.

        Returns:
            Tuple of (is_valid, error_message)
        """
        for field in fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                return False, f"{field.name} must be a number"
            if value < 0:
                return False, f"{field.name} cannot be negative"
        return True, None
