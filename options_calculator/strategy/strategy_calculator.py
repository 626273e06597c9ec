"""Strategy pricing engine for multi-leg option strategies.

Each pricing function maps strike selections and a QuoteTable to a
StrategyResult. Prices are taken from the side of the market the trader
would cross: legs bought pay the ask, legs sold receive the bid.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from .exceptions import MissingStrikeError
from .models import QuoteTable, StrategyInputs, StrategyResult

if TYPE_CHECKING:
    from options_calculator.logging.calc_logger import CalcLogger


def straddle(strike: float, quotes: QuoteTable) -> StrategyResult:
    """Long straddle: buy a call and a put at the same strike.

    Args:
        strike: At-the-money strike price
        quotes: Quote table

    Returns:
        StrategyResult with cost, max_risk, max_profit and breakevens

    Raises:
        MissingStrikeError: If the strike is not in the table
    """
    quote = quotes.quote(strike)
    cost = quote.call.ask + quote.put.ask
    return StrategyResult(
        cost=cost,
        max_risk=cost,
        max_profit=math.inf,
        breakevens=(strike - cost, strike + cost),
    )


def strangle(put_strike: float, call_strike: float, quotes: QuoteTable) -> StrategyResult:
    """Long strangle: buy an OTM put and an OTM call.

    Args:
        put_strike: Put strike, below the underlying
        call_strike: Call strike, above the underlying
        quotes: Quote table

    Returns:
        StrategyResult with cost, max_risk, max_profit and breakevens

    Raises:
        MissingStrikeError: If either strike is not in the table
    """
    put_ask = quotes.quote(put_strike).put.ask
    call_ask = quotes.quote(call_strike).call.ask
    cost = put_ask + call_ask
    return StrategyResult(
        cost=cost,
        max_risk=cost,
        max_profit=math.inf,
        breakevens=(put_strike - cost, call_strike + cost),
    )


def bull_call_spread(low_strike: float, high_strike: float, quotes: QuoteTable) -> StrategyResult:
    """Bull call spread: buy a call at low_strike, sell a call at high_strike.

    Expects ``low_strike < high_strike``; inverted strikes are not rejected.

    Args:
        low_strike: Strike of the long call
        high_strike: Strike of the short call
        quotes: Quote table

    Returns:
        StrategyResult with cost, max_risk, max_profit and breakeven

    Raises:
        MissingStrikeError: If either strike is not in the table
    """
    buy_ask = quotes.quote(low_strike).call.ask
    sell_bid = quotes.quote(high_strike).call.bid
    cost = buy_ask - sell_bid
    width = high_strike - low_strike
    return StrategyResult(
        cost=cost,
        max_risk=cost,
        max_profit=width - cost,
        breakeven=low_strike + cost,
    )


def bear_put_spread(high_strike: float, low_strike: float, quotes: QuoteTable) -> StrategyResult:
    """Bear put spread: buy a put at high_strike, sell a put at low_strike.

    Expects ``low_strike < high_strike``; inverted strikes are not rejected.

    Args:
        high_strike: Strike of the long put
        low_strike: Strike of the short put
        quotes: Quote table

    Returns:
        StrategyResult with cost, max_risk, max_profit and breakeven

    Raises:
        MissingStrikeError: If either strike is not in the table
    """
    buy_ask = quotes.quote(high_strike).put.ask
    sell_bid = quotes.quote(low_strike).put.bid
    cost = buy_ask - sell_bid
    width = high_strike - low_strike
    return StrategyResult(
        cost=cost,
        max_risk=cost,
        max_profit=width - cost,
        breakeven=high_strike - cost,
    )


def iron_condor(put_long: float, put_short: float, call_short: float, call_long: float,
                quotes: QuoteTable) -> StrategyResult:
    """Iron condor: a short put spread plus a short call spread.

    Buys the put at put_long, sells the put at put_short, sells the call at
    call_short and buys the call at call_long. The usual ordering is
    ``put_long < put_short <= call_short < call_long``.

    Max risk is the worse of the two wings: wing width less that wing's credit.

    Args:
        put_long: Strike of the long (protective) put
        put_short: Strike of the short put
        call_short: Strike of the short call
        call_long: Strike of the long (protective) call
        quotes: Quote table

    Returns:
        StrategyResult with credit, max_risk, max_profit and breakevens

    Raises:
        MissingStrikeError: If any strike is not in the table
    """
    call_credit = quotes.quote(call_short).call.bid - quotes.quote(call_long).call.ask
    put_credit = quotes.quote(put_short).put.bid - quotes.quote(put_long).put.ask
    total_credit = call_credit + put_credit

    risk_call = (call_long - call_short) - call_credit
    risk_put = (put_short - put_long) - put_credit

    return StrategyResult(
        credit=total_credit,
        max_risk=max(risk_call, risk_put),
        max_profit=total_credit,
        breakevens=(put_short - total_credit, call_short + total_credit),
    )


def butterfly(low_strike: float, mid_strike: float, high_strike: float,
              quotes: QuoteTable) -> StrategyResult:
    """Long call butterfly: buy low_strike, sell two mid_strike, buy high_strike.

    Profit is measured against one wing (``mid_strike - low_strike``), so the
    figures match a standard payoff diagram only when the wings are equal.

    Args:
        low_strike: Strike of the lower long call
        mid_strike: Strike of the two short calls
        high_strike: Strike of the upper long call
        quotes: Quote table

    Returns:
        StrategyResult with cost, max_risk, max_profit and breakevens

    Raises:
        MissingStrikeError: If any strike is not in the table
    """
    buy_low = quotes.quote(low_strike).call.ask
    sell_mid = quotes.quote(mid_strike).call.bid
    buy_high = quotes.quote(high_strike).call.ask
    cost = buy_low + buy_high - 2 * sell_mid
    width = mid_strike - low_strike
    return StrategyResult(
        cost=cost,
        max_risk=cost,
        max_profit=width - cost,
        breakevens=(low_strike + cost, high_strike - cost),
    )


STRATEGY_NAMES = [
    'straddle',
    'strangle',
    'bull_call_spread',
    'bear_put_spread',
    'iron_condor',
    'butterfly',
]


@dataclass
class StrategyOutcome:
    """Outcome of one strategy calculation."""
    name: str
    success: bool
    result: Optional[StrategyResult] = None
    error_message: Optional[str] = None


@dataclass
class CalculationSummary:
    """Summary of a calculation run across strategies."""
    calculated_at: datetime
    outcomes: List[StrategyOutcome] = field(default_factory=list)

    @property
    def successful(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.successful

    @property
    def results(self) -> Dict[str, StrategyResult]:
        """Results keyed by strategy name, successful strategies only."""
        return {o.name: o.result for o in self.outcomes if o.success}

    @property
    def errors(self) -> Dict[str, str]:
        """Error messages keyed by strategy name, failed strategies only."""
        return {o.name: o.error_message for o in self.outcomes if not o.success}


class StrategyCalculator:
    """Runs the pricing engine for a set of strategy inputs."""

    def __init__(self, logger: Optional['CalcLogger'] = None):
        """Initialize the StrategyCalculator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger
        self._dispatch: Dict[str, Callable[[StrategyInputs, QuoteTable], StrategyResult]] = {
            'straddle': lambda i, q: straddle(i.straddle_strike, q),
            'strangle': lambda i, q: strangle(i.strangle_put_strike, i.strangle_call_strike, q),
            'bull_call_spread': lambda i, q: bull_call_spread(
                i.bull_call_low_strike, i.bull_call_high_strike, q),
            'bear_put_spread': lambda i, q: bear_put_spread(
                i.bear_put_high_strike, i.bear_put_low_strike, q),
            'iron_condor': lambda i, q: iron_condor(
                i.condor_put_long_strike, i.condor_put_short_strike,
                i.condor_call_short_strike, i.condor_call_long_strike, q),
            'butterfly': lambda i, q: butterfly(
                i.butterfly_low_strike, i.butterfly_mid_strike, i.butterfly_high_strike, q),
        }

    def calculate(self, name: str, inputs: StrategyInputs, quotes: QuoteTable) -> StrategyResult:
        """Calculate a single strategy.

        Args:
            name: Strategy name, one of STRATEGY_NAMES
            inputs: Strike selections
            quotes: Quote table

        Returns:
            StrategyResult for the strategy

        Raises:
            ValueError: If the strategy name is unknown
            MissingStrikeError: If a referenced strike is not in the table
        """
        if name not in self._dispatch:
            raise ValueError(f"Unknown strategy '{name}'. Must be one of {STRATEGY_NAMES}")
        return self._dispatch[name](inputs, quotes)

    def calculate_all(self, inputs: StrategyInputs, quotes: QuoteTable,
                      names: Optional[List[str]] = None) -> CalculationSummary:
        """Calculate several strategies, isolating each one's failure.

        A missing strike fails only the strategy that references it; the
        remaining strategies are still calculated.

        Args:
            inputs: Strike selections
            quotes: Quote table
            names: Strategies to calculate (default: all)

        Returns:
            CalculationSummary with one outcome per strategy
        """
        if names is None:
            names = STRATEGY_NAMES
        for name in names:
            if name not in self._dispatch:
                raise ValueError(f"Unknown strategy '{name}'. Must be one of {STRATEGY_NAMES}")

        summary = CalculationSummary(calculated_at=datetime.now())

        for name in names:
            try:
                result = self.calculate(name, inputs, quotes)
                summary.outcomes.append(StrategyOutcome(name=name, success=True, result=result))
                if self.logger:
                    self.logger.log_strategy_result(name, result)
            except MissingStrikeError as e:
                if self.logger:
                    self.logger.log_warning(
                        f"Could not calculate {name}",
                        {"strategy": name, "missing_strike": e.strike}
                    )
                summary.outcomes.append(
                    StrategyOutcome(name=name, success=False, error_message=str(e))
                )

        if self.logger:
            self.logger.log_calculation_summary(summary)

        return summary
