"""Strategy pricing engine."""
from .exceptions import StrategyError, MissingStrikeError
from .models import BidAsk, StrikeQuote, QuoteTable, QuoteRow, StrategyInputs, StrategyResult
from .strategy_calculator import (
    STRATEGY_NAMES,
    CalculationSummary,
    StrategyCalculator,
    StrategyOutcome,
    bear_put_spread,
    bull_call_spread,
    butterfly,
    iron_condor,
    straddle,
    strangle,
)

__all__ = [
    'StrategyError', 'MissingStrikeError',
    'BidAsk', 'StrikeQuote', 'QuoteTable', 'QuoteRow', 'StrategyInputs', 'StrategyResult',
    'STRATEGY_NAMES', 'CalculationSummary', 'StrategyCalculator', 'StrategyOutcome',
    'straddle', 'strangle', 'bull_call_spread', 'bear_put_spread', 'iron_condor', 'butterfly',
]
