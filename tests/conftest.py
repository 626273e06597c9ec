"""Shared fixtures for the calculator tests."""
import pytest

from options_calculator.strategy.models import BidAsk, QuoteRow, QuoteTable, StrategyInputs

SAMPLE_QUOTES = {
    22000: {"call": {"bid": 122, "ask": 143}, "put": {"bid": 40, "ask": 58}},
    22100: {"call": {"bid": 96, "ask": 137}, "put": {"bid": 31, "ask": 59}},
    22200: {"call": {"bid": 75, "ask": 98}, "put": {"bid": 28, "ask": 78}},
    22300: {"call": {"bid": 27, "ask": 42.5}, "put": {"bid": 96, "ask": 137}},
    22400: {"call": {"bid": 20.5, "ask": 22.5}, "put": {"bid": 235, "ask": 255}},
}


@pytest.fixture
def quotes():
    """Create a sample quote table."""
    return QuoteTable.from_dict(SAMPLE_QUOTES)


@pytest.fixture
def strategy_inputs():
    """Create strike selections that all exist in the sample quote table."""
    return StrategyInputs(
        straddle_strike=22200,
        strangle_put_strike=22000,
        strangle_call_strike=22400,
        bull_call_low_strike=22200,
        bull_call_high_strike=22400,
        bear_put_high_strike=22200,
        bear_put_low_strike=22000,
        condor_put_long_strike=22000,
        condor_put_short_strike=22100,
        condor_call_short_strike=22300,
        condor_call_long_strike=22400,
        butterfly_low_strike=22000,
        butterfly_mid_strike=22100,
        butterfly_high_strike=22200,
    )


@pytest.fixture
def quote_rows():
    """Create editor rows for the sample quote table, ids 1-5 in strike order."""
    return [
        QuoteRow(
            id=index,
            strike=strike,
            call=BidAsk(**quote['call']),
            put=BidAsk(**quote['put']),
        )
        for index, (strike, quote) in enumerate(SAMPLE_QUOTES.items(), start=1)
    ]
