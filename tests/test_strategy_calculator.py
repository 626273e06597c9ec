"""Unit tests for the strategy pricing engine."""
import math
import pytest

from options_calculator.strategy.exceptions import MissingStrikeError
from options_calculator.strategy.models import QuoteTable
from options_calculator.strategy.strategy_calculator import (
    STRATEGY_NAMES,
    StrategyCalculator,
    bear_put_spread,
    bull_call_spread,
    butterfly,
    iron_condor,
    straddle,
    strangle,
)


def make_table(rows):
    """Build a QuoteTable from (strike, call_bid, call_ask, put_bid, put_ask) tuples."""
    return QuoteTable.from_dict({
        strike: {"call": {"bid": cb, "ask": ca}, "put": {"bid": pb, "ask": pa}}
        for strike, cb, ca, pb, pa in rows
    })


class TestStraddle:
    """Tests for the long straddle."""

    def test_straddle_scenario(self, quotes):
        """Test straddle at 22200 against known quotes."""
        result = straddle(22200, quotes)

        assert result.cost == 176
        assert result.max_risk == 176
        assert result.breakevens == (22024, 22376)
        assert result.credit is None
        assert result.breakeven is None

    def test_straddle_profit_is_unlimited(self, quotes):
        """Test that straddle max profit is infinite."""
        result = straddle(22200, quotes)

        assert math.isinf(result.max_profit)
        assert result.is_unlimited_profit

    def test_straddle_breakevens_bracket_strike(self, quotes):
        """Test breakevens equal strike plus/minus cost at every strike."""
        for strike in quotes.strikes():
            quote = quotes.quote(strike)
            cost = quote.call.ask + quote.put.ask
            result = straddle(strike, quotes)

            assert result.cost == pytest.approx(cost)
            assert result.breakevens == pytest.approx((strike - cost, strike + cost))

    def test_straddle_missing_strike(self, quotes):
        """Test straddle with a strike absent from the table."""
        with pytest.raises(MissingStrikeError) as exc_info:
            straddle(21900, quotes)

        assert exc_info.value.strike == 21900


class TestStrangle:
    """Tests for the long strangle."""

    def test_strangle_scenario(self, quotes):
        """Test strangle 22000/22400 against known quotes."""
        result = strangle(22000, 22400, quotes)

        assert result.cost == 80.5
        assert result.max_risk == 80.5
        assert result.breakevens == (21919.5, 22480.5)
        assert result.is_unlimited_profit

    def test_strangle_uses_put_ask_and_call_ask(self):
        """Test that strangle buys the put at the lower strike and the call at the upper."""
        table = make_table([
            (95, 9.0, 10.0, 1.0, 2.0),
            (105, 3.0, 4.0, 8.0, 9.0),
        ])

        result = strangle(95, 105, table)

        assert result.cost == 6.0
        assert result.breakevens == (89.0, 111.0)

    def test_strangle_missing_call_strike(self, quotes):
        """Test strangle when only the call strike is missing."""
        with pytest.raises(MissingStrikeError) as exc_info:
            strangle(22000, 22500, quotes)

        assert exc_info.value.strike == 22500


class TestVerticalSpreads:
    """Tests for bull call and bear put spreads."""

    def test_bull_call_spread_scenario(self, quotes):
        """Test bull call spread 22200/22400 against known quotes."""
        result = bull_call_spread(22200, 22400, quotes)

        assert result.cost == 77.5
        assert result.max_risk == 77.5
        assert result.max_profit == 122.5
        assert result.breakeven == 22277.5
        assert result.breakevens is None

    def test_bull_call_spread_risk_plus_reward_equals_width(self):
        """Test max risk + max profit equals the strike width for varied quotes."""
        test_cases = [
            (100, 105, 3.2, 1.1),
            (100, 110, 6.0, 0.5),
            (50, 52.5, 1.0, 1.5),  # inverted market, net credit
            (200, 250, 0.0, 0.0),
        ]

        for low, high, low_ask, high_bid in test_cases:
            table = make_table([
                (low, 0.0, low_ask, 0.0, 0.0),
                (high, high_bid, 0.0, 0.0, 0.0),
            ])
            result = bull_call_spread(low, high, table)
            assert result.max_risk + result.max_profit == pytest.approx(high - low)

    def test_bear_put_spread(self, quotes):
        """Test bear put spread 22200/22000 against known quotes."""
        result = bear_put_spread(22200, 22000, quotes)

        assert result.cost == 38
        assert result.max_risk == 38
        assert result.max_profit == 162
        assert result.breakeven == 22162

    def test_bear_put_spread_risk_plus_reward_equals_width(self):
        """Test max risk + max profit equals the strike width for varied quotes."""
        test_cases = [
            (105, 100, 3.4, 1.3),
            (110, 100, 7.75, 2.25),
            (52.5, 50, 0.5, 2.0),
        ]

        for high, low, high_ask, low_bid in test_cases:
            table = make_table([
                (high, 0.0, 0.0, 0.0, high_ask),
                (low, 0.0, 0.0, low_bid, 0.0),
            ])
            result = bear_put_spread(high, low, table)
            assert result.max_risk + result.max_profit == pytest.approx(high - low)

    def test_inverted_strikes_are_not_rejected(self, quotes):
        """Test that strike ordering is left to the caller."""
        result = bull_call_spread(22400, 22200, quotes)

        # Buys the 22400 call at 22.5, sells the 22200 call at 75
        assert result.cost == -52.5
        assert result.max_profit == -147.5


class TestIronCondor:
    """Tests for the iron condor."""

    def test_iron_condor_metrics(self):
        """Test credit, risk and breakevens of a standard condor."""
        table = make_table([
            (100, 0.0, 0.0, 0.0, 1.0),
            (105, 0.0, 0.0, 3.0, 0.0),
            (115, 2.5, 0.0, 0.0, 0.0),
            (120, 0.0, 1.0, 0.0, 0.0),
        ])

        result = iron_condor(100, 105, 115, 120, table)

        assert result.credit == 3.5
        assert result.max_profit == 3.5
        assert result.max_risk == 3.5  # call wing: 5 - 1.5
        assert result.breakevens == (101.5, 118.5)
        assert result.cost is None
        assert result.is_credit

    def test_iron_condor_with_sample_quotes(self, quotes):
        """Test condor on the sample table, where the put wing is a net debit."""
        result = iron_condor(22000, 22100, 22300, 22400, quotes)

        assert result.credit == -22.5
        assert result.max_risk == 127
        assert result.breakevens == (22122.5, 22277.5)

    def _symmetric_condor(self, wing_credit):
        # 5-point wings, each collecting wing_credit
        return make_table([
            (100, 0.0, 0.0, 0.0, 1.0),
            (105, 0.0, 0.0, 1.0 + wing_credit, 0.0),
            (115, 1.0 + wing_credit, 0.0, 0.0, 0.0),
            (120, 0.0, 1.0, 0.0, 0.0),
        ])

    def test_iron_condor_risk_credit_below_width(self):
        """Test max risk is positive when credit is below wing width."""
        result = iron_condor(100, 105, 115, 120, self._symmetric_condor(2.0))

        assert result.max_risk == 3.0
        assert result.max_risk >= 0

    def test_iron_condor_risk_credit_equal_to_width(self):
        """Test max risk is zero when each wing's credit equals its width."""
        result = iron_condor(100, 105, 115, 120, self._symmetric_condor(5.0))

        assert result.max_risk == 0
        assert result.credit == 10.0

    def test_iron_condor_risk_credit_above_width(self):
        """Test max risk goes negative when credit exceeds wing width."""
        result = iron_condor(100, 105, 115, 120, self._symmetric_condor(6.0))

        assert result.max_risk == -1.0

    def test_iron_condor_missing_strike(self, quotes):
        """Test condor with a missing long call strike."""
        with pytest.raises(MissingStrikeError):
            iron_condor(22000, 22100, 22300, 22500, quotes)


class TestButterfly:
    """Tests for the long call butterfly."""

    def test_butterfly_metrics(self, quotes):
        """Test butterfly 22000/22100/22200 against known quotes."""
        result = butterfly(22000, 22100, 22200, quotes)

        assert result.cost == 49  # 143 + 98 - 2 * 96
        assert result.max_risk == 49
        assert result.max_profit == 51
        assert result.breakevens == (22049, 22151)

    def test_butterfly_width_uses_lower_wing(self):
        """Test that an asymmetric butterfly measures profit against the lower wing."""
        table = make_table([
            (100, 0.0, 6.0, 0.0, 0.0),
            (105, 3.0, 0.0, 0.0, 0.0),
            (115, 0.0, 1.0, 0.0, 0.0),
        ])

        result = butterfly(100, 105, 115, table)

        assert result.cost == 1.0
        assert result.max_profit == 4.0  # (105 - 100) - 1, not (115 - 100) - 1
        assert result.breakevens == (101.0, 114.0)

    def test_butterfly_missing_mid_strike(self, quotes):
        """Test butterfly with a missing body strike."""
        with pytest.raises(MissingStrikeError) as exc_info:
            butterfly(22000, 22050, 22100, quotes)

        assert exc_info.value.strike == 22050


class TestStrategyCalculator:
    """Tests for running strategies through StrategyCalculator."""

    def test_calculate_single_strategy(self, quotes, strategy_inputs):
        """Test calculating one strategy by name."""
        calculator = StrategyCalculator()

        result = calculator.calculate('straddle', strategy_inputs, quotes)

        assert result == straddle(22200, quotes)

    def test_calculate_unknown_strategy(self, quotes, strategy_inputs):
        """Test that an unknown strategy name is rejected."""
        calculator = StrategyCalculator()

        with pytest.raises(ValueError, match="Unknown strategy"):
            calculator.calculate('collar', strategy_inputs, quotes)

    def test_calculate_all_success(self, quotes, strategy_inputs):
        """Test that all six strategies are calculated."""
        calculator = StrategyCalculator()

        summary = calculator.calculate_all(strategy_inputs, quotes)

        assert [o.name for o in summary.outcomes] == STRATEGY_NAMES
        assert summary.successful == 6
        assert summary.failed == 0
        assert summary.errors == {}
        assert summary.results['bull_call_spread'].breakeven == 22277.5

    def test_calculate_all_isolates_missing_strike(self, quotes, strategy_inputs):
        """Test that one missing strike fails only its own strategy."""
        strategy_inputs.strangle_put_strike = 21900
        calculator = StrategyCalculator()

        summary = calculator.calculate_all(strategy_inputs, quotes)

        assert summary.successful == 5
        assert summary.failed == 1
        assert 'strangle' not in summary.results
        assert "21900" in summary.errors['strangle']
        assert "check that strikes exist" in summary.errors['strangle']

    def test_calculate_all_subset(self, quotes, strategy_inputs):
        """Test calculating a subset of strategies."""
        calculator = StrategyCalculator()

        summary = calculator.calculate_all(strategy_inputs, quotes, ['butterfly', 'straddle'])

        assert [o.name for o in summary.outcomes] == ['butterfly', 'straddle']

    def test_calculate_all_empty_selection(self, quotes, strategy_inputs):
        """Test that an explicitly empty selection calculates nothing."""
        calculator = StrategyCalculator()

        summary = calculator.calculate_all(strategy_inputs, quotes, [])

        assert summary.outcomes == []
        assert summary.successful == 0
        assert summary.failed == 0

    def test_calculate_all_logs_results(self, quotes, strategy_inputs):
        """Test that results and the summary are logged."""
        from unittest.mock import Mock
        logger = Mock()
        strategy_inputs.butterfly_mid_strike = 22050
        calculator = StrategyCalculator(logger=logger)

        summary = calculator.calculate_all(strategy_inputs, quotes)

        assert logger.log_strategy_result.call_count == 5
        logger.log_warning.assert_called_once()
        logger.log_calculation_summary.assert_called_once_with(summary)
