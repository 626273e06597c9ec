"""Text rendering of strategy results."""
import math
from typing import List, Tuple

from options_calculator.strategy.models import StrategyResult
from options_calculator.strategy.strategy_calculator import CalculationSummary

UNLIMITED = "Unlimited"

STRATEGY_TITLES = {
    'straddle': 'Long Straddle',
    'strangle': 'Long Strangle',
    'bull_call_spread': 'Bull Call Spread',
    'bear_put_spread': 'Bear Put Spread',
    'iron_condor': 'Iron Condor',
    'butterfly': 'Butterfly',
}


def format_points(value: float) -> str:
    """Format a price-point value, dropping trailing zeros."""
    if math.isinf(value):
        return UNLIMITED if value > 0 else "-" + UNLIMITED
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return "0" if text == "-0" else text


def render_result(result: StrategyResult) -> List[Tuple[str, str]]:
    """Render a result as (label, value) display lines.

    Cost is shown for debit strategies and credit for credit strategies.
    Breakevens are omitted when the result has none.
    """
    lines = []
    if result.cost is not None:
        lines.append(("Net Cost", f"{format_points(result.cost)} pts"))
    elif result.credit is not None:
        lines.append(("Net Credit", f"{format_points(result.credit)} pts"))

    lines.append(("Max Risk", f"{format_points(result.max_risk)} pts"))

    if result.is_unlimited_profit:
        lines.append(("Max Profit", UNLIMITED))
    else:
        lines.append(("Max Profit", f"{format_points(result.max_profit)} pts"))

    points = result.breakeven_points
    if points:
        lines.append(("Breakeven", " / ".join(format_points(p) for p in points)))

    return lines


def render_summary(summary: CalculationSummary) -> str:
    """Render every outcome of a calculation run as plain text."""
    blocks = []
    for outcome in summary.outcomes:
        title = STRATEGY_TITLES.get(outcome.name, outcome.name)
        block = [title, "-" * len(title)]
        if outcome.success:
            lines = render_result(outcome.result)
            width = max(len(label) for label, _ in lines)
            for label, value in lines:
                block.append(f"  {label:<{width}}  {value}")
        else:
            block.append(f"  Error: {outcome.error_message}")
        blocks.append("\n".join(block))
    return "\n\n".join(blocks)
