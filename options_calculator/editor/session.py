"""Interactive calculator session with debounced recalculation."""
from typing import TYPE_CHECKING, Callable, List, Optional

from options_calculator.strategy.models import QuoteRow, StrategyInputs
from options_calculator.strategy.strategy_calculator import CalculationSummary, StrategyCalculator
from options_calculator.utils.debounce import Debouncer
from .quote_editor import QuoteEditor

if TYPE_CHECKING:
    from options_calculator.logging.calc_logger import CalcLogger


class CalculatorSession:
    """Recalculates every strategy as the user edits quotes or strikes.

    Edits are coalesced: a burst of changes within ``debounce_ms`` produces a
    single recalculation.
    """

    def __init__(self, inputs: StrategyInputs, rows: Optional[List[QuoteRow]] = None,
                 debounce_ms: int = 300, logger: Optional['CalcLogger'] = None):
        """Initialize the CalculatorSession.

        Args:
            inputs: Initial strike selections
            rows: Initial quote rows
            debounce_ms: Delay collapsing rapid edits into one recalculation
            logger: Optional logger instance
        """
        self.inputs = inputs
        self.logger = logger
        self.editor = QuoteEditor(rows)
        self.calculator = StrategyCalculator(logger=logger)
        self.last_summary: Optional[CalculationSummary] = None
        self._listeners: List[Callable[[CalculationSummary], None]] = []
        self._debouncer = Debouncer(self.recalculate, delay_ms=debounce_ms)
        self.editor.on_change(lambda rows: self.schedule_recalculation())

    def on_result(self, listener: Callable[[CalculationSummary], None]):
        """Register a listener called with each new CalculationSummary."""
        self._listeners.append(listener)

    def set_inputs(self, inputs: StrategyInputs):
        """Replace the strike selections and schedule a recalculation."""
        self.inputs = inputs
        self.schedule_recalculation()

    def schedule_recalculation(self):
        self._debouncer()

    def flush(self) -> bool:
        """Run a scheduled recalculation immediately.

        Returns:
            True if a recalculation was pending
        """
        return self._debouncer.flush()

    def close(self):
        """Drop any scheduled recalculation."""
        self._debouncer.cancel()

    def recalculate(self) -> CalculationSummary:
        """Recalculate all strategies against the current rows.

        Returns:
            CalculationSummary of the run
        """
        quotes = self.editor.to_quote_table()
        summary = self.calculator.calculate_all(self.inputs, quotes)
        self.last_summary = summary
        for listener in self._listeners:
            listener(summary)
        return summary
