"""Editable quote table rows."""
from dataclasses import replace
from typing import Callable, List, Optional

from options_calculator.strategy.models import BidAsk, QuoteRow, QuoteTable

EDITABLE_FIELDS = ['strike', 'call.bid', 'call.ask', 'put.bid', 'put.ask']


def parse_number(value) -> float:
    """Parse a cell value, treating anything unparseable as zero."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class QuoteEditor:
    """Holds the quote rows a user edits and builds quote tables from them."""

    def __init__(self, rows: Optional[List[QuoteRow]] = None):
        """Initialize the QuoteEditor.

        Args:
            rows: Initial quote rows
        """
        self._rows: List[QuoteRow] = list(rows or [])
        self._listeners: List[Callable[[List[QuoteRow]], None]] = []

    @property
    def rows(self) -> List[QuoteRow]:
        return list(self._rows)

    def on_change(self, listener: Callable[[List[QuoteRow]], None]):
        """Register a listener called with the new rows after every change."""
        self._listeners.append(listener)

    def _set_rows(self, rows: List[QuoteRow]):
        self._rows = rows
        for listener in self._listeners:
            listener(self.rows)

    def add_row(self) -> QuoteRow:
        """Append an all-zero row.

        Returns:
            The new row; its id is one more than the largest existing id
        """
        new_id = max(row.id for row in self._rows) + 1 if self._rows else 1
        row = QuoteRow(
            id=new_id,
            strike=0.0,
            call=BidAsk(bid=0.0, ask=0.0),
            put=BidAsk(bid=0.0, ask=0.0),
        )
        self._set_rows(self._rows + [row])
        return row

    def delete_row(self, row_id: int):
        """Remove the row with the given id."""
        self._set_rows([row for row in self._rows if row.id != row_id])

    def update_field(self, row_id: int, field: str, value):
        """Set one cell of a row.

        Args:
            row_id: Id of the row to update; unknown ids are ignored
            field: One of EDITABLE_FIELDS, e.g. ``call.bid``
            value: Raw cell value; unparseable input becomes 0

        Raises:
            ValueError: If the field is not editable
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown field '{field}'. Must be one of {EDITABLE_FIELDS}")

        number = parse_number(value)
        updated = []
        for row in self._rows:
            if row.id == row_id:
                if field == 'strike':
                    row = replace(row, strike=number)
                else:
                    side, price = field.split('.')
                    prices = replace(getattr(row, side), **{price: number})
                    row = replace(row, **{side: prices})
            updated.append(row)
        self._set_rows(updated)

    def to_quote_table(self) -> QuoteTable:
        """Build a QuoteTable from the current rows.

        When two rows share a strike the later row wins.
        """
        return QuoteTable({row.strike: row.to_strike_quote() for row in self._rows})
