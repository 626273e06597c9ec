"""Quote editing and interactive session."""
from .quote_editor import QuoteEditor, EDITABLE_FIELDS
from .session import CalculatorSession

__all__ = ['QuoteEditor', 'EDITABLE_FIELDS', 'CalculatorSession']
