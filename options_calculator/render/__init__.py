"""Result rendering."""
from .result_renderer import render_result, render_summary, format_points, UNLIMITED

__all__ = ['render_result', 'render_summary', 'format_points', 'UNLIMITED']
