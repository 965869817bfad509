"""
TUI - Optional Textual interface (install with `pip install todoflow[tui]`).
"""

from .app import TEXTUAL_AVAILABLE, check_textual_available, next_filter, run_tui

__all__ = ["TEXTUAL_AVAILABLE", "check_textual_available", "next_filter", "run_tui"]
