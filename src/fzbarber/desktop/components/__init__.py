"""Reusable UI components for the desktop app."""

from .dialogs import safe_open_dialog, show_confirm_dialog, show_error_dialog, show_snack
from .layout import build_app_bar, build_main_layout
from .widgets import build_record_row, build_stat_card, empty_state

__all__ = [
    "build_app_bar",
    "build_main_layout",
    "safe_open_dialog",
    "show_error_dialog",
    "show_confirm_dialog",
    "show_snack",
    "build_record_row",
    "build_stat_card",
    "empty_state",
]
