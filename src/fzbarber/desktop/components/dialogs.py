"""Dialog and snack bar helpers for the desktop app."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft


def _safe_update(page: ft.Page) -> None:
    try:
        page.update()
    except AssertionError:
        # Headless contexts may not attach controls to a live page
        pass


def show_snack(page: ft.Page, message: str) -> None:
    """Display a snack bar message."""

    page.snack_bar = ft.SnackBar(content=ft.Text(message))
    page.snack_bar.open = True
    _safe_update(page)


def safe_open_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    page.dialog = dialog
    dialog.open = True
    _safe_update(page)


def show_error_dialog(page: ft.Page, title: str, message: str) -> None:
    """Show a modal error with a single dismiss button."""

    def close_dialog(_e):
        dialog.open = False
        _safe_update(page)

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[ft.TextButton("OK", on_click=close_dialog)],
    )
    safe_open_dialog(page, dialog)


def show_confirm_dialog(
    page: ft.Page,
    title: str,
    message: str,
    on_confirm: Callable[[], None],
    on_cancel: Optional[Callable[[], None]] = None,
    *,
    confirm_label: str = "Eliminar",
    cancel_label: str = "Cancelar",
) -> ft.AlertDialog:
    """Ask before a destructive action; returns the opened dialog."""

    def handle_confirm(_e):
        dialog.open = False
        _safe_update(page)
        on_confirm()

    def handle_cancel(_e):
        dialog.open = False
        _safe_update(page)
        if on_cancel:
            on_cancel()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[
            ft.TextButton(cancel_label, on_click=handle_cancel),
            ft.FilledButton(confirm_label, on_click=handle_confirm),
        ],
    )
    safe_open_dialog(page, dialog)
    return dialog
