"""Month calendar panel with daily earnings under each date."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import flet as ft

from ...services.calendar_view import WEEKDAY_LABELS, CalendarCell
from ...services.formatting import format_compact_amount, format_month_title
from .. import controllers

if TYPE_CHECKING:
    from ...services.service_log import DashboardData
    from ..context import AppContext

CELL_SIZE = 56


def _blank_cell() -> ft.Container:
    return ft.Container(width=CELL_SIZE, height=CELL_SIZE, data=None)


def _day_cell(ctx: AppContext, page: ft.Page, cell: CalendarCell, data: DashboardData) -> ft.Container:
    is_selected = cell.date == data.selected_date
    is_today = cell.date == data.today
    has_earnings = cell.earnings_total > 0

    label_color = ft.Colors.BLACK if is_selected else ft.Colors.ON_SURFACE
    lines: list[ft.Control] = [
        ft.Text(
            str(cell.date.day),
            size=14,
            color=label_color,
            weight=ft.FontWeight.BOLD if is_selected else None,
        )
    ]
    if has_earnings:
        lines.append(
            ft.Text(
                format_compact_amount(cell.earnings_total),
                size=10,
                color=ft.Colors.GREEN_400 if not is_selected else ft.Colors.GREEN_900,
                weight=ft.FontWeight.BOLD,
            )
        )

    if is_selected:
        bgcolor: Optional[str] = ft.Colors.WHITE
    elif has_earnings:
        bgcolor = ft.Colors.with_opacity(0.05, ft.Colors.WHITE)
    else:
        bgcolor = None

    return ft.Container(
        content=ft.Column(
            lines,
            spacing=2,
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        width=CELL_SIZE,
        height=CELL_SIZE,
        border_radius=8,
        bgcolor=bgcolor,
        border=ft.border.all(2, ft.Colors.WHITE) if is_today and not is_selected else None,
        data=cell.date,
        ink=True,
        on_click=lambda _e, day=cell.date: controllers.select_date(ctx, page, day),
    )


def build_calendar_panel(ctx: AppContext, page: ft.Page, data: DashboardData) -> ft.Card:
    """Month header with navigation, weekday labels and the day grid."""

    header = ft.Row(
        [
            ft.IconButton(
                icon=ft.Icons.CHEVRON_LEFT,
                tooltip="Mes anterior",
                on_click=lambda _e: controllers.show_previous_month(ctx, page),
            ),
            ft.Text(
                format_month_title(*data.displayed_month),
                size=18,
                weight=ft.FontWeight.BOLD,
            ),
            ft.IconButton(
                icon=ft.Icons.CHEVRON_RIGHT,
                tooltip="Mes siguiente",
                on_click=lambda _e: controllers.show_next_month(ctx, page),
            ),
        ],
        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
    )

    weekday_row = ft.Row(
        [
            ft.Container(
                content=ft.Text(label, size=12, color=ft.Colors.ON_SURFACE_VARIANT),
                width=CELL_SIZE,
                alignment=ft.alignment.center,
            )
            for label in WEEKDAY_LABELS
        ],
        spacing=4,
    )

    cells = [
        _blank_cell() if cell is None else _day_cell(ctx, page, cell, data)
        for cell in data.grid
    ]
    grid = ft.Row(cells, wrap=True, spacing=4, run_spacing=4, width=(CELL_SIZE + 4) * 7)

    return ft.Card(
        content=ft.Container(
            content=ft.Column([header, weekday_row, grid], spacing=8),
            padding=16,
        ),
        elevation=2,
    )
