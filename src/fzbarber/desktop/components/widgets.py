"""Reusable widget components for the desktop app."""

from __future__ import annotations

from datetime import tzinfo
from typing import Callable, Optional

import flet as ft

from ...models.service_record import ServiceRecord
from ...services.earnings import Totals
from ...services.formatting import format_count, format_currency, format_time


def build_stat_card(
    label: str,
    totals: Totals,
    icon: Optional[str] = None,
    color: Optional[str] = None,
) -> ft.Card:
    """Earnings figure with its service count underneath."""

    column = ft.Column(
        [
            ft.Text(label, size=14, color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Text(
                format_currency(totals.total),
                size=28,
                weight=ft.FontWeight.BOLD,
                color=color,
            ),
            ft.Text(format_count(totals.count), size=12, color=ft.Colors.ON_SURFACE_VARIANT),
        ],
        spacing=4,
        horizontal_alignment=ft.CrossAxisAlignment.START,
    )
    content: ft.Control = column
    if icon:
        content = ft.Row(
            [ft.Icon(icon, size=36, color=color or ft.Colors.PRIMARY), ft.Container(width=12), column],
            alignment=ft.MainAxisAlignment.START,
        )

    return ft.Card(content=ft.Container(content=content, padding=20), elevation=2)


def build_record_row(
    record: ServiceRecord,
    *,
    tz: Optional[tzinfo] = None,
    on_delete: Optional[Callable[[ServiceRecord], None]] = None,
) -> ft.Container:
    """One logged service: name and time on the left, price and delete on the right."""

    trailing: list[ft.Control] = [
        ft.Text(format_currency(record.price), weight=ft.FontWeight.BOLD),
    ]
    if on_delete is not None:
        trailing.append(
            ft.IconButton(
                icon=ft.Icons.DELETE_OUTLINE,
                icon_color=ft.Colors.RED_300,
                tooltip="Eliminar servicio",
                data=record.id,
                on_click=lambda _e, rec=record: on_delete(rec),
            )
        )

    return ft.Container(
        content=ft.Row(
            [
                ft.Column(
                    [
                        ft.Text(record.name, weight=ft.FontWeight.W_500),
                        ft.Text(
                            format_time(record.timestamp, tz),
                            size=12,
                            color=ft.Colors.ON_SURFACE_VARIANT,
                        ),
                    ],
                    spacing=2,
                    expand=True,
                ),
                ft.Row(trailing, spacing=8),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        ),
        padding=10,
        border=ft.border.only(bottom=ft.border.BorderSide(1, ft.Colors.OUTLINE_VARIANT)),
    )


def empty_state(message: str) -> ft.Container:
    """Simple empty-state placeholder."""

    return ft.Container(
        content=ft.Column(
            [
                ft.Icon(ft.Icons.INBOX, size=40, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        padding=20,
    )
