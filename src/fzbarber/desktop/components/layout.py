"""Layout components for the desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import flet as ft

if TYPE_CHECKING:
    from ..context import AppContext

from .. import controllers
from ...services.formatting import format_long_date


def build_app_bar(ctx: AppContext, title: str, page: ft.Page) -> ft.AppBar:
    """App bar with today's date, the signed-in operator and sign-out."""

    def _refresh(_e):
        controllers.reload_records(ctx, page)
        controllers.navigate(page, getattr(page, "route", None) or "/dashboard")

    actions: List[ft.Control] = [
        ft.Text(format_long_date(ctx.today()), color=ft.Colors.ON_SURFACE_VARIANT),
        ft.IconButton(
            icon=ft.Icons.REFRESH,
            tooltip="Recargar (Ctrl+R)",
            on_click=_refresh,
        ),
    ]
    if ctx.current_user:
        actions.extend([
            ft.Chip(
                label=ft.Text(ctx.current_user.username),
                leading=ft.Icon(ft.Icons.PERSON),
            ),
            ft.IconButton(
                icon=ft.Icons.LOGOUT,
                tooltip="Cerrar sesión",
                on_click=lambda _e: controllers.sign_out(ctx, page),
            ),
        ])

    return ft.AppBar(
        leading=ft.Icon(ft.Icons.CONTENT_CUT),
        title=ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
        center_title=False,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=actions,
    )


def build_main_layout(content: ft.Control, footer: str | None = None) -> List[ft.Control]:
    """Full-width scrolling body with an optional footer line."""

    controls: List[ft.Control] = [ft.Container(content=content, expand=True, padding=20)]
    if footer:
        controls.append(
            ft.Container(
                content=ft.Text(footer, size=12, color=ft.Colors.ON_SURFACE_VARIANT),
                alignment=ft.alignment.center,
                padding=ft.padding.only(bottom=12),
            )
        )
    return [ft.Column(controls, spacing=0, expand=True, scroll=ft.ScrollMode.AUTO)]
