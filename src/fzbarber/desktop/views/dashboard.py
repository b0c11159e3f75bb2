"""Dashboard view implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...constants.services import SERVICE_CATALOG, ServiceType
from ...services.formatting import format_count, format_currency, format_long_date
from ...services.service_log import build_dashboard_data
from .. import controllers
from ..components import build_app_bar, build_main_layout, build_record_row, build_stat_card, empty_state
from .calendar import build_calendar_panel

if TYPE_CHECKING:
    from ..context import AppContext

FOOTER = "© fzbarber - Sistema de Control de Ganancias"


def _quick_add_button(ctx: AppContext, page: ft.Page, service: ServiceType) -> ft.Container:
    return ft.Container(
        content=ft.Row(
            [
                ft.Text(service.icon, size=22),
                ft.Column(
                    [
                        ft.Text(service.name, size=13, weight=ft.FontWeight.W_600),
                        ft.Text(format_currency(service.price), size=16, weight=ft.FontWeight.BOLD),
                    ],
                    spacing=2,
                    expand=True,
                ),
            ],
            spacing=12,
        ),
        padding=14,
        border_radius=12,
        border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        ink=True,
        data=service.name,
        on_click=lambda _e, svc=service: controllers.add_service(ctx, page, svc),
    )


def _record_list(ctx: AppContext, page: ft.Page, records, empty_message: str) -> ft.Control:
    if not records:
        return empty_state(empty_message)
    return ft.Column(
        [
            build_record_row(
                record,
                tz=ctx.tz,
                on_delete=lambda rec: controllers.request_delete(ctx, page, rec),
            )
            for record in records
        ],
        spacing=0,
    )


def build_dashboard_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the dashboard view."""

    ctx.require_user_id()
    data = build_dashboard_data(
        ctx.records,
        now=ctx.now,
        displayed_month=ctx.displayed_month,
        selected_date=ctx.selected_date,
        tz=ctx.tz,
    )

    stat_cards = ft.ResponsiveRow(
        controls=[
            ft.Container(
                content=build_stat_card("Hoy", data.windows.today, icon=ft.Icons.ATTACH_MONEY),
                col={"sm": 12, "md": 6, "lg": 3},
            ),
            ft.Container(
                content=build_stat_card("Esta Semana", data.windows.week, icon=ft.Icons.TRENDING_UP),
                col={"sm": 12, "md": 6, "lg": 3},
            ),
            ft.Container(
                content=build_stat_card("Este Mes", data.windows.month, icon=ft.Icons.CALENDAR_MONTH),
                col={"sm": 12, "md": 6, "lg": 3},
            ),
            ft.Container(
                content=build_stat_card("Este Año", data.windows.year, icon=ft.Icons.GROUPS),
                col={"sm": 12, "md": 6, "lg": 3},
            ),
        ],
        spacing=16,
        run_spacing=16,
    )

    selected_panel = ft.Card(
        content=ft.Container(
            content=ft.Column(
                [
                    ft.Text(
                        format_long_date(data.selected_date, with_weekday=False),
                        size=20,
                        weight=ft.FontWeight.BOLD,
                        text_align=ft.TextAlign.CENTER,
                    ),
                    ft.Text("Total del día", size=12, color=ft.Colors.ON_SURFACE_VARIANT),
                    ft.Text(
                        format_currency(data.selected_totals.total),
                        size=28,
                        weight=ft.FontWeight.BOLD,
                    ),
                    ft.Text(
                        format_count(data.selected_totals.count),
                        size=12,
                        color=ft.Colors.ON_SURFACE_VARIANT,
                    ),
                    ft.Divider(height=1),
                    _record_list(ctx, page, data.selected_records, "No hay servicios registrados"),
                ],
                spacing=6,
            ),
            padding=16,
        ),
        elevation=2,
    )

    quick_add = ft.Card(
        content=ft.Container(
            content=ft.Column(
                [
                    ft.Text("Registrar Servicio", size=20, weight=ft.FontWeight.BOLD),
                    *[_quick_add_button(ctx, page, service) for service in SERVICE_CATALOG],
                ],
                spacing=10,
            ),
            padding=16,
        ),
        elevation=2,
    )

    middle_row = ft.ResponsiveRow(
        controls=[
            ft.Container(content=build_calendar_panel(ctx, page, data), col={"sm": 12, "lg": 4}),
            ft.Container(content=selected_panel, col={"sm": 12, "lg": 4}),
            ft.Container(content=quick_add, col={"sm": 12, "lg": 4}),
        ],
        spacing=16,
        run_spacing=16,
    )

    todays_card = ft.Card(
        content=ft.Container(
            content=ft.Column(
                [
                    ft.Text("Servicios de Hoy", size=20, weight=ft.FontWeight.BOLD),
                    _record_list(ctx, page, data.todays_records, "No hay servicios registrados hoy"),
                ],
                spacing=8,
            ),
            padding=16,
        ),
        elevation=2,
    )

    content = ft.Column(
        controls=[
            stat_cards,
            ft.Container(height=16),
            middle_row,
            ft.Container(height=16),
            todays_card,
        ],
        spacing=0,
    )

    return ft.View(
        route="/dashboard",
        appbar=build_app_bar(ctx, ctx.config.APP_NAME, page),
        controls=build_main_layout(content, footer=FOOTER),
        padding=0,
    )
