"""Main Flet desktop application entry point."""

from __future__ import annotations

import flet as ft

from ..devtools import dev_log
from ..logging_config import session_log_path, setup_logging
from ..scheduler import create_scheduler
from . import controllers
from .context import AppContext, create_app_context
from .navigation import Router
from .views.auth import build_auth_view
from .views.dashboard import build_dashboard_view

ROUTE_BUILDERS = {
    "/login": build_auth_view,
    "/dashboard": build_dashboard_view,
}


def build_router(ctx: AppContext, page: ft.Page) -> Router:
    router = Router(page, ctx)
    for route, builder in ROUTE_BUILDERS.items():
        router.register(route, builder)
    return router


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    ctx = create_app_context()
    logger = setup_logging(ctx.config)
    logger.info("fzbarber desktop application starting", extra={"timezone": ctx.config.TIMEZONE})

    ctx.page = page
    page.title = f"{ctx.config.APP_NAME} (DEV)" if ctx.dev_mode else ctx.config.APP_NAME
    page.theme_mode = ft.ThemeMode.DARK
    page.padding = 0
    page.window_width = 1280
    page.window_height = 860
    page.window_min_width = 1024
    page.window_min_height = 640
    if ctx.dev_mode:
        dev_log(ctx.config, "Dev mode enabled", context={"data_dir": ctx.config.DATA_DIR})

    def _on_tick(_now) -> None:
        # Scheduler thread; Flet accepts page updates from background threads.
        # Only the dashboard shows time-dependent figures
        if ctx.current_user is not None and page.route == "/dashboard":
            controllers.rerender(page)

    scheduler = create_scheduler(ctx, on_tick=_on_tick, auto_start=True)

    def on_page_close(_e):
        logger.info("Application closing, shutting down scheduler")
        scheduler.stop()
        slp = session_log_path()
        if slp:
            logger.info(f"Debug session log saved to: {slp}")

    page.on_close = on_page_close

    router = build_router(ctx, page)
    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop

    def _on_error(e: ft.ControlEvent):  # pragma: no cover (UI callback)
        msg = getattr(e, "data", None) or "<no-data>"
        logger.error("Flet page error", extra={"event": "error", "data": msg})
        controllers.show_snack(page, f"Error de interfaz: {msg}")

    page.on_error = _on_error

    def handle_shortcuts(e: ft.KeyboardEvent):
        controllers.handle_shortcut(ctx, page, e.key, e.ctrl)

    page.on_keyboard_event = handle_shortcuts

    page.go("/login")


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
