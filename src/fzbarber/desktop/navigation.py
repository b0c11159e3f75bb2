"""Navigation and routing for Flet desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import flet as ft

if TYPE_CHECKING:
    from .context import AppContext

from ..devtools import dev_log
from ..logging_config import get_logger
from .components.dialogs import show_error_dialog

logger = get_logger(__name__)

ViewBuilder = Callable[["AppContext", ft.Page], ft.View]

PUBLIC_ROUTES = {"/login"}
DEFAULT_ROUTE = "/dashboard"


class Router:
    """Maps routes to view builders and gates everything but login on a session."""

    def __init__(self, page: ft.Page, context: AppContext):
        self.page = page
        self.context = context
        self.routes: Dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        logger.debug(f"Registering route: {route}")
        self.routes[route] = builder

    def resolve(self, route: str | None) -> str:
        """Return the route that will actually be shown for ``route``."""

        route = route or "/"
        if route not in PUBLIC_ROUTES and self.context.current_identity() is None:
            return "/login"
        if route not in self.routes:
            return DEFAULT_ROUTE
        return route

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        """Handle route change events."""
        requested = e.route or "/"
        route = self.resolve(requested)
        logger.info(
            f"Route change requested: {requested}",
            extra={"resolved": route, "user": getattr(self.context.current_user, "username", None)},
        )
        if route != requested:
            if route == "/login":
                logger.warning("Route blocked - user not logged in")
            self.page.go(route)
            return

        builder = self.routes.get(route)
        if builder is None:
            logger.error(f"No builder found for route: {route}")
            return

        try:
            view = builder(self.context, self.page)
            if self.page.views:
                self.page.views[-1] = view
            else:
                self.page.views.append(view)
            self.page.update()
        except Exception as ex:
            logger.error(f"Failed to build view for route {route}: {ex}", exc_info=True)
            dev_log(self.context.config, "Route load failed", exc=ex, context={"route": route})
            show_error_dialog(self.page, "Error", f"Error al cargar la vista: {ex}")

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Handle back button navigation."""
        if len(self.page.views) > 1:
            self.page.views.pop()
        self.page.go(self.page.views[-1].route)
