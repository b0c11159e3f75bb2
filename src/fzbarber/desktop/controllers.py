"""Controller helpers for desktop navigation and primary actions.

Every store call happens here. On failure the in-memory snapshot is left as
it was and the operator gets a snack bar; nothing is retried.
"""

from __future__ import annotations

import threading
from datetime import date
from typing import TYPE_CHECKING, Callable, Optional

import flet as ft
from sqlalchemy.exc import SQLAlchemyError

from ..constants.services import ServiceType
from ..devtools import dev_log
from ..domain.repositories.service_record import DeleteOutcome
from ..logging_config import get_logger
from ..models.service_record import ServiceRecord
from ..services import auth, service_log
from ..services.calendar_view import YearMonth, next_month, previous_month
from .components.dialogs import show_confirm_dialog, show_snack

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)

_RENDER_LOCK = threading.RLock()

DELETE_FAILED_MESSAGE = "Error al eliminar el servicio. Inténtalo de nuevo."
ADD_FAILED_MESSAGE = "Error al registrar el servicio. Inténtalo de nuevo."
LOAD_FAILED_MESSAGE = "Error al cargar los servicios."

# (ctrl, key) -> action name
SHORTCUTS = {
    (True, "R"): "reload",
    (True, "Arrow Left"): "previous_month",
    (True, "Arrow Right"): "next_month",
    (True, "T"): "today",
}


def navigate(page: ft.Page, route: str) -> None:
    """Navigate to a route and update the page."""

    clean = route if route.startswith("/") else f"/{route}"
    page.go(clean)
    page.update()


def rerender(page: Optional[ft.Page]) -> None:
    """Rebuild the current view from the context state.

    Called from UI callbacks and from the clock job's worker thread; the lock
    keeps two rebuilds of the same view from interleaving.
    """

    if page is None:
        return
    with _RENDER_LOCK:
        navigate(page, getattr(page, "route", None) or "/dashboard")


def reload_records(ctx: AppContext, page: Optional[ft.Page] = None) -> bool:
    """Replace the snapshot with the store's current list; False on failure."""

    try:
        ctx.records = ctx.record_repo.list_all(user_id=ctx.require_user_id())
    except SQLAlchemyError as exc:
        logger.error(f"Loading services failed: {exc}", exc_info=True)
        dev_log(ctx.config, "Load failed", exc=exc)
        if page is not None:
            show_snack(page, LOAD_FAILED_MESSAGE)
        return False
    logger.debug("Snapshot reloaded", extra={"records": len(ctx.records)})
    return True


def add_service(ctx: AppContext, page: ft.Page, service_type: ServiceType) -> Optional[ServiceRecord]:
    """Log a catalog service stamped with the current time, then re-render."""

    if ctx.current_user is None:
        return None
    try:
        record = service_log.record_service(
            ctx.record_repo, service_type, user_id=ctx.require_user_id()
        )
    except (SQLAlchemyError, ValueError) as exc:
        logger.error(f"Adding service failed: {exc}", exc_info=True)
        show_snack(page, ADD_FAILED_MESSAGE)
        return None

    reload_records(ctx, page)
    show_snack(page, f"{record.name} registrado")
    rerender(page)
    return record


def delete_service(ctx: AppContext, page: ft.Page, record_id: int) -> Optional[DeleteOutcome]:
    """Delete without asking; the confirmation lives in ``request_delete``."""

    if ctx.current_user is None:
        return None
    try:
        outcome = service_log.remove_service(
            ctx.record_repo, record_id, user_id=ctx.require_user_id()
        )
    except SQLAlchemyError as exc:
        logger.error(f"Deleting service failed: {exc}", exc_info=True)
        show_snack(page, DELETE_FAILED_MESSAGE)
        return None

    if outcome is DeleteOutcome.DELETED:
        reload_records(ctx, page)
        show_snack(page, "Servicio eliminado")
    else:
        show_snack(page, DELETE_FAILED_MESSAGE)
    rerender(page)
    return outcome


def request_delete(
    ctx: AppContext,
    page: ft.Page,
    record: ServiceRecord,
    *,
    confirm: Callable[..., object] = show_confirm_dialog,
) -> None:
    """Ask for confirmation, then delete ``record``."""

    if record.id is None:
        return
    record_id = record.id
    confirm(
        page,
        "Eliminar servicio",
        "¿Estás seguro de que quieres eliminar este servicio?",
        lambda: delete_service(ctx, page, record_id),
    )


def select_date(ctx: AppContext, page: Optional[ft.Page], day: date) -> None:
    ctx.selected_date = day
    rerender(page)


def show_previous_month(ctx: AppContext, page: Optional[ft.Page]) -> YearMonth:
    ctx.displayed_month = previous_month(*ctx.displayed_month)
    rerender(page)
    return ctx.displayed_month


def show_next_month(ctx: AppContext, page: Optional[ft.Page]) -> YearMonth:
    ctx.displayed_month = next_month(*ctx.displayed_month)
    rerender(page)
    return ctx.displayed_month


def jump_to_today(ctx: AppContext, page: Optional[ft.Page]) -> None:
    today = ctx.today()
    ctx.displayed_month = YearMonth.from_date(today)
    ctx.selected_date = today
    rerender(page)


def sign_in(ctx: AppContext, page: ft.Page, username: str, password: str) -> bool:
    """Authenticate, load the operator's services and open the dashboard."""

    user = auth.authenticate(
        username=username,
        password=password,
        session_factory=ctx.session_factory,
    )
    if user is None:
        return False
    ctx.current_user = user
    jump_to_today(ctx, None)
    reload_records(ctx, page)
    navigate(page, "/dashboard")
    return True


def sign_up(ctx: AppContext, page: ft.Page, username: str, password: str) -> Optional[str]:
    """Create an account and sign straight in; returns an error message or None."""

    try:
        auth.create_user(username=username, password=password, session_factory=ctx.session_factory)
    except ValueError as exc:
        return str(exc)
    if not sign_in(ctx, page, username, password):
        return "Ocurrió un error"
    return None


def sign_out(ctx: AppContext, page: ft.Page) -> None:
    ctx.sign_out()
    show_snack(page, "Sesión cerrada")
    navigate(page, "/login")


def handle_shortcut(ctx: AppContext, page: ft.Page, key: str, ctrl: bool) -> bool:
    """Run a keyboard shortcut; returns True when one matched."""

    action = SHORTCUTS.get((ctrl, key))
    if action is None or ctx.current_user is None:
        return False
    if action == "reload":
        reload_records(ctx, page)
        rerender(page)
    elif action == "previous_month":
        show_previous_month(ctx, page)
    elif action == "next_month":
        show_next_month(ctx, page)
    elif action == "today":
        jump_to_today(ctx, page)
    return True
