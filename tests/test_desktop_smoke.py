"""Headless smoke tests for the desktop views, router and controllers."""

from __future__ import annotations

import threading
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import flet as ft
import pytest

from fzbarber.config import BaseConfig
from fzbarber.desktop import controllers
from fzbarber.desktop.app import build_router
from fzbarber.desktop.context import create_app_context
from fzbarber.desktop.views.auth import build_auth_view
from fzbarber.desktop.views.dashboard import build_dashboard_view
from fzbarber.domain.repositories import DeleteOutcome
from fzbarber.scheduler import ClockScheduler
from fzbarber.services import auth
from fzbarber.services.calendar_view import YearMonth


class DummyPage:
    """Minimal stand-in for flet.Page used in view builders and router tests."""

    def __init__(self):
        self.views: list[ft.View] = []
        self.route: str = ""
        self.snack_bar = None
        self.dialog = None
        self.overlay: list[ft.Control] = []

    def go(self, route: str):
        self.route = route

    def update(self):
        return None


def _walk(root):
    stack = [root]
    while stack:
        control = stack.pop()
        yield control
        for attr in ("controls", "content", "actions", "appbar"):
            children = getattr(control, attr, None)
            if isinstance(children, list):
                stack.extend(children)
            elif isinstance(children, ft.Control):
                stack.append(children)


def _find(root, predicate):
    return next((c for c in _walk(root) if predicate(c)), None)


def _snack_text(page: DummyPage) -> str:
    return page.snack_bar.content.value


@pytest.fixture
def ctx(app_env):
    return create_app_context(BaseConfig())


@pytest.fixture
def page(ctx):
    dummy = DummyPage()
    ctx.page = dummy
    return dummy


@pytest.fixture
def signed_in(ctx, page):
    auth.create_user(username="barbero", password="secreto", session_factory=ctx.session_factory)
    assert controllers.sign_in(ctx, page, "barbero", "secreto")
    return ctx


def test_context_starts_on_today(ctx):
    today = ctx.today()
    assert ctx.selected_date == today
    assert ctx.displayed_month == YearMonth.from_date(today)
    assert ctx.records == []
    assert ctx.current_user is None
    with pytest.raises(RuntimeError):
        ctx.require_user_id()


def test_router_gates_on_session(ctx, page):
    router = build_router(ctx, page)

    assert router.resolve("/dashboard") == "/login"
    assert router.resolve("/login") == "/login"

    ctx.current_user = SimpleNamespace(id=1, username="barbero")
    assert router.resolve("/dashboard") == "/dashboard"
    assert router.resolve("/nowhere") == "/dashboard"
    assert router.resolve(None) == "/dashboard"


def test_route_change_builds_login_view(ctx, page):
    router = build_router(ctx, page)
    router.route_change(SimpleNamespace(route="/login"))

    assert len(page.views) == 1
    assert page.views[0].route == "/login"


def test_route_change_redirects_anonymous_dashboard(ctx, page):
    router = build_router(ctx, page)
    router.route_change(SimpleNamespace(route="/dashboard"))

    assert page.route == "/login"
    assert page.views == []


def test_auth_view_builds(ctx, page):
    view = build_auth_view(ctx, page)
    assert view.route == "/login"
    assert _find(view, lambda c: isinstance(c, ft.SegmentedButton)) is not None


def test_auth_view_opens_on_register_when_no_accounts(ctx, page):
    view = build_auth_view(ctx, page)

    toggle = _find(view, lambda c: isinstance(c, ft.SegmentedButton))
    submit = _find(view, lambda c: isinstance(c, ft.FilledButton))
    assert "register" in toggle.selected
    assert submit.text == "Crear Cuenta"


def test_auth_view_opens_on_sign_in_once_an_account_exists(ctx, page):
    auth.create_user(username="barbero", password="secreto", session_factory=ctx.session_factory)
    view = build_auth_view(ctx, page)

    toggle = _find(view, lambda c: isinstance(c, ft.SegmentedButton))
    submit = _find(view, lambda c: isinstance(c, ft.FilledButton))
    assert "login" in toggle.selected
    assert submit.text == "Iniciar Sesión"


def test_root_route_redirects_to_dashboard(ctx, page):
    router = build_router(ctx, page)
    ctx.current_user = SimpleNamespace(id=1, username="barbero")

    assert "/" not in router.routes
    assert router.resolve("/") == "/dashboard"
    router.route_change(SimpleNamespace(route="/"))

    assert page.route == "/dashboard"
    assert page.views == []


def test_rerender_from_worker_thread(signed_in, page):
    page.route = "/dashboard"
    routes: list[str] = []
    page.go = routes.append
    scheduler = ClockScheduler(signed_in, on_tick=lambda _now: controllers.rerender(page))

    worker = threading.Thread(target=scheduler.tick)
    worker.start()
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert routes == ["/dashboard"]


def test_sign_in_rejects_bad_password(ctx, page):
    auth.create_user(username="barbero", password="secreto", session_factory=ctx.session_factory)
    assert not controllers.sign_in(ctx, page, "barbero", "otra")
    assert ctx.current_user is None


def test_sign_up_then_dashboard(ctx, page):
    assert controllers.sign_up(ctx, page, "nuevo", "clave") is None
    assert ctx.current_user.username == "nuevo"
    assert page.route == "/dashboard"
    assert controllers.sign_up(ctx, page, "nuevo", "clave") == "Username already exists"


def test_dashboard_view_builds(signed_in, page):
    view = build_dashboard_view(signed_in, page)

    assert view.route == "/dashboard"
    labels = {c.value for c in _walk(view) if isinstance(c, ft.Text)}
    assert {"Hoy", "Esta Semana", "Este Mes", "Este Año", "Servicios de Hoy"} <= labels
    today_cell = _find(view, lambda c: isinstance(c, ft.Container) and c.data == signed_in.today())
    assert today_cell is not None


def test_dashboard_requires_user(ctx, page):
    with pytest.raises(RuntimeError):
        build_dashboard_view(ctx, page)


def test_quick_add_button_logs_service(signed_in, page):
    view = build_dashboard_view(signed_in, page)
    button = _find(view, lambda c: isinstance(c, ft.Container) and c.data == "Barba")
    assert button is not None

    button.on_click(None)

    assert [(r.name, r.price) for r in signed_in.records] == [("Barba", 3000)]
    assert _snack_text(page) == "Barba registrado"


def test_delete_flow_with_confirmation(signed_in, page):
    record = signed_in.record_repo.insert("Corte", 6500, user_id=signed_in.require_user_id())
    controllers.reload_records(signed_in, page)
    prompts = []

    def confirm(_page, title, message, on_confirm):
        prompts.append((title, message))
        on_confirm()

    controllers.request_delete(signed_in, page, record, confirm=confirm)

    assert prompts and prompts[0][0] == "Eliminar servicio"
    assert signed_in.records == []
    assert _snack_text(page) == "Servicio eliminado"


def test_cancelled_delete_keeps_record(signed_in, page):
    record = signed_in.record_repo.insert("Corte", 6500, user_id=signed_in.require_user_id())
    controllers.reload_records(signed_in, page)

    controllers.request_delete(signed_in, page, record, confirm=lambda *args: None)

    assert [r.id for r in signed_in.records] == [record.id]


def test_confirm_dialog_is_opened_on_page(signed_in, page):
    record = signed_in.record_repo.insert("Corte", 6500, user_id=signed_in.require_user_id())
    controllers.request_delete(signed_in, page, record)

    assert isinstance(page.dialog, ft.AlertDialog)
    assert page.dialog.open


def test_delete_of_foreign_record_is_refused(signed_in, page):
    other = auth.create_user(username="otro", password="x", session_factory=signed_in.session_factory)
    foreign = signed_in.record_repo.insert("Corte", 6500, user_id=other.id)

    outcome = controllers.delete_service(signed_in, page, foreign.id)

    assert outcome is DeleteOutcome.FORBIDDEN
    assert _snack_text(page) == controllers.DELETE_FAILED_MESSAGE
    assert signed_in.record_repo.get_by_id(foreign.id, user_id=other.id) is not None


def test_delete_missing_record_reports_failure(signed_in, page):
    outcome = controllers.delete_service(signed_in, page, 4242)
    assert outcome is DeleteOutcome.NOT_FOUND
    assert _snack_text(page) == controllers.DELETE_FAILED_MESSAGE


def test_month_navigation_and_selection(signed_in, page):
    signed_in.displayed_month = YearMonth(2024, 1)

    assert controllers.show_previous_month(signed_in, page) == YearMonth(2023, 12)
    assert controllers.show_next_month(signed_in, page) == YearMonth(2024, 1)

    controllers.select_date(signed_in, page, date(2024, 1, 15))
    assert signed_in.selected_date == date(2024, 1, 15)

    controllers.jump_to_today(signed_in, page)
    assert signed_in.selected_date == signed_in.today()
    assert signed_in.displayed_month == YearMonth.from_date(signed_in.today())


def test_selected_day_survives_reload(signed_in, page):
    uid = signed_in.require_user_id()
    yesterday_noon = datetime.now(timezone.utc) - timedelta(days=1)
    signed_in.record_repo.insert("Corte", 6500, user_id=uid, timestamp=yesterday_noon)
    signed_in.selected_date = date(2020, 5, 5)

    assert controllers.reload_records(signed_in, page)
    assert signed_in.selected_date == date(2020, 5, 5)
    assert len(signed_in.records) == 1


def test_shortcuts(signed_in, page):
    signed_in.displayed_month = YearMonth(2024, 6)

    assert controllers.handle_shortcut(signed_in, page, "Arrow Right", True)
    assert signed_in.displayed_month == YearMonth(2024, 7)
    assert not controllers.handle_shortcut(signed_in, page, "Arrow Right", False)
    assert controllers.handle_shortcut(signed_in, page, "T", True)
    assert signed_in.displayed_month == YearMonth.from_date(signed_in.today())


def test_sign_out(signed_in, page):
    controllers.sign_out(signed_in, page)

    assert signed_in.current_user is None
    assert signed_in.records == []
    assert page.route == "/login"
