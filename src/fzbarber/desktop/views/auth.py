"""Sign-in / sign-up view."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...services import auth
from .. import controllers

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext


def build_auth_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Username/password form with a toggle between signing in and registering."""

    if ctx.current_user is not None:
        page.go("/dashboard")
        return ft.View(
            route="/login",
            controls=[ft.Container(content=ft.Text("Redirigiendo..."), padding=20)],
            padding=0,
        )

    # First run: no account yet, so start on the register form
    mode = {"login": auth.any_users_exist(ctx.session_factory)}

    username_field = ft.TextField(label="Usuario", autofocus=True, width=300)
    password_field = ft.TextField(
        label="Contraseña",
        password=True,
        can_reveal_password=True,
        width=300,
    )
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)
    submit_button = ft.FilledButton(
        "Iniciar Sesión" if mode["login"] else "Crear Cuenta",
        icon=ft.Icons.LOGIN if mode["login"] else ft.Icons.PERSON_ADD,
        width=300,
    )
    mode_toggle = ft.SegmentedButton(
        selected={"login" if mode["login"] else "register"},
        segments=[
            ft.Segment(value="login", label=ft.Text("Iniciar Sesión")),
            ft.Segment(value="register", label=ft.Text("Registrarse")),
        ],
    )

    def _show_error(message: str) -> None:
        error_text.value = message
        error_text.visible = True
        page.update()

    def on_mode_change(e):
        mode["login"] = "login" in (e.control.selected or {"login"})
        submit_button.text = "Iniciar Sesión" if mode["login"] else "Crear Cuenta"
        submit_button.icon = ft.Icons.LOGIN if mode["login"] else ft.Icons.PERSON_ADD
        error_text.visible = False
        page.update()

    def do_submit(_e):
        error_text.visible = False
        username = username_field.value or ""
        password = password_field.value or ""
        if not username.strip() or not password:
            _show_error("Usuario y contraseña son obligatorios")
            return

        if mode["login"]:
            if not controllers.sign_in(ctx, page, username, password):
                _show_error("Usuario o contraseña incorrectos")
            return

        problem = controllers.sign_up(ctx, page, username, password)
        if problem:
            _show_error(problem)

    mode_toggle.on_change = on_mode_change
    submit_button.on_click = do_submit
    username_field.on_submit = lambda _: password_field.focus()
    password_field.on_submit = do_submit

    return ft.View(
        route="/login",
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Icon(ft.Icons.CONTENT_CUT, size=64, color=ft.Colors.PRIMARY),
                        ft.Text(
                            ctx.config.APP_NAME,
                            size=32,
                            weight=ft.FontWeight.BOLD,
                            text_align=ft.TextAlign.CENTER,
                        ),
                        ft.Text(
                            "Sistema de Control de Ganancias",
                            size=16,
                            color=ft.Colors.ON_SURFACE_VARIANT,
                            text_align=ft.TextAlign.CENTER,
                        ),
                        ft.Container(height=24),
                        mode_toggle,
                        username_field,
                        password_field,
                        error_text,
                        ft.Container(height=8),
                        submit_button,
                    ],
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=8,
                ),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
        padding=20,
    )
