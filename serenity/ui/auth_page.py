"""Login and registration screen."""

from fastapi.responses import RedirectResponse
from nicegui import app, ui

from serenity.ui.api_client import ApiClient, ApiError
from serenity.ui.layout import TOKEN_KEY, call, current_token, page_header, toast_error


@ui.page("/login")
def login_page() -> RedirectResponse | None:
    """Login form with a switch to registration; signed-in users go straight home."""
    page_header()
    if current_token():
        return RedirectResponse("/")

    state = {"registering": False}

    def field(placeholder: str, password: bool = False) -> ui.input:
        return (
            ui.input(placeholder=placeholder, password=password, password_toggle_button=password)
            .props("outlined dense bg-color=grey-2")
            .classes("w-full")
        )

    @ui.refreshable
    def form() -> None:
        if state["registering"]:
            registration_form()
        else:
            login_form()

    def show(registering: bool) -> None:
        state["registering"] = registering
        form.refresh()

    def login_form() -> None:
        ui.icon("spa").classes("text-7xl text-blue-600 self-center")
        email = field("Correo electrónico")
        password = field("Contraseña", password=True)

        async def forgot_password() -> None:
            if not email.value.strip():
                ui.notify("Ingrese su correo para restaurar la contraseña", type="warning")
                return
            try:
                await ApiClient().password_reset(email.value)
            except ApiError as e:
                toast_error(e)
                return
            ui.notify("Correo de restauración enviado", type="positive")

        async def submit() -> None:
            if not email.value.strip() or not password.value:
                ui.notify("Correo y contraseña son obligatorios", type="warning")
                return
            session = await call(ApiClient().login(email.value, password.value))
            if session is None:
                return
            app.storage.user[TOKEN_KEY] = session["id_token"]
            ui.notify("Inicio de sesión exitoso", type="positive")
            ui.navigate.to("/")

        ui.label("Olvidé mi contraseña").classes("self-end text-sm cursor-pointer").on(
            "click", forgot_password
        )
        ui.button("Iniciar sesión", on_click=submit).classes("w-full").props("unelevated")
        ui.label("No tienes cuenta? Regístrate").classes(
            "self-center text-sm text-blue-600 cursor-pointer"
        ).on("click", lambda: show(True))

    def registration_form() -> None:
        ui.label("Registro").classes("text-2xl font-bold self-center mb-4")
        name = field("Nombre")
        email = field("Correo electrónico")
        password = field("Contraseña", password=True)
        confirm = field("Confirmar Contraseña", password=True)
        error = ui.label().classes("text-red-600 text-sm")

        async def submit() -> None:
            if not all(f.value.strip() for f in (name, email, password, confirm)):
                error.set_text("Todos los campos son obligatorios.")
                return
            if password.value != confirm.value:
                error.set_text("Las contraseñas no coinciden.")
                return
            if await call(
                ApiClient().register(name.value, email.value, password.value, confirm.value)
            ) is None:
                return
            ui.notify("Registro exitoso", type="positive")
            show(False)

        ui.button("Registrarse", on_click=submit).classes("w-full").props("unelevated")
        ui.label("Ya tienes cuenta? Inicia sesión").classes(
            "self-center text-sm text-blue-600 cursor-pointer"
        ).on("click", lambda: show(False))

    with ui.column().classes("screen w-full p-8 gap-4 mt-12"):
        form()