"""Profile screen: photo, personal details and sign-out."""

from typing import Any

from fastapi.responses import RedirectResponse
from nicegui import events, ui

from serenity.ui.layout import (
    api,
    bottom_nav,
    call,
    follow_stream,
    page_header,
    require_login,
    sign_out,
)

DEFAULT_PHOTO = "https://cdn.quasar.dev/img/avatar.png"


@ui.page("/profile")
async def profile_page() -> RedirectResponse | None:
    page_header()
    if redirect := require_login():
        return redirect

    async def upload_photo(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        result = await call(api().upload_photo(e.file.name, data, e.file.content_type))
        uploader.reset()
        if result is None:
            return
        photo.set_source(result["photo_url"])
        ui.notify("Foto actualizada", type="positive")

    async def save() -> None:
        saved = await call(
            api().save_profile(gender.value, age.value, weight.value, height.value)
        )
        if saved is not None:
            ui.notify("Datos guardados correctamente", type="positive")

    def on_profile(snapshot: dict[str, Any]) -> None:
        profile = snapshot["profile"]
        photo.set_source(profile["photo_url"] or DEFAULT_PHOTO)
        name.set_text(profile["name"])
        email.set_text(profile["email"])
        # Don't clobber what the user is typing.
        for field, key in ((gender, "gender"), (age, "age"), (weight, "weight"), (height, "height")):
            if not field.value:
                field.set_value(profile[key])

    def field(label: str) -> ui.input:
        return ui.input(label).props("outlined dense").classes("w-full")

    with ui.column().classes("screen w-full p-4 gap-3 items-center"):
        photo = ui.image(DEFAULT_PHOTO).classes("w-28 h-28 rounded-full")
        uploader = ui.upload(
            label="Cambiar foto",
            auto_upload=True,
            max_files=1,
            on_upload=upload_photo,
        ).props("accept=image/* flat").classes("w-56")
        name = ui.label("Usuario").classes("text-xl font-bold")
        email = ui.label("correo@ejemplo.com").classes("text-gray-500")

        with ui.column().classes("card w-full p-4 gap-2"):
            gender = field("Género")
            age = field("Edad")
            weight = field("Peso")
            height = field("Altura")
            ui.button("Guardar cambios", on_click=save).classes("w-full").props("unelevated")

        ui.button("Log Out", on_click=sign_out).classes("w-full").props("outline color=negative")

    bottom_nav("/profile")

    await ui.context.client.connected()
    follow_stream("/profile/stream", on_profile)
    return None
