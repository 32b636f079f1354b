"""Agenda screen: events grouped by date, with an add/edit dialog."""

import datetime
from typing import Any

from fastapi.responses import RedirectResponse
from nicegui import ui

from serenity.ui.layout import api, bottom_nav, call, follow_stream, page_header, require_login


@ui.page("/calendar")
async def calendar_page() -> RedirectResponse | None:
    page_header()
    if redirect := require_login():
        return redirect

    state: dict[str, Any] = {"today": "", "groups": [], "editing": None}

    with ui.dialog() as dialog, ui.card().classes("w-80"):
        dialog_title = ui.label("Nuevo evento").classes("text-lg font-semibold")
        title_input = ui.input("Título").props("outlined dense").classes("w-full")
        date_picker = ui.date(value=datetime.date.today().isoformat()).classes("w-full")
        with ui.row().classes("w-full justify-end"):
            ui.button("Cancelar", on_click=dialog.close).props("flat")
            save_button = ui.button("Guardar").props("unelevated")

    def open_dialog(event: dict[str, Any] | None = None) -> None:
        state["editing"] = event["id"] if event else None
        dialog_title.set_text("Editar evento" if event else "Nuevo evento")
        title_input.set_value(event["title"] if event else "")
        date_picker.set_value(event["date"] if event else datetime.date.today().isoformat())
        dialog.open()

    async def save() -> None:
        if not (title_input.value or "").strip():
            ui.notify("El título es obligatorio", type="warning")
            return
        if not date_picker.value:
            ui.notify("Selecciona una fecha", type="warning")
            return
        saved = await call(api().save_event(state["editing"], title_input.value, date_picker.value))
        if saved is not None:
            dialog.close()

    save_button.on_click(save)

    async def delete(event_id: str) -> None:
        await call(api().delete_event(event_id))

    @ui.refreshable
    def agenda() -> None:
        ui.label(state["today"]).classes("text-gray-500")
        if not state["groups"]:
            ui.label("Sin eventos").classes("text-gray-500 mt-4")
            return
        for group in state["groups"]:
            ui.label(group["label"]).classes("font-semibold mt-2")
            for event in group["events"]:
                with ui.row().classes("card w-full p-3 items-center justify-between"):
                    ui.label(event["title"])
                    with ui.row().classes("gap-1"):
                        ui.button(icon="edit", on_click=lambda e=event: open_dialog(e)).props(
                            "flat round dense"
                        )
                        ui.button(icon="delete", on_click=lambda i=event["id"]: delete(i)).props(
                            "flat round dense color=negative"
                        )

    def on_agenda(view: dict[str, Any]) -> None:
        state["today"] = view["today"]
        state["groups"] = view["groups"]
        agenda.refresh()

    with ui.column().classes("screen w-full p-4 gap-2"):
        ui.label("Mi agenda").classes("text-2xl font-bold")
        agenda()

    with ui.page_sticky(position="bottom-right", x_offset=20, y_offset=80):
        ui.button(icon="add", on_click=lambda: open_dialog()).props("fab color=primary")

    bottom_nav("/calendar")

    await ui.context.client.connected()
    follow_stream("/events/stream", on_agenda)
    return None
