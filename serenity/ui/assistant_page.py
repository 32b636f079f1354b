"""Assistant screen: ask for stress-relief advice."""

from fastapi.responses import RedirectResponse
from nicegui import ui

from serenity.ui.layout import api, bottom_nav, call, page_header, require_login


@ui.page("/assistant")
async def assistant_page() -> RedirectResponse | None:
    page_header()
    if redirect := require_login():
        return redirect

    async def send() -> None:
        question = (query.value or "").strip()
        if not question:
            return
        send_button.disable()
        try:
            answer = await call(api().ask(question))
        finally:
            send_button.enable()
        if answer is None:
            return
        level_label.set_text(f"Tu nivel de estrés actual es: {answer['stress_level']}")
        recommendations.clear()
        with recommendations:
            for text in answer["recommendations"]:
                ui.markdown(text)
        query.set_value("")

    with ui.column().classes("screen w-full p-4 gap-4"):
        ui.label("Mi Asistente IA").classes("text-2xl font-bold")
        level_label = ui.label("Tu nivel de estrés actual es: --")
        with ui.column().classes("card w-full p-4"):
            ui.label("Recomendación:").classes("font-semibold")
            recommendations = ui.column().classes("w-full")
            with recommendations:
                ui.label("No hay recomendaciones aún.").classes("text-gray-500")
        query = (
            ui.input(placeholder="Pregunta algo a la IA...")
            .props("outlined")
            .classes("w-full")
            .on("keydown.enter", send)
        )
        send_button = ui.button("Enviar", on_click=send).classes("w-full")

    bottom_nav("/assistant")
    return None
