"""Current weather for the configured city."""

from fastapi.responses import RedirectResponse
from nicegui import ui

from serenity.ui.layout import api, bottom_nav, call, page_header, require_login


@ui.page("/weather")
async def weather_page() -> RedirectResponse | None:
    page_header()
    if redirect := require_login():
        return redirect

    with ui.column().classes("screen w-full p-4 gap-4 items-center"):
        city = ui.label("Cargando...").classes("text-2xl font-bold")
        icon = ui.image().classes("w-24 h-24")
        icon.set_visibility(False)
        temperature = ui.label("--° C").classes("text-5xl font-bold")
        description = ui.label("").classes("text-gray-600")

    bottom_nav("/weather")

    await ui.context.client.connected()
    report = await call(api().weather())
    if report is None:
        city.set_text("Error al obtener el clima")
        return None
    city.set_text(report["city"])
    temperature.set_text(f"{report['temperature']}° C")
    description.set_text(report["description"])
    if report.get("icon_url"):
        icon.set_source(report["icon_url"])
        icon.set_visibility(True)
    return None
