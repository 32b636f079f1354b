"""Home screen: greeting, recommendations, weekly stress, ECG, weather and next event."""

import asyncio
from typing import Any

from fastapi.responses import RedirectResponse
from nicegui import ui

from serenity.services.measurement import simulate_ecg
from serenity.services.stress import DAY_LABELS, trend
from serenity.ui.api_client import ApiError
from serenity.ui.layout import (
    BAND_COLORS,
    api,
    bottom_nav,
    call,
    follow_stream,
    page_header,
    require_login,
    sign_out,
    toast_error,
)


def ecg_options(points: list[float]) -> dict[str, Any]:
    return {
        "animation": False,
        "grid": {"left": 0, "right": 0, "top": 8, "bottom": 8},
        "xAxis": {"type": "category", "show": False, "data": list(range(len(points)))},
        "yAxis": {"type": "value", "show": False, "min": -30, "max": 30},
        "series": [
            {
                "type": "line",
                "data": points,
                "showSymbol": False,
                "lineStyle": {"color": "#f44336", "width": 2},
            }
        ],
    }


@ui.page("/")
async def home_page() -> RedirectResponse | None:
    page_header()
    if redirect := require_login():
        return redirect

    state: dict[str, Any] = {
        "name": "Usuario",
        "levels": [50] * 7,
        "average": 50,
        "selected": None,
        "first_event": "Sin eventos",
    }

    @ui.refreshable
    def header() -> None:
        with ui.row().classes("w-full items-center justify-between"):
            with ui.column().classes("gap-0"):
                ui.label(f"Hola, {state['name']}").classes("text-2xl font-bold")
                ui.label("¡Bienvenido de nuevo!").classes("text-gray-500")
            ui.button(icon="logout", on_click=sign_out).props("flat round")

    @ui.refreshable
    def stress_section() -> None:
        levels, selected = state["levels"], state["selected"]
        with ui.column().classes("card w-full p-4"):
            ui.label("Nivel de Estrés").classes("text-lg font-semibold")
            with ui.row().classes("items-baseline gap-3"):
                ui.label(str(state["average"])).classes("text-4xl font-bold")
                if selected is not None:
                    text, rising = trend(levels, selected)
                    ui.label(text).classes("text-red-600" if rising else "text-green-600")
                else:
                    ui.label("Selecciona un día").classes("text-gray-500")
            with ui.row().classes("w-full justify-between items-end h-32"):
                for index, (label, day) in enumerate(zip(DAY_LABELS, state["days"])):
                    css = "stress-bar" + (" stress-bar-selected" if selected == index else "")
                    with ui.column().classes("items-center gap-1 cursor-pointer").on(
                        "click", lambda i=index: select_day(i)
                    ):
                        ui.element("div").classes(css).style(
                            f"height: {max(day['level'], 4)}px;"
                            f"background: {BAND_COLORS[day['band']]}"
                        )
                        ui.label(label).classes("text-[10px]")
                        ui.label(f"{day['level']}%").classes("text-[10px] font-semibold")

    def select_day(index: int) -> None:
        state["selected"] = index
        stress_section.refresh()

    def on_profile(snapshot: dict[str, Any]) -> None:
        stress = snapshot["stress"]
        state["name"] = snapshot["profile"]["name"]
        state["days"] = stress["days"]
        state["levels"] = [day["level"] for day in stress["days"]]
        state["average"] = stress["average"]
        header.refresh()
        stress_section.refresh()

    def on_agenda(agenda: dict[str, Any]) -> None:
        state["first_event"] = agenda["first_event"]
        events_label.set_text(state["first_event"])

    async def start_measurement() -> None:
        if state["selected"] is None:
            ui.notify("Selecciona un día para la medición", type="warning")
            return
        start_button.disable()
        start_button.set_text("Midiendo...")

        def on_frame(frame: dict[str, Any]) -> None:
            if frame.get("error"):
                ui.notify(frame["error"], type="negative")
                return
            if frame.get("points"):
                chart.options.update(ecg_options(frame["points"]))
                chart.update()

        try:
            await api().follow(f"/stress/{state['selected']}/measure", on_frame, method="POST")
        except ApiError as e:
            toast_error(e)
        finally:
            start_button.enable()
            start_button.set_text("Iniciar")

    async def load_weather() -> None:
        report = await call(api().weather())
        if report is None:
            return
        temperature_label.set_text(f"{report['temperature']}° C")
        description_label.set_text(report["description"])
        city_label.set_text(report["city"])

    async def load_recommendations() -> None:
        cards = await call(api().recommendations()) or []
        recommendations_row.clear()
        with recommendations_row:
            for card in cards:
                with ui.column().classes("card p-2 items-center min-w-[110px]"):
                    ui.image(card["image_url"]).classes("w-16 h-16 rounded-lg")
                    if card["link"]:
                        ui.link(card["title"], card["link"], new_tab=True).classes("text-sm")
                    else:
                        ui.label(card["title"]).classes("text-sm")

    state["days"] = [{"level": 50, "band": "neutral"} for _ in DAY_LABELS]

    with ui.column().classes("screen w-full p-4 gap-4"):
        header()

        with ui.column().classes("card w-full p-4"):
            ui.label("Recomendaciones").classes("text-lg font-semibold")
            with ui.scroll_area().classes("w-full h-36"):
                recommendations_row = ui.row().classes("flex-nowrap gap-3")

        stress_section()

        with ui.column().classes("card w-full p-4"):
            ui.label("Electrocardiograma").classes("text-lg font-semibold")
            chart = ui.echart(ecg_options(simulate_ecg())).classes("w-full h-40")
            start_button = ui.button("Iniciar", on_click=start_measurement).classes("w-full")

        with ui.column().classes("card w-full p-4"):
            ui.label("Clima").classes("text-lg font-semibold")
            with ui.row().classes("items-center gap-4"):
                temperature_label = ui.label("--° C").classes("text-3xl font-bold")
                with ui.column().classes("gap-0"):
                    description_label = ui.label("")
                    city_label = ui.label("Cargando...").classes("text-gray-500")

        with ui.column().classes("card w-full p-4"):
            ui.label("Eventos").classes("text-lg font-semibold")
            events_label = ui.label(state["first_event"])

    bottom_nav("/")

    await ui.context.client.connected()
    follow_stream("/profile/stream", on_profile)
    follow_stream("/events/stream", on_agenda)
    await asyncio.gather(load_weather(), load_recommendations())
    return None
