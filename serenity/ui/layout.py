"""Shared page chrome: styles, navigation bar, session gate and live streams."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi.responses import RedirectResponse
from nicegui import app, ui

from serenity.ui.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

TOKEN_KEY = "id_token"

BAND_COLORS = {
    "neutral": "#9e9e9e",
    "low": "#2196f3",
    "mild": "#ffeb3b",
    "elevated": "#ffa500",
    "high": "#f44336",
}

NAV_ITEMS = [
    ("/", "home", "Home"),
    ("/calendar", "date_range", "Calendar"),
    ("/weather", "cloud", "Weather"),
    ("/assistant", "psychology", "IA"),
    ("/profile", "person", "Profile"),
]

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .screen { max-width: 480px; margin: 0 auto; padding-bottom: 80px; }

    .card {
        background: white;
        border-radius: 16px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.08);
    }

    .nav-bar { background: #bad0e7; }
    .nav-active { color: #1980e6 !important; }

    .stress-bar { width: 24px; border-radius: 6px; transition: height 0.3s; }
    .stress-bar-selected { outline: 2px solid #111418; }
</style>
"""


def current_token() -> str | None:
    return app.storage.user.get(TOKEN_KEY)


def require_login() -> RedirectResponse | None:
    """Redirect to the login screen when no session is stored."""
    if not current_token():
        return RedirectResponse("/login")
    return None


def api() -> ApiClient:
    return ApiClient(current_token())


def sign_out() -> None:
    app.storage.user.pop(TOKEN_KEY, None)
    ui.navigate.to("/login")


def toast_error(error: ApiError | str) -> None:
    message = error.message if isinstance(error, ApiError) else error
    if isinstance(error, ApiError) and error.status_code == 401:
        app.storage.user.pop(TOKEN_KEY, None)
        ui.navigate.to("/login")
    ui.notify(message, type="negative")


def page_header() -> None:
    ui.add_head_html(CUSTOM_CSS)


def bottom_nav(active: str) -> None:
    with ui.footer().classes("nav-bar justify-around py-1"):
        for path, icon, label in NAV_ITEMS:
            css = "nav-active" if path == active else "text-gray-600"
            ui.button(icon=icon, on_click=lambda p=path: ui.navigate.to(p)).props(
                f'flat round aria-label="{label}"'
            ).classes(css)


def follow_stream(path: str, on_event: Callable[[dict[str, Any]], None]) -> None:
    """Follow an SSE endpoint for as long as the current page is open.

    The stream task is cancelled when the browser tab disconnects.
    """
    client = ui.context.client

    async def run() -> None:
        try:
            await api().follow(path, on_event)
        except ApiError as e:
            with client:
                toast_error(e)

    task = asyncio.create_task(run())
    client.on_disconnect(lambda: task.cancel())


async def call(action: Awaitable[Any]) -> Any | None:
    """Await an API call, turning failures into a toast."""
    try:
        return await action
    except ApiError as e:
        logger.warning(f"API call failed: {e.message}")
        toast_error(e)
        return None
