"""Application entry point.

Runs FastAPI (port 8000) with the NiceGUI screens mounted on the same server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def register_pages() -> None:
    """Import the page modules so their routes are registered."""
    from serenity.ui import (  # noqa: F401
        assistant_page,
        auth_page,
        calendar_page,
        home_page,
        profile_page,
        weather_page,
    )


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server."""
    import uvicorn
    from nicegui import ui

    from serenity.api.app import create_app

    app = create_app()
    register_pages()

    ui.run_with(
        app,
        title="Serenity",
        favicon="🌿",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "serenity-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Serve the API from a child uvicorn process and the screens from this one.

    The screens reach the API through API_BASE_URL.
    """
    import subprocess

    api_port = os.getenv("PORT", "8000")
    logger.info(f"Starting API on http://localhost:{api_port}")
    api_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "serenity.api.app:app",
            "--host",
            os.getenv("HOST", "0.0.0.0"),
            "--port",
            api_port,
        ]
    )
    try:
        run_ui()
    finally:
        api_proc.terminate()
        api_proc.wait()


def run_ui() -> None:
    """Serve only the NiceGUI screens on port 8080."""
    from nicegui import ui

    register_pages()
    ui.run(
        title="Serenity",
        favicon="🌿",
        port=8080,
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "serenity-secret"),
    )


def main() -> None:
    """Set RUN_MODE=separate to run the API and the screens on different ports."""
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Serenity in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
