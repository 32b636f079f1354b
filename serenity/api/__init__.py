"""FastAPI endpoints for the wellness companion.

Every screen's remote state goes through these routes; live documents are
delivered as Server-Sent Events.

Endpoints:
    - GET /health: Service health status
    - /auth: login, registration, password reset
    - /profile: profile details, photo upload, live profile stream
    - /stress: weekly levels and simulated measurement stream
    - /events: agenda CRUD, grouped view, live agenda stream
    - /assistant, /weather, /recommendations
"""

from serenity.api.app import app, create_app

__all__ = ["app", "create_app"]
