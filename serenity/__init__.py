"""Serenity - personal wellness companion.

Combines FastAPI for the HTTP surface, NiceGUI for the screens, httpx for the
weather and assistant clients, and Firebase (Firestore + Cloud Storage) for
all persistent state.

Components:
    - api: HTTP endpoints and live SSE streams
    - auth: identity service client and explicit user sessions
    - store: document database and object storage adapters
    - services: profile, stress, measurement, agenda and recommendations
    - assistant: conversational assistant client with bounded retry
    - weather: weather client
    - ui: NiceGUI screens
    - models: request/response and document schemas
"""

__version__ = "0.1.0"
