"""Integration tests for the API working as a system.

Coverage:
    - Auth endpoints and bearer token resolution
    - Profile details, photo upload and the live profile snapshot
    - Stress week and the measurement stream
    - Agenda CRUD and grouping
    - Assistant, weather and recommendations

Requests go through the real FastAPI app via httpx ASGITransport; the remote
services are replaced by the fakes in tests/fakes.py.
"""
