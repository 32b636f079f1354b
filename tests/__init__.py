"""Test package for Serenity.

Provides coverage for all components with unit tests for isolated logic and
integration tests for the HTTP API.

Structure:
    - unit/: Individual function and class tests
    - integration/: API workflows over in-memory fakes
    - fakes.py: In-memory document store, object storage and identity service

Remote services are never contacted; HTTP clients run on httpx.MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""
