"""Unit tests for individual components in isolation.

Coverage:
    - config: environment-backed settings validation
    - assistant/: request shape and the rate-limit retry policy
    - weather/: payload mapping and query parameters
    - auth/: identity client and the login/registration flow
    - services/: stress week, measurement, agenda, profile, recommendations
    - store/: subscriptions and the thread-safe watch callback

Uses fakes for external services. Leverages pytest-check for multiple
assertions per test.
"""
