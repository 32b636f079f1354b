"""Runtime configuration with environment variable loading.

Pydantic-based configuration for the remote services the app talks to.
API keys come from the environment (or a .env file), never from code.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _required(value: str, env_name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{env_name} is required. Set it in the environment or .env")
    return value.strip()


class AssistantConfig(BaseModel):
    """Configuration for the conversational assistant client.

    Supports OpenAI and any OpenAI-compatible API via LLM_BASE_URL.

    Attributes:
        api_key: Bearer token for the completion endpoint.
        base_url: API base URL, without the /v1 suffix.
        model_name: Model identifier to use.
        temperature: Sampling temperature.
        max_tokens: Maximum tokens in generated response.
        max_attempts: Attempts before giving up on rate limiting.
        backoff_seconds: Linear backoff unit between attempts.
        timeout: HTTP timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", "")),
        description="API key for the completion endpoint",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or "https://api.openai.com",
        description="API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-3.5-turbo"),
        description="Model to use",
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=200, ge=1, le=128000)
    max_attempts: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=2.0, ge=0.0)
    timeout: float = Field(default=60.0, gt=0.0)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        return _required(v, "LLM_API_KEY or OPENAI_API_KEY")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class WeatherConfig(BaseModel):
    """Configuration for the weather client.

    Attributes:
        api_key: OpenWeatherMap application id.
        base_url: API base URL.
        city: City shown on the weather card.
        units: Measurement units requested from the API.
        lang: Language of the weather description.
    """

    api_key: str = Field(default_factory=lambda: os.getenv("WEATHER_API_KEY", ""))
    base_url: str = Field(
        default_factory=lambda: os.getenv(
            "WEATHER_BASE_URL", "https://api.openweathermap.org/data/2.5"
        )
    )
    city: str = Field(default_factory=lambda: os.getenv("WEATHER_CITY", "Ciudad Juárez"))
    units: str = "metric"
    lang: str = "es"
    timeout: float = Field(default=15.0, gt=0.0)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        return _required(v, "WEATHER_API_KEY")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class FirebaseConfig(BaseModel):
    """Configuration for the managed auth, document database and storage.

    Firestore and Cloud Storage credentials are resolved by the Google client
    libraries (GOOGLE_APPLICATION_CREDENTIALS, FIRESTORE_EMULATOR_HOST, ...).

    Attributes:
        api_key: Web API key used by the identity REST endpoints.
        project_id: Google Cloud project hosting Firestore.
        storage_bucket: Bucket receiving profile images.
        identity_base_url: Identity Toolkit base URL (emulator override).
    """

    api_key: str = Field(default_factory=lambda: os.getenv("FIREBASE_API_KEY", ""))
    project_id: str | None = Field(
        default_factory=lambda: os.getenv("FIREBASE_PROJECT_ID") or None
    )
    storage_bucket: str = Field(
        default_factory=lambda: os.getenv("FIREBASE_STORAGE_BUCKET", "")
    )
    identity_base_url: str = Field(
        default_factory=lambda: os.getenv(
            "IDENTITY_BASE_URL", "https://identitytoolkit.googleapis.com/v1"
        )
    )
    timeout: float = Field(default=15.0, gt=0.0)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        return _required(v, "FIREBASE_API_KEY")

    @field_validator("identity_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Raises:
        ValueError: If no API key is set.
    """
    return AssistantConfig()


def get_weather_config() -> WeatherConfig:
    return WeatherConfig()


def get_firebase_config() -> FirebaseConfig:
    return FirebaseConfig()
