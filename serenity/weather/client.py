"""Weather client for the fixed city shown on the weather card."""

import logging

import httpx

from serenity.config import WeatherConfig, get_weather_config
from serenity.models.schemas import WeatherReport, WeatherResponse

logger = logging.getLogger(__name__)

ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def to_report(payload: WeatherResponse) -> WeatherReport:
    """Map the API payload to display fields.

    Temperature is truncated toward zero; a missing condition leaves the
    description and icon blank.
    """
    condition = payload.weather[0] if payload.weather else None
    description = condition.description if condition else ""
    icon = condition.icon if condition else ""
    return WeatherReport(
        city=payload.name,
        temperature=int(payload.main.temp),
        description=capitalize_first(description),
        icon=icon,
        icon_url=ICON_URL.format(icon=icon) if icon else None,
    )


class WeatherClient:
    """Single GET against the current weather endpoint."""

    def __init__(
        self,
        config: WeatherConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_weather_config()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout)

    async def get_weather(self, city: str | None = None) -> WeatherReport:
        """Fetch current weather for a city (the configured one by default).

        Raises:
            httpx.HTTPStatusError: On any non-2xx response.
            httpx.RequestError: On transport failures.
        """
        city = city or self._config.city
        response = await self._http.get(
            f"{self._config.base_url}/weather",
            params={
                "q": city,
                "appid": self._config.api_key,
                "units": self._config.units,
                "lang": self._config.lang,
            },
        )
        response.raise_for_status()
        report = to_report(WeatherResponse.model_validate(response.json()))
        logger.info(f"Weather for {report.city}: {report.temperature}°C")
        return report

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
