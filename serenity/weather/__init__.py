from serenity.weather.client import WeatherClient, to_report

__all__ = ["WeatherClient", "to_report"]
