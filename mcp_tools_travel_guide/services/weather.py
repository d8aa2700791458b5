"""Weather service (Met Office DataHub, site-specific hourly forecast).

The provider returns one flat hourly time series. We bucket it per calendar
day (first 10 characters of each timestamp) and report max/min temperature
over the bucket. Conditions, precipitation, wind and humidity are those of
the first sample of the day.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from ..core.errors import UpstreamError
from ..core.schemas import Temperature, WeatherForecast
from ..core.settings import Settings
from .base import ProviderClient, describe_failure
from .decode import as_float, as_int, as_list, as_str, dig
from .locations import LocationResolver, NominatimResolver

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_DAYS = 5

# Met Office significant weather codes
SIGNIFICANT_WEATHER: Dict[int, str] = {
    -1: "Trace rain",
    0: "Clear night",
    1: "Sunny day",
    2: "Partly cloudy (night)",
    3: "Partly cloudy (day)",
    5: "Mist",
    6: "Fog",
    7: "Cloudy",
    8: "Overcast",
    9: "Light rain shower (night)",
    10: "Light rain shower (day)",
    11: "Drizzle",
    12: "Light rain",
    13: "Heavy rain shower (night)",
    14: "Heavy rain shower (day)",
    15: "Heavy rain",
    16: "Sleet shower (night)",
    17: "Sleet shower (day)",
    18: "Sleet",
    19: "Hail shower (night)",
    20: "Hail shower (day)",
    21: "Hail",
    22: "Light snow shower (night)",
    23: "Light snow shower (day)",
    24: "Light snow",
    25: "Heavy snow shower (night)",
    26: "Heavy snow shower (day)",
    27: "Heavy snow",
    28: "Thunder shower (night)",
    29: "Thunder shower (day)",
    30: "Thunder",
}


class MetOfficeClient(ProviderClient):
    provider = "Met Office"
    api_key_env = "MET_OFFICE_API_KEY"
    api_key_setting = "met_office_api_key"
    base_url = "https://data.hub.api.metoffice.gov.uk/sitespecific/v0"

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        settings: Optional[Settings] = None,
        resolver: Optional[LocationResolver] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(api_key=api_key, session=session, settings=settings, **kwargs)
        self.resolver = resolver or NominatimResolver(
            user_agent=self.settings.nominatim_user_agent,
            timeout_s=self.timeout_s,
        )

    def default_headers(self) -> Dict[str, str]:
        return {"apikey": self.api_key, "Accept": "application/json"}

    async def get_forecast(self, location: str, days: int = DEFAULT_FORECAST_DAYS) -> List[WeatherForecast]:
        """Daily forecast for `location`, truncated to `days` entries.

        `days` is passed through as given (no 1-7 clamp).
        """
        self.require_api_key()
        return await asyncio.to_thread(self._get_forecast, location, days)

    async def get_current_weather(self, location: str) -> Optional[WeatherForecast]:
        forecasts = await self.get_forecast(location, 1)
        return forecasts[0] if forecasts else None

    def _get_forecast(self, location: str, days: int) -> List[WeatherForecast]:
        try:
            resolved = self.resolver.resolve(location)
            data = self.get_json(
                "/point/hourly",
                {
                    "latitude": resolved.latitude,
                    "longitude": resolved.longitude,
                    "includeLocationName": "true",
                },
            )
        except (requests.RequestException, ValueError) as exc:
            reason = describe_failure(exc)
            logger.warning("Met Office forecast failed for %r: %s", location, reason)
            raise UpstreamError(f"Failed to get weather forecast: {reason}") from exc
        return parse_forecast(data, days)

    def close(self) -> None:
        super().close()
        closer = getattr(self.resolver, "close", None)
        if closer is not None:
            closer()


def parse_forecast(data: Any, days: int = DEFAULT_FORECAST_DAYS) -> List[WeatherForecast]:
    properties = dig(data, "features", 0, "properties", default={})
    series = as_list(dig(properties, "timeSeries"))
    if not series:
        return []

    label = as_str(dig(properties, "location", "name"), "Unknown") or "Unknown"
    forecasts: List[WeatherForecast] = []
    for bucket in group_by_day(series)[:days]:
        forecasts.append(
            WeatherForecast(
                date=bucket["date"],
                location=label,
                temperature=Temperature(max=max(bucket["temps"]), min=min(bucket["temps"]), unit="C"),
                conditions=bucket["conditions"],
                precipitation=bucket["precipitation"],
                wind_speed=bucket["wind_speed"],
                humidity=bucket["humidity"],
            )
        )
    return forecasts


def group_by_day(series: List[Any]) -> List[Dict[str, Any]]:
    """Bucket hourly samples by date, keeping first-seen day order."""
    days: Dict[str, Dict[str, Any]] = {}
    for item in series:
        stamp = as_str(dig(item, "time"))
        if not stamp:
            continue
        key = stamp[:10]
        bucket = days.get(key)
        if bucket is None:
            bucket = days[key] = {
                "date": key,
                "temps": [],
                "conditions": _condition_label(dig(item, "significantWeatherCode")),
                "precipitation": as_float(dig(item, "totalPrecipAmount")),
                "wind_speed": as_float(dig(item, "windSpeed10m")),
                "humidity": as_float(dig(item, "screenRelativeHumidity")),
            }
        bucket["temps"].append(as_float(dig(item, "screenTemperature")))
    return list(days.values())


def _condition_label(code: Any) -> str:
    if code is None:
        return "Unknown"
    return SIGNIFICANT_WEATHER.get(as_int(code, default=-99), "Unknown")
