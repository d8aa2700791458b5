from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, List, Optional, Tuple

import pytest
import requests

from mcp_tools_travel_guide.core.catalog import TravelCatalog
from mcp_tools_travel_guide.core.schemas import ResolvedLocation
from mcp_tools_travel_guide.core.settings import Settings
from mcp_tools_travel_guide.mcp.dispatcher import ToolDispatcher
from mcp_tools_travel_guide.services.attractions import TripAdvisorClient
from mcp_tools_travel_guide.services.flights import SkyscannerClient
from mcp_tools_travel_guide.services.locations import StaticLocationResolver
from mcp_tools_travel_guide.services.weather import MetOfficeClient


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, body: Optional[str] = None) -> None:
        self.payload = payload
        self.status_code = status_code
        self.body = body

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self) -> Any:
        if self.body is not None:
            return json.loads(self.body)
        return self.payload


class FakeSession:
    """Stands in for requests.Session: answers by URL path fragment and records every call."""

    def __init__(self, routes: Optional[Dict[str, Any]] = None) -> None:
        self.routes = routes or {}
        self.headers: Dict[str, str] = {}
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.sent_headers: List[Dict[str, str]] = []
        self.closed = False

    def get(self, url: str, params: Optional[Dict[str, Any]] = None, headers: Any = None, timeout: Any = None) -> Any:
        self.calls.append((url, dict(params or {})))
        self.sent_headers.append(dict(headers or {}))
        for fragment, answer in self.routes.items():
            if fragment in url:
                if isinstance(answer, Exception):
                    raise answer
                if isinstance(answer, (FakeResponse, requests.Response)):
                    return answer
                return FakeResponse(answer)
        return FakeResponse({}, status_code=404)

    def close(self) -> None:
        self.closed = True


LONDON = ResolvedLocation(query="London", location_id="51.5074,-0.1278", name="London", latitude=51.5074, longitude=-0.1278)


def hourly_series(start_day: int = 18, days: int = 3) -> List[Dict[str, Any]]:
    """`days` * 24 hourly samples with a temperature curve peaking mid-afternoon."""
    series = []
    for d in range(days):
        for h in range(24):
            series.append(
                {
                    "time": f"2026-10-{start_day + d:02d}T{h:02d}:00Z",
                    "screenTemperature": 8.0 + d + (6.0 - abs(15 - h) * 0.5),
                    "totalPrecipAmount": 0.2 * d,
                    "windSpeed10m": 3.5 + h / 10,
                    "screenRelativeHumidity": 80.0 - h,
                    "significantWeatherCode": 7 if d == 0 else 12,
                }
            )
    return series


def metoffice_payload(series: List[Dict[str, Any]], name: Optional[str] = "London") -> Dict[str, Any]:
    properties: Dict[str, Any] = {"timeSeries": series}
    if name is not None:
        properties["location"] = {"name": name}
    return {"type": "FeatureCollection", "features": [{"type": "Feature", "properties": properties}]}


def failing_response(url: str, status_code: int = 404, reason: str = "Not Found") -> requests.Response:
    """A real requests.Response whose raise_for_status() builds its own message from `url`."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = url
    return response


def run(coro: Any) -> Any:
    return asyncio.run(coro)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        skyscanner_api_key="sky-key",
        met_office_api_key="met-key",
        tripadvisor_api_key="ta-key",
        tripadvisor_referer="http://localhost:3000",
        http_mode=False,
        port=None,
    )


@pytest.fixture
def catalog() -> TravelCatalog:
    return TravelCatalog()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def make_dispatcher(settings: Settings):
    """Dispatcher whose three adapters share one FakeSession (weather resolves via a static table)."""

    def _make(routes: Optional[Dict[str, Any]] = None, api_keys: bool = True) -> Tuple[ToolDispatcher, FakeSession]:
        fake = FakeSession(routes)
        key = None if api_keys else ""
        dispatcher = ToolDispatcher(
            flights=SkyscannerClient(api_key=key, session=fake, settings=settings),
            weather=MetOfficeClient(
                api_key=key,
                session=fake,
                settings=settings,
                resolver=StaticLocationResolver({"london": LONDON}),
            ),
            places=TripAdvisorClient(api_key=key, session=fake, settings=settings),
        )
        return dispatcher, fake

    return _make
