"""Routes tool calls to the catalog or an upstream adapter.

Stateless: every call is validated, executed and wrapped independently. A
failing tool never raises out of `call_tool`; it comes back as an error envelope.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, TypeAdapter

from ..core.catalog import TravelCatalog
from ..core.errors import InvalidArgumentError, MissingArgumentError, TravelToolError, UnknownToolError
from ..core.schemas import WireModel
from ..core.settings import Settings, get_settings
from ..services.attractions import TripAdvisorClient
from ..services.flights import SkyscannerClient
from ..services.weather import DEFAULT_FORECAST_DAYS, MetOfficeClient
from . import arguments as a
from .registry import TOOLS, ToolDescriptor

logger = logging.getLogger(__name__)

FLIGHT_NOTE = (
    "Flight information is for reference only. "
    "Please visit airline websites or travel agencies for booking."
)

_JSONABLE: TypeAdapter[Any] = TypeAdapter(Any)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(WireModel):
    """Uniform envelope: text blocks plus an isError flag."""
    content: List[TextContent]
    is_error: bool = False

    @classmethod
    def ok(cls, payload: Any) -> "ToolResponse":
        return cls(content=[TextContent(text=render_payload(payload))])

    @classmethod
    def error(cls, message: str) -> "ToolResponse":
        return cls(content=[TextContent(text=message)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def render_payload(payload: Any) -> str:
    """Pretty-printed JSON; models use their camelCase names and drop unset optionals."""
    data = _JSONABLE.dump_python(payload, mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, indent=2, ensure_ascii=False)


Handler = Callable[[Any], Awaitable[Any]]


class ToolDispatcher:
    def __init__(
        self,
        catalog: Optional[TravelCatalog] = None,
        flights: Optional[SkyscannerClient] = None,
        weather: Optional[MetOfficeClient] = None,
        places: Optional[TripAdvisorClient] = None,
        tools: Optional[List[ToolDescriptor]] = None,
    ) -> None:
        self.catalog = catalog or TravelCatalog()
        self.flights = flights or SkyscannerClient()
        self.weather = weather or MetOfficeClient()
        self.places = places or TripAdvisorClient()
        self._tools: List[ToolDescriptor] = list(tools if tools is not None else TOOLS)
        self._by_name: Dict[str, ToolDescriptor] = {t.name: t for t in self._tools}
        self._handlers: Dict[str, Handler] = {
            "list_destinations": self._list_destinations,
            "get_destination_info": self._get_destination_info,
            "get_travel_tips": self._get_travel_tips,
            "search_destinations": self._search_destinations,
            "search_flights": self._search_flights,
            "get_weather_forecast": self._get_weather_forecast,
            "search_attractions": self._search_attractions,
            "search_restaurants": self._search_restaurants,
            "get_place_suggestions": self._get_place_suggestions,
        }

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ToolDispatcher":
        settings = settings or get_settings()
        dispatcher = cls(
            flights=SkyscannerClient(settings=settings),
            weather=MetOfficeClient(settings=settings),
            places=TripAdvisorClient(settings=settings),
        )
        for client in (dispatcher.flights, dispatcher.weather, dispatcher.places):
            if not client.configured:
                logger.warning("%s is not set; %s tools will return errors", client.api_key_env, client.provider)
        return dispatcher

    def list_tools(self) -> List[ToolDescriptor]:
        return list(self._tools)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResponse:
        arguments = {} if arguments is None else arguments
        try:
            descriptor = self._by_name.get(name)
            if descriptor is None or name not in self._handlers:
                raise UnknownToolError(name)
            if not isinstance(arguments, dict):
                raise InvalidArgumentError(f"Invalid arguments for {name}: expected an object")
            logger.info("%s called with: %s", name, ", ".join(sorted(arguments)) or "-")

            missing = descriptor.missing(arguments)
            if missing:
                raise MissingArgumentError(descriptor.required)

            args = a.parse_arguments(name, arguments)
            payload = await self._handlers[name](args)
        except TravelToolError as exc:
            logger.warning("%s failed (%s): %s", name, exc.kind, exc.message)
            return ToolResponse.error(exc.message)
        except Exception as exc:
            logger.exception("%s raised an unexpected error", name)
            return ToolResponse.error(f"Error: {exc}")
        return ToolResponse.ok(payload)

    def close(self) -> None:
        for client in (self.flights, self.weather, self.places):
            client.close()

    # -- knowledge store -----------------------------------------------------

    async def _list_destinations(self, args: a.ListDestinationsArgs) -> Any:
        return self.catalog.list_destinations()

    async def _get_destination_info(self, args: a.GetDestinationInfoArgs) -> Any:
        return self.catalog.get_destination(args.destination)

    async def _get_travel_tips(self, args: a.GetTravelTipsArgs) -> Any:
        return self.catalog.get_tips(args.category)

    async def _search_destinations(self, args: a.SearchDestinationsArgs) -> Any:
        return self.catalog.search_destinations(args.query)

    # -- upstream adapters ---------------------------------------------------

    async def _search_flights(self, args: a.SearchFlightsArgs) -> Any:
        flights = await self.flights.search_flights(args.to_request())
        return {"flights": flights, "note": FLIGHT_NOTE}

    async def _get_weather_forecast(self, args: a.GetWeatherForecastArgs) -> Any:
        return await self.weather.get_forecast(args.location, args.days or DEFAULT_FORECAST_DAYS)

    async def _search_attractions(self, args: a.SearchAttractionsArgs) -> Any:
        return await self.places.search_attractions(args.location, args.category)

    async def _search_restaurants(self, args: a.SearchRestaurantsArgs) -> Any:
        return await self.places.search_restaurants(args.location, args.cuisine)

    async def _get_place_suggestions(self, args: a.GetPlaceSuggestionsArgs) -> Any:
        return await self.flights.get_place_suggestions(args.query)
