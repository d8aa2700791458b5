"""Typed tool arguments.

Each tool has its own model tagged with a `tool` literal; the union is parsed in
one step, so handlers only ever see a validated model.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import ConfigDict, Field, TypeAdapter, ValidationError

from ..core.errors import InvalidArgumentError
from ..core.schemas import CabinClass, FlightSearchRequest, WireModel


class _Arguments(WireModel):
    model_config = ConfigDict(extra="ignore")


class ListDestinationsArgs(_Arguments):
    tool: Literal["list_destinations"] = "list_destinations"


class GetDestinationInfoArgs(_Arguments):
    tool: Literal["get_destination_info"] = "get_destination_info"
    destination: str


class GetTravelTipsArgs(_Arguments):
    tool: Literal["get_travel_tips"] = "get_travel_tips"
    # free text on purpose: unknown categories are reported by the catalog
    category: str


class SearchDestinationsArgs(_Arguments):
    tool: Literal["search_destinations"] = "search_destinations"
    query: str


class SearchFlightsArgs(_Arguments):
    tool: Literal["search_flights"] = "search_flights"
    origin: str
    destination: str
    depart_date: str
    return_date: Optional[str] = None
    adults: Optional[int] = None
    cabin_class: Optional[CabinClass] = None

    def to_request(self) -> FlightSearchRequest:
        return FlightSearchRequest(
            origin=self.origin,
            destination=self.destination,
            depart_date=self.depart_date,
            return_date=self.return_date,
            adults=self.adults or 1,
            cabin_class=self.cabin_class or CabinClass.ECONOMY,
        )


class GetWeatherForecastArgs(_Arguments):
    tool: Literal["get_weather_forecast"] = "get_weather_forecast"
    location: str
    days: Optional[int] = None


class SearchAttractionsArgs(_Arguments):
    tool: Literal["search_attractions"] = "search_attractions"
    location: str
    category: Optional[str] = None


class SearchRestaurantsArgs(_Arguments):
    tool: Literal["search_restaurants"] = "search_restaurants"
    location: str
    cuisine: Optional[str] = None


class GetPlaceSuggestionsArgs(_Arguments):
    tool: Literal["get_place_suggestions"] = "get_place_suggestions"
    query: str


ToolArguments = Annotated[
    Union[
        ListDestinationsArgs,
        GetDestinationInfoArgs,
        GetTravelTipsArgs,
        SearchDestinationsArgs,
        SearchFlightsArgs,
        GetWeatherForecastArgs,
        SearchAttractionsArgs,
        SearchRestaurantsArgs,
        GetPlaceSuggestionsArgs,
    ],
    Field(discriminator="tool"),
]

_ADAPTER: TypeAdapter[Any] = TypeAdapter(ToolArguments)


def parse_arguments(name: str, arguments: Dict[str, Any]) -> Any:
    """Build the typed argument model for tool `name`."""
    payload = {k: v for k, v in arguments.items() if v is not None}
    payload["tool"] = name
    try:
        return _ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise InvalidArgumentError(f"Invalid arguments for {name}: {_describe(exc)}") from None


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        # the first location element is the union tag
        loc = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)
