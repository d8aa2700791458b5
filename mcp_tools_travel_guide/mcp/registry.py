"""The public tool contract: names, descriptions and input schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.schemas import CabinClass, TipCategory


class ToolParameter(BaseModel):
    type: str
    description: str
    required: bool = False
    enum: Optional[List[str]] = None
    # an empty string satisfies the requirement (e.g. an empty search query matches everything)
    allow_empty: bool = False


class ToolDescriptor(BaseModel):
    name: str
    description: str
    parameters: Dict[str, ToolParameter] = Field(default_factory=dict)

    @property
    def required(self) -> List[str]:
        return [key for key, p in self.parameters.items() if p.required]

    def missing(self, arguments: Dict[str, Any]) -> List[str]:
        """Required keys that are absent, null or (unless allowed) empty strings in `arguments`."""
        missing = []
        for key in self.required:
            value = arguments.get(key)
            if value is None or (value == "" and not self.parameters[key].allow_empty):
                missing.append(key)
        return missing

    def input_schema(self) -> Dict[str, Any]:
        properties: Dict[str, Any] = {}
        for key, p in self.parameters.items():
            prop: Dict[str, Any] = {"type": p.type, "description": p.description}
            if p.enum:
                prop["enum"] = list(p.enum)
            properties[key] = prop
        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        if self.required:
            schema["required"] = self.required
        return schema

    def to_wire(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema()}


def _string(
    description: str,
    required: bool = False,
    enum: Optional[List[str]] = None,
    allow_empty: bool = False,
) -> ToolParameter:
    return ToolParameter(type="string", description=description, required=required, enum=enum, allow_empty=allow_empty)


def _number(description: str) -> ToolParameter:
    return ToolParameter(type="number", description=description)


TOOLS: List[ToolDescriptor] = [
    ToolDescriptor(
        name="get_destination_info",
        description=(
            "Get detailed information about a travel destination including attractions, "
            "best time to visit, and costs"
        ),
        parameters={
            "destination": _string(
                "The destination to get information about (e.g., paris, tokyo, newyork, barcelona, sydney)",
                required=True,
            ),
        },
    ),
    ToolDescriptor(
        name="list_destinations",
        description="List all available travel destinations with brief descriptions",
    ),
    ToolDescriptor(
        name="get_travel_tips",
        description="Get travel tips for a specific category",
        parameters={
            "category": _string(
                "Category of travel tips (packing, safety, budgeting, cultural)",
                required=True,
                enum=[c.value for c in TipCategory],
            ),
        },
    ),
    ToolDescriptor(
        name="search_destinations",
        description="Search destinations by keyword in name, description or attractions",
        parameters={"query": _string("Search query to find destinations", required=True, allow_empty=True)},
    ),
    ToolDescriptor(
        name="search_flights",
        description="Search for flights between two locations (information only, no booking)",
        parameters={
            "origin": _string("Origin airport code or city (e.g., JFK, London)", required=True),
            "destination": _string("Destination airport code or city", required=True),
            "departDate": _string("Departure date in YYYY-MM-DD format", required=True),
            "returnDate": _string("Return date in YYYY-MM-DD format (optional for one-way)"),
            "adults": _number("Number of adult passengers (default: 1)"),
            "cabinClass": _string("Cabin class preference", enum=[c.value for c in CabinClass]),
        },
    ),
    ToolDescriptor(
        name="get_weather_forecast",
        description="Get weather forecast for a destination",
        parameters={
            "location": _string("Location to get weather forecast for", required=True),
            "days": _number("Number of days to forecast (1-7, default: 5)"),
        },
    ),
    ToolDescriptor(
        name="search_attractions",
        description="Search for attractions and things to do in a location",
        parameters={
            "location": _string("Location to search for attractions", required=True),
            "category": _string("Category filter (e.g., museum, park, historic)"),
        },
    ),
    ToolDescriptor(
        name="search_restaurants",
        description="Search for restaurants in a location",
        parameters={
            "location": _string("Location to search for restaurants", required=True),
            "cuisine": _string("Cuisine type filter (e.g., Italian, Japanese)"),
        },
    ),
    ToolDescriptor(
        name="get_place_suggestions",
        description="Suggest airports and cities matching a free-text query, for use with search_flights",
        parameters={"query": _string("Partial place name, e.g. 'lond' or 'New Yo'", required=True)},
    ),
]
