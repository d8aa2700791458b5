from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TipCategory(str, Enum):
    PACKING = "packing"
    SAFETY = "safety"
    BUDGETING = "budgeting"
    CULTURAL = "cultural"


class CabinClass(str, Enum):
    ECONOMY = "economy"
    PREMIUM_ECONOMY = "premium_economy"
    BUSINESS = "business"
    FIRST = "first"


class DestinationSummary(WireModel):
    id: str
    name: str
    description: str


class Destination(WireModel):
    """Static catalog entry. Ids are unique lower-case slugs."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    attractions: List[str] = Field(default_factory=list)
    best_time_to_visit: str = ""
    average_cost: str = ""
    climate: str = ""

    def summary(self) -> DestinationSummary:
        return DestinationSummary(id=self.id, name=self.name, description=self.description)


class TravelTips(WireModel):
    category: TipCategory
    tips: List[str]


class FlightSearchRequest(WireModel):
    origin: str = Field(..., description="Origin airport code or city, e.g. 'JFK' or 'London'")
    destination: str
    depart_date: str = Field(..., description="YYYY-MM-DD")
    return_date: Optional[str] = None
    adults: int = 1
    cabin_class: CabinClass = CabinClass.ECONOMY


class FlightOffer(WireModel):
    """One itinerary, reduced to its first pricing option and first leg."""
    price: float = 0.0
    currency: str = "USD"
    airline: str = "Unknown"
    departure: str = ""
    arrival: str = ""
    duration: str = ""
    stops: int = 0
    deep_link: Optional[str] = None


class PlaceSuggestion(WireModel):
    name: str = ""
    entity_id: str = ""
    iata_code: Optional[str] = None
    city_name: Optional[str] = None
    country_name: Optional[str] = None
    type: Optional[str] = None


class Temperature(WireModel):
    max: float
    min: float
    unit: str = "C"


class WeatherForecast(WireModel):
    """Daily weather record built from the provider's hourly time series."""
    date: str
    location: str
    temperature: Temperature
    conditions: str
    precipitation: float = 0.0
    wind_speed: float = 0.0
    humidity: float = 0.0


class Attraction(WireModel):
    name: str = ""
    description: str = ""
    rating: float = 0.0
    review_count: int = 0
    category: str = "Attraction"
    address: Optional[str] = None
    price_level: Optional[str] = None
    url: Optional[str] = None


class Restaurant(WireModel):
    name: str = ""
    description: str = ""
    rating: float = 0.0
    review_count: int = 0
    cuisine: List[str] = Field(default_factory=list)
    price_level: Optional[str] = None
    address: Optional[str] = None
    url: Optional[str] = None


class ResolvedLocation(WireModel):
    """Provider-specific identifier for a free-text location.

    Weather lookups need coordinates; the TripAdvisor lookups only need `location_id`.
    """
    query: str
    location_id: str
    name: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
