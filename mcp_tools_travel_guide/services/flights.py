from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List

import requests

from ..core.errors import UpstreamError
from ..core.schemas import FlightOffer, FlightSearchRequest, PlaceSuggestion
from .base import ProviderClient, describe_failure
from .decode import as_dict, as_float, as_int, as_list, as_optional_str, as_str, dig

logger = logging.getLogger(__name__)

MAX_FLIGHT_OFFERS = 10


class SkyscannerClient(ProviderClient):
    """Flight search and place autosuggest (information only, no booking)."""

    provider = "Skyscanner"
    api_key_env = "SKYSCANNER_API_KEY"
    api_key_setting = "skyscanner_api_key"
    base_url = "https://partners.api.skyscanner.net"

    def default_headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key, "Content-Type": "application/json"}

    async def search_flights(self, request: FlightSearchRequest) -> List[FlightOffer]:
        self.require_api_key()
        return await asyncio.to_thread(self._search_flights, request)

    async def get_place_suggestions(self, query: str) -> List[PlaceSuggestion]:
        self.require_api_key()
        return await asyncio.to_thread(self._get_place_suggestions, query)

    def _search_flights(self, request: FlightSearchRequest) -> List[FlightOffer]:
        params = {
            "originPlace": request.origin,
            "destinationPlace": request.destination,
            "outboundDate": request.depart_date,
            "inboundDate": request.return_date,
            "adults": request.adults or 1,
            "cabinClass": request.cabin_class.value,
        }
        try:
            data = self.get_json("/apiservices/v3/flights/live/search/create", params)
        except (requests.RequestException, ValueError) as exc:
            reason = describe_failure(exc)
            logger.warning("Skyscanner flight search failed: %s", reason)
            raise UpstreamError(f"Failed to search flights: {reason}") from exc
        return parse_flight_offers(data)

    def _get_place_suggestions(self, query: str) -> List[PlaceSuggestion]:
        try:
            data = self.get_json("/apiservices/v3/autosuggest/flights", {"query": query})
        except (requests.RequestException, ValueError) as exc:
            reason = describe_failure(exc)
            logger.warning("Skyscanner autosuggest failed: %s", reason)
            raise UpstreamError(f"Failed to get place suggestions: {reason}") from exc
        return parse_place_suggestions(data)


def parse_flight_offers(data: Any) -> List[FlightOffer]:
    """Map up to MAX_FLIGHT_OFFERS itineraries; first pricing option, first leg, first marketing carrier."""
    itineraries = as_list(dig(data, "itineraries"))
    offers: List[FlightOffer] = []
    for itinerary in itineraries[:MAX_FLIGHT_OFFERS]:
        pricing = as_dict(dig(itinerary, "pricingOptions", 0))
        leg = as_dict(dig(itinerary, "legs", 0))
        offers.append(
            FlightOffer(
                price=as_float(dig(pricing, "price", "amount")),
                currency=as_str(dig(pricing, "price", "unit"), "USD") or "USD",
                airline=as_str(dig(leg, "carriers", "marketing", 0, "name"), "Unknown") or "Unknown",
                departure=as_str(dig(leg, "departure")),
                arrival=as_str(dig(leg, "arrival")),
                duration=as_str(dig(leg, "duration")),
                stops=as_int(dig(leg, "stopCount")),
                deep_link=as_optional_str(dig(pricing, "deepLink")),
            )
        )
    return offers


def parse_place_suggestions(data: Any) -> List[PlaceSuggestion]:
    places: List[PlaceSuggestion] = []
    for place in as_list(dig(data, "places")):
        places.append(
            PlaceSuggestion(
                name=as_str(dig(place, "name")),
                entity_id=as_str(dig(place, "entityId")),
                iata_code=as_optional_str(dig(place, "iataCode")),
                city_name=as_optional_str(dig(place, "cityName")),
                country_name=as_optional_str(dig(place, "countryName")),
                type=as_optional_str(dig(place, "type")),
            )
        )
    return places
