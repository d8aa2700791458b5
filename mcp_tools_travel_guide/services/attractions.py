from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests

from ..core.errors import NotFoundError, UpstreamError
from ..core.schemas import Attraction, ResolvedLocation, Restaurant
from ..core.settings import Settings
from .base import ProviderClient, describe_failure
from .decode import as_float, as_int, as_list, as_optional_str, as_str, dig
from .locations import LocationResolver

logger = logging.getLogger(__name__)


class TripAdvisorClient(ProviderClient):
    """Attractions and restaurants from the TripAdvisor Content API."""

    provider = "TripAdvisor"
    api_key_env = "TRIPADVISOR_API_KEY"
    api_key_setting = "tripadvisor_api_key"
    base_url = "https://api.content.tripadvisor.com/api/v1"

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        settings: Optional[Settings] = None,
        resolver: Optional[LocationResolver] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(api_key=api_key, session=session, settings=settings, **kwargs)
        self.resolver = resolver or TripAdvisorLocationResolver(self)

    def default_headers(self) -> Dict[str, str]:
        return {"accept": "application/json", "Referer": self.settings.tripadvisor_referer}

    async def search_attractions(self, location: str, category: Optional[str] = None) -> List[Attraction]:
        self.require_api_key()
        return await asyncio.to_thread(self._search_attractions, location, category)

    async def search_restaurants(self, location: str, cuisine: Optional[str] = None) -> List[Restaurant]:
        self.require_api_key()
        return await asyncio.to_thread(self._search_restaurants, location, cuisine)

    def location_search(self, query: str) -> Any:
        return self.get_json("/location/search", {"key": self.api_key, "searchQuery": query, "language": "en"})

    def _search_attractions(self, location: str, category: Optional[str]) -> List[Attraction]:
        try:
            resolved = self.resolver.resolve(location)
            data = self.get_json(
                f"/location/{resolved.location_id}/attractions",
                {"key": self.api_key, "language": "en", "category": category},
            )
        except (requests.RequestException, ValueError) as exc:
            reason = describe_failure(exc)
            logger.warning("TripAdvisor attraction search failed for %r: %s", location, reason)
            raise UpstreamError(f"Failed to search attractions: {reason}") from exc
        return parse_attractions(data)

    def _search_restaurants(self, location: str, cuisine: Optional[str]) -> List[Restaurant]:
        try:
            resolved = self.resolver.resolve(location)
            data = self.get_json(
                f"/location/{resolved.location_id}/restaurants",
                {"key": self.api_key, "language": "en"},
            )
        except (requests.RequestException, ValueError) as exc:
            reason = describe_failure(exc)
            logger.warning("TripAdvisor restaurant search failed for %r: %s", location, reason)
            raise UpstreamError(f"Failed to search restaurants: {reason}") from exc
        return parse_restaurants(data, cuisine)


class TripAdvisorLocationResolver(LocationResolver):
    """Uses the provider's own search endpoint; the first hit wins."""

    def __init__(self, client: TripAdvisorClient) -> None:
        self.client = client

    def resolve(self, location: str) -> ResolvedLocation:
        data = self.client.location_search(location)
        first = dig(data, "data", 0, default={})
        location_id = as_str(dig(first, "location_id"))
        if not location_id:
            raise NotFoundError(f'Location "{location}" not found')
        return ResolvedLocation(query=location, location_id=location_id, name=as_str(dig(first, "name")))


def parse_attractions(data: Any) -> List[Attraction]:
    attractions: List[Attraction] = []
    for item in as_list(dig(data, "data")):
        attractions.append(
            Attraction(
                name=as_str(dig(item, "name")),
                description=as_str(dig(item, "description")),
                rating=as_float(dig(item, "rating")),
                review_count=as_int(dig(item, "num_reviews")),
                category=as_str(dig(item, "subcategory", 0, "name"), "Attraction") or "Attraction",
                address=as_optional_str(dig(item, "address_obj", "address_string")),
                price_level=as_optional_str(dig(item, "price_level")),
                url=as_optional_str(dig(item, "web_url")),
            )
        )
    return attractions


def parse_restaurants(data: Any, cuisine: Optional[str] = None) -> List[Restaurant]:
    """Parse restaurants; with `cuisine`, drop items whose cuisine list has no case-insensitive substring match."""
    wanted = (cuisine or "").lower()
    restaurants: List[Restaurant] = []
    for item in as_list(dig(data, "data")):
        cuisines = [as_str(dig(c, "name")) for c in as_list(dig(item, "cuisine"))]
        cuisines = [c for c in cuisines if c]
        if wanted and not any(wanted in c.lower() for c in cuisines):
            continue
        restaurants.append(
            Restaurant(
                name=as_str(dig(item, "name")),
                description=as_str(dig(item, "description")),
                rating=as_float(dig(item, "rating")),
                review_count=as_int(dig(item, "num_reviews")),
                cuisine=cuisines,
                price_level=as_optional_str(dig(item, "price_level")),
                address=as_optional_str(dig(item, "address_obj", "address_string")),
                url=as_optional_str(dig(item, "web_url")),
            )
        )
    return restaurants
