"""Free-text location -> provider identifier.

Adapters take a `LocationResolver`, so the lookup strategy can be swapped
(geocoder, provider search endpoint, fixed table) without touching the adapter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

import requests

from ..core.errors import NotFoundError
from ..core.schemas import ResolvedLocation
from .decode import as_float, as_str, dig


class LocationResolver(ABC):
    @abstractmethod
    def resolve(self, location: str) -> ResolvedLocation:
        """Return the provider identifier for `location`; raise NotFoundError when there is none."""


class StaticLocationResolver(LocationResolver):
    """Case-insensitive table lookup, with an optional catch-all entry."""

    def __init__(
        self,
        table: Mapping[str, ResolvedLocation],
        default: Optional[ResolvedLocation] = None,
    ) -> None:
        self._table: Dict[str, ResolvedLocation] = {k.lower(): v for k, v in table.items()}
        self._default = default

    def resolve(self, location: str) -> ResolvedLocation:
        hit = self._table.get(location.strip().lower()) or self._default
        if hit is None:
            raise NotFoundError(f'Location "{location}" not found')
        return hit.model_copy(update={"query": location})


class NominatimResolver(LocationResolver):
    """Token-free geocoding via OSM Nominatim.

    Notes:
    - Nominatim requires a User-Agent header.
    - The location id is "lat,lon"; coordinates are also set on the result.
    """

    url = "https://nominatim.openstreetmap.org/search"

    def __init__(
        self,
        user_agent: str = "travel-guide-mcp/1.0 (local)",
        session: Optional[requests.Session] = None,
        timeout_s: int = 10,
    ) -> None:
        self.user_agent = user_agent
        self.session = session
        self.timeout_s = timeout_s

    def resolve(self, location: str) -> ResolvedLocation:
        params = {"q": location, "format": "json", "limit": 1}
        headers = {"User-Agent": self.user_agent}

        http = self.session if self.session is not None else requests
        r = http.get(self.url, params=params, headers=headers, timeout=self.timeout_s)
        r.raise_for_status()
        data = r.json()
        first = dig(data, 0)
        if first is None or dig(first, "lat") is None or dig(first, "lon") is None:
            raise NotFoundError(f'Location "{location}" not found')

        lat = as_float(first["lat"])
        lon = as_float(first["lon"])
        return ResolvedLocation(
            query=location,
            location_id=f"{lat:.4f},{lon:.4f}",
            name=as_str(dig(first, "display_name"), location),
            latitude=lat,
            longitude=lon,
        )

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
