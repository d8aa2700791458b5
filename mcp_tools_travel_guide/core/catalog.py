"""Static knowledge store: destinations and travel tips.

Everything here is immutable and built at import time; lookups never touch the network.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidCategoryError, NotFoundError
from .schemas import Destination, DestinationSummary, TipCategory, TravelTips


DESTINATIONS: Tuple[Destination, ...] = (
    Destination(
        id="paris",
        name="Paris, France",
        description="The City of Light, famous for the Eiffel Tower, Louvre Museum, and romantic atmosphere",
        attractions=["Eiffel Tower", "Louvre Museum", "Notre-Dame Cathedral", "Arc de Triomphe", "Champs-Élysées"],
        best_time_to_visit="April to June, September to October",
        average_cost="$150-300 per day",
        climate="Temperate oceanic climate",
    ),
    Destination(
        id="tokyo",
        name="Tokyo, Japan",
        description="A vibrant metropolis blending ultra-modern with traditional culture",
        attractions=["Tokyo Skytree", "Senso-ji Temple", "Shibuya Crossing", "Meiji Shrine", "Tsukiji Market"],
        best_time_to_visit="March to May, September to November",
        average_cost="$100-250 per day",
        climate="Humid subtropical climate",
    ),
    Destination(
        id="newyork",
        name="New York City, USA",
        description="The Big Apple, a global hub of culture, finance, and entertainment",
        attractions=["Statue of Liberty", "Central Park", "Times Square", "Empire State Building", "Brooklyn Bridge"],
        best_time_to_visit="April to June, September to November",
        average_cost="$200-400 per day",
        climate="Humid subtropical climate",
    ),
    Destination(
        id="barcelona",
        name="Barcelona, Spain",
        description="Known for its art, architecture, and Mediterranean beaches",
        attractions=["Sagrada Familia", "Park Güell", "La Rambla", "Gothic Quarter", "Casa Batlló"],
        best_time_to_visit="May to June, September to October",
        average_cost="$100-200 per day",
        climate="Mediterranean climate",
    ),
    Destination(
        id="sydney",
        name="Sydney, Australia",
        description="Famous for its harbor, opera house, and beautiful beaches",
        attractions=["Sydney Opera House", "Sydney Harbour Bridge", "Bondi Beach", "Taronga Zoo", "Royal Botanic Garden"],
        best_time_to_visit="September to November, March to May",
        average_cost="$150-300 per day",
        climate="Humid subtropical climate",
    ),
)

TRAVEL_TIPS: Mapping[TipCategory, Tuple[str, ...]] = {
    TipCategory.PACKING: (
        "Pack light and versatile clothing",
        "Bring a portable charger and universal adapter",
        "Keep important documents in a waterproof bag",
        "Pack medication in carry-on luggage",
        "Roll clothes to save space",
    ),
    TipCategory.SAFETY: (
        "Keep copies of important documents",
        "Register with your embassy",
        "Get travel insurance",
        "Stay aware of your surroundings",
        "Keep emergency contacts accessible",
    ),
    TipCategory.BUDGETING: (
        "Set a daily spending limit",
        "Use local currency",
        "Eat where locals eat",
        "Book accommodations in advance",
        "Use public transportation",
    ),
    TipCategory.CULTURAL: (
        "Learn basic phrases in the local language",
        "Research local customs and etiquette",
        "Dress appropriately for the culture",
        "Be respectful of local traditions",
        "Try local cuisine",
    ),
}


class TravelCatalog:
    """Read-only queries over the destination and tip tables."""

    def __init__(
        self,
        destinations: Sequence[Destination] = DESTINATIONS,
        tips: Mapping[TipCategory, Sequence[str]] = TRAVEL_TIPS,
    ) -> None:
        ids = [d.id for d in destinations]
        if len(set(ids)) != len(ids):
            raise ValueError("destination ids must be unique")
        if any(i != i.lower() for i in ids):
            raise ValueError("destination ids must be lower-case")

        self._destinations: Tuple[Destination, ...] = tuple(destinations)
        self._by_id: Dict[str, Destination] = {d.id: d for d in self._destinations}
        self._tips: Dict[TipCategory, Tuple[str, ...]] = {TipCategory(k): tuple(v) for k, v in tips.items()}

    @property
    def destination_ids(self) -> List[str]:
        return [d.id for d in self._destinations]

    def list_destinations(self) -> List[DestinationSummary]:
        return [d.summary() for d in self._destinations]

    def get_destination(self, destination: str) -> Destination:
        """Exact id match first (case-insensitive), then the first name containing the text."""
        needle = destination.lower()
        found: Optional[Destination] = self._by_id.get(needle)
        if found is None:
            found = next((d for d in self._destinations if needle in d.name.lower()), None)
        if found is None:
            raise NotFoundError(
                f'Destination "{destination}" not found. '
                f"Available destinations: {', '.join(self.destination_ids)}"
            )
        return found

    def search_destinations(self, query: str) -> List[Destination]:
        q = (query or "").lower()
        return [d for d in self._destinations if _matches(d, q)]

    def get_tips(self, category: str) -> TravelTips:
        try:
            key = TipCategory(category)
        except ValueError:
            raise InvalidCategoryError(
                f'Category "{category}" not found. '
                f"Available categories: {', '.join(c.value for c in TipCategory)}"
            ) from None
        return TravelTips(category=key, tips=list(self._tips.get(key, ())))


def _matches(destination: Destination, q: str) -> bool:
    return (
        q in destination.name.lower()
        or q in destination.description.lower()
        or any(q in a.lower() for a in destination.attractions)
    )
