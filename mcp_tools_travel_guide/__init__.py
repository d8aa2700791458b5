"""mcp_tools_travel_guide package

Purpose:
- Answer travel questions (destinations, tips, flights, weather, attractions, restaurants).
- Expose them as MCP tools over stdio or a small JSON-over-HTTP endpoint.

Structure:
- core/: schemas, errors, settings, static destination/tip catalog
- services/: upstream adapters (Skyscanner, Met Office, TripAdvisor) + location resolution
- mcp/: tool registry, dispatcher, transports
"""

from .core import Destination, FlightOffer, TravelCatalog, WeatherForecast  # noqa: F401
