from .catalog import TravelCatalog  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    InvalidArgumentError,
    InvalidCategoryError,
    MissingArgumentError,
    NotFoundError,
    TravelToolError,
    UnknownToolError,
    UpstreamError,
)
from .schemas import (  # noqa: F401
    Attraction,
    CabinClass,
    Destination,
    DestinationSummary,
    FlightOffer,
    FlightSearchRequest,
    PlaceSuggestion,
    ResolvedLocation,
    Restaurant,
    Temperature,
    TipCategory,
    TravelTips,
    WeatherForecast,
)
from .settings import Settings, get_settings  # noqa: F401
