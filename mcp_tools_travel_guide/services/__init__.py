from .attractions import TripAdvisorClient, TripAdvisorLocationResolver  # noqa: F401
from .flights import SkyscannerClient  # noqa: F401
from .locations import LocationResolver, NominatimResolver, StaticLocationResolver  # noqa: F401
from .weather import MetOfficeClient  # noqa: F401
