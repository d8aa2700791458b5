import pytest
import requests

from conftest import LONDON, FakeResponse, FakeSession, failing_response, hourly_series, metoffice_payload, run
from mcp_tools_travel_guide.core.errors import ConfigurationError, NotFoundError, UpstreamError
from mcp_tools_travel_guide.core.schemas import CabinClass, FlightSearchRequest
from mcp_tools_travel_guide.services.attractions import TripAdvisorClient, parse_attractions, parse_restaurants
from mcp_tools_travel_guide.services.decode import as_float, as_int, as_list, dig
from mcp_tools_travel_guide.services.flights import MAX_FLIGHT_OFFERS, SkyscannerClient, parse_flight_offers
from mcp_tools_travel_guide.services.locations import LocationResolver, NominatimResolver, StaticLocationResolver
from mcp_tools_travel_guide.services.weather import MetOfficeClient, group_by_day, parse_forecast


# -- decode helpers ----------------------------------------------------------

def test_dig_tolerates_missing_and_wrong_shapes():
    data = {"a": [{"b": 1}], "n": None}

    assert dig(data, "a", 0, "b") == 1
    assert dig(data, "a", 3, "b", default="x") == "x"
    assert dig(data, "a", "b") is None
    assert dig(data, "n", default=0) == 0
    assert dig(None, "a") is None


def test_number_readers_default_on_garbage():
    assert as_float("2.5") == 2.5
    assert as_float("n/a") == 0.0
    assert as_float(True) == 0.0
    assert as_int("3") == 3
    assert as_int(None, default=7) == 7
    assert as_list({"x": 1}) == [1]
    assert as_list("nope") == []


# -- flights -----------------------------------------------------------------

def test_flight_offers_truncate_to_ten():
    data = {"itineraries": [{"pricingOptions": [{"price": {"amount": i}}]} for i in range(25)]}

    offers = parse_flight_offers(data)

    assert len(offers) == MAX_FLIGHT_OFFERS
    assert [o.price for o in offers] == [float(i) for i in range(10)]


def test_flight_offers_accept_id_keyed_itineraries():
    data = {"itineraries": {"abc": {"legs": [{"stopCount": 2, "carriers": {"marketing": [{"name": "KLM"}, {"name": "Delta"}]}}]}}}

    [offer] = parse_flight_offers(data)

    assert offer.airline == "KLM"
    assert offer.stops == 2
    assert offer.currency == "USD"


def test_malformed_flight_payload_degrades_to_empty():
    assert parse_flight_offers({"itineraries": "oops"}) == []
    assert parse_flight_offers(["not", "a", "dict"]) == []


def test_skyscanner_sends_key_header_and_defaults(settings):
    fake = FakeSession({"/flights/live/search/create": {"itineraries": []}})
    client = SkyscannerClient(session=fake, settings=settings)

    run(client.search_flights(FlightSearchRequest(origin="LHR", destination="JFK", depart_date="2026-11-01")))

    assert fake.sent_headers[0]["x-api-key"] == "sky-key"
    url, params = fake.calls[0]
    assert url == "https://partners.api.skyscanner.net/apiservices/v3/flights/live/search/create"
    assert params == {
        "originPlace": "LHR",
        "destinationPlace": "JFK",
        "outboundDate": "2026-11-01",
        "adults": 1,
        "cabinClass": CabinClass.ECONOMY.value,
    }


def test_skyscanner_without_key_raises_before_any_call(settings):
    fake = FakeSession()
    client = SkyscannerClient(api_key="", session=fake, settings=settings)

    with pytest.raises(ConfigurationError) as excinfo:
        run(client.get_place_suggestions("lon"))

    assert "Skyscanner API key is required" in excinfo.value.message
    assert fake.calls == []


def test_place_suggestions_are_parsed(settings):
    places = {"places": [{"name": "London Heathrow", "entityId": "95565050", "iataCode": "LHR", "type": "PLACE_TYPE_AIRPORT"}]}
    client = SkyscannerClient(session=FakeSession({"/autosuggest/flights": places}), settings=settings)

    [place] = run(client.get_place_suggestions("heath"))

    assert place.iata_code == "LHR"
    assert place.city_name is None


def test_invalid_json_is_an_upstream_error(settings):
    fake = FakeSession({"/flights/live/search/create": FakeResponse(body="<html>")})
    client = SkyscannerClient(session=fake, settings=settings)

    with pytest.raises(UpstreamError):
        run(client.search_flights(FlightSearchRequest(origin="A", destination="B", depart_date="2026-01-01")))


# -- weather -----------------------------------------------------------------

def test_group_by_day_uses_first_ten_characters():
    buckets = group_by_day(hourly_series(days=3))

    assert [b["date"] for b in buckets] == ["2026-10-18", "2026-10-19", "2026-10-20"]
    assert all(len(b["temps"]) == 24 for b in buckets)


def test_forecast_takes_min_max_and_first_sample_fields():
    [day] = parse_forecast(metoffice_payload(hourly_series(days=1)), days=1)

    assert day.temperature.max == 14.0
    assert day.temperature.min == 6.5
    assert day.temperature.unit == "C"
    assert day.conditions == "Cloudy"
    assert day.humidity == 80.0
    assert day.wind_speed == 3.5


def test_forecast_days_are_not_clamped():
    series = hourly_series(start_day=1, days=10)

    assert len(parse_forecast(metoffice_payload(series), days=9)) == 9


def test_forecast_missing_pieces_default():
    series = [{"time": "2026-10-18T00:00Z"}, {"time": "2026-10-18T01:00Z", "screenTemperature": 4.0}, {"nope": 1}]

    [day] = parse_forecast(metoffice_payload(series, name=None))

    assert day.location == "Unknown"
    assert day.conditions == "Unknown"
    assert day.temperature.min == 0.0
    assert day.temperature.max == 4.0
    assert day.precipitation == 0.0


def test_forecast_without_time_series_is_empty():
    assert parse_forecast({}) == []
    assert parse_forecast({"features": []}) == []


def test_met_office_requests_coordinates(settings):
    fake = FakeSession({"/point/hourly": metoffice_payload(hourly_series(days=2))})
    client = MetOfficeClient(session=fake, settings=settings, resolver=StaticLocationResolver({"london": LONDON}))

    current = run(client.get_current_weather("London"))

    assert current.date == "2026-10-18"
    assert fake.sent_headers[0]["apikey"] == "met-key"
    _, params = fake.calls[0]
    assert params["latitude"] == LONDON.latitude
    assert params["longitude"] == LONDON.longitude


def test_unresolvable_location_is_not_found(settings):
    fake = FakeSession()
    client = MetOfficeClient(session=fake, settings=settings, resolver=StaticLocationResolver({}))

    with pytest.raises(NotFoundError):
        run(client.get_forecast("Nowhere"))
    assert fake.calls == []


# -- location resolution -----------------------------------------------------

def test_static_resolver_default_entry():
    resolver = StaticLocationResolver({}, default=LONDON)

    hit = resolver.resolve("Anywhere")

    assert hit.location_id == LONDON.location_id
    assert hit.query == "Anywhere"


def test_nominatim_resolver_reads_first_hit():
    fake = FakeSession({"nominatim": [{"lat": "48.8566", "lon": "2.3522", "display_name": "Paris, France"}]})
    resolver = NominatimResolver(session=fake)

    hit = resolver.resolve("Paris")

    assert hit.latitude == pytest.approx(48.8566)
    assert hit.name == "Paris, France"
    assert fake.calls[0][1]["q"] == "Paris"


def test_nominatim_resolver_no_results():
    resolver = NominatimResolver(session=FakeSession({"nominatim": []}))

    with pytest.raises(NotFoundError):
        resolver.resolve("Xyzzy")


def test_location_resolver_is_abstract():
    with pytest.raises(TypeError):
        LocationResolver()


# -- attractions / restaurants ----------------------------------------------

def test_attractions_default_fields():
    data = {
        "data": [
            {"name": "Louvre", "rating": 4.7, "num_reviews": "1200", "subcategory": [{"name": "Museum"}],
             "address_obj": {"address_string": "Rue de Rivoli"}, "web_url": "https://example.test/louvre"},
            {"name": "Somewhere"},
        ]
    }

    louvre, other = parse_attractions(data)

    assert louvre.category == "Museum"
    assert louvre.review_count == 1200
    assert louvre.address == "Rue de Rivoli"
    assert other.category == "Attraction"
    assert other.rating == 0.0
    assert other.url is None


def test_restaurants_without_filter_keep_everything():
    data = {"data": [{"name": "A"}, {"name": "B", "cuisine": [{"name": "Thai"}]}]}

    assert [r.name for r in parse_restaurants(data)] == ["A", "B"]
    assert [r.name for r in parse_restaurants(data, "THAI")] == ["B"]


def test_tripadvisor_passes_category_and_location_id(settings):
    fake = FakeSession(
        {
            "/location/search": {"data": [{"location_id": "187147"}]},
            "/location/187147/attractions": {"data": [{"name": "Louvre"}]},
        }
    )
    client = TripAdvisorClient(session=fake, settings=settings)

    [louvre] = run(client.search_attractions("Paris", category="museum"))

    assert louvre.name == "Louvre"
    assert all(h["Referer"] == "http://localhost:3000" for h in fake.sent_headers)
    search_params = fake.calls[0][1]
    assert search_params == {"key": "ta-key", "searchQuery": "Paris", "language": "en"}
    assert fake.calls[1][1]["category"] == "museum"


def test_tripadvisor_unknown_location(settings):
    client = TripAdvisorClient(session=FakeSession({"/location/search": {"data": []}}), settings=settings)

    with pytest.raises(NotFoundError):
        run(client.search_restaurants("Atlantis"))


def test_tripadvisor_network_failure(settings):
    fake = FakeSession({"/location/search": requests.Timeout("read timed out")})
    client = TripAdvisorClient(session=fake, settings=settings)

    with pytest.raises(UpstreamError) as excinfo:
        run(client.search_attractions("Paris"))

    assert excinfo.value.message == "Failed to search attractions: Timeout"


def test_http_error_message_does_not_leak_the_api_key(settings, caplog):
    secret = "SECRET-TA-KEY"
    url = f"https://api.content.tripadvisor.com/api/v1/location/search?key={secret}&searchQuery=Paris"
    fake = FakeSession({"/location/search": failing_response(url)})
    client = TripAdvisorClient(api_key=secret, session=fake, settings=settings)

    with pytest.raises(UpstreamError) as excinfo:
        run(client.search_attractions("Paris"))

    assert excinfo.value.message == "Failed to search attractions: HTTP 404 Not Found"
    assert secret not in excinfo.value.message
    assert secret not in caplog.text


def test_injected_session_headers_are_left_alone(settings):
    fake = FakeSession({"/location/search": {"data": [{"location_id": "1"}]}, "/location/1/restaurants": {"data": []}})
    client = TripAdvisorClient(session=fake, settings=settings)

    run(client.search_restaurants("Paris"))

    assert fake.headers == {}
    assert len(fake.sent_headers) == 2
    assert fake.sent_headers[1]["accept"] == "application/json"


def test_close_releases_sessions(settings):
    fake = FakeSession()
    client = MetOfficeClient(session=fake, settings=settings, resolver=StaticLocationResolver({}))

    client.close()

    assert fake.closed
