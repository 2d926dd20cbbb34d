import pytest

from openweather import validation
from openweather.cache import MemoryCache
from openweather.cache_handler import DISABLED
from openweather.config import ClientOptions, Defaults
from openweather.exceptions import OpenWeatherError, ValidationError
from openweather.types import Coordinates, Lang, Units


def test_validation_error_is_an_openweather_error():
    assert issubclass(ValidationError, OpenWeatherError)


def test_client_options_must_be_client_options():
    with pytest.raises(ValidationError, match="'options'"):
        validation.validate_client_options(None)
    with pytest.raises(ValidationError, match="api_key"):
        validation.validate_client_options(ClientOptions(api_key=None))
    with pytest.raises(ValidationError, match="api_url"):
        validation.validate_client_options(ClientOptions(api_key="k", api_url=8080))
    with pytest.raises(ValidationError, match="defaults"):
        validation.validate_client_options(ClientOptions(api_key="k", defaults={"units": "metric"}))


def test_client_options_defaults_are_normalized():
    options = validation.validate_client_options(
        ClientOptions(api_key="k", defaults=Defaults(units="metric", lang="pt_br", coordinates={"lat": 1, "lon": 2.5}))
    )
    assert options.defaults == Defaults(units=Units.METRIC, lang=Lang.PORTUGUESE_BRASIL, coordinates=Coordinates(1, 2.5))


def test_client_options_default_errors_name_the_field():
    with pytest.raises(ValidationError, match="options.defaults.lang"):
        validation.validate_client_options(ClientOptions(api_key="k", defaults=Defaults(lang="xx")))
    with pytest.raises(ValidationError, match="options.defaults.coordinates"):
        validation.validate_client_options(ClientOptions(api_key="k", defaults=Defaults(coordinates={"lat": 1})))


def test_client_options_caches():
    store = MemoryCache(sweep_delay=60)
    options = validation.validate_client_options(
        ClientOptions(api_key="k", caches={"current_weather": store, "forecast_5days_3hours": DISABLED})
    )
    assert options.caches["current_weather"] is store

    with pytest.raises(ValidationError, match="weather_by_city"):
        validation.validate_client_options(ClientOptions(api_key="k", caches={"weather_by_city": store}))
    with pytest.raises(ValidationError, match="options.caches.current_weather"):
        validation.validate_client_options(ClientOptions(api_key="k", caches={"current_weather": {}}))


def test_query_and_zip_code_must_be_strings():
    validation.validate_query("London,GB")
    validation.validate_zip_code("E14,GB")
    with pytest.raises(ValidationError, match="query"):
        validation.validate_query(123)
    with pytest.raises(ValidationError, match="zipCode"):
        validation.validate_zip_code(123)


@pytest.mark.parametrize("coordinates", [123, "1,2", {"lat": "1", "lon": 2}, {"lat": 1, "lon": None},
                                         {"lat": 1}, {"lat": True, "lon": 2}, Coordinates("1", 2)])
def test_malformed_coordinates(coordinates):
    with pytest.raises(ValidationError, match="Invalid 'coordinates'"):
        validation.validate_coordinates(coordinates)


def test_coordinates_fall_back_to_default():
    default = Coordinates(lat=10, lon=20)
    assert validation.validate_coordinates(None, default) is default
    assert validation.validate_coordinates({"lat": 1, "lon": 2}, default) == Coordinates(1, 2)
    with pytest.raises(ValidationError, match="wasn't provided and no default has been set"):
        validation.validate_coordinates(None)


@pytest.mark.parametrize("limit", [None, 0, 3, 5])
def test_valid_limit(limit):
    validation.validate_limit(limit)


@pytest.mark.parametrize("limit", [-1, 6, 1.5, "string", False])
def test_invalid_limit(limit):
    with pytest.raises(ValidationError, match="limit"):
        validation.validate_limit(limit)


def test_cnt_only_needs_to_be_a_number():
    validation.validate_cnt(None)
    validation.validate_cnt(0)
    validation.validate_cnt(1000)
    validation.validate_cnt(2.5)
    with pytest.raises(ValidationError, match="cnt"):
        validation.validate_cnt("hi")


def test_lang():
    assert validation.validate_lang(None) is None
    assert validation.validate_lang("zh_tw") is Lang.CHINESE_TRADITIONAL
    assert validation.validate_lang(Lang.ENGLISH) is Lang.ENGLISH
    assert len(Lang) == 48
    for bad in ({}, "EN", "english", 1):
        with pytest.raises(ValidationError, match="lang"):
            validation.validate_lang(bad)


def test_units():
    assert validation.validate_units("imperial") is Units.IMPERIAL
    assert validation.validate_units(None) is None
    for bad in ("imperialllll", "Metric", 0):
        with pytest.raises(ValidationError, match="units"):
            validation.validate_units(bad)
