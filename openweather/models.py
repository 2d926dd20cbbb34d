"""Response payloads returned by the OpenWeather endpoints.

Only structure lives here. Unknown fields are kept (``extra="allow"``) so a
new field on the API side never breaks parsing; a missing required field or
a value of the wrong shape raises :class:`pydantic.ValidationError`, which the
client turns into :class:`~openweather.exceptions.ResponseParseError`.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Coord(_Payload):
    lat: float
    lon: float


class WeatherCondition(_Payload):
    id: int
    main: str
    description: str
    icon: str


class Clouds(_Payload):
    all: int


class Wind(_Payload):
    speed: float
    deg: Optional[float] = None
    gust: Optional[float] = None


class Precipitation(_Payload):
    one_hour: Optional[float] = Field(default=None, alias="1h")
    three_hours: Optional[float] = Field(default=None, alias="3h")


class MainReadings(_Payload):
    temp: float
    feels_like: float
    pressure: float
    humidity: float
    temp_min: float
    temp_max: float
    sea_level: Optional[float] = None
    grnd_level: Optional[float] = None
    temp_kf: Optional[float] = None


class CurrentWeatherSys(_Payload):
    type: Optional[int] = None
    id: Optional[int] = None
    message: Optional[float] = None
    country: Optional[str] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


class CurrentWeather(_Payload):
    coord: Coord
    weather: List[WeatherCondition]
    base: Optional[str] = None
    main: MainReadings
    visibility: Optional[int] = None
    wind: Optional[Wind] = None
    clouds: Optional[Clouds] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None
    dt: int
    sys: Optional[CurrentWeatherSys] = None
    timezone: Optional[int] = None
    id: Optional[int] = None
    name: str
    cod: Optional[int] = None


class CoordinatesByLocationName(_Payload):
    name: str
    local_names: Optional[Dict[str, str]] = None
    lat: float
    lon: float
    country: str
    state: Optional[str] = None


class CoordinatesByZipOrPostCode(_Payload):
    zip: str
    name: str
    lat: float
    lon: float
    country: str


class LocationNameByCoordinates(_Payload):
    name: str
    local_names: Optional[Dict[str, str]] = None
    lat: float
    lon: float
    country: str
    state: Optional[str] = None


class ForecastSys(_Payload):
    pod: Optional[str] = None


class ForecastItem(_Payload):
    dt: int
    main: MainReadings
    weather: List[WeatherCondition]
    clouds: Optional[Clouds] = None
    wind: Optional[Wind] = None
    visibility: Optional[int] = None
    pop: Optional[float] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None
    sys: Optional[ForecastSys] = None
    dt_txt: Optional[str] = None


class ForecastCity(_Payload):
    id: Optional[int] = None
    name: Optional[str] = None
    coord: Optional[Coord] = None
    country: Optional[str] = None
    population: Optional[int] = None
    timezone: Optional[int] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None


class Forecast5days3hours(_Payload):
    cod: Optional[str] = None
    message: Optional[float] = None
    cnt: int
    list: List[ForecastItem]
    city: Optional[ForecastCity] = None
