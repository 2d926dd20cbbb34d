from dataclasses import dataclass
from enum import Enum
from typing import Union

Number = Union[int, float]


class Units(str, Enum):
    """Units of measurement. The API applies ``standard`` when none is sent."""

    STANDARD = "standard"
    METRIC = "metric"
    IMPERIAL = "imperial"


class Lang(str, Enum):
    """Languages the API can localize descriptions and names into."""

    AFRIKAANS = "af"
    ALBANIAN = "al"
    ARABIC = "ar"
    AZERBAIJANI = "az"
    BULGARIAN = "bg"
    CATALAN = "ca"
    CZECH = "cz"
    DANISH = "da"
    GERMAN = "de"
    GREEK = "el"
    ENGLISH = "en"
    BASQUE = "eu"
    PERSIAN_FARSI = "fa"
    FINNISH = "fi"
    FRENCH = "fr"
    GALICIAN = "gl"
    HEBREW = "he"
    HINDI = "hi"
    CROATIAN = "hr"
    HUNGARIAN = "hu"
    INDONESIAN = "id"
    ITALIAN = "it"
    JAPANESE = "ja"
    KOREAN = "kr"
    LATVIAN = "la"
    LITHUANIAN = "lt"
    MACEDONIAN = "mk"
    NORWEGIAN = "no"
    DUTCH = "nl"
    PORTUGUESE = "pt"
    PORTUGUESE_BRASIL = "pt_br"
    ROMANIAN = "ro"
    RUSSIAN = "ru"
    SWEDISH = "sv"
    SWEDISH_SE = "se"
    SLOVAK = "sk"
    SLOVENIAN = "sl"
    SPANISH_SP = "sp"
    SPANISH = "es"
    SERBIAN = "sr"
    THAI = "th"
    TURKISH = "tr"
    UKRAINIAN_UA = "ua"
    UKRAINIAN = "uk"
    VIETNAMESE = "vi"
    CHINESE_SIMPLIFIED = "zh_cn"
    CHINESE_TRADITIONAL = "zh_tw"
    ZULU = "zu"


class ApiNamespace(str, Enum):
    GEO = "geo/1.0"
    DATA = "data/2.5"


def format_number(value: Number) -> str:
    """Render a number the way it goes on the wire: ``1.0`` becomes ``1``, other floats keep their repr."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Coordinates:
    lat: Number
    lon: Number

    @property
    def cache_key(self) -> str:
        """``"{lat}.{lon}"``; equal coordinates always share a key.

        The format is ambiguous: (1, 5.2) and (1.5, 2) both give ``"1.5.2"``.
        """
        return f"{format_number(self.lat)}.{format_number(self.lon)}"
