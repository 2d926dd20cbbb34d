from typing import Optional


class OpenWeatherError(Exception):
    pass


class ValidationError(OpenWeatherError):
    pass


class TransportError(OpenWeatherError):
    def __init__(self, status: int, status_text: str = ""):
        self.status = status
        self.status_text = status_text
        super().__init__(f"{status} - {status_text}")


class NetworkError(OpenWeatherError):
    pass


class ResponseParseError(OpenWeatherError):
    def __init__(self, message: str, body: Optional[bytes] = None):
        self.body = body
        super().__init__(message)
