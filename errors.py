"""
Error taxonomy for weather lookups.

Every error carries a short user-facing `message`; anything more
detailed (status codes, raw exceptions) goes in `detail` for the logs.
"""

GENERIC_MESSAGE = "Something went wrong."


class WeatherError(Exception):
    default_message = GENERIC_MESSAGE

    def __init__(self, message: str = "", detail: str = ""):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class NotFoundError(WeatherError):
    default_message = "City not found."


class UnsupportedError(WeatherError):
    default_message = "Geolocation is not supported."


class NetworkError(WeatherError):
    """Request failed, timed out, or came back with a non-2xx status."""


class ParseError(WeatherError):
    """Response was not JSON or lacked the fields we need."""


class PlatformLocationError(WeatherError):
    default_message = "Could not get location."
