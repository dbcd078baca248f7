"""
Error types shared by the proxy and the client.

The proxy maps them onto HTTP responses; the client turns them into
short user-facing messages.
"""


class WeatherError(RuntimeError):
    """Raised for user-facing weather lookup failures."""
    pass


class MissingParameters(WeatherError):
    """Neither a city nor a full lat/lon pair was supplied."""

    def __init__(self, message: str = "Missing required parameters"):
        super().__init__(message)


class UpstreamUnavailable(WeatherError):
    """The upstream call failed in transport or returned a body we cannot read."""

    def __init__(self, message: str = "Failed to fetch weather data"):
        super().__init__(message)


class GeolocationUnavailable(WeatherError):
    """Position lookup was denied or failed."""
    pass
