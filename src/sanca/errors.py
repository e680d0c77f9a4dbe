"""Exception types raised by sanca."""


class SancaError(Exception):
    """Base class for sanca errors."""


class UrlParseError(SancaError, ValueError):
    """Raised when a URL cannot be split into protocol, host, port and path."""

    def __init__(self, url: str):
        super().__init__(f"Unable to parse the provided URL: {url}")
        self.url = url
