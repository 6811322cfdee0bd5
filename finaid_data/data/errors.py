"""Errors raised by the data clients."""


class FinAidDataError(Exception):
    """Base class for data client errors."""


class UpstreamHTTPError(FinAidDataError):
    """An upstream API answered with a non-2xx status."""

    def __init__(self, source: str, status_code: int, body: str = "") -> None:
        self.source = source
        self.status_code = status_code
        self.body = body
        super().__init__(f"{source} API error: {status_code}")


class InsufficientDataError(FinAidDataError):
    """A derived value needs more observations than upstream returned."""
