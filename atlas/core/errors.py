"""Error types raised by the atlas core and its adapters."""


class AtlasError(Exception):
    """Base class for atlas viewer errors."""


class DataFetchError(AtlasError):
    """A data API lookup failed (transport, HTTP status or payload parsing)."""

    def __init__(self, message: str, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class PreconditionViolation(AtlasError):
    """An operation was invoked on state that does not satisfy its precondition.

    Raised e.g. when toggling a category that was never registered.
    """


class UISurfaceMissing(AtlasError):
    """An expected UI slot or indicator is absent; fatal configuration error."""
