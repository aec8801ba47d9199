class ContributionsError(Exception):
    """Base class for failures of a single fetch, normalize or export attempt."""


class ConfigurationError(ContributionsError):
    """Raised when the server is missing configuration it needs to reach GitHub."""


class TransportError(ContributionsError):
    """Raised when GitHub cannot be reached or answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderError(ContributionsError):
    """Raised when GitHub answers but reports an application-level error."""


class MalformedPayloadError(ContributionsError):
    """Raised when a calendar payload does not have the expected shape."""


class EmptyDatasetError(ContributionsError):
    """Raised when a valid calendar payload contains no contribution days."""


class NoSurfaceMountedError(ContributionsError):
    """Raised when a frame is requested while nothing is rendered."""
