"""Classified failures of transit API operations.

Every terminal failure of a fetch is one of the subclasses of
``TransitApiError``. Each carries a human-readable message suitable for
display and can describe itself as ``ErrorDetails``.
"""

from transit_departures.domain.models.error_details import ErrorDetails


class TransitApiError(Exception):
    """Base class for classified transit API failures."""

    reason = "Transit API request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)

    @property
    def message(self) -> str:
        """Human-readable description of the failure."""
        return str(self)

    @property
    def status_code(self) -> int | None:
        """HTTP status code, when the failure carries one."""
        return None

    def details(self) -> ErrorDetails:
        """Describe the failure for presentation."""
        return ErrorDetails(status_code=self.status_code, reason=self.message)


class MissingCredentialError(TransitApiError):
    """The API key is not configured."""

    reason = "API key not set"


class InvalidRequestError(TransitApiError):
    """The request URL could not be formed from the given identifiers."""

    reason = "Invalid URL"


class TransportError(TransitApiError):
    """The HTTP round trip failed (connection, DNS, timeout, cancellation)."""

    reason = "Network request failed"


class HttpStatusError(TransitApiError):
    """The server answered with a status other than 200."""

    def __init__(self, status_code: int) -> None:
        self._status_code = status_code
        super().__init__(f"Server error: {status_code}")

    @property
    def status_code(self) -> int | None:
        return self._status_code


class DecodeError(TransitApiError):
    """The response body is not a usable JSON document."""

    reason = "Invalid response from server"


class NoStopsFoundError(TransitApiError):
    """A stops fetch succeeded but yielded no usable stop records."""

    reason = "No stops found for this operator"
