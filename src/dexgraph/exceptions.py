"""Exception taxonomy for the dexgraph library.

Everything a lookup can fail with is a subclass of :class:`DexGraphError`;
transport-library exceptions are always translated before they reach callers.
"""

import httpx


class DexGraphError(Exception):
    """Base exception class for all dexgraph errors."""

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
        request: httpx.Request | None = None,
    ):
        """Initializes the base exception.

        Args:
            message: The error message.
            response: Optional httpx.Response object associated with the error.
            request: Optional httpx.Request object associated with the error.
        """
        super().__init__(message)
        self.message = message
        self.response = response
        self.request = request

    def __str__(self) -> str:
        if self.response is not None:
            url_info = getattr(getattr(self.response, "request", None), "url", "N/A")
            return (
                f"{self.message} (Status: {self.response.status_code}, URL: {url_info})"
            )
        if isinstance(self.request, httpx.Request):
            return f"{self.message} (URL: {self.request.url})"
        return self.message


class UnrecognizedEndpointError(DexGraphError):
    """A URL or path could not be normalized into a resource identifier."""

    def __init__(self, url: str, reason: str | None = None):
        message = f"Unrecognized endpoint {url!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.url = url
        self.reason = reason


class UnknownResourceKindError(DexGraphError):
    """An endpoint names a resource kind that is not registered."""

    def __init__(self, kind: str, url: str | None = None):
        message = f"Unknown resource kind {kind!r}"
        if url:
            message = f"{message} in {url!r}"
        super().__init__(message)
        self.kind = kind
        self.url = url


class MalformedFieldError(DexGraphError):
    """A required field was absent or ill-typed while decoding a resource.

    Attributes:
        kind: The resource kind being decoded.
        field_name: Dotted location of the offending field, or ``"<root>"``
            when the document itself is not a JSON object.
        detail: The underlying validation message, if any.
    """

    def __init__(self, kind: str, field_name: str, detail: str | None = None):
        message = f"Malformed field {field_name!r} in {kind!r} resource"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.kind = kind
        self.field_name = field_name
        self.detail = detail


class NotFoundError(DexGraphError):
    """The upstream service answered that the resource does not exist (404)."""


class TransportError(DexGraphError):
    """A network or transport-level failure.

    The message doubles as an opaque ``detail`` string for diagnostics.
    """

    @property
    def detail(self) -> str:
        return self.message


class APIError(TransportError):
    """The service returned an error status other than 404."""


class RateLimitError(APIError):
    """The service answered 429 Too Many Requests."""


class TimeoutError(TransportError):
    """A request, or a caller's wait for one, did not finish in time."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


class NetworkError(TransportError):
    """A connection-level failure (DNS, refused connection, reset...)."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


class ConfigurationError(DexGraphError):
    """Represents an error in the library's configuration."""

    def __init__(self, message: str):
        super().__init__(message, response=None)
