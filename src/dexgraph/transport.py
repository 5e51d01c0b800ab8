# dexgraph/transport.py
"""HTTP transport for the PokéAPI client.

The transport is the only component that talks to the network. It fetches a
path (relative to the configured base URL, or absolute) and returns the raw
body, retrying transient failures with exponential backoff. Every failure is
translated into the dexgraph exception taxonomy before it leaves this module.
"""

import ssl
from http import HTTPStatus
from typing import Protocol, Self, runtime_checkable

import certifi
import httpx
import tenacity
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from .config import DexGraphSettings
from .exceptions import (
    APIError,
    DexGraphError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    TransportError,
)
from .log_config import logger
from .types import RequestData


@runtime_checkable
class Transport(Protocol):
    """Anything that can fetch raw bodies by path.

    Implementations must be idempotent and safe to call concurrently, and
    must raise only :class:`~dexgraph.exceptions.DexGraphError` subclasses.
    """

    async def fetch(self, path: str) -> bytes:
        """Fetches ``path`` (relative to the base URL, or absolute)."""
        ...

    async def aclose(self) -> None: ...


class HttpTransport:
    """Asynchronous ``httpx`` transport with retries and request hooks.

    Attributes:
        _settings: Configuration settings for the transport.
        _base_url: The base URL relative paths are resolved against.
        _retryable_status_codes: HTTP status codes that trigger a retry.
        _http_client: The underlying httpx.AsyncClient for making requests.
        _should_close_client: Whether this instance owns ``_http_client``.
    """

    DEFAULT_RETRYABLE_STATUS_CODES: frozenset[int] = frozenset(
        [429, 500, 502, 503, 504]
    )
    """Default set of HTTP status codes considered retryable."""

    def __init__(
        self,
        settings: DexGraphSettings,
        *,
        http_client: httpx.AsyncClient | None = None,
        retryable_status_codes: frozenset[int] = DEFAULT_RETRYABLE_STATUS_CODES,
    ):
        """Initialize the transport.

        Args:
            settings: Transport settings (base URL, timeout, retries, hooks).
            http_client: Optional pre-configured httpx.AsyncClient instance.
                A client passed in is not closed by :meth:`aclose`.
            retryable_status_codes: Set of HTTP status codes to retry on.
        """
        self._settings = settings
        self._base_url: str = settings.base_url.rstrip("/") + "/"
        self._retryable_status_codes = retryable_status_codes

        self._should_close_client = http_client is None
        self._http_client = http_client or self._create_default_http_client()
        logger.debug(f"HttpTransport initialized for {self._base_url}")

    @property
    def base_url(self) -> str:
        return self._base_url

    def _create_default_http_client(self) -> httpx.AsyncClient:
        """Create a default httpx.AsyncClient with configured settings."""
        try:
            verify_ssl: ssl.SSLContext | bool = ssl.create_default_context(
                cafile=certifi.where()
            )
            logger.debug("Using certifi SSL context.")
        except (OSError, ssl.SSLError):
            verify_ssl = True
            logger.warning(
                "certifi bundle failed to load. Using default SSL verification."
            )

        return httpx.AsyncClient(
            timeout=self._settings.request_timeout,
            verify=verify_ssl,
            headers={"User-Agent": self._settings.user_agent},
            follow_redirects=True,
        )

    def resolve_url(self, path: str) -> str:
        """Absolute URL for ``path``; absolute inputs are returned unchanged."""
        if httpx.URL(path).is_absolute_url:
            return path
        return f"{self._base_url}{path.lstrip('/')}"

    def _run_pre_request_hooks(self, request_data: RequestData) -> None:
        if not self._settings.pre_request_hooks:
            return
        hook_params = (
            dict(request_data.params) if request_data.params is not None else None
        )
        hook_headers = httpx.Headers(request_data.headers)
        logger.debug(
            f"Executing {len(self._settings.pre_request_hooks)} pre-request hooks "
            f"for {request_data.method} {request_data.url}"
        )
        for hook in self._settings.pre_request_hooks:
            try:
                hook(request_data.method, request_data.url, hook_params, hook_headers)
            except Exception as e:
                logger.error(
                    f"Error executing pre-request hook "
                    f"{getattr(hook, '__name__', str(hook))}: {e}"
                )
        request_data.params = hook_params
        request_data.headers = {k: v for k, v in hook_headers.items()}

    def _run_post_request_hooks(self, response: httpx.Response, attempts: int) -> None:
        for hook in self._settings.post_request_hooks:
            try:
                hook(response, attempts)
            except Exception as e:
                logger.error(
                    f"Error executing post-request hook "
                    f"{getattr(hook, '__name__', str(hook))}: {e}"
                )

    async def _execute_single_request(self, request_data: RequestData) -> httpx.Response:
        """Execute a single HTTP request attempt.

        Raises:
            NotFoundError: On a 404 response.
            RateLimitError: On a 429 response.
            APIError: For other HTTP error responses (4xx/5xx).
            TimeoutError: If the request times out.
            NetworkError: For connection-level errors.
            TransportError: For any other failure while sending.
        """
        self._run_pre_request_hooks(request_data)
        request = request_data.build_request()
        if not request.headers.get("User-Agent"):
            request.headers["User-Agent"] = self._settings.user_agent

        try:
            logger.debug(f"Sending request: {request.method} {request.url}")
            logger.trace(f"Request Headers: {request.headers}")
            response = await self._http_client.send(request)
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {request.url}")
            raise TimeoutError("Request timed out", request=request) from e
        except httpx.NetworkError as e:
            logger.error(f"Network error occurred for {request.url}: {e}")
            raise NetworkError(
                f"Network error for {request.url}: {e}", request=request
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP request error for {request.url}: {e}")
            raise TransportError(
                f"HTTP request error for {request.url}: {e}", request=request
            ) from e

        logger.debug(f"Received response: {response.status_code} for {request.url}")
        logger.trace(f"Response Headers: {response.headers}")

        if response.status_code == HTTPStatus.NOT_FOUND:
            raise NotFoundError("Resource not found", response=response, request=request)
        if response.status_code == HTTPStatus.TOO_MANY_REQUESTS:
            raise RateLimitError(
                "API rate limit exceeded.", response=response, request=request
            )
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            raise APIError(
                f"API request failed with status {response.status_code}",
                response=response,
                request=request,
            )
        return response

    def _should_retry_request(self, retry_state: tenacity.RetryCallState) -> bool:
        """Predicate for tenacity: should we retry this request?"""
        outcome = retry_state.outcome
        if not outcome or not outcome.failed:
            return False

        exc = outcome.exception()
        request = getattr(exc, "request", None)
        url = str(getattr(request, "url", "N/A"))

        if isinstance(exc, TimeoutError | NetworkError | RateLimitError):
            logger.warning(f"Retrying due to {type(exc).__name__} for {url}")
            return True
        if isinstance(exc, APIError) and exc.response is not None:
            if exc.response.status_code in self._retryable_status_codes:
                logger.warning(
                    f"Retrying due to status code {exc.response.status_code} for {url}"
                )
                return True
        return False

    async def _before_retry_sleep(self, retry_state: tenacity.RetryCallState) -> None:
        """Log details before tenacity sleeps between retries."""
        if not retry_state.outcome:
            return
        exc = retry_state.outcome.exception()
        sleep_time = (
            getattr(retry_state.next_action, "sleep", 0) if retry_state.next_action else 0
        )
        logger.info(
            f"Retrying request in {sleep_time:.2f} seconds after "
            f"{retry_state.attempt_number} attempt(s) due to: {type(exc).__name__} - {exc}"
        )

    async def request(self, path: str) -> httpx.Response:
        """GETs ``path`` with configured retries for transient errors.

        Returns:
            httpx.Response: The successful response.

        Raises:
            DexGraphError: The last failure once retries are exhausted, or the
                first non-retryable one.
        """
        request_data = RequestData(method="GET", url=self.resolve_url(path))
        retry_strategy = AsyncRetrying(
            stop=stop_after_attempt(self._settings.max_retries + 1),
            wait=wait_exponential(multiplier=self._settings.backoff_factor),
            retry=self._should_retry_request,
            reraise=True,
            before_sleep=self._before_retry_sleep,
        )
        try:
            response = await retry_strategy(
                self._execute_single_request, request_data
            )
        except NotFoundError:
            logger.debug(f"Not found: {request_data.url}")
            raise
        except DexGraphError as e:
            logger.error(f"Request failed after retries: {e}")
            raise

        self._run_post_request_hooks(
            response, retry_strategy.statistics.get("attempt_number", 1)
        )
        return response

    async def fetch(self, path: str) -> bytes:
        """Fetches the raw body of ``path``."""
        response = await self.request(path)
        return response.content

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._should_close_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            logger.debug("HttpTransport internal HTTP client closed.")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
