"""HTTP request layer for the job board API.

Every call goes through ``ApiClient``: it attaches the bearer token, applies the
request timeout and turns every failure into an ``ApiError`` with one of the
``ErrorKind`` values. Components above this layer branch on ``kind`` only.
"""
import logging
from enum import Enum
from typing import Any, Callable, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from jobboard.config import Settings, get_settings
from jobboard.schemas.envelope import Envelope
from jobboard.storage import TokenStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
RATE_LIMIT_MESSAGE = "Too many requests. Please wait a moment and try again."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
UNEXPECTED_RESPONSE_MESSAGE = "Unexpected response from server"

# A 401 from these endpoints means bad credentials, not an expired session.
AUTH_PATHS = ("/auth/login", "/auth/register")


class ErrorKind(str, Enum):
    AUTHENTICATION = "authentication"  # 401
    AUTHORIZATION = "authorization"  # 403
    VALIDATION = "validation"  # other 4xx
    RATE_LIMITED = "rate_limited"  # 429
    SERVER = "server"  # 5xx or unreadable body
    NETWORK = "network"  # no response


class ApiError(Exception):
    """A failed API call, normalized to one ErrorKind."""

    def __init__(self, kind: ErrorKind, message: str, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind.value!r}, status_code={self.status_code}, message={self.message!r})"


class BearerTokenAuth(httpx.Auth):
    """Reads the persisted token on every request so logins take effect immediately."""

    def __init__(self, token_store: TokenStore):
        self.token_store = token_store

    def auth_flow(self, request: httpx.Request):
        token = self.token_store.get()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


def parse_model(model: type[ModelT], data: Any) -> ModelT:
    """Validate response data into a model, reporting bad shapes as a server error."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error("Unexpected response shape for %s: %s", model.__name__, e)
        raise ApiError(ErrorKind.SERVER, UNEXPECTED_RESPONSE_MESSAGE) from e


class ApiClient:
    """Async client for the job board REST API."""

    def __init__(
        self,
        settings: Settings | None = None,
        token_store: TokenStore | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ):
        self.settings = settings or get_settings()
        self.token_store = token_store or TokenStore(self.settings.token_path)
        self.on_unauthorized = on_unauthorized
        self._redirecting = False
        self._http = httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            auth=BearerTokenAuth(self.token_store),
            headers={"Accept": "application/json"},
            timeout=httpx.Timeout(self.settings.request_timeout_seconds),
            transport=transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ApiError: for any non-2xx status, transport failure or timeout
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = await self._http.request(
                method, path, params=params, json=json, data=data, files=files
            )
        except httpx.TimeoutException as e:
            logger.error("Request timed out: %s %s", method, path)
            raise ApiError(ErrorKind.NETWORK, NETWORK_ERROR_MESSAGE) from e
        except httpx.TransportError as e:
            logger.error("Network error on %s %s: %s", method, path, e)
            raise ApiError(ErrorKind.NETWORK, NETWORK_ERROR_MESSAGE) from e

        if response.is_success:
            return self._decode(response)
        self._raise_for_status(response, path)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def call(self, method: str, path: str, **kwargs: Any) -> Envelope:
        """Send a request and unwrap the response envelope.

        An envelope with ``success: false`` is raised as a validation error
        carrying the server's message.
        """
        body = await self.request(method, path, **kwargs)
        envelope = parse_model(Envelope, body if body is not None else {})
        if not envelope.success:
            message = envelope.message or envelope.error or "Request failed"
            raise ApiError(ErrorKind.VALIDATION, message)
        return envelope

    def reset_redirect_guard(self) -> None:
        """Re-arm the one-shot 401 handler once a new session is established."""
        self._redirecting = False

    def _decode(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("Non-JSON response from %s", response.request.url)
            raise ApiError(ErrorKind.SERVER, UNEXPECTED_RESPONSE_MESSAGE, response.status_code) from e

    def _server_message(self, response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        message = body.get("message") or body.get("error") or body.get("detail")
        return message if isinstance(message, str) else None

    def _raise_for_status(self, response: httpx.Response, path: str) -> None:
        status = response.status_code
        message = self._server_message(response)

        if status == 401:
            if not path.startswith(AUTH_PATHS):
                self._handle_unauthorized()
            raise ApiError(ErrorKind.AUTHENTICATION, message or "Not authenticated", status)

        if status == 403:
            logger.warning("Access forbidden: %s", message)
            raise ApiError(ErrorKind.AUTHORIZATION, message or "Access forbidden", status)

        if status == 429:
            logger.warning("Rate limit exceeded")
            raise ApiError(ErrorKind.RATE_LIMITED, RATE_LIMIT_MESSAGE, status)

        if status >= 500:
            logger.error("Server error %d: %s", status, message)
            raise ApiError(ErrorKind.SERVER, SERVER_ERROR_MESSAGE, status)

        raise ApiError(ErrorKind.VALIDATION, message or f"Request failed with status {status}", status)

    def _handle_unauthorized(self) -> None:
        """Clear the token and notify the session once per burst of 401s."""
        if self._redirecting:
            return
        self._redirecting = True
        logger.warning("Session rejected by server, clearing stored token")
        self.token_store.clear()
        if self.on_unauthorized is not None:
            self.on_unauthorized()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
