"""Session state: who is logged in, and the token that proves it.

``SessionManager`` is the single owner of the current user. It is created once
by the application context and handed to everything that needs it.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from pydantic import ValidationError

from jobboard.client import ApiClient, ApiError, ErrorKind
from jobboard.schemas import AuthPayload, Envelope, LoginRequest, RegistrationForm, User
from jobboard.services.auth import (
    build_register_payload,
    is_employer,
    is_job_seeker,
    validate_registration,
)
from jobboard.storage import TokenStore

logger = logging.getLogger(__name__)

ME_PATH = "/auth/me"
LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"

AUTH_CHECK_FAILED = "Authentication check failed"
LOGIN_FAILED = "Login failed. Please try again."
REGISTRATION_FAILED = "Registration failed"


class SessionStatus(str, Enum):
    INITIALIZING = "initializing"
    READY = "ready"


@dataclass
class AuthResult:
    """Outcome of login/register. Failures carry a message instead of raising."""
    success: bool
    user: User | None = None
    error: str | None = None


class SessionManager:
    def __init__(
        self,
        client: ApiClient,
        token_store: TokenStore,
        on_redirect_to_login: Callable[[], None] | None = None,
    ):
        self.client = client
        self.token_store = token_store
        self.on_redirect_to_login = on_redirect_to_login
        self.current_user: User | None = None
        self.status = SessionStatus.INITIALIZING
        self.last_error: str | None = None
        client.on_unauthorized = self._handle_unauthorized

    @property
    def token(self) -> str | None:
        return self.token_store.get()

    @property
    def is_initializing(self) -> bool:
        return self.status is SessionStatus.INITIALIZING

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    @property
    def is_job_seeker(self) -> bool:
        return is_job_seeker(self.current_user)

    @property
    def is_employer(self) -> bool:
        return is_employer(self.current_user)

    async def initialize(self) -> None:
        """Validate any persisted token, then mark the session ready."""
        try:
            await self._validate()
        finally:
            if self.status is SessionStatus.INITIALIZING:
                self.status = SessionStatus.READY
                logger.info("Session ready (authenticated=%s)", self.is_authenticated)

    async def refresh(self) -> None:
        """Resynchronize the current user with the backend."""
        await self._validate()

    async def login(self, email: str, password: str) -> AuthResult:
        self.last_error = None
        request = LoginRequest(email=email, password=password)
        try:
            body = await self.client.post(LOGIN_PATH, json=request.model_dump())
        except ApiError as e:
            logger.warning("Login failed for %s: %s", request.email, e.message)
            return self._fail(e.message or LOGIN_FAILED)
        return self._accept(body, LOGIN_FAILED)

    async def register(self, form: RegistrationForm) -> AuthResult:
        self.last_error = None
        invalid = validate_registration(form)
        if invalid:
            return self._fail(invalid)

        payload = build_register_payload(form)
        try:
            body = await self.client.post(REGISTER_PATH, json=payload.to_request())
        except ApiError as e:
            logger.warning("Registration failed for %s: %s", form.email, e.message)
            return self._fail(e.message or REGISTRATION_FAILED)
        return self._accept(body, REGISTRATION_FAILED)

    def logout(self) -> None:
        self.token_store.clear()
        self.current_user = None
        self.last_error = None
        logger.info("Logged out")

    def update_user(self, user: User) -> None:
        """Replace the current user after a profile edit."""
        self.current_user = user

    async def _validate(self) -> None:
        if not self.token_store.get():
            self.current_user = None
            return

        try:
            body = await self.client.get(ME_PATH)
            envelope = Envelope.model_validate(body or {})
            user = User.model_validate(envelope.data) if envelope.success else None
        except ApiError as e:
            logger.warning("Auth check failed: %s", e.message)
            if e.kind is ErrorKind.AUTHENTICATION:
                self.token_store.clear()
                self.current_user = None
            # Any other failure keeps the existing session; it may be transient.
            self.last_error = e.message or AUTH_CHECK_FAILED
            return
        except ValidationError as e:
            logger.error("Unexpected /auth/me response: %s", e)
            self.last_error = AUTH_CHECK_FAILED
            return

        if user is None:
            logger.info("Stored token rejected, clearing session")
            self.token_store.clear()
            self.current_user = None
            return

        self.current_user = user
        self.last_error = None

    def _accept(self, body: Any, fallback: str) -> AuthResult:
        try:
            envelope = Envelope.model_validate(body or {})
            if not envelope.success:
                return self._fail(envelope.message or envelope.error or fallback)
            payload = AuthPayload.model_validate(envelope.data)
        except ValidationError as e:
            logger.error("Unexpected auth response: %s", e)
            return self._fail(fallback)

        try:
            self.token_store.set(payload.token)
        except OSError:
            logger.exception("Failed to persist session token")
            return self._fail(fallback)

        self.current_user = payload.user
        self.last_error = None
        self.client.reset_redirect_guard()
        logger.info("Signed in as user %s", payload.user.id)
        return AuthResult(success=True, user=payload.user)

    def _fail(self, message: str) -> AuthResult:
        self.last_error = message
        return AuthResult(success=False, error=message)

    def _handle_unauthorized(self) -> None:
        """Called by the request layer when a protected call returns 401."""
        self.current_user = None
        if self.on_redirect_to_login is not None:
            self.on_redirect_to_login()
