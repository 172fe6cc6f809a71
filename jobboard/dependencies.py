"""Access checks for views that need a signed-in user."""
from enum import Enum

from jobboard.client import ApiError, ErrorKind
from jobboard.schemas import Role, User
from jobboard.schemas.user import normalize_role
from jobboard.services.session import SessionManager

HOME_PATH = "/"


class RouteDecision(str, Enum):
    LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_HOME = "redirect_home"
    ALLOW = "allow"


def route_access(session: SessionManager, role: Role | str | None = None) -> RouteDecision:
    """Decide what a protected view should render for the current session.

    While the session is still initializing nothing is decided, so a valid
    persisted token never bounces the user through the login page.
    """
    if session.is_initializing:
        return RouteDecision.LOADING
    if not session.is_authenticated:
        return RouteDecision.REDIRECT_LOGIN
    if role is not None:
        required = role if isinstance(role, Role) else normalize_role(role)
        if normalize_role(session.current_user.role) is not required:
            return RouteDecision.REDIRECT_HOME
    return RouteDecision.ALLOW


def get_optional_current_user(session: SessionManager) -> User | None:
    """Get the current user if authenticated, None otherwise."""
    return session.current_user


def get_current_user(session: SessionManager) -> User:
    """Get the current authenticated user. Raises if not authenticated."""
    if session.current_user is None:
        raise ApiError(ErrorKind.AUTHENTICATION, "Not authenticated", 401)
    return session.current_user


def require_role(session: SessionManager, role: Role) -> User:
    """Get the current user, raising unless they hold ``role``."""
    user = get_current_user(session)
    if normalize_role(user.role) is not role:
        raise ApiError(ErrorKind.AUTHORIZATION, "Access forbidden", 403)
    return user


def dashboard_path(user: User | None) -> str:
    """Landing route after login for the user's role."""
    role = normalize_role(user.role) if user else None
    if role is Role.EMPLOYER:
        return "/employer/dashboard"
    if role is Role.JOB_SEEKER:
        return "/job-seeker/dashboard"
    return HOME_PATH
