from jobboard.schemas import RegisterPayload, RegistrationForm, Role, User
from jobboard.schemas.user import LEGACY_JOB_SEEKER_ROLE, normalize_role

MIN_PASSWORD_LENGTH = 6
FALLBACK_LAST_NAME = "User"


def split_display_name(name: str | None) -> tuple[str, str]:
    """Split a display name into (first, last).

    The first token is the first name and the remaining tokens form the last
    name. A single-token name is used for both, since the backend requires a
    last name.
    """
    parts = (name or "").split()
    first_name = parts[0] if parts else ""
    last_name = " ".join(parts[1:]) or first_name or FALLBACK_LAST_NAME
    return first_name, last_name


def to_backend_role(user_type: str) -> str:
    """Map the sign-up form's role label onto the backend role vocabulary."""
    if user_type == LEGACY_JOB_SEEKER_ROLE:
        return Role.JOB_SEEKER.value
    return user_type


def validate_registration(form: RegistrationForm) -> str | None:
    """Return a user-facing message if the form is invalid, else None."""
    if form.confirm_password is not None and form.password != form.confirm_password:
        return "Passwords do not match"
    if len(form.password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    return None


def build_register_payload(form: RegistrationForm) -> RegisterPayload:
    """Reshape the sign-up form into the body POST /auth/register expects."""
    first_name, last_name = split_display_name(form.name)
    payload = RegisterPayload(
        email=form.email,
        password=form.password,
        role=to_backend_role(form.user_type),
        first_name=first_name,
        last_name=last_name,
        phone=form.phone,
    )
    if form.user_type == Role.EMPLOYER.value:
        payload.company_name = form.company_name
        payload.company_description = form.company_description
    return payload


def is_job_seeker(user: User | None) -> bool:
    return user is not None and normalize_role(user.role) is Role.JOB_SEEKER


def is_employer(user: User | None) -> bool:
    return user is not None and normalize_role(user.role) is Role.EMPLOYER
