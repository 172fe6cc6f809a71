"""Display formatting shared by the job, application and notification views."""
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

SALARY_NOT_SPECIFIED = "Not specified"
DEFAULT_CURRENCY = "$"
DEFAULT_SALARY_PERIOD = "year"
EXCERPT_LENGTH = 200

NOTIFICATION_ICONS = {
    "application_status_change": "📋",
    "new_application": "📨",
    "job_posted": "💼",
    "profile_view": "👀",
}
DEFAULT_NOTIFICATION_ICON = "🔔"


def format_amount(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format a whole-currency amount with thousands separators, e.g. $80,000."""
    whole = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{currency}{int(whole):,}"


def format_salary(
    salary_min: float | None,
    salary_max: float | None,
    period: str | None = None,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    """Render a salary range for display.

    A bound of None or 0 counts as absent, matching how listings without a
    salary come back from the API.
    """
    period = period or DEFAULT_SALARY_PERIOD
    if not salary_min and not salary_max:
        return SALARY_NOT_SPECIFIED
    if salary_min and salary_max:
        return (
            f"{format_amount(salary_min, currency)} - "
            f"{format_amount(salary_max, currency)} / {period}"
        )
    if salary_min:
        return f"{format_amount(salary_min, currency)}+ / {period}"
    return f"Up to {format_amount(salary_max, currency)} / {period}"


def excerpt(text: str | None, length: int = EXCERPT_LENGTH) -> str:
    """Truncate text to ``length`` characters, marking the cut with '...'."""
    if not text:
        return ""
    if len(text) <= length:
        return text
    return f"{text[:length]}..."


def format_status(status: str | None) -> str:
    """Capitalize a status value for display; missing status reads as Pending."""
    if not status:
        return "Pending"
    return status[:1].upper() + status[1:].lower()


def time_ago(created_at: datetime | None, now: datetime | None = None) -> str:
    """Short relative age: 'Just now', '5m ago', '3h ago', '2d ago'."""
    if created_at is None:
        return ""
    now = now or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    seconds = int((now - created_at).total_seconds())

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def notification_icon(notification_type: str | None) -> str:
    return NOTIFICATION_ICONS.get(notification_type or "", DEFAULT_NOTIFICATION_ICON)
