from jobboard.services.session import AuthResult, SessionManager, SessionStatus
from jobboard.services.jobs import JobService
from jobboard.services.job_search import JobSearchController
from jobboard.services.job_detail import ApplyOutcome, JobDetailController
from jobboard.services.applications import ApplicationService, count_by_status, filter_by_status
from jobboard.services.notifications import NotificationCenter, NotificationService
from jobboard.services.scheduler import NotificationPoller
from jobboard.services.profile import ProfileService

__all__ = [
    "AuthResult",
    "SessionManager",
    "SessionStatus",
    "JobService",
    "JobSearchController",
    "ApplyOutcome",
    "JobDetailController",
    "ApplicationService",
    "count_by_status",
    "filter_by_status",
    "NotificationCenter",
    "NotificationService",
    "NotificationPoller",
    "ProfileService",
]
