from jobboard.schemas.envelope import Envelope, Pagination
from jobboard.schemas.user import Role, User, Profile, normalize_role
from jobboard.schemas.auth import LoginRequest, RegistrationForm, RegisterPayload, AuthPayload
from jobboard.schemas.job import (
    JobType,
    ExperienceLevel,
    JobFilters,
    JobSummary,
    Job,
    JobPage,
    JobCreate,
    JobUpdate,
)
from jobboard.schemas.application import Application, ApplicationStatus, normalize_application
from jobboard.schemas.notification import Notification, NotificationList
from jobboard.schemas.profile import ProfileUpdate

__all__ = [
    "Envelope",
    "Pagination",
    "Role",
    "User",
    "Profile",
    "normalize_role",
    "LoginRequest",
    "RegistrationForm",
    "RegisterPayload",
    "AuthPayload",
    "JobType",
    "ExperienceLevel",
    "JobFilters",
    "JobSummary",
    "Job",
    "JobPage",
    "JobCreate",
    "JobUpdate",
    "Application",
    "ApplicationStatus",
    "normalize_application",
    "Notification",
    "NotificationList",
    "ProfileUpdate",
]
