import logging
from dataclasses import dataclass

from jobboard.client import ApiError
from jobboard.schemas import Job
from jobboard.services.applications import ApplicationService
from jobboard.services.jobs import JobService
from jobboard.services.session import SessionManager

logger = logging.getLogger(__name__)

LOGIN_TO_APPLY = "Please login as a job seeker to apply"
JOB_SEEKERS_ONLY = "Only job seekers can apply for jobs"
ALREADY_APPLIED = "You have already applied to this job"
APPLY_SUCCESS = "Application submitted successfully!"
APPLY_FAILED = "Failed to submit application"
LOAD_FAILED = "Failed to load job details"


@dataclass
class ApplyOutcome:
    success: bool
    message: str
    needs_login: bool = False


class JobDetailController:
    """State behind the job detail view: the job and whether the user applied."""

    def __init__(self, session: SessionManager, jobs: JobService, applications: ApplicationService):
        self.session = session
        self.jobs = jobs
        self.applications = applications
        self.job: Job | None = None
        self.has_applied = False
        self.is_loading = False
        self.is_applying = False
        self.last_error: str | None = None

    @property
    def can_apply(self) -> bool:
        return self.session.is_job_seeker and not self.has_applied and not self.is_applying

    async def load(self, job_id: int | str) -> None:
        self.is_loading = True
        try:
            self.job = await self.jobs.get_job(job_id)
            self.last_error = None
        except ApiError as e:
            logger.error("Error fetching job %s: %s", job_id, e.message)
            self.last_error = LOAD_FAILED
        finally:
            self.is_loading = False

        if self.session.is_authenticated and self.session.is_job_seeker:
            try:
                self.has_applied = await self.applications.check_applied(job_id)
            except ApiError as e:
                logger.error("Error checking application status for job %s: %s", job_id, e.message)

    async def apply(self, cover_letter: str | None = None) -> ApplyOutcome:
        if self.job is None:
            return ApplyOutcome(False, LOAD_FAILED)
        if not self.session.is_authenticated:
            return ApplyOutcome(False, LOGIN_TO_APPLY, needs_login=True)
        if not self.session.is_job_seeker:
            return ApplyOutcome(False, JOB_SEEKERS_ONLY)
        if self.has_applied:
            return ApplyOutcome(False, ALREADY_APPLIED)

        self.is_applying = True
        try:
            await self.applications.apply(self.job.id, cover_letter)
        except ApiError as e:
            return ApplyOutcome(False, e.message or APPLY_FAILED)
        finally:
            self.is_applying = False

        self.has_applied = True
        return ApplyOutcome(True, APPLY_SUCCESS)
