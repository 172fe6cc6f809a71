import logging
from typing import Any, Iterable

from jobboard.client import ApiClient, ApiError, ErrorKind, parse_model
from jobboard.schemas import Application, ApplicationStatus

logger = logging.getLogger(__name__)

APPLICATIONS_PATH = "/applications"
ALL_STATUSES = "all"


def _application_items(data: Any) -> list:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return data.get("applications") or []
    return []


class ApplicationService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def apply(self, job_id: int | str, cover_letter: str | None = None) -> Application | None:
        body: dict[str, Any] = {"jobId": job_id}
        if cover_letter:
            body["coverLetter"] = cover_letter
        envelope = await self.client.call("POST", APPLICATIONS_PATH, json=body)
        logger.info("Applied to job %s", job_id)
        if isinstance(envelope.data, dict):
            return parse_model(Application, envelope.data)
        return None

    async def my_applications(self) -> list[Application]:
        envelope = await self.client.call("GET", f"{APPLICATIONS_PATH}/my-applications")
        return [parse_model(Application, item) for item in _application_items(envelope.data)]

    async def check_applied(self, job_id: int | str) -> bool:
        """Whether the current user has applied to a job.

        Employers browsing a listing get 403 here; that is expected and reads
        as "not applied". Other failures propagate.
        """
        try:
            envelope = await self.client.call("GET", f"{APPLICATIONS_PATH}/check/{job_id}")
        except ApiError as e:
            if e.kind is ErrorKind.AUTHORIZATION:
                logger.debug("Application check for job %s not permitted", job_id)
                return False
            raise
        data = envelope.data if isinstance(envelope.data, dict) else {}
        return bool(data.get("hasApplied", envelope.extra("hasApplied", False)))

    async def update_status(
        self, application_id: int | str, status: ApplicationStatus | str
    ) -> Application | None:
        status = ApplicationStatus.parse(status)
        envelope = await self.client.call(
            "PUT", f"{APPLICATIONS_PATH}/{application_id}/status", json={"status": status.value}
        )
        logger.info("Application %s marked %s", application_id, status.value)
        if isinstance(envelope.data, dict):
            return parse_model(Application, envelope.data)
        return None

    async def withdraw(self, application_id: int | str) -> None:
        await self.client.call("DELETE", f"{APPLICATIONS_PATH}/{application_id}")
        logger.info("Withdrew application %s", application_id)

    async def applications_for_job(self, job_id: int | str) -> list[Application]:
        """Applications received for one of the current employer's jobs."""
        envelope = await self.client.call("GET", f"/employer/jobs/{job_id}/applications")
        items = _application_items(envelope.data) or envelope.extra("applications") or []
        return [parse_model(Application, item) for item in items]


def filter_by_status(applications: Iterable[Application], status: str) -> list[Application]:
    if status == ALL_STATUSES:
        return list(applications)
    wanted = ApplicationStatus.parse(status)
    return [app for app in applications if app.status is wanted]


def count_by_status(applications: Iterable[Application]) -> dict[str, int]:
    """Counts for the status filter tabs, including an 'all' total."""
    counts = {ALL_STATUSES: 0, **{status.value: 0 for status in ApplicationStatus}}
    for app in applications:
        counts[ALL_STATUSES] += 1
        counts[app.status.value] += 1
    return counts
