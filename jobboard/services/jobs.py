import logging
from typing import Any

from jobboard.client import ApiClient, parse_model
from jobboard.schemas import Job, JobCreate, JobPage, JobSummary, JobUpdate, Pagination

logger = logging.getLogger(__name__)

JOBS_PATH = "/jobs"


def _job_items(data: Any) -> list:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return data.get("jobs") or []
    return []


class JobService:
    """Job listings: public search and detail, employer create/update/delete."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def list_jobs(self, params: dict[str, Any] | None = None) -> JobPage:
        envelope = await self.client.call("GET", JOBS_PATH, params=params)
        items = _job_items(envelope.data)
        page_info = envelope.pagination
        if page_info is None and envelope.page_data() is not None:
            page_info = parse_model(Pagination, envelope.page_data())
        if page_info is None:
            page_info = Pagination(total=len(items), pages=1 if items else 0, limit=len(items) or 10)
        jobs = [parse_model(JobSummary, item) for item in items]
        return JobPage(
            jobs=jobs,
            total=page_info.total,
            pages=page_info.pages,
            page=page_info.page,
            limit=page_info.limit,
        )

    async def get_job(self, job_id: int | str) -> Job:
        envelope = await self.client.call("GET", f"{JOBS_PATH}/{job_id}")
        return parse_model(Job, envelope.data)

    async def create_job(self, job: JobCreate) -> Job:
        envelope = await self.client.call("POST", JOBS_PATH, json=job.to_request())
        created = parse_model(Job, envelope.data)
        logger.info("Created job %s (%s)", created.id, created.title)
        return created

    async def update_job(self, job_id: int | str, changes: JobUpdate) -> Job:
        envelope = await self.client.call("PUT", f"{JOBS_PATH}/{job_id}", json=changes.to_request())
        return parse_model(Job, envelope.data)

    async def delete_job(self, job_id: int | str) -> None:
        await self.client.call("DELETE", f"{JOBS_PATH}/{job_id}")
        logger.info("Deleted job %s", job_id)
