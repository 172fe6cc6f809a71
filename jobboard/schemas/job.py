from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jobboard.utils import DEFAULT_CURRENCY, DEFAULT_SALARY_PERIOD, excerpt, format_salary


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"
    TEMPORARY = "temporary"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class JobFilters(BaseModel):
    """Search criteria for the job list.

    Aliases are the query parameter names the /jobs endpoint accepts, so
    ``to_query_params`` can drop every unset filter in one dump.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    keyword: str | None = Field(None, alias="search")
    location: str | None = None
    job_type: JobType | None = Field(None, alias="jobType")
    experience_level: ExperienceLevel | None = Field(None, alias="experienceLevel")
    min_salary: int | None = Field(None, alias="minSalary", ge=0)
    max_salary: int | None = Field(None, alias="maxSalary", ge=0)

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def to_query_params(self) -> dict[str, Any]:
        """Query parameters for the set filters only; blanks are never sent."""
        params = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        # A zero salary bound is no bound.
        return {key: value for key, value in params.items() if value}

    def is_empty(self) -> bool:
        return not self.to_query_params()


def _company_name(data: dict) -> str | None:
    employer = data.get("employer") or {}
    profile = employer.get("employerProfile") or {}
    return (
        profile.get("companyName")
        or data.get("companyName")
        or data.get("company_name")
        or data.get("company")
    )


class JobSummary(BaseModel):
    """A job as it appears in search results."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | str
    title: str
    description: str = ""
    company_name: str | None = Field(None, alias="companyName")
    location: str | None = None
    job_type: str | None = Field(None, alias="jobType")
    experience_level: str | None = Field(None, alias="experienceLevel")
    salary_min: float | None = Field(None, alias="salaryMin")
    salary_max: float | None = Field(None, alias="salaryMax")
    salary_period: str = Field(DEFAULT_SALARY_PERIOD, alias="salaryPeriod")
    currency: str = DEFAULT_CURRENCY
    skills: list[str] = Field(default_factory=list)
    status: str | None = None
    created_at: datetime | None = Field(None, alias="createdAt")

    @model_validator(mode="before")
    @classmethod
    def flatten_employer(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        data["companyName"] = _company_name(data)
        data.pop("company_name", None)
        if not data.get("salaryPeriod") and not data.get("salary_period"):
            data.pop("salaryPeriod", None)
            data.pop("salary_period", None)
        if data.get("description") is None:
            data.pop("description", None)
        return data

    @property
    def salary_display(self) -> str:
        return format_salary(self.salary_min, self.salary_max, self.salary_period, self.currency)

    @property
    def summary(self) -> str:
        return excerpt(self.description)


class Job(JobSummary):
    """Full job detail."""
    qualifications: str | None = None
    responsibilities: str | None = None
    benefits: str | None = None
    company_description: str | None = Field(None, alias="companyDescription")
    contact_email: str | None = Field(None, alias="contactEmail")
    application_deadline: datetime | None = Field(None, alias="applicationDeadline")


class JobPage(BaseModel):
    """One page of search results with the server-reported totals."""
    jobs: list[JobSummary]
    total: int = 0
    pages: int = 0
    page: int = 1
    limit: int = 10


class JobUpdate(BaseModel):
    """Outgoing job payload; every field optional so edits send only changes."""
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    qualifications: str | None = None
    responsibilities: str | None = None
    job_type: JobType | None = Field(None, alias="jobType")
    location: str | None = None
    salary_min: int | None = Field(None, alias="salaryMin", ge=0)
    salary_max: int | None = Field(None, alias="salaryMax", ge=0)
    experience_level: ExperienceLevel | None = Field(None, alias="experienceLevel")
    skills: list[str] | None = None
    benefits: str | None = None
    application_deadline: str | None = Field(None, alias="applicationDeadline")

    @field_validator(
        "salary_min", "salary_max", "application_deadline", "job_type", "experience_level", mode="before"
    )
    @classmethod
    def blank_is_null(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @model_validator(mode="after")
    def validate_salary_range(self) -> "JobUpdate":
        if self.salary_min and self.salary_max and self.salary_min > self.salary_max:
            raise ValueError("Minimum salary cannot exceed maximum salary")
        return self

    def to_request(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class JobCreate(JobUpdate):
    """Payload for posting a new job."""
    title: str
    description: str
    location: str
    job_type: JobType = Field(JobType.FULL_TIME, alias="jobType")
    skills: list[str] = Field(default_factory=list)

    @field_validator("title", "description", "location")
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v

    def to_request(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
