"""Job applications.

Application payloads reach the client in several shapes depending on the
endpoint and backend version: the job nested as ``job`` or ``Job``, dates as
``createdAt`` or ``created_at``, the applicant under ``jobSeeker`` or as flat
``applicant_*`` fields. ``normalize_application`` folds all of them into the
single ``Application`` record the rest of the client works with.
"""
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from jobboard.utils import DEFAULT_SALARY_PERIOD, format_salary

UNKNOWN_JOB = "Unknown Job"
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_APPLICANT = "Unknown Applicant"
NOT_SPECIFIED = "Not specified"


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    SHORTLISTED = "shortlisted"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: "str | ApplicationStatus | None") -> "ApplicationStatus":
        """Accept any casing; legacy 'approved' is 'accepted', unknown is pending."""
        if isinstance(value, ApplicationStatus):
            return value
        if not value:
            return cls.PENDING
        value_clean = value.strip().lower()
        if value_clean == "approved":
            return cls.ACCEPTED
        try:
            return cls(value_clean)
        except ValueError:
            return cls.PENDING

    @property
    def label(self) -> str:
        return self.value.capitalize()


def _first(*values: Any) -> Any:
    for value in values:
        if value:
            return value
    return None


def normalize_application(raw: dict) -> dict:
    """Map every known application shape onto the canonical field names."""
    job = raw.get("job") or raw.get("Job") or {}
    employer = job.get("employer") or {}
    employer_profile = employer.get("employerProfile") or {}
    seeker = raw.get("jobSeeker") or raw.get("applicant") or {}
    seeker_profile = seeker.get("jobSeekerProfile") or {}

    return {
        "id": raw.get("id"),
        "job_id": _first(raw.get("jobId"), raw.get("job_id"), job.get("id")),
        "job_title": _first(job.get("title"), raw.get("jobTitle"), raw.get("job_title"), UNKNOWN_JOB),
        "company_name": _first(
            employer_profile.get("companyName"),
            job.get("companyName"),
            raw.get("company_name"),
            UNKNOWN_COMPANY,
        ),
        "job_location": _first(job.get("location"), raw.get("job_location"), NOT_SPECIFIED),
        "job_type": _first(job.get("jobType"), raw.get("job_type"), NOT_SPECIFIED),
        "salary_min": _first(job.get("salaryMin"), raw.get("salary_min")),
        "salary_max": _first(job.get("salaryMax"), raw.get("salary_max")),
        "salary_period": _first(job.get("salaryPeriod"), raw.get("salary_period"), DEFAULT_SALARY_PERIOD),
        "status": raw.get("status"),
        "cover_letter": _first(raw.get("coverLetter"), raw.get("cover_letter")),
        "applied_at": _first(raw.get("createdAt"), raw.get("created_at"), raw.get("applied_at")),
        "applicant_name": _first(
            seeker_profile.get("fullName"),
            seeker.get("fullName"),
            raw.get("applicantName"),
            raw.get("applicant_name"),
            seeker.get("email"),
            UNKNOWN_APPLICANT,
        ),
        "applicant_email": _first(seeker.get("email"), raw.get("applicant_email")),
        "applicant_phone": _first(seeker_profile.get("phone"), seeker.get("phone"), raw.get("applicant_phone")),
        "applicant_location": _first(seeker_profile.get("location"), raw.get("applicant_location")),
        "applicant_skills": _first(seeker_profile.get("skills"), raw.get("applicant_skills")),
        "resume_url": _first(seeker_profile.get("resumeUrl"), raw.get("resumeUrl"), raw.get("resume_url")),
    }


class Application(BaseModel):
    id: int | str
    job_id: int | str | None = None
    job_title: str = UNKNOWN_JOB
    company_name: str = UNKNOWN_COMPANY
    job_location: str = NOT_SPECIFIED
    job_type: str = NOT_SPECIFIED
    salary_min: float | None = None
    salary_max: float | None = None
    salary_period: str = DEFAULT_SALARY_PERIOD
    status: ApplicationStatus = ApplicationStatus.PENDING
    cover_letter: str | None = None
    applied_at: datetime | None = None
    applicant_name: str = UNKNOWN_APPLICANT
    applicant_email: str | None = None
    applicant_phone: str | None = None
    applicant_location: str | None = None
    applicant_skills: list[str] = Field(default_factory=list)
    resume_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return normalize_application(data)
        return data

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> ApplicationStatus:
        return ApplicationStatus.parse(v)

    @field_validator("applicant_skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        if not v:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @property
    def salary_display(self) -> str:
        return format_salary(self.salary_min, self.salary_max, self.salary_period)
