from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Role(str, Enum):
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"


# Older accounts come back from the API with the hyphen-free spelling.
LEGACY_JOB_SEEKER_ROLE = "jobseeker"


def normalize_role(role: str | None) -> Role | None:
    """Map any accepted role spelling (any casing) to a Role, or None."""
    if not role:
        return None
    role_clean = role.strip().lower()
    if role_clean in (LEGACY_JOB_SEEKER_ROLE, Role.JOB_SEEKER.value):
        return Role.JOB_SEEKER
    if role_clean == Role.EMPLOYER.value:
        return Role.EMPLOYER
    return None


class User(BaseModel):
    """The authenticated identity as returned by /auth/me, login and register."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | str
    email: str
    display_name: str = Field("", alias="displayName")
    role: str | None = None
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    phone: str | None = None

    @model_validator(mode="before")
    @classmethod
    def derive_display_name(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("displayName") or data.get("display_name"):
            return data
        data = dict(data)
        first = data.get("firstName") or data.get("first_name") or ""
        last = data.get("lastName") or data.get("last_name") or ""
        name = data.get("name") or data.get("fullName") or f"{first} {last}".strip()
        data["displayName"] = name or data.get("email", "")
        return data

    @property
    def normalized_role(self) -> Role | None:
        return normalize_role(self.role)


class Profile(User):
    """User plus the role-specific profile fields."""
    skills: list[str] = Field(default_factory=list)
    experience: str | None = None
    education: str | None = None
    location: str | None = None
    resume_url: str | None = Field(None, alias="resumeUrl")
    company_name: str | None = Field(None, alias="companyName")
    company_description: str | None = Field(None, alias="companyDescription")
    company_website: str | None = Field(None, alias="companyWebsite")

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v
