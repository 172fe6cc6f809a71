import json

from pydantic import BaseModel, field_validator

from jobboard.schemas.user import Role


class ProfileUpdate(BaseModel):
    """Profile edit form. Which fields are sent depends on the user's role."""
    name: str = ""
    email: str = ""
    phone: str = ""
    # Job seeker fields
    skills: list[str] = []
    experience: str = ""
    education: str = ""
    location: str = ""
    # Employer fields
    company_name: str = ""
    company_description: str = ""
    company_website: str = ""

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    def to_form(self, role: Role | None) -> dict[str, str]:
        """Form fields for PUT /profile; skills travel as a JSON array string."""
        form = {"name": self.name, "email": self.email, "phone": self.phone}
        if role is Role.JOB_SEEKER:
            form.update(
                skills=json.dumps(self.skills),
                experience=self.experience,
                education=self.education,
                location=self.location,
            )
        elif role is Role.EMPLOYER:
            form.update(
                companyName=self.company_name,
                companyDescription=self.company_description,
                companyWebsite=self.company_website,
            )
        return form
