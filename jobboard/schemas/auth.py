from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobboard.schemas.user import User


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip()


class RegistrationForm(BaseModel):
    """Registration fields as the sign-up form collects them."""
    name: str = ""
    email: str
    password: str
    confirm_password: str | None = None
    phone: str = ""
    user_type: str = "jobseeker"
    company_name: str | None = None
    company_description: str | None = None

    @field_validator("user_type")
    @classmethod
    def normalize_user_type(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("phone", mode="before")
    @classmethod
    def default_phone(cls, v: str | None) -> str:
        return v or ""


class RegisterPayload(BaseModel):
    """Registration body in the shape the backend expects."""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str
    role: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    phone: str = ""
    company_name: str | None = Field(None, alias="companyName")
    company_description: str | None = Field(None, alias="companyDescription")

    def to_request(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class AuthPayload(BaseModel):
    """``data`` of a successful login or register response."""
    token: str
    user: User

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Token must not be empty")
        return v
