import logging
from pathlib import Path

from jobboard.client import ApiClient, parse_model
from jobboard.schemas import Profile, ProfileUpdate, Role

logger = logging.getLogger(__name__)

PROFILE_PATH = "/profile"


class ProfileService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_profile(self) -> Profile:
        envelope = await self.client.call("GET", PROFILE_PATH)
        return parse_model(Profile, envelope.data)

    async def update_profile(self, update: ProfileUpdate, role: Role | None) -> Profile:
        """Save the profile form. Only the fields for ``role`` are sent."""
        envelope = await self.client.call("PUT", PROFILE_PATH, data=update.to_form(role))
        logger.info("Profile updated")
        return parse_model(Profile, envelope.data)

    async def upload_resume(self, path: Path | str) -> str | None:
        """Upload a resume file and return its stored URL."""
        path = Path(path)
        with path.open("rb") as f:
            envelope = await self.client.call(
                "POST", f"{PROFILE_PATH}/resume", files={"resume": (path.name, f)}
            )
        data = envelope.data if isinstance(envelope.data, dict) else {}
        url = data.get("resumeUrl") or data.get("resume_url")
        logger.info("Uploaded resume %s", path.name)
        return url
