from intake.auth.base import BaseAuthProvider
from intake.auth.exceptions import UnauthenticatedError
from intake.config.settings import Settings


class EnvAuthProvider(BaseAuthProvider):
    """Takes the caller identity from settings.intake_owner_id (INTAKE_OWNER_ID)."""

    def __init__(self, settings: Settings) -> None:
        self._owner_id = settings.intake_owner_id.strip()

    def current_owner_id(self) -> str:
        if not self._owner_id:
            raise UnauthenticatedError("No owner identity configured (set INTAKE_OWNER_ID)")
        return self._owner_id
