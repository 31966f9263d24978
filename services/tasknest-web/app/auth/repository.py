from typing import Optional

from app.config import settings
from app.auth.models import Profile
from app.backend.interface import RemoteBackendInterface


class ProfileRepository:
    """Profile rows stored in the remote profiles table."""

    def __init__(self, backend: RemoteBackendInterface, table: Optional[str] = None):
        self.backend = backend
        self.table = table or settings.PROFILES_TABLE

    async def get_by_id(self, profile_id: str) -> Optional[Profile]:
        """Get profile by identity ID."""
        rows = await self.backend.select(self.table, filters={"id": profile_id}, limit=1)
        if not rows:
            return None
        return Profile.from_dict(rows[0])

    async def create(self, profile: Profile) -> Profile:
        """Insert a new profile row."""
        row = await self.backend.insert(self.table, profile.to_dict())
        return Profile.from_dict(row)
