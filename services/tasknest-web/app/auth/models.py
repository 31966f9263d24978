from dataclasses import dataclass


@dataclass
class Profile:
    """Denormalized copy of an identity, one row per account."""

    id: str
    email: str

    def to_dict(self) -> dict:
        """Convert profile to a table row."""
        return {
            "id": self.id,
            "email": self.email,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Profile":
        """Create profile from a table row."""
        return cls(
            id=str(data["id"]),
            email=data.get("email") or "",
        )
