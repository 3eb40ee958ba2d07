"""User profile and training partner models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .workout import parse_timestamp


class PartnerStatus(str, Enum):
    """State of a partner invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass
class UserProfile:
    """A user's profile row, linked to an auth identity."""

    auth_id: str
    email: str
    name: str
    username: str
    height: float | None = None  # inches
    weight: float | None = None  # lbs
    id: str | None = None

    def to_dict(self) -> dict:
        """Convert to a store row."""
        return {
            "auth_id": self.auth_id,
            "email": self.email,
            "name": self.name,
            "username": self.username,
            "height": self.height,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """Create from a store row."""
        return cls(
            id=data.get("id"),
            auth_id=data.get("auth_id", ""),
            email=data.get("email", ""),
            name=data.get("name", ""),
            username=data.get("username", ""),
            height=data.get("height"),
            weight=data.get("weight"),
        )


@dataclass
class PartnerSummary:
    """The other side of a partner link, as shown in listings."""

    id: str
    name: str
    username: str


@dataclass
class PartnerLink:
    """An invitation from ``user_id`` to ``partner_id``.

    At most one link exists per ordered (user_id, partner_id) pair.
    """

    user_id: str
    partner_id: str
    status: PartnerStatus = PartnerStatus.PENDING
    is_favorite: bool = False
    created_at: datetime | None = None
    id: str | None = None
    other: PartnerSummary | None = None  # the counterpart, when fetched for listing

    def to_dict(self) -> dict:
        """Convert to a store row."""
        return {
            "user_id": self.user_id,
            "partner_id": self.partner_id,
            "status": self.status.value,
            "is_favorite": self.is_favorite,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PartnerLink":
        """Create from a store row."""
        return cls(
            id=data.get("id"),
            user_id=data["user_id"],
            partner_id=data["partner_id"],
            status=PartnerStatus(data.get("status", "pending")),
            is_favorite=bool(data.get("is_favorite", False)),
            created_at=parse_timestamp(data.get("created_at")),
        )

    def get_status_display(self) -> str:
        """Get a human-readable status string."""
        status_map = {
            PartnerStatus.PENDING: "Pending",
            PartnerStatus.ACCEPTED: "Partners",
            PartnerStatus.REJECTED: "Declined",
        }
        return status_map.get(self.status, self.status.value)
