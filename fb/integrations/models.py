"""Flow Boards API data models.

Read-only snapshots of remote entities. Each model is built from a decoded
JSON object with from_api(); unknown fields are ignored and missing fields
fall back to empty values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

UNKNOWN_STATUS = "Unknown"
DATE_FORMAT = "%Y-%m-%d"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an API timestamp, treating absent and zero values as unset.

    The API serializes unset dates either by omitting them or as the zero
    time "0001-01-01T00:00:00Z".

    Raises:
        ValueError: If the value is present but not an ISO-8601 string
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"expected timestamp string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.year == 1:
        return None
    return parsed


def _str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class User:
    """A Flow Boards user."""

    id: str
    email: str = ""
    name: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> User:
        return cls(id=_str(data, "_id"), email=_str(data, "email"), name=_str(data, "name"))


@dataclass(frozen=True)
class Bin:
    """A workflow column. IDs are unique, names may collide."""

    id: str
    name: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Bin:
        return cls(id=_str(data, "_id"), name=_str(data, "name"))


@dataclass(frozen=True)
class Board:
    """A named collection of bins."""

    id: str
    name: str
    bins: tuple[str, ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Board:
        return cls(
            id=_str(data, "_id"),
            name=_str(data, "name"),
            bins=tuple(str(b) for b in data.get("bins") or ()),
        )


@dataclass(frozen=True)
class Ticket:
    """A Flow Boards ticket as returned by the search endpoint.

    Attributes:
        id: Opaque ticket ID
        name: Display name
        description: Free-text description
        bin_id: ID of the bin holding the ticket
        bin_name: Bin display name copied at fetch time; may be stale
        created_at: Creation time, None if unset
        updated_at: Last update time, None if unset
        due_date: Due date, None if unset
        assigned_ids: IDs of assigned users
    """

    id: str
    name: str
    description: str = ""
    bin_id: str = ""
    bin_name: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    due_date: datetime | None = None
    assigned_ids: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Ticket:
        """Build a Ticket from a decoded API object.

        Raises:
            ValueError: If a timestamp field is malformed
        """
        return cls(
            id=_str(data, "_id"),
            name=_str(data, "name"),
            description=_str(data, "description"),
            bin_id=_str(data, "bin_id"),
            bin_name=_str(data, "bin_name"),
            created_at=parse_timestamp(data.get("createdAt")),
            updated_at=parse_timestamp(data.get("updatedAt")),
            due_date=parse_timestamp(data.get("dueDate")),
            assigned_ids=tuple(str(a) for a in data.get("assigned_ids") or ()),
        )

    @property
    def status(self) -> str:
        """Bin name, else bin ID, else "Unknown"."""
        return self.bin_name or self.bin_id or UNKNOWN_STATUS

    @property
    def has_description(self) -> bool:
        return self.description != ""

    def is_assigned_to(self, user_id: str) -> bool:
        return user_id in self.assigned_ids

    @staticmethod
    def format_date(value: datetime | None) -> str:
        """Format a date as YYYY-MM-DD, or "" when unset."""
        return value.strftime(DATE_FORMAT) if value is not None else ""


@dataclass(frozen=True)
class CommentPayload:
    """Body of a comment POST."""

    id: str
    ticket_id: str
    comment: str

    def to_api(self) -> dict[str, str]:
        return {"_id": self.id, "ticket_id": self.ticket_id, "comment": self.comment}


__all__ = [
    "UNKNOWN_STATUS",
    "User",
    "Bin",
    "Board",
    "Ticket",
    "CommentPayload",
    "parse_timestamp",
]
