"""Domain models for the session vote service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Attendee:
    """Represents a registered conference attendee."""

    id: str
    name: str


@dataclass(frozen=True)
class SessionRating:
    """Represents one attendee's rating of a session."""

    id: str
    session_id: str
    attendee_id: str
    rating: int
