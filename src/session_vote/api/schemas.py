"""Pydantic models for the HTTP payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from session_vote.domain.models import Attendee, SessionRating


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AttendeeIn(_CamelModel):
    """Attendee payload; any client-sent id is ignored."""

    id: str | None = None
    name: str


class AttendeeOut(_CamelModel):
    """Attendee response."""

    id: str
    name: str

    @classmethod
    def from_domain(cls, attendee: Attendee) -> "AttendeeOut":
        return cls(id=attendee.id, name=attendee.name)


class SessionRatingIn(_CamelModel):
    """Session rating payload; any client-sent id is ignored."""

    id: str | None = None
    session_id: str
    attendee_id: str
    rating: int


class SessionRatingOut(_CamelModel):
    """Session rating response."""

    id: str
    session_id: str
    attendee_id: str
    rating: int

    @classmethod
    def from_domain(cls, rating: SessionRating) -> "SessionRatingOut":
        return cls(
            id=rating.id,
            session_id=rating.session_id,
            attendee_id=rating.attendee_id,
            rating=rating.rating,
        )
