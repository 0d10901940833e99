"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from session_vote.adapters.in_memory_attendee_repository import (
    InMemoryAttendeeRepository,
)
from session_vote.adapters.in_memory_rating_repository import (
    InMemorySessionRatingRepository,
)
from session_vote.config import Settings
from session_vote.containers import AppContainer
from session_vote.domain.models import Attendee, SessionRating
from session_vote.services.health import HealthState
from session_vote.services.votes import VoteService


@dataclass
class FakeProbe:
    """Probe returning a fixed answer and counting calls."""

    accessible: bool
    calls: int = 0

    def is_accessible(self) -> bool:
        self.calls += 1
        return self.accessible


@dataclass
class FlakyAttendeeRepository(InMemoryAttendeeRepository):
    """Attendee repository whose listing returns None a set number of times."""

    failures_left: int = 0
    list_calls: int = 0

    def list_attendees(self) -> list[Attendee] | None:  # type: ignore[override]
        self.list_calls += 1
        if self.failures_left > 0:
            self.failures_left -= 1
            return None
        return super().list_attendees()


@dataclass
class RacingRatingRepository(InMemorySessionRatingRepository):
    """Rating repository that loses one rating right after it is listed."""

    delete_calls: list[str] = field(default_factory=list)

    def list_ratings_by_attendee(self, attendee_id: str) -> list[SessionRating]:
        ratings = super().list_ratings_by_attendee(attendee_id)
        if ratings:
            super().delete_rating(ratings[0].id)
        return ratings

    def delete_rating(self, rating_id: str) -> None:
        self.delete_calls.append(rating_id)
        super().delete_rating(rating_id)


@dataclass
class RecordingSleep:
    """Replacement for time.sleep that records requested delays."""

    delays: list[float] = field(default_factory=list)

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        storage_backend="memory",
        supabase_url=None,
        supabase_service_key=None,
        retry_attempts=2,
        retry_delay_seconds=0.1,
        retry_backoff=2.0,
    )


@pytest.fixture
def attendee_repository() -> InMemoryAttendeeRepository:
    return InMemoryAttendeeRepository()


@pytest.fixture
def rating_repository() -> InMemorySessionRatingRepository:
    return InMemorySessionRatingRepository()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def vote_service(
    attendee_repository: InMemoryAttendeeRepository,
    rating_repository: InMemorySessionRatingRepository,
    recording_sleep: RecordingSleep,
) -> VoteService:
    return VoteService(
        attendee_repository=attendee_repository,
        rating_repository=rating_repository,
        retry_attempts=2,
        retry_delay_seconds=0.1,
        retry_backoff=2.0,
        sleep=recording_sleep,
    )


@pytest.fixture
def container(settings: Settings, vote_service: VoteService) -> AppContainer:
    return AppContainer(
        settings=settings,
        backend_name="memory",
        vote_service=vote_service,
        health=HealthState(),
    )
