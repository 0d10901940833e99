"""Tests for the in-memory repositories."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from session_vote.adapters.in_memory_attendee_repository import (
    InMemoryAttendeeRepository,
)
from session_vote.adapters.in_memory_rating_repository import (
    InMemorySessionRatingRepository,
)
from session_vote.domain.models import Attendee, SessionRating


def test_attendee_repository_crud() -> None:
    repository = InMemoryAttendeeRepository()

    created = repository.create_attendee("Alice")
    updated = repository.update_attendee(Attendee(id=created.id, name="Alicia"))

    assert repository.get_attendee(created.id) == updated
    assert repository.list_attendees() == [updated]

    repository.delete_attendee(created.id)
    repository.delete_attendee(created.id)
    assert repository.get_attendee(created.id) is None


def test_attendee_repository_rejects_update_of_unknown_id() -> None:
    repository = InMemoryAttendeeRepository()

    with pytest.raises(RuntimeError):
        repository.update_attendee(Attendee(id="missing", name="Nobody"))


def test_attendee_repository_concurrent_creates_get_unique_ids() -> None:
    repository = InMemoryAttendeeRepository()

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(repository.create_attendee, map(str, range(200))))

    assert len({attendee.id for attendee in created}) == 200
    assert len(repository.list_attendees()) == 200


def test_rating_repository_lookups() -> None:
    repository = InMemorySessionRatingRepository()
    first = repository.create_rating("S1", "a1", 4)
    second = repository.create_rating("S1", "a2", 2)
    third = repository.create_rating("S2", "a1", 5)

    assert repository.list_ratings_by_session("S1") == [first, second]
    assert repository.list_ratings_by_attendee("a1") == [first, third]
    assert repository.list_ratings_by_session("S3") == []


def test_rating_repository_update_and_clear() -> None:
    repository = InMemorySessionRatingRepository()
    created = repository.create_rating("S1", "a1", 4)

    updated = repository.update_rating(
        SessionRating(id=created.id, session_id="S9", attendee_id="a1", rating=1)
    )
    assert repository.get_rating(created.id) == updated

    repository.clear_ratings()
    assert repository.list_ratings() == []


def test_rating_repository_rejects_update_of_unknown_id() -> None:
    repository = InMemorySessionRatingRepository()

    with pytest.raises(RuntimeError):
        repository.update_rating(
            SessionRating(id="missing", session_id="S1", attendee_id="a", rating=1)
        )
