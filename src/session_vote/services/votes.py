"""Attendee registration and session rating logic."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Protocol

from session_vote.domain.models import Attendee, SessionRating

_logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """Raised when a requested attendee or rating does not exist."""


class InvalidAttendeeError(ValueError):
    """Raised when a referenced attendee id does not exist."""


class TransientReadError(RuntimeError):
    """Raised when a retried read keeps returning no result."""


class AttendeeRepository(Protocol):
    """Persistence interface for attendees."""

    def create_attendee(self, name: str) -> Attendee:
        """Create an attendee with a fresh id and return it."""

    def get_attendee(self, attendee_id: str) -> Attendee | None:
        """Return an attendee by id, if present."""

    def update_attendee(self, attendee: Attendee) -> Attendee:
        """Overwrite an existing attendee and return the stored value."""

    def list_attendees(self) -> list[Attendee] | None:
        """Return all attendees."""

    def delete_attendee(self, attendee_id: str) -> None:
        """Delete an attendee; missing ids are ignored."""

    def clear_attendees(self) -> None:
        """Delete every attendee."""


class SessionRatingRepository(Protocol):
    """Persistence interface for session ratings."""

    def create_rating(
        self, session_id: str, attendee_id: str, rating: int
    ) -> SessionRating:
        """Create a rating with a fresh id and return it."""

    def get_rating(self, rating_id: str) -> SessionRating | None:
        """Return a rating by id, if present."""

    def update_rating(self, rating: SessionRating) -> SessionRating:
        """Overwrite an existing rating and return the stored value."""

    def list_ratings(self) -> list[SessionRating]:
        """Return all ratings."""

    def list_ratings_by_session(self, session_id: str) -> list[SessionRating]:
        """Return ratings for a session."""

    def list_ratings_by_attendee(self, attendee_id: str) -> list[SessionRating]:
        """Return ratings made by an attendee."""

    def delete_rating(self, rating_id: str) -> None:
        """Delete a rating; missing ids are ignored."""

    def clear_ratings(self) -> None:
        """Delete every rating."""


@dataclass
class VoteService:
    """Application service enforcing attendee/rating integrity rules."""

    attendee_repository: AttendeeRepository
    rating_repository: SessionRatingRepository
    retry_attempts: int = 3
    retry_delay_seconds: float = 0.2
    retry_backoff: float = 2.0
    sleep: Callable[[float], None] = time.sleep

    def use_backend(
        self,
        attendee_repository: AttendeeRepository,
        rating_repository: SessionRatingRepository,
    ) -> None:
        """Swap the selected repository pair."""
        self.attendee_repository = attendee_repository
        self.rating_repository = rating_repository

    def register_attendee(self, name: str) -> Attendee:
        """Register a new attendee."""
        return self.attendee_repository.create_attendee(name)

    def update_attendee(self, attendee_id: str, name: str) -> Attendee:
        """Rename an existing attendee."""
        original = self.get_attendee(attendee_id)
        return self.attendee_repository.update_attendee(replace(original, name=name))

    def list_attendees(self) -> list[Attendee]:
        """Return all attendees."""
        return self.attendee_repository.list_attendees() or []

    def list_attendees_with_retries(self) -> list[Attendee]:
        """Return all attendees, retrying while the repository returns nothing.

        A ``None`` result is treated as a transient failure. The read is
        retried up to ``retry_attempts`` more times with exponential backoff
        before ``TransientReadError`` is raised.
        """
        attempt = 0
        while True:
            attendees = self.attendee_repository.list_attendees()
            if attendees is not None:
                return attendees
            attempt += 1
            if attempt > self.retry_attempts:
                raise TransientReadError(
                    "There must be attendees to run the meetings."
                )
            delay = self.retry_delay_seconds * self.retry_backoff ** (attempt - 1)
            _logger.warning(
                "Attendee listing returned no result (attempt %s/%s), "
                "retrying in %.2fs",
                attempt,
                self.retry_attempts + 1,
                delay,
            )
            self.sleep(delay)

    def get_attendee(self, attendee_id: str) -> Attendee:
        """Return an attendee or raise ``NotFoundError``."""
        attendee = self.attendee_repository.get_attendee(attendee_id)
        if attendee is None:
            raise NotFoundError(f"Attendee not found: {attendee_id}")
        return attendee

    def delete_attendee(self, attendee_id: str) -> None:
        """Delete an attendee together with every rating it made.

        Ratings are removed one by one before the attendee. There is no
        rollback: a failure part way leaves the attendee in place with some
        of its ratings already gone.
        """
        attendee = self.get_attendee(attendee_id)
        ratings = self.ratings_by_attendee(attendee.id)
        for rating in ratings:
            self.rating_repository.delete_rating(rating.id)
        self.attendee_repository.delete_attendee(attendee.id)
        _logger.info(
            "Deleted attendee %s and %s rating(s)", attendee.id, len(ratings)
        )

    def rate_session(
        self, session_id: str, attendee_id: str, rating: int
    ) -> SessionRating:
        """Record a rating after checking that the attendee exists."""
        attendee = self._require_attendee(attendee_id)
        return self.rating_repository.create_rating(session_id, attendee.id, rating)

    def list_ratings(self) -> list[SessionRating]:
        """Return all ratings."""
        return self.rating_repository.list_ratings()

    def update_rating(
        self, rating_id: str, session_id: str, attendee_id: str, rating: int
    ) -> SessionRating:
        """Update a rating; the attendee reference is re-validated."""
        original = self.get_rating(rating_id)
        attendee = self._require_attendee(attendee_id)
        updated = replace(
            original, session_id=session_id, rating=rating, attendee_id=attendee.id
        )
        return self.rating_repository.update_rating(updated)

    def get_rating(self, rating_id: str) -> SessionRating:
        """Return a rating or raise ``NotFoundError``."""
        rating = self.rating_repository.get_rating(rating_id)
        if rating is None:
            raise NotFoundError(f"Rating not found: {rating_id}")
        return rating

    def delete_rating(self, rating_id: str) -> None:
        """Delete an existing rating."""
        rating = self.get_rating(rating_id)
        self.rating_repository.delete_rating(rating.id)

    def ratings_by_session(self, session_id: str) -> list[SessionRating]:
        """Return all ratings for a session."""
        return self.rating_repository.list_ratings_by_session(session_id)

    def average_rating(self, session_id: str) -> float:
        """Return the mean rating for a session, or 0.0 when unrated."""
        ratings = self.ratings_by_session(session_id)
        if not ratings:
            return 0.0
        return sum(item.rating for item in ratings) / len(ratings)

    def ratings_by_attendee(self, attendee_id: str) -> list[SessionRating]:
        """Return all ratings made by an existing attendee."""
        attendee = self._require_attendee(attendee_id)
        return self.rating_repository.list_ratings_by_attendee(attendee.id)

    def clear_attendees(self) -> None:
        """Remove every attendee from the selected repository."""
        self.attendee_repository.clear_attendees()

    def clear_ratings(self) -> None:
        """Remove every rating from the selected repository."""
        self.rating_repository.clear_ratings()

    def _require_attendee(self, attendee_id: str) -> Attendee:
        attendee = self.attendee_repository.get_attendee(attendee_id)
        if attendee is None:
            raise InvalidAttendeeError(f"Invalid attendee id: {attendee_id}")
        return attendee
