"""In-memory session rating repository."""

import threading
from dataclasses import dataclass, field
from uuid import uuid4

from session_vote.domain.models import SessionRating
from session_vote.services.votes import SessionRatingRepository


@dataclass
class InMemorySessionRatingRepository(SessionRatingRepository):
    """Volatile rating storage keyed by rating id."""

    ratings: dict[str, SessionRating] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def create_rating(
        self, session_id: str, attendee_id: str, rating: int
    ) -> SessionRating:
        """Store a new rating under a generated id."""
        record = SessionRating(
            id=str(uuid4()),
            session_id=session_id,
            attendee_id=attendee_id,
            rating=rating,
        )
        with self._lock:
            self.ratings[record.id] = record
        return record

    def get_rating(self, rating_id: str) -> SessionRating | None:
        with self._lock:
            return self.ratings.get(rating_id)

    def update_rating(self, rating: SessionRating) -> SessionRating:
        """Overwrite an existing rating."""
        with self._lock:
            if rating.id not in self.ratings:
                raise RuntimeError(f"Rating {rating.id} does not exist")
            self.ratings[rating.id] = rating
        return rating

    def list_ratings(self) -> list[SessionRating]:
        with self._lock:
            return list(self.ratings.values())

    def list_ratings_by_session(self, session_id: str) -> list[SessionRating]:
        with self._lock:
            return [r for r in self.ratings.values() if r.session_id == session_id]

    def list_ratings_by_attendee(self, attendee_id: str) -> list[SessionRating]:
        with self._lock:
            return [r for r in self.ratings.values() if r.attendee_id == attendee_id]

    def delete_rating(self, rating_id: str) -> None:
        with self._lock:
            self.ratings.pop(rating_id, None)

    def clear_ratings(self) -> None:
        with self._lock:
            self.ratings.clear()
