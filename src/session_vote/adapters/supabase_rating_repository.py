"""Supabase-backed session rating repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from session_vote.domain.models import SessionRating
from session_vote.services.votes import SessionRatingRepository

_NIL_ID = "00000000-0000-0000-0000-000000000000"
_COLUMNS = "id, session_id, attendee_id, rating"


@dataclass
class SupabaseSessionRatingRepository(SessionRatingRepository):
    """Supabase implementation for session rating persistence."""

    client: Client

    def create_rating(
        self, session_id: str, attendee_id: str, rating: int
    ) -> SessionRating:
        """Insert a rating row and return it."""
        response = (
            self.client.table("session_ratings")
            .insert(
                {
                    "session_id": session_id,
                    "attendee_id": attendee_id,
                    "rating": rating,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session rating")
        return _parse_rating(response.data[0])

    def get_rating(self, rating_id: str) -> SessionRating | None:
        """Return a rating by id, if present."""
        if not _is_uuid(rating_id):
            return None
        response = (
            self.client.table("session_ratings")
            .select(_COLUMNS)
            .eq("id", rating_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_rating(response.data[0])

    def update_rating(self, rating: SessionRating) -> SessionRating:
        """Update a rating row and return it."""
        response = (
            self.client.table("session_ratings")
            .update(
                {
                    "session_id": rating.session_id,
                    "attendee_id": rating.attendee_id,
                    "rating": rating.rating,
                }
            )
            .eq("id", rating.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update session rating")
        return _parse_rating(response.data[0])

    def list_ratings(self) -> list[SessionRating]:
        """Return all ratings."""
        response = self.client.table("session_ratings").select(_COLUMNS).execute()
        return [_parse_rating(row) for row in response.data or []]

    def list_ratings_by_session(self, session_id: str) -> list[SessionRating]:
        """Return ratings for a session."""
        response = (
            self.client.table("session_ratings")
            .select(_COLUMNS)
            .eq("session_id", session_id)
            .execute()
        )
        return [_parse_rating(row) for row in response.data or []]

    def list_ratings_by_attendee(self, attendee_id: str) -> list[SessionRating]:
        """Return ratings made by an attendee."""
        response = (
            self.client.table("session_ratings")
            .select(_COLUMNS)
            .eq("attendee_id", attendee_id)
            .execute()
        )
        return [_parse_rating(row) for row in response.data or []]

    def delete_rating(self, rating_id: str) -> None:
        """Delete a rating row."""
        if not _is_uuid(rating_id):
            return
        self.client.table("session_ratings").delete().eq("id", rating_id).execute()

    def clear_ratings(self) -> None:
        """Delete all rating rows."""
        self.client.table("session_ratings").delete().neq("id", _NIL_ID).execute()


def _is_uuid(value: str) -> bool:
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def _parse_rating(row: dict[str, object]) -> SessionRating:
    """Parse a session_ratings row into a domain model."""
    return SessionRating(
        id=str(row["id"]),
        session_id=str(row.get("session_id") or ""),
        attendee_id=str(row.get("attendee_id") or ""),
        rating=int(row.get("rating") or 0),
    )
