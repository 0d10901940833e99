"""Supabase-backed attendee repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from session_vote.domain.models import Attendee
from session_vote.services.votes import AttendeeRepository

# PostgREST refuses unfiltered deletes; no generated uuid equals the nil uuid.
_NIL_ID = "00000000-0000-0000-0000-000000000000"


@dataclass
class SupabaseAttendeeRepository(AttendeeRepository):
    """Supabase implementation for attendee persistence."""

    client: Client

    def create_attendee(self, name: str) -> Attendee:
        """Insert an attendee row and return it."""
        response = self.client.table("attendees").insert({"name": name}).execute()
        if not response.data:
            raise RuntimeError("Failed to create attendee in Supabase")
        return _parse_attendee(response.data[0])

    def get_attendee(self, attendee_id: str) -> Attendee | None:
        """Return an attendee by id, if present."""
        if not _is_uuid(attendee_id):
            return None
        response = (
            self.client.table("attendees")
            .select("id, name")
            .eq("id", attendee_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_attendee(response.data[0])

    def update_attendee(self, attendee: Attendee) -> Attendee:
        """Update the attendee row and return it."""
        response = (
            self.client.table("attendees")
            .update({"name": attendee.name})
            .eq("id", attendee.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update attendee")
        return _parse_attendee(response.data[0])

    def list_attendees(self) -> list[Attendee]:
        """Return all attendees."""
        response = self.client.table("attendees").select("id, name").execute()
        return [_parse_attendee(row) for row in response.data or []]

    def delete_attendee(self, attendee_id: str) -> None:
        """Delete an attendee row."""
        if not _is_uuid(attendee_id):
            return
        self.client.table("attendees").delete().eq("id", attendee_id).execute()

    def clear_attendees(self) -> None:
        """Delete all attendee rows."""
        self.client.table("attendees").delete().neq("id", _NIL_ID).execute()


def _is_uuid(value: str) -> bool:
    """Return true when the value can be matched against a uuid column."""
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def _parse_attendee(row: dict[str, object]) -> Attendee:
    return Attendee(id=str(row["id"]), name=str(row.get("name") or ""))
