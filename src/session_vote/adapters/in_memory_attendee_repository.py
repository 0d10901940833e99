"""In-memory attendee repository."""

import threading
from dataclasses import dataclass, field
from uuid import uuid4

from session_vote.domain.models import Attendee
from session_vote.services.votes import AttendeeRepository


@dataclass
class InMemoryAttendeeRepository(AttendeeRepository):
    """Volatile attendee storage used when no database is reachable."""

    attendees: dict[str, Attendee] = field(default_factory=dict)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def create_attendee(self, name: str) -> Attendee:
        """Store a new attendee under a generated id."""
        attendee = Attendee(id=str(uuid4()), name=name)
        with self._lock:
            self.attendees[attendee.id] = attendee
        return attendee

    def get_attendee(self, attendee_id: str) -> Attendee | None:
        with self._lock:
            return self.attendees.get(attendee_id)

    def update_attendee(self, attendee: Attendee) -> Attendee:
        """Overwrite an existing attendee."""
        with self._lock:
            if attendee.id not in self.attendees:
                raise RuntimeError(f"Attendee {attendee.id} does not exist")
            self.attendees[attendee.id] = attendee
        return attendee

    def list_attendees(self) -> list[Attendee]:
        with self._lock:
            return list(self.attendees.values())

    def delete_attendee(self, attendee_id: str) -> None:
        with self._lock:
            self.attendees.pop(attendee_id, None)

    def clear_attendees(self) -> None:
        with self._lock:
            self.attendees.clear()
