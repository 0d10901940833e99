"""Startup selection of the storage backend pair."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from supabase import Client, create_client

from session_vote.adapters.in_memory_attendee_repository import (
    InMemoryAttendeeRepository,
)
from session_vote.adapters.in_memory_rating_repository import (
    InMemorySessionRatingRepository,
)
from session_vote.adapters.supabase_attendee_repository import (
    SupabaseAttendeeRepository,
)
from session_vote.adapters.supabase_rating_repository import (
    SupabaseSessionRatingRepository,
)
from session_vote.config import Settings
from session_vote.services.votes import AttendeeRepository, SessionRatingRepository

_logger = logging.getLogger(__name__)

MEMORY_BACKEND = "memory"
SUPABASE_BACKEND = "supabase"


class BackendProbe(Protocol):
    """Checks whether the durable store can be reached."""

    def is_accessible(self) -> bool:
        """Return true when the durable store answers."""


@dataclass(frozen=True)
class StoreBackend:
    """The repository pair chosen at startup."""

    name: str
    attendee_repository: AttendeeRepository
    rating_repository: SessionRatingRepository


def select_backend(
    settings: Settings,
    probe: BackendProbe | None = None,
    client_factory: Callable[[str, str], Client] = create_client,
) -> StoreBackend:
    """Resolve the attendee and rating repositories from settings.

    Both repositories always come from the same backend. In ``auto`` mode the
    probe decides; without credentials or a probe the in-memory pair is used.
    """
    mode = settings.storage_backend
    has_credentials = bool(settings.supabase_url and settings.supabase_service_key)

    if mode == SUPABASE_BACKEND and not has_credentials:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
            "when STORAGE_BACKEND=supabase"
        )

    use_supabase = mode == SUPABASE_BACKEND or (
        mode == "auto"
        and has_credentials
        and probe is not None
        and probe.is_accessible()
    )
    if use_supabase:
        client = client_factory(settings.supabase_url, settings.supabase_service_key)
        _logger.info("Using Supabase storage backend")
        return StoreBackend(
            name=SUPABASE_BACKEND,
            attendee_repository=SupabaseAttendeeRepository(client),
            rating_repository=SupabaseSessionRatingRepository(client),
        )

    _logger.info("Using in-memory storage backend")
    return StoreBackend(
        name=MEMORY_BACKEND,
        attendee_repository=InMemoryAttendeeRepository(),
        rating_repository=InMemorySessionRatingRepository(),
    )
