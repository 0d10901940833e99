"""Dependency container wiring for the application."""

from dataclasses import dataclass

from session_vote.adapters.supabase_probe import HttpxSupabaseProbe
from session_vote.config import Settings
from session_vote.services.backend import BackendProbe, select_backend
from session_vote.services.health import HealthState
from session_vote.services.votes import VoteService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    backend_name: str
    vote_service: VoteService
    health: HealthState


def build_container(
    settings: Settings | None = None, probe: BackendProbe | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    owned_probe = None
    if (
        probe is None
        and resolved_settings.storage_backend == "auto"
        and resolved_settings.supabase_url
        and resolved_settings.supabase_service_key
    ):
        owned_probe = HttpxSupabaseProbe.create(
            resolved_settings.supabase_url,
            resolved_settings.supabase_service_key,
            timeout=resolved_settings.probe_timeout_seconds,
        )
        probe = owned_probe
    try:
        backend = select_backend(resolved_settings, probe)
    finally:
        if owned_probe is not None:
            owned_probe.close()

    vote_service = VoteService(
        attendee_repository=backend.attendee_repository,
        rating_repository=backend.rating_repository,
        retry_attempts=resolved_settings.retry_attempts,
        retry_delay_seconds=resolved_settings.retry_delay_seconds,
        retry_backoff=resolved_settings.retry_backoff,
    )
    return AppContainer(
        settings=resolved_settings,
        backend_name=backend.name,
        vote_service=vote_service,
        health=HealthState(),
    )
