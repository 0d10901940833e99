"""Tests for storage backend selection."""

import pytest

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
from session_vote.services.backend import select_backend
from tests.conftest import FakeProbe


class _ClientFactory:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.client = object()

    def __call__(self, url: str, key: str) -> object:
        self.calls.append((url, key))
        return self.client


def _settings(backend: str, with_credentials: bool = True) -> Settings:
    return Settings(
        storage_backend=backend,
        supabase_url="https://example.supabase.co" if with_credentials else None,
        supabase_service_key="service-key" if with_credentials else None,
    )


def test_auto_selects_supabase_pair_when_reachable() -> None:
    factory = _ClientFactory()
    probe = FakeProbe(accessible=True)

    backend = select_backend(_settings("auto"), probe, client_factory=factory)

    assert backend.name == "supabase"
    assert isinstance(backend.attendee_repository, SupabaseAttendeeRepository)
    assert isinstance(backend.rating_repository, SupabaseSessionRatingRepository)
    assert backend.attendee_repository.client is factory.client
    assert backend.rating_repository.client is factory.client
    assert factory.calls == [("https://example.supabase.co", "service-key")]
    assert probe.calls == 1


def test_auto_falls_back_to_memory_pair_when_unreachable() -> None:
    factory = _ClientFactory()

    backend = select_backend(
        _settings("auto"), FakeProbe(accessible=False), client_factory=factory
    )

    assert backend.name == "memory"
    assert isinstance(backend.attendee_repository, InMemoryAttendeeRepository)
    assert isinstance(backend.rating_repository, InMemorySessionRatingRepository)
    assert factory.calls == []


def test_auto_without_credentials_skips_probe() -> None:
    probe = FakeProbe(accessible=True)

    backend = select_backend(_settings("auto", with_credentials=False), probe)

    assert backend.name == "memory"
    assert probe.calls == 0


def test_memory_mode_never_probes() -> None:
    probe = FakeProbe(accessible=True)

    backend = select_backend(_settings("memory"), probe)

    assert backend.name == "memory"
    assert probe.calls == 0


def test_supabase_mode_skips_probe() -> None:
    factory = _ClientFactory()
    probe = FakeProbe(accessible=False)

    backend = select_backend(_settings("supabase"), probe, client_factory=factory)

    assert backend.name == "supabase"
    assert probe.calls == 0


def test_supabase_mode_requires_credentials() -> None:
    with pytest.raises(ValueError, match="SUPABASE_URL"):
        select_backend(_settings("supabase", with_credentials=False))
