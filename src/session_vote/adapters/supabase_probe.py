"""Reachability probe for the Supabase REST endpoint."""

import logging
from dataclasses import dataclass

import httpx

_logger = logging.getLogger(__name__)


@dataclass
class HttpxSupabaseProbe:
    """Checks whether the Supabase REST API answers with the service key."""

    supabase_url: str
    service_key: str
    http_client: httpx.Client

    @classmethod
    def create(
        cls, supabase_url: str, service_key: str, timeout: float = 2.0
    ) -> "HttpxSupabaseProbe":
        """Create a probe with a managed httpx client."""
        return cls(
            supabase_url=supabase_url,
            service_key=service_key,
            http_client=httpx.Client(timeout=timeout),
        )

    def is_accessible(self) -> bool:
        """Return true when the REST root responds successfully."""
        url = f"{self.supabase_url.rstrip('/')}/rest/v1/"
        headers = {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
        }
        try:
            response = self.http_client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            _logger.warning("Supabase probe failed: %s", exc)
            return False
        if not response.is_success:
            _logger.warning("Supabase probe returned status %s", response.status_code)
            return False
        return True

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.http_client.close()
