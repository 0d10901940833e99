"""ASGI entrypoint for the session vote API.

Serve with ``uvicorn session_vote.api.asgi:app``. The storage backend is
resolved once here, from ``STORAGE_BACKEND`` and the Supabase credentials.
"""

from session_vote.api.app import create_app
from session_vote.config import Settings
from session_vote.containers import build_container

settings = Settings()
container = build_container(settings)
app = create_app(container)
