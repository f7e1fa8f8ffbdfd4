"""ASGI app serving the cron-triggered lifecycle jobs.

Settings are read once at import, so a missing ``CRON_SECRET`` or Supabase
credential fails the cold start instead of the first scheduled run.
"""

from facefind_lifecycle.api.app import create_app
from facefind_lifecycle.config import Settings
from facefind_lifecycle.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
