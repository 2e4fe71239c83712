"""FinTrack: personal finance tracking on top of Supabase."""

from fintrack.config import APP_VERSION

__version__ = APP_VERSION
