# supabase_client.py — Supabase client initialization for the auth service

from supabase import create_client, Client
from fintrack.config import SUPABASE_URL, SUPABASE_ANON_KEY


def create_auth_client() -> Client:
    """
    New Supabase client with the anonymous key.
    Each auth session gets its own client since the client keeps the
    signed-in session in memory.
    """
    if not is_supabase_configured():
        raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set in environment variables")
    return create_client(SUPABASE_URL, SUPABASE_ANON_KEY)


def is_supabase_configured() -> bool:
    """Check if Supabase is properly configured with required environment variables."""
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)
