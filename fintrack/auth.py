from fastapi import Depends, HTTPException, Request, status

from fintrack.context import FinTrackContext
from fintrack.stores.auth_store import AuthStore
from fintrack.supabase_client import is_supabase_configured
from fintrack.supabase_rest import SupabaseRestGateway


def _bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth_header.split(" ", 1)[1]


def _require_backend() -> None:
    if not is_supabase_configured():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase is not configured",
        )


async def get_gateway(request: Request) -> SupabaseRestGateway:
    """
    FastAPI dependency: a REST gateway acting with the caller's Supabase
    access token (the Bearer token of the request).
    Raises HTTP 401 if the header is missing.
    """
    token = _bearer_token(request)
    _require_backend()
    return SupabaseRestGateway(access_token=token)


async def get_context(gateway: SupabaseRestGateway = Depends(get_gateway)) -> FinTrackContext:
    """
    FastAPI dependency: resolves the token to a Supabase user and builds the
    request's FinTrackContext. Raises HTTP 401 if the token is not accepted.
    """
    user_id = await gateway.current_user()
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return FinTrackContext(gateway, user_id)


async def get_auth_store() -> AuthStore:
    """FastAPI dependency: a fresh auth session for sign-up / sign-in requests."""
    _require_backend()
    return AuthStore(SupabaseRestGateway())
