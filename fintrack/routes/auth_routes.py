# ---------- routes/auth_routes.py ----------
"""
Auth routes backed by Supabase Auth.
Sign-in returns the Supabase session; its access token is the Bearer token
for every other FinTrack route.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fintrack.auth import get_auth_store, get_context
from fintrack.context import FinTrackContext
from fintrack.stores.auth_store import AuthStore

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# ── Pydantic schemas ──────────────────────────────────────────────
class Credentials(BaseModel):
    email: str
    password: str


class EmailRequest(BaseModel):
    email: str


def _user_payload(user) -> dict | None:
    if user is None:
        return None
    return {"id": getattr(user, "id", None), "email": getattr(user, "email", None)}


def _session_payload(session) -> dict | None:
    if session is None:
        return None
    return {
        "access_token": getattr(session, "access_token", None),
        "refresh_token": getattr(session, "refresh_token", None),
        "expires_in": getattr(session, "expires_in", None),
        "token_type": getattr(session, "token_type", "bearer"),
    }


# ── Routes ────────────────────────────────────────────────────────
@router.post("/signup")
async def sign_up(body: Credentials, store: AuthStore = Depends(get_auth_store)):
    response = await store.sign_up(body.email, body.password)
    return {
        "status": "success",
        "user": _user_payload(getattr(response, "user", None)),
        "session": _session_payload(getattr(response, "session", None)),
    }


@router.post("/login")
async def sign_in(body: Credentials, store: AuthStore = Depends(get_auth_store)):
    await store.sign_in(body.email, body.password)
    return {
        "status": "success",
        "user": _user_payload(store.user),
        "session": _session_payload(store.session),
    }


@router.post("/otp")
async def sign_in_with_otp(body: EmailRequest, store: AuthStore = Depends(get_auth_store)):
    await store.sign_in_with_otp(body.email)
    return {"status": "success", "message": "Check your email for the login link"}


@router.post("/reset-password")
async def reset_password(body: EmailRequest, store: AuthStore = Depends(get_auth_store)):
    await store.reset_password(body.email)
    return {"status": "success", "message": "Password reset email sent"}


@router.get("/me")
async def me(ctx: FinTrackContext = Depends(get_context)):
    return {"id": ctx.user_id}
