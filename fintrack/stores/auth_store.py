"""
auth_store.py — Supabase Auth session for one client
Wraps the supabase auth client: sign up / in / out, OTP and password reset.
The signed-in session's access token is handed to the gateway so data calls
act for that user. Readiness is a one-shot event set by initialize().
"""

import asyncio
import logging

from fintrack.errors import GatewayError
from fintrack.stores.base import BaseStore
from fintrack.supabase_client import create_auth_client

logger = logging.getLogger(__name__)


def _as_gateway_error(e: Exception) -> GatewayError:
    status = getattr(e, "status", None)
    code = getattr(e, "code", None)
    return GatewayError(
        getattr(e, "message", None) or str(e) or "Authentication error",
        status_code=status if isinstance(status, int) else None,
        code=str(code) if code is not None else None,
    )


class AuthStore(BaseStore):
    def __init__(self, gateway, client=None):
        super().__init__(gateway)
        self.client = client if client is not None else create_auth_client()
        self.user = None
        self.session = None
        self._ready = asyncio.Event()
        self._subscription = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> str | None:
        return getattr(self.user, "id", None)

    @property
    def access_token(self) -> str | None:
        return getattr(self.session, "access_token", None)

    def _set_session(self, session) -> None:
        self.session = session
        self.user = getattr(session, "user", None) if session else None
        self.gateway.set_session(self.access_token)

    async def _call(self, label: str, fn, *args):
        async with self._action(label):
            try:
                return fn(*args)
            except GatewayError:
                raise
            except Exception as e:
                raise _as_gateway_error(e) from e

    # ------------------------------------------------------------------
    async def sign_up(self, email: str, password: str):
        return await self._call("sign up", self.client.auth.sign_up, {"email": email, "password": password})

    async def sign_in(self, email: str, password: str):
        response = await self._call(
            "sign in", self.client.auth.sign_in_with_password, {"email": email, "password": password}
        )
        if response.user:
            self._set_session(response.session)
            self.user = response.user
            logger.info("Signed in user %s", self.user_id)
        return response

    async def sign_in_with_otp(self, email: str) -> None:
        await self._call("sign in with otp", self.client.auth.sign_in_with_otp, {"email": email})

    async def sign_out(self) -> None:
        await self._call("sign out", self.client.auth.sign_out)
        self._set_session(None)

    async def reset_password(self, email: str) -> None:
        await self._call("reset password", self.client.auth.reset_password_for_email, email)

    # ------------------------------------------------------------------
    def _on_auth_change(self, event, session) -> None:
        logger.debug("Auth event %s for %s", event, getattr(getattr(session, "user", None), "id", None))
        self._set_session(session)

    async def initialize(self):
        """
        Restore any existing session and follow later auth changes.

        Runs once; later calls return the current user. The ready event is set
        even when restoring the session fails.

        For in-process sessions (scripts, workers) that keep one AuthStore
        alive. The HTTP API resolves every request from its bearer token and
        does not call this.
        """
        if self._ready.is_set():
            return self.user
        try:
            session = await self._call("initialize auth", self.client.auth.get_session)
            if session is not None and getattr(session, "user", None):
                self._set_session(session)
            self._subscription = self.client.auth.on_auth_state_change(self._on_auth_change)
        finally:
            self._ready.set()
        return self.user

    async def wait_until_ready(self):
        """Block until initialize() has finished; returns the restored user."""
        await self._ready.wait()
        return self.user

    @property
    def ready(self) -> bool:
        return self._ready.is_set()
