"""
base.py — Shared plumbing for the FinTrack stores
A store owns one collection for one session, runs its actions through the
gateway one request at a time and records `loading` / `error` around them.
"""

import logging
from contextlib import asynccontextmanager

from pydantic import BaseModel, ValidationError as SchemaError

from fintrack.errors import GatewayError, NotAuthenticatedError
from fintrack.gateway import Gateway

logger = logging.getLogger(__name__)


class BaseStore:
    table: str = ""

    def __init__(self, gateway: Gateway):
        self.gateway = gateway
        self.loading = False
        self.error: str | None = None

    async def _require_user(self) -> str:
        user_id = await self.gateway.current_user()
        if not user_id:
            raise NotAuthenticatedError()
        return user_id

    @asynccontextmanager
    async def _action(self, label: str):
        """Mark the store busy for one action; record and re-raise any failure."""
        self.loading = True
        self.error = None
        try:
            yield
        except Exception as e:
            self.error = str(e)
            logger.error("%s failed: %s", label, e)
            raise
        finally:
            self.loading = False

    @staticmethod
    def _parse(model: type[BaseModel], rows):
        """Validate gateway rows into ``model``; a malformed row is a gateway failure."""
        try:
            if isinstance(rows, list):
                return [model.model_validate(r) for r in rows]
            return model.model_validate(rows)
        except SchemaError as e:
            raise GatewayError(f"Malformed {model.__name__} record: {e}") from e

    @staticmethod
    def _replace(items: list, updated) -> list:
        return [updated if item.id == updated.id else item for item in items]
