"""
payment_method_store.py — Payment methods (shared lookup table, unique names)
"""

import logging

from fintrack.errors import GatewayError, ValidationError
from fintrack.gateway import asc
from fintrack.models.category import PaymentMethod, PaymentMethodCreate, PaymentMethodUpdate
from fintrack.services.reference_data import DEFAULT_PAYMENT_METHODS
from fintrack.stores.base import BaseStore

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
DUPLICATE_MESSAGE = "A payment method with this name already exists"


class PaymentMethodStore(BaseStore):
    table = "payment_methods"

    def __init__(self, gateway):
        super().__init__(gateway)
        self.payment_methods: list[PaymentMethod] = []

    async def fetch(self) -> list[PaymentMethod]:
        async with self._action("fetch payment methods"):
            await self._require_user()
            rows = await self.gateway.query(self.table, order=[asc("name")])
            self.payment_methods = self._parse(PaymentMethod, rows)
            return self.payment_methods

    async def create(self, data: PaymentMethodCreate) -> PaymentMethod:
        async with self._action("create payment method"):
            if not data.name.strip():
                raise ValidationError("Payment method name is required")
            await self._require_user()
            try:
                row = await self.gateway.insert(self.table, data.model_dump())
            except GatewayError as e:
                if e.code == UNIQUE_VIOLATION:
                    raise ValidationError(DUPLICATE_MESSAGE) from e
                raise
            method = self._parse(PaymentMethod, row)
            self.payment_methods = self.payment_methods + [method]
            return method

    async def update(self, payment_method_id: str, data: PaymentMethodUpdate) -> PaymentMethod:
        async with self._action("update payment method"):
            await self._require_user()
            try:
                row = await self.gateway.update(self.table, payment_method_id, data.model_dump(exclude_unset=True))
            except GatewayError as e:
                if e.code == UNIQUE_VIOLATION:
                    raise ValidationError(DUPLICATE_MESSAGE) from e
                raise
            method = self._parse(PaymentMethod, row)
            self.payment_methods = self._replace(self.payment_methods, method)
            return method

    async def delete(self, payment_method_id: str) -> bool:
        async with self._action("delete payment method"):
            await self._require_user()
            deleted = await self.gateway.delete(self.table, payment_method_id)
            self.payment_methods = [m for m in self.payment_methods if m.id != payment_method_id]
            return deleted

    async def initialize_defaults(self) -> list[PaymentMethod]:
        """Fill an empty table with the standard Indian payment methods."""
        async with self._action("initialize payment methods"):
            existing = await self.gateway.query(self.table, columns="id", limit=1)
            if existing:
                return []
            rows = await self.gateway.insert_many(self.table, DEFAULT_PAYMENT_METHODS)
            added = self._parse(PaymentMethod, rows)
            self.payment_methods = sorted(self.payment_methods + added, key=lambda m: m.name)
            logger.info("Initialized %d default payment methods", len(added))
            return added
