"""
category_store.py — Shared default categories plus the user's own
Defaults are visible to everyone and read-only; user categories can be edited
and deleted once nothing references them.
"""

import logging

from fintrack.errors import GatewayError, ValidationError
from fintrack.gateway import desc, asc, eq, or_
from fintrack.models.category import Category, CategoryCreate, CategoryUpdate
from fintrack.services.reference_data import DEFAULT_CATEGORIES
from fintrack.stores.base import BaseStore

logger = logging.getLogger(__name__)

SEED_BATCH_SIZE = 10


class CategoryStore(BaseStore):
    table = "categories"

    def __init__(self, gateway):
        super().__init__(gateway)
        self.categories: list[Category] = []

    async def fetch(self) -> list[Category]:
        async with self._action("fetch categories"):
            user_id = await self._require_user()
            rows = await self.gateway.query(
                self.table,
                [or_(eq("is_default", True), eq("user_id", user_id))],
                order=[desc("is_default"), asc("name")],
            )
            self.categories = self._parse(Category, rows)
            return self.categories

    async def create(self, data: CategoryCreate) -> Category:
        async with self._action("create category"):
            user_id = await self._require_user()
            record = {
                **data.model_dump(),
                "is_default": False,
                "is_active": True,
                "user_id": user_id,
            }
            category = self._parse(Category, await self.gateway.insert(self.table, record))
            self.categories = self.categories + [category]
            return category

    async def _owned(self, category_id: str, user_id: str) -> Category:
        rows = await self.gateway.query(self.table, [eq("id", category_id)], limit=1)
        if not rows:
            raise GatewayError("Category not found", status_code=404)
        category = self._parse(Category, rows[0])
        if category.is_default:
            raise ValidationError("Default categories cannot be modified")
        if category.user_id != user_id:
            raise GatewayError("Category not found", status_code=404)
        return category

    async def update(self, category_id: str, data: CategoryUpdate) -> Category:
        async with self._action("update category"):
            user_id = await self._require_user()
            await self._owned(category_id, user_id)
            row = await self.gateway.update(
                self.table, category_id, data.model_dump(exclude_unset=True), [eq("user_id", user_id)]
            )
            category = self._parse(Category, row)
            self.categories = self._replace(self.categories, category)
            return category

    async def delete(self, category_id: str) -> bool:
        async with self._action("delete category"):
            user_id = await self._require_user()
            await self._owned(category_id, user_id)

            in_use = await self.gateway.query(
                "transactions", [eq("category_id", category_id), eq("user_id", user_id)],
                columns="id", limit=1,
            )
            if in_use:
                raise ValidationError("Cannot delete category with existing transactions")

            deleted = await self.gateway.delete(self.table, category_id, [eq("user_id", user_id)])
            self.categories = [c for c in self.categories if c.id != category_id]
            return deleted

    async def seed_defaults(self) -> int:
        """
        Insert the shared default categories once.

        Does nothing when any default already exists. Rows go out in batches
        of ten; a failing batch aborts the seed.

        Returns:
            Number of categories inserted.
        """
        async with self._action("seed default categories"):
            existing = await self.gateway.query(self.table, [eq("is_default", True)], columns="id", limit=1)
            if existing:
                logger.info("Default categories already present, skipping seed")
                return 0

            inserted = 0
            for start in range(0, len(DEFAULT_CATEGORIES), SEED_BATCH_SIZE):
                batch = DEFAULT_CATEGORIES[start:start + SEED_BATCH_SIZE]
                rows = await self.gateway.insert_many(self.table, batch)
                inserted += len(rows)
                logger.info("Seeded batch %d (%d categories)", start // SEED_BATCH_SIZE + 1, len(rows))
            return inserted

    # ------------------------------------------------------------------
    def get(self, category_id: str) -> Category | None:
        return next((c for c in self.categories if c.id == category_id), None)

    @property
    def income_categories(self) -> list[Category]:
        return [c for c in self.categories if c.type == "income"]

    @property
    def expense_categories(self) -> list[Category]:
        return [c for c in self.categories if c.type == "expense"]

    @property
    def default_categories(self) -> list[Category]:
        return [c for c in self.categories if c.is_default]

    @property
    def user_categories(self) -> list[Category]:
        return [c for c in self.categories if not c.is_default]
