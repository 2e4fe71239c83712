"""
transaction_store.py — Transactions for the signed-in user
Fetches with server-side filters, validates new transactions before anything
reaches the gateway and keeps income / expense / balance totals current.
"""

import logging
import math
from datetime import date

from fintrack.errors import ValidationError
from fintrack.gateway import contains, desc, eq, gte, lte
from fintrack.models.transaction import Transaction, TransactionCreate, TransactionUpdate, unique_tags
from fintrack.services import aggregation
from fintrack.stores.base import BaseStore

logger = logging.getLogger(__name__)


def _positive(amount) -> bool:
    return amount is not None and math.isfinite(amount) and amount > 0


def validate_transaction(data: TransactionCreate) -> None:
    """Collect every problem with a new transaction; raise them together."""
    errors = []
    if not _positive(data.amount):
        errors.append("Amount must be greater than 0")
    if not data.category_id:
        errors.append("Category is required")
    if not data.payment_method:
        errors.append("Payment method is required")
    if errors:
        raise ValidationError(errors)


class TransactionStore(BaseStore):
    table = "transactions"

    def __init__(self, gateway):
        super().__init__(gateway)
        self.transactions: list[Transaction] = []

    # ------------------------------------------------------------------
    # Totals

    @property
    def totals(self) -> dict:
        return aggregation.financial_totals(self.transactions)

    @property
    def total_income(self) -> float:
        return self.totals["total_income"]

    @property
    def total_expenses(self) -> float:
        return self.totals["total_expenses"]

    @property
    def current_balance(self) -> float:
        return self.totals["current_balance"]

    # ------------------------------------------------------------------
    # Actions

    async def fetch(
        self,
        type: str | None = None,
        category_id: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        payment_method: str | None = None,
        tags: list[str] | None = None,
    ) -> list[Transaction]:
        async with self._action("fetch transactions"):
            user_id = await self._require_user()
            filters = [eq("user_id", user_id)]
            if type:
                filters.append(eq("type", type))
            if category_id:
                filters.append(eq("category_id", category_id))
            if date_from:
                filters.append(gte("date", date_from))
            if date_to:
                filters.append(lte("date", date_to))
            if payment_method:
                filters.append(eq("payment_method", payment_method))
            if tags:
                filters.append(contains("tags", tags))

            rows = await self.gateway.query(self.table, filters, order=[desc("date")])
            self.transactions = self._parse(Transaction, rows)
            return self.transactions

    async def create(self, data: TransactionCreate) -> Transaction:
        async with self._action("create transaction"):
            validate_transaction(data)
            user_id = await self._require_user()

            record = {
                "user_id": user_id,
                "category_id": data.category_id,
                "payment_method": data.payment_method,
                "title": data.title or data.description or "Transaction",
                "description": data.description,
                "amount": data.amount,
                "type": data.type,
                "date": (data.date or date.today()).isoformat(),
                "bank_name": data.bank_name,
                "reference_number": data.reference_number,
                "tags": unique_tags(data.tags),
                "receipts": {"url": data.receipt_url} if data.receipt_url else None,
                "is_recurring": data.is_recurring,
                "recurring_interval": data.recurring_interval,
                "recurring_end_date": data.recurring_end_date.isoformat() if data.recurring_end_date else None,
            }
            row = await self.gateway.insert(self.table, record)
            transaction = self._parse(Transaction, row)
            self.transactions = [transaction] + self.transactions
            logger.info("Created %s transaction %s", transaction.type, transaction.id)
            return transaction

    async def update(self, transaction_id: str, data: TransactionUpdate) -> Transaction:
        async with self._action("update transaction"):
            patch = data.model_dump(mode="json", exclude_unset=True)
            if "amount" in patch and not _positive(patch["amount"]):
                raise ValidationError("Amount must be greater than 0")
            if "category_id" in patch and not patch["category_id"]:
                raise ValidationError("Category is required")
            if "payment_method" in patch and not patch["payment_method"]:
                raise ValidationError("Payment method is required")
            if "tags" in patch and patch["tags"] is not None:
                patch["tags"] = unique_tags(patch["tags"])
            user_id = await self._require_user()

            row = await self.gateway.update(self.table, transaction_id, patch, [eq("user_id", user_id)])
            transaction = self._parse(Transaction, row)
            self.transactions = self._replace(self.transactions, transaction)
            return transaction

    async def delete(self, transaction_id: str) -> bool:
        async with self._action("delete transaction"):
            user_id = await self._require_user()
            deleted = await self.gateway.delete(self.table, transaction_id, [eq("user_id", user_id)])
            self.transactions = [t for t in self.transactions if t.id != transaction_id]
            return deleted

    # ------------------------------------------------------------------
    # Local views

    def filtered(self, **criteria) -> list[Transaction]:
        return aggregation.filter_transactions(self.transactions, **criteria)

    def by_type(self, type: str) -> list[Transaction]:
        return self.filtered(type=type)

    def get(self, transaction_id: str) -> Transaction | None:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    def by_date(self, day: date) -> list[Transaction]:
        return [t for t in self.transactions if t.date == day]

    def by_month(self, year: int, month: int) -> list[Transaction]:
        return aggregation.transactions_in_month(self.transactions, year, month)

    def by_category(self, category_id: str) -> list[Transaction]:
        return [t for t in self.transactions if t.category_id == category_id]

    def by_payment_method(self, payment_method: str) -> list[Transaction]:
        return [t for t in self.transactions if t.payment_method == payment_method]
