"""
context.py — Everything one authenticated session needs
Replaces app-wide store singletons: build one FinTrackContext per session or
request and pass it to whatever needs a store.
"""

from fintrack.gateway import Gateway
from fintrack.stores import (
    AnalyticsStore,
    BudgetStore,
    CategoryStore,
    GoalStore,
    InvestmentStore,
    PaymentMethodStore,
    SavingsStore,
    TransactionStore,
)


class FinTrackContext:
    def __init__(self, gateway: Gateway, user_id: str | None = None):
        self.gateway = gateway
        self.user_id = user_id
        self.transactions = TransactionStore(gateway)
        self.categories = CategoryStore(gateway)
        self.payment_methods = PaymentMethodStore(gateway)
        self.budgets = BudgetStore(gateway)
        self.goals = GoalStore(gateway)
        self.investments = InvestmentStore(gateway)
        self.savings = SavingsStore(gateway)
        self.analytics = AnalyticsStore(gateway)
