# Per-session state containers. Each store talks to the backend only through a Gateway.

from fintrack.stores.analytics_store import AnalyticsStore
from fintrack.stores.auth_store import AuthStore
from fintrack.stores.budget_store import BudgetStore
from fintrack.stores.category_store import CategoryStore
from fintrack.stores.goal_store import GoalStore
from fintrack.stores.investment_store import InvestmentStore
from fintrack.stores.payment_method_store import PaymentMethodStore
from fintrack.stores.savings_store import SavingsStore
from fintrack.stores.transaction_store import TransactionStore

__all__ = [
    "AnalyticsStore",
    "AuthStore",
    "BudgetStore",
    "CategoryStore",
    "GoalStore",
    "InvestmentStore",
    "PaymentMethodStore",
    "SavingsStore",
    "TransactionStore",
]
