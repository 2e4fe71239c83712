# Entity schemas. Rows arriving from the gateway are validated against these.

from fintrack.models.transaction import Transaction, TransactionCreate, TransactionUpdate
from fintrack.models.category import (
    Category, CategoryCreate, CategoryUpdate,
    PaymentMethod, PaymentMethodCreate, PaymentMethodUpdate,
)
from fintrack.models.budget import (
    MonthlyBudget, AnnualBudget, MonthlyBudgetCreate, AnnualBudgetCreate,
    BudgetUpdate, BudgetPerformance, BudgetUtilization,
)
from fintrack.models.goal import FinancialGoal, GoalCreate, GoalUpdate, GoalWithProgress
from fintrack.models.investment import Investment, InvestmentCreate, InvestmentUpdate, InvestmentHolding
from fintrack.models.savings import (
    SavingsRecommendation, RecommendationCreate, RecommendationUpdate, Allocation,
)

__all__ = [
    "Transaction",
    "TransactionCreate",
    "TransactionUpdate",
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    "PaymentMethod",
    "PaymentMethodCreate",
    "PaymentMethodUpdate",
    "MonthlyBudget",
    "AnnualBudget",
    "MonthlyBudgetCreate",
    "AnnualBudgetCreate",
    "BudgetUpdate",
    "BudgetPerformance",
    "BudgetUtilization",
    "FinancialGoal",
    "GoalCreate",
    "GoalUpdate",
    "GoalWithProgress",
    "Investment",
    "InvestmentCreate",
    "InvestmentUpdate",
    "InvestmentHolding",
    "SavingsRecommendation",
    "RecommendationCreate",
    "RecommendationUpdate",
    "Allocation",
]
