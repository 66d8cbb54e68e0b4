from .user import User
from .budget import (
    BudgetCategory,
    FixedExpense,
    IncomeEntry,
    Item,
    Month,
    MonthlyBudget,
    MonthSnapshot,
    utc_now,
)
