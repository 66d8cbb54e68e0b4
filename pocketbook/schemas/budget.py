from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import List, Optional


def _non_negative(v: Optional[float], what: str) -> Optional[float]:
    if v is not None and v < 0:
        raise ValueError(f'{what} must be non-negative')
    return v


# ============= TEMPLATES =============

class CategoryCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=100)
    default_amount: float = 0.0

    @field_validator('default_amount')
    @classmethod
    def default_amount_must_be_positive(cls, v: float) -> float:
        return _non_negative(v, 'Default amount')


class CategoryUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=100)
    default_amount: Optional[float] = None

    @field_validator('default_amount')
    @classmethod
    def default_amount_must_be_positive(cls, v: Optional[float]) -> Optional[float]:
        return _non_negative(v, 'Default amount')


class Category(BaseModel):
    id: int
    user_id: int
    label: str
    default_amount: float

    class Config:
        from_attributes = True


class FixedExpenseCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=100)
    amount: float

    @field_validator('amount')
    @classmethod
    def amount_must_be_positive(cls, v: float) -> float:
        return _non_negative(v, 'Amount')


class FixedExpenseUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[float] = None

    @field_validator('amount')
    @classmethod
    def amount_must_be_positive(cls, v: Optional[float]) -> Optional[float]:
        return _non_negative(v, 'Amount')


class FixedExpense(BaseModel):
    id: int
    user_id: int
    label: str
    amount: float

    class Config:
        from_attributes = True


# ============= MONTHS =============

class MonthCreate(BaseModel):
    year: int = Field(..., ge=1970, le=9999)
    month: int = Field(..., ge=1, le=12)


class Month(BaseModel):
    id: int
    user_id: int
    year: int
    month: int
    is_closed: bool
    closed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MonthlyBudgetUpdate(BaseModel):
    allocated_amount: float

    @field_validator('allocated_amount')
    @classmethod
    def allocated_amount_must_be_positive(cls, v: float) -> float:
        return _non_negative(v, 'Allocated amount')


class MonthlyBudget(BaseModel):
    id: int
    month_id: int
    category_id: int
    allocated_amount: float

    class Config:
        from_attributes = True


class MonthlyBudgetWithCategory(MonthlyBudget):
    """Allocation as shown in a month summary, with the derived spend."""
    category_label: Optional[str] = None
    spent_amount: float = 0.0


class IncomeCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=100)
    amount: float

    @field_validator('amount')
    @classmethod
    def amount_must_be_positive(cls, v: float) -> float:
        return _non_negative(v, 'Amount')


class IncomeUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[float] = None

    @field_validator('amount')
    @classmethod
    def amount_must_be_positive(cls, v: Optional[float]) -> Optional[float]:
        return _non_negative(v, 'Amount')


class IncomeEntry(BaseModel):
    id: int
    month_id: int
    label: str
    amount: float

    class Config:
        from_attributes = True


class ItemCreate(BaseModel):
    category_id: int
    description: str = Field(..., min_length=1, max_length=200)
    amount: float
    spent_on: date

    @field_validator('amount')
    @classmethod
    def amount_must_be_positive(cls, v: float) -> float:
        return _non_negative(v, 'Amount')


class ItemUpdate(BaseModel):
    category_id: Optional[int] = None
    description: Optional[str] = Field(None, min_length=1, max_length=200)
    amount: Optional[float] = None
    spent_on: Optional[date] = None

    @field_validator('amount')
    @classmethod
    def amount_must_be_positive(cls, v: Optional[float]) -> Optional[float]:
        return _non_negative(v, 'Amount')


class Item(BaseModel):
    id: int
    month_id: int
    category_id: int
    description: str
    amount: float
    spent_on: date

    class Config:
        from_attributes = True


class ItemWithCategory(Item):
    category_label: Optional[str] = None


class MonthSummary(BaseModel):
    """Everything known about one month plus the derived totals."""
    month: Month
    income_entries: List[IncomeEntry] = []
    fixed_expenses: List[FixedExpense] = []
    budgets: List[MonthlyBudgetWithCategory] = []
    items: List[ItemWithCategory] = []
    total_income: float = 0.0
    total_fixed: float = 0.0
    total_budgeted: float = 0.0
    total_spent: float = 0.0
    remaining: float = 0.0


class BudgetVariance(BaseModel):
    budget_id: int
    category_id: int
    label: Optional[str] = None
    allocated: float
    spent: float
    variance: float


class VarianceReport(BaseModel):
    month_id: int
    over_budget: List[BudgetVariance] = []
    under_budget: List[BudgetVariance] = []
    unplanned: List[BudgetVariance] = []
    total_overspend: float = 0.0
    total_underspend: float = 0.0
    total_unplanned: float = 0.0
    total_income: float = 0.0
    total_fixed: float = 0.0
    total_budgeted: float = 0.0
    remaining: float = 0.0
    savings: float = 0.0
    projected_savings: float = 0.0


# ============= WEALTH =============

class SavingsBalance(BaseModel):
    savings: float

    @field_validator('savings')
    @classmethod
    def savings_must_be_positive(cls, v: float) -> float:
        return _non_negative(v, 'Savings')


class RetirementSavingsBalance(BaseModel):
    retirement_savings: float

    @field_validator('retirement_savings')
    @classmethod
    def retirement_savings_must_be_positive(cls, v: float) -> float:
        return _non_negative(v, 'Retirement savings')


class RothIraBalance(BaseModel):
    roth_ira: float

    @field_validator('roth_ira')
    @classmethod
    def roth_ira_must_be_positive(cls, v: float) -> float:
        return _non_negative(v, 'Roth IRA balance')
