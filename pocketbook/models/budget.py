# models/budget.py
"""SQLAlchemy models for monthly budgeting."""

from datetime import datetime, timezone
from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from ..database import Base


def utc_now():
    """Return current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class BudgetCategory(Base):
    """Spending bucket template (e.g., 'Groceries') with a default monthly allocation."""
    __tablename__ = "budget_categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    label = Column(String(100), nullable=False)
    default_amount = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    deleted_at = Column(DateTime(timezone=True), nullable=True)  # set when the template is deleted


class FixedExpense(Base):
    """Recurring expense (rent, internet) counted into every month of its owner."""
    __tablename__ = "fixed_expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    label = Column(String(100), nullable=False)
    amount = Column(Float, nullable=False, default=0.0)


class Month(Base):
    """Calendar-period container. Open until closed; closing is one-way."""
    __tablename__ = "months"
    __table_args__ = (UniqueConstraint("user_id", "year", "month", name="uq_months_user_period"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    is_closed = Column(Boolean, nullable=False, default=False)
    closed_at = Column(DateTime(timezone=True), nullable=True)

    budgets = relationship("MonthlyBudget", back_populates="month", cascade="all, delete-orphan")
    income_entries = relationship("IncomeEntry", back_populates="month", cascade="all, delete-orphan")
    items = relationship("Item", back_populates="month", cascade="all, delete-orphan")
    snapshot = relationship("MonthSnapshot", uselist=False, cascade="all, delete-orphan")


class MonthlyBudget(Base):
    """Allocation of one category within one month."""
    __tablename__ = "monthly_budgets"
    __table_args__ = (UniqueConstraint("month_id", "category_id", name="uq_monthly_budgets_month_category"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    month_id = Column(Integer, ForeignKey("months.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("budget_categories.id"), nullable=False)
    allocated_amount = Column(Float, nullable=False, default=0.0)

    month = relationship("Month", back_populates="budgets")
    category = relationship("BudgetCategory")


class IncomeEntry(Base):
    """Income recorded against a month (paycheck, gift)."""
    __tablename__ = "income_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    month_id = Column(Integer, ForeignKey("months.id"), nullable=False, index=True)
    label = Column(String(100), nullable=False)
    amount = Column(Float, nullable=False)

    month = relationship("Month", back_populates="income_entries")


class Item(Base):
    """Individual transaction/expense entry."""
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    month_id = Column(Integer, ForeignKey("months.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("budget_categories.id"), nullable=False)
    description = Column(String(200), nullable=False)
    amount = Column(Float, nullable=False)
    spent_on = Column(Date, nullable=False)

    month = relationship("Month", back_populates="items")
    category = relationship("BudgetCategory")


class MonthSnapshot(Base):
    """Report archived when a month is closed. Written once, never updated."""
    __tablename__ = "month_snapshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    month_id = Column(Integer, ForeignKey("months.id"), nullable=False, unique=True)
    pdf_data = Column(LargeBinary, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)
