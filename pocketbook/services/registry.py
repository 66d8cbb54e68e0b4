# services/registry.py
"""Category and fixed-expense templates owned by a user.

Creating a category also gives every open month of the owner an allocation
for it at the category's default amount.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

LABEL_MAX_LENGTH = 100


def validate_length(value: Optional[str], limit: int = LABEL_MAX_LENGTH, what: str = "Label") -> None:
    if value is not None and not 1 <= len(value) <= limit:
        raise ValidationError(f"{what} must be 1-{limit} characters")


def validate_amount(amount: Optional[float], what: str = "Amount") -> None:
    if amount is not None and amount < 0:
        raise ValidationError(f"{what} must be non-negative")


def add_allocation(db: Session, month_id: int, category_id: int, amount: float) -> bool:
    """Insert a (month, category) allocation unless one exists.

    Runs in a SAVEPOINT so a failed insert leaves the caller's transaction
    usable. Returns True when a row was added.
    """
    existing = db.query(models.MonthlyBudget.id).filter(
        models.MonthlyBudget.month_id == month_id,
        models.MonthlyBudget.category_id == category_id
    ).first()
    if existing:
        return False

    try:
        with db.begin_nested():
            db.add(models.MonthlyBudget(
                month_id=month_id,
                category_id=category_id,
                allocated_amount=amount
            ))
    except IntegrityError:
        logger.warning(f"Skipped allocation for month {month_id}, category {category_id}: already present")
        return False
    return True


# ============= CATEGORIES =============

def list_categories(db: Session, user_id: int) -> List[models.BudgetCategory]:
    return db.query(models.BudgetCategory).filter(
        models.BudgetCategory.user_id == user_id,
        models.BudgetCategory.deleted_at.is_(None)
    ).order_by(models.BudgetCategory.id).all()


def get_category(db: Session, user_id: int, category_id: int) -> models.BudgetCategory:
    category = db.query(models.BudgetCategory).filter(
        models.BudgetCategory.id == category_id,
        models.BudgetCategory.user_id == user_id,
        models.BudgetCategory.deleted_at.is_(None)
    ).first()
    if not category:
        raise NotFound("Category not found")
    return category


def create_category(db: Session, user_id: int, label: str, default_amount: float) -> models.BudgetCategory:
    """Create a category template and allocate it in every open month."""
    validate_length(label)
    validate_amount(default_amount, "Default amount")

    try:
        category = models.BudgetCategory(
            user_id=user_id,
            label=label,
            default_amount=default_amount
        )
        db.add(category)
        db.flush()  # Generate ID

        open_months = db.query(models.Month.id).filter(
            models.Month.user_id == user_id,
            models.Month.is_closed.is_(False)
        ).all()

        added = 0
        for (month_id,) in open_months:
            if add_allocation(db, month_id, category.id, default_amount):
                added += 1

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(category)
    logger.info(f"Created category {category.id} '{label}' for user {user_id}; allocated in {added} open month(s)")
    return category


def update_category(db: Session, user_id: int, category_id: int,
                    label: Optional[str] = None, default_amount: Optional[float] = None) -> models.BudgetCategory:
    """Change a template. Allocations already made from it keep their amounts."""
    validate_length(label)
    validate_amount(default_amount, "Default amount")

    category = get_category(db, user_id, category_id)
    if label is not None:
        category.label = label
    if default_amount is not None:
        category.default_amount = default_amount

    db.commit()
    db.refresh(category)
    logger.info(f"Updated category {category_id} for user {user_id}")
    return category


def delete_category(db: Session, user_id: int, category_id: int) -> None:
    """Retire a template.

    The row is kept with `deleted_at` set: allocations and items that already
    reference it still resolve their label, while the category stops being
    listed, propagated or accepted for new items.
    """
    category = get_category(db, user_id, category_id)
    category.deleted_at = models.utc_now()
    db.commit()
    logger.info(f"Deleted category {category_id} for user {user_id}")


# ============= FIXED EXPENSES =============

def list_fixed_expenses(db: Session, user_id: int) -> List[models.FixedExpense]:
    return db.query(models.FixedExpense).filter(
        models.FixedExpense.user_id == user_id
    ).order_by(models.FixedExpense.id).all()


def get_fixed_expense(db: Session, user_id: int, expense_id: int) -> models.FixedExpense:
    expense = db.query(models.FixedExpense).filter(
        models.FixedExpense.id == expense_id,
        models.FixedExpense.user_id == user_id
    ).first()
    if not expense:
        raise NotFound("Fixed expense not found")
    return expense


def create_fixed_expense(db: Session, user_id: int, label: str, amount: float) -> models.FixedExpense:
    validate_length(label)
    validate_amount(amount)

    expense = models.FixedExpense(user_id=user_id, label=label, amount=amount)
    db.add(expense)
    db.commit()
    db.refresh(expense)
    logger.info(f"Created fixed expense {expense.id} '{label}' for user {user_id}")
    return expense


def update_fixed_expense(db: Session, user_id: int, expense_id: int,
                         label: Optional[str] = None, amount: Optional[float] = None) -> models.FixedExpense:
    """Edit a fixed expense. This changes the remaining balance of every month, closed ones included."""
    validate_length(label)
    validate_amount(amount)

    expense = get_fixed_expense(db, user_id, expense_id)
    if label is not None:
        expense.label = label
    if amount is not None:
        expense.amount = amount

    db.commit()
    db.refresh(expense)
    logger.info(f"Updated fixed expense {expense_id} for user {user_id}")
    return expense


def delete_fixed_expense(db: Session, user_id: int, expense_id: int) -> None:
    expense = get_fixed_expense(db, user_id, expense_id)
    db.delete(expense)
    db.commit()
    logger.info(f"Deleted fixed expense {expense_id} for user {user_id}")
