# services/entries.py
"""Income, item and allocation records inside a month."""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import models
from ..errors import NotFound
from ..schemas import budget as schemas
from .guard import verify_category, verify_month_access, verify_month_not_closed
from .registry import validate_amount, validate_length

logger = logging.getLogger(__name__)

DESCRIPTION_MAX_LENGTH = 200


# ============= ALLOCATIONS =============

def list_budgets(db: Session, user_id: int, month_id: int) -> List[models.MonthlyBudget]:
    verify_month_access(db, user_id, month_id)
    return db.query(models.MonthlyBudget).filter(
        models.MonthlyBudget.month_id == month_id
    ).order_by(models.MonthlyBudget.id).all()


def update_budget(db: Session, user_id: int, month_id: int, budget_id: int,
                  allocated_amount: float) -> models.MonthlyBudget:
    validate_amount(allocated_amount)
    verify_month_not_closed(db, user_id, month_id)

    budget = db.query(models.MonthlyBudget).filter(
        models.MonthlyBudget.id == budget_id,
        models.MonthlyBudget.month_id == month_id
    ).first()
    if not budget:
        raise NotFound("Budget not found")

    budget.allocated_amount = allocated_amount
    db.commit()
    db.refresh(budget)
    logger.info(f"Set allocation {budget_id} in month {month_id} to {allocated_amount}")
    return budget


# ============= INCOME =============

def list_income(db: Session, user_id: int, month_id: int) -> List[models.IncomeEntry]:
    verify_month_access(db, user_id, month_id)
    return db.query(models.IncomeEntry).filter(
        models.IncomeEntry.month_id == month_id
    ).order_by(models.IncomeEntry.id).all()


def _get_income(db: Session, month_id: int, income_id: int) -> models.IncomeEntry:
    entry = db.query(models.IncomeEntry).filter(
        models.IncomeEntry.id == income_id,
        models.IncomeEntry.month_id == month_id
    ).first()
    if not entry:
        raise NotFound("Income entry not found")
    return entry


def create_income(db: Session, user_id: int, month_id: int, label: str, amount: float) -> models.IncomeEntry:
    validate_length(label)
    validate_amount(amount)
    verify_month_not_closed(db, user_id, month_id)

    entry = models.IncomeEntry(month_id=month_id, label=label, amount=amount)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info(f"Added income {entry.id} ({amount}) to month {month_id}")
    return entry


def update_income(db: Session, user_id: int, month_id: int, income_id: int,
                  label: Optional[str] = None, amount: Optional[float] = None) -> models.IncomeEntry:
    validate_length(label)
    validate_amount(amount)
    verify_month_not_closed(db, user_id, month_id)

    entry = _get_income(db, month_id, income_id)
    if label is not None:
        entry.label = label
    if amount is not None:
        entry.amount = amount

    db.commit()
    db.refresh(entry)
    logger.info(f"Updated income {income_id} in month {month_id}")
    return entry


def delete_income(db: Session, user_id: int, month_id: int, income_id: int) -> None:
    verify_month_not_closed(db, user_id, month_id)
    entry = _get_income(db, month_id, income_id)
    db.delete(entry)
    db.commit()
    logger.info(f"Deleted income {income_id} from month {month_id}")


# ============= ITEMS =============

def _with_category(item: models.Item) -> schemas.ItemWithCategory:
    return schemas.ItemWithCategory(
        id=item.id,
        month_id=item.month_id,
        category_id=item.category_id,
        description=item.description,
        amount=item.amount,
        spent_on=item.spent_on,
        category_label=item.category.label if item.category is not None else None,
    )


def list_items(db: Session, user_id: int, month_id: int) -> List[schemas.ItemWithCategory]:
    verify_month_access(db, user_id, month_id)
    items = db.query(models.Item).filter(
        models.Item.month_id == month_id
    ).order_by(models.Item.spent_on.desc(), models.Item.id.desc()).all()
    return [_with_category(i) for i in items]


def _get_item(db: Session, month_id: int, item_id: int) -> models.Item:
    item = db.query(models.Item).filter(
        models.Item.id == item_id,
        models.Item.month_id == month_id
    ).first()
    if not item:
        raise NotFound("Item not found")
    return item


def create_item(db: Session, user_id: int, month_id: int, category_id: int,
                description: str, amount: float, spent_on: date) -> models.Item:
    validate_length(description, DESCRIPTION_MAX_LENGTH, "Description")
    validate_amount(amount)
    verify_month_not_closed(db, user_id, month_id)
    verify_category(db, user_id, category_id)

    item = models.Item(
        month_id=month_id,
        category_id=category_id,
        description=description,
        amount=amount,
        spent_on=spent_on
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"Recorded item {item.id}: {description} ({amount}) in month {month_id}")
    return item


def update_item(db: Session, user_id: int, month_id: int, item_id: int,
                category_id: Optional[int] = None, description: Optional[str] = None,
                amount: Optional[float] = None, spent_on: Optional[date] = None) -> models.Item:
    validate_length(description, DESCRIPTION_MAX_LENGTH, "Description")
    validate_amount(amount)
    verify_month_not_closed(db, user_id, month_id)

    item = _get_item(db, month_id, item_id)
    if category_id is not None:
        verify_category(db, user_id, category_id)
        item.category_id = category_id
    if description is not None:
        item.description = description
    if amount is not None:
        item.amount = amount
    if spent_on is not None:
        item.spent_on = spent_on

    db.commit()
    db.refresh(item)
    logger.info(f"Updated item {item_id} in month {month_id}")
    return item


def delete_item(db: Session, user_id: int, month_id: int, item_id: int) -> None:
    verify_month_not_closed(db, user_id, month_id)
    item = _get_item(db, month_id, item_id)
    db.delete(item)
    db.commit()
    logger.info(f"Deleted item {item_id} from month {month_id}")
