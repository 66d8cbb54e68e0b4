# controllers/entries.py
"""Allocation, income and item endpoints nested under a month."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..dependencies import get_db
from ..schemas import budget as schemas
from ..schemas.auth import CurrentUser
from ..services import entries as service

logger = logging.getLogger(__name__)

router = APIRouter()


# ============= ALLOCATIONS =============

@router.get("/{month_id}/budgets", response_model=List[schemas.MonthlyBudget], summary="List monthly allocations")
def list_budgets(
    month_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Budget allocations of one month."""
    return service.list_budgets(db, current_user.id, month_id)


@router.put("/{month_id}/budgets/{budget_id}", response_model=schemas.MonthlyBudget, summary="Update monthly allocation")
def update_budget(
    month_id: int,
    budget_id: int,
    data: schemas.MonthlyBudgetUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Adjust the amount allocated to a category for this month only."""
    return service.update_budget(db, current_user.id, month_id, budget_id, data.allocated_amount)


# ============= INCOME =============

@router.get("/{month_id}/income", response_model=List[schemas.IncomeEntry], summary="List monthly income")
def list_income(
    month_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    return service.list_income(db, current_user.id, month_id)


@router.post("/{month_id}/income", response_model=schemas.IncomeEntry, summary="Add income entry")
def create_income(
    month_id: int,
    data: schemas.IncomeCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Record an income source. Only available while the month is open."""
    return service.create_income(db, current_user.id, month_id, data.label, data.amount)


@router.put("/{month_id}/income/{income_id}", response_model=schemas.IncomeEntry, summary="Update income entry")
def update_income(
    month_id: int,
    income_id: int,
    data: schemas.IncomeUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    return service.update_income(db, current_user.id, month_id, income_id, data.label, data.amount)


@router.delete("/{month_id}/income/{income_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete income entry")
def delete_income(
    month_id: int,
    income_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    service.delete_income(db, current_user.id, month_id, income_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============= ITEMS =============

@router.get("/{month_id}/items", response_model=List[schemas.ItemWithCategory], summary="List transactions")
def list_items(
    month_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Itemized spending for the month, newest first, with category labels."""
    return service.list_items(db, current_user.id, month_id)


@router.post("/{month_id}/items", response_model=schemas.Item, summary="Record transaction")
def create_item(
    month_id: int,
    data: schemas.ItemCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Log an expense against one of your categories."""
    return service.create_item(
        db, current_user.id, month_id,
        data.category_id, data.description, data.amount, data.spent_on
    )


@router.put("/{month_id}/items/{item_id}", response_model=schemas.Item, summary="Update transaction details")
def update_item(
    month_id: int,
    item_id: int,
    data: schemas.ItemUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Partial update of category, description, amount or date."""
    return service.update_item(
        db, current_user.id, month_id, item_id,
        category_id=data.category_id,
        description=data.description,
        amount=data.amount,
        spent_on=data.spent_on
    )


@router.delete("/{month_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete transaction")
def delete_item(
    month_id: int,
    item_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    service.delete_item(db, current_user.id, month_id, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
