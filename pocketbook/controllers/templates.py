# controllers/templates.py
"""Category and fixed-expense template endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..dependencies import get_db
from ..schemas import budget as schemas
from ..schemas.auth import CurrentUser
from ..services import registry as service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/categories", response_model=List[schemas.Category], summary="List all categories")
def list_categories(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Category templates used for new months."""
    logger.debug(f"Fetching categories for user {current_user.id}")
    return service.list_categories(db, current_user.id)


@router.post("/categories", response_model=schemas.Category, status_code=status.HTTP_201_CREATED,
             summary="Create a category")
def create_category(
    category: schemas.CategoryCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Create a category template and add it to every open month."""
    return service.create_category(db, current_user.id, category.label, category.default_amount)


@router.put("/categories/{category_id}", response_model=schemas.Category, summary="Update a category")
def update_category(
    category_id: int,
    data: schemas.CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Update label or default amount. Existing monthly allocations are left alone."""
    return service.update_category(db, current_user.id, category_id, data.label, data.default_amount)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a category")
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Remove a template. Months that already budget for it keep their lines."""
    service.delete_category(db, current_user.id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/fixed-expenses", response_model=List[schemas.FixedExpense], summary="List fixed expenses")
def list_fixed_expenses(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    return service.list_fixed_expenses(db, current_user.id)


@router.post("/fixed-expenses", response_model=schemas.FixedExpense, status_code=status.HTTP_201_CREATED,
             summary="Create fixed expense")
def create_fixed_expense(
    expense: schemas.FixedExpenseCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Add a recurring expense (rent, internet) counted in every month."""
    return service.create_fixed_expense(db, current_user.id, expense.label, expense.amount)


@router.put("/fixed-expenses/{expense_id}", response_model=schemas.FixedExpense, summary="Update fixed expense")
def update_fixed_expense(
    expense_id: int,
    data: schemas.FixedExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    return service.update_fixed_expense(db, current_user.id, expense_id, data.label, data.amount)


@router.delete("/fixed-expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT,
               summary="Delete fixed expense")
def delete_fixed_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    service.delete_fixed_expense(db, current_user.id, expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
