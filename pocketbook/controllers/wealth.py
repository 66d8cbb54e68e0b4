# controllers/wealth.py
"""Savings balances stored on the user profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..dependencies import get_db
from ..schemas import budget as schemas
from ..schemas.auth import CurrentUser
from ..services import accounts

router = APIRouter()


@router.get("/savings", response_model=schemas.SavingsBalance, summary="Get savings balance")
def get_savings(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return {"savings": accounts.get_balance(db, current_user.id, "savings")}


@router.put("/savings", response_model=schemas.SavingsBalance, summary="Update savings balance")
def update_savings(
    data: schemas.SavingsBalance,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    return {"savings": accounts.set_balance(db, current_user.id, "savings", data.savings)}


@router.get("/retirement-savings", response_model=schemas.RetirementSavingsBalance,
            summary="Get retirement savings balance")
def get_retirement_savings(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return {"retirement_savings": accounts.get_balance(db, current_user.id, "retirement_savings")}


@router.put("/retirement-savings", response_model=schemas.RetirementSavingsBalance,
            summary="Update retirement savings balance")
def update_retirement_savings(
    data: schemas.RetirementSavingsBalance,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    amount = accounts.set_balance(db, current_user.id, "retirement_savings", data.retirement_savings)
    return {"retirement_savings": amount}


@router.get("/roth-ira", response_model=schemas.RothIraBalance, summary="Get Roth IRA balance")
def get_roth_ira(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return {"roth_ira": accounts.get_balance(db, current_user.id, "roth_ira")}


@router.put("/roth-ira", response_model=schemas.RothIraBalance, summary="Update Roth IRA balance")
def update_roth_ira(
    data: schemas.RothIraBalance,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    return {"roth_ira": accounts.set_balance(db, current_user.id, "roth_ira", data.roth_ira)}
