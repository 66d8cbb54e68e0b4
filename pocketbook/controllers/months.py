# controllers/months.py
"""Month lifecycle endpoints: current month, summaries, close and report download."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..dependencies import get_db
from ..schemas import budget as schemas
from ..schemas.auth import CurrentUser
from ..services import months as service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[schemas.Month], summary="List all budget months")
def list_months(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """History of the caller's months, newest first."""
    return service.list_months(db, current_user.id)


@router.post("", response_model=schemas.MonthSummary, summary="Open a month")
def create_month(
    period: schemas.MonthCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Return the month for a calendar period, creating it from the category templates if needed."""
    logger.info(f"Opening {period.year}-{period.month:02d} for user {current_user.id}")
    month = service.get_or_create_month(db, current_user.id, period.year, period.month)
    return service.load_summary(db, month)


@router.get("/current", response_model=schemas.MonthSummary, summary="Get current month summary")
def get_current_month(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Summary of this calendar month. Creates it and copies your default categories if it doesn't exist."""
    return service.get_or_create_current_month(db, current_user.id)


@router.get("/{month_id}", response_model=schemas.MonthSummary, summary="Get specific month details")
def get_month(
    month_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Income, fixed expenses, allocations with spend, items and totals for one month."""
    return service.get_month(db, current_user.id, month_id)


@router.get("/{month_id}/variance", response_model=schemas.VarianceReport, summary="Analyze budget variance")
def get_variance(
    month_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Over-budget, under-budget and unplanned spending, plus projected savings."""
    return service.get_variance(db, current_user.id, month_id)


@router.post("/{month_id}/close", response_model=schemas.Month, summary="Close month and generate report")
def close_month(
    month_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """Freeze the month against further edits and archive a PDF report of it."""
    logger.info(f"Closing month {month_id} for user {current_user.id}")
    return service.close_month(db, current_user.id, month_id)


@router.get(
    "/{month_id}/pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    summary="Download month PDF"
)
def get_month_pdf(
    month_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """The report archived when the month was closed."""
    pdf_data = service.get_month_pdf(db, current_user.id, month_id)
    return Response(
        content=pdf_data,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="month-{month_id}.pdf"'}
    )
