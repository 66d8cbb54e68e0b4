# services/months.py
"""Month lifecycle: creation, summaries, and the one-way close."""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .. import models
from ..errors import BadRequest, Internal, NotFound, ValidationError
from ..schemas import budget as schemas
from . import aggregator, report
from .guard import get_owned_month
from .registry import add_allocation

logger = logging.getLogger(__name__)

Renderer = Callable[[schemas.MonthSummary], bytes]


def current_period(now: Optional[datetime] = None) -> Tuple[int, int]:
    """Calendar (year, month) in UTC."""
    now = now or datetime.now(timezone.utc)
    return now.year, now.month


def list_months(db: Session, user_id: int) -> List[models.Month]:
    return db.query(models.Month).filter(
        models.Month.user_id == user_id
    ).order_by(models.Month.year.desc(), models.Month.month.desc()).all()


def load_summary(db: Session, month: models.Month) -> schemas.MonthSummary:
    """Fetch a month's rows and aggregate them."""
    logger.debug(f"Building summary for month {month.id}")

    income_entries = db.query(models.IncomeEntry).filter(
        models.IncomeEntry.month_id == month.id
    ).order_by(models.IncomeEntry.id).all()

    fixed_expenses = db.query(models.FixedExpense).filter(
        models.FixedExpense.user_id == month.user_id
    ).order_by(models.FixedExpense.id).all()

    budgets = db.query(models.MonthlyBudget).options(
        joinedload(models.MonthlyBudget.category)
    ).filter(
        models.MonthlyBudget.month_id == month.id
    ).order_by(models.MonthlyBudget.id).all()

    items = db.query(models.Item).options(
        joinedload(models.Item.category)
    ).filter(
        models.Item.month_id == month.id
    ).order_by(models.Item.spent_on.desc(), models.Item.id.desc()).all()

    return aggregator.aggregate(month, income_entries, fixed_expenses, budgets, items)


def _find_month(db: Session, user_id: int, year: int, month: int) -> Optional[models.Month]:
    return db.query(models.Month).filter(
        models.Month.user_id == user_id,
        models.Month.year == year,
        models.Month.month == month
    ).first()


def get_or_create_month(db: Session, user_id: int, year: int, month: int) -> models.Month:
    """Return the month for a period, creating it with allocations copied from the templates."""
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")

    existing = _find_month(db, user_id, year, month)
    if existing:
        return existing

    try:
        record = models.Month(user_id=user_id, year=year, month=month, is_closed=False)
        db.add(record)
        db.flush()  # Generate ID

        categories = db.query(models.BudgetCategory).filter(
            models.BudgetCategory.user_id == user_id,
            models.BudgetCategory.deleted_at.is_(None)
        ).order_by(models.BudgetCategory.id).all()

        for category in categories:
            add_allocation(db, record.id, category.id, category.default_amount)

        db.commit()
    except IntegrityError:
        # Another request created the same period first.
        db.rollback()
        existing = _find_month(db, user_id, year, month)
        if existing:
            return existing
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(record)
    logger.info(f"Created month {record.id} ({year}-{month:02d}) for user {user_id} with {len(categories)} allocation(s)")
    return record


def get_or_create_current_month(db: Session, user_id: int, now: Optional[datetime] = None) -> schemas.MonthSummary:
    year, month = current_period(now)
    return load_summary(db, get_or_create_month(db, user_id, year, month))


def get_month(db: Session, user_id: int, month_id: int) -> schemas.MonthSummary:
    return load_summary(db, get_owned_month(db, user_id, month_id))


def close_month(db: Session, user_id: int, month_id: int,
                render: Renderer = report.render, now: Optional[datetime] = None) -> models.Month:
    """Freeze a month and archive its report.

    The snapshot insert and the closed flag commit together: if rendering or
    storing the report fails the month stays open.
    """
    month = get_owned_month(db, user_id, month_id)
    if month.is_closed:
        raise BadRequest("Month is already closed")

    summary = load_summary(db, month)

    try:
        pdf_data = render(summary)
    except Exception as exc:
        db.rollback()
        raise Internal(f"Report generation failed: {exc}") from exc

    try:
        db.add(models.MonthSnapshot(month_id=month.id, pdf_data=pdf_data))
        month.is_closed = True
        month.closed_at = now or datetime.now(timezone.utc)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        db.refresh(month)
        if month.is_closed or _has_snapshot(db, month.id):
            # A concurrent close stored its snapshot first.
            raise BadRequest("Month is already closed") from exc
        logger.exception(f"Storing the report for month {month_id} failed")
        raise Internal("Report could not be stored") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"Closing month {month_id} failed")
        raise Internal("Month could not be closed") from exc

    db.refresh(month)
    logger.info(f"Closed month {month_id} for user {user_id} ({len(pdf_data)} byte report)")
    return month


def _has_snapshot(db: Session, month_id: int) -> bool:
    return db.query(models.MonthSnapshot.id).filter(
        models.MonthSnapshot.month_id == month_id
    ).first() is not None


def get_month_pdf(db: Session, user_id: int, month_id: int) -> bytes:
    month = get_owned_month(db, user_id, month_id)

    snapshot = db.query(models.MonthSnapshot).filter(
        models.MonthSnapshot.month_id == month.id
    ).first()
    if not snapshot:
        raise NotFound("No report for this month")
    return snapshot.pdf_data


def get_variance(db: Session, user_id: int, month_id: int) -> schemas.VarianceReport:
    summary = get_month(db, user_id, month_id)
    user = db.get(models.User, user_id)
    savings = user.savings if user else 0.0
    return aggregator.variance(summary, savings=savings)
