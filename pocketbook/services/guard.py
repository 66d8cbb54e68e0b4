# services/guard.py
"""Ownership and open-state checks applied before every month mutation."""

import logging

from sqlalchemy.orm import Session

from .. import models
from ..errors import BadRequest, NotFound

logger = logging.getLogger(__name__)

MONTH_CLOSED = "Month is closed"
INVALID_CATEGORY = "Invalid category"


def get_owned_month(db: Session, user_id: int, month_id: int, require_open: bool = False) -> models.Month:
    """Return the month if `user_id` owns it, optionally insisting it is still open.

    Raises NotFound for a missing month and for one owned by someone else, so
    callers cannot tell the two apart.
    """
    month = db.query(models.Month).filter(
        models.Month.id == month_id,
        models.Month.user_id == user_id
    ).first()

    if not month:
        raise NotFound("Month not found")

    if require_open and month.is_closed:
        logger.info(f"Rejected mutation of closed month {month_id} by user {user_id}")
        raise BadRequest(MONTH_CLOSED)

    return month


def verify_month_access(db: Session, user_id: int, month_id: int) -> models.Month:
    return get_owned_month(db, user_id, month_id)


def verify_month_not_closed(db: Session, user_id: int, month_id: int) -> models.Month:
    return get_owned_month(db, user_id, month_id, require_open=True)


def verify_category(db: Session, user_id: int, category_id: int) -> models.BudgetCategory:
    """Check that an item may reference this category."""
    category = db.query(models.BudgetCategory).filter(
        models.BudgetCategory.id == category_id,
        models.BudgetCategory.user_id == user_id,
        models.BudgetCategory.deleted_at.is_(None)
    ).first()

    if not category:
        raise BadRequest(INVALID_CATEGORY)
    return category
