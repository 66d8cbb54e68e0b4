# services/accounts.py
"""Accounts: registration, credentials, data reset and wealth balances."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..auth import hash_password, verify_password
from ..errors import Conflict, NotFound, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

# Columns on User that hold a single non-negative balance.
BALANCES = ("savings", "retirement_savings", "roth_ira")


def get_user(db: Session, user_id: int) -> models.User:
    user = db.get(models.User, user_id)
    if not user:
        raise NotFound("User not found")
    return user


def _username_taken(db: Session, username: str) -> bool:
    return db.query(models.User.id).filter(models.User.username == username).first() is not None


def register(db: Session, username: str, password: str) -> models.User:
    if _username_taken(db, username):
        raise Conflict("Username already exists")

    user = models.User(username=username, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Username already exists")

    db.refresh(user)
    logger.info(f"Registered user {user.id} '{username}'")
    return user


def authenticate(db: Session, username: str, password: str) -> models.User:
    user = db.query(models.User).filter(models.User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info(f"Failed login for '{username}'")
        raise Unauthorized("Invalid credentials")
    return user


def change_username(db: Session, user_id: int, new_username: str) -> models.User:
    user = get_user(db, user_id)
    if new_username == user.username:
        return user
    if _username_taken(db, new_username):
        raise Conflict("Username already exists")

    user.username = new_username
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Username already exists")

    db.refresh(user)
    logger.info(f"User {user_id} renamed to '{new_username}'")
    return user


def change_password(db: Session, user_id: int, current_password: str, new_password: str) -> None:
    user = get_user(db, user_id)
    if not verify_password(current_password, user.password_hash):
        raise Unauthorized("Current password is incorrect")

    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info(f"User {user_id} changed password")


def clear_data(db: Session, user_id: int, password: str) -> None:
    """Delete every budgeting record of a user and zero the balances. The account stays."""
    user = get_user(db, user_id)
    if not verify_password(password, user.password_hash):
        raise Unauthorized("Password is incorrect")

    try:
        months = db.query(models.Month).filter(models.Month.user_id == user_id).all()
        for month in months:
            db.delete(month)  # cascades to allocations, income, items, snapshot
        db.flush()

        db.query(models.BudgetCategory).filter(
            models.BudgetCategory.user_id == user_id
        ).delete(synchronize_session=False)
        db.query(models.FixedExpense).filter(
            models.FixedExpense.user_id == user_id
        ).delete(synchronize_session=False)

        for column in BALANCES:
            setattr(user, column, 0.0)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Cleared all data for user {user_id} ({len(months)} month(s))")


def get_balance(db: Session, user_id: int, column: str) -> float:
    if column not in BALANCES:
        raise ValueError(f"Unknown balance: {column}")
    return getattr(get_user(db, user_id), column) or 0.0


def set_balance(db: Session, user_id: int, column: str, amount: float) -> float:
    if column not in BALANCES:
        raise ValueError(f"Unknown balance: {column}")
    if amount < 0:
        raise ValidationError("Balance must be non-negative")

    user = get_user(db, user_id)
    setattr(user, column, amount)
    db.commit()
    logger.info(f"Set {column} for user {user_id}")
    return amount
