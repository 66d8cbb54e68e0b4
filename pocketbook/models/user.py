# models/user.py
"""Account model holding credentials and the three wealth balances."""

from sqlalchemy import Column, Integer, String, Float, DateTime

from ..database import Base
from .budget import utc_now


class User(Base):
    """A registered account. Owns every other record transitively."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(32), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    savings = Column(Float, nullable=False, default=0.0)  # liquid
    retirement_savings = Column(Float, nullable=False, default=0.0)
    roth_ira = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), default=utc_now)
