import pytest

from pocketbook import models
from pocketbook.auth import create_access_token, decode_access_token, verify_password
from pocketbook.errors import Conflict, Unauthorized, ValidationError
from pocketbook.services import accounts, entries, months, registry


def test_register_hashes_password(db, user):
    assert user.password_hash != "correct-horse"
    assert verify_password("correct-horse", user.password_hash)
    assert (user.savings, user.retirement_savings, user.roth_ira) == (0, 0, 0)


def test_register_duplicate_username(db, user):
    with pytest.raises(Conflict):
        accounts.register(db, "alice", "another-password")


def test_authenticate(db, user):
    assert accounts.authenticate(db, "alice", "correct-horse").id == user.id
    with pytest.raises(Unauthorized):
        accounts.authenticate(db, "alice", "wrong-password")
    with pytest.raises(Unauthorized):
        accounts.authenticate(db, "nobody", "correct-horse")


def test_change_username_collision(db, user, other_user):
    with pytest.raises(Conflict):
        accounts.change_username(db, user.id, "mallory")
    assert accounts.change_username(db, user.id, "alice2").username == "alice2"


def test_change_password_requires_current(db, user):
    with pytest.raises(Unauthorized):
        accounts.change_password(db, user.id, "wrong-password", "new-password")

    accounts.change_password(db, user.id, "correct-horse", "new-password")
    assert accounts.authenticate(db, "alice", "new-password").id == user.id


def test_balances(db, user):
    assert accounts.set_balance(db, user.id, "roth_ira", 6500) == 6500
    assert accounts.get_balance(db, user.id, "roth_ira") == 6500
    assert accounts.get_balance(db, user.id, "savings") == 0
    with pytest.raises(ValidationError):
        accounts.set_balance(db, user.id, "savings", -1)


def test_clear_data_removes_only_callers_records(db, user, other_user):
    accounts.set_balance(db, user.id, "savings", 100)
    registry.create_category(db, user.id, "Groceries", 300)
    registry.create_fixed_expense(db, user.id, "Rent", 1000)
    month = months.get_or_create_month(db, user.id, 2026, 10)
    entries.create_income(db, user.id, month.id, "Paycheck", 2000)
    months.close_month(db, user.id, month.id, render=lambda summary: b"%PDF")
    registry.create_category(db, other_user.id, "Theirs", 1)

    with pytest.raises(Unauthorized):
        accounts.clear_data(db, user.id, "wrong-password")

    accounts.clear_data(db, user.id, "correct-horse")

    assert months.list_months(db, user.id) == []
    assert db.query(models.MonthSnapshot).count() == 0
    assert db.query(models.IncomeEntry).count() == 0
    assert db.query(models.BudgetCategory).filter_by(user_id=user.id).count() == 0
    assert registry.list_fixed_expenses(db, user.id) == []
    assert accounts.get_balance(db, user.id, "savings") == 0
    assert [c.label for c in registry.list_categories(db, other_user.id)] == ["Theirs"]
    assert accounts.authenticate(db, "alice", "correct-horse").id == user.id


def test_token_round_trip():
    token = create_access_token(7, "alice")
    identity = decode_access_token(token)
    assert (identity.id, identity.username) == (7, "alice")

    with pytest.raises(Unauthorized):
        decode_access_token(token + "tampered")
