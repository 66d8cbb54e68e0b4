import pytest

from pocketbook import models
from pocketbook.errors import NotFound, ValidationError
from pocketbook.services import months, registry

from .factories import make_category, make_item, make_month


def _allocations(db, category_id):
    return db.query(models.MonthlyBudget).filter(models.MonthlyBudget.category_id == category_id).all()


def test_create_category_allocates_in_every_open_month(db, user):
    open_months = [make_month(db, user.id, 2026, m) for m in (8, 9, 10)]
    make_month(db, user.id, 2026, 7, is_closed=True)

    category = registry.create_category(db, user.id, "Groceries", 300)
    rows = _allocations(db, category.id)

    assert sorted(r.month_id for r in rows) == sorted(m.id for m in open_months)
    assert all(r.allocated_amount == 300 for r in rows)


def test_create_category_without_open_months_adds_nothing(db, user):
    make_month(db, user.id, 2026, 7, is_closed=True)

    category = registry.create_category(db, user.id, "Groceries", 300)

    assert _allocations(db, category.id) == []


def test_create_category_ignores_other_users_months(db, user, other_user):
    make_month(db, other_user.id)

    category = registry.create_category(db, user.id, "Groceries", 300)

    assert _allocations(db, category.id) == []


def test_add_allocation_is_a_noop_for_existing_pair(db, user):
    month = make_month(db, user.id)
    category = registry.create_category(db, user.id, "Groceries", 300)

    assert registry.add_allocation(db, month.id, category.id, 999) is False
    db.commit()

    rows = _allocations(db, category.id)
    assert len(rows) == 1
    assert rows[0].allocated_amount == 300


@pytest.mark.parametrize("label, amount", [("", 10), ("x" * 101, 10), ("Rent", -1)])
def test_create_category_rejects_bad_input(db, user, label, amount):
    with pytest.raises(ValidationError):
        registry.create_category(db, user.id, label, amount)
    assert registry.list_categories(db, user.id) == []


def test_update_category_leaves_allocations_alone(db, user):
    make_month(db, user.id)
    category = registry.create_category(db, user.id, "Groceries", 300)

    updated = registry.update_category(db, user.id, category.id, label="Food", default_amount=450)

    assert (updated.label, updated.default_amount) == ("Food", 450)
    assert _allocations(db, category.id)[0].allocated_amount == 300


def test_update_category_of_other_user_is_not_found(db, user, other_user):
    category = make_category(db, other_user.id)

    with pytest.raises(NotFound):
        registry.update_category(db, user.id, category.id, label="Mine now")


def test_delete_category_keeps_month_history(db, user):
    month = make_month(db, user.id)
    category = registry.create_category(db, user.id, "Groceries", 300)
    make_item(db, month.id, category.id, 20)

    registry.delete_category(db, user.id, category.id)

    assert registry.list_categories(db, user.id) == []
    allocation = _allocations(db, category.id)[0]
    assert allocation.category.label == "Groceries"
    with pytest.raises(NotFound):
        registry.update_category(db, user.id, category.id, label="Back")


def test_deleted_category_is_not_copied_into_new_months(db, user):
    kept = registry.create_category(db, user.id, "Rent buffer", 50)
    dropped = registry.create_category(db, user.id, "Groceries", 300)
    registry.delete_category(db, user.id, dropped.id)

    month = months.get_or_create_month(db, user.id, 2026, 11)

    assert _allocations(db, dropped.id) == []
    assert [r.month_id for r in _allocations(db, kept.id)] == [month.id]


def test_fixed_expense_crud_is_scoped_to_owner(db, user, other_user):
    rent = registry.create_fixed_expense(db, user.id, "Rent", 1200)

    assert [e.label for e in registry.list_fixed_expenses(db, user.id)] == ["Rent"]
    assert registry.list_fixed_expenses(db, other_user.id) == []

    with pytest.raises(NotFound):
        registry.update_fixed_expense(db, other_user.id, rent.id, amount=1)
    with pytest.raises(NotFound):
        registry.delete_fixed_expense(db, other_user.id, rent.id)

    assert registry.update_fixed_expense(db, user.id, rent.id, amount=1300).amount == 1300
    registry.delete_fixed_expense(db, user.id, rent.id)
    assert registry.list_fixed_expenses(db, user.id) == []


def test_fixed_expense_rejects_negative_amount(db, user):
    with pytest.raises(ValidationError):
        registry.create_fixed_expense(db, user.id, "Rent", -5)
