from datetime import date
from types import SimpleNamespace

import pytest

from pocketbook.services.aggregator import aggregate, spent_by_category, variance


def _month(**kwargs):
    fields = dict(id=1, user_id=1, year=2026, month=10, is_closed=False, closed_at=None)
    fields.update(kwargs)
    return SimpleNamespace(**fields)


def _budget(id, category_id, allocated, label=None):
    category = SimpleNamespace(label=label) if label else None
    return SimpleNamespace(id=id, month_id=1, category_id=category_id,
                           allocated_amount=allocated, category=category)


def _item(id, category_id, amount, spent_on=date(2026, 10, 1)):
    return SimpleNamespace(id=id, month_id=1, category_id=category_id, description=f"item {id}",
                           amount=amount, spent_on=spent_on, category=None)


def _income(id, amount):
    return SimpleNamespace(id=id, month_id=1, label=f"income {id}", amount=amount)


def _fixed(id, amount):
    return SimpleNamespace(id=id, user_id=1, label=f"fixed {id}", amount=amount)


def test_empty_month_has_zero_totals():
    summary = aggregate(_month(), [], [], [], [])

    assert summary.total_income == 0
    assert summary.total_fixed == 0
    assert summary.total_budgeted == 0
    assert summary.total_spent == 0
    assert summary.remaining == 0
    assert summary.budgets == []


def test_spent_amount_sums_items_per_category():
    budgets = [_budget(1, 10, 300, "Groceries"), _budget(2, 20, 100, "Fun"), _budget(3, 30, 50, "Gifts")]
    items = [_item(1, 10, 45.5), _item(2, 10, 20.25), _item(3, 20, 12)]

    summary = aggregate(_month(), [], [], budgets, items)
    spent = {b.category_id: b.spent_amount for b in summary.budgets}

    assert spent == pytest.approx({10: 65.75, 20: 12, 30: 0})
    assert [b.category_label for b in summary.budgets] == ["Groceries", "Fun", "Gifts"]


def test_total_spent_counts_items_without_allocation():
    budgets = [_budget(1, 10, 300, "Groceries")]
    items = [_item(1, 10, 40), _item(2, 99, 15)]  # category 99 has no allocation row

    summary = aggregate(_month(), [], [], budgets, items)

    assert summary.budgets[0].spent_amount == 40
    assert summary.total_spent == 55


def test_remaining_is_income_minus_fixed_minus_spent():
    summary = aggregate(
        _month(),
        income_entries=[_income(1, 3000), _income(2, 250)],
        fixed_expenses=[_fixed(1, 1200), _fixed(2, 80)],
        budgets=[_budget(1, 10, 500, "Groceries")],
        items=[_item(1, 10, 45.5), _item(2, 10, 100)],
    )

    assert summary.total_income == 3250
    assert summary.total_fixed == 1280
    assert summary.total_budgeted == 500
    assert summary.total_spent == pytest.approx(145.5)
    assert summary.remaining == summary.total_income - summary.total_fixed - summary.total_spent
    # budgeted-but-unspent money does not reduce the remaining balance
    assert summary.remaining == pytest.approx(1824.5)


def test_remaining_can_go_negative():
    summary = aggregate(_month(), [_income(1, 100)], [_fixed(1, 150)], [], [])
    assert summary.remaining == -50


def test_summary_keeps_every_collection():
    summary = aggregate(_month(is_closed=True), [_income(1, 10)], [_fixed(1, 5)],
                        [_budget(1, 10, 1, "A")], [_item(1, 10, 1)])

    assert summary.month.is_closed is True
    assert len(summary.income_entries) == 1
    assert len(summary.fixed_expenses) == 1
    assert summary.items[0].category_label is None


def test_spent_by_category_groups_amounts():
    assert spent_by_category([_item(1, 1, 2.5), _item(2, 1, 2.5), _item(3, 2, 1)]) == {1: 5.0, 2: 1.0}


def test_variance_classifies_and_orders_lines():
    budgets = [
        _budget(1, 10, 100, "Groceries"),   # over by 50
        _budget(2, 20, 100, "Dining"),      # over by 10
        _budget(3, 30, 200, "Travel"),      # under by 150
        _budget(4, 40, 0, "Surprise"),      # unplanned 30
        _budget(5, 50, 0, "Unused"),        # nothing allocated or spent
        _budget(6, 60, 20, "Exact"),        # on budget
    ]
    items = [_item(1, 10, 150), _item(2, 20, 110), _item(3, 30, 50), _item(4, 40, 30), _item(5, 60, 20)]
    summary = aggregate(_month(), [_income(1, 1000)], [_fixed(1, 100)], budgets, items)

    report = variance(summary, savings=500)

    assert [v.label for v in report.over_budget] == ["Groceries", "Dining"]
    assert [v.label for v in report.under_budget] == ["Travel"]
    assert [v.label for v in report.unplanned] == ["Surprise"]
    assert report.total_overspend == 60
    assert report.total_underspend == 150
    assert report.total_unplanned == 30
    assert report.remaining == 1000 - 100 - 360
    assert report.projected_savings == 500 + report.remaining
