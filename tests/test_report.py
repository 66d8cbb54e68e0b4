from datetime import date
from types import SimpleNamespace

from pocketbook.services.aggregator import aggregate
from pocketbook.services.report import render


def _summary():
    month = SimpleNamespace(id=3, user_id=1, year=2026, month=9, is_closed=False, closed_at=None)
    category = SimpleNamespace(label="Groceries 🥕")
    budgets = [SimpleNamespace(id=1, month_id=3, category_id=10, allocated_amount=300, category=category)]
    items = [
        SimpleNamespace(id=1, month_id=3, category_id=10, description="Market", amount=45.5,
                        spent_on=date(2026, 9, 4), category=category),
        SimpleNamespace(id=2, month_id=3, category_id=99, description="Orphaned", amount=5,
                        spent_on=date(2026, 9, 5), category=None),
    ]
    income = [SimpleNamespace(id=1, month_id=3, label="Paycheck", amount=2500)]
    fixed = [SimpleNamespace(id=1, user_id=1, label="Rent", amount=1200)]
    return aggregate(month, income, fixed, budgets, items)


def test_render_produces_pdf():
    data = render(_summary())
    assert isinstance(data, bytes)
    assert data.startswith(b"%PDF")


def test_render_is_deterministic():
    assert render(_summary()) == render(_summary())


def test_render_empty_month():
    month = SimpleNamespace(id=4, user_id=1, year=2026, month=1, is_closed=False, closed_at=None)
    assert render(aggregate(month, [], [], [], [])).startswith(b"%PDF")
