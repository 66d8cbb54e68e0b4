# services/aggregator.py
"""Month aggregation: derive a month's totals from its raw rows.

Nothing here touches the database. Rows only need the attributes the ORM
models expose, so plain objects work as well as mapped instances.

Sums are accumulated in the order rows are given. Float addition is not
associative, so two orderings of the same items may differ in the last bits;
totals are compared with that tolerance wherever it matters.
"""

from collections import defaultdict
from typing import Dict, Iterable, Optional

from ..schemas import budget as schemas


def _category_label(row) -> Optional[str]:
    category = getattr(row, "category", None)
    return category.label if category is not None else None


def spent_by_category(items: Iterable) -> Dict[int, float]:
    """Sum item amounts per category id."""
    spent = defaultdict(float)
    for item in items:
        spent[item.category_id] += item.amount
    return spent


def aggregate(month, income_entries, fixed_expenses, budgets, items) -> schemas.MonthSummary:
    """Build the full summary of a month.

    `fixed_expenses` are all of the owner's fixed expenses: they are not tied to
    a month and count in full toward every month. `total_spent` covers every
    item in the month, including items whose category has no allocation row.
    """
    income_entries = list(income_entries)
    fixed_expenses = list(fixed_expenses)
    budgets = list(budgets)
    items = list(items)

    spent = spent_by_category(items)

    budget_lines = [
        schemas.MonthlyBudgetWithCategory(
            id=b.id,
            month_id=b.month_id,
            category_id=b.category_id,
            allocated_amount=b.allocated_amount,
            category_label=_category_label(b),
            spent_amount=spent.get(b.category_id, 0.0),
        )
        for b in budgets
    ]
    item_lines = [
        schemas.ItemWithCategory(
            id=i.id,
            month_id=i.month_id,
            category_id=i.category_id,
            description=i.description,
            amount=i.amount,
            spent_on=i.spent_on,
            category_label=_category_label(i),
        )
        for i in items
    ]

    total_income = sum(e.amount for e in income_entries)
    total_fixed = sum(e.amount for e in fixed_expenses)
    total_budgeted = sum(b.allocated_amount for b in budgets)
    total_spent = sum(i.amount for i in items)

    return schemas.MonthSummary(
        month=schemas.Month.model_validate(month),
        income_entries=[schemas.IncomeEntry.model_validate(e) for e in income_entries],
        fixed_expenses=[schemas.FixedExpense.model_validate(e) for e in fixed_expenses],
        budgets=budget_lines,
        items=item_lines,
        total_income=total_income,
        total_fixed=total_fixed,
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        remaining=total_income - total_fixed - total_spent,
    )


def variance(summary: schemas.MonthSummary, savings: float = 0.0) -> schemas.VarianceReport:
    """Split budget lines into over, under and unplanned spending."""
    over, under, unplanned = [], [], []

    for b in summary.budgets:
        line = schemas.BudgetVariance(
            budget_id=b.id,
            category_id=b.category_id,
            label=b.category_label,
            allocated=b.allocated_amount,
            spent=b.spent_amount,
            variance=b.spent_amount - b.allocated_amount,
        )
        if line.allocated == 0 and line.spent > 0:
            unplanned.append(line)
        elif line.variance > 0:
            over.append(line)
        elif line.variance < 0:
            under.append(line)

    over.sort(key=lambda v: v.variance, reverse=True)
    unplanned.sort(key=lambda v: v.spent, reverse=True)
    under.sort(key=lambda v: v.variance)

    return schemas.VarianceReport(
        month_id=summary.month.id,
        over_budget=over,
        under_budget=under,
        unplanned=unplanned,
        total_overspend=sum(v.variance for v in over),
        total_underspend=-sum(v.variance for v in under),
        total_unplanned=sum(v.spent for v in unplanned),
        total_income=summary.total_income,
        total_fixed=summary.total_fixed,
        total_budgeted=summary.total_budgeted,
        remaining=summary.remaining,
        savings=savings,
        projected_savings=savings + summary.remaining,
    )
