# services/report.py
"""Render a month summary to a PDF report."""

import calendar
import logging
from datetime import datetime, timezone

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from ..schemas import budget as schemas

logger = logging.getLogger(__name__)

LINE_HEIGHT = 7


def _text(value) -> str:
    # Core fonts only cover latin-1.
    return str(value).encode("latin-1", "replace").decode("latin-1")


def _money(amount: float) -> str:
    return f"{amount:,.2f}"


class MonthReport(FPDF):
    def __init__(self, summary: schemas.MonthSummary):
        super().__init__(orientation="P", unit="mm", format="A4")
        self.summary = summary
        month = summary.month
        # Pin the metadata date so the same summary always renders to the same bytes.
        self.creation_date = datetime(month.year, month.month, 1, tzinfo=timezone.utc)
        self.set_title(f"{calendar.month_name[month.month]} {month.year}")
        self.set_auto_page_break(auto=True, margin=15)

    def section_title(self, text: str) -> None:
        self.ln(3)
        self.set_font("Helvetica", "B", 12)
        self.cell(0, LINE_HEIGHT + 1, _text(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def table_row(self, cells, widths, bold: bool = False) -> None:
        self.set_font("Helvetica", "B" if bold else "", 10)
        for i, (value, width) in enumerate(zip(cells, widths)):
            align = "L" if i == 0 else "R"
            self.cell(width, LINE_HEIGHT, _text(value), border="B", align=align)
        self.ln(LINE_HEIGHT)

    def section_table(self, headers, rows, widths) -> None:
        self.table_row(headers, widths, bold=True)
        if not rows:
            self.set_font("Helvetica", "I", 10)
            self.cell(0, LINE_HEIGHT, "None", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            return
        for r in rows:
            self.table_row(r, widths)

    def render_summary(self) -> None:
        s = self.summary
        self.add_page()
        self.set_font("Helvetica", "B", 18)
        self.cell(0, 12, _text(f"Budget report: {self.title}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        self.section_title("Totals")
        self.section_table(
            ["", "Amount"],
            [
                ["Income", _money(s.total_income)],
                ["Fixed expenses", _money(s.total_fixed)],
                ["Budgeted", _money(s.total_budgeted)],
                ["Spent", _money(s.total_spent)],
                ["Remaining", _money(s.remaining)],
            ],
            [120, 60],
        )

        self.section_title("Income")
        self.section_table(
            ["Source", "Amount"],
            [[e.label, _money(e.amount)] for e in s.income_entries],
            [120, 60],
        )

        self.section_title("Fixed expenses")
        self.section_table(
            ["Expense", "Amount"],
            [[e.label, _money(e.amount)] for e in s.fixed_expenses],
            [120, 60],
        )

        self.section_title("Budgets")
        self.section_table(
            ["Category", "Allocated", "Spent", "Left"],
            [
                [b.category_label or f"Category #{b.category_id}",
                 _money(b.allocated_amount),
                 _money(b.spent_amount),
                 _money(b.allocated_amount - b.spent_amount)]
                for b in s.budgets
            ],
            [75, 35, 35, 35],
        )

        self.section_title("Items")
        self.section_table(
            ["Date", "Description", "Category", "Amount"],
            [
                [i.spent_on.isoformat(), i.description,
                 i.category_label or f"#{i.category_id}", _money(i.amount)]
                for i in s.items
            ],
            [25, 85, 40, 30],
        )


def render(summary: schemas.MonthSummary) -> bytes:
    """Render `summary` to PDF bytes."""
    report = MonthReport(summary)
    report.render_summary()
    data = bytes(report.output())
    logger.debug(f"Rendered report for month {summary.month.id} ({len(data)} bytes)")
    return data
