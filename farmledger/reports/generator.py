"""Mini README: Structured report data built from a ledger snapshot.

Structure:
    * OverallReportRow / OverallReport - one row per farmer plus ledger totals.
    * IncomeLine / ExpenseLine / FarmerReport - detailed view of one farmer.
    * FarmerNotFound - explicit result when a farmer identifier is unknown.
    * build_overall_report / build_farmer_report - report builders.
    * build_dashboard - headline figures and profit chart series.

Builders only read the document they are given. Apart from ``generated_at``
the output depends solely on the snapshot, so callers may rebuild a report
as often as they like. Rendering to HTML lives in ``rendering``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Union

from ..ledger.models import LedgerDocument
from ..logging_utils import get_logger
from .aggregation import grand_totals, per_farmer_summary, profit, total_expense, total_income

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class OverallReportRow:
    farmer_name: str
    crop: str
    income: float
    expense: float
    profit: float


@dataclass(frozen=True, slots=True)
class OverallReport:
    """Every farmer's totals together with ledger-wide figures."""

    rows: List[OverallReportRow]
    total_income: float
    total_expense: float
    total_profit: float
    generated_at: datetime

    def as_dict(self) -> Dict[str, object]:
        return {
            "rows": [
                {
                    "farmer_name": row.farmer_name,
                    "crop": row.crop,
                    "income": row.income,
                    "expense": row.expense,
                    "profit": row.profit,
                }
                for row in self.rows
            ],
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "total_profit": self.total_profit,
            "generated_at": self.generated_at.isoformat(timespec="seconds"),
        }


@dataclass(frozen=True, slots=True)
class IncomeLine:
    occurred_on: date
    note: str
    amount: float


@dataclass(frozen=True, slots=True)
class ExpenseLine:
    occurred_on: date
    category: str
    amount: float


@dataclass(frozen=True, slots=True)
class FarmerReport:
    """Itemised incomes and expenses for one farmer."""

    farmer_id: int
    farmer_name: str
    crop: str
    area: str
    incomes: List[IncomeLine]
    expenses: List[ExpenseLine]
    income_total: float
    expense_total: float
    profit: float
    generated_at: datetime

    def as_dict(self) -> Dict[str, object]:
        return {
            "farmer_id": self.farmer_id,
            "farmer_name": self.farmer_name,
            "crop": self.crop,
            "area": self.area,
            "incomes": [
                {"date": line.occurred_on.isoformat(), "note": line.note, "amount": line.amount}
                for line in self.incomes
            ],
            "expenses": [
                {"date": line.occurred_on.isoformat(), "category": line.category, "amount": line.amount}
                for line in self.expenses
            ],
            "income_total": self.income_total,
            "expense_total": self.expense_total,
            "profit": self.profit,
            "generated_at": self.generated_at.isoformat(timespec="seconds"),
        }


@dataclass(frozen=True, slots=True)
class FarmerNotFound:
    """Returned instead of a report when the farmer does not exist."""

    farmer_id: int
    message: str = field(default="Farmer not found")


FarmerReportResult = Union[FarmerReport, FarmerNotFound]


def build_overall_report(
    document: LedgerDocument, *, generated_at: Optional[datetime] = None
) -> OverallReport:
    """Summarise every farmer in document order with ledger totals."""

    summaries = per_farmer_summary(document)
    totals = grand_totals(summaries)
    rows = [
        OverallReportRow(
            farmer_name=summary.name,
            crop=summary.crop,
            income=summary.income,
            expense=summary.expense,
            profit=summary.profit,
        )
        for summary in summaries
    ]
    LOGGER.debug("Built overall report with %s rows", len(rows))
    return OverallReport(
        rows=rows,
        total_income=totals.total_income,
        total_expense=totals.total_expense,
        total_profit=totals.total_profit,
        generated_at=generated_at or datetime.now(),
    )


def build_farmer_report(
    document: LedgerDocument,
    farmer_id: int,
    *,
    generated_at: Optional[datetime] = None,
) -> FarmerReportResult:
    """Itemise a single farmer, or return ``FarmerNotFound``."""

    farmer = document.find_farmer(farmer_id)
    if farmer is None:
        LOGGER.info("Farmer report requested for unknown farmer %s", farmer_id)
        return FarmerNotFound(farmer_id=farmer_id)

    income_total = total_income(farmer)
    expense_total = total_expense(document, farmer_id)
    return FarmerReport(
        farmer_id=farmer.farmer_id,
        farmer_name=farmer.name,
        crop=farmer.crop,
        area=farmer.area,
        incomes=[
            IncomeLine(occurred_on=income.occurred_on, note=income.note, amount=income.amount)
            for income in farmer.incomes
        ],
        expenses=[
            ExpenseLine(occurred_on=expense.occurred_on, category=expense.category, amount=expense.amount)
            for expense in document.expenses_for(farmer_id)
        ],
        income_total=income_total,
        expense_total=expense_total,
        profit=profit(income_total, expense_total),
        generated_at=generated_at or datetime.now(),
    )


def build_dashboard(document: LedgerDocument) -> Dict[str, object]:
    """Headline statistics and the per-farmer profit chart series."""

    summaries = per_farmer_summary(document)
    totals = grand_totals(summaries)
    return {
        "farmer_count": len(summaries),
        "total_income": totals.total_income,
        "total_expense": totals.total_expense,
        "total_profit": totals.total_profit,
        "chart": {
            "labels": [summary.name for summary in summaries],
            "values": [summary.profit for summary in summaries],
        },
        "farmers": [summary.as_dict() for summary in summaries],
    }
