"""Mini README: Pure income, expense and profit calculations.

Structure:
    * FarmerSummary - per-farmer totals in document order.
    * GrandTotals - totals across every farmer summary.
    * total_income / total_expense / profit - single-farmer helpers.
    * per_farmer_summary / grand_totals - whole-ledger aggregation.

Functions never mutate the document they receive, so repeated calls on one
snapshot always return identical results. Expenses whose farmer no longer
exists are not attributed to anyone and therefore do not appear in totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from ..ledger.models import Farmer, LedgerDocument


@dataclass(frozen=True, slots=True)
class FarmerSummary:
    """Income, expense and profit for a single farmer."""

    farmer_id: int
    name: str
    crop: str
    income: float
    expense: float
    profit: float

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.farmer_id,
            "name": self.name,
            "crop": self.crop,
            "income": self.income,
            "expense": self.expense,
            "profit": self.profit,
        }


@dataclass(frozen=True, slots=True)
class GrandTotals:
    """Ledger-wide totals."""

    total_income: float = 0.0
    total_expense: float = 0.0
    total_profit: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "total_profit": self.total_profit,
        }


def total_income(farmer: Farmer) -> float:
    return sum((income.amount for income in farmer.incomes), 0.0)


def total_expense(document: LedgerDocument, farmer_id: int) -> float:
    return sum((expense.amount for expense in document.expenses_for(farmer_id)), 0.0)


def profit(income: float, expense: float) -> float:
    """Income minus expense; negative values represent a loss."""

    return income - expense


def per_farmer_summary(document: LedgerDocument) -> List[FarmerSummary]:
    """Summarise every farmer in document order."""

    summaries: List[FarmerSummary] = []
    for farmer in document.farmers:
        income = total_income(farmer)
        expense = total_expense(document, farmer.farmer_id)
        summaries.append(
            FarmerSummary(
                farmer_id=farmer.farmer_id,
                name=farmer.name,
                crop=farmer.crop,
                income=income,
                expense=expense,
                profit=profit(income, expense),
            )
        )
    return summaries


def grand_totals(summaries: Sequence[FarmerSummary]) -> GrandTotals:
    income = sum((summary.income for summary in summaries), 0.0)
    expense = sum((summary.expense for summary in summaries), 0.0)
    return GrandTotals(total_income=income, total_expense=expense, total_profit=profit(income, expense))
