"""Mini README: Data model for the farm bookkeeping ledger.

Structure:
    * Income - a dated amount received by a single farmer.
    * Expense - a dated, categorised cost linked to a farmer by identifier.
    * Farmer - a grower owning an ordered list of incomes.
    * LedgerDocument - root aggregate and the only unit of persistence.
    * coerce_amount / parse_entry_date / next_id - shared input helpers.
    * build_seed_document - the default ledger used on first run.

The serialised layout mirrors the persisted JSON document exactly
(``farmers`` with nested ``incomes`` plus a flat ``expenses`` list whose
entries carry ``farmerId``). ``from_dict`` raises ``KeyError``, ``TypeError``
or ``ValueError`` on malformed payloads so the persistence layer can treat
them as corrupt.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

DEFAULT_EXPENSE_CATEGORY = "Other"


def coerce_amount(value: object) -> float:
    """Convert arbitrary input to a monetary amount, falling back to zero."""

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return amount


def parse_entry_date(value: object, *, default: Optional[date] = None) -> date:
    """Parse ISO formatted strings or date objects, defaulting to today."""

    if value is None or value == "":
        return default or date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


def _require_mapping(payload: object, kind: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise TypeError(f"{kind} entries must be JSON objects, got {type(payload).__name__}")
    return payload


def next_id(identifiers: Iterable[int]) -> int:
    """Return ``max(identifiers) + 1`` or ``1`` for an empty collection."""

    return max(identifiers, default=0) + 1


@dataclass(slots=True)
class Income:
    """Money received by a farmer. Immutable once recorded."""

    income_id: int
    amount: float
    occurred_on: date
    note: str = ""

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.income_id,
            "amount": self.amount,
            "date": self.occurred_on.isoformat(),
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Income":
        payload = _require_mapping(payload, "Income")
        return cls(
            income_id=int(payload["id"]),
            amount=coerce_amount(payload.get("amount")),
            occurred_on=parse_entry_date(payload["date"]),
            note=str(payload.get("note") or ""),
        )


@dataclass(slots=True)
class Expense:
    """Money spent on behalf of a farmer, referenced by ``farmer_id``."""

    expense_id: int
    farmer_id: int
    amount: float
    occurred_on: date
    category: str = DEFAULT_EXPENSE_CATEGORY
    note: str = ""

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.expense_id,
            "farmerId": self.farmer_id,
            "category": self.category,
            "amount": self.amount,
            "date": self.occurred_on.isoformat(),
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Expense":
        payload = _require_mapping(payload, "Expense")
        return cls(
            expense_id=int(payload["id"]),
            farmer_id=int(payload["farmerId"]),
            amount=coerce_amount(payload.get("amount")),
            occurred_on=parse_entry_date(payload["date"]),
            category=str(payload.get("category") or DEFAULT_EXPENSE_CATEGORY),
            note=str(payload.get("note") or ""),
        )


@dataclass(slots=True)
class Farmer:
    """A grower tracked by the ledger together with the incomes they own."""

    farmer_id: int
    name: str = ""
    crop: str = ""
    area: str = ""
    incomes: List[Income] = field(default_factory=list)

    def find_income(self, income_id: int) -> Optional[Income]:
        return next((income for income in self.incomes if income.income_id == income_id), None)

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.farmer_id,
            "name": self.name,
            "crop": self.crop,
            "area": self.area,
            "incomes": [income.as_dict() for income in self.incomes],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Farmer":
        payload = _require_mapping(payload, "Farmer")
        incomes = payload.get("incomes") or []
        if not isinstance(incomes, list):
            raise TypeError("Farmer incomes must be a list")
        return cls(
            farmer_id=int(payload["id"]),
            name=str(payload.get("name") or ""),
            crop=str(payload.get("crop") or ""),
            area=str(payload.get("area") or ""),
            incomes=[Income.from_dict(entry) for entry in incomes],
        )


@dataclass(slots=True)
class LedgerDocument:
    """Root aggregate holding every farmer and expense."""

    farmers: List[Farmer] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)

    def find_farmer(self, farmer_id: int) -> Optional[Farmer]:
        return next((farmer for farmer in self.farmers if farmer.farmer_id == farmer_id), None)

    def expenses_for(self, farmer_id: int) -> List[Expense]:
        """Return expenses linked to ``farmer_id`` in document order."""

        return [expense for expense in self.expenses if expense.farmer_id == farmer_id]

    def as_dict(self) -> Dict[str, List[Dict[str, object]]]:
        return {
            "farmers": [farmer.as_dict() for farmer in self.farmers],
            "expenses": [expense.as_dict() for expense in self.expenses],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "LedgerDocument":
        payload = _require_mapping(payload, "Ledger document")
        farmers = payload["farmers"]
        expenses = payload.get("expenses") or []
        if not isinstance(farmers, list) or not isinstance(expenses, list):
            raise TypeError("Ledger farmers and expenses must be lists")
        return cls(
            farmers=[Farmer.from_dict(entry) for entry in farmers],
            expenses=[Expense.from_dict(entry) for entry in expenses],
        )


def build_seed_document() -> LedgerDocument:
    """Create the deterministic default ledger used when nothing is stored."""

    return LedgerDocument(
        farmers=[
            Farmer(
                farmer_id=1,
                name="Jawad",
                crop="Wheat",
                area="5 acres",
                incomes=[
                    Income(income_id=1, amount=12000.0, occurred_on=date(2025, 10, 1), note="Sale"),
                ],
            )
        ],
        expenses=[
            Expense(
                expense_id=1,
                farmer_id=1,
                amount=3000.0,
                occurred_on=date(2025, 10, 5),
                category="Fertilizer",
                note="Urea",
            )
        ],
    )
