"""Mini README: CRUD operations over farmers, incomes and expenses.

Structure:
    * FARMER_PATCH_FIELDS - farmer attributes that ``update_farmer`` may change.
    * LedgerRepository - load, mutate and save cycle for every operation.

Each call reloads the full document from the injected ``PersistenceStore``,
applies one change in memory and writes the whole document back. Nothing is
cached between calls, so two handlers issuing calls back-to-back always see
each other's writes. Missing entities are reported through ``None``/``False``
return values rather than exceptions so callers decide whether to surface
them.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..logging_utils import get_logger
from .models import (
    DEFAULT_EXPENSE_CATEGORY,
    Expense,
    Farmer,
    Income,
    LedgerDocument,
    coerce_amount,
    next_id,
    parse_entry_date,
)
from .store import PersistenceStore

LOGGER = get_logger(__name__)

FARMER_PATCH_FIELDS = frozenset({"name", "crop", "area"})


class LedgerRepository:
    """Manage ledger entities on top of a whole-document persistence store."""

    def __init__(self, store: PersistenceStore) -> None:
        self.store = store

    def get_document(self) -> LedgerDocument:
        """Return a fresh snapshot of the persisted ledger."""

        return self.store.load()

    def save_document(self, document: LedgerDocument) -> None:
        """Replace the persisted ledger with ``document``."""

        self.store.save(document)

    def reset(self) -> LedgerDocument:
        """Restore the seed ledger, discarding every recorded entry."""

        return self.store.reset()

    def add_farmer(self, name: str = "", crop: str = "", area: str = "") -> int:
        """Append a farmer with no incomes and return its identifier."""

        document = self.store.load()
        farmer_id = next_id(farmer.farmer_id for farmer in document.farmers)
        document.farmers.append(
            Farmer(farmer_id=farmer_id, name=name or "", crop=crop or "", area=area or "")
        )
        self.store.save(document)
        LOGGER.info("Added farmer %s (%s)", farmer_id, name)
        return farmer_id

    def update_farmer(self, farmer_id: int, patch: Dict[str, Optional[str]]) -> bool:
        """Merge ``patch`` into the farmer; return ``False`` if it does not exist."""

        unsupported = set(patch) - FARMER_PATCH_FIELDS
        if unsupported:
            raise ValueError(f"Farmer fields cannot be updated: {', '.join(sorted(unsupported))}")

        document = self.store.load()
        farmer = document.find_farmer(farmer_id)
        if farmer is None:
            LOGGER.debug("Update skipped: farmer %s not found", farmer_id)
            return False
        for key, value in patch.items():
            if value is not None:
                setattr(farmer, key, str(value))
        self.store.save(document)
        LOGGER.info("Updated farmer %s fields=%s", farmer_id, sorted(patch))
        return True

    def delete_farmer(self, farmer_id: int) -> bool:
        """Remove a farmer, its incomes, and every expense linked to it."""

        document = self.store.load()
        remaining = [farmer for farmer in document.farmers if farmer.farmer_id != farmer_id]
        if len(remaining) == len(document.farmers):
            LOGGER.debug("Delete skipped: farmer %s not found", farmer_id)
            return False
        document.farmers = remaining
        kept_expenses = [expense for expense in document.expenses if expense.farmer_id != farmer_id]
        removed = len(document.expenses) - len(kept_expenses)
        document.expenses = kept_expenses
        self.store.save(document)
        LOGGER.info("Deleted farmer %s and %s linked expenses", farmer_id, removed)
        return True

    def get_farmer(self, farmer_id: int) -> Optional[Farmer]:
        return self.store.load().find_farmer(farmer_id)

    def list_farmers(self) -> List[Farmer]:
        """Return farmers in insertion order."""

        return list(self.store.load().farmers)

    def search_farmers(self, query: str = "") -> List[Farmer]:
        """Case-insensitive match on farmer name or crop; blank returns all."""

        farmers = self.list_farmers()
        needle = (query or "").strip().lower()
        if not needle:
            return farmers
        return [
            farmer
            for farmer in farmers
            if needle in farmer.name.lower() or needle in farmer.crop.lower()
        ]

    def add_income(
        self,
        farmer_id: int,
        amount: object,
        note: Optional[str] = None,
        occurred_on: Optional[object] = None,
    ) -> Optional[int]:
        """Record an income for a farmer; ``None`` if the farmer is unknown."""

        entry_date = parse_entry_date(occurred_on)
        document = self.store.load()
        farmer = document.find_farmer(farmer_id)
        if farmer is None:
            LOGGER.warning("Income not recorded: farmer %s not found", farmer_id)
            return None
        income_id = next_id(income.income_id for income in farmer.incomes)
        farmer.incomes.append(
            Income(
                income_id=income_id,
                amount=coerce_amount(amount),
                occurred_on=entry_date,
                note=note or "",
            )
        )
        self.store.save(document)
        LOGGER.info("Added income %s for farmer %s", income_id, farmer_id)
        return income_id

    def delete_income(self, farmer_id: int, income_id: int) -> bool:
        document = self.store.load()
        farmer = document.find_farmer(farmer_id)
        if farmer is None or farmer.find_income(income_id) is None:
            LOGGER.debug("Delete skipped: income %s of farmer %s not found", income_id, farmer_id)
            return False
        farmer.incomes = [income for income in farmer.incomes if income.income_id != income_id]
        self.store.save(document)
        LOGGER.info("Deleted income %s of farmer %s", income_id, farmer_id)
        return True

    def add_expense(
        self,
        farmer_id: int,
        amount: object,
        category: Optional[str] = None,
        note: Optional[str] = None,
        occurred_on: Optional[object] = None,
    ) -> int:
        """Record an expense and return its identifier.

        The farmer reference is not validated; expenses for unknown farmers
        are stored as given and only removed by a later cascade.
        """

        entry_date = parse_entry_date(occurred_on)
        document = self.store.load()
        if document.find_farmer(farmer_id) is None:
            LOGGER.warning("Recording expense for unknown farmer %s", farmer_id)
        expense_id = next_id(expense.expense_id for expense in document.expenses)
        document.expenses.append(
            Expense(
                expense_id=expense_id,
                farmer_id=int(farmer_id),
                amount=coerce_amount(amount),
                occurred_on=entry_date,
                category=category or DEFAULT_EXPENSE_CATEGORY,
                note=note or "",
            )
        )
        self.store.save(document)
        LOGGER.info("Added expense %s for farmer %s", expense_id, farmer_id)
        return expense_id

    def delete_expense(self, expense_id: int) -> bool:
        document = self.store.load()
        remaining = [expense for expense in document.expenses if expense.expense_id != expense_id]
        if len(remaining) == len(document.expenses):
            LOGGER.debug("Delete skipped: expense %s not found", expense_id)
            return False
        document.expenses = remaining
        self.store.save(document)
        LOGGER.info("Deleted expense %s", expense_id)
        return True

    def get_expenses_for_farmer(self, farmer_id: int) -> List[Expense]:
        return self.store.load().expenses_for(farmer_id)

    def list_expenses(self) -> List[Expense]:
        return list(self.store.load().expenses)

