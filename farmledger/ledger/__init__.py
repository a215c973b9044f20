"""Mini README: Bookkeeping core for farmers, incomes and expenses.

The ``models`` module defines the persisted document, ``store`` provides
whole-document persistence backends, and ``repository`` exposes the CRUD
API used by the web interface, the CLI and the report builders.
"""

from .models import (
    Expense,
    Farmer,
    Income,
    LedgerDocument,
    build_seed_document,
    coerce_amount,
)
from .repository import LedgerRepository
from .store import InMemoryStore, JsonFileStore, PersistenceStore, build_store

__all__ = [
    "Expense",
    "Farmer",
    "Income",
    "InMemoryStore",
    "JsonFileStore",
    "LedgerDocument",
    "LedgerRepository",
    "PersistenceStore",
    "build_seed_document",
    "build_store",
    "coerce_amount",
]
