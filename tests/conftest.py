"""Mini README: Shared fixtures for the Farm Ledger test-suite.

Structure:
    * store - in-memory persistence seeded lazily with the default ledger.
    * empty_store - in-memory persistence holding an empty ledger.
    * repository / empty_repository - repositories over those stores.
"""

from __future__ import annotations

import pytest

from farmledger.configuration import get_settings
from farmledger.ledger import InMemoryStore, LedgerDocument, LedgerRepository


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Point configuration at a temporary directory for every test."""

    monkeypatch.setenv("FARMLEDGER_DATA_DIRECTORY", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def empty_store() -> InMemoryStore:
    return InMemoryStore(initial=LedgerDocument())


@pytest.fixture
def repository(store: InMemoryStore) -> LedgerRepository:
    return LedgerRepository(store)


@pytest.fixture
def empty_repository(empty_store: InMemoryStore) -> LedgerRepository:
    return LedgerRepository(empty_store)
