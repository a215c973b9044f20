"""Mini README: Tests for the whole-document persistence backends.

These tests confirm that an empty store seeds itself, saved documents load
back unchanged, corrupt payloads fall back to the seed, and the JSON file
backend writes the document under its storage key.
"""

from __future__ import annotations

import json
from datetime import date

import pytest

from farmledger.configuration import FarmLedgerSettings
from farmledger.ledger import (
    Expense,
    Farmer,
    Income,
    InMemoryStore,
    JsonFileStore,
    LedgerDocument,
    LedgerRepository,
    build_seed_document,
    build_store,
)


def _sample_document() -> LedgerDocument:
    return LedgerDocument(
        farmers=[
            Farmer(
                farmer_id=4,
                name="Ali",
                crop="Rice",
                area="3 acres",
                incomes=[Income(income_id=2, amount=5000.0, occurred_on=date(2025, 3, 1), note="")],
            ),
            Farmer(farmer_id=9, name="", crop="", area=""),
        ],
        expenses=[
            Expense(
                expense_id=5,
                farmer_id=4,
                amount=2000.0,
                occurred_on=date(2025, 3, 2),
                category="Seed",
                note="Basmati",
            )
        ],
    )


def test_load_on_empty_store_returns_and_persists_seed() -> None:
    store = InMemoryStore()

    assert store.load() == build_seed_document()
    # A second load reads what the first one wrote.
    assert store.load() == build_seed_document()


def test_save_then_load_round_trips() -> None:
    store = InMemoryStore()
    document = _sample_document()

    store.save(document)

    assert store.load() == document


def test_loaded_snapshots_are_independent() -> None:
    """Mutating a loaded document must not leak into the store."""

    store = InMemoryStore()
    snapshot = store.load()
    snapshot.farmers.clear()

    assert len(store.load().farmers) == 1


def test_reset_discards_saved_state() -> None:
    store = InMemoryStore(initial=_sample_document())

    assert store.reset() == build_seed_document()
    assert store.load() == build_seed_document()


def test_json_store_writes_under_storage_key(tmp_path) -> None:
    store = JsonFileStore(tmp_path, key="ledger_document")
    document = _sample_document()

    store.save(document)

    path = tmp_path / "ledger_document.json"
    assert json.loads(path.read_text(encoding="utf-8")) == document.as_dict()
    assert JsonFileStore(tmp_path).load() == document
    assert [entry.name for entry in tmp_path.iterdir()] == ["ledger_document.json"]


def test_json_store_reseeds_corrupt_file(tmp_path) -> None:
    path = tmp_path / "ledger_document.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonFileStore(tmp_path)

    assert store.load() == build_seed_document()
    assert json.loads(path.read_text(encoding="utf-8")) == build_seed_document().as_dict()


def test_json_store_reseeds_structurally_invalid_document(tmp_path) -> None:
    (tmp_path / "ledger_document.json").write_text(
        json.dumps({"farmers": [{"name": "missing id"}], "expenses": []}), encoding="utf-8"
    )

    assert JsonFileStore(tmp_path).load() == build_seed_document()


def test_json_store_reset_removes_file_contents(tmp_path) -> None:
    store = JsonFileStore(tmp_path)
    store.save(_sample_document())

    store.reset()

    assert store.load() == build_seed_document()


def test_build_store_honours_backend_setting(tmp_path) -> None:
    memory = build_store(FarmLedgerSettings(store_backend="memory", data_directory=tmp_path))
    on_disk = build_store(
        FarmLedgerSettings(store_backend="json", data_directory=tmp_path, storage_key="farm")
    )

    assert isinstance(memory, InMemoryStore)
    assert isinstance(on_disk, JsonFileStore)
    assert on_disk.path == tmp_path.resolve() / "farm.json"


@pytest.mark.parametrize(
    "payload",
    [
        {"farmers": [None], "expenses": []},
        {"farmers": [1], "expenses": []},
        {"farmers": [["Jawad"]], "expenses": []},
        {"farmers": [{"id": 1, "incomes": [None]}], "expenses": []},
        {"farmers": [], "expenses": ["fertilizer"]},
    ],
)
def test_json_store_reseeds_non_object_entries(tmp_path, payload) -> None:
    """Entries that are not JSON objects count as corruption, not crashes."""

    (tmp_path / "ledger_document.json").write_text(json.dumps(payload), encoding="utf-8")

    assert JsonFileStore(tmp_path).load() == build_seed_document()
    assert LedgerRepository(JsonFileStore(tmp_path)).add_farmer("Ali", "Rice", "3 acres") == 2


def test_json_store_propagates_filesystem_errors(tmp_path) -> None:
    """Unreadable storage is an environment problem and is not re-seeded."""

    (tmp_path / "ledger_document.json").mkdir()

    with pytest.raises(OSError):
        JsonFileStore(tmp_path).load()
