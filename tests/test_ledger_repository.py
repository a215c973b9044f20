"""Mini README: Tests covering farmer, income and expense CRUD operations.

Structure:
    * identifier assignment - sequential IDs and ``max + 1`` after deletions.
    * farmer patching and deletion - including the expense cascade.
    * incomes and expenses - lenient amounts, defaults and missing entities.
    * search - name/crop filtering used by the farmer list.
"""

from __future__ import annotations

from datetime import date

import pytest

from farmledger.ledger import Farmer, LedgerRepository


def test_add_farmer_assigns_sequential_ids(empty_repository: LedgerRepository) -> None:
    ids = [empty_repository.add_farmer(f"Farmer {index}", "Wheat", "1 acre") for index in range(5)]

    assert ids == [1, 2, 3, 4, 5]
    farmer = empty_repository.get_farmer(3)
    assert farmer is not None
    assert farmer.name == "Farmer 2"
    assert farmer.incomes == []


def test_ids_follow_max_after_deletions(empty_repository: LedgerRepository) -> None:
    for name in ("A", "B", "C"):
        empty_repository.add_farmer(name, "", "")

    empty_repository.delete_farmer(1)
    assert empty_repository.add_farmer("D", "", "") == 4

    empty_repository.delete_farmer(4)
    # The slot freed by removing the maximum is handed out again.
    assert empty_repository.add_farmer("E", "", "") == 4
    assert [farmer.farmer_id for farmer in empty_repository.list_farmers()] == [2, 3, 4]


def test_update_farmer_merges_patch(repository: LedgerRepository) -> None:
    assert repository.update_farmer(1, {"crop": "Cotton", "area": None}) is True

    farmer = repository.get_farmer(1)
    assert farmer.crop == "Cotton"
    assert farmer.area == "5 acres"
    assert farmer.name == "Jawad"


def test_update_missing_farmer_is_a_noop(repository: LedgerRepository) -> None:
    before = repository.get_document()

    assert repository.update_farmer(42, {"name": "Ghost"}) is False
    assert repository.get_document() == before


def test_update_farmer_rejects_identity_fields(repository: LedgerRepository) -> None:
    with pytest.raises(ValueError):
        repository.update_farmer(1, {"id": 7})


def test_delete_farmer_cascades_to_expenses(repository: LedgerRepository) -> None:
    """Deleting the seeded farmer empties both collections."""

    assert repository.delete_farmer(1) is True

    document = repository.get_document()
    assert document.farmers == []
    assert document.expenses == []


def test_delete_farmer_keeps_other_farmers_expenses(repository: LedgerRepository) -> None:
    second = repository.add_farmer("Ali", "Rice", "3 acres")
    repository.add_expense(second, 700, category="Seed")
    repository.add_expense(1, 50)

    repository.delete_farmer(1)

    expenses = repository.list_expenses()
    assert [expense.farmer_id for expense in expenses] == [second]
    assert all(expense.farmer_id != 1 for expense in expenses)


def test_delete_missing_farmer_is_a_noop(repository: LedgerRepository) -> None:
    assert repository.delete_farmer(99) is False
    assert len(repository.list_expenses()) == 1


def test_add_income_assigns_ids_per_farmer(repository: LedgerRepository) -> None:
    second = repository.add_farmer("Ali", "Rice", "3 acres")

    assert repository.add_income(1, 500, note="Straw", occurred_on="2025-11-01") == 2
    assert repository.add_income(second, "5000") == 1

    farmer = repository.get_farmer(second)
    income = farmer.incomes[0]
    assert income.amount == pytest.approx(5000.0)
    assert income.note == ""
    assert income.occurred_on == date.today()


def test_add_income_for_missing_farmer_returns_none(repository: LedgerRepository) -> None:
    before = repository.get_document()

    assert repository.add_income(77, 100) is None
    assert repository.get_document() == before


def test_add_income_coerces_non_numeric_amount(repository: LedgerRepository) -> None:
    income_id = repository.add_income(1, "lots")

    income = repository.get_farmer(1).find_income(income_id)
    assert income.amount == 0.0


def test_delete_income(repository: LedgerRepository) -> None:
    assert repository.delete_income(1, 1) is True
    assert repository.get_farmer(1).incomes == []
    assert repository.delete_income(1, 1) is False
    assert repository.delete_income(50, 1) is False


def test_add_expense_defaults_and_global_ids(repository: LedgerRepository) -> None:
    second = repository.add_farmer("Ali", "Rice", "3 acres")

    expense_id = repository.add_expense(second, None)

    assert expense_id == 2
    expense = repository.get_expenses_for_farmer(second)[0]
    assert expense.category == "Other"
    assert expense.amount == 0.0
    assert expense.note == ""
    assert expense.occurred_on == date.today()


def test_add_expense_permits_unknown_farmer(repository: LedgerRepository) -> None:
    expense_id = repository.add_expense(404, 10, category="Diesel")

    assert [expense.expense_id for expense in repository.get_expenses_for_farmer(404)] == [expense_id]


def test_add_expense_rejects_malformed_date(repository: LedgerRepository) -> None:
    with pytest.raises(ValueError):
        repository.add_expense(1, 10, occurred_on="yesterday")
    assert len(repository.list_expenses()) == 1


def test_get_expenses_for_farmer_preserves_order(repository: LedgerRepository) -> None:
    second = repository.add_farmer("Ali", "Rice", "3 acres")
    repository.add_expense(1, 10, note="first")
    repository.add_expense(second, 20)
    repository.add_expense(1, 30, note="second")

    notes = [expense.note for expense in repository.get_expenses_for_farmer(1)]
    assert notes == ["Urea", "first", "second"]


def test_delete_expense(repository: LedgerRepository) -> None:
    assert repository.delete_expense(1) is True
    assert repository.list_expenses() == []
    assert repository.delete_expense(1) is False


def test_search_farmers_matches_name_or_crop(repository: LedgerRepository) -> None:
    repository.add_farmer("Ali", "Rice", "3 acres")
    repository.add_farmer("Sana", "Wheat", "2 acres")

    assert [farmer.name for farmer in repository.search_farmers("WHEAT")] == ["Jawad", "Sana"]
    assert [farmer.name for farmer in repository.search_farmers("ali")] == ["Ali"]
    assert len(repository.search_farmers("")) == 3


def test_operations_observe_each_others_writes(store) -> None:
    """Two repositories sharing a store never work from stale snapshots."""

    first = LedgerRepository(store)
    second = LedgerRepository(store)

    farmer_id = first.add_farmer("Ali", "Rice", "3 acres")
    second.add_income(farmer_id, 100)

    assert first.get_farmer(farmer_id).incomes[0].amount == pytest.approx(100.0)


def test_reset_restores_seed(repository: LedgerRepository) -> None:
    repository.delete_farmer(1)

    document = repository.reset()

    assert [farmer.name for farmer in document.farmers] == ["Jawad"]
    assert repository.get_document() == document


def test_save_document_replaces_whole_ledger(repository: LedgerRepository) -> None:
    document = repository.get_document()
    document.farmers[0].name = "Jawad Khan"
    document.farmers.append(Farmer(farmer_id=7, name="Ali", crop="Rice", area="3 acres"))
    document.expenses.clear()

    repository.save_document(document)

    assert repository.get_document() == document
    assert repository.add_farmer("Sana", "Wheat", "2 acres") == 8
    assert repository.list_expenses() == []
