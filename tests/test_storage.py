"""
Record store contract tests.

Every test in TestRecordStoreContract runs against both backends via the
parametrized `store` fixture, so the in-memory and JSON stores cannot
drift apart.
"""

import json

import pytest

from dailyspend.config import StorageSettings
from dailyspend.errors import StorageError, ValidationError
from dailyspend.models import Category, Expense, ExpenseCreate
from dailyspend.services.storage import (
    DEFAULT_CATEGORIES,
    InMemoryRecordStore,
    JsonFileRecordStore,
)


def add_expense(store, name="Lunch", amount="12.50", date="2024-01-15", category_id=None, details=None):
    return store.create_expense(ExpenseCreate(
        name=name,
        amount=amount,
        date=date,
        category_id=category_id,
        details=details,
    ))


class TestRecordStoreContract:
    """Behavior shared by every record store."""

    def test_new_store_is_empty(self, store):
        """Test that a fresh store has no records."""
        assert store.list_categories() == []
        assert store.list_expenses() == []

    def test_create_and_list_category(self, store):
        """Test creating a category."""
        category = store.create_category("Food", "#EF4444")
        assert category.id
        assert store.list_categories() == [category]
        assert store.get_category(category.id) == category

    @pytest.mark.parametrize("name,color,field", [
        ("", "#EF4444", "name"),
        ("   ", "#EF4444", "name"),
        (None, "#EF4444", "name"),
        ("Food", "", "color"),
    ])
    def test_create_category_requires_fields(self, store, name, color, field):
        """Test that empty name or color is rejected without side effects."""
        with pytest.raises(ValidationError) as exc:
            store.create_category(name, color)
        assert exc.value.field == field
        assert store.list_categories() == []

    def test_create_and_get_expense(self, store):
        """Test creating an expense."""
        expense = add_expense(store, details="with friends")
        assert expense.amount == "12.50"
        assert expense.details == "with friends"
        assert store.get_expense(expense.id) == expense
        assert store.list_expenses() == [expense]

    @pytest.mark.parametrize("overrides,field", [
        ({"name": ""}, "name"),
        ({"amount": ""}, "amount"),
        ({"date": ""}, "date"),
        ({"date": "2024-13-01"}, "date"),
    ])
    def test_create_expense_requires_fields(self, store, overrides, field):
        """Test that missing or invalid required fields are rejected."""
        with pytest.raises(ValidationError) as exc:
            add_expense(store, **overrides)
        assert exc.value.field == field
        assert store.list_expenses() == []

    def test_create_expense_with_unknown_category(self, store):
        """Test that linking to a category that does not exist is rejected."""
        with pytest.raises(ValidationError) as exc:
            add_expense(store, category_id="missing")
        assert exc.value.field == "category_id"
        assert store.list_expenses() == []

    def test_list_by_date_is_exact_and_ordered(self, store):
        """Test exact date filtering in creation order."""
        first = add_expense(store, name="Breakfast")
        add_expense(store, name="Other day", date="2024-01-16")
        second = add_expense(store, name="Dinner")

        results = store.list_expenses_by_date("2024-01-15")
        assert [e.id for e in results] == [first.id, second.id]

    def test_list_by_date_attaches_category(self, store):
        """Test enrichment with the linked category."""
        food = store.create_category("Food", "#EF4444")
        add_expense(store, category_id=food.id)
        add_expense(store, name="Misc")

        results = store.list_expenses_by_date("2024-01-15")
        assert results[0].category == food
        assert results[1].category is None

    def test_range_is_inclusive(self, store):
        """Test that both range endpoints are included."""
        for day in ["2024-01-09", "2024-01-10", "2024-01-15", "2024-01-16"]:
            add_expense(store, date=day)

        results = store.list_expenses_by_date_range("2024-01-10", "2024-01-15")
        assert [e.date for e in results] == ["2024-01-10", "2024-01-15"]

    def test_range_sorted_by_date(self, store):
        """Test that range results come back in date order."""
        add_expense(store, date="2024-01-12")
        add_expense(store, date="2024-01-10")

        results = store.list_expenses_by_date_range("2024-01-01", "2024-01-31")
        assert [e.date for e in results] == ["2024-01-10", "2024-01-12"]

    def test_delete_expense(self, store):
        """Test deleting an expense."""
        expense = add_expense(store)
        assert store.delete_expense(expense.id) is True
        assert store.list_expenses() == []

    def test_delete_unknown_ids_are_noops(self, store):
        """Test that deleting unknown ids changes nothing."""
        category = store.create_category("Food", "#EF4444")
        expense = add_expense(store, category_id=category.id)

        assert store.delete_expense("nope") is False
        assert store.delete_category("nope") == 0
        assert store.list_categories() == [category]
        assert store.list_expenses() == [expense]

    def test_delete_category_detaches_expenses(self, store):
        """Test that expenses survive their category's deletion, uncategorized."""
        food = store.create_category("Food", "#EF4444")
        transport = store.create_category("Transport", "#3B82F6")
        lunch = add_expense(store, category_id=food.id)
        bus = add_expense(store, name="Bus", category_id=transport.id)

        assert store.delete_category(food.id) == 1

        assert store.list_categories() == [transport]
        remaining = {e.id: e for e in store.list_expenses()}
        assert set(remaining) == {lunch.id, bus.id}
        assert remaining[lunch.id].category_id is None
        assert remaining[lunch.id].amount == lunch.amount
        assert remaining[bus.id].category_id == transport.id

    def test_replace_all(self, store):
        """Test that bulk replace swaps both collections."""
        add_expense(store)
        category = Category(name="Imported", color="#000000")
        expense = Expense(name="Rent", amount="900.00", date="2024-02-01", category_id=category.id)

        store.replace_all([category], [expense])

        assert store.list_categories() == [category]
        assert store.list_expenses() == [expense]

    def test_replace_all_rejects_duplicate_ids(self, store):
        """Test that duplicate ids are refused and nothing changes."""
        existing = add_expense(store)
        category = Category(name="A", color="#000000")

        with pytest.raises(ValidationError):
            store.replace_all([category, category], [])
        assert store.list_expenses() == [existing]

    def test_seed_default_categories(self, store):
        """Test seeding only when the store has no categories."""
        seeded = store.seed_default_categories()
        assert [(c.name, c.color) for c in seeded] == DEFAULT_CATEGORIES
        assert store.seed_default_categories() == []
        assert len(store.list_categories()) == len(DEFAULT_CATEGORIES)


class TestInMemoryRecordStore:
    """Tests specific to the in-memory backend."""

    def test_initial_records(self):
        """Test constructing a store with records."""
        category = Category(name="Food", color="#EF4444")
        store = InMemoryRecordStore(categories=[category])
        assert store.list_categories() == [category]

    def test_returned_lists_are_copies(self):
        """Test that callers cannot mutate the store through a result."""
        store = InMemoryRecordStore()
        store.create_category("Food", "#EF4444")
        store.list_categories().clear()
        assert len(store.list_categories()) == 1

    def test_stores_are_independent(self):
        """Test that there is no shared global state between stores."""
        first = InMemoryRecordStore()
        second = InMemoryRecordStore()
        first.create_category("Food", "#EF4444")
        assert second.list_categories() == []


class TestJsonFileRecordStore:
    """Tests specific to the JSON file backend."""

    def test_survives_restart(self, storage_settings):
        """Test that a new store on the same directory sees the same data."""
        store = JsonFileRecordStore(settings=storage_settings)
        food = store.create_category("Food", "#EF4444")
        expense = add_expense(store, category_id=food.id)

        reopened = JsonFileRecordStore(settings=storage_settings)
        assert reopened.list_categories() == [food]
        assert reopened.list_expenses() == [expense]

    def test_file_layout(self, storage_settings, tmp_path):
        """Test the two collection files and their camelCase records."""
        store = JsonFileRecordStore(settings=storage_settings)
        food = store.create_category("Food", "#EF4444")
        add_expense(store, category_id=food.id)

        assert store.categories_path == tmp_path / "dailyspend_categories.json"
        assert store.expenses_path == tmp_path / "dailyspend_expenses.json"

        rows = json.loads(store.expenses_path.read_text(encoding="utf-8"))
        assert set(rows[0]) == {"id", "name", "amount", "details", "categoryId", "date", "createdAt"}
        assert rows[0]["amount"] == "12.50"

    def test_data_dir_argument_overrides_settings(self, tmp_path):
        """Test that an explicit directory wins over configuration."""
        settings = StorageSettings(data_dir=tmp_path / "ignored")
        store = JsonFileRecordStore(data_dir=tmp_path / "used", settings=settings)
        store.create_category("Food", "#EF4444")
        assert (tmp_path / "used" / "dailyspend_categories.json").exists()

    def test_blank_file_reads_empty(self, storage_settings, tmp_path):
        """Test that an empty file is an empty collection."""
        (tmp_path / "dailyspend_categories.json").write_text("", encoding="utf-8")
        assert JsonFileRecordStore(settings=storage_settings).list_categories() == []

    def test_corrupt_file_raises_storage_error(self, storage_settings, tmp_path):
        """Test that unreadable JSON is reported, not silently dropped."""
        (tmp_path / "dailyspend_expenses.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileRecordStore(settings=storage_settings).list_expenses()

    def test_non_list_payload_raises_storage_error(self, storage_settings, tmp_path):
        """Test that a collection must be a JSON list."""
        (tmp_path / "dailyspend_categories.json").write_text('{"id": "x"}', encoding="utf-8")
        with pytest.raises(StorageError):
            JsonFileRecordStore(settings=storage_settings).list_categories()

    def test_write_leaves_no_temp_files(self, storage_settings, tmp_path):
        """Test that atomic writes clean up after themselves."""
        store = JsonFileRecordStore(settings=storage_settings)
        store.create_category("Food", "#EF4444")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["dailyspend_categories.json"]
