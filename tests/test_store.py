"""
Tests for Store
"""

import threading
from datetime import date
from decimal import Decimal

from warehouse.inventory import Product, ProductKind, Store


class TestIdGeneration:
    """Test id generation and counter advancement"""

    def test_generate_id_starts_at_one(self, store):
        """Test first generated id"""
        assert store.generate_id() == 1
        assert store.generate_id() == 2
        assert store.next_id == 3

    def test_add_advances_counter_past_explicit_id(self, store):
        """Test loaded ids push the counter forward"""
        store.add(Product.electronics(41, "TV", Decimal("300"), 1, 24))

        assert store.next_id == 42
        assert store.generate_id() == 42

    def test_add_lower_id_keeps_counter(self, store):
        """Test adding an id below the counter does not move it back"""
        store.generate_id()
        store.generate_id()
        store.add(Product.electronics(1, "TV", Decimal("300"), 1, 24))

        assert store.next_id == 3

    def test_ids_strictly_increase_with_interleaved_loads(self, store):
        """Test generated ids never repeat across explicit adds and reloads"""
        seen = []
        for _ in range(3):
            new_id = store.generate_id()
            store.add(Product.electronics(new_id, "Cable", Decimal("1"), 1, 0))
            seen.append(new_id)

        store.add(Product.food(10, "Bread", Decimal("1.2"), 1, date(2030, 1, 1)))
        seen.append(10)
        new_id = store.generate_id()
        store.add(Product.electronics(new_id, "Plug", Decimal("1"), 1, 0))
        seen.append(new_id)

        store.replace_all(store.list_all())
        seen.append(store.generate_id())

        assert seen == sorted(seen)
        assert len(seen) == len(set(seen))
        assert seen[-2:] == [11, 12]

    def test_create_assigns_generated_id(self, store):
        """Test create() generates and adds in one step"""
        first = store.create(ProductKind.FOOD, "Eggs", Decimal("3"), 12, date(2030, 1, 1))
        second = store.create(ProductKind.ELECTRONICS, "Lamp", Decimal("15"), 2, 6)

        assert (first.id, second.id) == (1, 2)
        assert first.expiration_date == date(2030, 1, 1)
        assert second.warranty_months == 6
        assert store.list_all() == [first, second]

    def test_negative_id_accepted(self, store):
        """Test ids are not validated"""
        store.add(Product.electronics(-5, "Odd", Decimal("-1"), -2, 0))

        assert len(store) == 1
        assert store.next_id == 1


class TestMutationAndQueries:
    """Test add / remove / list operations"""

    def test_list_all_returns_both(self, filled_store, milk, radio):
        """Test listing after adding Milk and Radio"""
        assert filled_store.list_all() == [milk, radio]

    def test_list_all_is_snapshot(self, filled_store, milk):
        """Test the returned list is independent of the store"""
        snapshot = filled_store.list_all()
        snapshot.clear()

        assert len(filled_store) == 2

        snapshot = filled_store.list_all()
        filled_store.remove_by_id(milk.id)
        assert len(snapshot) == 2

    def test_remove_by_id(self, filled_store, radio):
        """Test removal of an existing id"""
        assert filled_store.remove_by_id(1) == 1
        assert filled_store.list_all() == [radio]

    def test_remove_missing_id_is_noop(self, filled_store):
        """Test removal of a missing id leaves the store unchanged"""
        before = filled_store.list_all()

        assert filled_store.remove_by_id(999) == 0
        assert filled_store.list_all() == before

    def test_remove_all_duplicates(self, store):
        """Test every product with the id is removed"""
        store.add(Product.electronics(7, "A", Decimal("1"), 1, 1))
        store.add(Product.electronics(7, "B", Decimal("1"), 1, 1))
        store.add(Product.electronics(8, "C", Decimal("1"), 1, 1))

        assert store.remove_by_id(7) == 2
        assert [p.name for p in store.list_all()] == ["C"]

    def test_list_expired_food(self, filled_store, milk):
        """Test only expired food is returned"""
        assert filled_store.list_expired_food(date(2024, 1, 1)) == [milk]

    def test_list_expired_food_boundary(self, store):
        """Test expiration on the as-of date is not expired"""
        today = Product.food(1, "Cheese", Decimal("4"), 1, date(2024, 1, 1))
        yesterday = Product.food(2, "Ham", Decimal("4"), 1, date(2023, 12, 31))
        store.add(today)
        store.add(yesterday)
        store.add(Product.electronics(3, "Phone", Decimal("400"), 1, 24))

        assert store.list_expired_food(date(2024, 1, 1)) == [yesterday]

    def test_list_expired_food_defaults_to_today(self, filled_store, milk):
        """Test as_of defaults to today"""
        assert filled_store.list_expired_food() == [milk]

    def test_replace_all_resets_counter(self, filled_store, radio):
        """Test replace_all repopulates and reseeds the counter"""
        filled_store.generate_id()
        filled_store.replace_all([radio])

        assert filled_store.list_all() == [radio]
        assert filled_store.next_id == 3

    def test_replace_all_with_explicit_next_id(self, filled_store, radio):
        """Test explicit next_id is honored but never below loaded ids"""
        filled_store.replace_all([radio], next_id=50)
        assert filled_store.next_id == 50

        filled_store.replace_all([radio], next_id=1)
        assert filled_store.next_id == 3

    def test_replace_all_empty(self, filled_store):
        """Test clearing the store"""
        filled_store.replace_all([])

        assert len(filled_store) == 0
        assert filled_store.generate_id() == 1


class TestConcurrency:
    """Test concurrent access from several threads"""

    def test_concurrent_generate_and_add_unique_ids(self, store):
        """Test interleaved generate_id + add never duplicates ids"""
        per_thread = 500
        barrier = threading.Barrier(2)

        def worker(name):
            barrier.wait()
            for _ in range(per_thread):
                new_id = store.generate_id()
                store.add(Product.electronics(new_id, name, Decimal("1"), 1, 0))

        threads = [threading.Thread(target=worker, args=(n,)) for n in ("a", "b")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [p.id for p in store.list_all()]
        assert len(ids) == 2 * per_thread
        assert len(set(ids)) == len(ids)
        assert store.next_id == 2 * per_thread + 1

    def test_reader_never_sees_partial_replace(self, store):
        """Test list_all during replace_all sees either old or new contents"""
        old = [Product.electronics(i, "old", Decimal("1"), 1, 0) for i in range(1, 51)]
        new = [Product.electronics(i, "new", Decimal("1"), 1, 0) for i in range(51, 101)]
        store.replace_all(old)
        observed = []
        done = threading.Event()

        def reader():
            while not done.is_set():
                observed.append(store.list_all())

        t = threading.Thread(target=reader)
        t.start()
        for _ in range(50):
            store.replace_all(new)
            store.replace_all(old)
        done.set()
        t.join()

        for snapshot in observed:
            assert snapshot in (old, new)
