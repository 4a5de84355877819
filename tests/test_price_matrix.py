"""
Tests for Brand records and the PriceMatrix store.
"""

import math
import threading

import pytest

from categories import Category
from errors import BrandNotFound, InvalidInput, UnknownCategory
from price_matrix import Brand, PriceMatrix, price_frame


class TestCreateAndRead:

    def test_create_then_get_round_trip(self, matrix):
        brand = matrix.create_brand("X")
        fetched = matrix.get_brand(brand.id)
        assert fetched.name == "X"
        assert dict(fetched.prices) == {}

    def test_ids_are_unique(self, matrix):
        ids = {matrix.create_brand(f"B{i}").id for i in range(20)}
        assert len(ids) == 20

    def test_ids_not_reused_after_delete(self, matrix):
        first = matrix.create_brand("A")
        matrix.delete_brand(first.id)
        second = matrix.create_brand("A")
        assert second.id != first.id

    def test_create_with_prices(self, matrix):
        brand = matrix.create_brand("A", {Category.TOP: 100, "바지": 200, "HAT": 300})
        assert dict(brand.prices) == {Category.TOP: 100, Category.PANTS: 200, Category.HAT: 300}

    def test_list_brands_in_insertion_order(self, matrix):
        for name in ["C", "A", "B"]:
            matrix.create_brand(name)
        assert [b.name for b in matrix.list_brands()] == ["C", "A", "B"]

    def test_get_missing_brand(self, matrix):
        with pytest.raises(BrandNotFound):
            matrix.get_brand(999)

    def test_get_by_name_first_match(self, matrix):
        first = matrix.create_brand("dup")
        matrix.create_brand("dup")
        assert matrix.get_brand_by_name("dup").id == first.id

    def test_get_by_name_missing(self, matrix):
        with pytest.raises(BrandNotFound):
            matrix.get_brand_by_name("nobody")

    def test_duplicate_names_do_not_break_id_lookup(self, matrix):
        a = matrix.create_brand("same")
        b = matrix.create_brand("same")
        matrix.set_price(b.id, Category.BAG, 500)
        assert matrix.get_brand(a.id).price_for(Category.BAG) is None
        assert matrix.get_brand(b.id).price_for(Category.BAG) == 500

    def test_len_and_contains(self, matrix):
        brand = matrix.create_brand("A")
        assert len(matrix) == 1
        assert brand.id in matrix
        assert 12345 not in matrix


class TestMutations:

    def test_set_price_overwrites(self, matrix):
        brand = matrix.create_brand("A")
        matrix.set_price(brand.id, Category.TOP, 1000)
        matrix.set_price(brand.id, Category.TOP, 1200)
        assert matrix.get_brand(brand.id).price_for(Category.TOP) == 1200

    def test_set_price_idempotent(self, matrix):
        brand = matrix.create_brand("A")
        once = matrix.set_price(brand.id, Category.SOCKS, 1700)
        twice = matrix.set_price(brand.id, Category.SOCKS, 1700)
        assert once == twice
        assert matrix.list_brands() == [twice]

    def test_set_price_zero_allowed(self, matrix):
        brand = matrix.create_brand("A")
        assert matrix.set_price(brand.id, Category.HAT, 0).price_for(Category.HAT) == 0

    @pytest.mark.parametrize("amount", [-1, 10.5, "1000", None, True])
    def test_set_price_rejects_invalid_amount(self, matrix, amount):
        brand = matrix.create_brand("A", {Category.TOP: 100})
        with pytest.raises(InvalidInput):
            matrix.set_price(brand.id, Category.TOP, amount)
        assert matrix.get_brand(brand.id).price_for(Category.TOP) == 100

    def test_set_price_missing_brand(self, matrix):
        with pytest.raises(BrandNotFound):
            matrix.set_price(42, Category.TOP, 100)

    def test_set_price_by_name(self, matrix):
        first = matrix.create_brand("A")
        second = matrix.create_brand("A")
        matrix.set_price_by_name("A", Category.OUTER, 5000)
        assert matrix.get_brand(first.id).price_for(Category.OUTER) == 5000
        assert matrix.get_brand(second.id).price_for(Category.OUTER) is None

    def test_set_price_by_name_missing(self, matrix):
        with pytest.raises(BrandNotFound):
            matrix.set_price_by_name("Z", Category.OUTER, 5000)

    def test_rename(self, matrix):
        brand = matrix.create_brand("old", {Category.TOP: 100})
        renamed = matrix.rename_brand(brand.id, "new")
        assert renamed.name == "new"
        assert renamed.prices == brand.prices
        assert matrix.get_brand_by_name("new").id == brand.id

    def test_rename_missing(self, matrix):
        with pytest.raises(BrandNotFound):
            matrix.rename_brand(7, "x")

    def test_update_replaces_whole_price_map(self, matrix):
        brand = matrix.create_brand("A", {Category.TOP: 100, Category.BAG: 200})
        updated = matrix.update_brand(brand.id, "A2", {Category.HAT: 300})
        assert updated.name == "A2"
        assert dict(updated.prices) == {Category.HAT: 300}

    def test_update_with_bad_price_leaves_brand_untouched(self, matrix):
        brand = matrix.create_brand("A", {Category.TOP: 100})
        with pytest.raises(InvalidInput):
            matrix.update_brand(brand.id, "A2", {Category.TOP: -5})
        assert matrix.get_brand(brand.id) == brand

    def test_update_with_unknown_category(self, matrix):
        brand = matrix.create_brand("A")
        with pytest.raises(UnknownCategory):
            matrix.update_brand(brand.id, "A", {"신발": 100})

    def test_delete_then_get(self, matrix):
        brand = matrix.create_brand("A")
        removed = matrix.delete_brand(brand.id)
        assert removed == brand
        with pytest.raises(BrandNotFound):
            matrix.get_brand(brand.id)

    def test_delete_missing(self, matrix):
        with pytest.raises(BrandNotFound):
            matrix.delete_brand(1)

    def test_create_rejects_non_string_name(self, matrix):
        with pytest.raises(InvalidInput):
            matrix.create_brand(123)
        assert len(matrix) == 0


class TestRecords:

    def test_brand_prices_are_read_only(self, matrix):
        brand = matrix.create_brand("A", {Category.TOP: 100})
        with pytest.raises(TypeError):
            brand.prices[Category.TOP] = 1

    def test_old_record_unchanged_by_mutation(self, matrix):
        before = matrix.create_brand("A", {Category.TOP: 100})
        matrix.set_price(before.id, Category.TOP, 999)
        assert before.price_for(Category.TOP) == 100

    def test_has_all_categories(self, reference):
        assert all(b.has_all_categories() for b in reference.list_brands())
        assert not Brand(id=1, name="x", prices={Category.TOP: 1}).has_all_categories()

    def test_to_dict(self):
        brand = Brand(id=3, name="C", prices={Category.HAT: 1900, Category.TOP: 10000})
        assert brand.to_dict() == {"id": 3, "name": "C", "prices": {"TOP": 10000, "HAT": 1900}}


class TestLoadAndPut:

    def test_load_keeps_ids_and_continues_numbering(self, matrix):
        matrix.load([
            Brand(id=4, name="D", prices={Category.TOP: 1}),
            Brand(id=9, name="I", prices={}),
        ])
        assert [b.id for b in matrix.list_brands()] == [4, 9]
        assert matrix.create_brand("new").id == 10

    def test_put_brand_returns_deleted_brand_to_its_slot(self, matrix):
        a = matrix.create_brand("A")
        b = matrix.create_brand("B")
        c = matrix.create_brand("C")
        matrix.delete_brand(b.id)
        matrix.put_brand(b)
        assert [x.id for x in matrix.list_brands()] == [a.id, b.id, c.id]

    def test_put_brand_replaces_in_place(self, matrix):
        a = matrix.create_brand("A")
        b = matrix.create_brand("B")
        matrix.put_brand(Brand(id=a.id, name="A2"))
        assert [x.name for x in matrix.list_brands()] == ["A2", "B"]
        assert b == matrix.get_brand(b.id)


class TestUnpublishedRecords:

    def test_new_record_is_not_visible(self, matrix):
        brand = matrix.new_record("A", {"상의": 100})
        assert brand.id not in matrix
        assert len(matrix) == 0
        matrix.put_brand(brand)
        assert matrix.get_brand(brand.id) == brand

    def test_new_record_consumes_an_id(self, matrix):
        first = matrix.new_record("A")
        assert matrix.create_brand("B").id == first.id + 1

    def test_priced_record_leaves_matrix_unchanged(self, matrix):
        brand = matrix.create_brand("A", {Category.TOP: 100})
        draft = matrix.priced_record(brand.id, Category.TOP, 200)
        assert draft.price_for(Category.TOP) == 200
        assert matrix.get_brand(brand.id).price_for(Category.TOP) == 100

    def test_renamed_and_updated_records_leave_matrix_unchanged(self, matrix):
        brand = matrix.create_brand("A", {Category.TOP: 100})
        assert matrix.renamed_record(brand.id, "B").name == "B"
        assert dict(matrix.updated_record(brand.id, "C", {Category.HAT: 1}).prices) == {Category.HAT: 1}
        assert matrix.get_brand(brand.id) == brand

    def test_drafts_validate(self, matrix):
        brand = matrix.create_brand("A")
        with pytest.raises(InvalidInput):
            matrix.priced_record(brand.id, Category.TOP, -1)
        with pytest.raises(BrandNotFound):
            matrix.renamed_record(999, "B")


class TestPriceFrame:

    def test_shape_and_missing_values(self, matrix):
        a = matrix.create_brand("A", {Category.TOP: 100})
        b = matrix.create_brand("B", {Category.TOP: 50, Category.SOCKS: 10})
        frame = price_frame(matrix.snapshot())

        assert list(frame.index) == [a.id, b.id]
        assert list(frame.columns)[0] == "TOP"
        assert frame.shape == (2, 8)
        assert frame.loc[b.id, "SOCKS"] == 10
        assert math.isnan(frame.loc[a.id, "SOCKS"])

    def test_empty_matrix(self, matrix):
        frame = matrix.to_dataframe()
        assert frame.empty
        assert frame.shape == (0, 8)


class TestConcurrency:

    def test_concurrent_writers_and_readers(self, matrix):
        brand = matrix.create_brand("A", {c: 0 for c in Category})
        errors = []

        def writer():
            for amount in range(200):
                matrix.update_brand(brand.id, "A", {c: amount for c in Category})

        def reader():
            for _ in range(200):
                snapshot = matrix.snapshot()
                values = set(snapshot[0].prices.values())
                # a torn update would mix two amounts within one record
                if len(values) != 1:
                    errors.append(values)

        threads = [threading.Thread(target=writer)] + [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert set(matrix.get_brand(brand.id).prices.values()) == {199}
