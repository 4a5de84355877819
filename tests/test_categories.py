"""
Tests for the category set and label resolution.
"""

import pytest

from categories import (
    Category,
    all_categories,
    resolve_by_identifier,
    resolve_by_label,
    resolve_category,
)
from errors import UnknownCategory


class TestAllCategories:

    def test_eight_categories_in_declaration_order(self):
        assert [c.identifier for c in all_categories()] == [
            "TOP", "OUTER", "PANTS", "SNEAKERS", "BAG", "HAT", "SOCKS", "ACCESSORY",
        ]

    def test_same_sequence_every_call(self):
        assert all_categories() == all_categories()
        assert len(all_categories()) == 8

    def test_labels(self):
        assert [c.label for c in all_categories()] == [
            "상의", "아우터", "바지", "스니커즈", "가방", "모자", "양말", "액세서리",
        ]


class TestResolveByLabel:

    @pytest.mark.parametrize("category", list(Category))
    def test_every_label_resolves(self, category):
        assert resolve_by_label(category.label) is category

    def test_unknown_label(self):
        with pytest.raises(UnknownCategory):
            resolve_by_label("존재하지않는카테고리")

    @pytest.mark.parametrize("label", [" 상의", "상의 ", "상", "TOP", "top", ""])
    def test_exact_match_only(self, label):
        with pytest.raises(UnknownCategory):
            resolve_by_label(label)

    def test_non_string(self):
        with pytest.raises(UnknownCategory):
            resolve_by_label(None)

    def test_unknown_category_is_client_error(self):
        with pytest.raises(UnknownCategory) as exc_info:
            resolve_by_label("신발")
        assert exc_info.value.status_code == 400
        assert "신발" in str(exc_info.value)


class TestOtherResolvers:

    def test_identifier(self):
        assert resolve_by_identifier("SNEAKERS") is Category.SNEAKERS

    def test_unknown_identifier(self):
        with pytest.raises(UnknownCategory):
            resolve_by_identifier("SHOES")

    @pytest.mark.parametrize("key", [Category.HAT, "모자", "HAT"])
    def test_resolve_category_accepts_any_form(self, key):
        assert resolve_category(key) is Category.HAT

    def test_resolve_category_unknown(self):
        with pytest.raises(UnknownCategory):
            resolve_category(3)
