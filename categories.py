"""
Product Categories

Closed set of 8 product categories compared across brands.

Each category has:
- identifier: stable token used for storage and payload keys (e.g. "TOP")
- label: display name shown to users and accepted from clients (e.g. "상의")

Declaration order is the output order for every query.
"""

from enum import Enum
from typing import Dict, Tuple, Union

from errors import UnknownCategory


class Category(Enum):
    """Product category. Member name is the identifier, value is the label."""

    TOP = "상의"
    OUTER = "아우터"
    PANTS = "바지"
    SNEAKERS = "스니커즈"
    BAG = "가방"
    HAT = "모자"
    SOCKS = "양말"
    ACCESSORY = "액세서리"

    @property
    def identifier(self) -> str:
        return self.name

    @property
    def label(self) -> str:
        return self.value


_ALL_CATEGORIES: Tuple[Category, ...] = tuple(Category)
_BY_LABEL: Dict[str, Category] = {c.label: c for c in _ALL_CATEGORIES}
_BY_IDENTIFIER: Dict[str, Category] = {c.identifier: c for c in _ALL_CATEGORIES}


def all_categories() -> Tuple[Category, ...]:
    """Return every category in declaration order."""
    return _ALL_CATEGORIES


def resolve_by_label(label: str) -> Category:
    """
    Find the category whose display label matches exactly.

    No trimming, case folding or partial matching is applied.

    Raises:
        UnknownCategory: If no category has this label
    """
    if isinstance(label, str) and label in _BY_LABEL:
        return _BY_LABEL[label]
    raise UnknownCategory(f"잘못된 카테고리 이름: {label}")


def resolve_by_identifier(identifier: str) -> Category:
    """Find a category by its identifier ("TOP", "OUTER", ...)."""
    if isinstance(identifier, str) and identifier in _BY_IDENTIFIER:
        return _BY_IDENTIFIER[identifier]
    raise UnknownCategory(f"잘못된 카테고리 식별자: {identifier}")


def resolve_category(key: Union[Category, str]) -> Category:
    """
    Resolve a price-map key given as a Category, a label or an identifier.

    Labels are tried before identifiers; the two sets never overlap.
    """
    if isinstance(key, Category):
        return key
    if isinstance(key, str):
        if key in _BY_LABEL:
            return _BY_LABEL[key]
        if key in _BY_IDENTIFIER:
            return _BY_IDENTIFIER[key]
    raise UnknownCategory(f"잘못된 카테고리 이름: {key}")
