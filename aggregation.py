"""
Aggregation Engine - Cheapest brands and bundles

This module answers the three pricing questions over a snapshot of brands:

- Q1 lowest_price_by_category: cheapest brand(s) per category and the total of
  buying one item per category at those prices
- Q2 lowest_total_price_brand: the single brand whose full 8-category bundle
  costs least
- Q3 min_max_price_by_category: cheapest and priciest brand(s) in one category

Rules:
- Tie-inclusive selection for Q1 and Q3 (every brand at the extreme price,
  in insertion order). Q1 joins tied names with a bare comma.
- Q2 only considers brands priced in every category, and on an exact tie the
  first brand in insertion order wins.
- Every call recomputes from the snapshot; nothing is cached.
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from categories import Category, all_categories
from price_matrix import Brand, price_frame

logger = logging.getLogger(__name__)


def format_price(amount: int) -> str:
    """Render an amount with thousands separators, no symbol, no decimals."""
    return f"{int(amount):,}"


# ============================================================================
# RESULT STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class CategoryLowestPrice:
    """Cheapest brand(s) for one category."""
    category: Category
    brand_names: Tuple[str, ...]
    price: int

    @property
    def brand(self) -> str:
        return ",".join(self.brand_names)

    def to_dict(self) -> Dict:
        return {
            "category": self.category.label,
            "brand": self.brand,
            "price": format_price(self.price),
        }


@dataclass(frozen=True)
class LowestPriceByCategory:
    """Q1 result: per-category minima and their sum."""
    entries: Tuple[CategoryLowestPrice, ...]
    total_price: int

    def to_dict(self) -> Dict:
        return {
            "categories": [entry.to_dict() for entry in self.entries],
            "totalPrice": format_price(self.total_price),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


@dataclass(frozen=True)
class LowestTotalPriceBrand:
    """Q2 result: winning brand with its full per-category breakdown."""
    brand_id: int
    brand_name: str
    category_prices: Tuple[Tuple[Category, int], ...]
    total_price: int

    def to_dict(self) -> Dict:
        return {
            "최저가": {
                "브랜드": self.brand_name,
                "카테고리": [
                    {"카테고리": category.label, "가격": format_price(price)}
                    for category, price in self.category_prices
                ],
                "총액": format_price(self.total_price),
            }
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


@dataclass(frozen=True)
class BrandPrice:
    brand_name: str
    price: int

    def to_dict(self) -> Dict[str, str]:
        return {"브랜드": self.brand_name, "가격": format_price(self.price)}


@dataclass(frozen=True)
class MinMaxPrice:
    """Q3 result: cheapest and priciest brands within one category."""
    category: Category
    lowest: Tuple[BrandPrice, ...]
    highest: Tuple[BrandPrice, ...]

    def to_dict(self) -> Dict:
        return {
            "카테고리": self.category.label,
            "최저가": [item.to_dict() for item in self.lowest],
            "최고가": [item.to_dict() for item in self.highest],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


# ============================================================================
# QUERIES
# ============================================================================

def _names_by_id(brands: Sequence[Brand]) -> Dict[int, str]:
    return {brand.id: brand.name for brand in brands}


def _priced(frame: pd.DataFrame, category: Category) -> pd.Series:
    """Prices for one category, restricted to brands that sell it."""
    return frame[category.identifier].dropna()


def lowest_price_by_category(brands: Sequence[Brand]) -> LowestPriceByCategory:
    """
    Q1: cheapest brand(s) per category with the total.

    Categories nobody prices are left out and add nothing to the total.

    Args:
        brands: Snapshot of brand records

    Returns:
        LowestPriceByCategory with one entry per priced category
    """
    frame = price_frame(brands)
    names = _names_by_id(brands)

    entries: List[CategoryLowestPrice] = []
    for category in all_categories():
        column = _priced(frame, category)
        if column.empty:
            logger.debug(f"  {category.identifier}: no priced brand")
            continue

        lowest = column.min()
        winners = column[column == lowest].index
        entries.append(
            CategoryLowestPrice(
                category=category,
                brand_names=tuple(names[brand_id] for brand_id in winners),
                price=int(lowest),
            )
        )

    total = sum(entry.price for entry in entries)
    return LowestPriceByCategory(entries=tuple(entries), total_price=total)


def lowest_total_price_brand(brands: Sequence[Brand]) -> Optional[LowestTotalPriceBrand]:
    """
    Q2: the single brand with the cheapest complete bundle.

    Brands missing a price for any category cannot sell the bundle and are
    skipped. Exact ties go to the earliest brand.

    Args:
        brands: Snapshot of brand records

    Returns:
        LowestTotalPriceBrand, or None if no brand prices every category
    """
    frame = price_frame(brands)
    complete = frame.dropna(how="any")
    if complete.empty:
        logger.debug(f"No complete bundle among {len(frame)} brands")
        return None

    totals = complete.sum(axis=1)
    # idxmin returns the first occurrence of the minimum
    winner_id = int(totals.idxmin())
    row = complete.loc[winner_id]
    names = _names_by_id(brands)

    return LowestTotalPriceBrand(
        brand_id=winner_id,
        brand_name=names[winner_id],
        category_prices=tuple(
            (category, int(row[category.identifier])) for category in all_categories()
        ),
        total_price=int(totals[winner_id]),
    )


def lowest_total_price_payload(result: Optional[LowestTotalPriceBrand]) -> Dict:
    """Client payload for Q2: an empty dict when no brand sells the full bundle."""
    return result.to_dict() if result is not None else {}


def min_max_price_by_category(brands: Sequence[Brand], category: Category) -> MinMaxPrice:
    """
    Q3: cheapest and priciest brand(s) in one category.

    When only one distinct price exists both lists hold the same brands.
    When nobody prices the category both lists are empty.
    """
    column = _priced(price_frame(brands), category)
    if column.empty:
        return MinMaxPrice(category=category, lowest=(), highest=())

    names = _names_by_id(brands)

    def _at(price: float) -> Tuple[BrandPrice, ...]:
        return tuple(
            BrandPrice(brand_name=names[brand_id], price=int(price))
            for brand_id in column[column == price].index
        )

    return MinMaxPrice(
        category=category,
        lowest=_at(column.min()),
        highest=_at(column.max()),
    )


# ============================================================================
# UTILITY FUNCTION: Display results in a human-readable format
# ============================================================================

def print_price_report(brands: Sequence[Brand]) -> None:
    """Pretty-print Q1 and Q2 for a snapshot."""
    q1 = lowest_price_by_category(brands)
    print("\n" + "=" * 60)
    print("카테고리별 최저가격")
    print("=" * 60)
    for entry in q1.entries:
        print(f"  • {entry.category.label:8} {entry.brand:10} {format_price(entry.price):>10}")
    print(f"  총액: {format_price(q1.total_price)}")

    q2 = lowest_total_price_brand(brands)
    print("\n단일 브랜드 최저가격")
    print("-" * 60)
    if q2 is None:
        print("  모든 카테고리를 판매하는 브랜드가 없습니다")
    else:
        print(f"  브랜드: {q2.brand_name}  총액: {format_price(q2.total_price)}")
    print("=" * 60)


if __name__ == "__main__":
    from seed_data import reference_matrix

    print_price_report(reference_matrix().snapshot())
