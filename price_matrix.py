"""
Price Matrix - Brand x Category prices

This module defines:
1. Brand records (immutable; every mutation replaces the record)
2. PriceMatrix, the owned and lockable store of all brands
3. price_frame(), the tabular brands x categories view the queries read

A brand's price map may be partial. A missing entry means the brand does not
take part in that category; in the tabular view it is NaN.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from categories import Category, all_categories
from errors import BrandNotFound, InvalidInput
from schemas import validate_amount, validate_brand_input

logger = logging.getLogger(__name__)


# ============================================================================
# BRAND RECORD
# ============================================================================

def _frozen_prices(prices: Optional[Mapping[Category, int]] = None) -> Mapping[Category, int]:
    return MappingProxyType(dict(prices or {}))


@dataclass(frozen=True)
class Brand:
    """
    A seller with a price for zero or more categories.

    Attributes:
        id: Identifier assigned on creation, stable for the brand's lifetime
        name: Display name (not required to be unique)
        prices: Read-only mapping Category -> non-negative integer amount
    """
    id: int
    name: str
    prices: Mapping[Category, int] = field(default_factory=_frozen_prices)

    def price_for(self, category: Category) -> Optional[int]:
        """Price for a category, or None if the brand does not sell it."""
        return self.prices.get(category)

    def has_all_categories(self) -> bool:
        return all(c in self.prices for c in all_categories())

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization (prices keyed by identifier)."""
        return {
            "id": self.id,
            "name": self.name,
            "prices": {
                c.identifier: self.prices[c]
                for c in all_categories()
                if c in self.prices
            },
        }


# ============================================================================
# PRICE MATRIX
# ============================================================================

class PriceMatrix:
    """
    Mutable store of all brands, keyed by id in insertion order.

    Brand records are immutable, so a mutation swaps one record for another
    under the lock. snapshot() copies the record references under the same
    lock, which gives every query one consistent view of the whole matrix.
    """

    def __init__(self, brands: Optional[Iterable[Brand]] = None):
        """
        Initialize the price matrix.

        Args:
            brands: Optional existing records (e.g. loaded from storage)
        """
        self._lock = threading.RLock()
        self._brands: Dict[int, Brand] = {}
        self._ids = itertools.count(1)
        if brands:
            self.load(brands)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._brands)

    def __contains__(self, brand_id: object) -> bool:
        with self._lock:
            return brand_id in self._brands

    def get_brand(self, brand_id: int) -> Brand:
        """
        Get a brand by id.

        Raises:
            BrandNotFound: If no brand has this id
        """
        with self._lock:
            brand = self._brands.get(brand_id)
        if brand is None:
            raise BrandNotFound(f"ID {brand_id}에 해당하는 브랜드가 존재하지 않습니다")
        return brand

    def get_brand_by_name(self, name: str) -> Brand:
        """
        Get the first brand (insertion order) with this exact name.

        Raises:
            BrandNotFound: If no brand has this name
        """
        with self._lock:
            for brand in self._brands.values():
                if brand.name == name:
                    return brand
        raise BrandNotFound(f"{name} 브랜드가 존재하지 않습니다")

    def list_brands(self) -> List[Brand]:
        """All brands in insertion order."""
        return list(self.snapshot())

    def snapshot(self) -> Tuple[Brand, ...]:
        """Consistent point-in-time copy of every brand record."""
        with self._lock:
            return tuple(self._brands.values())

    def to_dataframe(self) -> pd.DataFrame:
        """Return the brands x categories price table for the current snapshot."""
        return price_frame(self.snapshot())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    #
    # new_record/renamed_record/updated_record/priced_record validate and
    # build the next record without publishing it; put_brand publishes.

    def new_record(self, name: str, prices: Optional[Mapping] = None) -> Brand:
        """
        Build a brand record with a fresh id, without adding it.

        Args:
            name: Brand name (duplicates allowed)
            prices: Optional initial price map (keys: Category, label or identifier)
        """
        payload = validate_brand_input(name, prices)
        with self._lock:
            brand_id = next(self._ids)
        return Brand(id=brand_id, name=payload.name, prices=_frozen_prices(payload.prices))

    def renamed_record(self, brand_id: int, new_name: str) -> Brand:
        payload = validate_brand_input(new_name)
        return replace(self.get_brand(brand_id), name=payload.name)

    def updated_record(self, brand_id: int, name: str, prices: Optional[Mapping] = None) -> Brand:
        payload = validate_brand_input(name, prices)
        self.get_brand(brand_id)
        return Brand(id=brand_id, name=payload.name, prices=_frozen_prices(payload.prices))

    def priced_record(self, brand_id: int, category: Category, amount: int) -> Brand:
        """
        Build the record with one brand/category price set.

        Raises:
            InvalidInput: If amount is not a valid price
            BrandNotFound: If no brand has this id
        """
        amount = validate_amount(amount)
        if not isinstance(category, Category):
            raise InvalidInput(f"잘못된 카테고리: {category!r}")
        current = self.get_brand(brand_id)
        prices = dict(current.prices)
        prices[category] = amount
        return replace(current, prices=_frozen_prices(prices))

    def put_brand(self, brand: Brand) -> Brand:
        """
        Publish a record: replace the brand with the same id in place, or add
        it in id order.
        """
        with self._lock:
            if brand.id in self._brands:
                self._brands[brand.id] = brand
                return brand
            self._brands[brand.id] = brand
            if brand.id < max(self._brands):
                self._brands = dict(sorted(self._brands.items()))
        return brand

    def create_brand(self, name: str, prices: Optional[Mapping] = None) -> Brand:
        """
        Create a brand with a fresh id.

        Returns:
            The new Brand record
        """
        brand = self.put_brand(self.new_record(name, prices))
        logger.debug(f"Created brand {brand.id} ({brand.name})")
        return brand

    def rename_brand(self, brand_id: int, new_name: str) -> Brand:
        with self._lock:
            return self.put_brand(self.renamed_record(brand_id, new_name))

    def update_brand(self, brand_id: int, name: str, prices: Optional[Mapping] = None) -> Brand:
        """Replace a brand's name and its entire price map in one step."""
        with self._lock:
            return self.put_brand(self.updated_record(brand_id, name, prices))

    def set_price(self, brand_id: int, category: Category, amount: int) -> Brand:
        """
        Set one brand/category price, overwriting any previous value.

        Raises:
            InvalidInput: If amount is not a valid price
            BrandNotFound: If no brand has this id
        """
        with self._lock:
            return self.put_brand(self.priced_record(brand_id, category, amount))

    def set_price_by_name(self, name: str, category: Category, amount: int) -> Brand:
        """Look up the first brand with this name, then behave as set_price."""
        amount = validate_amount(amount)
        with self._lock:
            brand_id = self.get_brand_by_name(name).id
            return self.set_price(brand_id, category, amount)

    def delete_brand(self, brand_id: int) -> Brand:
        """
        Remove a brand. Its id is never resolvable again.

        Returns:
            The removed record

        Raises:
            BrandNotFound: If no brand has this id
        """
        with self._lock:
            brand = self.get_brand(brand_id)
            del self._brands[brand_id]
        logger.debug(f"Deleted brand {brand_id} ({brand.name})")
        return brand

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, brands: Iterable[Brand]) -> None:
        """
        Add existing records, keeping their ids and order.

        New ids continue after the largest id seen so far.
        """
        with self._lock:
            for brand in brands:
                self._brands[brand.id] = replace(brand, prices=_frozen_prices(brand.prices))
            highest = max(self._brands, default=0)
            self._ids = itertools.count(highest + 1)


def price_frame(brands: Sequence[Brand]) -> pd.DataFrame:
    """
    Build the brands x categories price table.

    Index is brand id (in the given order), columns are category identifiers
    in category order. Missing prices are NaN.

    Args:
        brands: Snapshot of brand records

    Returns:
        DataFrame of float prices (exact, since amounts are bounded by MAX_PRICE)
    """
    columns = [c.identifier for c in all_categories()]
    rows = [
        [brand.prices.get(c, float("nan")) for c in all_categories()]
        for brand in brands
    ]
    return pd.DataFrame(
        data=rows,
        index=pd.Index([brand.id for brand in brands], dtype="int64", name="brand_id"),
        columns=columns,
        dtype=float,
    )
