"""
Brand Service - Mutation surface and query entry point

Orchestrates:
1. Brand mutations (create, rename, update, delete, set price) on the PriceMatrix
2. Write-through to storage after every mutation
3. The three price queries, each recomputed from one fresh snapshot

Each change is built as a new record, persisted, and only then published to
the matrix. If the storage write fails, InternalError is raised and readers
never see the change.

This is the main entry point for the UI and any other client.
"""

import logging
import threading
from typing import Callable, List, Mapping, Optional, Union

from aggregation import (
    LowestPriceByCategory,
    LowestTotalPriceBrand,
    MinMaxPrice,
    lowest_price_by_category,
    lowest_total_price_brand,
    min_max_price_by_category,
)
from brand_repository import BrandRepository
from categories import Category, resolve_by_label
from errors import InternalError
from price_matrix import Brand, PriceMatrix

logger = logging.getLogger(__name__)

CategoryArg = Union[Category, str]


def _category(value: CategoryArg) -> Category:
    return value if isinstance(value, Category) else resolve_by_label(value)


class BrandService:
    """Brand management and price queries over one PriceMatrix"""

    def __init__(
        self,
        matrix: Optional[PriceMatrix] = None,
        repository: Optional[BrandRepository] = None
    ):
        """
        Initialize brand service.

        Args:
            matrix: Price matrix to own (a new empty one if omitted)
            repository: Storage for write-through (optional, can be None)
        """
        self.matrix = matrix if matrix is not None else PriceMatrix()
        self.repository = repository
        self._write_lock = threading.Lock()

    def load_from_repository(self) -> int:
        """
        Seed the matrix from storage.

        Returns:
            Number of brands loaded
        """
        if self.repository is None:
            return 0
        brands = self.repository.load_all_brands()
        self.matrix.load(brands)
        return len(brands)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lowest_price_by_category(self) -> LowestPriceByCategory:
        result = lowest_price_by_category(self.matrix.snapshot())
        logger.debug(f"Lowest price by category: {len(result.entries)} categories, total {result.total_price}")
        return result

    def lowest_total_price_brand(self) -> Optional[LowestTotalPriceBrand]:
        result = lowest_total_price_brand(self.matrix.snapshot())
        logger.debug(f"Lowest total price brand: {result.brand_name if result else None}")
        return result

    def min_max_price_by_category(self, category: CategoryArg) -> MinMaxPrice:
        """
        Cheapest and priciest brands for one category.

        Args:
            category: Category or its display label

        Raises:
            UnknownCategory: If the label does not match a category
        """
        resolved = _category(category)
        return min_max_price_by_category(self.matrix.snapshot(), resolved)

    def list_brands(self) -> List[Brand]:
        return self.matrix.list_brands()

    def get_brand(self, brand_id: int) -> Brand:
        return self.matrix.get_brand(brand_id)

    def get_brand_by_name(self, name: str) -> Brand:
        return self.matrix.get_brand_by_name(name)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_brand(self, name: str, prices: Optional[Mapping] = None) -> Brand:
        """
        Create a brand, optionally with initial prices.

        Raises:
            InvalidInput: If the name or any price is invalid
            UnknownCategory: If a price key is not a category
        """
        with self._write_lock:
            brand = self._commit(self.matrix.new_record(name, prices))
        logger.info(f"✓ Created brand {brand.id} ({brand.name})")
        return brand

    def rename_brand(self, brand_id: int, new_name: str) -> Brand:
        with self._write_lock:
            previous = self.matrix.get_brand(brand_id)
            brand = self._commit(self.matrix.renamed_record(brand_id, new_name))
        logger.info(f"✓ Renamed brand {brand_id}: {previous.name} -> {brand.name}")
        return brand

    def update_brand(self, brand_id: int, name: str, prices: Optional[Mapping] = None) -> Brand:
        """Replace a brand's name and whole price map."""
        with self._write_lock:
            brand = self._commit(self.matrix.updated_record(brand_id, name, prices))
        logger.info(f"✓ Updated brand {brand_id} ({brand.name})")
        return brand

    def delete_brand(self, brand_id: int) -> Brand:
        """
        Delete a brand.

        Raises:
            BrandNotFound: If no brand has this id
        """
        with self._write_lock:
            self.matrix.get_brand(brand_id)
            self._write(lambda: self.repository.delete_brand(brand_id))
            removed = self.matrix.delete_brand(brand_id)
        logger.info(f"✓ Deleted brand {brand_id} ({removed.name})")
        return removed

    def set_price(self, brand_id: int, category: CategoryArg, amount: int) -> Brand:
        """
        Set one brand/category price.

        Raises:
            UnknownCategory: If the category label does not resolve
            InvalidInput: If amount is not a valid price
            BrandNotFound: If no brand has this id
        """
        resolved = _category(category)
        with self._write_lock:
            brand = self._commit(self.matrix.priced_record(brand_id, resolved, amount))
        logger.info(f"✓ Set {brand.name} {resolved.label} = {amount}")
        return brand

    def set_price_by_name(self, brand_name: str, category: CategoryArg, amount: int) -> Brand:
        """Set a price on the first brand with this name."""
        resolved = _category(category)
        with self._write_lock:
            brand_id = self.matrix.get_brand_by_name(brand_name).id
            brand = self._commit(self.matrix.priced_record(brand_id, resolved, amount))
        logger.info(f"✓ Set {brand.name} {resolved.label} = {amount}")
        return brand

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _commit(self, brand: Brand) -> Brand:
        """Persist a record, then publish it to the matrix."""
        self._write(lambda: self.repository.persist_brand(brand))
        return self.matrix.put_brand(brand)

    def _write(self, write: Callable[[], object]) -> None:
        if self.repository is None:
            return
        try:
            write()
        except Exception as e:
            logger.error(f"✗ Storage write failed, matrix left unchanged: {e}")
            raise InternalError(f"저장 실패: {e}") from e
