"""
Brand persistence

Loads the price matrix at startup and writes every brand mutation through to
the database so storage and matrix stay consistent.
"""

import logging
from typing import List

from categories import resolve_by_identifier
from database import DatabaseManager
from errors import UnknownCategory
from price_matrix import Brand

logger = logging.getLogger(__name__)


class BrandRepository:
    """Stores Brand records in the brands / brand_prices tables"""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def load_all_brands(self) -> List[Brand]:
        """
        Read every stored brand, ordered by id.

        Rows with a category identifier this build does not know are skipped
        with a warning rather than failing the whole load.
        """
        from models import BrandRecord

        brands = []
        with self.db_manager.session_scope() as session:
            records = session.query(BrandRecord).order_by(BrandRecord.id).all()
            for record in records:
                prices = {}
                for row in record.prices:
                    try:
                        prices[resolve_by_identifier(row.category)] = row.price
                    except UnknownCategory:
                        logger.warning(f"Skipping unknown category {row.category!r} for brand {record.id}")
                brands.append(Brand(id=record.id, name=record.name, prices=prices))

        logger.info(f"✓ Loaded {len(brands)} brands from database")
        return brands

    def persist_brand(self, brand: Brand) -> None:
        """Insert or update a brand with its full price map."""
        from models import BrandRecord, BrandPriceRecord

        with self.db_manager.session_scope() as session:
            record = session.get(BrandRecord, brand.id)
            if record is None:
                record = BrandRecord(id=brand.id, name=brand.name)
                session.add(record)
            else:
                record.name = brand.name

            existing = {row.category: row for row in record.prices}
            wanted = {category.identifier: price for category, price in brand.prices.items()}

            for identifier, row in existing.items():
                if identifier not in wanted:
                    record.prices.remove(row)
            for identifier, price in wanted.items():
                if identifier in existing:
                    existing[identifier].price = price
                else:
                    record.prices.append(BrandPriceRecord(category=identifier, price=price))

        logger.debug(f"Persisted brand {brand.id} ({brand.name})")

    def delete_brand(self, brand_id: int) -> bool:
        """
        Delete a brand and its prices.

        Returns:
            True if a row was deleted
        """
        from models import BrandRecord

        with self.db_manager.session_scope() as session:
            record = session.get(BrandRecord, brand_id)
            if record is None:
                return False
            session.delete(record)
        logger.debug(f"Deleted brand {brand_id} from database")
        return True

    def count(self) -> int:
        from models import BrandRecord

        with self.db_manager.session_scope() as session:
            return session.query(BrandRecord).count()
