"""
Reference catalog and startup bootstrap

Nine brands (A to I) priced in all 8 categories. Loaded on first start when
storage holds no brands.
"""

import logging
import os
from typing import Dict, Optional

from dotenv import load_dotenv

from brand_repository import BrandRepository
from brand_service import BrandService
from categories import Category
from database import DatabaseManager
from price_matrix import PriceMatrix

logger = logging.getLogger(__name__)

_C = Category

REFERENCE_PRICES: Dict[str, Dict[Category, int]] = {
    "A": {_C.TOP: 11200, _C.OUTER: 5500, _C.PANTS: 4200, _C.SNEAKERS: 9000,
          _C.BAG: 2000, _C.HAT: 1700, _C.SOCKS: 1800, _C.ACCESSORY: 2300},
    "B": {_C.TOP: 10500, _C.OUTER: 5900, _C.PANTS: 3800, _C.SNEAKERS: 9100,
          _C.BAG: 2100, _C.HAT: 2000, _C.SOCKS: 2000, _C.ACCESSORY: 2200},
    "C": {_C.TOP: 10000, _C.OUTER: 6200, _C.PANTS: 3300, _C.SNEAKERS: 9200,
          _C.BAG: 2200, _C.HAT: 1900, _C.SOCKS: 2200, _C.ACCESSORY: 2100},
    "D": {_C.TOP: 10100, _C.OUTER: 5100, _C.PANTS: 3000, _C.SNEAKERS: 9500,
          _C.BAG: 2500, _C.HAT: 1500, _C.SOCKS: 2400, _C.ACCESSORY: 2000},
    "E": {_C.TOP: 10700, _C.OUTER: 5000, _C.PANTS: 3800, _C.SNEAKERS: 9900,
          _C.BAG: 2300, _C.HAT: 1800, _C.SOCKS: 2100, _C.ACCESSORY: 2100},
    "F": {_C.TOP: 11200, _C.OUTER: 7200, _C.PANTS: 4000, _C.SNEAKERS: 9300,
          _C.BAG: 2100, _C.HAT: 1600, _C.SOCKS: 2300, _C.ACCESSORY: 1900},
    "G": {_C.TOP: 10500, _C.OUTER: 5800, _C.PANTS: 3900, _C.SNEAKERS: 9000,
          _C.BAG: 2200, _C.HAT: 1700, _C.SOCKS: 2100, _C.ACCESSORY: 2000},
    "H": {_C.TOP: 10800, _C.OUTER: 6300, _C.PANTS: 3100, _C.SNEAKERS: 9700,
          _C.BAG: 2100, _C.HAT: 1600, _C.SOCKS: 2000, _C.ACCESSORY: 2000},
    "I": {_C.TOP: 11400, _C.OUTER: 6700, _C.PANTS: 3200, _C.SNEAKERS: 9500,
          _C.BAG: 2400, _C.HAT: 1700, _C.SOCKS: 1700, _C.ACCESSORY: 2400},
}


def seed_reference_brands(service: BrandService) -> int:
    """
    Create the reference brands if the service holds none.

    Returns:
        Number of brands created (0 if brands already existed)
    """
    if len(service.matrix) > 0:
        logger.info("Brands already present, skipping reference seed")
        return 0

    for name, prices in REFERENCE_PRICES.items():
        service.create_brand(name, prices)

    logger.info(f"✓ Seeded {len(REFERENCE_PRICES)} reference brands")
    return len(REFERENCE_PRICES)


def reference_matrix() -> PriceMatrix:
    """In-memory matrix holding only the reference brands."""
    service = BrandService(PriceMatrix())
    seed_reference_brands(service)
    return service.matrix


def build_service(db_manager: Optional[DatabaseManager] = None, seed: Optional[bool] = None) -> BrandService:
    """
    Bootstrap a BrandService backed by the database.

    Args:
        db_manager: Database to use (global manager from DATABASE_URL if omitted)
        seed: Seed reference brands into an empty database
            (defaults to SEED_REFERENCE_DATA, which defaults to true)

    Returns:
        BrandService with the matrix loaded from storage
    """
    if db_manager is None:
        from database import get_db_manager
        db_manager = get_db_manager()

    if seed is None:
        load_dotenv()
        seed = os.getenv("SEED_REFERENCE_DATA", "true").lower() in ("1", "true", "yes")

    db_manager.init_db()
    service = BrandService(PriceMatrix(), BrandRepository(db_manager))
    loaded = service.load_from_repository()
    logger.info(f"✓ Price matrix ready with {loaded} stored brands")

    if seed:
        seed_reference_brands(service)

    return service
