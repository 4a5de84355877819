"""
Shared fixtures: reference price matrix, empty service, in-memory database.
"""

import pytest

from brand_repository import BrandRepository
from brand_service import BrandService
from database import DatabaseManager
from price_matrix import PriceMatrix
from seed_data import reference_matrix


@pytest.fixture
def matrix() -> PriceMatrix:
    """Empty price matrix"""
    return PriceMatrix()


@pytest.fixture
def reference() -> PriceMatrix:
    """Brands A to I with the reference prices"""
    return reference_matrix()


@pytest.fixture
def service(reference: PriceMatrix) -> BrandService:
    """Service over the reference brands without storage"""
    return BrandService(reference)


@pytest.fixture
def db_manager():
    """SQLite in-memory database with the schema created"""
    db = DatabaseManager("sqlite:///:memory:")
    db.init_db()
    yield db
    db.close()


@pytest.fixture
def repository(db_manager: DatabaseManager) -> BrandRepository:
    return BrandRepository(db_manager)
