"""
SQLAlchemy ORM Models for the Brand Price database

Tables:
- brands: Sellers whose prices are compared
- brand_prices: Current price of each category at each brand (one row per pair)
"""

from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class BrandRecord(Base):
    """Brand row; id is assigned by the price matrix, not the database"""
    __tablename__ = 'brands'

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)  # Not unique: duplicate names are allowed
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    prices = relationship(
        "BrandPriceRecord",
        back_populates="brand",
        cascade="all, delete-orphan",
        order_by="BrandPriceRecord.id",
    )

    def __repr__(self):
        return f"<Brand {self.id} {self.name}>"


class BrandPriceRecord(Base):
    """Current price of one category at one brand"""
    __tablename__ = 'brand_prices'
    __table_args__ = (
        UniqueConstraint('brand_id', 'category', name='unique_brand_category'),
        Index('idx_brand_prices_category', 'category'),
    )

    id = Column(Integer, primary_key=True)
    brand_id = Column(Integer, ForeignKey('brands.id', ondelete='CASCADE'), nullable=False)
    category = Column(String(50), nullable=False)  # Category identifier, e.g. "TOP"
    price = Column(Integer, nullable=False)  # Smallest currency unit (won)

    # Relationships
    brand = relationship("BrandRecord", back_populates="prices")

    def __repr__(self):
        return f"<BrandPrice {self.brand_id} {self.category}: {self.price}>"
