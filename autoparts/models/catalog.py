"""
Catalog models: categories and parts.
"""
from sqlalchemy import Boolean, Column, Integer, Float, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from autoparts.database import Base


class Category(Base):
    """Part category."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    image_url = Column(String, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    parts = relationship("Part", back_populates="category")


class Part(Base):
    """A catalog item."""

    __tablename__ = "parts"

    id = Column(Integer, primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    price = Column(Float, nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    sku = Column(String, unique=True, nullable=True)
    brand = Column(String, nullable=False, default="")
    compatible_models = Column(String, nullable=False, default="")
    image_url = Column(String, nullable=False, default="")
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    category = relationship("Category", back_populates="parts")

    @property
    def in_stock(self) -> bool:
        return (self.stock_quantity or 0) > 0
