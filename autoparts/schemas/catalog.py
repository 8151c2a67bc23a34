"""
Pydantic schemas for categories and parts.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional


class CategoryBase(BaseModel):
    """Base category schema with common fields."""
    name: str = Field(min_length=1)
    description: str = ""
    image_url: str = ""


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None


class Category(CategoryBase):
    """Schema for category responses."""
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PartBase(BaseModel):
    """Base part schema with common fields."""
    category_id: Optional[int] = None
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    sku: Optional[str] = None
    brand: str = ""
    compatible_models: str = ""
    image_url: str = ""
    featured: bool = False


class PartCreate(PartBase):
    """Schema for adding a part to the catalog."""
    pass


class PartUpdate(BaseModel):
    """Schema for updating a part."""
    category_id: Optional[int] = None
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    sku: Optional[str] = None
    brand: Optional[str] = None
    compatible_models: Optional[str] = None
    image_url: Optional[str] = None
    featured: Optional[bool] = None


class Part(PartBase):
    """Schema for part responses."""
    id: int
    in_stock: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PartSuggestions(BaseModel):
    query: str
    suggestions: List[str]
