"""
Part catalog routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from autoparts.auth import require_admin
from autoparts.config import get_settings
from autoparts.database import get_db
from autoparts.models.catalog import Category, Part
from autoparts.models.user import User
from autoparts.schemas.catalog import Part as PartSchema, PartCreate, PartSuggestions, PartUpdate
from autoparts.schemas.common import Page
from autoparts.services.catalog import CatalogQuery, PartSort, apply_catalog_query, suggest_parts
from autoparts.services.listing import paginate

router = APIRouter(prefix="/parts", tags=["catalog"])

settings = get_settings()


async def fetch_parts(db: AsyncSession):
    """All parts in the storefront's default order."""
    result = await db.execute(select(Part).order_by(Part.featured.desc(), Part.name))
    return result.scalars().all()


async def _get_part(db: AsyncSession, part_id: int) -> Part:
    result = await db.execute(select(Part).where(Part.id == part_id))
    part = result.scalar_one_or_none()

    if not part:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Part not found"
        )

    return part


async def _check_category(db: AsyncSession, category_id: Optional[int]):
    if category_id is None:
        return
    result = await db.execute(select(Category.id).where(Category.id == category_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid category ID"
        )


async def _check_sku_free(db: AsyncSession, sku: Optional[str], exclude_id: Optional[int] = None):
    if not sku:
        return
    query = select(Part).where(Part.sku == sku)
    if exclude_id is not None:
        query = query.where(Part.id != exclude_id)
    result = await db.execute(query)
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="SKU already exists"
        )


@router.get("/", response_model=Page[PartSchema])
async def get_parts(
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    featured: bool = False,
    sort: PartSort = PartSort.DEFAULT,
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """
    Browse the catalog with optional category, search and featured filters.
    """
    parts = await fetch_parts(db)
    query = CatalogQuery(category_id=category_id, search=search, featured_only=featured, sort=sort)
    view = apply_catalog_query(parts, query)

    return Page.from_paginated(paginate(view, page, page_size or settings.catalog_page_size))


@router.get("/suggestions", response_model=PartSuggestions)
async def get_part_suggestions(
    q: str = Query(..., min_length=1),
    limit: int = Query(5, ge=1, le=20),
    db: AsyncSession = Depends(get_db),
):
    """
    Part names matching a partially typed search term.
    """
    parts = await fetch_parts(db)
    return {"query": q, "suggestions": suggest_parts(parts, q, limit)}


@router.get("/{part_id}", response_model=PartSchema)
async def get_part(part_id: int, db: AsyncSession = Depends(get_db)):
    """
    Get a specific part by ID.
    """
    return await _get_part(db, part_id)


@router.post("/", response_model=PartSchema, status_code=status.HTTP_201_CREATED)
async def create_part(
    part: PartCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Add a part to the catalog.
    """
    await _check_category(db, part.category_id)
    await _check_sku_free(db, part.sku)

    db_part = Part(**part.model_dump())
    db.add(db_part)
    await db.commit()
    await db.refresh(db_part)

    return db_part


@router.put("/{part_id}", response_model=PartSchema)
async def update_part(
    part_id: int,
    part_update: PartUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Update a part.
    """
    db_part = await _get_part(db, part_id)

    # Only category and SKU may be cleared
    update_data = {
        field: value
        for field, value in part_update.model_dump(exclude_unset=True).items()
        if value is not None or field in ("category_id", "sku")
    }

    if "category_id" in update_data:
        await _check_category(db, update_data["category_id"])
    if "sku" in update_data:
        await _check_sku_free(db, update_data["sku"], exclude_id=db_part.id)

    for field, value in update_data.items():
        setattr(db_part, field, value)

    await db.commit()
    await db.refresh(db_part)

    return db_part


@router.delete("/{part_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_part(
    part_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Remove a part from the catalog.
    """
    db_part = await _get_part(db, part_id)

    await db.delete(db_part)
    await db.commit()

    return None
