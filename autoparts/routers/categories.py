"""
Category routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from autoparts.auth import require_admin
from autoparts.database import get_db
from autoparts.models.catalog import Category
from autoparts.models.user import User
from autoparts.schemas.catalog import Category as CategorySchema, CategoryCreate, CategoryUpdate

router = APIRouter(prefix="/categories", tags=["catalog"])


async def _get_category(db: AsyncSession, category_id: int) -> Category:
    result = await db.execute(select(Category).where(Category.id == category_id))
    category = result.scalar_one_or_none()

    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )

    return category


async def _check_name_free(db: AsyncSession, name: str, exclude_id: int = None):
    query = select(Category).where(Category.name == name)
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    result = await db.execute(query)
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category already exists"
        )


@router.get("/", response_model=List[CategorySchema])
async def get_categories(db: AsyncSession = Depends(get_db)):
    """
    Get all categories ordered by name.
    """
    result = await db.execute(select(Category).order_by(Category.name))
    return result.scalars().all()


@router.get("/{category_id}", response_model=CategorySchema)
async def get_category(category_id: int, db: AsyncSession = Depends(get_db)):
    """
    Get a specific category by ID.
    """
    return await _get_category(db, category_id)


@router.post("/", response_model=CategorySchema, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Create a new category.
    """
    await _check_name_free(db, category.name)

    db_category = Category(**category.model_dump())
    db.add(db_category)
    await db.commit()
    await db.refresh(db_category)

    return db_category


@router.put("/{category_id}", response_model=CategorySchema)
async def update_category(
    category_id: int,
    category_update: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Update a category.
    """
    db_category = await _get_category(db, category_id)

    update_data = category_update.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in update_data:
        await _check_name_free(db, update_data["name"], exclude_id=db_category.id)

    for field, value in update_data.items():
        setattr(db_category, field, value)

    await db.commit()
    await db.refresh(db_category)

    return db_category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """
    Delete a category. Its parts stay in the catalog, uncategorized.
    """
    db_category = await _get_category(db, category_id)

    await db.delete(db_category)
    await db.commit()

    return None
