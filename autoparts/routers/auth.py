"""
Authentication routes.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from autoparts.auth import authenticate_user, create_access_token, get_current_active_user, hash_password
from autoparts.database import get_db
from autoparts.models.customer import Customer
from autoparts.models.user import User, UserRole
from autoparts.schemas.user import LoginRequest, Token, User as UserSchema, UserCreate
from autoparts.validators import validate_password, validate_phone, validate_username

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a storefront account together with its owner profile.
    """
    username = validate_username(payload.username)
    validate_password(payload.password)
    phone = validate_phone(payload.phone)
    email = str(payload.email).lower()

    result = await db.execute(
        select(User).where(or_(User.username == username, User.email == email))
    )
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or email already registered"
        )

    result = await db.execute(select(Customer).where(Customer.email == email))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = User(
        username=username,
        email=email,
        full_name=payload.full_name,
        hashed_password=hash_password(payload.password),
        role=UserRole.CUSTOMER,
    )
    db.add(user)
    await db.flush()

    db.add(Customer(
        user_id=user.id,
        name=payload.full_name or username,
        email=email,
        phone=phone,
        address=payload.address,
    ))
    await db.commit()
    await db.refresh(user)

    logger.info("Registered user %s", username)
    return user


async def _issue_token(db: AsyncSession, username: str, password: str) -> dict:
    user = await authenticate_user(db, username, password)
    if not user:
        logger.warning("Rejected login for %s", username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return {"access_token": create_access_token(user.username), "token_type": "bearer"}


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """
    OAuth2 password flow login.
    """
    return await _issue_token(db, form_data.username, form_data.password)


@router.post("/login", response_model=Token)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    JSON login.
    """
    return await _issue_token(db, payload.username, payload.password)


@router.get("/me", response_model=UserSchema)
async def read_current_user(current_user: User = Depends(get_current_active_user)):
    """Get the signed-in user."""
    return current_user
