"""
Default data created on startup.
"""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from autoparts.auth import hash_password
from autoparts.config import Settings
from autoparts.models.catalog import Category
from autoparts.models.user import User, UserRole

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Engine System", "Engine core, gaskets, belts, fuel, ignition, intake, exhaust, cooling and lubrication"),
    ("Transmission & Drivetrain", "Manual and automatic transmissions, clutches, CVT/DCT and driveline"),
    ("Suspension & Steering", "Shocks, struts, springs, control arms and steering components"),
    ("Braking System", "Pads, discs, calipers, hydraulics and ABS parts"),
    ("Wheels & Tyres", "Rims, tyres, hubs and wheel hardware"),
    ("Electrical & Electronic Systems", "Batteries, charging, starting, lighting, sensors and modules"),
    ("Body & Structural Components", "Panels, bumpers, mirrors, glass and trim"),
    ("Interior & Cabin Systems", "Seats, dashboard, climate control and cabin accessories"),
]


async def ensure_admin_user(db: AsyncSession, settings: Settings) -> None:
    """Create the configured admin account if it does not exist yet."""
    if not (settings.admin_username and settings.admin_password and settings.admin_email):
        return

    username = settings.admin_username.lower().strip()
    result = await db.execute(select(User).where(User.username == username))
    if result.scalar_one_or_none():
        return

    db.add(User(
        username=username,
        email=settings.admin_email,
        full_name="System Administrator",
        hashed_password=hash_password(settings.admin_password),
        role=UserRole.ADMIN,
    ))
    await db.commit()
    logger.info("Admin user created: %s", username)


async def ensure_categories(db: AsyncSession) -> None:
    """Populate the category table when it is empty."""
    count = await db.scalar(select(func.count()).select_from(Category))
    if count:
        return

    db.add_all(Category(name=name, description=description) for name, description in DEFAULT_CATEGORIES)
    await db.commit()
    logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
