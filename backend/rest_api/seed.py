"""
Seed data for development.
Creates the default menu and the administrator account.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import MenuItem
from rest_api.services.domain import UserService
from shared.config.logging import get_logger, mask_email
from shared.config.settings import settings

logger = get_logger(__name__)


DEFAULT_ADMIN_NAME = "Admin User"

_UNSPLASH = "https://images.unsplash.com/photo-{}?auto=format&fit=crop&w=500&q=80"

# Prices in cents
DEFAULT_MENU = [
    {
        "name": "Margherita Pizza",
        "description": "Classic tomato sauce, fresh mozzarella, and basil.",
        "price": 1299,
        "image_url": _UNSPLASH.format("1574071318508-1cdbab80d002"),
        "category": "Pizza",
    },
    {
        "name": "Pepperoni Feast",
        "description": "Loaded with pepperoni and extra cheese.",
        "price": 1499,
        "image_url": _UNSPLASH.format("1628840042765-356cda07504e"),
        "category": "Pizza",
    },
    {
        "name": "Classic Cheeseburger",
        "description": "Juicy beef patty, cheddar, lettuce, tomato, house sauce.",
        "price": 1099,
        "image_url": _UNSPLASH.format("1568901346375-23c9450c58cd"),
        "category": "Burger",
    },
    {
        "name": "Spicy Chicken Burger",
        "description": "Crispy chicken fillet with spicy mayo and pickles.",
        "price": 1199,
        "image_url": _UNSPLASH.format("1615297348928-867df3c467df"),
        "category": "Burger",
    },
    {
        "name": "Caesar Salad",
        "description": "Romaine lettuce, croutons, parmesan, caesar dressing.",
        "price": 899,
        "image_url": _UNSPLASH.format("1550304943-4f24f54ddde9"),
        "category": "Salads",
    },
    {
        "name": "Truffle Fries",
        "description": "Crispy fries tossed with truffle oil and parmesan.",
        "price": 699,
        "image_url": _UNSPLASH.format("1573080496982-b94a8add0dd5"),
        "category": "Sides",
    },
]


def seed_menu(db: Session) -> int:
    """
    Insert the default menu.
    Idempotent: only inserts if the menu is empty. Returns items inserted.
    """
    if db.scalar(select(MenuItem.id).limit(1)):
        logger.info("Menu already seeded, skipping")
        return 0

    for item_data in DEFAULT_MENU:
        db.add(MenuItem(**item_data))
    db.commit()

    logger.info("Menu seeded successfully", menu_items=len(DEFAULT_MENU))
    return len(DEFAULT_MENU)


def seed_admin(db: Session) -> bool:
    """Create the administrator account if missing. Returns True if created."""
    user, created = UserService(db).ensure_admin(
        settings.seed_admin_email,
        settings.seed_admin_password,
        name=DEFAULT_ADMIN_NAME,
    )
    if created:
        logger.info("Admin user created", email=mask_email(user.email))
    return created


def seed(db: Session) -> None:
    """
    Seed initial data.
    Safe to run on every startup.
    """
    seed_menu(db)
    seed_admin(db)
