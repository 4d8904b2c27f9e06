"""Shared pytest fixtures and configuration for all tests."""

import os

# Must be set before main/lambda_handler are imported so no real app is built
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import UTC, datetime  # noqa: E402

import pytest  # noqa: E402
from bson import ObjectId  # noqa: E402

from restaurant_ordering_service.models.menu_models import MenuItem  # noqa: E402

PORK_ID = "65a1f0c2e4b0a1b2c3d4e5f1"
NOODLE_ID = "65a1f0c2e4b0a1b2c3d4e5f2"
TEA_ID = "65a1f0c2e4b0a1b2c3d4e5f3"


@pytest.fixture
def created_at() -> datetime:
    """Fixture providing a fixed creation timestamp."""
    return datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


@pytest.fixture
def menu_item_document(created_at: datetime) -> dict:
    """Fixture providing a stored menuItems document."""
    return {
        "_id": ObjectId(PORK_ID),
        "name": "Stir-Fried Pork with Chili",
        "price": 38.0,
        "categoryId": "stirfry",
        "img": "https://example.com/pork.jpg",
        "desc": "Hunan classic",
        "isActive": True,
        "createdAt": created_at,
        "updatedAt": created_at,
    }


@pytest.fixture
def sample_menu_items(created_at: datetime) -> list[MenuItem]:
    """Fixture providing active menu items with known prices."""
    return [
        MenuItem(
            id=PORK_ID,
            name="Stir-Fried Pork with Chili",
            price=38.0,
            category_id="stirfry",
            img="https://example.com/pork.jpg",
            desc="Hunan classic",
            is_active=True,
            created_at=created_at,
            updated_at=created_at,
        ),
        MenuItem(
            id=NOODLE_ID,
            name="Changsha Shredded Pork Noodles",
            price=16.0,
            category_id="noodle",
            img="https://example.com/noodles.jpg",
            desc="Bone broth with rice noodles",
            is_active=True,
            created_at=created_at,
            updated_at=created_at,
        ),
        MenuItem(
            id=TEA_ID,
            name="Bucket Lemon Tea",
            price=18.5,
            category_id="drink",
            img="https://example.com/tea.jpg",
            desc="Smashed lemons",
            is_active=True,
            created_at=created_at,
            updated_at=created_at,
        ),
    ]


@pytest.fixture
def valid_menu_payload() -> dict:
    """Fixture providing a valid menu item creation payload."""
    return {
        "name": "Iced Soy Milk",
        "price": 6,
        "categoryId": "drink",
        "img": "https://example.com/soy.jpg",
        "desc": "Fresh-ground soy milk",
    }
