"""Menu data models.

Categories are a fixed in-code list and are never persisted. Menu items live in
the ``menuItems`` collection; documents keep the camelCase field names used by
the API (``categoryId``, ``isActive``, ``createdAt``...), so the same aliases
serve both the wire format and the stored format.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Price = Annotated[float, Field(ge=0, allow_inf_nan=False, strict=True)]


class Category(BaseModel):
    """Fixed grouping label for dishes."""

    id: str = Field(..., description="Stable category identifier")
    name: str = Field(..., description="Display name")


CATEGORIES: tuple[Category, ...] = (
    Category(id="stirfry", name="Hunan Stir-Fry"),
    Category(id="noodle", name="Rice Noodles"),
    Category(id="hotpot", name="Spicy Hotpot"),
    Category(id="bbq", name="Late-Night BBQ"),
    Category(id="snack", name="Street Snacks"),
    Category(id="drink", name="Cooling Drinks"),
)

CATEGORY_IDS: frozenset[str] = frozenset(c.id for c in CATEGORIES)


def get_category_name(category_id: str) -> str:
    """Return the display name of a category, or the id itself if unknown."""
    for category in CATEGORIES:
        if category.id == category_id:
            return category.name
    return category_id


def _validate_category_id(value: str) -> str:
    if value not in CATEGORY_IDS:
        raise ValueError(f"unknown category '{value}'")
    return value


class MenuItemInput(BaseModel):
    """Payload for creating a menu item.

    Strings are trimmed before the non-empty check and stored trimmed.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: NonEmptyStr
    price: Price
    category_id: NonEmptyStr
    img: NonEmptyStr
    desc: NonEmptyStr
    is_active: bool = True

    @field_validator("category_id")
    @classmethod
    def validate_category_id(cls, v: str) -> str:
        """Only categories from the fixed list are accepted."""
        return _validate_category_id(v)


class MenuItemUpdate(BaseModel):
    """Partial update payload for a menu item.

    Only the fields present in the request are applied. A field that is present
    is validated with the same rules as on create, so an explicit ``null`` is
    rejected rather than treated as "not supplied".
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: NonEmptyStr | None = None
    price: Price | None = None
    category_id: NonEmptyStr | None = None
    img: NonEmptyStr | None = None
    desc: NonEmptyStr | None = None
    is_active: bool | None = None

    @field_validator("category_id")
    @classmethod
    def validate_category_id(cls, v: str | None) -> str | None:
        """Only categories from the fixed list are accepted."""
        return v if v is None else _validate_category_id(v)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "MenuItemUpdate":
        """Reject supplied fields whose value is null."""
        for field_name in self.model_fields_set:
            if getattr(self, field_name) is None:
                raise ValueError(f"{to_camel(field_name)} must not be null")
        return self

    def to_update_fields(self) -> dict[str, Any]:
        """Return the supplied fields keyed by their stored names.

        Returns:
            dict: Fields to ``$set`` on the stored document
        """
        return self.model_dump(by_alias=True, include=self.model_fields_set)


class MenuItem(BaseModel):
    """A persisted dish as returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Document id as a string")
    name: str
    price: float = Field(..., ge=0)
    category_id: str
    img: str
    desc: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "MenuItem":
        """Create a MenuItem from a ``menuItems`` document.

        Args:
            document: Raw MongoDB document

        Returns:
            MenuItem: Parsed model instance
        """
        return cls(
            id=str(document["_id"]),
            name=document["name"],
            price=float(document.get("price") or 0),
            category_id=document["categoryId"],
            img=document["img"],
            desc=document["desc"],
            is_active=bool(document.get("isActive")),
            created_at=document["createdAt"],
            updated_at=document["updatedAt"],
        )


def new_menu_item_document(item: MenuItemInput, now: datetime) -> dict[str, Any]:
    """Build the document stored for a newly created menu item."""
    document = item.model_dump(by_alias=True)
    document["createdAt"] = now
    document["updatedAt"] = now
    return document


SEED_MENU_ITEMS: tuple[MenuItemInput, ...] = (
    MenuItemInput(
        name="Stir-Fried Pork with Chili",
        price=38,
        category_id="stirfry",
        img="https://images.unsplash.com/photo-1624386971932-d193f443a6d4?w=200&h=200&fit=crop",
        desc="Hunan classic, green chili with free-range pork",
    ),
    MenuItemInput(
        name="Steamed Fish Head with Chopped Chili",
        price=68,
        category_id="stirfry",
        img="https://images.unsplash.com/photo-1624386971932-d193f443a6d4?w=200&h=200&fit=crop",
        desc="Bright heat over tender fish",
    ),
    MenuItemInput(
        name="Wok-Fried Yellow Beef",
        price=48,
        category_id="stirfry",
        img="https://images.unsplash.com/photo-1541544741938-0af808871cc0?w=200&h=200&fit=crop",
        desc="Flash-fried with pickled wild peppers",
    ),
    MenuItemInput(
        name="Dry-Pot Cauliflower",
        price=26,
        category_id="stirfry",
        img="https://images.unsplash.com/photo-1546069901-ba9599a7e63c?w=200&h=200&fit=crop",
        desc="Organic cauliflower seared with pork belly",
    ),
    MenuItemInput(
        name="Changsha Shredded Pork Noodles",
        price=16,
        category_id="noodle",
        img="https://images.unsplash.com/photo-1612929633738-8fe44f7ec841?w=200&h=200&fit=crop",
        desc="Bone broth with hand-cut wide rice noodles",
    ),
    MenuItemInput(
        name="Pickled Bean and Minced Pork Noodles",
        price=18,
        category_id="noodle",
        img="https://images.unsplash.com/photo-1612929633738-8fe44f7ec841?w=200&h=200&fit=crop",
        desc="Sour, savory and loaded with pork",
    ),
    MenuItemInput(
        name="Spicy Beef Hotpot",
        price=128,
        category_id="hotpot",
        img="https://images.unsplash.com/photo-1541544741938-0af808871cc0?w=200&h=200&fit=crop",
        desc="Slow-simmered beef bone broth, fresh-cut beef",
    ),
    MenuItemInput(
        name="Dry-Pot Pork Intestine",
        price=58,
        category_id="hotpot",
        img="https://images.unsplash.com/photo-1541544741938-0af808871cc0?w=200&h=200&fit=crop",
        desc="Cleaned in house, spicy and chewy",
    ),
    MenuItemInput(
        name="Lamb Skewers (5)",
        price=25,
        category_id="bbq",
        img="https://images.unsplash.com/photo-1555939594-58d7cb561ad1?w=200&h=200&fit=crop",
        desc="Cumin-crusted, lean and fat",
    ),
    MenuItemInput(
        name="Grilled Beef Tallow (10)",
        price=20,
        category_id="bbq",
        img="https://images.unsplash.com/photo-1555939594-58d7cb561ad1?w=200&h=200&fit=crop",
        desc="Rich and buttery in every bite",
    ),
    MenuItemInput(
        name="Changsha Stinky Tofu",
        price=15,
        category_id="snack",
        img="https://images.unsplash.com/photo-1563245372-f21724e3856d?w=200&h=200&fit=crop",
        desc="Crisp outside, soft inside",
    ),
    MenuItemInput(
        name="Sugar-Oil Rice Cakes",
        price=12,
        category_id="snack",
        img="https://images.unsplash.com/photo-1563245372-f21724e3856d?w=200&h=200&fit=crop",
        desc="Chewy and sweet without being heavy",
    ),
    MenuItemInput(
        name="Iced Soy Milk",
        price=6,
        category_id="drink",
        img="https://images.unsplash.com/photo-1613478223719-2ab802602423?w=200&h=200&fit=crop",
        desc="Fresh-ground soy milk, the best heat relief",
    ),
    MenuItemInput(
        name="Bucket Lemon Tea",
        price=18,
        category_id="drink",
        img="https://images.unsplash.com/photo-1622483767028-3f66f32aef97?w=200&h=200&fit=crop",
        desc="Smashed lemons, crisp and refreshing",
    ),
)
