"""
Menu Item Schemas for Bella Cucina
==================================

Pydantic models for the public menu and the admin menu CRUD endpoints.

Endpoint Coverage:
------------------
- GET /menu, GET /menu/{id}: MenuItemOut
- POST /admin/menu: MenuItemCreate
- PUT /admin/menu/{id}: MenuItemUpdate

Menu item ids are stable slugs ("margherita", "tiramisu") chosen by the
admin at creation time; orders reference items by this id.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MenuItemOut(BaseModel):
    """
    Response model for menu item data.

    Attributes:
        id: Stable item identifier
        name: Display name (e.g., "Margherita Pizza")
        category: Grouping category (e.g., "pizza", "desserts")
        description: Optional description shown on the menu
        price: Current price in dollars
        is_available: False while the kitchen cannot make the item
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    description: Optional[str] = None
    price: float
    is_available: bool

    @field_validator("price", mode="before")
    @classmethod
    def decimal_to_float(cls, v):
        if isinstance(v, Decimal):
            return float(v)
        return v


class MenuItemCreate(BaseModel):
    id: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_-]+$")
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, decimal_places=2)
    is_available: bool = True


class MenuItemUpdate(BaseModel):
    """All fields optional; only the ones provided are changed."""
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    is_available: Optional[bool] = None
