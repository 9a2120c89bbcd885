"""
Cart Schemas for Bella Cucina
=============================

Request bodies for the cart endpoints. The cart summary response is built by
CartStore.summary and returned as a plain dict:

    {
        "items": [{"cart_id": 1, "menu_item_id": "margherita", ...}],
        "summary": {"subtotal": 36.0, "deliveryFee": 0.0, "tax": 3.15,
                    "total": 39.15, "itemCount": 2}
    }
"""

from typing import Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .. import config


class CartItemAdd(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    menu_item_id: Union[int, str] = Field(validation_alias=AliasChoices("menuItemId", "menu_item_id"))
    quantity: int = Field(default=1, ge=1, le=config.MAX_ITEM_QUANTITY)


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=1, le=config.MAX_ITEM_QUANTITY)
