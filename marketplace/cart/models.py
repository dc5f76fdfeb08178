"""Cart models and the durable snapshot format."""
import json
from decimal import Decimal
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from marketplace.errors import (
    ERROR_DUPLICATE_ITEM,
    ERROR_INVALID_JSON,
    ERROR_INVALID_PAYLOAD,
    ERROR_UNSUPPORTED_VERSION,
    CorruptStateError,
)
from marketplace.money import parse_price, price_to_str

# Version written into every snapshot; bare lists are the pre-versioned format
SNAPSHOT_VERSION = 1


class Product(BaseModel):
    """Product descriptor handed to add_to_cart (no quantity)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(min_length=1)
    title: str
    image_url: str = ""
    price: Decimal

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return parse_price(v)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "image_url": self.image_url,
            "price": price_to_str(self.price),
        }


class CartItem(Product):
    """Single line item in the cart."""

    quantity: int = Field(ge=1)

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartItem":
        return cls(
            id=product.id,
            title=product.title,
            image_url=product.image_url,
            price=product.price,
            quantity=quantity,
        )

    def with_quantity(self, quantity: int) -> "CartItem":
        """Copy of this item with another quantity."""
        return self.model_copy(update={"quantity": quantity})

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["quantity"] = self.quantity
        return data


class CartState(BaseModel):
    """
    Immutable snapshot of the cart.

    Items keep insertion order; at most one item per product id.
    """

    model_config = ConfigDict(frozen=True)

    items: Tuple[CartItem, ...] = ()

    @field_validator("items")
    @classmethod
    def reject_duplicate_ids(cls, items):
        seen = set()
        for item in items:
            if item.id in seen:
                raise ValueError(ERROR_DUPLICATE_ITEM)
            seen.add(item.id)
        return items

    @classmethod
    def empty(cls) -> "CartState":
        return cls()

    def index_of(self, product_id: str) -> int:
        """Position of the item with this id, or -1."""
        for index, item in enumerate(self.items):
            if item.id == product_id:
                return index
        return -1

    def find(self, product_id: str) -> Optional[CartItem]:
        index = self.index_of(product_id)
        return self.items[index] if index >= 0 else None

    @property
    def total_items(self) -> int:
        """Total number of units in cart."""
        return sum(item.quantity for item in self.items)

    def to_dict(self) -> dict:
        """Convert to the versioned snapshot dictionary."""
        return {
            "version": SNAPSHOT_VERSION,
            "items": [item.to_dict() for item in self.items],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Any) -> "CartState":
        """
        Build a state from a decoded snapshot.

        Accepts the versioned object form and the legacy bare list of items.

        Raises:
            CorruptStateError: payload does not describe a valid cart
        """
        if isinstance(data, list):
            raw_items = data
        elif isinstance(data, dict):
            version = data.get("version")
            if not isinstance(version, int) or isinstance(version, bool) or version < 1:
                raise CorruptStateError(f"{ERROR_INVALID_PAYLOAD}: missing or invalid version")
            if version > SNAPSHOT_VERSION:
                raise CorruptStateError(f"{ERROR_UNSUPPORTED_VERSION}: {version}")
            raw_items = data.get("items")
            if not isinstance(raw_items, list):
                raise CorruptStateError(f"{ERROR_INVALID_PAYLOAD}: items must be a list")
        else:
            raise CorruptStateError(f"{ERROR_INVALID_PAYLOAD}: {type(data).__name__}")

        try:
            return cls(items=tuple(CartItem.model_validate(item) for item in raw_items))
        except ValidationError as e:
            raise CorruptStateError(f"{ERROR_INVALID_PAYLOAD}: {e}") from e

    @classmethod
    def from_json(cls, raw: str) -> "CartState":
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError, TypeError) as e:
            # JSONDecodeError is a ValueError; so are over-long integer literals
            raise CorruptStateError(f"{ERROR_INVALID_JSON}: {e}") from e
        return cls.from_dict(data)
