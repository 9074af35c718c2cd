# storefront/storefront/domain/entities.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

LOW_STOCK_THRESHOLD = 10


class Step(str, Enum):
    SELECTION = "selection"
    SUMMARY = "summary"
    DELIVERY = "delivery"
    CONFIRMATION = "confirmation"


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    description: str
    category: str
    price: float  # currency-agnostic unit
    stock: int
    image: str | None = None

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def low_stock(self) -> bool:
        return 0 < self.stock <= LOW_STOCK_THRESHOLD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "price": self.price,
            "stock": self.stock,
            "image": self.image,
            "low_stock": self.low_stock,
        }


@dataclass
class CartItem:
    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product": self.product.to_dict(),
            "quantity": self.quantity,
            "line_total": round(self.line_total, 2),
        }


@dataclass(frozen=True)
class DeliveryDetails:
    recipient_name: str
    delivery_address: str
    delivery_date: date
    delivery_time: str  # delivery window label, e.g. "09:00 - 11:00"


@dataclass(frozen=True)
class OrderDetails:
    id: str
    cart: Tuple[CartItem, ...]
    recipient_name: str
    delivery_address: str
    delivery_date: date
    delivery_time: str
    subtotal: float
    shipping_cost: float
    total: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "cart": [item.to_dict() for item in self.cart],
            "recipient_name": self.recipient_name,
            "delivery_address": self.delivery_address,
            "delivery_date": self.delivery_date.isoformat(),
            "delivery_time": self.delivery_time,
            "subtotal": round(self.subtotal, 2),
            "shipping_cost": round(self.shipping_cost, 2),
            "total": round(self.total, 2),
        }


@dataclass(frozen=True)
class HandOff:
    """
    Outcome of passing a finalized order to the messaging channel.

    `dispatched` is True once the deep link has left the server: opened by the
    configured opener, or, with no opener, returned in `url` for the client to open.
    """
    message: str
    url: Optional[str] = None
    dispatched: bool = False
    warning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "url": self.url,
            "dispatched": self.dispatched,
            "warning": self.warning,
        }
