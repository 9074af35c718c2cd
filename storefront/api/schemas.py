# =========================
# FILE: storefront/storefront/api/schemas.py
# =========================
from __future__ import annotations

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ProductOut(BaseModel):
    id: str
    name: str
    description: str = ""
    category: str = ""
    price: float = Field(ge=0.0)
    stock: int = Field(ge=0)
    image: Optional[str] = None
    low_stock: bool = False


class ProductListResponse(BaseModel):
    products: List[ProductOut]
    count: int
    error: Optional[str] = None
    message: Optional[str] = None


class ProductSummaryResponse(BaseModel):
    product_id: str
    summary: str


class AddItemRequest(BaseModel):
    product_id: str = Field(..., description="Catalog product id", examples=["7501000111206"])


class SetQuantityRequest(BaseModel):
    quantity: int = Field(..., description="New quantity; 0 or less removes the line")


class DeliveryRequest(BaseModel):
    recipient_name: str = ""
    delivery_address: str = ""
    delivery_date: str = Field(default="", description="YYYY-MM-DD", examples=["2026-10-20"])
    delivery_time: str = Field(default="", examples=["09:00 - 11:00"])


class SessionResponse(BaseModel):
    session_id: str
    step: str
    cart: List[Dict[str, Any]]
    item_count: int
    subtotal: float
    shipping_cost: float
    total: float
    order: Optional[Dict[str, Any]] = None
    hand_off: Optional[Dict[str, Any]] = None
    form_errors: List[str] = Field(default_factory=list)


class DeliveryOptionsResponse(BaseModel):
    time_slots: List[str]
    earliest_date: str
