# storefront/storefront/core/errors.py
from __future__ import annotations

from typing import List, Optional


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    pass


class CatalogLoadError(StorefrontError):
    """Raised when the product feed cannot be fetched or parsed."""

    def __init__(self, source: str, reason: Optional[str] = None):
        self.source = source
        self.reason = reason
        msg = f"Could not load products from {source}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ProductNotFoundError(StorefrontError, LookupError):
    """Raised when a product id is not in the catalog."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class DeliveryValidationError(StorefrontError, ValueError):
    """Raised when delivery details are incomplete or invalid."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid delivery details")
