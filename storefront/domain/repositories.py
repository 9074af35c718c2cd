# storefront/storefront/domain/repositories.py
from __future__ import annotations
from typing import List, Optional, Protocol

from storefront.domain.entities import Product


class ProductReadRepo(Protocol):
    def all(self) -> List[Product]: ...

    def by_id(self, product_id: str) -> Optional[Product]: ...
