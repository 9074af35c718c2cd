# storefront/storefront/application/catalog_search.py
from __future__ import annotations

import re
import unicodedata
from typing import List, Sequence

from storefront.domain.entities import Product


def normalize_text(text: str) -> str:
    """Lowercase, accent-free, single-spaced text for matching ("Café" == "cafe")."""
    text = (text or "").strip().lower()
    text = unicodedata.normalize("NFD", text)
    text = "".join(ch for ch in text if unicodedata.category(ch) != "Mn")
    return re.sub(r"\s+", " ", text)


def filter_products(products: Sequence[Product], query: str) -> List[Product]:
    q = normalize_text(query)
    if not q:
        return list(products)
    return [
        p for p in products
        if q in normalize_text(p.name)
        or q in normalize_text(p.category)
        or q in normalize_text(p.description)
    ]
