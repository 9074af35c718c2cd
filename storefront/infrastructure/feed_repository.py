# storefront/storefront/infrastructure/feed_repository.py
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import json
import logging
import math

import anyio
import requests

from storefront.core import config
from storefront.core.errors import CatalogLoadError
from storefront.domain.entities import Product
from storefront.domain.repositories import ProductReadRepo

log = logging.getLogger("infra.feed_repo")

# Spanish feed columns first, plain English keys as fallback.
_KEYS: Dict[str, tuple] = {
    "id": ("Código de barras", "id", "sku"),
    "name": ("Nombre", "name"),
    "description": ("Descripción", "description"),
    "price": ("Precio", "price"),
    "stock": ("Stock", "stock"),
    "category": ("Categoría", "category"),
    "image": ("Imagen", "image"),
}


def _pick(x: Dict[str, Any], field: str) -> Any:
    for key in _KEYS[field]:
        v = x.get(key)
        if v is not None:
            return v
    return None


def _as_text(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def _as_number(v: Any) -> float:
    try:
        n = float(v)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(n) or math.isinf(n):
        return 0.0
    return max(0.0, n)


def parse_product(x: Dict[str, Any]) -> Optional[Product]:
    """Record -> Product, or None when the record has no usable id."""
    if not isinstance(x, dict):
        return None
    pid = _as_text(_pick(x, "id"))
    if not pid:
        return None
    image = _pick(x, "image")
    if isinstance(image, list):
        image = image[0] if image else None
    return Product(
        id=pid,
        name=_as_text(_pick(x, "name")),
        description=_as_text(_pick(x, "description")),
        category=_as_text(_pick(x, "category")),
        price=_as_number(_pick(x, "price")),
        stock=int(_as_number(_pick(x, "stock"))),
        image=_as_text(image) or None,
    )


def normalize_products(records: Iterable[Any]) -> List[Product]:
    products: List[Product] = []
    seen: set[str] = set()
    skipped = 0
    for rec in records:
        p = parse_product(rec)
        if p is None:
            skipped += 1
            continue
        if p.id in seen:
            log.debug("duplicate product id %s ignored", p.id)
            continue
        seen.add(p.id)
        products.append(p)
    if skipped:
        log.warning("normalize_products: skipped %d records without id", skipped)
    return products


class FeedProductRepository(ProductReadRepo):
    """
    Read-only catalog backed by a static JSON feed (http(s) URL or local file).
    A failed load leaves the catalog empty and records the reason in `error`.
    """

    def __init__(
        self,
        source: str = config.CATALOG_FEED,
        timeout_s: float = config.CATALOG_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.source = source
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._items: List[Product] = []
        self._by_id: Dict[str, Product] = {}
        self.error: Optional[str] = None
        self.loaded = False

    def fetch(self) -> List[Product]:
        """Fetch and normalize the feed without touching repository state."""
        return normalize_products(self._read_records())

    def load(self) -> List[Product]:
        try:
            products = self.fetch()
        except CatalogLoadError as e:
            self._fail(e)
            return []
        self._set(products)
        return products

    async def load_async(self) -> List[Product]:
        # a cancelled load raises out of the await and never reaches _set/_fail
        try:
            products = await anyio.to_thread.run_sync(self.fetch, abandon_on_cancel=True)
        except CatalogLoadError as e:
            self._fail(e)
            return []
        self._set(products)
        return products

    def all(self) -> List[Product]:
        return list(self._items)

    def by_id(self, product_id: str) -> Product | None:
        return self._by_id.get(str(product_id))

    def _read_records(self) -> List[Any]:
        src = self.source
        if src.startswith(("http://", "https://")):
            try:
                r = self._session.get(src, timeout=self.timeout_s)
            except requests.RequestException as e:
                raise CatalogLoadError(src, str(e)) from e
            if not r.ok:
                raise CatalogLoadError(src, f"HTTP {r.status_code} {r.reason}")
            try:
                data = r.json()
            except ValueError as e:
                raise CatalogLoadError(src, "invalid JSON") from e
        else:
            try:
                with open(src, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except OSError as e:
                raise CatalogLoadError(src, str(e)) from e
            except ValueError as e:
                raise CatalogLoadError(src, "invalid JSON") from e

        if not isinstance(data, list):
            raise CatalogLoadError(src, "expected a JSON array of products")
        return data

    def _set(self, products: List[Product]) -> None:
        self._items = products
        self._by_id = {p.id: p for p in products}
        self.error = None
        self.loaded = True
        log.info("FeedProductRepository loaded %d products from %s", len(products), self.source)

    def _fail(self, e: CatalogLoadError) -> None:
        self._items = []
        self._by_id = {}
        self.error = e.reason or str(e)
        self.loaded = True
        log.warning("catalog load failed: %s", e)
