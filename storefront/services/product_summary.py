# storefront/storefront/services/product_summary.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from storefront.core import config
from storefront.domain.entities import Product

log = logging.getLogger("services.product_summary")

_PROMPT = (
    "Escribe un resumen breve y atractivo (máximo 2 frases) para el producto "
    "'{name}' de la categoría '{category}'. Descripción: {description}"
)


class ProductSummaryService:
    """
    Optional generative product blurb (Gemini REST API).

    Every failure is swallowed into None: summaries are an enrichment and must
    never block browsing, the cart or checkout.
    """

    def __init__(
        self,
        api_key: str,
        model: str = config.GEMINI_MODEL,
        base_url: str = config.GEMINI_BASE_URL,
        timeout_s: float = config.SUMMARY_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._cache: Dict[str, str] = {}

    @classmethod
    def from_env(cls) -> Optional["ProductSummaryService"]:
        """Create from GEMINI_API_KEY; None disables the feature."""
        if config.GEMINI_API_KEY:
            return cls(config.GEMINI_API_KEY)
        log.warning("GEMINI_API_KEY not set. AI summaries are disabled.")
        return None

    def summarize(self, product: Product) -> Optional[str]:
        cached = self._cache.get(product.id)
        if cached is not None:
            return cached

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {
            "contents": [
                {"parts": [{"text": _PROMPT.format(
                    name=product.name,
                    category=product.category,
                    description=product.description,
                )}]}
            ]
        }
        try:
            r = self._session.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout_s,
            )
            r.raise_for_status()
            text = self._extract_text(r.json())
        except (requests.RequestException, ValueError) as e:
            log.warning("summary for %s failed: %s", product.id, e)
            return None

        if text:
            self._cache[product.id] = text
        return text

    @staticmethod
    def _extract_text(data: Any) -> Optional[str]:
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            return None
        text = "".join(str(p.get("text", "")) for p in parts if isinstance(p, dict)).strip()
        return text or None
