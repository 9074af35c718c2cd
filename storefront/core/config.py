# storefront/storefront/core/config.py
from __future__ import annotations
from dataclasses import dataclass
import os
import logging

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Paths:
    ROOT: str = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
    DATA_DIR: str = os.path.join(ROOT, "data")
    PRODUCTS_FEED: str = os.path.join(DATA_DIR, "products.json")


# Pricing
SHIPPING_COST: float = float(os.getenv("SHIPPING_COST", "20"))

# Messaging hand-off (wa.me style deep link)
MESSAGING_BASE_URL: str = os.getenv("MESSAGING_BASE_URL", "https://wa.me")
MESSAGING_RECIPIENT: str = os.getenv("MESSAGING_RECIPIENT", "")
# Budget is measured on the raw message, before URL-encoding.
MAX_MESSAGE_LENGTH: int = int(os.getenv("MAX_MESSAGE_LENGTH", "4096"))
ORDER_ID_PREFIX: str = os.getenv("ORDER_ID_PREFIX", "ORD")
# Open the hand-off link on the server host (local kiosk use) instead of returning it.
OPEN_HANDOFF_LOCALLY: bool = os.getenv("OPEN_HANDOFF_LOCALLY", "0").lower() in ("1", "true", "yes")

# Catalog feed: http(s) URL or local path
CATALOG_FEED: str = os.getenv("CATALOG_FEED", Paths.PRODUCTS_FEED)
CATALOG_TIMEOUT_S: float = float(os.getenv("CATALOG_TIMEOUT_S", "10"))

# Sessions
SESSION_TTL_S: int = int(os.getenv("SESSION_TTL_S", "1800"))

# Optional AI product summaries
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_BASE_URL: str = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
SUMMARY_TIMEOUT_S: float = float(os.getenv("SUMMARY_TIMEOUT_S", "8"))

# Global logging (module-level loggers inherit this)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
LOGGER = logging.getLogger("storefront")
