from __future__ import annotations

import logging
import webbrowser

import uvicorn
from fastapi import FastAPI
from dotenv import load_dotenv
load_dotenv()
from storefront.api.routes import router
from storefront.core import config

from storefront.application.cart_engine import Cart
from storefront.application.checkout import CheckoutStateMachine
from storefront.application.order_finalizer import OrderFinalizer
from storefront.infrastructure.feed_repository import FeedProductRepository
from storefront.infrastructure.session_store import InMemorySessionStore
from storefront.services.product_summary import ProductSummaryService

log = logging.getLogger("app")
app = FastAPI(title="Storefront")
app.include_router(router)


def _new_checkout() -> CheckoutStateMachine:
    # the browser opens the hand-off url itself unless OPEN_HANDOFF_LOCALLY is set
    opener = webbrowser.open if config.OPEN_HANDOFF_LOCALLY else None
    return CheckoutStateMachine(
        cart=Cart(shipping_cost=config.SHIPPING_COST),
        finalizer=OrderFinalizer(opener=opener),
    )


@app.on_event("startup")
async def on_startup() -> None:
    catalog = FeedProductRepository(source=config.CATALOG_FEED, timeout_s=config.CATALOG_TIMEOUT_S)
    await catalog.load_async()
    if not config.MESSAGING_RECIPIENT:
        log.warning("MESSAGING_RECIPIENT is empty; hand-off links will have no recipient")

    # DI for routes.py
    app.state.catalog = catalog
    app.state.sessions = InMemorySessionStore(factory=_new_checkout, ttl_seconds=config.SESSION_TTL_S)

    # optional
    app.state.summary_service = ProductSummaryService.from_env()

    log.info("Startup complete (%d products)", len(catalog.all()))


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8081, reload=False)
