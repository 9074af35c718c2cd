# storefront/storefront/api/routes.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

import anyio
from fastapi import APIRouter, Depends, HTTPException, Request

from storefront.api.schemas import (
    AddItemRequest,
    DeliveryOptionsResponse,
    DeliveryRequest,
    ProductListResponse,
    ProductSummaryResponse,
    SessionResponse,
    SetQuantityRequest,
)
from storefront.application import response_templates as rt
from storefront.application.catalog_search import filter_products
from storefront.application.delivery import TIME_SLOTS, DeliveryForm
from storefront.core.errors import ProductNotFoundError
from storefront.infrastructure.session_store import ShopperSession

log = logging.getLogger("api.routes")
router = APIRouter()


# -------------------------
# Dependencies via app.state
# -------------------------
def get_catalog(request: Request):
    catalog = getattr(request.app.state, "catalog", None)
    if catalog is None:
        raise RuntimeError("catalog not initialized. Check app startup wiring.")
    return catalog


def get_sessions(request: Request):
    sessions = getattr(request.app.state, "sessions", None)
    if sessions is None:
        raise RuntimeError("sessions not initialized. Check app startup wiring.")
    return sessions


def get_summary_service(request: Request):
    return getattr(request.app.state, "summary_service", None)


def get_session(session_id: str, sessions=Depends(get_sessions)) -> ShopperSession:
    if not session_id.strip():
        raise HTTPException(status_code=400, detail="session_id is required")
    return sessions.get_or_create(session_id)


def _session_view(st: ShopperSession, sessions) -> dict:
    sessions.save(st)
    return {"session_id": st.session_id, **st.checkout.view()}


# -------------------------
# Catalog
# -------------------------
@router.get("/products", response_model=ProductListResponse)
def list_products(q: Optional[str] = None, catalog=Depends(get_catalog)) -> Any:
    products = filter_products(catalog.all(), q or "")
    message = None
    if catalog.error:
        message = rt.catalog_error(catalog.error)
    elif not products:
        message = rt.no_products_found()
    return {
        "products": [p.to_dict() for p in products],
        "count": len(products),
        "error": catalog.error,
        "message": message,
    }


@router.post("/products/reload", response_model=ProductListResponse)
async def reload_products(catalog=Depends(get_catalog)) -> Any:
    products = await catalog.load_async()
    return {
        "products": [p.to_dict() for p in products],
        "count": len(products),
        "error": catalog.error,
        "message": rt.catalog_error(catalog.error) if catalog.error else None,
    }


@router.get("/products/{product_id}/summary", response_model=ProductSummaryResponse)
async def product_summary(product_id: str, catalog=Depends(get_catalog), service=Depends(get_summary_service)) -> Any:
    product = catalog.by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=str(ProductNotFoundError(product_id)))
    if service is None:
        raise HTTPException(status_code=503, detail="AI summaries are disabled")

    summary = await anyio.to_thread.run_sync(service.summarize, product)
    if not summary:
        raise HTTPException(status_code=503, detail="Summary unavailable")
    return {"product_id": product.id, "summary": summary}


@router.get("/delivery/options", response_model=DeliveryOptionsResponse)
def delivery_options() -> Any:
    return {"time_slots": TIME_SLOTS, "earliest_date": date.today().isoformat()}


# -------------------------
# Session: cart
# -------------------------
@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_state(st: ShopperSession = Depends(get_session), sessions=Depends(get_sessions)) -> Any:
    with st.lock:
        return _session_view(st, sessions)


@router.post("/sessions/{session_id}/cart/items", response_model=SessionResponse)
def add_item(
    req: AddItemRequest,
    st: ShopperSession = Depends(get_session),
    sessions=Depends(get_sessions),
    catalog=Depends(get_catalog),
) -> Any:
    try:
        product = catalog.by_id(req.product_id)
        if product is None:
            raise ProductNotFoundError(req.product_id)
        with st.lock:
            st.checkout.add_item(product)
            return _session_view(st, sessions)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/sessions/{session_id}/cart/items/{product_id}", response_model=SessionResponse)
def set_quantity(
    product_id: str,
    req: SetQuantityRequest,
    st: ShopperSession = Depends(get_session),
    sessions=Depends(get_sessions),
) -> Any:
    with st.lock:
        st.checkout.set_quantity(product_id, req.quantity)
        return _session_view(st, sessions)


@router.delete("/sessions/{session_id}/cart/items/{product_id}", response_model=SessionResponse)
def remove_item(product_id: str, st: ShopperSession = Depends(get_session), sessions=Depends(get_sessions)) -> Any:
    with st.lock:
        st.checkout.remove_item(product_id)
        return _session_view(st, sessions)


# -------------------------
# Session: checkout steps
# -------------------------
@router.post("/sessions/{session_id}/checkout/summary", response_model=SessionResponse)
def proceed_to_summary(st: ShopperSession = Depends(get_session), sessions=Depends(get_sessions)) -> Any:
    with st.lock:
        st.checkout.proceed_to_summary()
        return _session_view(st, sessions)


@router.post("/sessions/{session_id}/checkout/delivery", response_model=SessionResponse)
def proceed_to_delivery(st: ShopperSession = Depends(get_session), sessions=Depends(get_sessions)) -> Any:
    with st.lock:
        st.checkout.proceed_to_delivery()
        return _session_view(st, sessions)


@router.post("/sessions/{session_id}/checkout/back", response_model=SessionResponse)
def go_back(st: ShopperSession = Depends(get_session), sessions=Depends(get_sessions)) -> Any:
    with st.lock:
        st.checkout.go_back()
        return _session_view(st, sessions)


@router.post("/sessions/{session_id}/checkout/finalize", response_model=SessionResponse)
def finalize_order(
    req: DeliveryRequest,
    st: ShopperSession = Depends(get_session),
    sessions=Depends(get_sessions),
) -> Any:
    form = DeliveryForm(
        recipient_name=req.recipient_name,
        delivery_address=req.delivery_address,
        delivery_date=req.delivery_date,
        delivery_time=req.delivery_time,
    )
    try:
        with st.lock:
            st.checkout.finalize_order(form)
            return _session_view(st, sessions)
    except Exception as e:
        log.exception("Processing /checkout/finalize error")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/sessions/{session_id}/checkout/new", response_model=SessionResponse)
def start_new_order(st: ShopperSession = Depends(get_session), sessions=Depends(get_sessions)) -> Any:
    with st.lock:
        st.checkout.start_new_order()
        return _session_view(st, sessions)


@router.post("/sessions/{session_id}/home", response_model=SessionResponse)
def go_home(st: ShopperSession = Depends(get_session), sessions=Depends(get_sessions)) -> Any:
    with st.lock:
        st.checkout.go_home()
        return _session_view(st, sessions)
