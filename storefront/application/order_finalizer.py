# storefront/storefront/application/order_finalizer.py
from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Any, Callable, Iterable, Optional
from urllib.parse import quote

from storefront.application import response_templates as rt
from storefront.core import config
from storefront.domain.entities import CartItem, DeliveryDetails, HandOff, OrderDetails

log = logging.getLogger("app.order_finalizer")

Clock = Callable[[], datetime]
Opener = Callable[[str], Any]


def generate_order_id(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    prefix: str = config.ORDER_ID_PREFIX,
) -> str:
    """
    PREFIX-YYYYMMDD-HHMMSS-NNNN with NNNN uniform in [1000, 9999].
    Two ids in the same second only differ by the random suffix (best-effort uniqueness).
    """
    now = now or datetime.now()
    suffix = (rng or random).randint(1000, 9999)
    return f"{prefix}-{now:%Y%m%d}-{now:%H%M%S}-{suffix}"


def render_manifest(cart: Iterable[CartItem]) -> str:
    return "\n".join(f"{item.product.id},{item.quantity}" for item in cart)


def render_message(order: OrderDetails) -> str:
    raw = "\n".join(
        [
            f"[PEDIDO:{order.id}]",
            f"Recibe: {order.recipient_name}",
            f"Dirección: {order.delivery_address}",
            f"Fecha: {order.delivery_date.isoformat()}",
            f"Hora: {order.delivery_time}",
            "--PRODUCTOS--",
            render_manifest(order.cart),
            "--FIN PRODUCTOS--",
        ]
    )
    # one field per line; multi-line addresses lose their indentation and blank lines
    return "\n".join(line.lstrip() for line in raw.strip().splitlines() if line.strip())


class OrderFinalizer:
    """Order snapshot -> messaging payload -> deep link hand-off."""

    def __init__(
        self,
        recipient: str = config.MESSAGING_RECIPIENT,
        base_url: str = config.MESSAGING_BASE_URL,
        max_length: int = config.MAX_MESSAGE_LENGTH,
        opener: Optional[Opener] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.recipient = recipient
        self.base_url = base_url.rstrip("/")
        self.max_length = max_length
        self.opener = opener
        self.clock = clock or datetime.now
        self.rng = rng

    def finalize(
        self,
        details: DeliveryDetails,
        cart: Iterable[CartItem],
        subtotal: float,
        shipping_cost: float,
    ) -> OrderDetails:
        order = OrderDetails(
            id=generate_order_id(now=self.clock(), rng=self.rng),
            cart=tuple(CartItem(product=i.product, quantity=i.quantity) for i in cart),
            recipient_name=details.recipient_name,
            delivery_address=details.delivery_address,
            delivery_date=details.delivery_date,
            delivery_time=details.delivery_time,
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            total=subtotal + shipping_cost,
        )
        log.info("order finalized id=%s lines=%d total=%.2f", order.id, len(order.cart), order.total)
        return order

    def build_url(self, message: str) -> str:
        return f"{self.base_url}/{self.recipient}?text={quote(message, safe='')}"

    def hand_off(self, order: OrderDetails) -> HandOff:
        message = render_message(order)
        if len(message) > self.max_length:
            log.warning(
                "hand-off skipped for %s: message has %d chars (max %d)",
                order.id, len(message), self.max_length,
            )
            return HandOff(message=message, warning=rt.message_too_long_warning())

        url = self.build_url(message)
        if self.opener is None:
            return HandOff(message=message, url=url, dispatched=True)

        try:
            self.opener(url)
        except Exception:
            log.exception("opening hand-off url failed for %s", order.id)
            return HandOff(message=message, url=url, dispatched=False, warning=rt.handoff_failed_warning())
        return HandOff(message=message, url=url, dispatched=True)
