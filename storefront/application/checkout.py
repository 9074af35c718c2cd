# storefront/storefront/application/checkout.py
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from storefront.application.cart_engine import Cart
from storefront.application.delivery import DeliveryForm, format_delivery_date
from storefront.application.order_finalizer import OrderFinalizer
from storefront.core.errors import DeliveryValidationError
from storefront.domain.entities import HandOff, OrderDetails, Product, Step

log = logging.getLogger("app.checkout")

_CART_EDITABLE = (Step.SELECTION, Step.SUMMARY)
_BACK = {Step.SUMMARY: Step.SELECTION, Step.DELIVERY: Step.SUMMARY}


class CheckoutStateMachine:
    """
    selection -> summary -> delivery -> confirmation

    Each trigger returns the resulting step. A trigger whose guard fails leaves
    the state untouched; that is a normal outcome, not an error.
    """

    def __init__(
        self,
        cart: Optional[Cart] = None,
        finalizer: Optional[OrderFinalizer] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.cart = cart if cart is not None else Cart()
        self.finalizer = finalizer or OrderFinalizer()
        self._today = today or date.today
        self.step: Step = Step.SELECTION
        self.order: Optional[OrderDetails] = None
        self.hand_off: Optional[HandOff] = None
        self.form_errors: List[str] = []

    # ----------------------------
    # Cart edits (selection/summary only)
    # ----------------------------
    def add_item(self, product: Product) -> bool:
        if self.step not in _CART_EDITABLE:
            log.debug("add_item ignored in step=%s", self.step.value)
            return False
        return self.cart.add_item(product)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        if self.step not in _CART_EDITABLE:
            log.debug("set_quantity ignored in step=%s", self.step.value)
            return
        self.cart.set_quantity(product_id, quantity)

    def remove_item(self, product_id: str) -> None:
        if self.step not in _CART_EDITABLE:
            log.debug("remove_item ignored in step=%s", self.step.value)
            return
        self.cart.remove_item(product_id)

    # ----------------------------
    # Transitions
    # ----------------------------
    def proceed_to_summary(self) -> Step:
        if self.step == Step.SELECTION and not self.cart.is_empty:
            return self._move(Step.SUMMARY)
        return self._ignored("proceed_to_summary")

    def proceed_to_delivery(self) -> Step:
        if self.step == Step.SUMMARY and not self.cart.is_empty:
            self.form_errors = []
            return self._move(Step.DELIVERY)
        return self._ignored("proceed_to_delivery")

    def go_back(self) -> Step:
        target = _BACK.get(self.step)
        if target is None:
            return self._ignored("go_back")
        self.form_errors = []
        return self._move(target)

    def finalize_order(self, form: DeliveryForm) -> Step:
        if self.step != Step.DELIVERY or self.cart.is_empty:
            return self._ignored("finalize_order")

        try:
            details = form.to_details(today=self._today())
        except DeliveryValidationError as e:
            self.form_errors = e.errors
            log.info("finalize_order blocked: %s", e.errors)
            return self.step

        self.form_errors = []
        order = self.finalizer.finalize(
            details,
            self.cart.snapshot(),
            subtotal=self.cart.subtotal,
            shipping_cost=self.cart.shipping_cost,
        )
        self.order = order
        # a skipped hand-off still completes the order
        self.hand_off = self.finalizer.hand_off(order)
        self.cart.clear()
        return self._move(Step.CONFIRMATION)

    def start_new_order(self) -> Step:
        if self.step != Step.CONFIRMATION:
            return self._ignored("start_new_order")
        return self._reset()

    def go_home(self) -> Step:
        return self._reset()

    # ----------------------------
    # Views
    # ----------------------------
    def view(self) -> Dict[str, Any]:
        return {
            "step": self.step.value,
            "cart": [item.to_dict() for item in self.cart.items],
            "item_count": self.cart.item_count,
            "subtotal": round(self.cart.subtotal, 2),
            "shipping_cost": round(self.cart.shipping_cost, 2),
            "total": round(self.cart.total, 2),
            "order": self._order_view(),
            "hand_off": self.hand_off.to_dict() if self.hand_off else None,
            "form_errors": list(self.form_errors),
        }

    def _order_view(self) -> Optional[Dict[str, Any]]:
        if self.order is None:
            return None
        data = self.order.to_dict()
        data["delivery_date_label"] = format_delivery_date(self.order.delivery_date)
        return data

    def _reset(self) -> Step:
        self.cart.clear()
        self.order = None
        self.hand_off = None
        self.form_errors = []
        return self._move(Step.SELECTION)

    def _move(self, target: Step) -> Step:
        if target != self.step:
            log.info("step %s -> %s", self.step.value, target.value)
        self.step = target
        return self.step

    def _ignored(self, trigger: str) -> Step:
        log.debug("%s ignored in step=%s (items=%d)", trigger, self.step.value, len(self.cart))
        return self.step
