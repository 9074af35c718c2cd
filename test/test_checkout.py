"""Tests for the checkout state machine."""

import re

from storefront.application.delivery import DeliveryForm
from storefront.domain.entities import Step


def _to_delivery(checkout, product):
    checkout.add_item(product)
    checkout.proceed_to_summary()
    checkout.proceed_to_delivery()
    assert checkout.step == Step.DELIVERY


class TestGuards:
    def test_initial_step_is_selection(self, checkout):
        assert checkout.step == Step.SELECTION
        assert checkout.order is None

    def test_summary_requires_items(self, checkout):
        assert checkout.proceed_to_summary() == Step.SELECTION

    def test_summary_with_items(self, checkout, product_a):
        checkout.add_item(product_a)
        assert checkout.proceed_to_summary() == Step.SUMMARY

    def test_delivery_requires_items(self, checkout, product_a):
        checkout.add_item(product_a)
        checkout.proceed_to_summary()
        checkout.remove_item("A")
        assert checkout.proceed_to_delivery() == Step.SUMMARY

    def test_delivery_only_from_summary(self, checkout, product_a):
        checkout.add_item(product_a)
        assert checkout.proceed_to_delivery() == Step.SELECTION

    def test_back_navigation(self, checkout, product_a):
        _to_delivery(checkout, product_a)
        assert checkout.go_back() == Step.SUMMARY
        assert checkout.go_back() == Step.SELECTION
        assert checkout.go_back() == Step.SELECTION

    def test_cart_locked_during_delivery(self, checkout, product_a, product_b):
        _to_delivery(checkout, product_a)
        assert checkout.add_item(product_b) is False
        checkout.set_quantity("A", 0)
        checkout.remove_item("A")
        assert checkout.cart.item_count == 1

    def test_new_order_only_from_confirmation(self, checkout, product_a):
        checkout.add_item(product_a)
        assert checkout.start_new_order() == Step.SELECTION
        assert checkout.cart.item_count == 1


class TestFinalize:
    def test_finalize_moves_to_confirmation_and_clears_cart(self, checkout, product_a, product_b, delivery_form):
        _to_delivery(checkout, product_a)
        checkout.go_back()
        checkout.set_quantity("A", 3)
        checkout.go_back()
        checkout.add_item(product_b)
        checkout.add_item(product_b)
        checkout.proceed_to_summary()
        checkout.proceed_to_delivery()

        assert checkout.finalize_order(delivery_form) == Step.CONFIRMATION
        assert checkout.cart.item_count == 0

        order = checkout.order
        assert order.subtotal == 38
        assert order.shipping_cost == 20
        assert order.total == 58
        assert [(i.product.id, i.quantity) for i in order.cart] == [("A", 3), ("B", 2)]
        assert order.recipient_name == "Ana López"
        assert re.fullmatch(r"ORD-20261019-140509-\d{4}", order.id)

        assert checkout.hand_off.dispatched is True
        assert checkout.hand_off.url.startswith("https://wa.me/5215512345678?text=")

    def test_incomplete_form_blocks_finalize(self, checkout, product_a, delivery_form):
        _to_delivery(checkout, product_a)
        form = DeliveryForm(recipient_name="Ana", delivery_address="", delivery_date="", delivery_time="")
        assert checkout.finalize_order(form) == Step.DELIVERY
        assert checkout.form_errors
        assert checkout.order is None
        assert checkout.cart.item_count == 1

        assert checkout.finalize_order(delivery_form) == Step.CONFIRMATION
        assert checkout.form_errors == []

    def test_past_date_blocks_finalize(self, checkout, product_a):
        _to_delivery(checkout, product_a)
        form = DeliveryForm("Ana", "Calle 1", "2026-10-18", "09:00 - 11:00")
        assert checkout.finalize_order(form) == Step.DELIVERY

    def test_finalize_outside_delivery_is_ignored(self, checkout, product_a, delivery_form):
        checkout.add_item(product_a)
        assert checkout.finalize_order(delivery_form) == Step.SELECTION
        assert checkout.order is None

    def test_oversized_message_still_confirms(self, checkout, product_a, delivery_form):
        checkout.finalizer.max_length = 50
        _to_delivery(checkout, product_a)
        assert checkout.finalize_order(delivery_form) == Step.CONFIRMATION
        assert checkout.order is not None
        assert checkout.hand_off.dispatched is False
        assert checkout.hand_off.url is None
        assert checkout.hand_off.warning
        assert checkout.cart.is_empty

    def test_order_snapshot_survives_new_cart_activity(self, checkout, product_a, delivery_form):
        _to_delivery(checkout, product_a)
        checkout.finalize_order(delivery_form)
        order = checkout.order
        checkout.start_new_order()
        checkout.add_item(product_a)
        checkout.add_item(product_a)
        assert order.cart[0].quantity == 1

    def test_start_new_order_resets(self, checkout, product_a, delivery_form):
        _to_delivery(checkout, product_a)
        checkout.finalize_order(delivery_form)
        assert checkout.start_new_order() == Step.SELECTION
        assert checkout.order is None
        assert checkout.hand_off is None


def test_go_home_from_anywhere(checkout, product_a, delivery_form):
    _to_delivery(checkout, product_a)
    assert checkout.go_home() == Step.SELECTION
    assert checkout.cart.is_empty
    assert checkout.order is None


def test_view_reports_totals(checkout, product_a):
    checkout.add_item(product_a)
    checkout.add_item(product_a)
    view = checkout.view()
    assert view["step"] == "selection"
    assert view["item_count"] == 2
    assert view["subtotal"] == 20
    assert view["total"] == 40
    assert view["order"] is None


def test_view_labels_delivery_date(checkout, product_a, delivery_form):
    _to_delivery(checkout, product_a)
    checkout.finalize_order(delivery_form)
    order = checkout.view()["order"]
    assert order["delivery_date"] == "2026-10-20"
    assert order["delivery_date_label"] == "martes, 20 de octubre de 2026"
