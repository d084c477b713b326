import pytest

from storefront.domain.errors import InvalidSignature
from storefront.services.payments.events import PaymentEvent
from storefront.services.payments.pagarme import map_pagarme_status
from storefront.services.payments.reconciler import OrderStatusReconciler
from storefront.services.payments.stripe_gateway import StripeWebhookAdapter, map_stripe_event


@pytest.mark.parametrize("value,expected", [
    ("paid", "paid"),
    ("APPROVED", "paid"),
    ("captured", "paid"),
    ("refused", "canceled"),
    ("failed", "canceled"),
    ("pending", None),
    (None, None),
])
def test_map_pagarme_status(value, expected):
    assert map_pagarme_status(value) == expected


@pytest.mark.parametrize("event_type,expected", [
    ("payment_intent.succeeded", "paid"),
    ("checkout.session.async_payment_succeeded", "paid"),
    ("checkout.session.expired", "canceled"),
    ("charge.failed", "canceled"),
    ("customer.created", None),
])
def test_map_stripe_event(event_type, expected):
    assert map_stripe_event(event_type) == expected


def test_stripe_adapter_without_secret_rejects():
    with pytest.raises(InvalidSignature):
        StripeWebhookAdapter(webhook_secret="").parse(b"{}", {"stripe-signature": "t=1,v1=x"}, {})


def test_reconciler_patch_only_carries_present_values():
    event = PaymentEvent(provider="stripe", order_id="o1", shipping={"shipping_city": "Porto Alegre"})
    assert OrderStatusReconciler.build_patch(event) == {
        "gateway_provider": "stripe",
        "shipping_city": "Porto Alegre",
    }
