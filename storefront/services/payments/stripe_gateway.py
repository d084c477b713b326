# storefront/services/payments/stripe_gateway.py
import json
from typing import Any, Dict, List, Mapping, Optional

import stripe

from storefront.data.models.order import OrderStatus
from storefront.domain.errors import InvalidArgument, InvalidSignature, UpstreamFailure
from storefront.services.payments.events import (
    CheckoutRequest,
    CheckoutSession,
    PaymentEvent,
    PaymentIntentHandle,
    PaymentProviderAdapter,
    dig,
)
from storefront.utils.settings import (
    STRIPE_SECRET_KEY,
    STRIPE_WEBHOOK_SECRET,
    STRIPE_PAYMENT_METHODS,
    STRIPE_CURRENCY,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PROVIDER = "stripe"

_PAID_EVENTS = (
    "payment_intent.succeeded",
    "checkout.session.completed",
    "checkout.session.async_payment_succeeded",
)
_CANCELED_EVENTS = (
    "payment_intent.payment_failed",
    "charge.failed",
    "checkout.session.expired",
    "checkout.session.async_payment_failed",
)


def map_stripe_event(event_type: str) -> Optional[str]:
    t = (event_type or "").lower()
    if any(name in t for name in _PAID_EVENTS):
        return OrderStatus.paid.value
    if any(name in t for name in _CANCELED_EVENTS):
        return OrderStatus.canceled.value
    return None


class StripeGateway:
    def __init__(self, secret_key: str | None = None, currency: str | None = None,
                 payment_methods: List[str] | None = None):
        self.secret_key = secret_key if secret_key is not None else STRIPE_SECRET_KEY
        self.currency = currency or STRIPE_CURRENCY
        self.payment_methods = payment_methods or STRIPE_PAYMENT_METHODS or ["card"]

    def _api_key(self) -> str:
        if not self.secret_key:
            raise UpstreamFailure("STRIPE_SECRET_KEY is not configured")
        return self.secret_key

    def create_checkout(self, req: CheckoutRequest) -> CheckoutSession:
        api_key = self._api_key()
        logger.info(f"Stripe checkout session for order {req.order_id}")
        try:
            session = stripe.checkout.Session.create(
                api_key=api_key,
                mode="payment",
                payment_method_types=self.payment_methods,
                line_items=[
                    {
                        "quantity": it.quantity,
                        "price_data": {
                            "currency": self.currency,
                            "unit_amount": it.unit_price_cents,
                            "product_data": {"name": it.name},
                        },
                    }
                    for it in req.items
                ],
                customer_email=req.customer_email or None,
                success_url=req.return_url,
                cancel_url=req.return_url,
                metadata={"order_id": req.order_id},
                client_reference_id=req.order_id,
                payment_intent_data={"metadata": {"order_id": req.order_id}},
            )
        except stripe.StripeError as e:
            raise UpstreamFailure(f"Stripe error: {e.user_message or e}") from e
        return CheckoutSession(payment_link=session.url, gateway_order_id=session.id)

    def create_payment_intent(self, order_id: str, amount_cents: int,
                              customer_email: Optional[str] = None) -> PaymentIntentHandle:
        api_key = self._api_key()
        params: Dict[str, Any] = {
            "amount": amount_cents,
            "currency": self.currency,
            "metadata": {"order_id": order_id},
            "automatic_payment_methods": {"enabled": True},
        }
        if customer_email:
            params["receipt_email"] = customer_email

        logger.info(f"Stripe payment intent for order {order_id} ({amount_cents})")
        try:
            intent = stripe.PaymentIntent.create(api_key=api_key, **params)
        except stripe.StripeError as e:
            raise UpstreamFailure(f"Stripe error: {e.user_message or e}") from e
        return PaymentIntentHandle(id=intent.id, client_secret=intent.client_secret)

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntentHandle:
        api_key = self._api_key()
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=api_key)
        except stripe.StripeError as e:
            raise UpstreamFailure(f"Stripe error: {e.user_message or e}") from e
        return PaymentIntentHandle(id=intent.id, client_secret=intent.client_secret)


def _shipping_patch(session: Mapping[str, Any]) -> Dict[str, str]:
    shipping = session.get("shipping_details") or dig(session, "collected_information", "shipping_details") or {}
    address = shipping.get("address") or {}
    patch: Dict[str, str] = {}

    # only present values overwrite what the order already has
    if shipping.get("name"):
        patch["shipping_name"] = shipping["name"]
    phone = shipping.get("phone") or dig(session, "customer_details", "phone")
    if phone:
        patch["shipping_phone"] = phone
    street = ", ".join(p for p in (address.get("line1"), address.get("line2")) if p)
    if street:
        patch["shipping_address"] = street
    if address.get("city"):
        patch["shipping_city"] = address["city"]
    if address.get("state"):
        patch["shipping_state"] = address["state"]
    if address.get("postal_code"):
        patch["shipping_zip"] = address["postal_code"]
    return patch


class StripeWebhookAdapter(PaymentProviderAdapter):
    provider = PROVIDER

    def __init__(self, webhook_secret: str | None = None,
                 tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE):
        self.webhook_secret = webhook_secret if webhook_secret is not None else STRIPE_WEBHOOK_SECRET
        self.tolerance = tolerance

    def parse(self, body: bytes, headers: Mapping[str, str],
              query: Mapping[str, str]) -> PaymentEvent | None:
        if not self.webhook_secret:
            raise InvalidSignature("STRIPE_WEBHOOK_SECRET is not configured")

        signature = headers.get("stripe-signature")
        if not signature:
            raise InvalidSignature("Missing signature")

        try:
            payload = body.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("Rejected stripe webhook: body is not utf-8")
            raise InvalidSignature("Invalid signature") from e
        try:
            stripe.WebhookSignature.verify_header(payload, signature, self.webhook_secret, self.tolerance)
        except stripe.SignatureVerificationError as e:
            logger.warning(f"Rejected stripe webhook: {e}")
            raise InvalidSignature("Invalid signature") from e

        try:
            event = json.loads(payload)
        except ValueError as e:
            raise InvalidArgument("Webhook body is not valid JSON") from e

        event_type = str(event.get("type") or "")
        obj = dig(event, "data", "object") or {}

        order_id = dig(obj, "metadata", "order_id") or obj.get("client_reference_id")
        if not order_id:
            logger.info(f"Stripe event {event_type!r} without order reference, ignored")
            return None

        shipping = _shipping_patch(obj) if event_type == "checkout.session.completed" else {}

        return PaymentEvent(
            provider=PROVIDER,
            order_id=str(order_id),
            external_order_ref=obj.get("id"),
            status=map_stripe_event(event_type),
            shipping=shipping,
        )
