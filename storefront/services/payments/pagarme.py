# storefront/services/payments/pagarme.py
import base64
import hmac
import json
from typing import Any, Mapping, Optional

import requests
from requests import RequestException

from storefront.data.models.order import OrderStatus
from storefront.domain.errors import InvalidArgument, Unauthorized, UpstreamFailure
from storefront.services.payments.events import (
    CheckoutRequest,
    CheckoutSession,
    PaymentEvent,
    PaymentProviderAdapter,
    dig,
)
from storefront.utils.settings import (
    PAGARME_API_BASE,
    PAGARME_SECRET_KEY,
    PAGARME_CHECKOUT_PATH,
    PAGARME_WEBHOOK_TOKEN,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PROVIDER = "pagarme"

_PAID = {"paid", "approved", "authorized", "captured"}
_CANCELED = {"canceled", "failed", "refused"}


def map_pagarme_status(value: Any) -> Optional[str]:
    s = str(value or "").lower()
    if s in _PAID:
        return OrderStatus.paid.value
    if s in _CANCELED:
        return OrderStatus.canceled.value
    return None


class PagarmeGateway:
    """Hosted checkout (pix, card, boleto) on the Pagar.me core API."""

    def __init__(self, api_base: str | None = None, secret_key: str | None = None,
                 checkout_path: str | None = None, timeout: int = 10):
        self.api_base = (api_base or PAGARME_API_BASE).rstrip("/")
        self.secret_key = secret_key if secret_key is not None else PAGARME_SECRET_KEY
        self.checkout_path = checkout_path or PAGARME_CHECKOUT_PATH
        self.timeout = timeout

    def _auth_header(self) -> str:
        if not self.secret_key:
            raise UpstreamFailure("PAGARME_SECRET_KEY is not configured")
        token = base64.b64encode(f"{self.secret_key}:".encode()).decode()
        return f"Basic {token}"

    @staticmethod
    def _pick_link(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        return (
            data.get("checkout_url")
            or data.get("url")
            or data.get("payment_url")
            or data.get("payment_link")
            or dig(data, "checkout", "url")
        )

    @staticmethod
    def _pick_id(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        return data.get("id") or data.get("checkout_id") or data.get("order_id")

    def create_checkout(self, req: CheckoutRequest) -> CheckoutSession:
        payload = {
            "items": [
                {"amount": it.unit_price_cents, "description": it.name, "quantity": it.quantity}
                for it in req.items
            ],
            "metadata": {"order_id": req.order_id},
            "customer": {
                "name": req.customer_name or "Cliente Solid Choice",
                "email": req.customer_email,
            },
            "payment_methods": ["pix", "credit_card", "boleto"],
            "success_url": req.return_url,
            "cancel_url": req.return_url,
        }
        url = f"{self.api_base}{self.checkout_path}"
        logger.info(f"Pagar.me POST {url} for order {req.order_id}")

        # not retried, a repeated POST could open a second checkout
        try:
            resp = requests.post(
                url,
                json=payload,
                headers={"Authorization": self._auth_header()},
                timeout=self.timeout,
            )
        except RequestException as e:
            raise UpstreamFailure(f"Pagar.me unreachable: {e}") from e

        try:
            data = resp.json() if resp.text else None
        except ValueError:
            data = {"raw": resp.text}

        if not resp.ok:
            message = data.get("message") if isinstance(data, dict) else None
            raise UpstreamFailure(message or f"Pagar.me error: {resp.status_code}")

        return CheckoutSession(payment_link=self._pick_link(data), gateway_order_id=self._pick_id(data))


class PagarmeWebhookAdapter(PaymentProviderAdapter):
    provider = PROVIDER

    def __init__(self, expected_token: str | None = None):
        self.expected_token = expected_token if expected_token is not None else PAGARME_WEBHOOK_TOKEN

    def parse(self, body: bytes, headers: Mapping[str, str],
              query: Mapping[str, str]) -> PaymentEvent | None:
        if self.expected_token:
            token = query.get("token") or ""
            if not hmac.compare_digest(token.encode(), self.expected_token.encode()):
                raise Unauthorized("Invalid webhook token")

        try:
            payload = json.loads(body) if body else {}
        except ValueError as e:
            raise InvalidArgument("Webhook body is not valid JSON") from e
        if not isinstance(payload, dict):
            raise InvalidArgument("Webhook body must be a JSON object")

        event_type = payload.get("type") or payload.get("event") or dig(payload, "data", "type") or ""
        data = payload.get("data") or payload.get("object") or payload
        if not isinstance(data, dict):
            data = {}

        external_status = (
            data.get("status") or dig(data, "charge", "status") or dig(data, "order", "status")
        )
        status = map_pagarme_status(external_status)
        if status is None and isinstance(event_type, str) and "paid" in event_type:
            status = OrderStatus.paid.value

        order_id = dig(data, "metadata", "order_id") or dig(data, "order", "metadata", "order_id")
        external_ref = dig(data, "order", "id") or data.get("order_id") or data.get("id")

        if not order_id and not external_ref:
            logger.info(f"Pagar.me event {event_type!r} without order reference, ignored")
            return None

        return PaymentEvent(
            provider=PROVIDER,
            order_id=str(order_id) if order_id else None,
            external_order_ref=str(external_ref) if external_ref else None,
            status=status,
        )
