# storefront/services/payments/intents.py
from typing import Dict

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderStatus
from storefront.domain.errors import InvalidArgument, NotFound, OrderNotPayable, UpstreamFailure
from storefront.repos.order_repo import OrderRepo
from storefront.services.payments.stripe_gateway import StripeGateway, PROVIDER as STRIPE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_CLOSED = {OrderStatus.paid.value, OrderStatus.canceled.value}


class PaymentIntentService:
    """Client secret for the in-page card form, one payment intent per order."""

    def __init__(self, db: Session, gateway: StripeGateway):
        self.repo = OrderRepo(db)
        self.gateway = gateway

    def bootstrap(self, public_token: str) -> Dict[str, str]:
        token = (public_token or "").strip()
        if not token:
            raise InvalidArgument("Invalid token")

        order = self.repo.get_by_public_token(token)
        if order is None:
            raise NotFound("Order not found")
        if order.status in _CLOSED:
            raise OrderNotPayable()

        reusable = (
            order.gateway_order_id
            and order.gateway_provider in (None, STRIPE)
            and order.gateway_order_id.startswith("pi_")
        )
        if reusable:
            intent = self.gateway.retrieve_payment_intent(order.gateway_order_id)
        else:
            if not order.total_cents or order.total_cents <= 0:
                raise OrderNotPayable("Order has no amount to charge")
            intent = self.gateway.create_payment_intent(
                order_id=order.id,
                amount_cents=order.total_cents,
                customer_email=order.email,
            )
            self.repo.update_by_id(order.id, {"gateway_provider": STRIPE, "gateway_order_id": intent.id})
            logger.info(f"Order {order.id} bound to payment intent {intent.id}")

        if not intent.client_secret:
            raise UpstreamFailure("Stripe did not return a client_secret")
        return {"client_secret": intent.client_secret}
