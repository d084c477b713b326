# storefront/services/order_admin_service.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from storefront.data.capabilities import OrderItemSchema, FULL_ORDER_ITEM_SCHEMA
from storefront.data.models.order import OrderStatus
from storefront.domain.errors import InvalidArgument, NotFound
from storefront.repos.order_repo import OrderRepo, order_to_dict
from storefront.services.payments.stripe_gateway import StripeGateway, PROVIDER as STRIPE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

STATUSES = {s.value for s in OrderStatus}


class OrderAdminService:
    def __init__(self, db: Session, gateway: StripeGateway,
                 item_schema: OrderItemSchema = FULL_ORDER_ITEM_SCHEMA):
        self.repo = OrderRepo(db, item_schema)
        self.gateway = gateway

    def list_orders(self, limit: int = 50) -> Dict[str, Any]:
        orders = self.repo.list_orders(limit=limit)
        items = self.repo.items_for_orders([o.id for o in orders])
        return {"items": [order_to_dict(o, items.get(o.id, [])) for o in orders]}

    def patch_order(self, order_id: Optional[str], status: Optional[str] = None,
                    payment_link: Optional[str] = None, link_given: bool = False,
                    origin: str = "") -> Dict[str, Any]:
        """
        Set status and/or payment_link on an order.

        Moving to awaiting_payment without an explicit link binds the order to a
        Stripe payment intent and points payment_link at the in-site payment page.
        """
        order_id = (order_id or "").strip()
        if not order_id:
            raise InvalidArgument("id is required")
        if status is None and not link_given:
            raise InvalidArgument("status or payment_link is required")
        if status is not None and status not in STATUSES:
            raise InvalidArgument(f"Unknown status: {status}")

        patch: Dict[str, Any] = {}
        if status is not None:
            patch["status"] = status
        if link_given:
            patch["payment_link"] = (payment_link or "").strip() or None

        if status == OrderStatus.awaiting_payment.value and not link_given:
            patch.update(self._payment_page_patch(order_id, origin))

        rows = self.repo.update_by_id(order_id, patch)
        if rows == 0:
            raise NotFound("Order not found")
        logger.info(f"Order {order_id} patched by admin: {sorted(patch)}")
        return {"ok": True}

    def _payment_page_patch(self, order_id: str, origin: str) -> Dict[str, Any]:
        order = self.repo.get_order(order_id)
        if order is None:
            raise NotFound("Order not found")

        patch: Dict[str, Any] = {"gateway_provider": STRIPE}
        if not order.gateway_order_id and order.total_cents and order.total_cents > 0:
            intent = self.gateway.create_payment_intent(
                order_id=order.id,
                amount_cents=order.total_cents,
                customer_email=order.email,
            )
            patch["gateway_order_id"] = intent.id
        if order.public_token:
            patch["payment_link"] = f"{origin.rstrip('/')}/pagamento/{order.public_token}"
        return patch
