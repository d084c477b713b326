# storefront/services/order_view_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.data.capabilities import OrderItemSchema, FULL_ORDER_ITEM_SCHEMA
from storefront.data.models.order import OrderStatus, SHIPPING_FIELDS
from storefront.domain.errors import InvalidArgument, NotFound
from storefront.repos.order_repo import OrderRepo
from storefront.utils.formatting import empty_to_null
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PUBLIC_ORDER_FIELDS = (
    "id", "status", "total_cents", "created_at", "payment_link", "public_token",
) + SHIPPING_FIELDS

MY_ORDER_FIELDS = ("id", "status", "total_cents", "created_at")


class OrderViewService:
    """Read side of orders: public token viewer and the buyer's own history."""

    def __init__(self, db: Session, item_schema: OrderItemSchema = FULL_ORDER_ITEM_SCHEMA):
        self.repo = OrderRepo(db, item_schema)

    @staticmethod
    def _token(token: str) -> str:
        token = (token or "").strip()
        if not token:
            raise InvalidArgument("Invalid token")
        return token

    def get_by_public_token(self, token: str) -> Dict[str, Any]:
        order = self.repo.get_by_public_token(self._token(token))
        if order is None:
            raise NotFound("Order not found")

        items = self.repo.items_for_orders([order.id]).get(order.id, [])
        item = {name: getattr(order, name) for name in PUBLIC_ORDER_FIELDS}
        item["order_items"] = items
        return {"item": item}

    def patch_shipping(self, token: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        # blind write, no existence check and no format validation
        patch = {name: empty_to_null(fields.get(name)) for name in SHIPPING_FIELDS}
        rows = self.repo.update_by_public_token(self._token(token), patch)
        logger.info(f"Shipping patch by public token touched {rows} order(s)")
        return {"ok": True}

    def list_confirmed_for_user(self, user_id: str) -> Dict[str, Any]:
        orders = self.repo.list_orders(user_id=user_id, status=OrderStatus.confirmed.value, limit=50)
        items_by_order = self.repo.items_for_orders([o.id for o in orders])
        return {
            "items": [
                {**{name: getattr(o, name) for name in MY_ORDER_FIELDS},
                 "order_items": items_by_order.get(o.id, [])}
                for o in orders
            ]
        }
