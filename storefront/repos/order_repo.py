# storefront/repos/order_repo.py
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select, update, insert
from sqlalchemy.orm import Session

from storefront.data.capabilities import OrderItemSchema, FULL_ORDER_ITEM_SCHEMA
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.product import ProductModel
from storefront.data.models._columns import new_id

ORDER_COLUMNS = (
    "id", "user_id", "status", "total_cents", "email", "source", "created_at",
    "payment_link", "public_token", "gateway_provider", "gateway_order_id",
    "shipping_name", "shipping_phone", "shipping_address", "shipping_city",
    "shipping_state", "shipping_zip", "shipping_notes",
)

PRODUCT_SNAPSHOT = ("id", "name", "hero_image", "slug", "price_cents")


class OrderRepo:
    def __init__(self, db: Session, item_schema: OrderItemSchema = FULL_ORDER_ITEM_SCHEMA):
        self.db = db
        self.item_schema = item_schema

    def add_order(self, order: OrderModel) -> OrderModel:
        # flush only, the caller owns the transaction
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_items(self, order_id: str, rows: Iterable[Dict[str, Any]]) -> int:
        payload = [
            self.item_schema.shape({"id": new_id(), "order_id": order_id, **row})
            for row in rows
        ]
        if not payload:
            return 0
        self.db.execute(insert(OrderItemModel.__table__), payload)
        return len(payload)

    def get_order(self, order_id: str) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_by_public_token(self, token: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.public_token == token)
        ).scalar_one_or_none()

    def list_orders(self, user_id: Optional[str] = None, status: Optional[str] = None,
                    limit: int = 50) -> List[OrderModel]:
        stmt = select(OrderModel)
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        if status is not None:
            stmt = stmt.where(OrderModel.status == status)
        stmt = stmt.order_by(OrderModel.created_at.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def update_by_id(self, order_id: str, patch: Dict[str, Any]) -> int:
        res = self.db.execute(update(OrderModel).where(OrderModel.id == order_id).values(**patch))
        self.db.commit()
        return res.rowcount

    def update_by_gateway_id(self, gateway_order_id: str, patch: Dict[str, Any]) -> int:
        res = self.db.execute(
            update(OrderModel)
            .where(OrderModel.gateway_order_id == gateway_order_id)
            .values(**patch)
        )
        self.db.commit()
        return res.rowcount

    def update_by_public_token(self, token: str, patch: Dict[str, Any]) -> int:
        res = self.db.execute(
            update(OrderModel).where(OrderModel.public_token == token).values(**patch)
        )
        self.db.commit()
        return res.rowcount

    def items_for_orders(self, order_ids: List[str]) -> Dict[str, List[Dict[str, Any]]]:
        """order_id -> item dicts with an embedded product snapshot."""
        if not order_ids:
            return {}
        table = OrderItemModel.__table__
        item_cols = [table.c[name] for name in self.item_schema.readable()]
        product_cols = [getattr(ProductModel, name).label(f"p_{name}") for name in PRODUCT_SNAPSHOT]

        rows = self.db.execute(
            select(*item_cols, *product_cols)
            .outerjoin(ProductModel, ProductModel.id == table.c.product_id)
            .where(table.c.order_id.in_(order_ids))
        ).mappings().all()

        grouped: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        for row in rows:
            item = {k: row[k] for k in self.item_schema.readable() if k != "order_id"}
            item["product"] = (
                {name: row[f"p_{name}"] for name in PRODUCT_SNAPSHOT}
                if row["p_id"] is not None else None
            )
            grouped[row["order_id"]].append(item)
        return grouped

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()


def order_to_dict(order: OrderModel, items: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    data = {name: getattr(order, name) for name in ORDER_COLUMNS}
    if items is not None:
        data["order_items"] = items
    return data
