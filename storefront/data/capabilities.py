# storefront/data/capabilities.py
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet

from sqlalchemy import inspect

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ORDER_ITEM_REQUIRED = frozenset({"id", "order_id", "product_id", "quantity"})
ORDER_ITEM_OPTIONAL = frozenset({"size", "box_option", "unit_price_cents", "line_total_cents"})


@dataclass(frozen=True)
class OrderItemSchema:
    """Which optional order_items columns the connected store actually has."""

    columns: FrozenSet[str]

    @property
    def has_prices(self) -> bool:
        return {"unit_price_cents", "line_total_cents"} <= self.columns

    def shape(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            k: v for k, v in row.items()
            if k in ORDER_ITEM_REQUIRED or k in self.columns
        }

    def readable(self):
        return sorted(ORDER_ITEM_REQUIRED | self.columns)


FULL_ORDER_ITEM_SCHEMA = OrderItemSchema(columns=ORDER_ITEM_OPTIONAL)


def detect_order_item_schema(engine) -> OrderItemSchema:
    inspector = inspect(engine)
    if not inspector.has_table("order_items"):
        return FULL_ORDER_ITEM_SCHEMA

    present = {c["name"] for c in inspector.get_columns("order_items")}
    schema = OrderItemSchema(columns=frozenset(present & ORDER_ITEM_OPTIONAL))

    if schema.columns != ORDER_ITEM_OPTIONAL:
        logger.warning(
            f"order_items is missing {sorted(ORDER_ITEM_OPTIONAL - schema.columns)}, "
            f"inserts will use the reduced layout"
        )
    return schema
