from sqlalchemy import Column, String, Integer, ForeignKey

from storefront.data.database import Base
from storefront.data.models._columns import new_id


class OrderItemModel(Base):
    """Full layout. Older stores lack size, box_option and the price columns, see capabilities."""

    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    size = Column(String, nullable=True)
    box_option = Column(String, nullable=True)
    unit_price_cents = Column(Integer, nullable=True)
    line_total_cents = Column(Integer, nullable=True)
