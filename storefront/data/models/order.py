import enum

from sqlalchemy import Column, String, Integer, Text, DateTime

from storefront.data.database import Base
from storefront.data.models._columns import new_id, utcnow


class OrderStatus(str, enum.Enum):
    pending = "pending"
    awaiting_payment = "awaiting_payment"
    paid = "paid"
    confirmed = "confirmed"
    shipping = "shipping"
    out_for_delivery = "out_for_delivery"
    delivered = "delivered"
    canceled = "canceled"


SHIPPING_FIELDS = (
    "shipping_name",
    "shipping_phone",
    "shipping_address",
    "shipping_city",
    "shipping_state",
    "shipping_zip",
    "shipping_notes",
)


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    # null for guest flows
    user_id = Column(String(36), nullable=True, index=True)

    status = Column(String, nullable=False, default=OrderStatus.pending.value)
    total_cents = Column(Integer, nullable=False, default=0)
    email = Column(String, nullable=True)
    source = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    payment_link = Column(String, nullable=True)
    public_token = Column(String(64), nullable=True, unique=True, index=True)
    gateway_provider = Column(String, nullable=True)
    gateway_order_id = Column(String, nullable=True, index=True)

    shipping_name = Column(String, nullable=True)
    shipping_phone = Column(String, nullable=True)
    shipping_address = Column(String, nullable=True)
    shipping_city = Column(String, nullable=True)
    shipping_state = Column(String, nullable=True)
    shipping_zip = Column(String, nullable=True)
    shipping_notes = Column(Text, nullable=True)
