from sqlalchemy import Column, String, Text, DateTime

from storefront.data.database import Base
from storefront.data.models._columns import utcnow


class UserAddressModel(Base):
    __tablename__ = "user_addresses"

    user_id = Column(String(36), primary_key=True)
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
