from sqlalchemy import Column, String, DateTime, JSON

from storefront.data.database import Base
from storefront.data.models._columns import utcnow


class LandingContentModel(Base):
    __tablename__ = "landing_content"

    key = Column(String, primary_key=True)
    content = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
