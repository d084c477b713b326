from sqlalchemy import Column, String, Integer, Text, DateTime, JSON, ForeignKey

from storefront.data.database import Base
from storefront.data.models._columns import new_id, utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    slug = Column(String, nullable=False, index=True)
    category = Column(String, nullable=True)
    brand = Column(String, nullable=True)
    badge = Column(String, nullable=True)
    description = Column(Text, nullable=True)

    # null or <= 0 means "price on request"
    price_cents = Column(Integer, nullable=True)

    hero_image = Column(String, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    sizes = Column(JSON, nullable=False, default=list)
    colors = Column(JSON, nullable=False, default=list)

    catalog_node_id = Column(String(36), ForeignKey("catalog_nodes.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
