from sqlalchemy import Column, String, Integer, DateTime, ForeignKey

from storefront.data.database import Base
from storefront.data.models._columns import new_id, utcnow

CATALOG_KINDS = ("main", "subcategory", "brand", "line", "clothing_brand")


class CatalogNodeModel(Base):
    __tablename__ = "catalog_nodes"

    id = Column(String(36), primary_key=True, default=new_id)
    kind = Column(String, nullable=False)
    #children are linked by parent_id only, nothing cascades
    parent_id = Column(String(36), ForeignKey("catalog_nodes.id"), nullable=True)
    label = Column(String, nullable=False)
    slug = Column(String, nullable=False)
    logo_url = Column(String, nullable=True)
    banner_url = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
