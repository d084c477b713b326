# storefront/repos/catalog_repo.py
from typing import Any, Dict, List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from storefront.data.models.catalog_node import CatalogNodeModel


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_nodes(self) -> List[CatalogNodeModel]:
        return list(
            self.db.execute(
                select(CatalogNodeModel).order_by(
                    CatalogNodeModel.sort_order.asc(),
                    CatalogNodeModel.created_at.asc(),
                )
            ).scalars().all()
        )

    def get_node(self, node_id: str) -> CatalogNodeModel | None:
        return self.db.get(CatalogNodeModel, node_id)

    def create_node(self, node: CatalogNodeModel) -> CatalogNodeModel:
        self.db.add(node)
        self.db.commit()
        self.db.refresh(node)
        return node

    def update_node(self, node_id: str, patch: Dict[str, Any]) -> int:
        if not patch:
            return 0
        res = self.db.execute(update(CatalogNodeModel).where(CatalogNodeModel.id == node_id).values(**patch))
        self.db.commit()
        return res.rowcount

    def delete_node(self, node_id: str) -> int:
        res = self.db.execute(delete(CatalogNodeModel).where(CatalogNodeModel.id == node_id))
        self.db.commit()
        return res.rowcount
