# storefront/repos/product_repo.py
from typing import Any, Dict, List

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order_item import OrderItemModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, limit: int | None = None) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product_id: str, patch: Dict[str, Any]) -> int:
        if not patch:
            return 0
        res = self.db.execute(update(ProductModel).where(ProductModel.id == product_id).values(**patch))
        self.db.commit()
        return res.rowcount

    def delete_product(self, product_id: str) -> int:
        #referencing rows go first so the FK does not block the delete
        self.db.execute(delete(CartItemModel).where(CartItemModel.product_id == product_id))
        self.db.execute(delete(OrderItemModel.__table__).where(OrderItemModel.__table__.c.product_id == product_id))
        res = self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        self.db.commit()
        return res.rowcount
