# storefront/services/product_service.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import InvalidArgument, NotFound
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.formatting import (
    clamp_cents,
    default_sizes_for_category,
    price_label,
    slugify,
    to_list,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCT_FIELDS = (
    "id", "name", "slug", "category", "price_cents", "brand", "badge", "description",
    "hero_image", "images", "sizes", "colors", "catalog_node_id", "created_at",
)
HERO_FIELDS = ("name", "badge", "price_cents", "hero_image", "category", "slug")

DEFAULT_CATEGORY = "Outros"
DEFAULT_BRAND = "Solid Choice"


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _opt_str(body: Dict[str, Any], key: str) -> Optional[str]:
    value = body.get(key)
    return value.strip() if isinstance(value, str) else None


def product_to_dict(product: ProductModel) -> Dict[str, Any]:
    return {name: getattr(product, name) for name in PRODUCT_FIELDS}


class ProductService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.catalog = CatalogRepo(db)

    def list_products(self) -> Dict[str, Any]:
        return {"items": [product_to_dict(p) for p in self.repo.list_products()]}

    def hero(self) -> Dict[str, Any]:
        items = []
        for p in self.repo.list_products(limit=4):
            item = {name: getattr(p, name) for name in HERO_FIELDS}
            item["price_label"] = price_label(p.price_cents)
            items.append(item)
        return {"items": items}

    def size_category(self, catalog_node_id: Optional[str], category: Optional[str]) -> Optional[str]:
        """Slug of the root catalog node above catalog_node_id, else the free-text category."""
        node = self.catalog.get_node(catalog_node_id) if catalog_node_id else None
        seen = set()
        while node is not None and node.parent_id and node.id not in seen:
            seen.add(node.id)
            parent = self.catalog.get_node(node.parent_id)
            if parent is None:
                break
            node = parent
        if node is not None:
            return node.slug
        return category

    def create_product(self, body: Dict[str, Any]) -> Dict[str, Any]:
        name = _text(body.get("name"))
        if not name:
            raise InvalidArgument("name is required")

        category = _text(body.get("category")) or DEFAULT_CATEGORY
        catalog_node_id = _opt_str(body, "catalog_node_id") or None

        if "sizes" in body:
            sizes = to_list(body.get("sizes"))
        else:
            sizes = default_sizes_for_category(self.size_category(catalog_node_id, category))

        product = ProductModel(
            name=name,
            slug=_opt_str(body, "slug") or slugify(name),
            category=category,
            brand=_text(body.get("brand")) or DEFAULT_BRAND,
            badge=_text(body.get("badge")) or category,
            description=_text(body.get("description")) or None,
            price_cents=clamp_cents(body.get("price_cents")) or 0,
            hero_image=_opt_str(body, "hero_image") or None,
            images=to_list(body.get("images")),
            sizes=sizes,
            colors=to_list(body.get("colors")),
            catalog_node_id=catalog_node_id,
        )
        created = self.repo.create_product(product)
        logger.info(f"Product {created.id} created ({created.slug})")
        return {"ok": True, "id": created.id}

    def update_product(self, body: Dict[str, Any]) -> Dict[str, Any]:
        product_id = _text(body.get("id"))
        if not product_id:
            raise InvalidArgument("id is required")
        if self.repo.get_product(product_id) is None:
            raise NotFound("Product not found")

        patch: Dict[str, Any] = {}
        for key in ("name", "category", "brand", "badge"):
            value = _opt_str(body, key)
            if value is not None:
                patch[key] = value

        description = _opt_str(body, "description")
        if description is not None:
            patch["description"] = description or None

        price = clamp_cents(body.get("price_cents"))
        if price is not None:
            patch["price_cents"] = price

        for key in ("hero_image", "catalog_node_id"):
            value = _opt_str(body, key)
            if value is not None:
                patch[key] = value or None

        for key in ("images", "sizes", "colors"):
            if key in body:
                patch[key] = to_list(body[key])

        new_slug = _opt_str(body, "new_slug")
        if new_slug is not None:
            slug = new_slug or (slugify(patch["name"]) if patch.get("name") else None)
            if slug:
                patch["slug"] = slug

        self.repo.update_product(product_id, patch)
        logger.info(f"Product {product_id} updated: {sorted(patch)}")
        return {"ok": True}

    def delete_product(self, body: Dict[str, Any]) -> Dict[str, Any]:
        product_id = _text(body.get("id"))
        if not product_id:
            raise InvalidArgument("id is required")
        rows = self.repo.delete_product(product_id)
        logger.info(f"Product {product_id} deleted ({rows} row)")
        return {"ok": True}
