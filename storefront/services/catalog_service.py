# storefront/services/catalog_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.data.models.catalog_node import CatalogNodeModel, CATALOG_KINDS
from storefront.domain.errors import InvalidArgument, NotFound
from storefront.repos.catalog_repo import CatalogRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

NODE_FIELDS = ("id", "kind", "parent_id", "label", "slug", "logo_url", "banner_url", "sort_order", "created_at")
EDITABLE = ("kind", "parent_id", "label", "slug", "logo_url", "banner_url", "sort_order")
REQUIRED = ("kind", "label", "slug")


def _sort_order(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(round(value))


class CatalogService:
    """Taxonomy tree of the store: main categories, subcategories, brands, lines."""

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)

    def list_nodes(self) -> Dict[str, Any]:
        return {"items": [{n: getattr(node, n) for n in NODE_FIELDS} for node in self.repo.list_nodes()]}

    def create_node(self, data: Dict[str, Any]) -> Dict[str, Any]:
        kind = str(data.get("kind") or "").strip()
        label = str(data.get("label") or "").strip()
        slug = str(data.get("slug") or "").strip()
        if not kind or not label or not slug:
            raise InvalidArgument("kind, label and slug are required")
        if kind not in CATALOG_KINDS:
            raise InvalidArgument(f"Unknown catalog kind: {kind}")

        parent_id = str(data["parent_id"]) if data.get("parent_id") else None
        if parent_id and self.repo.get_node(parent_id) is None:
            raise NotFound("Parent catalog node not found")

        node = self.repo.create_node(
            CatalogNodeModel(
                kind=kind,
                parent_id=parent_id,
                label=label,
                slug=slug,
                logo_url=str(data["logo_url"]).strip() if data.get("logo_url") else None,
                banner_url=str(data["banner_url"]).strip() if data.get("banner_url") else None,
                sort_order=_sort_order(data.get("sort_order")) or 0,
            )
        )
        logger.info(f"Catalog node {node.id} created ({kind}/{slug})")
        return {"ok": True, "id": node.id}

    def update_node(self, node_id: Any, patch: Dict[str, Any]) -> Dict[str, Any]:
        node_id = str(node_id or "").strip()
        if not node_id:
            raise InvalidArgument("id is required")

        unknown = set(patch) - set(EDITABLE)
        if unknown:
            raise InvalidArgument(f"Unknown catalog fields: {', '.join(sorted(unknown))}")

        normalized: Dict[str, Any] = {}
        for key, value in patch.items():
            if key == "sort_order":
                order = _sort_order(value)
                if order is not None:
                    normalized[key] = order
            elif key in ("logo_url", "banner_url"):
                normalized[key] = str(value).strip() if value else None
            elif value is None:
                normalized[key] = None
            elif isinstance(value, str):
                normalized[key] = value.strip()
            else:
                normalized[key] = value

        blank = [key for key in REQUIRED if key in normalized and not normalized[key]]
        if blank:
            raise InvalidArgument(f"{', '.join(blank)} cannot be empty")
        if "kind" in normalized and normalized["kind"] not in CATALOG_KINDS:
            raise InvalidArgument(f"Unknown catalog kind: {normalized['kind']}")

        self.repo.update_node(node_id, normalized)
        return {"ok": True}

    def delete_node(self, node_id: Any) -> Dict[str, Any]:
        node_id = str(node_id or "").strip()
        if not node_id:
            raise InvalidArgument("id is required")
        self.repo.delete_node(node_id)
        logger.info(f"Catalog node {node_id} deleted")
        return {"ok": True}
