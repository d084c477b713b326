# storefront/services/landing_service.py
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.errors import InvalidArgument
from storefront.domain.landing import default_landing_content, parse_landing_content
from storefront.repos.landing_repo import LandingRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class LandingService:
    def __init__(self, db: Session):
        self.repo = LandingRepo(db)

    def get_content(self) -> Dict[str, Any]:
        try:
            row = self.repo.get()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"Landing content read failed, serving defaults: {e}")
            return {
                "content": default_landing_content().to_document(),
                "updated_at": None,
                "error": "Landing content unavailable",
            }

        if row is None:
            return {"content": default_landing_content().to_document(), "updated_at": None}

        try:
            content = parse_landing_content(row.content)
        except ValueError as e:
            logger.warning(f"Stored landing content is invalid, serving defaults: {e}")
            content = default_landing_content()
        return {"content": content.to_document(), "updated_at": row.updated_at}

    def save_content(self, raw: Any) -> Dict[str, Any]:
        if raw is None:
            raise InvalidArgument("content is required")
        try:
            content = parse_landing_content(raw)
        except ValueError as e:
            raise InvalidArgument(f"Invalid landing content: {e}") from e

        row = self.repo.upsert(content.to_document())
        logger.info(f"Landing content saved (version {content.version})")
        return {"ok": True, "updated_at": row.updated_at}
