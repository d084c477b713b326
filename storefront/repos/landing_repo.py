# storefront/repos/landing_repo.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.data.models.landing_content import LandingContentModel

DEFAULT_KEY = "default"


class LandingRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str = DEFAULT_KEY) -> LandingContentModel | None:
        return self.db.get(LandingContentModel, key)

    def upsert(self, content: Dict[str, Any], key: str = DEFAULT_KEY) -> LandingContentModel:
        row = self.get(key)
        if row is None:
            row = LandingContentModel(key=key, content=content)
            self.db.add(row)
        else:
            row.content = content
        self.db.commit()
        self.db.refresh(row)
        return row

    def rollback(self):
        self.db.rollback()
