# storefront/repos/address_repo.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.data.models.user_address import UserAddressModel
from storefront.data.models._columns import utcnow


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_address(self, user_id: str) -> UserAddressModel | None:
        return self.db.get(UserAddressModel, user_id)

    def upsert_address(self, user_id: str, fields: Dict[str, Any]) -> UserAddressModel:
        row = self.get_address(user_id)
        if row is None:
            row = UserAddressModel(user_id=user_id)
            self.db.add(row)
        for key, value in fields.items():
            setattr(row, key, value)
        row.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(row)
        return row
