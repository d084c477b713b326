# storefront/services/account_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.repos.address_repo import AddressRepo
from storefront.utils.formatting import empty_to_null

ADDRESS_FIELDS = ("name", "phone", "address", "city", "state", "zip", "notes")


class AccountService:
    def __init__(self, db: Session):
        self.repo = AddressRepo(db)

    def get_address(self, user_id: str) -> Dict[str, Any]:
        row = self.repo.get_address(user_id)
        if row is None:
            return {"item": None}
        item = {name: getattr(row, name) for name in ADDRESS_FIELDS}
        item["updated_at"] = row.updated_at
        return {"item": item}

    def save_address(self, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        self.repo.upsert_address(user_id, {name: empty_to_null(fields.get(name)) for name in ADDRESS_FIELDS})
        return {"ok": True}
