# storefront/repos/admin_repo.py
from sqlalchemy.orm import Session

from storefront.data.models.admin_user import AdminUserModel


class AdminRepo:
    def __init__(self, db: Session):
        self.db = db

    def is_admin(self, user_id: str) -> bool:
        return self.db.get(AdminUserModel, user_id) is not None
