from sqlalchemy import Column, String

from storefront.data.database import Base


class AdminUserModel(Base):
    # a row here is the admin role, there is no flag column
    __tablename__ = "admin_users"

    user_id = Column(String(36), primary_key=True)
