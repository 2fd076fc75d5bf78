from sqlalchemy import Column, Integer, String, UniqueConstraint

from storefront.data.database import Base


class UserRoleModel(Base):
    __tablename__ = "user_roles"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)
    role = Column(String(20), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "role", name="u_user_role"),)
