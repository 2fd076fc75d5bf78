from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class ProfileModel(Base):
    __tablename__ = "profiles"

    # same id as the auth user
    id = Column(String(36), primary_key=True)
    full_name = Column(String, nullable=True)
    phone = Column(String, nullable=True, index=True)
    house = Column(String, nullable=True)
    room = Column(String, nullable=True)
    approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now, onupdate=_now)
