# storefront/repos/profile_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.profile import ProfileModel
from storefront.data.models.user_role import UserRoleModel


class ProfileRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, user_id: str) -> ProfileModel | None:
        return self.db.get(ProfileModel, user_id)

    def list_profiles(self) -> List[ProfileModel]:
        stmt = select(ProfileModel).order_by(ProfileModel.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create_profile(self, profile: ProfileModel) -> ProfileModel:
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def set_approved(self, profile: ProfileModel, approved: bool) -> ProfileModel:
        profile.approved = approved
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def has_role(self, user_id: str, role: str) -> bool:
        stmt = select(UserRoleModel.id).where(
            UserRoleModel.user_id == user_id,
            UserRoleModel.role == role,
        )
        return self.db.execute(stmt).first() is not None

    def grant_role(self, user_id: str, role: str) -> UserRoleModel:
        row = UserRoleModel(user_id=user_id, role=role)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row
