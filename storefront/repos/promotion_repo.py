# storefront/repos/promotion_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.promotion import PromotionModel


class PromotionRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_promotions(self, active_only: bool = False) -> List[PromotionModel]:
        stmt = (
            select(PromotionModel)
            .options(joinedload(PromotionModel.product))
            .order_by(PromotionModel.created_at.desc())
        )
        if active_only:
            stmt = stmt.where(PromotionModel.is_active.is_(True))
        return list(self.db.execute(stmt).scalars().all())

    def get_promotion(self, promotion_id: str) -> PromotionModel | None:
        return self.db.get(PromotionModel, promotion_id)

    def create_promotion(self, promotion: PromotionModel) -> PromotionModel:
        self.db.add(promotion)
        self.db.commit()
        self.db.refresh(promotion)
        return promotion

    def update_promotion(self, promotion: PromotionModel, data: dict) -> PromotionModel:
        for field, value in data.items():
            setattr(promotion, field, value)
        self.db.commit()
        self.db.refresh(promotion)
        return promotion

    def delete_promotion(self, promotion: PromotionModel):
        self.db.delete(promotion)
        self.db.commit()
