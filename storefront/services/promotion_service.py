# storefront/services/promotion_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.promotion import PromotionModel
from storefront.domain.errors import InvalidPromotionError
from storefront.domain.promotions import (
    ProductBundle,
    bundle_discount_percent,
    is_current,
    promotion_from_row,
)
from storefront.repos.promotion_repo import PromotionRepo
from storefront.services.cart_store import CartStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def promotion_to_dict(row: PromotionModel, now: datetime | None = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    promotion = promotion_from_row(row)
    data = {**promotion.model_dump(), "id": row.id, "current": is_current(promotion, now)}
    if isinstance(promotion, ProductBundle) and row.product is not None:
        data.update(
            product_name=row.product.name,
            product_unit=row.product.unit,
            regular_price=row.product.price,
            discount_percent=bundle_discount_percent(
                row.product.price, promotion.special_price, promotion.quantity
            ),
        )
    return data


def promotions_to_dicts(rows: List[PromotionModel], now: datetime | None = None) -> List[Dict[str, Any]]:
    result = []
    for row in rows:
        try:
            result.append(promotion_to_dict(row, now))
        except InvalidPromotionError as e:
            # inconsistent legacy rows are skipped, not fatal
            logger.warning(str(e))
    return result


class PromotionService:
    def __init__(self, db: Session, cart_store: CartStore | None = None):
        self.repo = PromotionRepo(db)
        self.store = cart_store

    def list_current(self, now: datetime | None = None) -> List[Dict[str, Any]]:
        now = now or datetime.now(timezone.utc)
        promotions = promotions_to_dicts(self.repo.list_promotions(active_only=True), now)
        return [p for p in promotions if p["current"]]

    def banner_dismissed(self, session_id: str) -> bool:
        return self.store.banner_dismissed(session_id)

    def dismiss_banner(self, session_id: str) -> bool:
        self.store.dismiss_banner(session_id)
        return True
