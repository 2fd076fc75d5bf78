# storefront/services/admin_service.py
from functools import wraps
from typing import Any, Dict, List, Union

from sqlalchemy.orm import Session

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.promotion import PromotionModel
from storefront.domain.errors import NotFoundError, ProductNotFound
from storefront.domain.order_status import OrderStatus
from storefront.domain.promotions import PercentageDiscount, ProductBundle, row_fields
from storefront.domain.schemas import CategoryIn, ProductIn
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.profile_repo import ProfileRepo
from storefront.repos.promotion_repo import PromotionRepo
from storefront.services.catalog_service import product_to_dict
from storefront.services.order_status_service import order_to_dict, orders_with_items
from storefront.services.promotion_service import promotion_to_dict, promotions_to_dicts
from storefront.services.session import SessionContext
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def admin_only(method):
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        self.ctx.require_admin()
        return method(self, *args, **kwargs)

    return wrapper


class AdminService:
    """Back-office operations. Every method requires an admin session."""

    def __init__(self, db: Session, ctx: SessionContext):
        self.db = db
        self.ctx = ctx
        self.catalog = CatalogRepo(db)
        self.promotions = PromotionRepo(db)
        self.orders = OrderRepo(db)
        self.profiles = ProfileRepo(db)

    # products
    @admin_only
    def create_product(self, payload: ProductIn) -> Dict[str, Any]:
        self._check_category(payload.category_id)
        product = self.catalog.add(ProductModel(**payload.model_dump()))
        logger.info(f"Product {product.id} created by {self.ctx.user_id}")
        return product_to_dict(product)

    @admin_only
    def update_product(self, product_id: str, payload: ProductIn) -> Dict[str, Any]:
        product = self.catalog.get_product(product_id)
        if not product:
            raise ProductNotFound(product_id)
        self._check_category(payload.category_id)
        return product_to_dict(self.catalog.update(product, payload.model_dump()))

    @admin_only
    def delete_product(self, product_id: str):
        product = self.catalog.get_product(product_id)
        if not product:
            raise ProductNotFound(product_id)
        self.catalog.delete(product)
        logger.info(f"Product {product_id} deleted by {self.ctx.user_id}")

    # categories
    @admin_only
    def create_category(self, payload: CategoryIn) -> CategoryModel:
        data = payload.model_dump(mode="json")
        return self.catalog.add(CategoryModel(**data))

    @admin_only
    def update_category(self, category_id: str, payload: CategoryIn) -> CategoryModel:
        category = self._get_category(category_id)
        return self.catalog.update(category, payload.model_dump(mode="json"))

    @admin_only
    def delete_category(self, category_id: str):
        self.catalog.delete(self._get_category(category_id))

    # promotions
    @admin_only
    def list_promotions(self) -> List[Dict[str, Any]]:
        return promotions_to_dicts(self.promotions.list_promotions())

    @admin_only
    def create_promotion(self, payload: Union[ProductBundle, PercentageDiscount]) -> Dict[str, Any]:
        self._check_bundle_product(payload)
        row = self.promotions.create_promotion(PromotionModel(**row_fields(payload)))
        logger.info(f"Promotion {row.id} ({payload.kind}) created")
        return promotion_to_dict(row)

    @admin_only
    def update_promotion(self, promotion_id: str, payload: Union[ProductBundle, PercentageDiscount]) -> Dict[str, Any]:
        row = self.promotions.get_promotion(promotion_id)
        if not row:
            raise NotFoundError(f"Promoção {promotion_id} não encontrada")
        self._check_bundle_product(payload)
        return promotion_to_dict(self.promotions.update_promotion(row, row_fields(payload)))

    @admin_only
    def delete_promotion(self, promotion_id: str):
        row = self.promotions.get_promotion(promotion_id)
        if not row:
            raise NotFoundError(f"Promoção {promotion_id} não encontrada")
        self.promotions.delete_promotion(row)

    # orders
    @admin_only
    def list_orders(self) -> List[Dict[str, Any]]:
        return orders_with_items(self.db, self.orders.list_orders())

    @admin_only
    def update_order_status(self, order_id: str, status: OrderStatus) -> Dict[str, Any]:
        order = self.orders.update_order_status(order_id, OrderStatus(status).value)
        if not order:
            raise NotFoundError(f"Pedido {order_id} não encontrado")
        logger.info(f"Order {order_id} -> {order.status}")
        return order_to_dict(order)

    # users
    @admin_only
    def list_profiles(self):
        return self.profiles.list_profiles()

    @admin_only
    def toggle_approval(self, profile_id: str):
        profile = self.profiles.get_profile(profile_id)
        if not profile:
            raise NotFoundError(f"Usuário {profile_id} não encontrado")
        return self.profiles.set_approved(profile, not profile.approved)

    def _get_category(self, category_id: str) -> CategoryModel:
        category = self.catalog.get_category(category_id)
        if not category:
            raise NotFoundError(f"Categoria {category_id} não encontrada")
        return category

    def _check_category(self, category_id: str | None):
        if category_id:
            self._get_category(category_id)

    def _check_bundle_product(self, payload):
        if isinstance(payload, ProductBundle) and not self.catalog.get_product(payload.product_id):
            raise ProductNotFound(payload.product_id)
