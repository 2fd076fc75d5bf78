# register all models on Base.metadata before create_all

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.promotion import PromotionModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.profile import ProfileModel
from storefront.data.models.user_role import UserRoleModel

__all__ = [
    "CategoryModel",
    "ProductModel",
    "PromotionModel",
    "OrderModel",
    "OrderItemModel",
    "ProfileModel",
    "UserRoleModel",
]
