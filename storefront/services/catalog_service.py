# storefront/services/catalog_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import ProductNotFound
from storefront.repos.catalog_repo import CatalogRepo
from storefront.utils.settings import LOW_STOCK_THRESHOLD


def product_to_dict(product: ProductModel) -> Dict[str, Any]:
    stock = product.stock or 0
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "image_url": product.image_url,
        "unit": product.unit,
        "stock": stock,
        "category_id": product.category_id,
        "ingredients": list(product.ingredients or []),
        "in_stock": stock > 0,
        # display hint only ("Últimas unidades"), never enforced
        "low_stock": 0 < stock < LOW_STOCK_THRESHOLD,
    }


class CatalogService:
    """Read-only view of products and categories."""

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)

    def list_categories(self, category_type: str | None = None):
        return self.repo.list_categories(category_type)

    def list_products(
        self,
        category_id: str | None = None,
        category_type: str | None = None,
        search: str | None = None,
    ) -> List[Dict[str, Any]]:
        products = self.repo.list_products(
            category_id=category_id,
            category_type=category_type,
            search=search or None,
        )
        return [product_to_dict(p) for p in products]

    def get_product(self, product_id: str) -> Dict[str, Any]:
        product = self.repo.get_product(product_id)
        if not product:
            raise ProductNotFound(product_id)
        return product_to_dict(product)
