from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from storefront.domain.cart import Cart, ProductSnapshot
from storefront.domain.errors import NotFoundError, ProductNotFound
from storefront.domain.promotions import (
    ProductBundle,
    bundle_line_name,
    is_current,
    promotion_from_row,
)
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.promotion_repo import PromotionRepo
from storefront.services.cart_store import CartStore
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def cart_to_dict(session_id: str, cart: Cart) -> Dict[str, Any]:
    return {
        "session_id": session_id,
        "lines": [
            {
                **line.model_dump(),
                "subtotal": line.subtotal,
            }
            for line in cart.lines
        ],
        "item_count": cart.item_count,
        "total": cart.total(),
    }


class CartService:
    """
    Use cases for the session cart.
    commands (add, update, remove, clear) go through CartStore.update
    query (get) only reads
    """

    def __init__(self, db: Session, cart_store: CartStore):
        self.catalog = CatalogRepo(db)
        self.promotions = PromotionRepo(db)
        self.store = cart_store

    # query
    def get_cart(self, session_id: str) -> Dict[str, Any]:
        return cart_to_dict(session_id, self.store.load(session_id))

    # commands
    def add_product(
        self,
        session_id: str,
        product_id: str,
        quantity: int,
        ingredients: Optional[List[str]] = None,
        note: Optional[str] = None,
    ) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValueError("Quantidade deve ser maior que 0")

        product = self.catalog.get_product(product_id)
        if not product:
            raise ProductNotFound(product_id)

        if ingredients is not None:
            self._check_ingredients(product, ingredients)

        # price and unit are frozen here, checkout never re-prices
        snapshot = ProductSnapshot(
            product_id=product.id,
            name=product.name,
            price=Decimal(product.price),
            unit=product.unit,
        )

        cart, line = self.store.update(
            session_id,
            lambda c: c.add(snapshot, quantity, ingredients=ingredients, note=note),
        )

        logger.info(
            f"Product {product_id} in cart {session_id}: line {line.line_id}, quantity {line.quantity}"
        )
        return cart_to_dict(session_id, cart)

    def add_promotion(
        self,
        session_id: str,
        promotion_id: str,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Adds one bundle as a single line priced at its special price."""
        now = now or datetime.now(timezone.utc)

        row = self.promotions.get_promotion(promotion_id)
        if not row:
            raise NotFoundError(f"Promoção {promotion_id} não encontrada")

        promotion = promotion_from_row(row)
        if not isinstance(promotion, ProductBundle):
            raise ValueError("Apenas promoções de produto podem ser adicionadas ao carrinho")
        if not is_current(promotion, now):
            raise ValueError("Promoção não está ativa")

        product = row.product or self.catalog.get_product(promotion.product_id)
        if not product:
            raise ProductNotFound(promotion.product_id)

        snapshot = ProductSnapshot(
            product_id=product.id,
            name=bundle_line_name(promotion.title, product.name, promotion.quantity),
            price=promotion.special_price,
            unit=product.unit,
            promotion_id=row.id,
        )

        cart, line = self.store.update(session_id, lambda c: c.add(snapshot, 1))

        logger.info(f"Promotion {promotion_id} added to cart {session_id} as line {line.line_id}")
        return cart_to_dict(session_id, cart)

    def update_quantity(self, session_id: str, line_id: str, quantity: int) -> Dict[str, Any]:
        cart, line = self.store.update(session_id, lambda c: c.update_quantity(line_id, quantity))
        logger.info(f"Line {line_id} in cart {session_id} set to {line.quantity}")
        return cart_to_dict(session_id, cart)

    def remove_line(self, session_id: str, line_id: str) -> Dict[str, Any]:
        cart, removed = self.store.update(session_id, lambda c: c.remove(line_id))
        if removed:
            logger.info(f"Line {line_id} removed from cart {session_id}")
        return cart_to_dict(session_id, cart)

    def clear(self, session_id: str) -> Dict[str, Any]:
        self.store.clear(session_id)
        return cart_to_dict(session_id, Cart())

    @staticmethod
    def _check_ingredients(product, ingredients: List[str]):
        allowed = set(product.ingredients or [])
        if not allowed and ingredients:
            raise ValueError(f"Produto {product.name} não aceita personalização")
        unknown = [i for i in ingredients if i not in allowed]
        if unknown:
            raise ValueError(f"Ingredientes inválidos: {', '.join(unknown)}")
