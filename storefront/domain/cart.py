# storefront/domain/cart.py
"""
In-memory cart aggregation.

Lines are keyed by product id + normalized ingredient list (+ promotion id for
bundle lines). Adding something that matches an existing line bumps its
quantity; the line's customization and note stay as they were.
"""
import json
import uuid
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from storefront.domain.errors import LineNotFound

CENT = Decimal("0.01")


def normalize_ingredients(ingredients: Optional[List[str]]) -> Optional[Tuple[str, ...]]:
    # None = not customized, kept apart from an explicit empty selection
    if ingredients is None:
        return None
    return tuple(sorted(ingredients))


class ProductSnapshot(BaseModel):
    """What the cart copies from the catalog at add time."""

    product_id: str
    name: str
    price: Decimal
    unit: str = "un"
    promotion_id: Optional[str] = None


class CartLine(BaseModel):
    line_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    product_id: str
    name: str
    price: Decimal
    quantity: int = Field(..., ge=1)
    unit: str = "un"
    ingredients: Optional[List[str]] = None
    note: Optional[str] = None
    promotion_id: Optional[str] = None

    @property
    def key(self):
        return (self.product_id, self.promotion_id, normalize_ingredients(self.ingredients))

    @property
    def subtotal(self) -> Decimal:
        return (self.price * self.quantity).quantize(CENT, rounding=ROUND_HALF_UP)


class Cart:
    def __init__(self, lines: Optional[List[CartLine]] = None):
        self.lines: List[CartLine] = list(lines or [])

    def find(self, line_id: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.line_id == line_id), None)

    def add(
        self,
        product: ProductSnapshot,
        quantity: int,
        ingredients: Optional[List[str]] = None,
        note: Optional[str] = None,
    ) -> CartLine:
        if quantity < 1:
            raise ValueError("Quantidade deve ser maior que 0")

        key = (product.product_id, product.promotion_id, normalize_ingredients(ingredients))
        existing = next((line for line in self.lines if line.key == key), None)

        if existing:
            existing.quantity += quantity
            return existing

        line = CartLine(
            product_id=product.product_id,
            name=product.name,
            price=product.price,
            quantity=quantity,
            unit=product.unit,
            ingredients=list(ingredients) if ingredients is not None else None,
            note=note,
            promotion_id=product.promotion_id,
        )
        self.lines.append(line)
        return line

    def update_quantity(self, line_id: str, quantity: int) -> CartLine:
        line = self.find(line_id)
        if line is None:
            raise LineNotFound(line_id)
        # floor at 1, decrementing never removes the line
        line.quantity = max(1, quantity)
        return line

    def remove(self, line_id: str) -> bool:
        before = len(self.lines)
        self.lines = [line for line in self.lines if line.line_id != line_id]
        return len(self.lines) != before

    def clear(self):
        self.lines = []

    def total(self) -> Decimal:
        total = sum((line.price * line.quantity for line in self.lines), Decimal("0.00"))
        return total.quantize(CENT, rounding=ROUND_HALF_UP)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    # redis snapshot
    def to_json(self) -> str:
        return json.dumps([line.model_dump(mode="json") for line in self.lines])

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "Cart":
        if not raw:
            return cls()
        return cls([CartLine.model_validate(item) for item in json.loads(raw)])
