# storefront/domain/promotions.py
"""
Promotions come in two shapes that the store keeps in one flat row:

* ``ProductBundle`` - tied to a product, ``quantity`` units for ``special_price``
* ``PercentageDiscount`` - standalone banner with ``discount_percentage``

Writes go through these models so a row is always one or the other.
"""
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from storefront.domain.errors import InvalidPromotionError


class _PromotionFields(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool = True
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @model_validator(mode="after")
    def _window(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ProductBundle(_PromotionFields):
    kind: Literal["bundle"] = "bundle"
    product_id: str
    special_price: Decimal = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class PercentageDiscount(_PromotionFields):
    kind: Literal["percentage"] = "percentage"
    discount_percentage: int = Field(..., gt=0, le=100)


Promotion = Annotated[Union[ProductBundle, PercentageDiscount], Field(discriminator="kind")]


def promotion_from_row(row) -> Union[ProductBundle, PercentageDiscount]:
    """Typed view of a stored promotion row."""
    common = dict(
        title=row.title,
        description=row.description,
        image_url=row.image_url,
        is_active=bool(row.is_active),
        start_date=row.start_date,
        end_date=row.end_date,
    )
    try:
        if row.product_id:
            return ProductBundle(
                product_id=row.product_id,
                special_price=row.special_price,
                quantity=row.quantity,
                **common,
            )
        return PercentageDiscount(discount_percentage=row.discount_percentage, **common)
    except ValueError as e:
        raise InvalidPromotionError(f"Promoção {row.id} inconsistente: {e}") from e


def row_fields(promotion: Union[ProductBundle, PercentageDiscount]) -> dict:
    """Flat column values; the fields of the other variant are nulled."""
    data = promotion.model_dump(exclude={"kind"})
    if isinstance(promotion, ProductBundle):
        data["discount_percentage"] = None
    else:
        data.update(product_id=None, special_price=None, quantity=None)
    return data


def is_current(promotion: Union[ProductBundle, PercentageDiscount], now: datetime) -> bool:
    if not promotion.is_active:
        return False
    if promotion.start_date and now < _align(promotion.start_date, now):
        return False
    if promotion.end_date and now > _align(promotion.end_date, now):
        return False
    return True


def _align(value: datetime, now: datetime) -> datetime:
    # sqlite hands back naive datetimes even for timezone=True columns
    if value.tzinfo is None and now.tzinfo is not None:
        return value.replace(tzinfo=now.tzinfo)
    if value.tzinfo is not None and now.tzinfo is None:
        return value.replace(tzinfo=None)
    return value


def regular_total(unit_price: Decimal, quantity: int) -> Decimal:
    return Decimal(unit_price) * quantity


def bundle_discount_percent(unit_price: Decimal, special_price: Decimal, quantity: int) -> int:
    """Badge shown on bundles, e.g. 3x 10.00 for 24.00 -> 20."""
    original = regular_total(unit_price, quantity)
    if original <= 0:
        return 0
    discount = (original - Decimal(special_price)) / original * 100
    return int(discount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def bundle_line_name(title: str, product_name: str, quantity: int) -> str:
    if quantity > 1:
        return f"{quantity}x {product_name} ({title})"
    return f"{product_name} ({title})"
