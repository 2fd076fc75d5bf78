# storefront/domain/schemas.py
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from storefront.domain.checkout import CheckoutState, OrderType, PaymentMethod
from storefront.domain.order_status import OrderStatus
from storefront.domain.promotions import PercentageDiscount, ProductBundle


class CategoryType(str, Enum):
    SUPERMARKET = "supermarket"
    SNACKS = "snacks"


# catalog

class CategoryIn(BaseModel):
    """Schema for creating/updating a category."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    type: CategoryType = CategoryType.SUPERMARKET


class CategoryOut(BaseModel):
    id: str
    name: str
    slug: str
    type: CategoryType

    model_config = ConfigDict(from_attributes=True)


class ProductIn(BaseModel):
    """Schema for creating/updating a product (admin)."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = None
    unit: str = Field("un", min_length=1, max_length=20)
    stock: int = Field(0, ge=0)
    category_id: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)


class ProductOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None
    unit: str
    stock: int
    category_id: Optional[str] = None
    ingredients: List[str] = []
    in_stock: bool
    low_stock: bool


# promotions

class ProductBundleOut(ProductBundle):
    id: str
    product_name: Optional[str] = None
    product_unit: Optional[str] = None
    regular_price: Optional[Decimal] = None
    discount_percent: Optional[int] = None
    current: bool


class PercentageDiscountOut(PercentageDiscount):
    id: str
    current: bool


PromotionOut = Union[ProductBundleOut, PercentageDiscountOut]


class BannerOut(BaseModel):
    dismissed: bool


# cart

class CartAddIn(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0, description="Quantidade (deve ser > 0)")
    ingredients: Optional[List[str]] = None
    note: Optional[str] = Field(None, max_length=500)


class CartQuantityIn(BaseModel):
    # no lower bound here, the cart clamps to 1
    quantity: int


class CartLineOut(BaseModel):
    line_id: str
    product_id: str
    name: str
    price: Decimal
    quantity: int
    unit: str
    ingredients: Optional[List[str]] = None
    note: Optional[str] = None
    promotion_id: Optional[str] = None
    subtotal: Decimal


class CartOut(BaseModel):
    session_id: str
    lines: List[CartLineOut]
    item_count: int
    total: Decimal


# checkout

class CheckoutIn(BaseModel):
    """Form data collected by the checkout dialog. Requirements depend on order_type."""

    order_type: OrderType = OrderType.DELIVERY
    payment_method: Optional[PaymentMethod] = None
    customer_name: Optional[str] = Field(None, max_length=200)
    customer_email: Optional[str] = Field(None, max_length=200)
    customer_phone: Optional[str] = Field(None, max_length=40)
    customer_address: Optional[str] = Field(None, max_length=500)
    customer_complement: Optional[str] = Field(None, max_length=200)
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")


class CheckoutOut(BaseModel):
    state: CheckoutState
    order_id: str
    total: Decimal
    notification: str
    warnings: List[str] = []


class TimeSlotOut(BaseModel):
    time: str
    available: bool


class TimeSlotsOut(BaseModel):
    date: date
    slots: List[TimeSlotOut]
    submission_allowed: bool
    message: Optional[str] = None


# orders

class StatusInfoOut(BaseModel):
    status: str
    label: str
    icon: str
    color: str
    description: str


class OrderItemOut(BaseModel):
    id: str
    product_id: str
    name: Optional[str] = None
    quantity: int
    price: Decimal


class OrderOut(BaseModel):
    id: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    order_type: str
    payment_method: str
    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    status: str
    status_info: StatusInfoOut
    total: Decimal
    created_at: datetime
    items: List[OrderItemOut] = []


class OrderStatusUpdateIn(BaseModel):
    status: OrderStatus


# users

class ProfileOut(BaseModel):
    id: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    house: Optional[str] = None
    room: Optional[str] = None
    approved: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionOut(BaseModel):
    authenticated: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    full_name: Optional[str] = None
    is_admin: bool = False
    approved: bool = False
