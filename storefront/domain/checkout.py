# storefront/domain/checkout.py
"""
Checkout rules shared by every order type.

One composer handles all order types; what changes per type is only which
field groups must be filled in before anything is submitted.
"""
from enum import Enum
from typing import Dict, FrozenSet, List


class OrderType(str, Enum):
    EXPRESS = "express"  # payment only
    DELIVERY = "delivery"  # + name/phone/address
    SCHEDULED = "scheduled"  # + delivery date and time slot


class PaymentMethod(str, Enum):
    PIX = "pix"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"


class CheckoutState(str, Enum):
    IDLE = "idle"
    COLLECTING = "collecting"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


class FieldGroup(str, Enum):
    CART = "cart"
    PAYMENT = "payment"
    CUSTOMER = "customer"
    SCHEDULE = "schedule"


REQUIRED_GROUPS: Dict[OrderType, FrozenSet[FieldGroup]] = {
    OrderType.EXPRESS: frozenset({FieldGroup.PAYMENT}),
    OrderType.DELIVERY: frozenset({FieldGroup.PAYMENT, FieldGroup.CUSTOMER}),
    OrderType.SCHEDULED: frozenset({FieldGroup.PAYMENT, FieldGroup.CUSTOMER, FieldGroup.SCHEDULE}),
}

MESSAGES = {
    FieldGroup.CART: "Seu carrinho está vazio",
    FieldGroup.PAYMENT: "Selecione a forma de pagamento",
    FieldGroup.CUSTOMER: "Preencha nome, telefone e endereço de entrega",
    FieldGroup.SCHEDULE: "Escolha a data e o horário de entrega",
}


def _filled(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def required_fields(order_type) -> FrozenSet[FieldGroup]:
    return REQUIRED_GROUPS[OrderType(order_type)]


def missing_groups(form, cart_empty: bool) -> List[FieldGroup]:
    """Field groups the form still lacks, in display order."""
    required = required_fields(form.order_type)
    missing = []
    if cart_empty:
        missing.append(FieldGroup.CART)
    if FieldGroup.PAYMENT in required and not _filled(form.payment_method):
        missing.append(FieldGroup.PAYMENT)
    if FieldGroup.CUSTOMER in required and not all(
        _filled(v) for v in (form.customer_name, form.customer_phone, form.customer_address)
    ):
        missing.append(FieldGroup.CUSTOMER)
    if FieldGroup.SCHEDULE in required and not (
        _filled(form.scheduled_date) and _filled(form.scheduled_time)
    ):
        missing.append(FieldGroup.SCHEDULE)
    return missing
