# storefront/domain/order_status.py
from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PRODUCTION = "in_production"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


STATUS_PRESENTATION = {
    OrderStatus.PENDING: {"label": "Pendente", "icon": "clock", "color": "yellow", "description": "Aguardando confirmação"},
    OrderStatus.ACCEPTED: {"label": "Aceito", "icon": "check-circle", "color": "blue", "description": "Pedido confirmado"},
    OrderStatus.IN_PRODUCTION: {"label": "Em Produção", "icon": "package", "color": "purple", "description": "Preparando seu pedido"},
    OrderStatus.PREPARING: {"label": "Preparando", "icon": "package", "color": "orange", "description": "Preparando seu pedido"},
    OrderStatus.READY: {"label": "Pronto", "icon": "package-check", "color": "green", "description": "Pronto para entrega"},
    OrderStatus.OUT_FOR_DELIVERY: {"label": "Saiu para Entrega", "icon": "truck", "color": "purple", "description": "A caminho do seu endereço"},
    OrderStatus.DELIVERED: {"label": "Entregue", "icon": "truck", "color": "emerald", "description": "Pedido entregue"},
    OrderStatus.CANCELLED: {"label": "Cancelado", "icon": "x-circle", "color": "red", "description": "Pedido cancelado"},
}


def present_status(status: Optional[str]) -> dict:
    # unknown values render as pending
    try:
        key = OrderStatus(status)
    except ValueError:
        key = OrderStatus.PENDING
    return {"status": key.value, **STATUS_PRESENTATION[key]}
