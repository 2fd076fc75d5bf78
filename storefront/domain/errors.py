# storefront/domain/errors.py
from typing import List, Optional


class NotFoundError(LookupError):
    pass


class ProductNotFound(NotFoundError):
    def __init__(self, product_id: str):
        super().__init__(f"Produto {product_id} não encontrado")
        self.product_id = product_id


class LineNotFound(NotFoundError):
    def __init__(self, line_id: str):
        super().__init__(f"Item {line_id} não está no carrinho")
        self.line_id = line_id


class NotAuthenticatedError(PermissionError):
    pass


class InvalidPromotionError(ValueError):
    pass


class CheckoutValidationError(ValueError):
    """Raised before anything is written; carries the missing field categories."""

    def __init__(self, missing: List[str], messages: List[str]):
        super().__init__("; ".join(messages))
        self.missing = missing
        self.messages = messages


class OrderPersistenceError(RuntimeError):
    """
    Store failure during submission. When ``order_id`` is set the header row
    was written and only the line items are missing (partial order).
    """

    def __init__(self, message: str, order_id: Optional[str] = None):
        super().__init__(message)
        self.order_id = order_id

    @property
    def partial(self) -> bool:
        return self.order_id is not None
