# storefront/services/checkout_service.py
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.checkout import (
    MESSAGES,
    CheckoutState,
    FieldGroup,
    OrderType,
    missing_groups,
)
from storefront.domain.delivery import schedule_problem
from storefront.domain.errors import CheckoutValidationError, OrderPersistenceError
from storefront.domain.order_status import OrderStatus
from storefront.domain.schemas import CheckoutIn
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_store import CartStore
from storefront.services.notification_service import (
    NotificationOutcome,
    NotificationService,
    build_webhook_payload,
)
from storefront.services.session import SessionContext
from storefront.utils.settings import PLACEHOLDER_CUSTOMER_EMAIL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class CheckoutService:
    """
    Turns the session cart + checkout form into a stored order.

    1. validates the form for its order type (nothing is written on failure)
    2. inserts the order header (status pending)
    3. inserts all order lines in one go
    4. notifies the webhook, failure only adds a warning
    5. clears the cart

    A failure in step 3 leaves the header in place without lines. That is
    reported through OrderPersistenceError.order_id, nothing is rolled back.
    """

    def __init__(self, db: Session, cart_store: CartStore, notifier: NotificationService | None = None):
        self.repo = OrderRepo(db)
        self.store = cart_store
        self.notifier = notifier or NotificationService()

    def validate(self, form: CheckoutIn, cart_empty: bool, now: datetime):
        missing = missing_groups(form, cart_empty)
        if missing:
            raise CheckoutValidationError(
                [m.value for m in missing],
                [MESSAGES[m] for m in missing],
            )

        if form.order_type == OrderType.SCHEDULED:
            problem = schedule_problem(form.scheduled_date, form.scheduled_time, now)
            if problem:
                raise CheckoutValidationError([FieldGroup.SCHEDULE.value], [problem])

    def submit(
        self,
        session_id: str,
        form: CheckoutIn,
        now: datetime | None = None,
        ctx: SessionContext | None = None,
    ) -> Dict[str, Any]:
        # guests may order, signed-in accounts must be approved
        if ctx is not None and ctx.authenticated:
            ctx.require_approved()

        now = now or datetime.now().astimezone()
        cart = self.store.load(session_id)

        self.validate(form, cart.is_empty(), now)

        # snapshot total, the cart is authoritative
        total = cart.total()
        scheduled = form.order_type == OrderType.SCHEDULED

        header = OrderModel(
            customer_name=_clean(form.customer_name),
            customer_email=_clean(form.customer_email) or PLACEHOLDER_CUSTOMER_EMAIL,
            customer_phone=_clean(form.customer_phone),
            customer_address=_clean(form.customer_address),
            customer_complement=_clean(form.customer_complement),
            order_type=OrderType(form.order_type).value,
            payment_method=form.payment_method.value,
            scheduled_date=form.scheduled_date if scheduled else None,
            scheduled_time=form.scheduled_time if scheduled else None,
            status=OrderStatus.PENDING.value,
            total=total,
        )

        logger.info(f"Submitting order for session {session_id}: {len(cart.lines)} lines, total {total}")

        try:
            order = self.repo.create_order(header)
        except SQLAlchemyError as e:
            logger.error(f"Order header insert failed for session {session_id}: {e}")
            raise OrderPersistenceError(f"Erro ao finalizar pedido: {e}") from e

        logger.info(f"Order {order.id} created (pending)")

        try:
            self.repo.add_items(
                [
                    OrderItemModel(
                        order_id=order.id,
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price=line.price,
                    )
                    for line in cart.lines
                ]
            )
        except SQLAlchemyError as e:
            logger.warning(
                f"Order {order.id} stored WITHOUT its line items (header kept, no rollback): {e}"
            )
            raise OrderPersistenceError(f"Erro ao salvar itens do pedido: {e}", order_id=order.id) from e

        logger.info(f"Order {order.id}: {len(cart.lines)} lines stored")

        warnings = []
        outcome = self.notifier.send_order_notification(build_webhook_payload(order, cart.lines))
        if outcome == NotificationOutcome.FAILED:
            warnings.append("Pedido registrado, mas não foi possível enviar a notificação.")

        self.store.clear(session_id)

        return {
            "state": CheckoutState.COMPLETED,
            "order_id": order.id,
            "total": total,
            "notification": outcome.value,
            "warnings": warnings,
        }
