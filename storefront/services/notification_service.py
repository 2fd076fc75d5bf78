# storefront/services/notification_service.py
from enum import Enum
from typing import Any, Dict, List

import requests
from kombu.exceptions import OperationalError
from requests import RequestException

from storefront.celery_worker import celery_app
from storefront.domain.cart import CartLine
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationOutcome(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    QUEUED = "queued"
    DISABLED = "disabled"


def build_webhook_payload(order, lines: List[CartLine]) -> Dict[str, Any]:
    items = []
    for line in lines:
        item = {"name": line.name, "quantity": line.quantity, "price": float(line.price)}
        if line.ingredients:
            item["ingredients"] = list(line.ingredients)
        items.append(item)

    return {
        "record": {
            "id": order.id,
            "customer_name": order.customer_name or "",
            "customer_email": order.customer_email or "",
            "customer_phone": order.customer_phone or "",
            "customer_address": order.customer_address or "",
            "customer_complement": order.customer_complement or "",
            "payment_method": order.payment_method,
            "total_price": float(order.total),
            "items": items,
        }
    }


def post_webhook(url: str, secret: str, payload: Dict[str, Any], timeout: int) -> bool:
    """Single POST, no retries. Any failure is logged and reported as False."""
    order_id = payload.get("record", {}).get("id")
    try:
        resp = requests.post(
            url,
            json=payload,
            headers={"Authorization": f"Bearer {secret}"},
            timeout=timeout,
        )
        resp.raise_for_status()
    except RequestException as e:
        logger.warning(f"Webhook for order {order_id} failed: {e}")
        return False

    logger.info(f"Webhook for order {order_id} delivered ({resp.status_code})")
    return True


class NotificationService:
    """
    Best-effort new-order notification.
    Never raises: the order is already stored when this runs.
    """

    def __init__(
        self,
        url: str | None = None,
        secret: str | None = None,
        timeout: int | None = None,
        use_queue: bool | None = None,
    ):
        self.url = settings.WEBHOOK_URL if url is None else url
        self.secret = settings.WEBHOOK_SECRET if secret is None else secret
        self.timeout = settings.WEBHOOK_TIMEOUT if timeout is None else timeout
        self.use_queue = settings.WEBHOOK_ASYNC if use_queue is None else use_queue

    def send_order_notification(self, payload: Dict[str, Any]) -> NotificationOutcome:
        if not self.url:
            logger.info("WEBHOOK_URL not set, skipping order notification")
            return NotificationOutcome.DISABLED

        if self.use_queue:
            try:
                send_order_notification_task.delay(payload)
            except OperationalError as e:
                logger.warning(f"Could not enqueue order notification: {e}")
                return NotificationOutcome.FAILED
            return NotificationOutcome.QUEUED

        if post_webhook(self.url, self.secret, payload, self.timeout):
            return NotificationOutcome.SENT
        return NotificationOutcome.FAILED


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(payload: Dict[str, Any]):
    """Background variant of the webhook POST (WEBHOOK_ASYNC)."""
    sent = post_webhook(settings.WEBHOOK_URL, settings.WEBHOOK_SECRET, payload, settings.WEBHOOK_TIMEOUT)
    return {"order_id": payload.get("record", {}).get("id"), "sent": sent}
