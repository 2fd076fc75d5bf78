# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# cart lives in redis per session, TTL refreshed on every write
CART_TTL_SECONDS = int(os.getenv("CART_TTL_SECONDS", 24 * 60 * 60))

# new-order webhook, empty URL = disabled
WEBHOOK_URL = os.getenv("WEBHOOK_URL", "")
WEBHOOK_SECRET = os.getenv("WEBHOOK_SECRET", "")
WEBHOOK_TIMEOUT = int(os.getenv("WEBHOOK_TIMEOUT", 5))
WEBHOOK_ASYNC = _flag("WEBHOOK_ASYNC")

ORDER_HISTORY_LIMIT = int(os.getenv("ORDER_HISTORY_LIMIT", 10))
LOW_STOCK_THRESHOLD = int(os.getenv("LOW_STOCK_THRESHOLD", 10))
PLACEHOLDER_CUSTOMER_EMAIL = os.getenv("PLACEHOLDER_CUSTOMER_EMAIL", "cliente@sem-email.com")

DELIVERY_BUFFER_MINUTES = int(os.getenv("DELIVERY_BUFFER_MINUTES", 30))
DELIVERY_DAYS_AHEAD = int(os.getenv("DELIVERY_DAYS_AHEAD", 5))
DELIVERY_INCLUDE_TODAY = _flag("DELIVERY_INCLUDE_TODAY")
DELIVERY_TIME_SLOTS = [
    s.strip()
    for s in os.getenv("DELIVERY_TIME_SLOTS", "08:00,10:00,12:00,14:00,16:00,18:00").split(",")
    if s.strip()
]

# demo catalog on first start (empty database only)
SEED_DEMO_DATA = _flag("SEED_DEMO_DATA")
