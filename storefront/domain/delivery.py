# storefront/domain/delivery.py
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from storefront.utils import settings

UNAVAILABLE_DATE = "Data de entrega indisponível"
NO_SLOTS_LEFT = "Não há horários disponíveis para hoje. Escolha outra data."
UNAVAILABLE_SLOT = "Horário de entrega indisponível"


def _business_day(day: date) -> bool:
    return day.weekday() < 5  # sat=5, sun=6


def available_delivery_dates(
    now: datetime,
    days: Optional[int] = None,
    include_today: Optional[bool] = None,
) -> List[date]:
    """Next ``days`` business days, starting tomorrow (or today)."""
    days = settings.DELIVERY_DAYS_AHEAD if days is None else days
    include_today = settings.DELIVERY_INCLUDE_TODAY if include_today is None else include_today

    day = now.date() if include_today else now.date() + timedelta(days=1)
    result = []
    while len(result) < days:
        if _business_day(day):
            result.append(day)
        day += timedelta(days=1)
    return result


def parse_slot(value: str) -> time:
    return datetime.strptime(value, "%H:%M").time()


def available_time_slots(
    day: date,
    now: datetime,
    slots: Optional[List[str]] = None,
    buffer_minutes: Optional[int] = None,
) -> List[dict]:
    """
    Every configured slot with its availability for ``day``.
    Same-day slots need to start more than the buffer after ``now``.
    """
    slots = settings.DELIVERY_TIME_SLOTS if slots is None else slots
    buffer_minutes = settings.DELIVERY_BUFFER_MINUTES if buffer_minutes is None else buffer_minutes

    cutoff = now + timedelta(minutes=buffer_minutes)
    result = []
    for slot in slots:
        if day < now.date():
            available = False
        elif day == now.date():
            starts = datetime.combine(day, parse_slot(slot), tzinfo=now.tzinfo)
            available = starts > cutoff
        else:
            available = True
        result.append({"time": slot, "available": available})
    return result


def submission_allowed(day: date, now: datetime, **kwargs) -> bool:
    if day not in available_delivery_dates(now):
        return False
    return any(slot["available"] for slot in available_time_slots(day, now, **kwargs))


def time_slots_for(day: date, now: datetime) -> dict:
    """
    Slot picker state for ``day``. Days outside the offered delivery dates
    have no bookable slot, so this agrees with ``schedule_problem``.
    """
    if day not in available_delivery_dates(now):
        return {
            "date": day,
            "slots": [{"time": slot, "available": False} for slot in settings.DELIVERY_TIME_SLOTS],
            "submission_allowed": False,
            "message": UNAVAILABLE_DATE,
        }

    slots = available_time_slots(day, now)
    allowed = any(s["available"] for s in slots)
    return {
        "date": day,
        "slots": slots,
        "submission_allowed": allowed,
        "message": None if allowed else NO_SLOTS_LEFT,
    }


def schedule_problem(day: date, slot: str, now: datetime) -> Optional[str]:
    """None when the (day, slot) pair can be booked, otherwise the message to show."""
    state = time_slots_for(day, now)
    if state["message"]:
        return state["message"]
    match = next((s for s in state["slots"] if s["time"] == slot), None)
    if match is None or not match["available"]:
        return UNAVAILABLE_SLOT
    return None
