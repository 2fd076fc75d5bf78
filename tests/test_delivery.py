from datetime import date, datetime, timezone

from storefront.domain.delivery import (
    NO_SLOTS_LEFT,
    UNAVAILABLE_DATE,
    available_delivery_dates,
    available_time_slots,
    schedule_problem,
    submission_allowed,
    time_slots_for,
)
from storefront.utils import settings

SLOTS = ["08:00", "10:00", "12:00", "14:00", "16:00", "18:00"]
FRIDAY = date(2026, 10, 23)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)


class TestDeliveryDates:
    def test_skips_weekend(self):
        dates = available_delivery_dates(at(FRIDAY, 10), days=5, include_today=False)

        assert dates == [date(2026, 10, d) for d in (26, 27, 28, 29, 30)]

    def test_include_today(self):
        dates = available_delivery_dates(at(FRIDAY, 10), days=2, include_today=True)

        assert dates == [FRIDAY, date(2026, 10, 26)]

    def test_saturday_starts_on_monday(self):
        dates = available_delivery_dates(at(date(2026, 10, 24), 9), days=1, include_today=True)

        assert dates == [date(2026, 10, 26)]


class TestTimeSlots:
    def test_future_day_has_every_slot(self):
        slots = available_time_slots(date(2026, 10, 26), at(FRIDAY, 17), SLOTS, 30)

        assert all(s["available"] for s in slots)
        assert [s["time"] for s in slots] == SLOTS

    def test_same_day_respects_buffer(self):
        slots = available_time_slots(FRIDAY, at(FRIDAY, 15), SLOTS, 30)

        available = [s["time"] for s in slots if s["available"]]
        assert available == ["16:00", "18:00"]

    def test_slot_exactly_at_buffer_is_gone(self):
        slots = available_time_slots(FRIDAY, at(FRIDAY, 15, 30), SLOTS, 30)

        available = [s["time"] for s in slots if s["available"]]
        assert available == ["18:00"]

    def test_no_slot_left_blocks_submission(self):
        now = at(FRIDAY, 17, 40)

        assert not any(s["available"] for s in available_time_slots(FRIDAY, now, SLOTS, 30))
        assert submission_allowed(FRIDAY, now, slots=SLOTS, buffer_minutes=30) is False

    def test_past_day(self):
        slots = available_time_slots(date(2026, 10, 22), at(FRIDAY, 7), SLOTS, 30)

        assert not any(s["available"] for s in slots)


class TestScheduleProblem:
    def test_valid_pair(self):
        assert schedule_problem(date(2026, 10, 26), "10:00", at(FRIDAY, 10)) is None

    def test_weekend_date(self):
        assert schedule_problem(date(2026, 10, 24), "10:00", at(FRIDAY, 10)) == "Data de entrega indisponível"

    def test_unknown_slot(self):
        assert schedule_problem(date(2026, 10, 26), "09:30", at(FRIDAY, 10)) == "Horário de entrega indisponível"

    def test_today_when_not_offered(self):
        assert schedule_problem(FRIDAY, "18:00", at(FRIDAY, 8)) == "Data de entrega indisponível"


class TestSlotPicker:
    def test_weekend_day_has_nothing_bookable(self):
        state = time_slots_for(date(2026, 10, 24), at(FRIDAY, 10))

        assert state["submission_allowed"] is False
        assert state["message"] == UNAVAILABLE_DATE
        assert not any(s["available"] for s in state["slots"])
        assert submission_allowed(date(2026, 10, 24), at(FRIDAY, 10)) is False

    def test_day_beyond_window(self):
        state = time_slots_for(date(2026, 11, 20), at(FRIDAY, 10))

        assert state["message"] == UNAVAILABLE_DATE

    def test_offered_day(self):
        state = time_slots_for(date(2026, 10, 26), at(FRIDAY, 10))

        assert state["submission_allowed"] is True
        assert state["message"] is None

    def test_today_with_every_slot_inside_buffer(self, monkeypatch):
        monkeypatch.setattr(settings, "DELIVERY_INCLUDE_TODAY", True)
        monkeypatch.setattr(settings, "DELIVERY_TIME_SLOTS", SLOTS)
        monkeypatch.setattr(settings, "DELIVERY_BUFFER_MINUTES", 30)

        state = time_slots_for(FRIDAY, at(FRIDAY, 17, 40))

        assert state["submission_allowed"] is False
        assert state["message"] == NO_SLOTS_LEFT
        assert schedule_problem(FRIDAY, "18:00", at(FRIDAY, 17, 40)) == NO_SLOTS_LEFT

    def test_agrees_with_schedule_problem(self):
        now = at(FRIDAY, 10)
        for day in available_delivery_dates(now) + [date(2026, 10, 24), date(2026, 10, 25)]:
            state = time_slots_for(day, now)
            bookable = [s["time"] for s in state["slots"] if s["available"]]
            for slot in SLOTS:
                assert (schedule_problem(day, slot, now) is None) == (slot in bookable)
