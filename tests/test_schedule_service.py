"""Weekly schedule replacement and schedule exception management."""

from datetime import time, timedelta
from uuid import uuid4

import pytest

from conftest import MONDAY, NOW, at, make_employee, make_salon
from salon_scheduler.core.exceptions import (
    InvalidScheduleError,
    ScheduleExceptionNotFoundError,
    ScheduleExceptionOverlapError,
    StaffNotFoundError,
)
from salon_scheduler.models import ScheduleExceptionType, WeeklySchedule
from salon_scheduler.repositories import SalonRepository
from salon_scheduler.services.schedule.schedule_service import DaySchedule, ScheduleService

TUESDAY = MONDAY + timedelta(days=1)


@pytest.fixture
def schedules(db, clock):
    return ScheduleService(db, clock=clock)


class TestWeeklySchedule:

    def test_always_seven_days(self, schedules, seed):
        week = schedules.get_weekly_schedule(seed.salon_id, seed.employee_id)

        assert [day.day_of_week for day in week] == list(range(7))
        assert all(day.is_working_day for day in week[:5])
        assert week[0].start_time == time(9, 0)
        assert week[0].end_time == time(17, 0)

    def test_missing_days_are_non_working_midnight(self, schedules, seed):
        saturday = schedules.get_weekly_schedule(seed.salon_id, seed.employee_id)[5]

        assert saturday == DaySchedule(5, time(0, 0), time(0, 0), is_working_day=False)

    def test_replace_stores_working_days_only(self, db, schedules, seed):
        week = schedules.replace_weekly_schedule(seed.salon_id, seed.employee_id, [
            DaySchedule(0, time(10, 0), time(18, 0)),
            DaySchedule(2, time(8, 0), time(12, 0)),
            DaySchedule(6, time(0, 0), time(0, 0), is_working_day=False),
        ])

        assert [day.day_of_week for day in week if day.is_working_day] == [0, 2]
        assert week[0].start_time == time(10, 0)
        assert week[1].is_working_day is False
        stored = db.query(WeeklySchedule).filter(WeeklySchedule.employee_id == seed.employee_id).all()
        assert sorted(row.day_of_week for row in stored) == [0, 2]

    def test_replace_with_empty_week_clears_everything(self, schedules, seed):
        week = schedules.replace_weekly_schedule(seed.salon_id, seed.employee_id, [])
        assert not any(day.is_working_day for day in week)

    @pytest.mark.parametrize("start,end", [
        (time(17, 0), time(9, 0)),     # end before start
        (time(9, 0), time(9, 0)),      # empty
        (time(9, 0), time(9, 20)),     # shorter than 30 minutes
        (time(6, 0), time(18, 30)),    # longer than 12 hours
    ])
    def test_invalid_working_day(self, schedules, seed, start, end):
        with pytest.raises(InvalidScheduleError):
            schedules.replace_weekly_schedule(seed.salon_id, seed.employee_id, [DaySchedule(1, start, end)])

    def test_shift_limits_are_inclusive(self, schedules, seed):
        schedules.replace_weekly_schedule(seed.salon_id, seed.employee_id, [
            DaySchedule(0, time(9, 0), time(9, 30)),
            DaySchedule(1, time(6, 0), time(18, 0)),
        ])

    def test_day_off_needs_no_hours(self, schedules, seed):
        week = schedules.replace_weekly_schedule(seed.salon_id, seed.employee_id, [
            DaySchedule(0, time(9, 0), time(17, 0)),
            DaySchedule(3, None, None, is_working_day=False),
        ])

        assert week[3] == DaySchedule(3, time(0, 0), time(0, 0), is_working_day=False)

    def test_working_day_without_hours(self, schedules, seed):
        with pytest.raises(InvalidScheduleError):
            schedules.replace_weekly_schedule(seed.salon_id, seed.employee_id, [DaySchedule(1, None, time(17, 0))])

    def test_duplicate_day_is_rejected(self, schedules, seed):
        with pytest.raises(InvalidScheduleError):
            schedules.replace_weekly_schedule(seed.salon_id, seed.employee_id, [
                DaySchedule(0, time(9, 0), time(12, 0)),
                DaySchedule(0, time(13, 0), time(17, 0)),
            ])

    def test_failed_replace_keeps_old_schedule(self, schedules, seed):
        with pytest.raises(InvalidScheduleError):
            schedules.replace_weekly_schedule(seed.salon_id, seed.employee_id, [
                DaySchedule(0, time(9, 0), time(12, 0)),
                DaySchedule(1, time(12, 0), time(9, 0)),
            ])

        week = schedules.get_weekly_schedule(seed.salon_id, seed.employee_id)
        assert sum(day.is_working_day for day in week) == 5

    def test_employee_of_other_salon(self, db, schedules, seed):
        other = make_salon(db, name="Other")
        db.commit()

        with pytest.raises(StaffNotFoundError):
            schedules.get_weekly_schedule(other.id, seed.employee_id)


class TestScheduleExceptions:

    def test_add_and_list(self, schedules, seed):
        created = schedules.add_schedule_exception(
            seed.salon_id, seed.employee_id, at(12), at(14), ScheduleExceptionType.PERSONAL, reason="Dentist"
        )

        listed = schedules.list_schedule_exceptions(seed.salon_id, seed.employee_id, MONDAY.date(), MONDAY.date())

        assert [ex.id for ex in listed] == [created.id]
        assert listed[0].reason == "Dentist"
        assert listed[0].type == ScheduleExceptionType.PERSONAL
        assert listed[0].start_at == at(12)

    def test_list_only_returns_exceptions_inside_range(self, schedules, seed):
        schedules.add_schedule_exception(seed.salon_id, seed.employee_id, at(12), at(14), ScheduleExceptionType.BLOCKED)
        tuesday = schedules.add_schedule_exception(
            seed.salon_id, seed.employee_id, at(9, day=TUESDAY), at(11, day=TUESDAY), ScheduleExceptionType.BLOCKED
        )
        # Spans past the end of Tuesday
        schedules.add_schedule_exception(
            seed.salon_id, seed.employee_id, at(22, day=TUESDAY), at(2, day=TUESDAY + timedelta(days=1)),
            ScheduleExceptionType.VACATION,
        )

        listed = schedules.list_schedule_exceptions(seed.salon_id, seed.employee_id, TUESDAY.date(), TUESDAY.date())
        assert [ex.id for ex in listed] == [tuesday.id]

    def test_list_is_ordered_by_start(self, schedules, seed):
        later = schedules.add_schedule_exception(
            seed.salon_id, seed.employee_id, at(15), at(16), ScheduleExceptionType.BLOCKED
        )
        earlier = schedules.add_schedule_exception(
            seed.salon_id, seed.employee_id, at(9), at(10), ScheduleExceptionType.BLOCKED
        )

        listed = schedules.list_schedule_exceptions(seed.salon_id, seed.employee_id, MONDAY.date(), TUESDAY.date())
        assert [ex.id for ex in listed] == [earlier.id, later.id]

    def test_shorter_than_an_hour(self, schedules, seed):
        with pytest.raises(InvalidScheduleError):
            schedules.add_schedule_exception(
                seed.salon_id, seed.employee_id, at(12), at(12, 45), ScheduleExceptionType.BLOCKED
            )

    def test_end_before_start(self, schedules, seed):
        with pytest.raises(InvalidScheduleError):
            schedules.add_schedule_exception(
                seed.salon_id, seed.employee_id, at(14), at(12), ScheduleExceptionType.BLOCKED
            )

    def test_cannot_start_in_the_past(self, schedules, seed):
        with pytest.raises(InvalidScheduleError):
            schedules.add_schedule_exception(
                seed.salon_id, seed.employee_id, NOW - timedelta(hours=1), NOW + timedelta(hours=2),
                ScheduleExceptionType.SICK_LEAVE,
            )

    def test_overlap_with_existing(self, schedules, seed):
        schedules.add_schedule_exception(seed.salon_id, seed.employee_id, at(12), at(14), ScheduleExceptionType.BLOCKED)

        with pytest.raises(ScheduleExceptionOverlapError):
            schedules.add_schedule_exception(
                seed.salon_id, seed.employee_id, at(13), at(15), ScheduleExceptionType.BLOCKED
            )

    def test_touching_exceptions_are_allowed(self, schedules, seed):
        schedules.add_schedule_exception(seed.salon_id, seed.employee_id, at(12), at(14), ScheduleExceptionType.BLOCKED)
        schedules.add_schedule_exception(seed.salon_id, seed.employee_id, at(14), at(15), ScheduleExceptionType.BLOCKED)

    def test_other_employees_exceptions_do_not_overlap(self, db, schedules, seed):
        schedules.add_schedule_exception(seed.salon_id, seed.employee_id, at(12), at(14), ScheduleExceptionType.BLOCKED)
        colleague = make_employee(db, SalonRepository.get(db, seed.salon_id), name="Bea")
        db.commit()

        schedules.add_schedule_exception(seed.salon_id, colleague.id, at(12), at(14), ScheduleExceptionType.BLOCKED)

    def test_delete(self, schedules, seed):
        created = schedules.add_schedule_exception(
            seed.salon_id, seed.employee_id, at(12), at(14), ScheduleExceptionType.BLOCKED
        )

        schedules.delete_schedule_exception(seed.salon_id, seed.employee_id, created.id)

        assert schedules.list_schedule_exceptions(seed.salon_id, seed.employee_id, MONDAY.date(), MONDAY.date()) == []

    def test_delete_missing(self, schedules, seed):
        with pytest.raises(ScheduleExceptionNotFoundError):
            schedules.delete_schedule_exception(seed.salon_id, seed.employee_id, uuid4())

    def test_delete_requires_matching_employee(self, schedules, seed):
        created = schedules.add_schedule_exception(
            seed.salon_id, seed.employee_id, at(12), at(14), ScheduleExceptionType.BLOCKED
        )

        with pytest.raises(ScheduleExceptionNotFoundError):
            schedules.delete_schedule_exception(seed.salon_id, uuid4(), created.id)

    def test_inverted_date_range(self, schedules, seed):
        with pytest.raises(InvalidScheduleError):
            schedules.list_schedule_exceptions(seed.salon_id, seed.employee_id, TUESDAY.date(), MONDAY.date())
