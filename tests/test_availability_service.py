"""
Kiểm thử salon_app/availability_service.py

Xếp hạng ai nhận khách tiếp theo: rảnh / sắp xong / đang bận.
"""

import unittest
from datetime import date, datetime, time
from types import SimpleNamespace

from salon_app.availability_service import (
    appointments_for_employee,
    on_shift_employee_ids,
    rank_availability,
)

DAY = date(2026, 10, 19)


def emp(id, name):
    return SimpleNamespace(id=id, name=name, role="thợ")


def apt(staff, at, duration="30 phút", staff_id=None):
    return SimpleNamespace(staff=staff, staff_id=staff_id, time=at, duration=duration, day=DAY)


class TestRankAvailability(unittest.TestCase):
    def setUp(self):
        self.a = emp(1, "An")
        self.b = emp(2, "Bình")
        self.c = emp(3, "Cúc")
        self.all_ids = {1, 2, 3}

    def test_free_about_to_finish_busy_order(self):
        appointments = [
            apt("Cúc", "14:00", "60 phút"),  # còn 40 phút lúc 14:20
            apt("Bình", "13:50", "40 phút"),  # còn 10 phút
        ]
        result = rank_availability([self.c, self.b, self.a], appointments, time(14, 20), self.all_ids)
        self.assertEqual([e.employee.name for e in result], ["An", "Bình", "Cúc"])
        self.assertEqual([e.priority for e in result], [1, 2, 3])
        self.assertEqual(result[0].next_available, "Ngay bây giờ")
        self.assertEqual(result[1].next_available, "10 phút nữa")
        self.assertEqual(result[2].status, "Đang bận")
        self.assertEqual(result[2].next_available, "40 phút nữa")

    def test_about_to_finish_scenario(self):
        """Linh làm từ 14:00 trong 60 phút, bây giờ là 14:50."""
        linh = emp(7, "Linh")
        result = rank_availability([linh], [apt("Linh", "14:00", "60 phút")], datetime(2026, 10, 19, 14, 50), {7})
        self.assertEqual(result[0].status, "Sắp xong")
        self.assertEqual(result[0].next_available, "10 phút nữa")
        self.assertEqual(result[0].appointment_count, 1)

    def test_exactly_fifteen_minutes_left_is_about_to_finish(self):
        result = rank_availability([self.a], [apt("An", "10:00", "45 phút")], time(10, 30), {1})
        self.assertEqual(result[0].priority, 2)

    def test_between_appointments_is_free(self):
        appointments = [apt("An", "09:00", "60 phút"), apt("An", "11:00", "60 phút")]
        result = rank_availability([self.a], appointments, time(10, 0), {1})
        self.assertEqual(result[0].status, "Rảnh")
        self.assertEqual(result[0].next_available, "Ngay bây giờ")
        self.assertEqual(result[0].appointment_count, 2)

    def test_end_minute_is_exclusive(self):
        result = rank_availability([self.a], [apt("An", "09:00", "60 phút")], time(10, 0), {1})
        self.assertEqual(result[0].priority, 1)

    def test_unparseable_duration_defaults_to_thirty(self):
        result = rank_availability([self.a], [apt("An", "09:00", "chưa rõ")], time(9, 20), {1})
        self.assertEqual(result[0].next_available, "10 phút nữa")

    def test_off_shift_employees_are_excluded(self):
        result = rank_availability([self.a, self.b, self.c], [], time(9, 0), {2})
        self.assertEqual([e.employee.name for e in result], ["Bình"])

    def test_equal_priority_keeps_input_order(self):
        result = rank_availability([self.c, self.a, self.b], [], time(9, 0), self.all_ids)
        self.assertEqual([e.employee.id for e in result], [3, 1, 2])

    def test_idempotent_and_fresh_list(self):
        appointments = [apt("An", "09:00", "60 phút")]
        first = rank_availability([self.a, self.b], appointments, time(9, 30), self.all_ids)
        second = rank_availability([self.a, self.b], appointments, time(9, 30), self.all_ids)
        self.assertEqual(first, second)
        self.assertIsNot(first, second)

    def test_to_dict_shape(self):
        entry = rank_availability([{"id": 1, "name": "An"}], [], time(9, 0), {1})[0]
        self.assertEqual(
            entry.to_dict(),
            {
                "employee": {"id": 1, "name": "An"},
                "priority": 1,
                "status": "Rảnh",
                "nextAvailable": "Ngay bây giờ",
                "appointmentCount": 0,
            },
        )


class TestAppointmentsForEmployee(unittest.TestCase):
    def test_name_match_is_exact(self):
        an = emp(1, "An")
        appointments = [apt("An", "09:00"), apt("An Nhiên", "10:00"), apt("an", "11:00")]
        self.assertEqual([a.time for a in appointments_for_employee(an, appointments)], ["09:00"])

    def test_staff_id_takes_precedence_over_name(self):
        an = emp(1, "An")
        appointments = [
            apt("An", "09:00", staff_id=2),  # tên trùng nhưng id của người khác
            apt("Tên cũ", "10:00", staff_id=1),
        ]
        self.assertEqual([a.time for a in appointments_for_employee(an, appointments)], ["10:00"])


class TestOnShiftEmployeeIds(unittest.TestCase):
    def test_absent_and_other_days_are_excluded(self):
        records = [
            SimpleNamespace(employee_id=1, day=DAY, status="working"),
            SimpleNamespace(employee_id=2, day=DAY, status="completed"),
            SimpleNamespace(employee_id=3, day=DAY, status="absent"),
            SimpleNamespace(employee_id=4, day=date(2026, 10, 18), status="working"),
        ]
        self.assertEqual(on_shift_employee_ids(records, DAY), {1, 2})

    def test_iso_string_days(self):
        records = [{"employee_id": 5, "day": "2026-10-19T08:00:00", "status": "working"}]
        self.assertEqual(on_shift_employee_ids(records, DAY), {5})
