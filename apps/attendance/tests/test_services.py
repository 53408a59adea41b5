"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Unit tests for attendance marking and the leave workflow
-------------------------------------------------------------------------
"""
from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings

from apps.attendance.models import (
    Attendance,
    AttendanceStatus,
    Holiday,
    LeaveBalance,
    LeaveRequest,
    LeaveStatus,
)
from apps.attendance.services import AttendanceService, LeaveService, working_days
from apps.core.exceptions import (
    AttendanceDateLocked,
    FutureAttendanceDate,
    ValidationFailed,
    WorkflowTransitionException,
)
from apps.core.models import Company
from apps.core.utils import today
from apps.users.models import UserRole

User = get_user_model()


class WorkingDaysTest(TestCase):

    def test_sundays_and_holidays_are_skipped(self):
        days = working_days(date(2026, 3, 6), date(2026, 3, 10), [date(2026, 3, 10)])
        self.assertEqual(days, [date(2026, 3, 6), date(2026, 3, 7), date(2026, 3, 9)])


class AttendanceServiceTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Acme')
        self.other_company = Company.objects.create(name='Other Co')
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='HR',
            role=UserRole.HR, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Emp', company=self.company,
        )
        self.outsider = User.objects.create_user(
            email='out@other.test', password='secret123', name='Out', company=self.other_company,
        )

    def test_mark_is_an_upsert(self):
        day = today()
        AttendanceService.mark(self.company, self.hr, day, [{'UserId': self.employee.pk, 'Status': 'Present'}])
        AttendanceService.mark(self.company, self.hr, day, [{'UserId': self.employee.pk, 'Status': 'HalfDay'}])
        record = Attendance.objects.get(user=self.employee, date=day)
        self.assertEqual(record.status, AttendanceStatus.HALF_DAY)

    def test_unmarked_removes_record(self):
        day = today()
        AttendanceService.mark(self.company, self.hr, day, [{'UserId': self.employee.pk, 'Status': 'Absent'}])
        AttendanceService.mark(self.company, self.hr, day, [{'UserId': self.employee.pk, 'Status': 'Unmarked'}])
        self.assertFalse(Attendance.objects.filter(user=self.employee, date=day).exists())

    def test_grace_period(self):
        within = today() - timedelta(days=3)
        AttendanceService.mark(self.company, self.hr, within, [{'UserId': self.employee.pk, 'Status': 'Present'}])
        with self.assertRaises(AttendanceDateLocked):
            AttendanceService.mark(
                self.company, self.hr, today() - timedelta(days=4),
                [{'UserId': self.employee.pk, 'Status': 'Present'}],
            )

    def test_future_dates_rejected(self):
        with self.assertRaises(FutureAttendanceDate):
            AttendanceService.mark(
                self.company, self.hr, today() + timedelta(days=1),
                [{'UserId': self.employee.pk, 'Status': 'Present'}],
            )

    @override_settings(ATTENDANCE_MAX_FUTURE_DAYS=2)
    def test_future_window_is_configurable(self):
        AttendanceService.mark(
            self.company, self.hr, today() + timedelta(days=2),
            [{'UserId': self.employee.pk, 'Status': 'Present'}],
        )
        self.assertEqual(Attendance.objects.count(), 1)

    def test_user_of_other_company_rejected(self):
        with self.assertRaises(ValidationFailed) as ctx:
            AttendanceService.mark(
                self.company, self.hr, today(), [{'UserId': self.outsider.pk, 'Status': 'Present'}]
            )
        self.assertEqual(ctx.exception.details['invalidUserIds'], [self.outsider.pk])

    def test_invalid_status_rejected(self):
        with self.assertRaises(ValidationFailed):
            AttendanceService.mark(
                self.company, self.hr, today(), [{'UserId': self.employee.pk, 'Status': 'Late'}]
            )
        self.assertEqual(Attendance.objects.count(), 0)


class LeaveServiceTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Acme')
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='HR',
            role=UserRole.HR, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Emp', company=self.company,
        )

    def _leave(self, start, end):
        return LeaveRequest.objects.create(
            company=self.company, user=self.employee, from_date=start, to_date=end, reason='Family',
        )

    def test_approval_spends_balance_then_marks_unpaid(self):
        Holiday.objects.create(company=self.company, date=date(2026, 3, 3), name='Holi')
        leave = self._leave(date(2026, 3, 2), date(2026, 3, 4))

        LeaveService.decide(leave, self.hr, LeaveStatus.APPROVED)

        statuses = dict(
            Attendance.objects.filter(user=self.employee).values_list('date', 'status')
        )
        self.assertEqual(statuses, {
            date(2026, 3, 2): AttendanceStatus.PAID_LEAVE,
            date(2026, 3, 4): AttendanceStatus.UNPAID_LEAVE,
        })
        balance = LeaveBalance.objects.get(user=self.employee, month='2026-03')
        self.assertEqual(balance.used, 2)
        self.assertEqual(balance.remaining, 0)

    def test_leave_spanning_months_uses_each_months_balance(self):
        leave = self._leave(date(2026, 3, 31), date(2026, 4, 1))
        LeaveService.decide(leave, self.hr, LeaveStatus.APPROVED)
        self.assertEqual(
            Attendance.objects.filter(user=self.employee, status=AttendanceStatus.PAID_LEAVE).count(), 2
        )

    def test_rejection_keeps_reason_and_marks_nothing(self):
        leave = self._leave(date(2026, 3, 2), date(2026, 3, 2))
        LeaveService.decide(leave, self.hr, LeaveStatus.REJECTED, 'Busy season')
        leave.refresh_from_db()
        self.assertEqual(leave.rejection_reason, 'Busy season')
        self.assertFalse(Attendance.objects.exists())

    def test_processed_leave_cannot_be_decided_again(self):
        leave = self._leave(date(2026, 3, 2), date(2026, 3, 2))
        LeaveService.decide(leave, self.hr, LeaveStatus.REJECTED)
        with self.assertRaises(WorkflowTransitionException):
            LeaveService.decide(leave, self.hr, LeaveStatus.APPROVED)

    def test_balance_resyncs_with_setting(self):
        balance = LeaveService.get_or_init_balance(self.company, self.employee, '2026-05')
        self.assertEqual(balance.remaining, 1)
        LeaveService.update_setting(self.company, 3)
        balance = LeaveService.get_or_init_balance(self.company, self.employee, '2026-05')
        self.assertEqual(balance.total_allocated, 3)
        self.assertEqual(balance.remaining, 3)

    def test_apply_rejects_reversed_range(self):
        with self.assertRaises(ValidationFailed):
            LeaveService.apply(self.company, self.employee, {'FromDate': '2026-03-05', 'ToDate': '2026-03-01'})
