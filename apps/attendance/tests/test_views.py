"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Test cases for attendance, holiday and leave endpoints
-------------------------------------------------------------------------
"""
from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse

from apps.attendance.models import Attendance, Holiday, LeaveRequest, LeaveStatus
from apps.core.models import Company
from apps.core.utils import today
from apps.users.models import UserRole

User = get_user_model()


class AttendanceViewsTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='HR',
            role=UserRole.HR, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Emp', company=self.company,
        )
        self.colleague = User.objects.create_user(
            email='col@acme.test', password='secret123', name='Col', company=self.company,
        )

    def test_mark_attendance(self):
        self.client.force_login(self.hr)
        day = today().isoformat()
        response = self.client.post(
            reverse('attendance:mark_attendance'),
            {'Date': day, 'Employees': [{'UserId': self.employee.pk, 'Status': 'Present'}]},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['employeesUpdated'], 1)

    def test_mark_attendance_bad_date_format(self):
        self.client.force_login(self.hr)
        response = self.client.post(
            reverse('attendance:mark_attendance'),
            {'Date': '01/03/2026', 'Employees': [{'UserId': self.employee.pk, 'Status': 'Present'}]},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_locked_date_is_403(self):
        self.client.force_login(self.hr)
        day = (today() - timedelta(days=10)).isoformat()
        response = self.client.post(
            reverse('attendance:mark_attendance'),
            {'Date': day, 'Employees': [{'UserId': self.employee.pk, 'Status': 'Present'}]},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)

    def test_employee_cannot_mark(self):
        self.client.force_login(self.employee)
        response = self.client.post(
            reverse('attendance:mark_attendance'),
            {'Date': today().isoformat(), 'Employees': [{'UserId': self.employee.pk, 'Status': 'Present'}]},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)

    def test_report_lists_employees_with_day_grid(self):
        Attendance.objects.create(company=self.company, user=self.employee, date=date(2026, 3, 5), status='Present')
        self.client.force_login(self.hr)
        response = self.client.get(reverse('attendance:attendance_report'), {'Month': '2026-03'})
        rows = {row['UserId']: row for row in response.json()['data']}
        self.assertEqual(rows[self.employee.pk]['Attendance'], {'5': 'Present'})
        self.assertEqual(rows[self.colleague.pk]['Attendance'], {})
        self.assertNotIn(self.hr.pk, rows)

    def test_employee_reads_only_own_attendance(self):
        self.client.force_login(self.employee)
        own = self.client.get(reverse('attendance:employee_attendance'), {'Month': '2026-03'})
        other = self.client.get(
            reverse('attendance:employee_attendance'), {'Month': '2026-03', 'UserId': self.colleague.pk}
        )
        self.assertEqual(own.status_code, 200)
        self.assertEqual(other.status_code, 403)

    def test_duplicate_holiday(self):
        self.client.force_login(self.hr)
        Holiday.objects.create(company=self.company, date=date(2026, 8, 15), name='Independence Day')
        response = self.client.post(
            reverse('attendance:add_holiday'),
            {'Date': '2026-08-15', 'Name': 'Again'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_leave_flow(self):
        self.client.force_login(self.employee)
        applied = self.client.post(
            reverse('attendance:apply_leave'),
            {'FromDate': '2026-03-02', 'ToDate': '2026-03-02', 'Reason': 'Doctor'},
            content_type='application/json',
        )
        self.assertEqual(applied.status_code, 201)
        leave_id = applied.json()['data']['id']

        self.client.force_login(self.hr)
        decided = self.client.put(
            reverse('attendance:leave_status'),
            {'RequestId': leave_id, 'Status': 'Approved'},
            content_type='application/json',
        )
        self.assertEqual(decided.status_code, 200)
        self.assertEqual(LeaveRequest.objects.get(pk=leave_id).status, LeaveStatus.APPROVED)

        again = self.client.put(
            reverse('attendance:leave_status'),
            {'RequestId': leave_id, 'Status': 'Rejected'},
            content_type='application/json',
        )
        self.assertEqual(again.status_code, 400)

    def test_leave_settings_update(self):
        self.client.force_login(self.hr)
        response = self.client.put(
            reverse('attendance:update_leave_settings'),
            {'DefaultMonthlyPaidLeaves': 2},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        settings_response = self.client.get(reverse('attendance:leave_settings'))
        self.assertEqual(settings_response.json()['data']['DefaultMonthlyPaidLeaves'], 2)
