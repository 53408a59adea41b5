"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Test cases for employee management views and the bulk
             import command.
-------------------------------------------------------------------------
"""
import tempfile
from pathlib import Path

from django.contrib.auth import get_user_model
from django.core import mail
from django.core.management import call_command
from django.test import TestCase, Client, override_settings
from django.urls import reverse

from apps.core.models import Company
from apps.organization.models import Department
from apps.users.models import UserRole

User = get_user_model()


class EmployeeCodeTests(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Acme')

    def test_employees_get_sequential_codes(self):
        first = User.objects.create_user(email='a@acme.test', name='A', company=self.company)
        second = User.objects.create_user(email='b@acme.test', name='B', company=self.company)
        self.assertEqual(first.employee_code, 'DIS-11001')
        self.assertEqual(second.employee_code, 'DIS-11002')

    def test_staff_roles_get_no_code(self):
        hr = User.objects.create_user(email='hr@acme.test', name='HR', role=UserRole.HR, company=self.company)
        self.assertIsNone(hr.employee_code)


class UserViewsTest(TestCase):
    """Test cases for the user management endpoints"""

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.other_company = Company.objects.create(name='Other Co')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='Hema HR',
            role=UserRole.HR, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Ravi',
            role=UserRole.EMPLOYEE, company=self.company,
        )
        self.outsider = User.objects.create_user(
            email='out@other.test', password='secret123', name='Outsider',
            role=UserRole.EMPLOYEE, company=self.other_company,
        )
        self.department = Department.objects.create(company=self.company, department_name='Engineering')

    @override_settings(NEW_EMPLOYEE_NOTIFY_EMAILS=['owner@acme.test'])
    def test_add_user_sends_notification(self):
        self.client.force_login(self.hr)
        with self.captureOnCommitCallbacks(execute=True):
            response = self.client.post(
                reverse('users:add_user'),
                {
                    'Name': 'Neha',
                    'Email': 'neha@acme.test',
                    'role': UserRole.EMPLOYEE,
                    'DepartmentId': self.department.pk,
                    'BankDetails': {'bankName': 'SBI', 'ifscCode': 'SBIN0000001'},
                },
                content_type='application/json',
            )
        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual(data['DepartmentName'], 'Engineering')
        self.assertEqual(data['BankDetails']['bankName'], 'SBI')
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn('Neha', mail.outbox[0].subject)

    def test_hr_cannot_create_admin(self):
        self.client.force_login(self.hr)
        response = self.client.post(
            reverse('users:add_user'),
            {'Name': 'Boss', 'Email': 'boss@acme.test', 'role': UserRole.ADMIN},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)

    def test_add_user_duplicate_email(self):
        self.client.force_login(self.admin)
        response = self.client.post(
            reverse('users:add_user'),
            {'Name': 'Dup', 'Email': 'emp@acme.test', 'role': UserRole.EMPLOYEE},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_employee_cannot_list_users(self):
        self.client.force_login(self.employee)
        response = self.client.get(reverse('users:user_list'))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['requiredRoles'], [UserRole.ADMIN, UserRole.HR, UserRole.CA])

    def test_user_list_is_scoped_to_company(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('users:user_list'))
        emails = {row['Email'] for row in response.json()['data']}
        self.assertNotIn('out@other.test', emails)
        self.assertIn('emp@acme.test', emails)

    def test_user_of_other_company_is_404(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('users:user_detail', args=[self.outsider.pk]))
        self.assertEqual(response.status_code, 404)

    def test_employee_sees_only_own_profile(self):
        self.client.force_login(self.employee)
        own = self.client.get(reverse('users:user_detail', args=[self.employee.pk]))
        other = self.client.get(reverse('users:user_detail', args=[self.hr.pk]))
        self.assertEqual(own.status_code, 200)
        self.assertEqual(other.status_code, 403)

    def test_employee_cannot_change_own_role(self):
        self.client.force_login(self.employee)
        response = self.client.put(
            reverse('users:update_user', args=[self.employee.pk]),
            {'Name': 'Ravi Kumar', 'role': UserRole.ADMIN},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.employee.refresh_from_db()
        self.assertEqual(self.employee.name, 'Ravi Kumar')
        self.assertEqual(self.employee.role, UserRole.EMPLOYEE)

    def test_hr_cannot_delete_admin(self):
        self.client.force_login(self.hr)
        response = self.client.delete(reverse('users:delete_user', args=[self.admin.pk]))
        self.assertEqual(response.status_code, 403)

    def test_cannot_delete_self(self):
        self.client.force_login(self.admin)
        response = self.client.delete(reverse('users:delete_user', args=[self.admin.pk]))
        self.assertEqual(response.status_code, 400)

    def test_count_employees_by_department(self):
        self.employee.department = self.department
        self.employee.save()
        self.client.force_login(self.admin)
        response = self.client.get(reverse('users:count_employees_by_department'))
        self.assertEqual(response.json()['data'], [
            {'DepartmentId': self.department.pk, 'DepartmentName': 'Engineering', 'total': 1}
        ])

    def test_hr_profile_requires_hr(self):
        self.client.force_login(self.admin)
        self.assertEqual(self.client.get(reverse('users:hr_profile')).status_code, 403)
        self.client.force_login(self.hr)
        response = self.client.get(reverse('users:hr_profile'))
        self.assertEqual(response.json()['data']['Name'], 'Hema HR')

    def test_export_users_csv(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('users:export_users_csv'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'text/csv; charset=utf-8')
        content = response.content.decode('utf-8-sig')
        self.assertIn('Employee Code,Name,Email', content)
        self.assertIn('emp@acme.test', content)


class ImportEmployeesCommandTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Acme')

    def _write_csv(self, text: str) -> Path:
        handle = tempfile.NamedTemporaryFile('w', suffix='.csv', delete=False, encoding='utf-8')
        handle.write(text)
        handle.close()
        self.addCleanup(Path(handle.name).unlink)
        return Path(handle.name)

    def test_import_creates_employees_and_departments(self):
        path = self._write_csv(
            "Name,Email,Department,BankName\n"
            "Anil,anil@acme.test,Sales,HDFC\n"
            "Bina,bina@acme.test,Sales,\n"
        )
        call_command('import_employees', str(path), '--company', 'Acme')

        self.assertEqual(User.objects.filter(company=self.company).count(), 2)
        anil = User.objects.get(email='anil@acme.test')
        self.assertEqual(anil.department.department_name, 'Sales')
        self.assertEqual(anil.bank_name, 'HDFC')
        self.assertEqual(Department.objects.filter(company=self.company).count(), 1)

    def test_dry_run_saves_nothing(self):
        path = self._write_csv("Name,Email\nAnil,anil@acme.test\n")
        call_command('import_employees', str(path), '--company', str(self.company.pk), '--dry-run')
        self.assertFalse(User.objects.filter(email='anil@acme.test').exists())
