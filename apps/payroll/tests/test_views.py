"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Test cases for payroll endpoints
-------------------------------------------------------------------------
"""
from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse

from apps.core.models import Company
from apps.organization.models import Department
from apps.payroll.models import (
    SalaryConfigurationRequest,
    SalaryHead,
    SalarySetting,
    SalarySlip,
    SalarySlipRequest,
)
from apps.users.models import UserRole

User = get_user_model()


class PayrollClientMixin:

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme', address='MG Road, Pune')
        self.department = Department.objects.create(company=self.company, department_name='Engineering')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='HR',
            role=UserRole.HR, company=self.company,
        )
        self.ca = User.objects.create_user(
            email='ca@acme.test', password='secret123', name='CA',
            role=UserRole.CA, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Ravi',
            company=self.company, department=self.department, bank_name='HDFC',
        )
        self.colleague = User.objects.create_user(
            email='col@acme.test', password='secret123', name='Col', company=self.company,
        )
        self.basic = SalaryHead.objects.create(company=self.company, title='Basic Salary', short_name='BS')
        self.hra = SalaryHead.objects.create(company=self.company, title='House Rent', short_name='HRA')

    def post(self, name, payload):
        return self.client.post(reverse(name), payload, content_type='application/json')

    def configure(self, employee):
        self.client.force_login(self.admin)
        return self.post('payroll:add_salary_setting', {
            'EmployeeID': employee.pk,
            'SalaryHeads': [
                {'SalaryHeadId': self.basic.pk, 'applicableValue': 30000, 'percentage': 0},
                {'SalaryHeadId': self.hra.pk, 'percentage': 40},
            ],
        })


class PayrollViewsTest(PayrollClientMixin, TestCase):
    """Test cases for salary configuration and payroll runs"""

    def test_add_salary_head(self):
        self.client.force_login(self.hr)
        response = self.post('payroll:add_salary_head', {
            'SalaryHeadsTitle': 'Provident Fund', 'ShortName': 'PF', 'SalaryHeadsType': 'Deductions',
        })
        self.assertEqual(response.status_code, 201)
        duplicate = self.post('payroll:add_salary_head', {'SalaryHeadsTitle': 'PF again', 'ShortName': 'pf'})
        self.assertEqual(duplicate.status_code, 400)

    def test_admin_setting_is_saved(self):
        response = self.configure(self.employee)
        self.assertEqual(response.status_code, 201)
        lines = response.json()['data']['SalaryHeads']
        self.assertEqual(lines[1]['applicableValue'], 12000.0)

    def test_hr_setting_goes_through_approval(self):
        self.client.force_login(self.hr)
        response = self.post('payroll:add_salary_setting', {
            'EmployeeID': self.employee.pk,
            'SalaryHeads': [{'SalaryHeadId': self.basic.pk, 'applicableValue': 25000, 'percentage': 0}],
        })
        self.assertEqual(response.status_code, 201)
        request_id = response.json()['data']['id']

        # HR cannot see the approval queue
        self.assertEqual(self.client.get(reverse('payroll:salary_request_list')).status_code, 403)

        self.client.force_login(self.admin)
        queue = self.client.get(reverse('payroll:salary_request_list'))
        self.assertEqual(queue.json()['count'], 1)
        rejected = self.post('payroll:reject_salary_request', {'id': request_id, 'RejectionReason': 'Too high'})
        self.assertEqual(rejected.status_code, 200)

        self.client.force_login(self.hr)
        notifications = self.client.get(reverse('payroll:hr_notifications'))
        self.assertEqual(notifications.json()['data'][0]['RejectionReason'], 'Too high')
        self.client.put(
            reverse('payroll:mark_notification_read'), {'id': request_id}, content_type='application/json'
        )
        self.assertTrue(SalaryConfigurationRequest.objects.get(pk=request_id).is_read)
        self.assertEqual(self.client.get(reverse('payroll:hr_notifications')).json()['count'], 0)

    def test_pending_request_with_removed_head(self):
        self.client.force_login(self.hr)
        response = self.post('payroll:add_salary_setting', {
            'EmployeeID': self.employee.pk,
            'SalaryHeads': [
                {'SalaryHeadId': self.basic.pk, 'applicableValue': 25000, 'percentage': 0},
                {'SalaryHeadId': self.hra.pk, 'percentage': 40},
            ],
        })
        request_id = response.json()['data']['id']

        deleted = self.client.delete(
            reverse('payroll:delete_salary_head'), {'id': self.hra.pk}, content_type='application/json'
        )
        self.assertEqual(deleted.status_code, 400)

        # head removed outside the API
        SalaryHead.objects.filter(pk=self.hra.pk).delete()
        self.client.force_login(self.admin)
        approved = self.post('payroll:approve_salary_request', {'id': request_id})
        self.assertEqual(approved.status_code, 400)
        self.assertEqual(approved.json()['missingSalaryHeadIds'], [self.hra.pk])
        self.assertFalse(SalarySetting.objects.exists())

    def test_tax_slab_validation(self):
        self.client.force_login(self.ca)
        response = self.post('payroll:add_tax_slab', {
            'minIncome': 500000, 'maxIncome': 250000, 'taxRate': 5, 'effectiveFrom': '2026-04-01',
        })
        self.assertEqual(response.status_code, 400)
        response = self.post('payroll:add_tax_slab', {
            'minIncome': 0, 'maxIncome': 250000, 'taxRate': 0, 'effectiveFrom': '2026-04-01',
        })
        self.assertEqual(response.status_code, 201)

    def test_hr_cannot_manage_tax_slabs(self):
        self.client.force_login(self.hr)
        self.assertEqual(self.client.get(reverse('payroll:tax_slab_list')).status_code, 403)

    def test_calculate_salary_and_duplicate(self):
        self.configure(self.employee)
        response = self.post('payroll:calculate_salary', {'EmployeeID': self.employee.pk, 'Month': '03-2026'})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['Month'], '2026-03')
        self.assertEqual(response.json()['data']['grossSalary'], 42000.0)

        again = self.post('payroll:calculate_salary', {'EmployeeID': self.employee.pk, 'Month': '2026-03'})
        self.assertEqual(again.status_code, 400)

    def test_preview_does_not_save(self):
        self.configure(self.employee)
        response = self.post('payroll:preview_salary', {'EmployeeID': self.employee.pk, 'Month': '2026-03'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['netSalary'], 42000.0)
        self.assertFalse(SalarySlip.objects.exists())

    def test_preview_rejects_year_zero(self):
        self.configure(self.employee)
        response = self.post('payroll:preview_salary', {'EmployeeID': self.employee.pk, 'Month': '0000-01'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Invalid Month format')

    def test_calculate_for_all(self):
        self.configure(self.employee)
        response = self.post('payroll:calculate_salary_all', {'Month': '2026-03'})
        body = response.json()
        self.assertEqual(body['processed'], 1)
        self.assertEqual(body['skipped'], 1)
        self.assertEqual(body['message'], 'Payroll processed for Mar 2026')

    def test_analytics(self):
        self.configure(self.employee)
        self.post('payroll:calculate_salary_all', {'Month': '2026-03'})

        distribution = self.post('payroll:salary_distribution', {'Month': '2026-03'})
        self.assertEqual(distribution.json()['data']['totalGrossSalary'], 42000.0)

        departments = self.client.get(reverse('payroll:departmentwise_salary'), {'Month': '2026-03'})
        self.assertEqual(departments.json()['data'][0]['department'], 'Engineering')

        empty = self.post('payroll:salary_distribution', {'Month': '2025-01'})
        self.assertEqual(empty.status_code, 404)

    def test_export_monthly_salary_csv(self):
        self.configure(self.employee)
        self.post('payroll:calculate_salary_all', {'Month': '2026-03'})
        response = self.post('payroll:export_salary_csv', {'Month': '2026-03'})
        self.assertEqual(response.status_code, 200)
        content = response.content.decode('utf-8-sig')
        self.assertIn('Net Payable', content)
        self.assertIn('HDFC', content)

    def test_export_without_slips_is_404(self):
        self.client.force_login(self.hr)
        response = self.post('payroll:export_salary_csv', {'Month': '2026-03'})
        self.assertEqual(response.status_code, 404)


class SalarySlipDownloadTest(PayrollClientMixin, TestCase):
    """Employee download flow: request, HR decision, download."""

    def setUp(self):
        super().setUp()
        self.configure(self.employee)
        self.configure(self.colleague)
        self.post('payroll:calculate_salary_all', {'Month': '2026-03'})

    def test_download_flow(self):
        self.client.force_login(self.employee)
        blocked = self.post('payroll:generate_salary_slip', {'Month': '2026-03'})
        self.assertEqual(blocked.status_code, 403)
        self.assertTrue(blocked.json()['needsRequest'])

        requested = self.post('payroll:request_salary_slip', {'Month': '2026-03'})
        self.assertEqual(requested.status_code, 201)
        request_id = requested.json()['data']['id']

        self.client.force_login(self.hr)
        decided = self.client.put(
            reverse('payroll:update_salary_slip_request'),
            {'id': request_id, 'status': 'Approved'},
            content_type='application/json',
        )
        self.assertEqual(decided.json()['data']['status'], 'approved')

        self.client.force_login(self.employee)
        slip = self.post('payroll:generate_salary_slip', {'Month': '2026-03'})
        self.assertEqual(slip.status_code, 200)
        data = slip.json()['data']
        self.assertEqual(data['month'], 'Mar 2026')
        self.assertEqual(data['employee']['department'], 'Engineering')
        self.assertEqual(data['bankDetails']['bankName'], 'HDFC')
        self.assertEqual(data['netSalaryInWords'], 'Forty Two Thousand')
        self.assertIsNotNone(SalarySlipRequest.objects.get(pk=request_id).downloaded_at)

    def test_employee_cannot_download_colleague_slip(self):
        self.client.force_login(self.employee)
        response = self.post('payroll:generate_salary_slip', {'Month': '2026-03', 'EmployeeID': self.colleague.pk})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['message'], 'You can only download your own salary slip')

    def test_hr_downloads_without_request(self):
        self.client.force_login(self.hr)
        response = self.post('payroll:generate_salary_slip', {'Month': '2026-03', 'EmployeeID': self.employee.pk})
        self.assertEqual(response.status_code, 200)

    def test_employee_sees_only_own_requests(self):
        self.client.force_login(self.employee)
        self.post('payroll:request_salary_slip', {'Month': '2026-03'})
        self.client.force_login(self.colleague)
        self.post('payroll:request_salary_slip', {'Month': '2026-03'})

        response = self.client.get(reverse('payroll:salary_slip_requests'))
        self.assertEqual(response.json()['count'], 1)
        self.assertEqual(response.json()['data'][0]['EmployeeID']['id'], self.colleague.pk)
