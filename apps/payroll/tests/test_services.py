"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Unit tests for salary settings, the approval workflow,
             payroll runs and slip download requests.
-------------------------------------------------------------------------
"""
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from apps.core.exceptions import (
    DuplicateRecordException,
    ResourceNotFound,
    UnauthorizedRoleException,
    ValidationFailed,
    WorkflowTransitionException,
)
from apps.core.models import Company, RecentActivity
from apps.expenditure.models import Expense, ExpenseType
from apps.payroll.models import (
    HeadType,
    RequestStatus,
    SalaryConfigurationRequest,
    SalaryHead,
    SalarySetting,
    SalarySlip,
    SlipRequestStatus,
)
from apps.payroll.services import (
    PayrollService,
    SalaryHeadService,
    SalarySettingService,
    SlipRequestService,
)
from apps.users.models import UserRole

User = get_user_model()


class PayrollFixtureMixin:

    def setUp(self):
        self.company = Company.objects.create(name='Acme')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='HR',
            role=UserRole.HR, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Ravi', company=self.company,
        )
        self.basic = SalaryHead.objects.create(company=self.company, title='Basic Salary', short_name='BS')
        self.hra = SalaryHead.objects.create(company=self.company, title='House Rent', short_name='HRA')

    def heads_payload(self, basic=30000, hra_pct=40):
        return [
            {'SalaryHeadId': self.basic.pk, 'applicableValue': basic, 'percentage': 0},
            {'SalaryHeadId': self.hra.pk, 'percentage': hra_pct},
        ]

    def configure(self, employee=None):
        return SalarySettingService.submit(self.company, self.admin, {
            'EmployeeID': (employee or self.employee).pk,
            'SalaryHeads': self.heads_payload(),
        })['setting']


class SalaryHeadServiceTest(PayrollFixtureMixin, TestCase):

    def test_short_name_unique_ignoring_case(self):
        with self.assertRaises(DuplicateRecordException):
            SalaryHeadService.create(self.company, {'SalaryHeadsTitle': 'Basic', 'ShortName': 'bs'})

    def test_invalid_type(self):
        with self.assertRaises(ValidationFailed):
            SalaryHeadService.create(self.company, {
                'SalaryHeadsTitle': 'Bonus', 'ShortName': 'BON', 'SalaryHeadsType': 'Perk',
            })

    def test_head_in_use_cannot_be_deleted(self):
        self.configure()
        with self.assertRaises(ValidationFailed):
            SalaryHeadService.delete(self.hra)

    def test_head_in_pending_request_cannot_be_deleted(self):
        SalarySettingService.submit(self.company, self.hr, {
            'EmployeeID': self.employee.pk,
            'SalaryHeads': self.heads_payload(),
        })
        with self.assertRaisesMessage(ValidationFailed, 'pending salary request'):
            SalaryHeadService.delete(self.hra)
        self.assertTrue(SalaryHead.objects.filter(pk=self.hra.pk).exists())


class SalarySettingServiceTest(PayrollFixtureMixin, TestCase):

    def test_percentage_heads_derive_from_basic(self):
        lines = SalarySettingService.build_lines(self.company, self.heads_payload())
        self.assertEqual(lines[1], {'SalaryHeadId': self.hra.pk, 'applicableValue': 12000.0, 'percentage': 40.0})

    def test_basic_required_before_percentages(self):
        with self.assertRaisesMessage(ValidationFailed, 'Basic salary must be entered'):
            SalarySettingService.build_lines(self.company, [{'SalaryHeadId': self.hra.pk, 'percentage': 40}])

    def test_head_of_other_company_is_not_found(self):
        other = Company.objects.create(name='Other Co')
        foreign = SalaryHead.objects.create(company=other, title='Basic', short_name='BS')
        with self.assertRaises(ResourceNotFound):
            SalarySettingService.build_lines(self.company, [
                {'SalaryHeadId': foreign.pk, 'applicableValue': 1000, 'percentage': 0},
            ])

    def test_admin_writes_setting_directly(self):
        setting = self.configure()
        self.assertEqual(setting.lines.count(), 2)
        self.assertFalse(SalaryConfigurationRequest.objects.exists())

    def test_admin_resubmission_replaces_lines(self):
        self.configure()
        result = SalarySettingService.submit(self.company, self.admin, {
            'EmployeeID': self.employee.pk,
            'SalaryHeads': self.heads_payload(basic=40000),
        })
        self.assertFalse(result['created'])
        hra_line = result['setting'].lines.get(salary_head=self.hra)
        self.assertEqual(hra_line.applicable_value, Decimal('16000.00'))
        self.assertEqual(SalarySetting.objects.count(), 1)

    def test_hr_submission_waits_for_approval(self):
        result = SalarySettingService.submit(self.company, self.hr, {
            'EmployeeID': self.employee.pk,
            'SalaryHeads': self.heads_payload(),
            'isTaxApplicable': True,
        })
        request_obj = result['request']
        self.assertEqual(request_obj.status, RequestStatus.PENDING)
        self.assertFalse(SalarySetting.objects.exists())

        setting = SalarySettingService.approve(request_obj, self.admin)
        self.assertTrue(setting.is_tax_applicable)
        self.assertEqual(setting.lines.count(), 2)

        with self.assertRaisesMessage(WorkflowTransitionException, 'Request already Approved'):
            SalarySettingService.reject(request_obj, self.admin, 'Too late')

    def test_approve_with_removed_head_is_rejected(self):
        request_obj = SalarySettingService.submit(self.company, self.hr, {
            'EmployeeID': self.employee.pk,
            'SalaryHeads': self.heads_payload(),
        })['request']
        SalaryHead.objects.filter(pk=self.hra.pk).delete()

        with self.assertRaises(ValidationFailed) as ctx:
            SalarySettingService.approve(request_obj, self.admin)
        self.assertEqual(ctx.exception.details, {'missingSalaryHeadIds': [self.hra.pk]})
        self.assertFalse(SalarySetting.objects.exists())
        request_obj.refresh_from_db()
        self.assertEqual(request_obj.status, RequestStatus.PENDING)

    def test_hr_submission_without_changes(self):
        self.configure()
        with self.assertRaisesMessage(ValidationFailed, 'No changes detected'):
            SalarySettingService.submit(self.company, self.hr, {
                'EmployeeID': self.employee.pk,
                'SalaryHeads': self.heads_payload(),
            })


class PayrollServiceTest(PayrollFixtureMixin, TestCase):

    def test_generate_books_salary_expense(self):
        self.configure()
        slip = PayrollService.generate(self.company, self.employee, '2026-03', self.admin)
        self.assertEqual(slip.gross_salary, Decimal('42000.00'))

        expense = Expense.objects.get(company=self.company, expense_type=ExpenseType.SALARY)
        self.assertEqual(expense.amount, Decimal('42000.00'))
        self.assertTrue(RecentActivity.objects.filter(action='Generated Salary').exists())

    def test_generate_twice_is_duplicate(self):
        self.configure()
        PayrollService.generate(self.company, self.employee, '2026-03', self.admin)
        with self.assertRaises(DuplicateRecordException):
            PayrollService.generate(self.company, self.employee, '2026-03', self.admin)

    def test_generate_without_setting(self):
        with self.assertRaisesMessage(ResourceNotFound, 'Salary settings not found'):
            PayrollService.generate(self.company, self.employee, '2026-03', self.admin)

    def test_generate_all_reports_unconfigured_employees(self):
        self.configure()
        second = User.objects.create_user(email='two@acme.test', name='Two', company=self.company)

        result = PayrollService.generate_all(self.company, '2026-03', self.hr)
        self.assertEqual(result['processed'], 1)
        self.assertEqual(result['skipped'], 1)
        self.assertEqual(result['errors'], [{'employeeId': second.pk, 'reason': 'Salary settings not found'}])

        again = PayrollService.generate_all(self.company, '2026-03', self.hr)
        self.assertEqual(again['processed'], 0)
        self.assertEqual(again['skipped'], 2)

        # one expense row per month, whatever the number of runs
        self.assertEqual(Expense.objects.filter(expense_type=ExpenseType.SALARY).count(), 1)

    def test_generate_all_without_employees(self):
        empty = Company.objects.create(name='Empty')
        with self.assertRaises(ResourceNotFound):
            PayrollService.generate_all(empty, '2026-03', self.admin)

    def test_deduction_heads(self):
        pf = SalaryHead.objects.create(
            company=self.company, title='Provident Fund', short_name='PF', head_type=HeadType.DEDUCTIONS,
        )
        SalarySettingService.submit(self.company, self.admin, {
            'EmployeeID': self.employee.pk,
            'SalaryHeads': self.heads_payload() + [{'SalaryHeadId': pf.pk, 'percentage': 12}],
        })
        slip = PayrollService.generate(self.company, self.employee, '2026-03', self.admin)
        self.assertEqual(slip.total_deductions, Decimal('3600.00'))
        self.assertEqual(slip.net_salary, Decimal('38400.00'))


class SlipRequestServiceTest(PayrollFixtureMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.configure()
        PayrollService.generate(self.company, self.employee, '2026-03', self.admin)

    def test_request_needs_existing_slip(self):
        with self.assertRaises(ResourceNotFound):
            SlipRequestService.request(self.company, self.employee, '2026-04')

    def test_single_request_per_month(self):
        SlipRequestService.request(self.company, self.employee, '2026-03')
        with self.assertRaises(ValidationFailed) as ctx:
            SlipRequestService.request(self.company, self.employee, '2026-03')
        self.assertEqual(ctx.exception.details['status'], SlipRequestStatus.PENDING)

    def test_download_gate(self):
        with self.assertRaises(UnauthorizedRoleException) as ctx:
            SlipRequestService.check_download(self.employee, '2026-03')
        self.assertTrue(ctx.exception.details['needsRequest'])

        request_obj = SlipRequestService.request(self.company, self.employee, '2026-03')
        with self.assertRaises(UnauthorizedRoleException):
            SlipRequestService.check_download(self.employee, '2026-03')

        SlipRequestService.decide(request_obj, self.hr, SlipRequestStatus.APPROVED)
        allowed = SlipRequestService.check_download(self.employee, '2026-03')
        self.assertIsNotNone(allowed.downloaded_at)
        self.assertIsNotNone(allowed.approved_at)

    def test_rejected_request_blocks_download(self):
        request_obj = SlipRequestService.request(self.company, self.employee, '2026-03')
        SlipRequestService.decide(request_obj, self.hr, SlipRequestStatus.REJECTED, 'Pending audit')
        with self.assertRaises(UnauthorizedRoleException) as ctx:
            SlipRequestService.check_download(self.employee, '2026-03')
        self.assertEqual(ctx.exception.details['rejectionReason'], 'Pending audit')

    def test_invalid_decision(self):
        request_obj = SlipRequestService.request(self.company, self.employee, '2026-03')
        with self.assertRaises(ValidationFailed):
            SlipRequestService.decide(request_obj, self.hr, 'maybe')
        self.assertEqual(SalarySlip.objects.count(), 1)
