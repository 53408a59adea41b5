"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Unit tests for dashboard services and endpoints.
-------------------------------------------------------------------------
"""
from datetime import date, datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.test import TestCase, Client
from django.urls import reverse
from django.utils import timezone

from apps.core.models import Company
from apps.dashboard.services import DashboardService, summary_cache_key
from apps.expenditure.models import Expense, ExpenseType
from apps.organization.models import Branch
from apps.payroll.models import SalarySlip
from apps.revenue.models import Revenue
from apps.sales.models import Order
from apps.users.models import UserRole

User = get_user_model()


class DashboardServiceTestCase(TestCase):
    """Test cases for DashboardService methods."""

    def setUp(self):
        cache.clear()
        self.company = Company.objects.create(name='Acme')
        self.other_company = Company.objects.create(name='Other Co')
        self.employee = User.objects.create_user(email='emp@acme.test', name='Emp', company=self.company)

        Revenue.objects.create(company=self.company, source='Consulting', amount=Decimal('10000'),
                               revenue_date=date(2026, 3, 5))
        Revenue.objects.create(company=self.other_company, source='Elsewhere', amount=Decimal('99999'),
                               revenue_date=date(2026, 3, 5))
        Expense.objects.create(company=self.company, expense_title='Rent', amount=Decimal('4000'),
                               expense_date=date(2026, 3, 1), expense_type=ExpenseType.RENT)
        Expense.objects.create(company=self.company, expense_title='Taxi', amount=Decimal('500'),
                               expense_date=date(2026, 3, 9), expense_type=ExpenseType.TRAVEL)
        SalarySlip.objects.create(company=self.company, employee=self.employee, month='2026-03',
                                  gross_salary=Decimal('30000'), net_salary=Decimal('28000'),
                                  total_deductions=Decimal('2000'))

    def test_revenue_vs_expense_covers_every_month(self):
        data = DashboardService.revenue_vs_expense(self.company, 2026)
        self.assertEqual(len(data), 12)
        self.assertEqual(data[2], {'month': 'March', 'revenue': Decimal('10000.00'), 'expense': Decimal('4500.00')})
        self.assertEqual(data[0]['revenue'], Decimal('0.00'))

    def test_profit_payroll(self):
        march = DashboardService.profit_payroll(self.company, 2026)[2]
        self.assertEqual(march['profit'], Decimal('5500.00'))
        self.assertEqual(march['payroll'], Decimal('30000.00'))

    def test_summary_is_cached_and_invalidated(self):
        summary = DashboardService.get_summary(self.company)
        self.assertEqual(summary['totalRevenue'], Decimal('10000.00'))
        self.assertEqual(summary['totalEmployees'], 1)
        self.assertIsNotNone(cache.get(summary_cache_key(self.company.pk)))

        Branch.objects.create(company=self.company, branch_name='Pune')
        self.assertIsNone(cache.get(summary_cache_key(self.company.pk)))
        self.assertEqual(DashboardService.get_summary(self.company)['totalBranches'], 1)

    def test_revenue_change_drops_cached_summary(self):
        DashboardService.get_summary(self.company)
        Revenue.objects.create(company=self.company, source='Training', amount=Decimal('500'),
                               revenue_date=date(2026, 3, 6))
        self.assertEqual(DashboardService.get_summary(self.company)['totalRevenue'], Decimal('10500.00'))

    def test_monthly_report(self):
        report = DashboardService.monthly_report(self.company, 2026, 3)
        self.assertEqual(report['period']['monthName'], 'March')
        self.assertEqual(report['expenses']['byType'][0]['type'], ExpenseType.RENT)
        self.assertEqual(report['payroll']['employeeCount'], 1)
        self.assertEqual(report['payroll']['totalNetSalary'], Decimal('28000.00'))
        self.assertEqual(report['netProfit'], Decimal('5500.00'))

    def test_annual_report_totals(self):
        report = DashboardService.annual_report(self.company, 2026)
        self.assertEqual(report['totals']['revenue'], Decimal('10000.00'))
        self.assertEqual(report['totals']['payroll'], Decimal('30000.00'))
        self.assertEqual(len(report['months']), 12)

    def test_orders_section_uses_local_date(self):
        order = Order.objects.create(company=self.company, client_name='Globex', service_title='Audit',
                                     base_amount=Decimal('1000'), amount=Decimal('1000'))
        # 02:00 IST on 1 March is 28 February in UTC
        Order.objects.filter(pk=order.pk).update(created_at=timezone.make_aware(datetime(2026, 3, 1, 2, 0)))
        _, headers, rows = DashboardService.section_rows(self.company, 'orders', 2026, 3)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0][headers.index('Created Date')], '2026-03-01')


class DashboardViewsTestCase(TestCase):

    def setUp(self):
        cache.clear()
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Emp', company=self.company,
        )
        Revenue.objects.create(company=self.company, source='Consulting', amount=Decimal('1200'),
                               revenue_date=date(2026, 3, 5))

    def test_employee_cannot_see_dashboard(self):
        self.client.force_login(self.employee)
        response = self.client.get(reverse('dashboard:summary'))
        self.assertEqual(response.status_code, 403)

    def test_summary(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('dashboard:summary'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['totalRevenue'], 1200.0)

    def test_revenue_vs_expense_for_year(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('dashboard:revenue_vs_expense'), {'year': 2026})
        self.assertEqual(response.json()['data'][2]['revenue'], 1200.0)

    def test_invalid_year(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('dashboard:annual_report'), {'year': 1999})
        self.assertEqual(response.status_code, 400)

    def test_export_section(self):
        self.client.force_login(self.admin)
        response = self.client.get(
            reverse('dashboard:export_monthly_report'),
            {'section': 'revenue', 'month': 3, 'year': 2026, 'format': 'csv'},
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn('Consulting', response.content.decode('utf-8-sig'))

    def test_export_xlsx_default(self):
        self.client.force_login(self.admin)
        response = self.client.get(
            reverse('dashboard:export_monthly_report'), {'section': 'orders', 'month': 3, 'year': 2026}
        )
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        )

    def test_export_invalid_section(self):
        self.client.force_login(self.admin)
        response = self.client.get(reverse('dashboard:export_monthly_report'), {'section': 'payroll'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('validSections', response.json())
