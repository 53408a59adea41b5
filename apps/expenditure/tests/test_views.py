"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Test cases for expense and purchase endpoints
-------------------------------------------------------------------------
"""
from datetime import date, datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse
from django.utils import timezone

from apps.core.models import Company
from apps.expenditure.models import Expense
from apps.sales.models import Order
from apps.users.models import UserRole

User = get_user_model()


class ExpenseViewsTest(TestCase):
    """Test cases for expense endpoints"""

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )
        self.ca = User.objects.create_user(
            email='ca@acme.test', password='secret123', name='CA',
            role=UserRole.CA, company=self.company,
        )
        self.order = Order.objects.create(
            company=self.company, client_name='Globex', service_title='Audit', base_amount=Decimal('1000'),
        )
        self.client.force_login(self.admin)

    def test_add_expense_linked_to_order(self):
        response = self.client.post(
            reverse('expenditure:add_expense'),
            {
                'ExpenseTitle': 'Travel', 'Amount': 1200, 'ExpenseDate': '2026-02-03',
                'ExpenseType': 'Travel', 'OrderId': self.order.pk,
            },
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body['linkedToOrder'])
        self.assertEqual(body['data']['ClientName'], 'Globex')

    def test_ca_cannot_add_expense(self):
        self.client.force_login(self.ca)
        response = self.client.post(
            reverse('expenditure:add_expense'),
            {'ExpenseTitle': 'Travel', 'Amount': 1, 'ExpenseDate': '2026-02-03'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)

    def test_ca_can_read_expense(self):
        expense = Expense.objects.create(
            company=self.company, expense_title='Rent', amount=Decimal('100'), expense_date=date(2026, 2, 1),
        )
        self.client.force_login(self.ca)
        response = self.client.get(reverse('expenditure:expense_detail', args=[expense.pk]))
        self.assertEqual(response.status_code, 200)

    def test_monthly_expenses_require_month_and_year(self):
        response = self.client.get(reverse('expenditure:monthly_expenses'), {'month': 2})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Month and year are required')

    def test_monthwise_expenses(self):
        Expense.objects.create(company=self.company, expense_title='A', amount=Decimal('100'),
                               expense_date=date(2026, 2, 1))
        Expense.objects.create(company=self.company, expense_title='B', amount=Decimal('300'),
                               expense_date=date(2026, 2, 20))
        response = self.client.get(reverse('expenditure:monthwise_expenses'), {'year': 2026})
        data = response.json()['data']
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['month'], 'February')
        self.assertEqual(data[0]['averageExpense'], 200.0)
        self.assertEqual(response.json()['grandTotal'], 400.0)

    def test_copy_fixed_endpoint(self):
        Expense.objects.create(company=self.company, expense_title='Rent', amount=Decimal('100'),
                               expense_date=date(2026, 1, 5), is_fixed=True)
        response = self.client.post(
            reverse('expenditure:copy_fixed'),
            {'targetMonth': 2, 'targetYear': 2026},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['count'], 1)

    def test_total_expenses(self):
        Expense.objects.create(company=self.company, expense_title='A', amount=Decimal('150.50'),
                               expense_date=date(2026, 2, 1))
        response = self.client.get(reverse('expenditure:total_expenses'))
        self.assertEqual(response.json()['totalExpense'], 150.5)
        self.assertEqual(response.json()['totalRecords'], 1)


class PurchaseViewsTest(TestCase):
    """Test cases for purchase endpoints"""

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )
        self.paid = Order.objects.create(
            company=self.company, client_name='Globex', service_title='Audit', created_by=self.admin,
            base_amount=Decimal('1000'), amount=Decimal('1000'), advance_paid=Decimal('1000'),
        )
        self.pending = Order.objects.create(
            company=self.company, client_name='Initech', service_title='Setup',
            base_amount=Decimal('500'), amount=Decimal('500'),
        )
        Expense.objects.create(
            company=self.company, expense_title='Travel', amount=Decimal('300'),
            expense_date=date(2026, 3, 2), order=self.paid,
        )
        # 02:00 IST on 1 March
        Order.objects.filter(pk=self.paid.pk).update(
            updated_at=timezone.make_aware(datetime(2026, 3, 1, 2, 0))
        )
        self.client.force_login(self.admin)

    def test_purchase_list_excludes_unpaid_orders(self):
        response = self.client.get(reverse('expenditure:purchase_list'))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['count'], 1)
        self.assertEqual(body['data'][0]['orderId'], self.paid.pk)
        self.assertEqual(body['data'][0]['profit'], 700.0)
        self.assertEqual(body['data'][0]['createdBy']['email'], 'admin@acme.test')

    def test_purchase_detail(self):
        response = self.client.get(reverse('expenditure:purchase_detail', args=[self.paid.pk]))
        self.assertEqual(response.status_code, 200)
        data = response.json()['data']
        self.assertEqual(data['totalExpenses'], 300.0)
        self.assertEqual(data['relatedExpenses'][0]['title'], 'Travel')

    def test_purchase_detail_of_unpaid_order_not_found(self):
        response = self.client.get(reverse('expenditure:purchase_detail', args=[self.pending.pk]))
        self.assertEqual(response.status_code, 404)
        response = self.client.get(reverse('expenditure:purchase_detail', args=[999999]))
        self.assertEqual(response.status_code, 404)

    def test_monthly_summary_matches_month_details(self):
        response = self.client.get(reverse('expenditure:monthlywise_purchases'), {'year': 2026})
        self.assertEqual(response.status_code, 200)
        data = response.json()['data']
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]['month'], 3)
        self.assertEqual(data[0]['totalOrders'], 1)
        self.assertEqual(data[0]['totalProfit'], 700.0)

        response = self.client.get(
            reverse('expenditure:monthly_purchase_details'), {'month': 3, 'year': 2026}
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['count'], 1)
        self.assertEqual(body['totalExpenses'], 300.0)
        self.assertEqual(body['totalProfit'], 700.0)

        response = self.client.get(
            reverse('expenditure:monthly_purchase_details'), {'month': 2, 'year': 2026}
        )
        self.assertEqual(response.json()['count'], 0)

    def test_month_details_require_month_and_year(self):
        response = self.client.get(reverse('expenditure:monthly_purchase_details'), {'year': 2026})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Month and year are required')

    def test_year_outside_range_rejected(self):
        response = self.client.get(reverse('expenditure:monthlywise_purchases'), {'year': 1999})
        self.assertEqual(response.status_code, 400)
        response = self.client.get(
            reverse('expenditure:monthly_purchase_details'), {'month': 3, 'year': 2101}
        )
        self.assertEqual(response.status_code, 400)
        response = self.client.get(
            reverse('expenditure:monthly_purchase_details'), {'month': 13, 'year': 2026}
        )
        self.assertEqual(response.status_code, 400)
