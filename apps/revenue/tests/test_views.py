"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Test cases for Revenue module views
-------------------------------------------------------------------------
"""
from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse

from apps.core.models import Company
from apps.expenditure.models import Expense
from apps.revenue.models import Revenue
from apps.sales.models import Order, OrderPayment
from apps.users.models import UserRole

User = get_user_model()


class RevenueViewsTest(TestCase):
    """Test cases for revenue and profit endpoints"""

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.other_company = Company.objects.create(name='Other Co')
        self.ca = User.objects.create_user(
            email='ca@acme.test', password='secret123', name='CA',
            role=UserRole.CA, company=self.company,
        )
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='HR',
            role=UserRole.HR, company=self.company,
        )
        self.order = Order.objects.create(
            company=self.company, client_name='Globex', service_title='Tax Filing',
            base_amount=Decimal('1000'),
        )
        self.client.force_login(self.ca)

    def test_add_revenue(self):
        response = self.client.post(
            reverse('revenue:add_revenue'),
            {'Source': 'Consulting', 'Amount': 5000, 'RevenueDate': '2026-04-01'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['Amount'], 5000.0)
        self.assertEqual(Revenue.objects.filter(company=self.company).count(), 1)

    def test_add_revenue_requires_source(self):
        response = self.client.post(
            reverse('revenue:add_revenue'),
            {'Amount': 5000, 'RevenueDate': '2026-04-01'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_hr_cannot_add_revenue(self):
        self.client.force_login(self.hr)
        response = self.client.post(
            reverse('revenue:add_revenue'),
            {'Source': 'Consulting', 'Amount': 5000, 'RevenueDate': '2026-04-01'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)

    def test_payment_revenue_cannot_be_deleted(self):
        payment = OrderPayment.objects.create(order=self.order, amount=Decimal('100'))
        revenue = Revenue.objects.create(
            company=self.company, source='Order payment', amount=Decimal('100'),
            revenue_date=date(2026, 4, 1), order=self.order, payment=payment,
        )
        response = self.client.delete(
            reverse('revenue:delete_revenue'), {'id': revenue.pk}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 403)
        self.assertTrue(Revenue.objects.filter(pk=revenue.pk).exists())

    def test_delete_manual_revenue(self):
        revenue = Revenue.objects.create(
            company=self.company, source='Consulting', amount=Decimal('100'), revenue_date=date(2026, 4, 1),
        )
        response = self.client.delete(
            reverse('revenue:delete_revenue'), {'id': revenue.pk}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)

    def test_revenue_by_order_name(self):
        Revenue.objects.create(
            company=self.company, source='Order payment', amount=Decimal('300'),
            revenue_date=date(2026, 4, 1), order=self.order,
        )
        response = self.client.get(reverse('revenue:revenue_by_order_name'), {'name': 'tax'})
        self.assertEqual(response.json()['count'], 1)
        self.assertEqual(response.json()['totalRevenue'], 300.0)

    def test_revenue_with_profit(self):
        Revenue.objects.create(
            company=self.company, source='Order payment', amount=Decimal('1000'),
            revenue_date=date(2026, 4, 1), order=self.order,
        )
        Expense.objects.create(
            company=self.company, expense_title='Travel', amount=Decimal('250'),
            expense_date=date(2026, 4, 2), order=self.order,
        )
        response = self.client.get(reverse('revenue:revenue_with_profit', args=[self.order.pk]))
        self.assertEqual(response.json()['profit'], 750.0)

    def test_revenue_with_profit_without_revenue_is_404(self):
        response = self.client.get(reverse('revenue:revenue_with_profit', args=[self.order.pk]))
        self.assertEqual(response.status_code, 404)

    def test_gross_and_net_profit(self):
        Revenue.objects.create(
            company=self.company, source='Consulting', amount=Decimal('2000'), revenue_date=date(2026, 4, 1),
        )
        Revenue.objects.create(
            company=self.other_company, source='Elsewhere', amount=Decimal('9999'), revenue_date=date(2026, 4, 1),
        )
        Expense.objects.create(
            company=self.company, expense_title='Rent', amount=Decimal('500'), expense_date=date(2026, 4, 2),
        )
        Expense.objects.create(
            company=self.company, expense_title='Travel', amount=Decimal('200'),
            expense_date=date(2026, 4, 2), order=self.order,
        )

        gross = self.client.get(reverse('revenue:total_profit')).json()
        self.assertEqual(gross['totalProfit'], 1300.0)

        net = self.client.get(reverse('revenue:total_profit_net')).json()
        self.assertEqual(net['totalOrderExpense'], 200.0)
        self.assertEqual(net['netProfit'], 1800.0)
