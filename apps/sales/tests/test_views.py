"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Test cases for the order and payment workflow
-------------------------------------------------------------------------
"""
from datetime import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.test import TestCase, Client
from django.urls import reverse
from django.utils import timezone

from apps.core.models import Company
from apps.revenue.models import Revenue
from apps.sales.models import Order, OrderStatus, PaymentStatus
from apps.users.models import UserRole

User = get_user_model()


class OrderViewsTest(TestCase):
    """Test cases for order endpoints"""

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme', state='Maharashtra')
        self.ca = User.objects.create_user(
            email='ca@acme.test', password='secret123', name='CA',
            role=UserRole.CA, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Emp',
            role=UserRole.EMPLOYEE, company=self.company,
        )
        self.client.force_login(self.ca)

    def _create(self, **extra):
        payload = {'ClientName': 'Globex', 'ServiceTitle': 'Audit', 'BaseAmount': 1000}
        payload.update(extra)
        return self.client.post(reverse('sales:add_order'), payload, content_type='application/json')

    def test_create_intra_state_order(self):
        response = self._create(ClientState='Maharashtra')
        self.assertEqual(response.status_code, 201)
        data = response.json()['data']
        self.assertEqual(data['GSTType'], 'CGST+SGST')
        self.assertEqual(data['Amount'], 1180.0)
        self.assertEqual(data['BalanceDue'], 1180.0)
        self.assertTrue(data['OrderNumber'].startswith('ORD-'))
        self.assertIsNone(data['TaxInvoiceNumber'])

    def test_client_gstin_sets_state_and_igst(self):
        response = self._create(ClientGSTIN='29AAPFU0939F1ZV')
        data = response.json()['data']
        self.assertEqual(data['ClientState'], 'Karnataka')
        self.assertTrue(data['IsIGST'])
        self.assertEqual(data['IGSTAmount'], 180.0)

    def test_create_requires_positive_amount(self):
        response = self._create(BaseAmount=0)
        self.assertEqual(response.status_code, 400)

    def test_invalid_gst_rate(self):
        response = self._create(GSTRate=10)
        self.assertEqual(response.status_code, 400)
        self.assertIn('allowedRates', response.json())

    def test_order_numbers_are_sequential(self):
        first = self._create().json()['data']['OrderNumber']
        second = self._create().json()['data']['OrderNumber']
        self.assertEqual(int(second.rsplit('-', 1)[1]), int(first.rsplit('-', 1)[1]) + 1)

    def test_employee_cannot_create_order(self):
        self.client.force_login(self.employee)
        self.assertEqual(self._create().status_code, 403)

    def test_confirm_then_pay_in_full(self):
        order_id = self._create().json()['data']['id']

        confirm = self.client.put(
            reverse('sales:confirm_order'),
            {'id': order_id, 'amountReceived': 500},
            content_type='application/json',
        )
        self.assertEqual(confirm.status_code, 200)
        order = Order.objects.get(pk=order_id)
        self.assertEqual(order.order_status, OrderStatus.CONFIRMED)
        self.assertEqual(order.payment_status, PaymentStatus.PARTIALLY_PAID)
        self.assertEqual(order.balance_due, Decimal('680.00'))

        too_much = self.client.post(
            reverse('sales:record_payment'),
            {'id': order_id, 'amount': 1000},
            content_type='application/json',
        )
        self.assertEqual(too_much.status_code, 400)

        paid = self.client.post(
            reverse('sales:record_payment'),
            {'id': order_id, 'amount': 680},
            content_type='application/json',
        )
        self.assertEqual(paid.status_code, 201)
        order.refresh_from_db()
        self.assertEqual(order.payment_status, PaymentStatus.PAID)
        self.assertTrue(order.tax_invoice_number.startswith('INV-'))

        # every payment produces a revenue entry
        self.assertEqual(Revenue.objects.filter(order=order).count(), 2)

        history = self.client.get(reverse('sales:payment_history', args=[order_id]))
        self.assertEqual(len(history.json()['payments']), 2)
        self.assertEqual(history.json()['balanceDue'], 0.0)

    def test_payment_on_pending_order_rejected(self):
        order_id = self._create().json()['data']['id']
        response = self.client.post(
            reverse('sales:record_payment'),
            {'id': order_id, 'amount': 100},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_confirm_twice_is_rejected(self):
        order_id = self._create().json()['data']['id']
        payload = {'id': order_id, 'amountReceived': 100}
        self.client.put(reverse('sales:confirm_order'), payload, content_type='application/json')
        response = self.client.put(reverse('sales:confirm_order'), payload, content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_completed_order_is_locked(self):
        order_id = self._create().json()['data']['id']
        Order.objects.filter(pk=order_id).update(order_status=OrderStatus.COMPLETED)
        response = self.client.put(
            reverse('sales:update_order'),
            {'id': order_id, 'ClientName': 'Initech'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)

    def test_order_with_payments_cannot_be_deleted(self):
        order_id = self._create().json()['data']['id']
        self.client.put(
            reverse('sales:confirm_order'),
            {'id': order_id, 'amountReceived': 100},
            content_type='application/json',
        )
        response = self.client.delete(
            reverse('sales:delete_order'), {'id': order_id}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)

    def test_order_list_search(self):
        self._create()
        self._create(ClientName='Initech')
        response = self.client.get(reverse('sales:order_list'), {'search': 'init'})
        self.assertEqual(response.json()['count'], 1)

    def test_export_orders_csv(self):
        self._create()
        response = self.client.get(reverse('sales:export_orders'), {'format': 'csv'})
        self.assertEqual(response.status_code, 200)
        content = response.content.decode('utf-8-sig')
        self.assertIn('Order Number', content)
        self.assertIn('Globex', content)

    def test_export_uses_local_created_date(self):
        order_id = self._create().json()['data']['id']
        # 02:00 IST on 1 March is 28 February in UTC
        Order.objects.filter(pk=order_id).update(created_at=timezone.make_aware(datetime(2026, 3, 1, 2, 0)))
        response = self.client.get(
            reverse('sales:export_orders'),
            {'format': 'csv', 'startDate': '2026-03-01', 'endDate': '2026-03-01'},
        )
        content = response.content.decode('utf-8-sig')
        self.assertIn('2026-03-01', content)
        self.assertNotIn('2026-02-28', content)

    def test_update_base_amount_recomputes_gst(self):
        order_id = self._create().json()['data']['id']
        response = self.client.put(
            reverse('sales:update_order'),
            {'id': order_id, 'BaseAmount': 2000},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()['data']
        self.assertEqual(data['CGSTAmount'], 180.0)
        self.assertEqual(data['SGSTAmount'], 180.0)
        self.assertEqual(data['Amount'], 2360.0)
        self.assertEqual(data['BalanceDue'], 2360.0)

    def test_update_gst_rate_recomputes_total(self):
        order_id = self._create().json()['data']['id']
        response = self.client.put(
            reverse('sales:update_order'),
            {'id': order_id, 'GSTRate': 12},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['Amount'], 1120.0)
        self.assertEqual(Order.objects.get(pk=order_id).amount, Decimal('1120.00'))

    def test_update_client_state_switches_to_igst(self):
        order_id = self._create().json()['data']['id']
        response = self.client.put(
            reverse('sales:update_order'),
            {'id': order_id, 'ClientState': 'Karnataka'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()['data']
        self.assertTrue(data['IsIGST'])
        self.assertEqual(data['IGSTAmount'], 180.0)
        self.assertEqual(data['CGSTAmount'], 0.0)
        self.assertEqual(data['Amount'], 1180.0)

    def test_paid_order_accepts_only_status(self):
        order_id = self._create().json()['data']['id']
        self.client.put(
            reverse('sales:confirm_order'),
            {'id': order_id, 'amountReceived': 1180},
            content_type='application/json',
        )
        self.assertEqual(Order.objects.get(pk=order_id).payment_status, PaymentStatus.PAID)

        response = self.client.put(
            reverse('sales:update_order'),
            {'id': order_id, 'ClientName': 'Initech'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(Order.objects.get(pk=order_id).client_name, 'Globex')

        response = self.client.put(
            reverse('sales:update_order'),
            {'id': order_id, 'OrderStatus': OrderStatus.COMPLETED},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Order.objects.get(pk=order_id).order_status, OrderStatus.COMPLETED)

    def test_amount_cannot_drop_below_paid(self):
        order_id = self._create().json()['data']['id']
        self.client.put(
            reverse('sales:confirm_order'),
            {'id': order_id, 'amountReceived': 1000},
            content_type='application/json',
        )
        response = self.client.put(
            reverse('sales:update_order'),
            {'id': order_id, 'BaseAmount': 500},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'Order amount cannot be less than the amount already paid')
        self.assertEqual(Order.objects.get(pk=order_id).amount, Decimal('1180.00'))


class OrderNumberConstraintTest(TestCase):
    """Order and invoice numbers are unique within a company"""

    def setUp(self):
        self.company = Company.objects.create(name='Acme', state='Maharashtra')
        self.other = Company.objects.create(name='Globex', state='Karnataka')

    def _order(self, company, **extra):
        return Order.objects.create(
            company=company, client_name='Initech', service_title='Audit',
            base_amount=Decimal('100'), **extra,
        )

    def test_sequential_numbers_do_not_collide(self):
        first = self._order(self.company)
        second = self._order(self.company)
        self.assertNotEqual(first.order_number, second.order_number)

    def test_duplicate_order_number_rejected(self):
        first = self._order(self.company)
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                self._order(self.company, order_number=first.order_number)

    def test_other_company_may_reuse_number(self):
        first = self._order(self.company)
        other = self._order(self.other, order_number=first.order_number)
        self.assertEqual(other.order_number, first.order_number)

    def test_duplicate_invoice_number_rejected(self):
        self._order(self.company, tax_invoice_number='INV-2026-0001')
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                self._order(self.company, tax_invoice_number='INV-2026-0001')
