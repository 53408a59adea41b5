"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Unit tests for ExpenseService and PurchaseService
-------------------------------------------------------------------------
"""
from datetime import date, datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from apps.core.exceptions import ImmutableRecordException, ResourceNotFound, ValidationFailed
from apps.core.models import Company
from apps.expenditure.models import Expense, ExpenseType
from apps.expenditure.services import ExpenseService, PurchaseService
from apps.sales.models import Order
from apps.users.models import UserRole

User = get_user_model()


class ExpenseServiceTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Acme')
        self.other_company = Company.objects.create(name='Other Co')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )

    def test_create_requires_positive_amount(self):
        with self.assertRaises(ValidationFailed):
            ExpenseService.create_expense(self.company, self.admin, {
                'ExpenseTitle': 'Rent', 'Amount': -5, 'ExpenseDate': '2026-01-05',
            })

    def test_invalid_expense_type(self):
        with self.assertRaises(ValidationFailed) as ctx:
            ExpenseService.create_expense(self.company, self.admin, {
                'ExpenseTitle': 'Rent', 'Amount': 100, 'ExpenseDate': '2026-01-05', 'ExpenseType': 'Food',
            })
        self.assertIn('validTypes', ctx.exception.details)

    def test_order_of_other_company_is_rejected(self):
        foreign = Order.objects.create(
            company=self.other_company, client_name='X', service_title='Y', base_amount=Decimal('10'),
        )
        with self.assertRaises(ResourceNotFound):
            ExpenseService.create_expense(self.company, self.admin, {
                'ExpenseTitle': 'Cab', 'Amount': 100, 'ExpenseDate': '2026-01-05', 'OrderId': foreign.pk,
            })

    def test_copy_fixed_expenses_clamps_day_and_skips_duplicates(self):
        Expense.objects.create(
            company=self.company, expense_title='Rent', amount=Decimal('20000'),
            expense_date=date(2026, 1, 31), expense_type=ExpenseType.RENT, is_fixed=True,
        )
        Expense.objects.create(
            company=self.company, expense_title='Taxi', amount=Decimal('300'),
            expense_date=date(2026, 1, 10), expense_type=ExpenseType.TRAVEL,
        )

        copied = ExpenseService.copy_fixed_expenses(self.company, self.admin, 2026, 2)
        self.assertEqual(len(copied), 1)
        self.assertEqual(copied[0].expense_date, date(2026, 2, 28))
        self.assertTrue(copied[0].is_fixed)

        again = ExpenseService.copy_fixed_expenses(self.company, self.admin, 2026, 2)
        self.assertEqual(again, [])

    def test_copy_into_january_reads_december(self):
        Expense.objects.create(
            company=self.company, expense_title='Internet', amount=Decimal('999'),
            expense_date=date(2025, 12, 15), is_fixed=True,
        )
        copied = ExpenseService.copy_fixed_expenses(self.company, self.admin, 2026, 1)
        self.assertEqual(copied[0].expense_date, date(2026, 1, 15))

    def test_salary_expense_upsert_keeps_one_row(self):
        ExpenseService.upsert_salary_expense(self.company, self.admin, '2026-03', Decimal('50000'))
        expense = ExpenseService.upsert_salary_expense(self.company, self.admin, '2026-03', Decimal('75000'))

        rows = Expense.objects.filter(company=self.company, expense_type=ExpenseType.SALARY)
        self.assertEqual(rows.count(), 1)
        self.assertEqual(expense.amount, Decimal('75000.00'))
        self.assertEqual(expense.expense_date, date(2026, 3, 31))
        self.assertEqual(expense.reference_key, f"SALARY_{self.company.pk}_2026-03")

    def test_salary_expense_is_read_only(self):
        expense = ExpenseService.upsert_salary_expense(self.company, self.admin, '2026-03', Decimal('100'))
        with self.assertRaises(ImmutableRecordException):
            ExpenseService.update_expense(expense, self.admin, {'Amount': 1})
        with self.assertRaises(ImmutableRecordException):
            ExpenseService.delete_expense(expense, self.admin)


class PurchaseServiceTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Acme')

    def test_only_orders_with_money_received_are_purchases(self):
        paid = Order.objects.create(
            company=self.company, client_name='Globex', service_title='Audit',
            base_amount=Decimal('1000'), amount=Decimal('1000'), advance_paid=Decimal('1000'),
        )
        Order.objects.create(
            company=self.company, client_name='Initech', service_title='Setup',
            base_amount=Decimal('500'), amount=Decimal('500'),
        )
        Expense.objects.create(
            company=self.company, expense_title='Travel', amount=Decimal('250'),
            expense_date=date(2026, 1, 5), order=paid,
        )

        purchases = [PurchaseService.to_purchase(o) for o in PurchaseService.queryset(self.company)]
        self.assertEqual(len(purchases), 1)
        self.assertEqual(purchases[0]['totalExpenses'], Decimal('250.00'))
        self.assertEqual(purchases[0]['profit'], Decimal('750.00'))
        self.assertEqual(len(purchases[0]['relatedExpenses']), 1)

    def _paid_order(self, paid_at):
        order = Order.objects.create(
            company=self.company, client_name='Globex', service_title='Audit',
            base_amount=Decimal('1000'), amount=Decimal('1000'), advance_paid=Decimal('1000'),
        )
        Order.objects.filter(pk=order.pk).update(updated_at=timezone.make_aware(paid_at))
        return order

    def test_monthly_summary_buckets_by_local_month(self):
        # 02:00 IST on the 1st is still the previous month in UTC
        self._paid_order(datetime(2026, 3, 1, 2, 0))
        summary = PurchaseService.monthly_summary(self.company, 2026)
        self.assertEqual([row['month'] for row in summary], [3])
        self.assertEqual(summary[0]['totalRevenue'], Decimal('1000.00'))

    def test_monthly_summary_new_year_stays_in_january(self):
        self._paid_order(datetime(2026, 1, 1, 2, 0))
        summary = PurchaseService.monthly_summary(self.company, 2026)
        self.assertEqual([row['month'] for row in summary], [1])
        self.assertEqual(PurchaseService.monthly_summary(self.company, 2025), [])
