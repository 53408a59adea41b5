"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Expense business rules (create/update, copying fixed
             expenses into a new month, the payroll salary expense) and
             the purchase view over paid orders.
-------------------------------------------------------------------------
"""
import logging
from decimal import Decimal
from typing import Dict, List, Optional

from django.db import transaction
from django.db.models import Prefetch, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.core.exceptions import ImmutableRecordException, ResourceNotFound, ValidationFailed
from apps.core.services import ActivityService
from apps.core.utils import clamp_day, money, month_bounds, previous_month, to_bool, to_date, to_decimal
from apps.expenditure.models import Expense, ExpenseType, PaymentMethod
from apps.sales.models import Order, PaymentStatus

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')

PURCHASE_STATUSES = (PaymentStatus.PAID, PaymentStatus.PARTIALLY_PAID)


def salary_reference_key(company_id, month: str) -> str:
    return f"SALARY_{company_id}_{month}"


class ExpenseService:
    """Service class for expense management."""

    @staticmethod
    def _resolve_order(company, order_id) -> Optional[Order]:
        if order_id in (None, ''):
            return None
        try:
            return Order.get_tenant_filtered_queryset(company).get(pk=int(order_id))
        except (Order.DoesNotExist, TypeError, ValueError):
            raise ResourceNotFound("Order not found for this company")

    @staticmethod
    def _apply(expense: Expense, company, data: Dict, partial: bool) -> None:
        if not partial or 'ExpenseTitle' in data:
            title = str(data.get('ExpenseTitle') or '').strip()
            if not title:
                raise ValidationFailed("ExpenseTitle is required")
            expense.expense_title = title
        if not partial or 'Amount' in data:
            expense.amount = money(to_decimal(data.get('Amount'), 'Amount', positive=True))
        if not partial or 'ExpenseDate' in data:
            expense.expense_date = to_date(data.get('ExpenseDate'), 'ExpenseDate')

        if 'ExpenseType' in data and data['ExpenseType']:
            if data['ExpenseType'] not in ExpenseType.values:
                raise ValidationFailed(
                    "Invalid ExpenseType",
                    details={'validTypes': list(ExpenseType.values)},
                )
            expense.expense_type = data['ExpenseType']
        if 'PaymentMethod' in data and data['PaymentMethod']:
            if data['PaymentMethod'] not in PaymentMethod.values:
                raise ValidationFailed(
                    "Invalid PaymentMethod",
                    details={'validMethods': list(PaymentMethod.values)},
                )
            expense.payment_method = data['PaymentMethod']
        if 'OrderId' in data:
            expense.order = ExpenseService._resolve_order(company, data.get('OrderId'))
        if 'Description' in data:
            expense.description = str(data.get('Description') or '').strip()
        if 'Receipt' in data:
            expense.receipt = str(data.get('Receipt') or '').strip()
        if 'isFixed' in data:
            expense.is_fixed = to_bool(data.get('isFixed'))

    @staticmethod
    @transaction.atomic
    def create_expense(company, user, data: Dict) -> Expense:
        """
        Create an expense, optionally linked to one of the company's orders.

        Raises:
            ValidationFailed: Missing title/date or non-positive amount.
            ResourceNotFound: OrderId outside the company.
        """
        expense = Expense(company=company, added_by=user)
        ExpenseService._apply(expense, company, data, partial=False)
        expense.save()
        ActivityService.log(company, user, 'added expense', f"{expense.expense_title} (Rs {expense.amount})")
        return expense

    @staticmethod
    @transaction.atomic
    def update_expense(expense: Expense, user, data: Dict) -> Expense:
        if expense.is_salary:
            raise ImmutableRecordException("Salary expenses cannot be updated")
        if data.get('ExpenseType') == ExpenseType.SALARY:
            raise ValidationFailed("Salary expenses are generated by payroll")
        ExpenseService._apply(expense, expense.company, data, partial=True)
        expense.save()
        ActivityService.log(expense.company, user, 'updated expense', expense.expense_title)
        return expense

    @staticmethod
    @transaction.atomic
    def delete_expense(expense: Expense, user) -> None:
        if expense.is_salary:
            raise ImmutableRecordException("Salary expenses cannot be deleted")
        ActivityService.log(expense.company, user, 'deleted expense', expense.expense_title)
        expense.delete()

    @staticmethod
    @transaction.atomic
    def copy_fixed_expenses(company, user, target_year: int, target_month: int) -> List[Expense]:
        """
        Copy last month's fixed expenses into the target month.

        The day of month is kept (clamped to the target month's length).
        An expense already present in the target month with the same
        title, amount and type is not copied again.
        """
        source_year, source_month = previous_month(target_year, target_month)
        source_start, source_end = month_bounds(source_year, source_month)
        target_start, target_end = month_bounds(target_year, target_month)

        fixed = Expense.get_tenant_filtered_queryset(company).filter(
            is_fixed=True,
            expense_date__range=(source_start, source_end),
        ).exclude(expense_type=ExpenseType.SALARY)

        existing = set(
            Expense.get_tenant_filtered_queryset(company)
            .filter(expense_date__range=(target_start, target_end))
            .values_list('expense_title', 'amount', 'expense_type')
        )

        copied = []
        for expense in fixed:
            key = (expense.expense_title, expense.amount, expense.expense_type)
            if key in existing:
                continue
            copied.append(Expense.objects.create(
                company=company,
                expense_title=expense.expense_title,
                amount=expense.amount,
                expense_date=clamp_day(target_year, target_month, expense.expense_date.day),
                order=expense.order,
                added_by=user,
                expense_type=expense.expense_type,
                payment_method=expense.payment_method,
                description=expense.description,
                receipt=expense.receipt,
                is_fixed=True,
            ))
            existing.add(key)

        if copied:
            ActivityService.log(
                company, user, 'copied fixed expenses',
                f"{len(copied)} into {target_year}-{target_month:02d}",
            )
        logger.info(
            "Copied %s fixed expenses into %s-%02d for company %s",
            len(copied), target_year, target_month, company.pk,
        )
        return copied

    @staticmethod
    def upsert_salary_expense(company, user, month: str, total_gross: Decimal) -> Expense:
        """
        Create or update the month's Salary expense.

        One row per company and month, keyed by ``SALARY_<companyId>_<month>``.
        """
        year, month_number = (int(part) for part in month.split('-'))
        _, last_day = month_bounds(year, month_number)
        expense, created = Expense.objects.update_or_create(
            company=company,
            reference_key=salary_reference_key(company.pk, month),
            defaults={
                'expense_title': f"Salary - {month}",
                'amount': money(total_gross),
                'expense_date': last_day,
                'expense_type': ExpenseType.SALARY,
                'payment_method': PaymentMethod.BANK_TRANSFER,
                'description': f"Total gross salary for {month}",
                'added_by': user if getattr(user, 'pk', None) else None,
            },
        )
        logger.info(
            "%s salary expense %s: Rs %s",
            'Created' if created else 'Updated', expense.reference_key, expense.amount,
        )
        return expense

    @staticmethod
    def totals(expenses) -> Dict:
        result = expenses.aggregate(total=Coalesce(Sum('amount'), ZERO))
        return {'totalExpense': money(result['total'])}


class PurchaseService:
    """
    Purchases are orders that have received money (Paid or Partially
    Paid), reported with the expenses incurred against them.
    """

    @staticmethod
    def queryset(company):
        return (
            Order.get_tenant_filtered_queryset(company)
            .filter(payment_status__in=PURCHASE_STATUSES)
            .select_related('created_by')
            .prefetch_related(Prefetch('expenses', queryset=Expense.objects.order_by('-expense_date')))
            .order_by('-updated_at')
        )

    @staticmethod
    def to_purchase(order: Order) -> Dict:
        expenses = list(order.expenses.all())
        total_expenses = money(sum((e.amount for e in expenses), ZERO))
        creator = order.created_by
        return {
            'orderId': order.pk,
            'orderNumber': order.order_number,
            'clientName': order.client_name,
            'serviceTitle': order.service_title,
            'orderAmount': order.amount,
            'totalExpenses': total_expenses,
            'profit': money(order.amount - total_expenses),
            'paymentStatus': order.payment_status,
            'orderStatus': order.order_status,
            'orderDate': order.created_at.isoformat() if order.created_at else None,
            'paidDate': order.updated_at.isoformat() if order.updated_at else None,
            'createdBy': {
                'id': creator.pk,
                'name': creator.name,
                'email': creator.email,
            } if creator else None,
            'relatedExpenses': [
                {
                    'id': e.pk,
                    'title': e.expense_title,
                    'amount': e.amount,
                    'date': e.expense_date.isoformat(),
                    'type': e.expense_type,
                    'paymentMethod': e.payment_method,
                    'receipt': e.receipt or None,
                }
                for e in expenses
            ],
        }

    @staticmethod
    def monthly_summary(company, year: int) -> List[Dict]:
        """Per-month totals for a year, bucketed by the order's updated_at."""
        buckets: Dict[int, Dict] = {}
        for order in PurchaseService.queryset(company).filter(updated_at__year=year):
            purchase = PurchaseService.to_purchase(order)
            month = timezone.localtime(order.updated_at).month
            bucket = buckets.setdefault(month, {
                'totalOrders': 0,
                'totalRevenue': ZERO,
                'totalExpenses': ZERO,
                'totalProfit': ZERO,
            })
            bucket['totalOrders'] += 1
            bucket['totalRevenue'] += purchase['orderAmount']
            bucket['totalExpenses'] += purchase['totalExpenses']
            bucket['totalProfit'] += purchase['profit']
        return [
            {
                'month': month,
                'year': year,
                'totalOrders': bucket['totalOrders'],
                'totalRevenue': money(bucket['totalRevenue']),
                'totalExpenses': money(bucket['totalExpenses']),
                'totalProfit': money(bucket['totalProfit']),
            }
            for month, bucket in sorted(buckets.items())
        ]
