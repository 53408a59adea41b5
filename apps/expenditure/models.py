"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Company expenses, optionally linked to the order they
             were incurred for.
-------------------------------------------------------------------------
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from apps.core.mixins import TimeStampedMixin, TenantAwareMixin


class ExpenseType(models.TextChoices):
    SALARY = 'Salary', _('Salary')
    RENT = 'Rent', _('Rent')
    UTILITIES = 'Utilities', _('Utilities')
    TRAVEL = 'Travel', _('Travel')
    OFFICE_SUPPLIES = 'Office Supplies', _('Office Supplies')
    MARKETING = 'Marketing', _('Marketing')
    SOFTWARE = 'Software', _('Software')
    VENDOR = 'Vendor', _('Vendor')
    OTHER = 'Other', _('Other')


class PaymentMethod(models.TextChoices):
    BANK_TRANSFER = 'Bank Transfer', _('Bank Transfer')
    CASH = 'Cash', _('Cash')
    CHEQUE = 'Cheque', _('Cheque')
    UPI = 'UPI', _('UPI')
    CARD = 'Card', _('Card')


class Expense(TimeStampedMixin, TenantAwareMixin):
    """
    A company expense.

    Salary expenses are written by the payroll module under a
    ``reference_key`` (one per company and month) and are read-only
    through the API.
    """

    expense_title = models.CharField(
        max_length=255,
        verbose_name=_('Expense Title')
    )
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name=_('Amount')
    )
    expense_date = models.DateField(verbose_name=_('Expense Date'))
    order = models.ForeignKey(
        'sales.Order',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses',
        verbose_name=_('Order')
    )
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='expenses_added',
        verbose_name=_('Added By')
    )
    expense_type = models.CharField(
        max_length=30,
        choices=ExpenseType.choices,
        default=ExpenseType.OTHER,
        verbose_name=_('Expense Type')
    )
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.BANK_TRANSFER,
        verbose_name=_('Payment Method')
    )
    description = models.TextField(blank=True, verbose_name=_('Description'))
    receipt = models.CharField(
        max_length=500,
        blank=True,
        verbose_name=_('Receipt'),
        help_text=_('Reference to the stored receipt document.')
    )
    is_fixed = models.BooleanField(
        default=False,
        verbose_name=_('Fixed Expense'),
        help_text=_('Fixed expenses can be copied into the next month.')
    )
    reference_key = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        verbose_name=_('Reference Key'),
        help_text=_('System key for generated expenses, e.g. SALARY_<company>_<month>.')
    )

    class Meta:
        verbose_name = _('Expense')
        verbose_name_plural = _('Expenses')
        ordering = ['-expense_date', '-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'reference_key'],
                condition=Q(reference_key__isnull=False),
                name='unique_expense_reference_per_company'
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'expense_date'], name='expense_company_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.expense_title} - {self.amount}"

    @property
    def is_salary(self) -> bool:
        return self.expense_type == ExpenseType.SALARY

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'ExpenseTitle': self.expense_title,
            'Amount': self.amount,
            'ExpenseDate': self.expense_date.isoformat() if self.expense_date else None,
            'OrderId': self.order_id,
            'ServiceTitle': self.order.service_title if self.order else None,
            'ClientName': self.order.client_name if self.order else None,
            'AddedBy': self.added_by_id,
            'ExpenseType': self.expense_type,
            'PaymentMethod': self.payment_method,
            'Description': self.description,
            'Receipt': self.receipt or None,
            'isFixed': self.is_fixed,
            'ReferenceKey': self.reference_key,
            'CompanyId': self.company_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
