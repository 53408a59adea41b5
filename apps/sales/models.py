"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Client orders with GST breakdown and the payments received
             against them.
-------------------------------------------------------------------------
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.mixins import TimeStampedMixin, TenantAwareMixin
from apps.core.models import Company
from apps.core.utils import money
from apps.sales.services_gst import DEFAULT_GST_RATE, DEFAULT_HSN_CODE, GSTCalculator


class OrderStatus(models.TextChoices):
    PENDING = 'Pending', _('Pending')
    CONFIRMED = 'Confirmed', _('Confirmed')
    IN_PROGRESS = 'In Progress', _('In Progress')
    COMPLETED = 'Completed', _('Completed')
    CANCELLED = 'Cancelled', _('Cancelled')


class PaymentStatus(models.TextChoices):
    PENDING = 'Pending', _('Pending')
    PARTIALLY_PAID = 'Partially Paid', _('Partially Paid')
    PAID = 'Paid', _('Paid')


class OrderPaymentMethod(models.TextChoices):
    BANK_TRANSFER = 'Bank Transfer', _('Bank Transfer')
    CASH = 'Cash', _('Cash')
    CHEQUE = 'Cheque', _('Cheque')
    UPI = 'UPI', _('UPI')
    CARD = 'Card', _('Card')


class Order(TimeStampedMixin, TenantAwareMixin):
    """
    A client engagement billed with GST.

    ``amount`` is the total including GST. ``balance_due`` is always
    ``amount - advance_paid`` and ``payment_status`` follows from it;
    both are recomputed on every save.
    """

    order_number = models.CharField(
        max_length=30,
        blank=True,
        db_index=True,
        verbose_name=_('Order Number'),
        help_text=_('Auto-generated: ORD-YYYYMM-NNN')
    )
    tax_invoice_number = models.CharField(
        max_length=30,
        blank=True,
        verbose_name=_('Tax Invoice Number'),
        help_text=_('Assigned when the order is fully paid: INV-YYYY-NNNN')
    )

    # Client
    client_name = models.CharField(max_length=200, verbose_name=_('Client Name'))
    client_email = models.EmailField(blank=True, verbose_name=_('Client Email'))
    client_phone = models.CharField(max_length=20, blank=True, verbose_name=_('Client Phone'))
    client_gstin = models.CharField(max_length=15, blank=True, verbose_name=_('Client GSTIN'))
    client_state = models.CharField(max_length=100, blank=True, verbose_name=_('Client State'))
    client_address = models.TextField(blank=True, verbose_name=_('Client Address'))

    # Service
    service_title = models.CharField(max_length=255, verbose_name=_('Service Title'))
    service_description = models.TextField(blank=True, verbose_name=_('Service Description'))
    hsn_code = models.CharField(max_length=10, default=DEFAULT_HSN_CODE, verbose_name=_('HSN/SAC Code'))
    start_date = models.DateField(null=True, blank=True, verbose_name=_('Start Date'))
    end_date = models.DateField(null=True, blank=True, verbose_name=_('End Date'))

    # Amounts
    base_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        verbose_name=_('Base Amount')
    )
    gst_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=DEFAULT_GST_RATE,
        verbose_name=_('GST Rate (%)')
    )
    is_igst = models.BooleanField(default=False, verbose_name=_('Inter-state (IGST)'))
    gst_type = models.CharField(max_length=10, blank=True, verbose_name=_('GST Type'))
    cgst_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    sgst_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    igst_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name=_('Total Amount'),
        help_text=_('Base amount plus GST.')
    )
    advance_paid = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name=_('Amount Paid')
    )
    balance_due = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name=_('Balance Due')
    )

    order_status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        verbose_name=_('Order Status')
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        verbose_name=_('Payment Status')
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders_created',
        verbose_name=_('Created By')
    )

    class Meta:
        verbose_name = _('Order')
        verbose_name_plural = _('Orders')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'order_status'], name='sales_order_status_idx'),
            models.Index(fields=['company', 'payment_status'], name='sales_order_payment_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'order_number'],
                condition=~models.Q(order_number=''),
                name='sales_order_number_unique',
            ),
            models.UniqueConstraint(
                fields=['company', 'tax_invoice_number'],
                condition=~models.Q(tax_invoice_number=''),
                name='sales_order_invoice_unique',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.order_number or self.pk} - {self.client_name}"

    @property
    def total_gst(self) -> Decimal:
        return money(self.cgst_amount + self.sgst_amount + self.igst_amount)

    @property
    def is_locked(self) -> bool:
        """Completed and cancelled orders can no longer be edited."""
        return self.order_status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    def apply_gst(self) -> None:
        """Recompute the GST split and the total from base amount and rate."""
        result = GSTCalculator.calculate_gst(self.base_amount, self.gst_rate, self.is_igst)
        self.cgst_amount = result['cgst']
        self.sgst_amount = result['sgst']
        self.igst_amount = result['igst']
        self.gst_type = result['gstType']
        self.amount = result['totalAmount']

    def refresh_balance(self) -> None:
        """Derive balance_due and payment_status from amount and advance_paid."""
        self.balance_due = max(money(self.amount) - money(self.advance_paid), Decimal('0.00'))
        if money(self.advance_paid) <= 0:
            self.payment_status = PaymentStatus.PENDING
        elif self.balance_due == 0:
            self.payment_status = PaymentStatus.PAID
        else:
            self.payment_status = PaymentStatus.PARTIALLY_PAID

    def save(self, *args, **kwargs) -> None:
        self.refresh_balance()
        with transaction.atomic():
            if not self.order_number:
                self.order_number = self.next_order_number(self.company_id)
            if self.payment_status == PaymentStatus.PAID and not self.tax_invoice_number:
                self.tax_invoice_number = self.next_invoice_number(self.company_id)
            super().save(*args, **kwargs)

    @classmethod
    def _next_in_sequence(cls, company_id, field: str, prefix: str, width: int) -> str:
        """
        Next number after the highest one issued under prefix.

        The company row stays locked until the surrounding transaction
        commits, so concurrent saves in one company are numbered in turn.
        """
        list(Company.objects.select_for_update().filter(pk=company_id).values_list('pk', flat=True))
        issued = cls.objects.filter(
            company_id=company_id, **{f"{field}__startswith": prefix}
        ).values_list(field, flat=True)
        highest = 0
        for number in issued:
            suffix = number[len(prefix):]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return f"{prefix}{highest + 1:0{width}d}"

    @classmethod
    def next_order_number(cls, company_id) -> str:
        return cls._next_in_sequence(
            company_id, 'order_number', f"ORD-{timezone.localtime():%Y%m}-", 3
        )

    @classmethod
    def next_invoice_number(cls, company_id) -> str:
        return cls._next_in_sequence(
            company_id, 'tax_invoice_number', f"INV-{timezone.localtime():%Y}-", 4
        )

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'OrderNumber': self.order_number,
            'TaxInvoiceNumber': self.tax_invoice_number or None,
            'ClientName': self.client_name,
            'ClientEmail': self.client_email,
            'ClientPhone': self.client_phone,
            'ClientGSTIN': self.client_gstin,
            'ClientState': self.client_state,
            'ClientAddress': self.client_address,
            'ServiceTitle': self.service_title,
            'ServiceDescription': self.service_description,
            'HSNCode': self.hsn_code,
            'StartDate': self.start_date.isoformat() if self.start_date else None,
            'EndDate': self.end_date.isoformat() if self.end_date else None,
            'BaseAmount': self.base_amount,
            'GSTRate': self.gst_rate,
            'IsIGST': self.is_igst,
            'GSTType': self.gst_type,
            'CGSTAmount': self.cgst_amount,
            'SGSTAmount': self.sgst_amount,
            'IGSTAmount': self.igst_amount,
            'TotalGST': self.total_gst,
            'Amount': self.amount,
            'AdvancePaid': self.advance_paid,
            'BalanceDue': self.balance_due,
            'OrderStatus': self.order_status,
            'PaymentStatus': self.payment_status,
            'CreatedBy': self.created_by_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }


class OrderPayment(TimeStampedMixin):
    """A payment received against an order."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='payments',
        verbose_name=_('Order')
    )
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        verbose_name=_('Amount')
    )
    payment_method = models.CharField(
        max_length=20,
        choices=OrderPaymentMethod.choices,
        default=OrderPaymentMethod.BANK_TRANSFER,
        verbose_name=_('Payment Method')
    )
    transaction_id = models.CharField(max_length=100, blank=True, verbose_name=_('Transaction ID'))
    notes = models.TextField(blank=True, verbose_name=_('Notes'))
    payment_date = models.DateField(default=timezone.localdate, verbose_name=_('Payment Date'))
    received_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payments_received',
        verbose_name=_('Received By')
    )

    class Meta:
        verbose_name = _('Order Payment')
        verbose_name_plural = _('Order Payments')
        ordering = ['-payment_date', '-created_at']

    def __str__(self) -> str:
        return f"{self.order} - {self.amount}"

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'OrderId': self.order_id,
            'Amount': self.amount,
            'PaymentMethod': self.payment_method,
            'TransactionId': self.transaction_id,
            'Notes': self.notes,
            'PaymentDate': self.payment_date.isoformat() if self.payment_date else None,
            'ReceivedBy': self.received_by_id,
            'ReceivedByName': self.received_by.name if self.received_by else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
