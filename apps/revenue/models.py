"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Revenue entries, either entered by hand or generated from
             payments received against orders.
-------------------------------------------------------------------------
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.mixins import TimeStampedMixin, TenantAwareMixin


class Revenue(TimeStampedMixin, TenantAwareMixin):
    """
    Money received by the company.

    Rows linked to an OrderPayment are created by the payment flow
    and cannot be deleted on their own.
    """

    source = models.CharField(
        max_length=255,
        verbose_name=_('Source')
    )
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        verbose_name=_('Amount')
    )
    revenue_date = models.DateField(verbose_name=_('Revenue Date'))
    description = models.TextField(blank=True, verbose_name=_('Description'))
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='revenues_added',
        verbose_name=_('Added By')
    )
    branch = models.ForeignKey(
        'organization.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='revenues',
        verbose_name=_('Branch')
    )
    order = models.ForeignKey(
        'sales.Order',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='revenues',
        verbose_name=_('Order')
    )
    payment = models.OneToOneField(
        'sales.OrderPayment',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='revenue',
        verbose_name=_('Order Payment')
    )

    class Meta:
        verbose_name = _('Revenue')
        verbose_name_plural = _('Revenues')
        ordering = ['-revenue_date', '-created_at']

    def __str__(self) -> str:
        return f"{self.source} - {self.amount}"

    @property
    def is_payment_generated(self) -> bool:
        return self.payment_id is not None

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'Source': self.source,
            'Amount': self.amount,
            'RevenueDate': self.revenue_date.isoformat() if self.revenue_date else None,
            'Description': self.description,
            'AddedBy': self.added_by_id,
            'AddedByName': self.added_by.name if self.added_by else None,
            'BranchId': self.branch_id,
            'OrderId': self.order_id,
            'PaymentId': self.payment_id,
            'OrderNumber': self.order.order_number if self.order else None,
            'ServiceTitle': self.order.service_title if self.order else None,
            'ClientName': self.order.client_name if self.order else None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
