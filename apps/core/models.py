"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Tenant model (Company) and the company-wide recent
             activity feed.
-------------------------------------------------------------------------
"""
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.mixins import TimeStampedMixin, StatusMixin


class Company(TimeStampedMixin, StatusMixin):
    """
    A tenant of the system.

    Every business record (employees, orders, expenses, payroll...)
    hangs off exactly one Company. The company state is compared with
    the client state to decide between intra-state and inter-state GST.
    """

    public_id = models.UUIDField(
        default=uuid.uuid4,
        unique=True,
        editable=False,
        verbose_name=_('Public ID')
    )
    name = models.CharField(
        max_length=200,
        verbose_name=_('Company Name')
    )
    email = models.EmailField(
        blank=True,
        verbose_name=_('Email')
    )
    phone = models.CharField(
        max_length=20,
        blank=True,
        verbose_name=_('Phone')
    )
    address = models.TextField(
        blank=True,
        verbose_name=_('Address')
    )
    state = models.CharField(
        max_length=100,
        blank=True,
        verbose_name=_('State'),
        help_text=_('Indian state name, used to decide the GST split.')
    )
    gstin = models.CharField(
        max_length=15,
        blank=True,
        verbose_name=_('GSTIN')
    )
    pan = models.CharField(
        max_length=10,
        blank=True,
        verbose_name=_('PAN')
    )
    website = models.CharField(
        max_length=200,
        blank=True,
        verbose_name=_('Website')
    )

    class Meta:
        verbose_name = _('Company')
        verbose_name_plural = _('Companies')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'CompanyId': self.pk,
            'PublicId': str(self.public_id),
            'CompanyName': self.name,
            'Email': self.email,
            'Phone': self.phone,
            'Address': self.address,
            'State': self.state,
            'GSTIN': self.gstin,
            'PAN': self.pan,
            'Website': self.website,
            'IsActive': self.is_active,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class RecentActivityQuerySet(models.QuerySet):
    """Helpers for the rolling activity window."""

    def retention_cutoff(self):
        days = getattr(settings, 'RECENT_ACTIVITY_RETENTION_DAYS', 10)
        return timezone.now() - timedelta(days=days)

    def visible(self):
        """Entries still inside the retention window."""
        return self.filter(created_at__gte=self.retention_cutoff())

    def expired(self):
        return self.filter(created_at__lt=self.retention_cutoff())


class RecentActivity(models.Model):
    """
    One line in the company activity feed, e.g.
    "Priya added Employee Rahul Sharma".
    """

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name='activities',
        verbose_name=_('Company')
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities',
        verbose_name=_('User')
    )
    action = models.CharField(
        max_length=100,
        verbose_name=_('Action')
    )
    target = models.CharField(
        max_length=255,
        blank=True,
        verbose_name=_('Target')
    )
    is_email_sent = models.BooleanField(
        default=False,
        verbose_name=_('Email Sent')
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        verbose_name=_('Created At')
    )

    objects = RecentActivityQuerySet.as_manager()

    class Meta:
        verbose_name = _('Recent Activity')
        verbose_name_plural = _('Recent Activities')
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.action} {self.target}".strip()

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'action': self.action,
            'target': self.target,
            'userId': self.user_id,
            'userName': self.user.name if self.user else None,
            'isEmailSent': self.is_email_sent,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
