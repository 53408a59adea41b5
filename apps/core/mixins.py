"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Reusable model mixins for timestamps, audit fields,
             and company-scoped multi-tenancy.
-------------------------------------------------------------------------
"""
from typing import Optional, TYPE_CHECKING
from django.db import models
from django.conf import settings

if TYPE_CHECKING:
    from apps.core.models import Company


class TimeStampedMixin(models.Model):
    """
    Abstract mixin that adds created_at and updated_at timestamps.

    Attributes:
        created_at: Timestamp when the record was created.
        updated_at: Timestamp when the record was last modified.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
        help_text="Timestamp when this record was created."
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated At",
        help_text="Timestamp when this record was last modified."
    )

    class Meta:
        abstract = True


class AuditLogMixin(TimeStampedMixin):
    """
    Abstract mixin that adds audit trail fields for user tracking.

    Extends TimeStampedMixin with created_by and updated_by fields
    to track which user created or modified a record.
    """

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="%(class)s_created",
        null=True,
        blank=True,
        verbose_name="Created By",
        help_text="User who created this record."
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="%(class)s_updated",
        null=True,
        blank=True,
        verbose_name="Updated By",
        help_text="User who last modified this record."
    )

    class Meta:
        abstract = True

    def save_with_user(self, user: Optional[object] = None, *args, **kwargs) -> None:
        """
        Save the model while setting the audit user fields.

        Args:
            user: The user performing the save operation.
        """
        if user is not None and getattr(user, 'pk', None):
            if self.pk is None:
                self.created_by = user
            self.updated_by = user
        self.save(*args, **kwargs)


class StatusMixin(models.Model):
    """Abstract mixin providing an is_active flag."""

    is_active = models.BooleanField(
        default=True,
        verbose_name="Is Active",
        help_text="Whether this record is active in the system."
    )

    class Meta:
        abstract = True


class TenantAwareMixin(models.Model):
    """
    Abstract mixin for multi-tenancy support.

    Every business record belongs to exactly one Company. The
    TenantMiddleware exposes the caller's company as
    ``request.company`` and views always scope queries through
    ``get_tenant_filtered_queryset``.

    Attributes:
        company: ForeignKey to the owning Company (tenant).
    """

    company = models.ForeignKey(
        'core.Company',
        on_delete=models.CASCADE,
        related_name="%(class)s_records",
        verbose_name="Company",
        help_text="The company that owns this record."
    )

    class Meta:
        abstract = True

    @classmethod
    def get_tenant_filtered_queryset(cls, company: Optional['Company']):
        """
        Get a queryset filtered by company.

        Args:
            company: The company to filter by. A missing company sees nothing.

        Returns:
            Filtered queryset.
        """
        if company is None:
            return cls.objects.none()
        return cls.objects.filter(company=company)
