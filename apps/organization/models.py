"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Company structure: branches, departments and designations.
-------------------------------------------------------------------------
"""
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.mixins import AuditLogMixin, TenantAwareMixin


class Branch(AuditLogMixin, TenantAwareMixin):
    """A physical office of the company."""

    branch_name = models.CharField(
        max_length=150,
        verbose_name=_('Branch Name')
    )
    address = models.TextField(blank=True, verbose_name=_('Address'))
    city = models.CharField(max_length=100, blank=True, verbose_name=_('City'))
    state = models.CharField(max_length=100, blank=True, verbose_name=_('State'))
    pin_code = models.CharField(max_length=10, blank=True, verbose_name=_('PIN Code'))

    class Meta:
        verbose_name = _('Branch')
        verbose_name_plural = _('Branches')
        ordering = ['branch_name']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'branch_name'],
                name='unique_branch_name_per_company'
            ),
        ]

    def __str__(self) -> str:
        return self.branch_name

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'BranchName': self.branch_name,
            'Address': self.address,
            'City': self.city,
            'State': self.state,
            'PinCode': self.pin_code,
            'CompanyId': self.company_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class Department(AuditLogMixin, TenantAwareMixin):

    department_name = models.CharField(
        max_length=150,
        verbose_name=_('Department Name')
    )
    description = models.TextField(blank=True, verbose_name=_('Description'))

    class Meta:
        verbose_name = _('Department')
        verbose_name_plural = _('Departments')
        ordering = ['department_name']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'department_name'],
                name='unique_department_name_per_company'
            ),
        ]

    def __str__(self) -> str:
        return self.department_name

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'DepartmentName': self.department_name,
            'Description': self.description,
            'CompanyId': self.company_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class Designation(AuditLogMixin, TenantAwareMixin):
    """Job title, optionally tied to a department."""

    designation_name = models.CharField(
        max_length=150,
        verbose_name=_('Designation Name')
    )
    department = models.ForeignKey(
        Department,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='designations',
        verbose_name=_('Department')
    )

    class Meta:
        verbose_name = _('Designation')
        verbose_name_plural = _('Designations')
        ordering = ['designation_name']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'designation_name'],
                name='unique_designation_name_per_company'
            ),
        ]

    def __str__(self) -> str:
        return self.designation_name

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'DesignationName': self.designation_name,
            'DepartmentId': self.department_id,
            'DepartmentName': self.department.department_name if self.department else None,
            'CompanyId': self.company_id,
        }
