"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Salary structure (heads and per-employee settings), the
             HR-to-Admin approval requests for it, income tax slabs,
             monthly salary slips and employee slip download requests.
-------------------------------------------------------------------------
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _

from apps.core.mixins import TimeStampedMixin, TenantAwareMixin
from apps.core.utils import MONTH_ABBRS


class HeadType(models.TextChoices):
    EARNINGS = 'Earnings', _('Earnings')
    DEDUCTIONS = 'Deductions', _('Deductions')


class HeadMethod(models.TextChoices):
    FIXED = 'Fixed', _('Fixed')
    PERCENTAGE = 'Percentage', _('Percentage')


class RequestStatus(models.TextChoices):
    PENDING = 'Pending', _('Pending')
    APPROVED = 'Approved', _('Approved')
    REJECTED = 'Rejected', _('Rejected')


class SlipRequestStatus(models.TextChoices):
    PENDING = 'pending', _('Pending')
    APPROVED = 'approved', _('Approved')
    REJECTED = 'rejected', _('Rejected')


def format_month(month: str) -> str:
    """'2026-01' -> 'Jan 2026'."""
    year, number = month.split('-')
    return f"{MONTH_ABBRS[int(number) - 1]} {year}"


class SalaryHead(TimeStampedMixin, TenantAwareMixin):
    """
    A salary component such as Basic (BS), HRA or Professional Tax.

    ``short_name`` is unique per company regardless of case. The head
    with short name ``BS``/``Basic`` is the base for percentage heads.
    """

    title = models.CharField(max_length=100, verbose_name=_('Title'))
    short_name = models.CharField(max_length=20, verbose_name=_('Short Name'))
    head_type = models.CharField(
        max_length=12,
        choices=HeadType.choices,
        default=HeadType.EARNINGS,
        verbose_name=_('Type')
    )
    method = models.CharField(
        max_length=12,
        choices=HeadMethod.choices,
        default=HeadMethod.FIXED,
        verbose_name=_('Calculation Method')
    )
    depend_on = models.CharField(
        max_length=20,
        blank=True,
        verbose_name=_('Depends On'),
        help_text=_('Short name of the head a percentage is taken of.')
    )

    class Meta:
        verbose_name = _('Salary Head')
        verbose_name_plural = _('Salary Heads')
        ordering = ['head_type', 'title']
        constraints = [
            models.UniqueConstraint(
                Lower('short_name'), 'company',
                name='unique_salary_head_short_name_per_company'
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.short_name})"

    @property
    def is_basic(self) -> bool:
        return self.short_name.lower() in ('bs', 'basic')

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'SalaryHeadsTitle': self.title,
            'ShortName': self.short_name,
            'SalaryHeadsType': self.head_type,
            'SalaryCalculateMethod': self.method,
            'DependOn': self.depend_on or None,
            'CompanyId': self.company_id,
        }


class SalarySetting(TimeStampedMixin, TenantAwareMixin):
    """Salary structure of one employee."""

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='salary_settings',
        verbose_name=_('Employee')
    )
    effect_from = models.DateField(null=True, blank=True, verbose_name=_('Effective From'))
    is_tax_applicable = models.BooleanField(default=False, verbose_name=_('Tax Applicable'))

    class Meta:
        verbose_name = _('Salary Setting')
        verbose_name_plural = _('Salary Settings')
        constraints = [
            models.UniqueConstraint(fields=['company', 'employee'], name='unique_salary_setting_per_employee'),
        ]

    def __str__(self) -> str:
        return f"Salary setting: {self.employee}"

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'CompanyId': self.company_id,
            'EmployeeID': {
                'id': self.employee_id,
                'Name': self.employee.name,
                'Email': self.employee.email,
            },
            'EffectFrom': self.effect_from.isoformat() if self.effect_from else None,
            'isTaxApplicable': self.is_tax_applicable,
            'SalaryHeads': [line.to_dict() for line in self.lines.all()],
        }


class SalarySettingHead(models.Model):
    """One head's value inside a salary setting."""

    setting = models.ForeignKey(
        SalarySetting,
        on_delete=models.CASCADE,
        related_name='lines',
        verbose_name=_('Salary Setting')
    )
    salary_head = models.ForeignKey(
        SalaryHead,
        on_delete=models.PROTECT,
        related_name='setting_lines',
        verbose_name=_('Salary Head')
    )
    applicable_value = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Applicable Value')
    )
    percentage = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('100.00'))],
        verbose_name=_('Percentage of Basic')
    )

    class Meta:
        verbose_name = _('Salary Setting Head')
        verbose_name_plural = _('Salary Setting Heads')
        ordering = ['salary_head_id']

    def __str__(self) -> str:
        return f"{self.salary_head}: {self.applicable_value}"

    def to_dict(self) -> dict:
        return {
            'SalaryHeadId': self.salary_head.to_dict(),
            'applicableValue': self.applicable_value,
            'percentage': self.percentage,
        }


class SalaryConfigurationRequest(TimeStampedMixin, TenantAwareMixin):
    """
    A salary setting submitted by HR, waiting for Admin approval.

    ``heads`` holds the submitted lines as
    ``[{"SalaryHeadId": id, "applicableValue": x, "percentage": p}]``.
    """

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='salary_requests',
        verbose_name=_('Employee')
    )
    requested_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='salary_requests_made',
        verbose_name=_('Requested By')
    )
    heads = models.JSONField(default=list, verbose_name=_('Salary Heads'))
    effect_from = models.DateField(null=True, blank=True, verbose_name=_('Effective From'))
    is_tax_applicable = models.BooleanField(default=False, verbose_name=_('Tax Applicable'))
    status = models.CharField(
        max_length=10,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
        verbose_name=_('Status')
    )
    rejection_reason = models.TextField(blank=True, verbose_name=_('Rejection Reason'))
    is_read = models.BooleanField(default=False, verbose_name=_('Read by Requester'))
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='salary_requests_reviewed',
        verbose_name=_('Reviewed By')
    )

    class Meta:
        verbose_name = _('Salary Configuration Request')
        verbose_name_plural = _('Salary Configuration Requests')
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.employee} ({self.status})"

    def head_ids(self) -> set:
        """Salary head ids referenced by the submitted lines."""
        return {int(line['SalaryHeadId']) for line in self.heads or []}

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'EmployeeID': self.employee_id,
            'EmployeeName': self.employee.name,
            'RequestedBy': self.requested_by_id,
            'RequestedByName': self.requested_by.name,
            'SalaryHeads': self.heads,
            'EffectFrom': self.effect_from.isoformat() if self.effect_from else None,
            'isTaxApplicable': self.is_tax_applicable,
            'Status': self.status,
            'RejectionReason': self.rejection_reason or None,
            'IsRead': self.is_read,
            'ReviewedBy': self.reviewed_by_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }


class TaxSlab(TimeStampedMixin, TenantAwareMixin):
    """Annual income band taxed at ``tax_rate`` percent."""

    min_income = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name=_('Minimum Income')
    )
    max_income = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Maximum Income'),
        help_text=_('Leave empty for the open-ended top slab.')
    )
    tax_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('100.00'))],
        verbose_name=_('Tax Rate (%)')
    )
    effective_from = models.DateField(verbose_name=_('Effective From'))

    class Meta:
        verbose_name = _('Tax Slab')
        verbose_name_plural = _('Tax Slabs')
        ordering = ['min_income']

    def __str__(self) -> str:
        upper = self.max_income if self.max_income is not None else 'and above'
        return f"{self.min_income} - {upper} @ {self.tax_rate}%"

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'minIncome': self.min_income,
            'maxIncome': self.max_income,
            'taxRate': self.tax_rate,
            'effectiveFrom': self.effective_from.isoformat(),
            'CompanyId': self.company_id,
        }


class SalarySlip(TimeStampedMixin, TenantAwareMixin):
    """The computed salary of one employee for one month (YYYY-MM)."""

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='salary_slips',
        verbose_name=_('Employee')
    )
    month = models.CharField(max_length=7, db_index=True, verbose_name=_('Month'))
    earnings = models.JSONField(default=list, verbose_name=_('Earnings'))
    deductions = models.JSONField(default=list, verbose_name=_('Deductions'))
    total_earnings = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total_deductions = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    gross_salary = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    tax_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    net_salary = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    attendance_summary = models.JSONField(default=dict, verbose_name=_('Attendance Summary'))
    generated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='salary_slips_generated',
        verbose_name=_('Generated By')
    )

    class Meta:
        verbose_name = _('Salary Slip')
        verbose_name_plural = _('Salary Slips')
        ordering = ['-month', 'employee__name']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'employee', 'month'],
                name='unique_salary_slip_per_month'
            ),
        ]

    def __str__(self) -> str:
        return f"{self.employee} {self.month}: {self.net_salary}"

    @property
    def month_label(self) -> str:
        return format_month(self.month)

    def to_dict(self) -> dict:
        employee = self.employee
        return {
            'id': self.pk,
            'EmployeeID': self.employee_id,
            'EmployeeName': employee.name,
            'EmployeeCode': employee.employee_code,
            'Month': self.month,
            'Earnings': self.earnings,
            'Deductions': self.deductions,
            'totalEarnings': self.total_earnings,
            'totalDeductions': self.total_deductions,
            'grossSalary': self.gross_salary,
            'TaxAmount': self.tax_amount,
            'netSalary': self.net_salary,
            'attendanceSummary': self.attendance_summary,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class SalarySlipRequest(TimeStampedMixin, TenantAwareMixin):
    """An employee's request to download a slip, approved by HR/Admin."""

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='slip_requests',
        verbose_name=_('Employee')
    )
    month = models.CharField(max_length=7, verbose_name=_('Month'))
    status = models.CharField(
        max_length=10,
        choices=SlipRequestStatus.choices,
        default=SlipRequestStatus.PENDING,
        verbose_name=_('Status')
    )
    requested_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Requested At'))
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='slip_requests_decided',
        verbose_name=_('Decided By')
    )
    approved_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Approved At'))
    rejected_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Rejected At'))
    rejection_reason = models.TextField(blank=True, verbose_name=_('Rejection Reason'))
    downloaded_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Downloaded At'))

    class Meta:
        verbose_name = _('Salary Slip Request')
        verbose_name_plural = _('Salary Slip Requests')
        ordering = ['-requested_at']
        constraints = [
            models.UniqueConstraint(fields=['employee', 'month'], name='unique_slip_request_per_month'),
        ]

    def __str__(self) -> str:
        return f"{self.employee} {self.month} ({self.status})"

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'EmployeeID': {
                'id': self.employee_id,
                'Name': self.employee.name,
                'Email': self.employee.email,
            },
            'Month': self.month,
            'status': self.status,
            'requestedAt': self.requested_at.isoformat() if self.requested_at else None,
            'approvedBy': self.approved_by_id,
            'approvedAt': self.approved_at.isoformat() if self.approved_at else None,
            'rejectedAt': self.rejected_at.isoformat() if self.rejected_at else None,
            'rejectionReason': self.rejection_reason or None,
            'downloadedAt': self.downloaded_at.isoformat() if self.downloaded_at else None,
        }
