"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Daily attendance marks, company holidays, leave requests
             and the monthly paid-leave balance of each employee.
-------------------------------------------------------------------------
"""
from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.core.mixins import TimeStampedMixin, TenantAwareMixin


class AttendanceStatus(models.TextChoices):
    PRESENT = 'Present', _('Present')
    ABSENT = 'Absent', _('Absent')
    PAID_LEAVE = 'PaidLeave', _('Paid Leave')
    UNPAID_LEAVE = 'UnpaidLeave', _('Unpaid Leave')
    HALF_DAY = 'HalfDay', _('Half Day')


# Accepted on input only: removes the day's mark
UNMARKED = 'Unmarked'


class HolidayType(models.TextChoices):
    PAID = 'Paid', _('Paid')


class LeaveStatus(models.TextChoices):
    PENDING = 'Pending', _('Pending')
    APPROVED = 'Approved', _('Approved')
    REJECTED = 'Rejected', _('Rejected')


class Attendance(TimeStampedMixin, TenantAwareMixin):
    """One employee's status on one day."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='attendance_records',
        verbose_name=_('Employee')
    )
    date = models.DateField(verbose_name=_('Date'))
    status = models.CharField(
        max_length=20,
        choices=AttendanceStatus.choices,
        verbose_name=_('Status')
    )
    marked_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attendance_marked',
        verbose_name=_('Marked By')
    )

    class Meta:
        verbose_name = _('Attendance')
        verbose_name_plural = _('Attendance')
        ordering = ['date']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'user', 'date'],
                name='unique_attendance_per_user_day'
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user} {self.date}: {self.status}"


class Holiday(TimeStampedMixin, TenantAwareMixin):

    date = models.DateField(verbose_name=_('Date'))
    name = models.CharField(max_length=150, verbose_name=_('Name'))
    holiday_type = models.CharField(
        max_length=10,
        choices=HolidayType.choices,
        default=HolidayType.PAID,
        verbose_name=_('Type')
    )

    class Meta:
        verbose_name = _('Holiday')
        verbose_name_plural = _('Holidays')
        ordering = ['date']
        constraints = [
            models.UniqueConstraint(fields=['company', 'date'], name='unique_holiday_per_company_date'),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.date})"

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'Date': self.date.isoformat(),
            'Name': self.name,
            'Type': self.holiday_type,
            'CompanyId': self.company_id,
        }


class LeaveSetting(TimeStampedMixin):
    """Company-wide leave policy."""

    company = models.OneToOneField(
        'core.Company',
        on_delete=models.CASCADE,
        related_name='leave_setting',
        verbose_name=_('Company')
    )
    default_monthly_paid_leaves = models.PositiveIntegerField(
        default=1,
        verbose_name=_('Monthly Paid Leaves'),
        help_text=_('Paid leave days allocated to each employee every month.')
    )

    class Meta:
        verbose_name = _('Leave Setting')
        verbose_name_plural = _('Leave Settings')

    def __str__(self) -> str:
        return f"{self.company}: {self.default_monthly_paid_leaves} paid leave(s)/month"

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'CompanyId': self.company_id,
            'DefaultMonthlyPaidLeaves': self.default_monthly_paid_leaves,
        }


class LeaveRequest(TimeStampedMixin, TenantAwareMixin):

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='leave_requests',
        verbose_name=_('Employee')
    )
    leave_type = models.CharField(max_length=50, default='General', verbose_name=_('Leave Type'))
    from_date = models.DateField(verbose_name=_('From'))
    to_date = models.DateField(verbose_name=_('To'))
    reason = models.TextField(blank=True, verbose_name=_('Reason'))
    status = models.CharField(
        max_length=10,
        choices=LeaveStatus.choices,
        default=LeaveStatus.PENDING,
        verbose_name=_('Status')
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='leaves_decided',
        verbose_name=_('Decided By')
    )
    rejection_reason = models.TextField(blank=True, verbose_name=_('Rejection Reason'))

    class Meta:
        verbose_name = _('Leave Request')
        verbose_name_plural = _('Leave Requests')
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.user} {self.from_date} - {self.to_date} ({self.status})"

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'UserId': self.user_id,
            'EmployeeName': self.user.name if self.user_id else None,
            'LeaveType': self.leave_type,
            'FromDate': self.from_date.isoformat(),
            'ToDate': self.to_date.isoformat(),
            'Reason': self.reason,
            'Status': self.status,
            'ApprovedBy': self.approved_by_id,
            'ApprovedByName': self.approved_by.name if self.approved_by else None,
            'RejectionReason': self.rejection_reason or None,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }


class LeaveBalance(TimeStampedMixin, TenantAwareMixin):
    """Paid leave allocation and usage of one employee in one month."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='leave_balances',
        verbose_name=_('Employee')
    )
    month = models.CharField(max_length=7, verbose_name=_('Month'), help_text=_('YYYY-MM'))
    total_allocated = models.PositiveIntegerField(default=0, verbose_name=_('Allocated'))
    used = models.PositiveIntegerField(default=0, verbose_name=_('Used'))
    remaining = models.PositiveIntegerField(default=0, verbose_name=_('Remaining'))

    class Meta:
        verbose_name = _('Leave Balance')
        verbose_name_plural = _('Leave Balances')
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'user', 'month'],
                name='unique_leave_balance_per_month'
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user} {self.month}: {self.remaining}/{self.total_allocated}"

    @property
    def extra_leaves(self) -> int:
        return max(0, self.used - self.total_allocated)

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'UserId': self.user_id,
            'Month': self.month,
            'TotalAllocated': self.total_allocated,
            'Used': self.used,
            'Remaining': self.remaining,
            'ExtraLeaves': self.extra_leaves,
        }
