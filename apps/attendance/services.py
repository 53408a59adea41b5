"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Attendance marking rules, leave balances and the leave
             approval workflow.
-------------------------------------------------------------------------
"""
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.attendance.models import (
    UNMARKED,
    Attendance,
    AttendanceStatus,
    Holiday,
    LeaveBalance,
    LeaveRequest,
    LeaveSetting,
    LeaveStatus,
)
from apps.core.exceptions import (
    AttendanceDateLocked,
    FutureAttendanceDate,
    ValidationFailed,
    WorkflowTransitionException,
)
from apps.core.services import ActivityService
from apps.core.utils import month_bounds, month_key, to_date, today

logger = logging.getLogger(__name__)

User = get_user_model()

VALID_MARK_STATUSES = list(AttendanceStatus.values) + [UNMARKED]


def is_date_locked(day: date) -> bool:
    """Past dates older than the grace period can no longer be edited."""
    return (today() - day).days > settings.ATTENDANCE_GRACE_PERIOD_DAYS


def is_future_date(day: date) -> bool:
    return (day - today()).days > settings.ATTENDANCE_MAX_FUTURE_DAYS


def working_days(start: date, end: date, holidays: Iterable[date]) -> List[date]:
    """Days in [start, end] that are neither Sundays nor holidays."""
    holiday_set = set(holidays)
    days = []
    current = start
    while current <= end:
        if current.weekday() != 6 and current not in holiday_set:
            days.append(current)
        current += timedelta(days=1)
    return days


class AttendanceService:

    @staticmethod
    @transaction.atomic
    def mark(company, marked_by, day: date, entries: List[Dict]) -> int:
        """
        Upsert one status per employee for ``day``.

        ``Unmarked`` removes the day's record.

        Raises:
            AttendanceDateLocked: Day older than the grace period.
            FutureAttendanceDate: Day beyond the allowed future window.
            ValidationFailed: Unknown users or invalid statuses.
        """
        if not entries:
            raise ValidationFailed("Employees array cannot be empty")
        if is_date_locked(day):
            raise AttendanceDateLocked(
                f"Cannot modify attendance for {day.isoformat()}. "
                f"This date has passed and is now locked."
            )
        if is_future_date(day):
            raise FutureAttendanceDate(f"Cannot mark attendance for future date {day.isoformat()}.")

        user_ids = [entry.get('UserId') for entry in entries]
        valid_ids = {
            str(pk) for pk in User.objects.filter(
                company=company, pk__in=[uid for uid in user_ids if str(uid).isdigit()]
            ).values_list('pk', flat=True)
        }
        invalid_users = [uid for uid in user_ids if str(uid) not in valid_ids]
        if invalid_users:
            raise ValidationFailed(
                "Some users do not exist or do not belong to this company",
                details={'invalidUserIds': invalid_users},
            )

        invalid_entries = [entry for entry in entries if entry.get('Status') not in VALID_MARK_STATUSES]
        if invalid_entries:
            raise ValidationFailed(
                "Invalid status values found",
                details={'validStatuses': VALID_MARK_STATUSES, 'invalidEntries': invalid_entries},
            )

        for entry in entries:
            user_id = int(entry['UserId'])
            if entry['Status'] == UNMARKED:
                Attendance.objects.filter(company=company, user_id=user_id, date=day).delete()
                continue
            Attendance.objects.update_or_create(
                company=company,
                user_id=user_id,
                date=day,
                defaults={'status': entry['Status'], 'marked_by': marked_by},
            )

        logger.info(
            "Attendance marked for %s employees on %s (company %s)",
            len(entries), day.isoformat(), company.pk,
        )
        return len(entries)

    @staticmethod
    def month_map(company, year: int, month: int, user=None) -> Dict[int, Dict[int, str]]:
        """``{user_id: {day: status}}`` for one month."""
        start, end = month_bounds(year, month)
        records = Attendance.get_tenant_filtered_queryset(company).filter(date__range=(start, end))
        if user is not None:
            records = records.filter(user=user)
        grid: Dict[int, Dict[int, str]] = {}
        for user_id, day, status in records.values_list('user_id', 'date', 'status'):
            grid.setdefault(user_id, {})[day.day] = status
        return grid


class LeaveService:

    @staticmethod
    def allocated_for(company) -> int:
        setting = LeaveSetting.objects.filter(company=company).first()
        if setting is None:
            return settings.DEFAULT_MONTHLY_PAID_LEAVES
        return setting.default_monthly_paid_leaves

    @staticmethod
    def update_setting(company, value) -> LeaveSetting:
        setting, _ = LeaveSetting.objects.update_or_create(
            company=company,
            defaults={'default_monthly_paid_leaves': value},
        )
        return setting

    @staticmethod
    def get_or_init_balance(company, user, month: str, allocated: Optional[int] = None) -> LeaveBalance:
        """
        Fetch the month's balance, creating it from the leave setting.

        An existing balance is re-synced when the setting has changed
        since it was created.
        """
        if allocated is None:
            allocated = LeaveService.allocated_for(company)
        balance, created = LeaveBalance.objects.get_or_create(
            company=company,
            user=user,
            month=month,
            defaults={'total_allocated': allocated, 'used': 0, 'remaining': allocated},
        )
        if not created and balance.total_allocated != allocated:
            balance.total_allocated = allocated
            balance.remaining = max(0, allocated - balance.used)
            balance.save(update_fields=['total_allocated', 'remaining', 'updated_at'])
        return balance

    @staticmethod
    def apply(company, user, data: Dict) -> LeaveRequest:
        from_date = to_date(data.get('FromDate'), 'FromDate')
        to_date_value = to_date(data.get('ToDate'), 'ToDate')
        if from_date > to_date_value:
            raise ValidationFailed("FromDate cannot be after ToDate")
        leave = LeaveRequest.objects.create(
            company=company,
            user=user,
            from_date=from_date,
            to_date=to_date_value,
            reason=str(data.get('Reason') or '').strip(),
            leave_type=str(data.get('LeaveType') or 'General').strip(),
        )
        logger.info(
            "Leave applied: %s %s to %s",
            user.email, from_date.isoformat(), to_date_value.isoformat(),
            extra={'leave_id': leave.pk, 'company_id': company.pk},
        )
        return leave

    @staticmethod
    @transaction.atomic
    def decide(leave: LeaveRequest, approver, status: str, rejection_reason: str = '') -> LeaveRequest:
        """
        Approve or reject a pending leave request.

        On approval each working day in the range is marked PaidLeave
        while the month's balance lasts and UnpaidLeave after that.
        """
        if status not in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
            raise ValidationFailed(
                "Invalid Status",
                details={'validStatuses': [LeaveStatus.APPROVED, LeaveStatus.REJECTED]},
            )
        if leave.status != LeaveStatus.PENDING:
            raise WorkflowTransitionException("Leave already processed")

        leave.status = status
        leave.approved_by = approver
        if status == LeaveStatus.REJECTED:
            leave.rejection_reason = rejection_reason
        leave.save()

        if status == LeaveStatus.APPROVED:
            company = leave.company
            holidays = Holiday.get_tenant_filtered_queryset(company).filter(
                date__range=(leave.from_date, leave.to_date)
            ).values_list('date', flat=True)
            allocated = LeaveService.allocated_for(company)
            balances: Dict[str, LeaveBalance] = {}

            for day in working_days(leave.from_date, leave.to_date, holidays):
                key = month_key(day.year, day.month)
                if key not in balances:
                    balances[key] = LeaveService.get_or_init_balance(company, leave.user, key, allocated)
                balance = balances[key]

                day_status = AttendanceStatus.UNPAID_LEAVE
                if balance.remaining > 0:
                    day_status = AttendanceStatus.PAID_LEAVE
                    balance.remaining -= 1
                balance.used += 1

                Attendance.objects.update_or_create(
                    company=company,
                    user=leave.user,
                    date=day,
                    defaults={'status': day_status, 'marked_by': approver},
                )

            for balance in balances.values():
                balance.save()

        ActivityService.log(leave.company, approver, f"{status} Leave", f"Employee {leave.user.name}")
        return leave
