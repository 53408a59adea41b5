"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Salary slip computation. Earnings and deductions from the
             employee's salary setting, loss-of-pay from attendance and
             progressive income tax from the company's tax slabs.
-------------------------------------------------------------------------
"""
import calendar
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Set

from apps.attendance.models import AttendanceStatus
from apps.core.exceptions import ValidationFailed
from apps.core.utils import MAX_YEAR, MIN_YEAR, money, month_key, today
from apps.payroll.models import HeadType

ZERO = Decimal('0.00')

UNPAID_STATUSES = (AttendanceStatus.UNPAID_LEAVE, AttendanceStatus.ABSENT)


class SalaryNotConfigured(ValidationFailed):
    error_code = 'ERR_SALARY_NOT_CONFIGURED'
    default_message = 'Basic salary not configured'


def normalize_month(raw) -> str:
    """
    Normalise the month formats clients send into ``YYYY-MM``.

    Accepts ``2026-01``, ``202601``, ``1-2026``/``01-2026``, a bare month
    number (current year) or an ISO date.

    Raises:
        ValidationFailed: "Invalid Month format".
    """
    text = str(raw if raw is not None else '').strip()
    if not text:
        raise ValidationFailed("Month is required")

    year = month = None
    if re.fullmatch(r'\d{4}-\d{2}', text):
        year, month = int(text[:4]), int(text[5:])
    elif re.fullmatch(r'\d{6}', text):
        year, month = int(text[:4]), int(text[4:])
    elif re.fullmatch(r'\d{1,2}-\d{4}', text):
        month_part, year_part = text.split('-')
        year, month = int(year_part), int(month_part)
    elif re.fullmatch(r'\d{1,2}', text):
        year, month = today().year, int(text)
    else:
        try:
            parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            raise ValidationFailed("Invalid Month format")
        year, month = parsed.year, parsed.month

    if not 1 <= month <= 12 or not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationFailed("Invalid Month format")
    return month_key(year, month)


def progressive_tax(annual_income: Decimal, slabs: Iterable) -> Decimal:
    """
    Tax on ``annual_income``, each slab's rate applied to its own band.

    Slabs are taken in ascending ``min_income``; a ``max_income`` of None
    is open-ended.
    """
    total = ZERO
    previous_max = ZERO
    for slab in sorted(slabs, key=lambda s: s.min_income):
        lower = slab.min_income
        upper = slab.max_income
        if annual_income <= lower:
            break
        start = max(lower, previous_max)
        end = annual_income if upper is None else min(annual_income, upper)
        if end > start:
            total += (end - start) * slab.tax_rate / Decimal('100')
        if upper is None or annual_income <= upper:
            break
        previous_max = max(previous_max, upper)
    return money(total)


class SalaryCalculator:
    """
    Computes one employee's slip for one month.

    The caller supplies everything the computation reads so that the
    bulk run can fetch holidays, attendance and slabs once per month:

        calculator = SalaryCalculator(setting, '2026-01', holidays, attendance, slabs)
        slip = calculator.calculate()
    """

    def __init__(self, setting, month: str, holidays: Optional[Set[date]] = None,
                 attendance: Optional[Mapping[date, str]] = None, tax_slabs: Optional[List] = None):
        """
        Args:
            setting: SalarySetting with its lines (and their heads).
            month: Normalised month key, YYYY-MM.
            holidays: Holiday dates of the month.
            attendance: Date to status for this employee.
            tax_slabs: Slabs effective on the first day of the month.
        """
        self.setting = setting
        self.month = month
        self.year, self.month_number = (int(part) for part in month.split('-'))
        self.holidays = holidays or set()
        self.attendance = attendance or {}
        self.tax_slabs = tax_slabs or []

    def basic_salary(self, lines) -> Decimal:
        for line in lines:
            if line.salary_head.is_basic and line.applicable_value is not None:
                return money(line.applicable_value)
        raise SalaryNotConfigured()

    def attendance_summary(self) -> Dict:
        """Count working days and unpaid days; Sundays and holidays are skipped."""
        days_in_month = calendar.monthrange(self.year, self.month_number)[1]
        summary = {
            'totalWorkingDays': 0,
            'presentDays': 0,
            'unpaidLeaves': 0,
            'halfDays': 0,
            'paidLeaves': 0,
        }
        unpaid_days = Decimal('0')
        for day_number in range(1, days_in_month + 1):
            day = date(self.year, self.month_number, day_number)
            if day.weekday() == 6 or day in self.holidays:
                continue
            summary['totalWorkingDays'] += 1
            status = self.attendance.get(day)
            if status in UNPAID_STATUSES:
                unpaid_days += 1
                summary['unpaidLeaves'] += 1
            elif status == AttendanceStatus.HALF_DAY:
                unpaid_days += Decimal('0.5')
                summary['halfDays'] += 1
            elif status == AttendanceStatus.PAID_LEAVE:
                summary['paidLeaves'] += 1
            elif status == AttendanceStatus.PRESENT:
                summary['presentDays'] += 1
            # Unmarked days are not deducted
        summary['unpaidDays'] = unpaid_days
        summary['daysInMonth'] = days_in_month
        return summary

    def calculate(self) -> Dict:
        """
        Returns:
            Dict with earnings, deductions (lists of {title, shortName,
            amount}), the totals and the attendance summary.
        """
        lines = list(self.setting.lines.select_related('salary_head'))
        basic = self.basic_salary(lines)

        earnings = []
        deductions = []
        for line in lines:
            head = line.salary_head
            if line.applicable_value is not None:
                amount = money(line.applicable_value)
            else:
                amount = money(basic * (line.percentage or ZERO) / Decimal('100'))
            item = {'title': head.title, 'shortName': head.short_name, 'amount': amount}
            if head.head_type == HeadType.EARNINGS:
                earnings.append(item)
            else:
                deductions.append(item)

        summary = self.attendance_summary()
        unpaid_days = summary.pop('unpaidDays')
        days_in_month = summary.pop('daysInMonth')
        per_day = basic / Decimal(days_in_month)
        leave_deduction = money(per_day * unpaid_days)
        if leave_deduction > 0:
            days_label = f"{unpaid_days.normalize():f}"
            deductions.append({
                'title': f"Leave Deduction ({days_label} days)",
                'shortName': 'LWP',
                'amount': leave_deduction,
            })
        summary['leaveDeductionAmount'] = float(leave_deduction)

        total_earnings = money(sum((item['amount'] for item in earnings), ZERO))
        total_deductions = money(sum((item['amount'] for item in deductions), ZERO))
        gross = total_earnings
        tax = ZERO
        if self.setting.is_tax_applicable and self.tax_slabs:
            tax = money(progressive_tax(gross * 12, self.tax_slabs) / 12)
        net = money(gross - total_deductions - tax)

        return {
            'month': self.month,
            'earnings': earnings,
            'deductions': deductions,
            'total_earnings': total_earnings,
            'total_deductions': total_deductions,
            'gross_salary': gross,
            'tax_amount': tax,
            'net_salary': net,
            'attendance_summary': summary,
        }


def json_lines(items: List[Dict]) -> List[Dict]:
    """Slip lines with float amounts for JSON storage."""
    return [{**item, 'amount': float(item['amount'])} for item in items]
