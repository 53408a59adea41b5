"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Payroll analytics over stored salary slips. Distribution,
             department and branch breakdowns, trend and history.
-------------------------------------------------------------------------
"""
from decimal import Decimal
from typing import Dict, List, Optional

from django.db.models import Avg, Count, Sum
from django.db.models.functions import Coalesce

from apps.core.utils import MONTH_NAMES, money, month_key, previous_month, today
from apps.payroll.models import SalarySlip, format_month

ZERO = Decimal('0.00')

UNASSIGNED = 'Unassigned'


def company_slips(company, month: Optional[str] = None):
    slips = SalarySlip.get_tenant_filtered_queryset(company)
    if month:
        slips = slips.filter(month=month)
    return slips


class PayrollReports:

    @staticmethod
    def distribution(company, month: Optional[str] = None) -> Optional[Dict]:
        slips = company_slips(company, month)
        if not slips.exists():
            return None
        totals = slips.aggregate(
            gross=Coalesce(Sum('gross_salary'), ZERO),
            deductions=Coalesce(Sum('total_deductions'), ZERO),
            taxes=Coalesce(Sum('tax_amount'), ZERO),
        )
        return {
            'totalGrossSalary': money(totals['gross']),
            'totalDeductions': money(totals['deductions']),
            'totalTaxes': money(totals['taxes']),
        }

    @staticmethod
    def department_wise(company, month: Optional[str] = None) -> List[Dict]:
        """Gross salary per department, highest first."""
        rows = (
            company_slips(company, month)
            .values('employee__department__department_name')
            .annotate(
                total=Coalesce(Sum('gross_salary'), ZERO),
                employees=Count('employee', distinct=True),
            )
        )
        data = [
            {
                'department': row['employee__department__department_name'] or UNASSIGNED,
                'totalGrossSalary': money(row['total']),
                'employeeCount': row['employees'],
            }
            for row in rows
        ]
        data.sort(key=lambda item: item['totalGrossSalary'], reverse=True)
        return data

    @staticmethod
    def highest_paid_department(company, month: Optional[str] = None) -> Optional[Dict]:
        departments = PayrollReports.department_wise(company, month)
        return departments[0] if departments else None

    @staticmethod
    def trend(company, months: int = 6) -> List[Dict]:
        """Gross salary and tax for the last ``months`` months, oldest first."""
        current = today()
        year, month = current.year, current.month
        keys = []
        for _ in range(months):
            keys.append(month_key(year, month))
            year, month = previous_month(year, month)
        keys.reverse()

        rows = (
            company_slips(company)
            .filter(month__in=keys)
            .values('month')
            .annotate(
                gross=Coalesce(Sum('gross_salary'), ZERO),
                tax=Coalesce(Sum('tax_amount'), ZERO),
            )
        )
        by_month = {row['month']: row for row in rows}
        return [
            {
                'Month': format_month(key),
                'month': key,
                'totalGrossSalary': money(by_month[key]['gross']) if key in by_month else ZERO,
                'totalTax': money(by_month[key]['tax']) if key in by_month else ZERO,
            }
            for key in keys
        ]

    @staticmethod
    def average_salary(company, month: Optional[str] = None) -> Optional[Dict]:
        totals = company_slips(company, month).aggregate(avg=Avg('net_salary'), count=Count('id'))
        if not totals['count']:
            return None
        return {'avgSalary': money(totals['avg']), 'total': totals['count']}

    @staticmethod
    def by_branch(company, year: int, month: int) -> Dict:
        rows = (
            company_slips(company, month_key(year, month))
            .values('employee__branch_id', 'employee__branch__branch_name')
            .annotate(
                total=Coalesce(Sum('net_salary'), ZERO),
                employees=Count('employee', distinct=True),
            )
            .order_by('employee__branch__branch_name')
        )
        return {
            'data': [
                {
                    'branchId': row['employee__branch_id'],
                    'branchName': row['employee__branch__branch_name'] or UNASSIGNED,
                    'totalPayroll': money(row['total']),
                    'employeeCount': row['employees'],
                }
                for row in rows
            ],
            'period': {'month': month, 'year': year, 'monthName': MONTH_NAMES[month - 1]},
        }

    @staticmethod
    def history(company, year: int) -> List[Dict]:
        """Per-month slip totals for a year, months without slips omitted."""
        rows = (
            company_slips(company)
            .filter(month__startswith=f"{year:04d}-")
            .values('month')
            .annotate(
                employees=Count('employee', distinct=True),
                gross=Coalesce(Sum('gross_salary'), ZERO),
                deductions=Coalesce(Sum('total_deductions'), ZERO),
                tax=Coalesce(Sum('tax_amount'), ZERO),
                net=Coalesce(Sum('net_salary'), ZERO),
            )
            .order_by('month')
        )
        return [
            {
                'month': row['month'],
                'monthName': format_month(row['month']),
                'employeeCount': row['employees'],
                'totalGrossSalary': money(row['gross']),
                'totalDeductions': money(row['deductions']),
                'totalTax': money(row['tax']),
                'totalNetSalary': money(row['net']),
            }
            for row in rows
        ]
