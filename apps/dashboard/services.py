"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Dashboard service layer for aggregating financial metrics.
             Monthly series for the charts, the company summary (cached)
             and the monthly and annual reports.
-------------------------------------------------------------------------
"""
from decimal import Decimal
from typing import Any, Dict, List

from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.db.models import Count, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.core.utils import MONTH_NAMES, money, month_key
from apps.expenditure.models import Expense
from apps.expenditure.services import PurchaseService
from apps.organization.models import Branch, Department
from apps.payroll.models import SalarySlip
from apps.revenue.models import Revenue
from apps.revenue.reports import RevenueReports, monthly_sums, total_of
from apps.sales.models import Order
from apps.users.models import UserRole

User = get_user_model()

ZERO = Decimal('0.00')

SUMMARY_CACHE_TIMEOUT = 900


def summary_cache_key(company_id) -> str:
    return f'dashboard_summary_{company_id}'


class DashboardService:
    """
    Service class for dashboard data aggregation.

    Every monthly series covers all twelve months of the year, with zero
    for months without records.
    """

    @staticmethod
    def monthly_order_amount(company, year: int) -> Dict[int, Decimal]:
        return monthly_sums(
            Order.get_tenant_filtered_queryset(company).filter(created_at__year=year),
            'created_at',
        )

    @staticmethod
    def monthly_payroll(company, year: int) -> Dict[int, Decimal]:
        """Gross salary per month, from slips keyed YYYY-MM."""
        rows = (
            SalarySlip.get_tenant_filtered_queryset(company)
            .filter(month__startswith=f"{year:04d}-")
            .values('month')
            .annotate(total=Coalesce(Sum('gross_salary'), ZERO))
        )
        sums = {month: ZERO for month in range(1, 13)}
        for row in rows:
            sums[int(row['month'][5:7])] = money(row['total'])
        return sums

    @staticmethod
    def revenue_vs_expense(company, year: int) -> List[Dict[str, Any]]:
        revenue = RevenueReports.monthly_revenue(company, year)
        expense = RevenueReports.monthly_expense(company, year)
        return [
            {'month': MONTH_NAMES[m - 1], 'revenue': revenue[m], 'expense': expense[m]}
            for m in range(1, 13)
        ]

    @staticmethod
    def order_expense(company, year: int) -> List[Dict[str, Any]]:
        orders = DashboardService.monthly_order_amount(company, year)
        expense = RevenueReports.monthly_expense(company, year)
        return [
            {'month': MONTH_NAMES[m - 1], 'orderAmount': orders[m], 'expense': expense[m]}
            for m in range(1, 13)
        ]

    @staticmethod
    def profit_expense(company, year: int) -> List[Dict[str, Any]]:
        revenue = RevenueReports.monthly_revenue(company, year)
        expense = RevenueReports.monthly_expense(company, year)
        return [
            {'month': MONTH_NAMES[m - 1], 'profit': money(revenue[m] - expense[m]), 'expense': expense[m]}
            for m in range(1, 13)
        ]

    @staticmethod
    def profit_payroll(company, year: int) -> List[Dict[str, Any]]:
        revenue = RevenueReports.monthly_revenue(company, year)
        expense = RevenueReports.monthly_expense(company, year)
        payroll = DashboardService.monthly_payroll(company, year)
        return [
            {'month': MONTH_NAMES[m - 1], 'profit': money(revenue[m] - expense[m]), 'payroll': payroll[m]}
            for m in range(1, 13)
        ]

    @staticmethod
    def get_summary(company) -> Dict[str, Any]:
        """
        Company-wide totals for the dashboard cards.

        Cached per company for 15 minutes; signal handlers drop the entry
        whenever revenue, expenses, orders, slips or users change.
        """
        cache_key = summary_cache_key(company.pk)
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        orders = Order.get_tenant_filtered_queryset(company)
        order_totals = orders.aggregate(
            count=Count('id'),
            outstanding=Coalesce(Sum('balance_due'), ZERO),
        )
        revenue = RevenueReports.total_revenue(company)
        expenses = RevenueReports.total_expense(company)
        summary = {
            'totalEmployees': User.objects.filter(company=company, role=UserRole.EMPLOYEE).count(),
            'totalBranches': Branch.get_tenant_filtered_queryset(company).count(),
            'totalDepartments': Department.get_tenant_filtered_queryset(company).count(),
            'totalRevenue': revenue,
            'totalExpenses': expenses,
            'totalProfit': money(revenue - expenses),
            'totalOrders': order_totals['count'],
            'outstandingBalance': money(order_totals['outstanding']),
        }
        cache.set(cache_key, summary, SUMMARY_CACHE_TIMEOUT)
        return summary

    @staticmethod
    def invalidate_summary(company_id) -> None:
        if company_id:
            cache.delete(summary_cache_key(company_id))

    @staticmethod
    def monthly_report(company, year: int, month: int) -> Dict[str, Any]:
        """
        Everything that happened in one month.

        Returns:
            Dictionary containing:
                - revenue: total and count
                - expenses: total and per expense type
                - orders: count, amount, received and balance
                - purchases: orders paid in the month with their expenses
                - payroll: slip totals for the month
                - netProfit: revenue minus expenses
        """
        revenues = Revenue.get_tenant_filtered_queryset(company).filter(
            revenue_date__year=year, revenue_date__month=month
        )
        expenses = Expense.get_tenant_filtered_queryset(company).filter(
            expense_date__year=year, expense_date__month=month
        )
        orders = Order.get_tenant_filtered_queryset(company).filter(
            created_at__year=year, created_at__month=month
        )
        purchases = [
            PurchaseService.to_purchase(order)
            for order in PurchaseService.queryset(company).filter(
                updated_at__year=year, updated_at__month=month
            )
        ]
        slips = SalarySlip.get_tenant_filtered_queryset(company).filter(month=month_key(year, month))

        revenue_total = total_of(revenues)
        expense_total = total_of(expenses)
        by_type = (
            expenses.values('expense_type')
            .annotate(total=Coalesce(Sum('amount'), ZERO), count=Count('id'))
            .order_by('-total')
        )
        order_totals = orders.aggregate(
            amount=Coalesce(Sum('amount'), ZERO),
            received=Coalesce(Sum('advance_paid'), ZERO),
            balance=Coalesce(Sum('balance_due'), ZERO),
        )
        payroll_totals = slips.aggregate(
            gross=Coalesce(Sum('gross_salary'), ZERO),
            deductions=Coalesce(Sum('total_deductions'), ZERO),
            tax=Coalesce(Sum('tax_amount'), ZERO),
            net=Coalesce(Sum('net_salary'), ZERO),
        )

        return {
            'period': {'month': month, 'year': year, 'monthName': MONTH_NAMES[month - 1]},
            'revenue': {'total': revenue_total, 'count': revenues.count()},
            'expenses': {
                'total': expense_total,
                'count': expenses.count(),
                'byType': [
                    {'type': row['expense_type'], 'total': money(row['total']), 'count': row['count']}
                    for row in by_type
                ],
            },
            'orders': {
                'count': orders.count(),
                'totalAmount': money(order_totals['amount']),
                'totalReceived': money(order_totals['received']),
                'totalBalance': money(order_totals['balance']),
            },
            'purchases': {
                'count': len(purchases),
                'totalOrderAmount': money(sum((p['orderAmount'] for p in purchases), ZERO)),
                'totalExpenses': money(sum((p['totalExpenses'] for p in purchases), ZERO)),
                'totalProfit': money(sum((p['profit'] for p in purchases), ZERO)),
            },
            'payroll': {
                'employeeCount': slips.count(),
                'totalGrossSalary': money(payroll_totals['gross']),
                'totalDeductions': money(payroll_totals['deductions']),
                'totalTax': money(payroll_totals['tax']),
                'totalNetSalary': money(payroll_totals['net']),
            },
            'netProfit': money(revenue_total - expense_total),
        }

    @staticmethod
    def annual_report(company, year: int) -> Dict[str, Any]:
        revenue = RevenueReports.monthly_revenue(company, year)
        expense = RevenueReports.monthly_expense(company, year)
        orders = DashboardService.monthly_order_amount(company, year)
        payroll = DashboardService.monthly_payroll(company, year)

        months = [
            {
                'month': MONTH_NAMES[m - 1],
                'monthNumber': m,
                'revenue': revenue[m],
                'expense': expense[m],
                'orderAmount': orders[m],
                'payroll': payroll[m],
                'profit': money(revenue[m] - expense[m]),
            }
            for m in range(1, 13)
        ]
        totals = {
            key: money(sum((row[key] for row in months), ZERO))
            for key in ('revenue', 'expense', 'orderAmount', 'payroll', 'profit')
        }
        return {'year': year, 'months': months, 'totals': totals}

    @staticmethod
    def section_rows(company, section: str, year: int, month: int):
        """
        Header and rows of one section of the monthly report export.

        Returns:
            (sheet title, headers, rows) tuple.
        """
        if section == 'revenue':
            revenues = Revenue.get_tenant_filtered_queryset(company).filter(
                revenue_date__year=year, revenue_date__month=month
            ).order_by('revenue_date')
            return 'Revenue', ['Date', 'Source', 'Description', 'Amount'], [
                [r.revenue_date.isoformat(), r.source, r.description, float(r.amount)]
                for r in revenues
            ]
        if section == 'expenses':
            expenses = Expense.get_tenant_filtered_queryset(company).filter(
                expense_date__year=year, expense_date__month=month
            ).select_related('order').order_by('expense_date')
            return 'Expenses', ['Date', 'Title', 'Type', 'Payment Method', 'Order', 'Amount'], [
                [
                    e.expense_date.isoformat(),
                    e.expense_title,
                    e.expense_type,
                    e.payment_method,
                    e.order.order_number if e.order else '',
                    float(e.amount),
                ]
                for e in expenses
            ]
        if section == 'orders':
            orders = Order.get_tenant_filtered_queryset(company).filter(
                created_at__year=year, created_at__month=month
            ).order_by('created_at')
            return 'Orders', [
                'Order Number', 'Client Name', 'Service Title', 'Amount', 'Amount Paid',
                'Balance Due', 'Order Status', 'Payment Status', 'Created Date',
            ], [
                [
                    o.order_number, o.client_name, o.service_title, float(o.amount),
                    float(o.advance_paid), float(o.balance_due), o.order_status,
                    o.payment_status, timezone.localtime(o.created_at).strftime('%Y-%m-%d'),
                ]
                for o in orders
            ]
        orders = PurchaseService.queryset(company).filter(updated_at__year=year, updated_at__month=month)
        purchases = [PurchaseService.to_purchase(order) for order in orders]
        return 'Purchases', [
            'Order Number', 'Client Name', 'Service Title', 'Order Amount',
            'Total Expenses', 'Profit', 'Payment Status',
        ], [
            [
                p['orderNumber'], p['clientName'], p['serviceTitle'], float(p['orderAmount']),
                float(p['totalExpenses']), float(p['profit']), p['paymentStatus'],
            ]
            for p in purchases
        ]
