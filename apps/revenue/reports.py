"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Revenue and profit figures shared by the revenue endpoints
             and the dashboard.
-------------------------------------------------------------------------
"""
from decimal import Decimal
from typing import Dict, Optional

from django.db.models import Sum
from django.db.models.functions import Coalesce, ExtractMonth

from apps.core.utils import money
from apps.expenditure.models import Expense
from apps.revenue.models import Revenue

ZERO = Decimal('0.00')


def total_of(queryset, field: str = 'amount') -> Decimal:
    """Sum of ``field`` over a queryset, 0.00 when empty."""
    return money(queryset.aggregate(total=Coalesce(Sum(field), ZERO))['total'])


def monthly_sums(queryset, date_field: str, amount_field: str = 'amount') -> Dict[int, Decimal]:
    """
    Sum ``amount_field`` per calendar month of ``date_field``.

    Returns:
        Mapping month number (1-12) to total. All twelve months are present.
    """
    rows = (
        queryset
        .annotate(month=ExtractMonth(date_field))
        .values('month')
        .annotate(total=Coalesce(Sum(amount_field), ZERO))
        .order_by('month')
    )
    sums = {month: ZERO for month in range(1, 13)}
    for row in rows:
        sums[row['month']] = money(row['total'])
    return sums


class RevenueReports:
    """
    Revenue and profit reporting.

    Profit comes in two flavours:
    - gross: all revenue minus all expenses
    - net: all revenue minus only the expenses booked against orders
    """

    @staticmethod
    def total_revenue(company, year: Optional[int] = None) -> Decimal:
        revenues = Revenue.get_tenant_filtered_queryset(company)
        if year:
            revenues = revenues.filter(revenue_date__year=year)
        return total_of(revenues)

    @staticmethod
    def total_expense(company, year: Optional[int] = None, order_linked_only: bool = False) -> Decimal:
        expenses = Expense.get_tenant_filtered_queryset(company)
        if year:
            expenses = expenses.filter(expense_date__year=year)
        if order_linked_only:
            expenses = expenses.filter(order__isnull=False)
        return total_of(expenses)

    @staticmethod
    def total_profit(company) -> Dict[str, Decimal]:
        revenue = RevenueReports.total_revenue(company)
        expense = RevenueReports.total_expense(company)
        return {
            'totalRevenue': revenue,
            'totalExpense': expense,
            'totalProfit': money(revenue - expense),
        }

    @staticmethod
    def net_profit(company) -> Dict[str, Decimal]:
        revenue = RevenueReports.total_revenue(company)
        order_expense = RevenueReports.total_expense(company, order_linked_only=True)
        return {
            'totalRevenue': revenue,
            'totalOrderExpense': order_expense,
            'netProfit': money(revenue - order_expense),
        }

    @staticmethod
    def order_profit(company, order) -> Dict[str, Decimal]:
        revenue = total_of(Revenue.get_tenant_filtered_queryset(company).filter(order=order))
        expense = total_of(Expense.get_tenant_filtered_queryset(company).filter(order=order))
        return {
            'totalRevenue': revenue,
            'totalExpense': expense,
            'profit': money(revenue - expense),
        }

    @staticmethod
    def monthly_revenue(company, year: int) -> Dict[int, Decimal]:
        return monthly_sums(
            Revenue.get_tenant_filtered_queryset(company).filter(revenue_date__year=year),
            'revenue_date',
        )

    @staticmethod
    def monthly_expense(company, year: int) -> Dict[int, Decimal]:
        return monthly_sums(
            Expense.get_tenant_filtered_queryset(company).filter(expense_date__year=year),
            'expense_date',
        )
