"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: API views for expenses and purchases.
-------------------------------------------------------------------------
"""
from decimal import Decimal

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce, ExtractMonth

from apps.core.api import ApiView, json_response
from apps.core.exceptions import ValidationFailed
from apps.core.utils import MAX_YEAR, MIN_YEAR, MONTH_NAMES, month_bounds, money, to_int, today
from apps.expenditure.models import Expense
from apps.expenditure.services import ExpenseService, PurchaseService
from apps.sales.models import Order
from apps.users.permissions import AdminOrCARequiredMixin, AdminRequiredMixin, StaffRequiredMixin

ZERO = Decimal('0.00')


def company_expenses(company):
    return Expense.get_tenant_filtered_queryset(company).select_related('order')


def read_year(request, required: bool = False) -> int:
    year = to_int(request.GET.get('year'), 'year', required=required, minimum=MIN_YEAR, maximum=MAX_YEAR)
    return year or today().year


def read_month_year(request):
    """Both ``month`` (1-12) and ``year`` (2000-2100) are mandatory."""
    month = request.GET.get('month')
    year = request.GET.get('year')
    if not month or not year:
        raise ValidationFailed("Month and year are required")
    return (
        to_int(month, 'month or year', minimum=1, maximum=12),
        to_int(year, 'month or year', minimum=MIN_YEAR, maximum=MAX_YEAR),
    )


class AddExpenseView(AdminRequiredMixin, ApiView):

    def post(self, request):
        expense = ExpenseService.create_expense(self.company, request.user, self.data)
        if expense.order_id:
            message = f"Expense added and linked to order {expense.order.order_number}"
        else:
            message = "Expense added successfully (not linked to any order)"
        return json_response({
            'success': True,
            'message': message,
            'linkedToOrder': expense.order_id is not None,
            'data': expense.to_dict(),
        }, status=201)


class ExpenseListView(StaffRequiredMixin, ApiView):
    """All company expenses, newest first. Optional ``type`` filter."""

    def get(self, request):
        expenses = company_expenses(self.company)
        expense_type = request.GET.get('type') or request.GET.get('ExpenseType')
        if expense_type:
            expenses = expenses.filter(expense_type=expense_type)
        data = self.serialize(expenses)
        return json_response({'success': True, 'count': len(data), 'data': data})


class ExpenseDetailView(AdminOrCARequiredMixin, ApiView):

    def get(self, request, pk):
        expense = self.get_tenant_object(Expense, pk, "Expense not found",
                                         queryset=company_expenses(self.company))
        return json_response({'success': True, 'data': expense.to_dict()})


class UpdateExpenseView(AdminRequiredMixin, ApiView):

    def put(self, request, pk):
        expense = self.get_tenant_object(Expense, pk, "Expense not found")
        expense = ExpenseService.update_expense(expense, request.user, self.data)
        return json_response({
            'success': True,
            'message': 'Expense updated successfully',
            'data': expense.to_dict(),
        })


class DeleteExpenseView(AdminRequiredMixin, ApiView):

    def delete(self, request, pk):
        expense = self.get_tenant_object(Expense, pk, "Expense not found")
        ExpenseService.delete_expense(expense, request.user)
        return json_response({'success': True, 'message': 'Expense deleted successfully'})


class TotalExpensesView(StaffRequiredMixin, ApiView):

    def get(self, request):
        expenses = Expense.get_tenant_filtered_queryset(self.company)
        return json_response({
            'success': True,
            **ExpenseService.totals(expenses),
            'totalRecords': expenses.count(),
        })


class ExpensesByOrderView(StaffRequiredMixin, ApiView):

    def get(self, request, order_id):
        order = self.get_tenant_object(Order, order_id, "Order not found")
        expenses = company_expenses(self.company).filter(order=order)
        return json_response({
            'success': True,
            'orderId': order.pk,
            'expenses': self.serialize(expenses),
            **ExpenseService.totals(expenses),
            'count': expenses.count(),
        })


class MonthWiseExpensesView(StaffRequiredMixin, ApiView):

    def get(self, request):
        year = read_year(request)
        rows = (
            Expense.get_tenant_filtered_queryset(self.company)
            .filter(expense_date__year=year)
            .annotate(month=ExtractMonth('expense_date'))
            .values('month')
            .annotate(total=Coalesce(Sum('amount'), ZERO), count=Count('id'))
            .order_by('month')
        )
        data = []
        grand_total = ZERO
        for row in rows:
            grand_total += row['total']
            data.append({
                'month': MONTH_NAMES[row['month'] - 1],
                'monthNumber': row['month'],
                'year': year,
                'totalExpense': money(row['total']),
                'count': row['count'],
                'averageExpense': money(row['total'] / row['count']) if row['count'] else ZERO,
            })
        return json_response({
            'success': True,
            'year': year,
            'data': data,
            'grandTotal': money(grand_total),
        })


class MonthlyExpensesView(StaffRequiredMixin, ApiView):

    def get(self, request):
        month, year = read_month_year(request)
        start, end = month_bounds(year, month)
        expenses = company_expenses(self.company).filter(expense_date__range=(start, end))
        return json_response({
            'success': True,
            'month': f"{MONTH_NAMES[month - 1]} {year}",
            'count': expenses.count(),
            'totalAmount': ExpenseService.totals(expenses)['totalExpense'],
            'expenses': self.serialize(expenses),
        })


class CopyFixedExpensesView(AdminRequiredMixin, ApiView):

    def post(self, request):
        month = to_int(self.require('targetMonth', message="targetMonth and targetYear are required"),
                       'targetMonth', minimum=1, maximum=12)
        year = to_int(self.require('targetYear', message="targetMonth and targetYear are required"),
                      'targetYear', minimum=MIN_YEAR, maximum=MAX_YEAR)
        copied = ExpenseService.copy_fixed_expenses(self.company, request.user, year, month)
        if not copied:
            return json_response({
                'success': True,
                'message': 'No fixed expenses found in the previous month',
                'count': 0,
            })
        return json_response({
            'success': True,
            'message': f"Successfully copied {len(copied)} fixed expenses",
            'count': len(copied),
            'data': self.serialize(copied),
        }, status=201)


class PurchaseListView(StaffRequiredMixin, ApiView):

    def get(self, request):
        data = [PurchaseService.to_purchase(order) for order in PurchaseService.queryset(self.company)]
        return json_response({'success': True, 'count': len(data), 'data': data})


class PurchaseDetailView(StaffRequiredMixin, ApiView):

    def get(self, request, order_id):
        order = self.get_tenant_object(
            Order, order_id, "Order not found", queryset=PurchaseService.queryset(self.company)
        )
        return json_response({'success': True, 'data': PurchaseService.to_purchase(order)})


class MonthlyWisePurchaseView(StaffRequiredMixin, ApiView):

    def get(self, request):
        year = read_year(request)
        return json_response({
            'success': True,
            'year': year,
            'data': PurchaseService.monthly_summary(self.company, year),
        })


class MonthlyPurchaseDetailsView(StaffRequiredMixin, ApiView):

    def get(self, request):
        month, year = read_month_year(request)
        orders = PurchaseService.queryset(self.company).filter(
            updated_at__year=year, updated_at__month=month
        )
        data = [PurchaseService.to_purchase(order) for order in orders]
        return json_response({
            'success': True,
            'month': month,
            'year': year,
            'count': len(data),
            'totalExpenses': money(sum((p['totalExpenses'] for p in data), ZERO)),
            'totalProfit': money(sum((p['profit'] for p in data), ZERO)),
            'data': data,
        })
