"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Admin configuration for expenses.
-------------------------------------------------------------------------
"""
from django.contrib import admin

from apps.expenditure.models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['expense_title', 'company', 'amount', 'expense_date', 'expense_type',
                    'payment_method', 'is_fixed', 'order']
    list_filter = ['expense_type', 'payment_method', 'is_fixed', 'company']
    search_fields = ['expense_title', 'description', 'reference_key']
    date_hierarchy = 'expense_date'
    readonly_fields = ['reference_key', 'created_at', 'updated_at']
