"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Admin configuration for revenue.
-------------------------------------------------------------------------
"""
from django.contrib import admin

from apps.revenue.models import Revenue


@admin.register(Revenue)
class RevenueAdmin(admin.ModelAdmin):
    """Admin configuration for Revenue model."""

    list_display = ['source', 'company', 'amount', 'revenue_date', 'order', 'added_by']
    list_filter = ['company', 'branch']
    search_fields = ['source', 'description', 'order__order_number']
    date_hierarchy = 'revenue_date'
    readonly_fields = ['payment', 'created_at', 'updated_at']
