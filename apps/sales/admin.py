"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Admin configuration for orders and payments.
-------------------------------------------------------------------------
"""
from django.contrib import admin

from apps.sales.models import Order, OrderPayment


class OrderPaymentInline(admin.TabularInline):
    model = OrderPayment
    extra = 0
    readonly_fields = ['created_at']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin configuration for Order model."""

    list_display = ['order_number', 'client_name', 'company', 'amount', 'balance_due',
                    'order_status', 'payment_status', 'created_at']
    list_filter = ['order_status', 'payment_status', 'gst_type', 'company']
    search_fields = ['order_number', 'tax_invoice_number', 'client_name', 'service_title']
    readonly_fields = ['order_number', 'tax_invoice_number', 'cgst_amount', 'sgst_amount',
                       'igst_amount', 'amount', 'balance_due', 'payment_status']
    inlines = [OrderPaymentInline]


@admin.register(OrderPayment)
class OrderPaymentAdmin(admin.ModelAdmin):
    list_display = ['order', 'amount', 'payment_method', 'payment_date', 'received_by']
    list_filter = ['payment_method']
    search_fields = ['order__order_number', 'transaction_id']
