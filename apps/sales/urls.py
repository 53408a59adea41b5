"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL configuration for orders and payments.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.sales import views

app_name = 'sales'

urlpatterns = [
    path('addorders', views.AddOrderView.as_view(), name='add_order'),
    path('getorders', views.OrderListView.as_view(), name='order_list'),
    path('getorder/<int:pk>', views.OrderDetailView.as_view(), name='order_detail'),
    path('update-order', views.UpdateOrderView.as_view(), name='update_order'),
    path('deleteorder', views.DeleteOrderView.as_view(), name='delete_order'),
    path('confirm-order', views.ConfirmOrderView.as_view(), name='confirm_order'),
    path('recordpayment', views.RecordPaymentView.as_view(), name='record_payment'),
    path('getpaymenthistory/<int:pk>', views.PaymentHistoryView.as_view(), name='payment_history'),
    path('monthwiseorders', views.MonthWiseOrdersView.as_view(), name='monthwise_orders'),
    path('monthlydetails', views.MonthlyOrderDetailsView.as_view(), name='monthly_details'),
    path('export-overall-orders', views.ExportOverallOrdersView.as_view(), name='export_orders'),
]
