"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL configuration for revenue and profit.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.revenue import views

app_name = 'revenue'

urlpatterns = [
    path('addrevenue', views.AddRevenueView.as_view(), name='add_revenue'),
    path('getrevenue', views.RevenueListView.as_view(), name='revenue_list'),
    path('deleterevenue', views.DeleteRevenueView.as_view(), name='delete_revenue'),
    path('gettotalrevenue', views.TotalRevenueView.as_view(), name='total_revenue'),
    path('getrevenuebyordername', views.RevenueByOrderNameView.as_view(), name='revenue_by_order_name'),
    path('getrevenuewithprofit/<int:order_id>', views.RevenueWithProfitView.as_view(),
         name='revenue_with_profit'),
    path('gettotalprofit', views.TotalProfitView.as_view(), name='total_profit'),
    path('gettotalprofitnet', views.TotalNetProfitView.as_view(), name='total_profit_net'),
]
