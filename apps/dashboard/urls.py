"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL routing for dashboard charts and reports.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.dashboard import views

app_name = 'dashboard'

urlpatterns = [
    # Charts
    path('revenue-vs-expense', views.RevenueVsExpenseView.as_view(), name='revenue_vs_expense'),
    path('order-expense', views.OrderExpenseView.as_view(), name='order_expense'),
    path('profit-expense', views.ProfitExpenseView.as_view(), name='profit_expense'),
    path('profit-payroll', views.ProfitPayrollView.as_view(), name='profit_payroll'),
    path('dashboard/summary', views.DashboardSummaryView.as_view(), name='summary'),

    # Reports
    path('monthlycomprehensivereport', views.MonthlyComprehensiveReportView.as_view(),
         name='monthly_report'),
    path('annualreport', views.AnnualReportView.as_view(), name='annual_report'),
    path('export-monthly-report', views.ExportMonthlyReportView.as_view(), name='export_monthly_report'),
]
