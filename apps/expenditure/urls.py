"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL configuration for expenses and purchases.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.expenditure import views

app_name = 'expenditure'

urlpatterns = [
    # Expenses
    path('addexpense', views.AddExpenseView.as_view(), name='add_expense'),
    path('getallexpense', views.ExpenseListView.as_view(), name='expense_list'),
    path('getexpensebyid/<int:pk>', views.ExpenseDetailView.as_view(), name='expense_detail'),
    path('updateexpense/<int:pk>', views.UpdateExpenseView.as_view(), name='update_expense'),
    path('delete-expense/<int:pk>', views.DeleteExpenseView.as_view(), name='delete_expense'),
    path('gettotalexpensesbycompany', views.TotalExpensesView.as_view(), name='total_expenses'),
    path('getexpensesbyorder/<int:order_id>', views.ExpensesByOrderView.as_view(), name='expenses_by_order'),
    path('monthwiseexpenses', views.MonthWiseExpensesView.as_view(), name='monthwise_expenses'),
    path('monthlyexpenses', views.MonthlyExpensesView.as_view(), name='monthly_expenses'),
    path('copy-fixed', views.CopyFixedExpensesView.as_view(), name='copy_fixed'),

    # Purchases
    path('getpurchases', views.PurchaseListView.as_view(), name='purchase_list'),
    path('getpurchaseswithordersexpense/<int:order_id>', views.PurchaseDetailView.as_view(),
         name='purchase_detail'),
    path('monthlywisedetails', views.MonthlyWisePurchaseView.as_view(), name='monthlywise_purchases'),
    path('monthlypurchasedetails', views.MonthlyPurchaseDetailsView.as_view(),
         name='monthly_purchase_details'),
]
