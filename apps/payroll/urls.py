"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL configuration for salary heads, salary settings, tax
             slabs, payroll runs, analytics and salary slips.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.payroll import views

app_name = 'payroll'

urlpatterns = [
    # Salary heads
    path('addsalaryheads', views.AddSalaryHeadView.as_view(), name='add_salary_head'),
    path('getsalaryheads', views.SalaryHeadListView.as_view(), name='salary_head_list'),
    path('deletesalaryhead', views.DeleteSalaryHeadView.as_view(), name='delete_salary_head'),

    # Salary settings and approval
    path('addsalarysettings', views.AddSalarySettingView.as_view(), name='add_salary_setting'),
    path('getsalarysettings', views.SalarySettingListView.as_view(), name='salary_setting_list'),
    path('deletesalarysetting', views.DeleteSalarySettingView.as_view(), name='delete_salary_setting'),
    path('fetchsalaryrequests', views.SalaryRequestListView.as_view(), name='salary_request_list'),
    path('approvesalaryrequest', views.ApproveSalaryRequestView.as_view(), name='approve_salary_request'),
    path('rejectsalaryrequest', views.RejectSalaryRequestView.as_view(), name='reject_salary_request'),
    path('hr-notifications', views.HRNotificationsView.as_view(), name='hr_notifications'),
    path('mark-notification-read', views.MarkNotificationReadView.as_view(), name='mark_notification_read'),

    # Tax slabs
    path('addtaxslab', views.AddTaxSlabView.as_view(), name='add_tax_slab'),
    path('gettaxslabs', views.TaxSlabListView.as_view(), name='tax_slab_list'),
    path('updatetaxslab/<int:pk>', views.UpdateTaxSlabView.as_view(), name='update_tax_slab'),
    path('deletetaxslab/<int:pk>', views.DeleteTaxSlabView.as_view(), name='delete_tax_slab'),

    # Payroll runs
    path('calculatesalarybycompany', views.CalculateSalaryView.as_view(), name='calculate_salary'),
    path('preview-salary', views.PreviewSalaryView.as_view(), name='preview_salary'),
    path('calculatesalaryforall', views.CalculateSalaryForAllView.as_view(), name='calculate_salary_all'),
    path('calculatesalarydetailed', views.SalaryDetailsView.as_view(), name='salary_details'),

    # Analytics
    path('gettotalsalarydistribution', views.SalaryDistributionView.as_view(), name='salary_distribution'),
    path('departmentwisesalary', views.DepartmentWiseSalaryView.as_view(), name='departmentwise_salary'),
    path('payrolltrend', views.PayrollTrendView.as_view(), name='payroll_trend'),
    path('gethighestpaiddepartment', views.HighestPaidDepartmentView.as_view(), name='highest_paid_department'),
    path('getavgsalary', views.AverageSalaryView.as_view(), name='avg_salary'),
    path('payrollbybranch', views.PayrollByBranchView.as_view(), name='payroll_by_branch'),
    path('getbranchwisemonthlypayroll', views.PayrollByBranchView.as_view(), name='branchwise_monthly_payroll'),
    path('payrollhistory', views.PayrollHistoryView.as_view(), name='payroll_history'),

    # Exports
    path('export-monthly-salary-csv', views.ExportMonthlySalaryCSVView.as_view(), name='export_salary_csv'),
    path('export-monthly-salary-xlsx', views.ExportMonthlySalaryXLSXView.as_view(), name='export_salary_xlsx'),

    # Salary slips
    path('requestsalaryslip', views.RequestSalarySlipView.as_view(), name='request_salary_slip'),
    path('getsalaryslipRequests', views.SalarySlipRequestListView.as_view(), name='salary_slip_requests'),
    path('updatesalarysliprequest', views.UpdateSalarySlipRequestView.as_view(),
         name='update_salary_slip_request'),
    path('generatesalaryslip', views.GenerateSalarySlipView.as_view(), name='generate_salary_slip'),
]
