"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL configuration for attendance, holidays and leave.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.attendance import views

app_name = 'attendance'

urlpatterns = [
    # Attendance
    path('attendance/mark', views.MarkAttendanceView.as_view(), name='mark_attendance'),
    path('attendance/report', views.AttendanceReportView.as_view(), name='attendance_report'),
    path('attendance/employee', views.EmployeeAttendanceView.as_view(), name='employee_attendance'),

    # Holidays
    path('holiday/add', views.AddHolidayView.as_view(), name='add_holiday'),
    path('holiday/list', views.HolidayListView.as_view(), name='holiday_list'),
    path('holiday/update', views.UpdateHolidayView.as_view(), name='update_holiday'),
    path('holiday/delete/<int:pk>', views.DeleteHolidayView.as_view(), name='delete_holiday'),

    # Leave
    path('leave/apply', views.ApplyLeaveView.as_view(), name='apply_leave'),
    path('leave/list', views.LeaveListView.as_view(), name='leave_list'),
    path('leave/status', views.UpdateLeaveStatusView.as_view(), name='leave_status'),
    path('leave/balance', views.LeaveBalanceView.as_view(), name='leave_balance'),
    path('leave/by-employee', views.LeavesByEmployeeView.as_view(), name='leaves_by_employee'),
    path('leaves/settings', views.LeaveSettingsView.as_view(), name='leave_settings'),
    path('leaves/settings/update', views.UpdateLeaveSettingsView.as_view(), name='update_leave_settings'),
]
