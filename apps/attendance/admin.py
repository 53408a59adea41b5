"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Admin configuration for attendance and leave.
-------------------------------------------------------------------------
"""
from django.contrib import admin

from apps.attendance.models import Attendance, Holiday, LeaveBalance, LeaveRequest, LeaveSetting


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ['user', 'date', 'status', 'company', 'marked_by']
    list_filter = ['status', 'company']
    search_fields = ['user__name', 'user__email']
    date_hierarchy = 'date'


@admin.register(Holiday)
class HolidayAdmin(admin.ModelAdmin):
    list_display = ['name', 'date', 'holiday_type', 'company']
    list_filter = ['company']


@admin.register(LeaveSetting)
class LeaveSettingAdmin(admin.ModelAdmin):
    list_display = ['company', 'default_monthly_paid_leaves']


@admin.register(LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ['user', 'from_date', 'to_date', 'leave_type', 'status', 'approved_by']
    list_filter = ['status', 'company']
    search_fields = ['user__name', 'reason']


@admin.register(LeaveBalance)
class LeaveBalanceAdmin(admin.ModelAdmin):
    list_display = ['user', 'month', 'total_allocated', 'used', 'remaining']
    list_filter = ['month', 'company']
