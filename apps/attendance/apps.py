"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Attendance app configuration.
-------------------------------------------------------------------------
"""
from django.apps import AppConfig


class AttendanceConfig(AppConfig):
    """Configuration for attendance, holidays and leave."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.attendance'
    verbose_name = 'Attendance & Leave'
