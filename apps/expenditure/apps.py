"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Expenditure app configuration.
-------------------------------------------------------------------------
"""
from django.apps import AppConfig


class ExpenditureConfig(AppConfig):
    """Configuration for expenses and purchases."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.expenditure'
    verbose_name = 'Expenditure Management'
