"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Payroll app configuration.
-------------------------------------------------------------------------
"""
from django.apps import AppConfig


class PayrollConfig(AppConfig):
    """Configuration for salary heads, settings, tax slabs and slips."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.payroll'
    verbose_name = 'Payroll'
