"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Revenue app configuration.
-------------------------------------------------------------------------
"""
from django.apps import AppConfig


class RevenueConfig(AppConfig):
    """Configuration for the Revenue module."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.revenue'
    verbose_name = 'Revenue Management'
