"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Sales app configuration.
-------------------------------------------------------------------------
"""
from django.apps import AppConfig


class SalesConfig(AppConfig):
    """Configuration for orders, payments and GST."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.sales'
    verbose_name = 'Sales & Orders'
