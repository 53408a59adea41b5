"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Organization app configuration.
-------------------------------------------------------------------------
"""
from django.apps import AppConfig


class OrganizationConfig(AppConfig):
    """Configuration for branches, departments and designations."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.organization'
    verbose_name = 'Organization'
