"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Django admin configuration for companies and the
             activity feed.
-------------------------------------------------------------------------
"""
from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from apps.core.models import Company, RecentActivity


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    """Admin configuration for Company model."""

    list_display = ['name', 'state', 'gstin', 'email', 'user_count', 'is_active']
    list_filter = ['is_active', 'state']
    search_fields = ['name', 'gstin', 'email']
    readonly_fields = ['public_id', 'created_at', 'updated_at']
    ordering = ['name']

    def user_count(self, obj: Company) -> int:
        """Count users in this company."""
        return obj.users.count()
    user_count.short_description = _('Users')


@admin.register(RecentActivity)
class RecentActivityAdmin(admin.ModelAdmin):
    list_display = ['company', 'user', 'action', 'target', 'is_email_sent', 'created_at']
    list_filter = ['company', 'is_email_sent']
    search_fields = ['action', 'target', 'user__name']
    date_hierarchy = 'created_at'
