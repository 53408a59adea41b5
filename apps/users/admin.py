"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Admin configuration for CustomUser.
-------------------------------------------------------------------------
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    """Admin configuration for CustomUser model."""

    model = CustomUser

    list_display = ('email', 'name', 'role', 'company', 'employee_code', 'is_active', 'is_staff')
    list_display_links = ('email', 'name')
    list_filter = ('role', 'is_active', 'is_staff', 'company')
    search_fields = ('email', 'name', 'employee_code')
    ordering = ('name',)
    filter_horizontal = ('groups', 'user_permissions')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Personal Info'), {
            'fields': ('name', 'phone', 'date_of_birth', 'aadhaar_number', 'pan_number')
        }),
        (_('Employment'), {
            'fields': ('role', 'company', 'employee_code', 'employee_type', 'joining_date',
                       'department', 'designation', 'branch')
        }),
        (_('Bank Details'), {
            'fields': ('bank_name', 'account_holder_name', 'account_number', 'ifsc_code', 'bank_branch_name'),
            'classes': ('collapse',),
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        (_('Important Dates'), {
            'fields': ('last_login', 'date_joined'),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'role', 'company', 'password1', 'password2'),
        }),
    )
