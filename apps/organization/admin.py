"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Admin configuration for organization models.
-------------------------------------------------------------------------
"""
from django.contrib import admin

from apps.organization.models import Branch, Department, Designation


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ['branch_name', 'company', 'city', 'state']
    list_filter = ['company']
    search_fields = ['branch_name', 'city']


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ['department_name', 'company']
    list_filter = ['company']
    search_fields = ['department_name']


@admin.register(Designation)
class DesignationAdmin(admin.ModelAdmin):
    list_display = ['designation_name', 'department', 'company']
    list_filter = ['company']
    search_fields = ['designation_name']
