"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Admin configuration for payroll.
-------------------------------------------------------------------------
"""
from django.contrib import admin

from apps.payroll.models import (
    SalaryConfigurationRequest,
    SalaryHead,
    SalarySetting,
    SalarySettingHead,
    SalarySlip,
    SalarySlipRequest,
    TaxSlab,
)


@admin.register(SalaryHead)
class SalaryHeadAdmin(admin.ModelAdmin):
    list_display = ['title', 'short_name', 'head_type', 'method', 'company']
    list_filter = ['head_type', 'method', 'company']
    search_fields = ['title', 'short_name']


class SalarySettingHeadInline(admin.TabularInline):
    model = SalarySettingHead
    extra = 0


@admin.register(SalarySetting)
class SalarySettingAdmin(admin.ModelAdmin):
    list_display = ['employee', 'effect_from', 'is_tax_applicable', 'company']
    list_filter = ['is_tax_applicable', 'company']
    search_fields = ['employee__name', 'employee__email']
    inlines = [SalarySettingHeadInline]


@admin.register(SalaryConfigurationRequest)
class SalaryConfigurationRequestAdmin(admin.ModelAdmin):
    list_display = ['employee', 'requested_by', 'status', 'is_read', 'created_at']
    list_filter = ['status', 'company']


@admin.register(TaxSlab)
class TaxSlabAdmin(admin.ModelAdmin):
    list_display = ['min_income', 'max_income', 'tax_rate', 'effective_from', 'company']
    list_filter = ['company']


@admin.register(SalarySlip)
class SalarySlipAdmin(admin.ModelAdmin):
    list_display = ['employee', 'month', 'gross_salary', 'tax_amount', 'net_salary', 'company']
    list_filter = ['month', 'company']
    search_fields = ['employee__name', 'employee__email']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(SalarySlipRequest)
class SalarySlipRequestAdmin(admin.ModelAdmin):
    list_display = ['employee', 'month', 'status', 'requested_at', 'downloaded_at']
    list_filter = ['status', 'company']
