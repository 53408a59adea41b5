"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Signal handlers for dashboard summary cache invalidation.
-------------------------------------------------------------------------
"""
from django.conf import settings
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from apps.dashboard.services import DashboardService
from apps.expenditure.models import Expense
from apps.organization.models import Branch, Department
from apps.payroll.models import SalarySlip
from apps.revenue.models import Revenue
from apps.sales.models import Order


@receiver(post_save, sender=Revenue)
@receiver(post_delete, sender=Revenue)
@receiver(post_save, sender=Expense)
@receiver(post_delete, sender=Expense)
@receiver(post_save, sender=Order)
@receiver(post_delete, sender=Order)
@receiver(post_save, sender=SalarySlip)
@receiver(post_delete, sender=SalarySlip)
@receiver(post_save, sender=Branch)
@receiver(post_delete, sender=Branch)
@receiver(post_save, sender=Department)
@receiver(post_delete, sender=Department)
def invalidate_dashboard_cache(sender, instance, **kwargs) -> None:
    """
    Drop the company's cached dashboard summary when a record it
    aggregates changes.

    Args:
        sender: The model class.
        instance: The saved or deleted instance.
        **kwargs: Additional signal arguments.
    """
    DashboardService.invalidate_summary(instance.company_id)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
@receiver(post_delete, sender=settings.AUTH_USER_MODEL)
def invalidate_dashboard_cache_on_user_change(sender, instance, **kwargs) -> None:
    """Employee counts are part of the summary."""
    DashboardService.invalidate_summary(instance.company_id)
