"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Manual revenue entry. Payment-generated revenue is written
             by the order workflow in apps.sales.services.
-------------------------------------------------------------------------
"""
from typing import Dict

from django.db import transaction

from apps.core.exceptions import ImmutableRecordException, ResourceNotFound, ValidationFailed
from apps.core.services import ActivityService
from apps.core.utils import money, to_date, to_decimal
from apps.organization.models import Branch
from apps.revenue.logging import RevenueLogger
from apps.revenue.models import Revenue
from apps.sales.models import Order


class RevenueService:

    @staticmethod
    @transaction.atomic
    def add_revenue(company, user, data: Dict) -> Revenue:
        """
        Record revenue not produced by an order payment.

        Raises:
            ValidationFailed: Missing source/date or non-positive amount.
            ResourceNotFound: Branch or order outside the company.
        """
        source = str(data.get('Source') or '').strip()
        if not source:
            raise ValidationFailed("Source is required")
        revenue = Revenue(
            company=company,
            source=source,
            amount=money(to_decimal(data.get('Amount'), 'Amount', positive=True)),
            revenue_date=to_date(data.get('RevenueDate') or data.get('Date'), 'RevenueDate'),
            description=str(data.get('Description') or '').strip(),
            added_by=user,
        )
        branch_id = data.get('BranchId')
        if branch_id not in (None, ''):
            try:
                revenue.branch = Branch.get_tenant_filtered_queryset(company).get(pk=int(branch_id))
            except (Branch.DoesNotExist, TypeError, ValueError):
                raise ResourceNotFound("Branch not found")
        order_id = data.get('OrderId')
        if order_id not in (None, ''):
            try:
                revenue.order = Order.get_tenant_filtered_queryset(company).get(pk=int(order_id))
            except (Order.DoesNotExist, TypeError, ValueError):
                raise ResourceNotFound("Order not found")
        revenue.save()

        ActivityService.log(company, user, 'added revenue', f"{revenue.source} (Rs {revenue.amount})")
        RevenueLogger.log_revenue_added(revenue, user)
        return revenue

    @staticmethod
    @transaction.atomic
    def delete_revenue(revenue: Revenue, user) -> None:
        if revenue.is_payment_generated:
            RevenueLogger.log_delete_refused(revenue, user)
            raise ImmutableRecordException(
                "Revenue generated from an order payment cannot be deleted"
            )
        RevenueLogger.log_revenue_deleted(revenue, user)
        ActivityService.log(revenue.company, user, 'deleted revenue', revenue.source)
        revenue.delete()
