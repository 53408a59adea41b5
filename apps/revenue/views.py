"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: API views for revenue and profit.
-------------------------------------------------------------------------
"""
from django.db.models import Q

from apps.core.api import ApiView, json_response
from apps.core.exceptions import ResourceNotFound
from apps.revenue.models import Revenue
from apps.revenue.reports import RevenueReports, total_of
from apps.revenue.services import RevenueService
from apps.sales.models import Order
from apps.users.permissions import AdminOrCARequiredMixin, StaffRequiredMixin


def company_revenues(company):
    return Revenue.get_tenant_filtered_queryset(company).select_related('order', 'added_by')


class AddRevenueView(AdminOrCARequiredMixin, ApiView):

    def post(self, request):
        revenue = RevenueService.add_revenue(self.company, request.user, self.data)
        return json_response({
            'success': True,
            'message': 'Revenue added successfully',
            'data': revenue.to_dict(),
        }, status=201)


class RevenueListView(StaffRequiredMixin, ApiView):

    def get(self, request):
        data = self.serialize(company_revenues(self.company))
        return json_response({'success': True, 'count': len(data), 'data': data})


class DeleteRevenueView(AdminOrCARequiredMixin, ApiView):

    def delete(self, request):
        revenue = self.get_tenant_object(
            Revenue, self.require('id', message="Revenue id is required"), "Revenue not found"
        )
        RevenueService.delete_revenue(revenue, request.user)
        return json_response({'success': True, 'message': 'Revenue deleted successfully'})


class TotalRevenueView(StaffRequiredMixin, ApiView):

    def get(self, request):
        revenues = Revenue.get_tenant_filtered_queryset(self.company)
        return json_response({
            'success': True,
            'totalRevenue': total_of(revenues),
            'count': revenues.count(),
        })


class RevenueByOrderNameView(StaffRequiredMixin, ApiView):
    """Revenue whose order service title or client matches ``name``."""

    def get(self, request):
        name = str(self.require('name', message="name is required")).strip()
        revenues = company_revenues(self.company).filter(
            Q(order__service_title__icontains=name) | Q(order__client_name__icontains=name)
        )
        return json_response({
            'success': True,
            'count': revenues.count(),
            'totalRevenue': total_of(revenues),
            'data': self.serialize(revenues),
        })


class RevenueWithProfitView(StaffRequiredMixin, ApiView):

    def get(self, request, order_id):
        order = self.get_tenant_object(Order, order_id, "Order not found")
        revenues = company_revenues(self.company).filter(order=order)
        if not revenues.exists():
            raise ResourceNotFound("No revenue found for this order")
        return json_response({
            'success': True,
            'orderId': order.pk,
            'revenue': self.serialize(revenues),
            **RevenueReports.order_profit(self.company, order),
        })


class TotalProfitView(StaffRequiredMixin, ApiView):

    def get(self, request):
        return json_response({'success': True, **RevenueReports.total_profit(self.company)})


class TotalNetProfitView(StaffRequiredMixin, ApiView):

    def get(self, request):
        return json_response({'success': True, **RevenueReports.net_profit(self.company)})
