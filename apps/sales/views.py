"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: API views for orders, payments, monthly order reports
             and the order export.
-------------------------------------------------------------------------
"""
import logging
from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.db.models.functions import Coalesce, ExtractMonth
from django.utils import timezone

from apps.core.api import ApiView, json_response
from apps.core.exports import tabular_response
from apps.core.utils import MONTH_NAMES, money, to_date, to_int, today
from apps.sales.models import Order
from apps.sales.services import OrderService
from apps.users.permissions import AdminOrCARequiredMixin

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


def order_totals(orders) -> dict:
    totals = orders.aggregate(
        total_amount=Coalesce(Sum('amount'), ZERO),
        total_received=Coalesce(Sum('advance_paid'), ZERO),
        total_balance=Coalesce(Sum('balance_due'), ZERO),
    )
    return {
        'totalAmount': money(totals['total_amount']),
        'totalReceived': money(totals['total_received']),
        'totalBalance': money(totals['total_balance']),
    }


class AddOrderView(AdminOrCARequiredMixin, ApiView):

    def post(self, request):
        order = OrderService.create_order(self.company, request.user, self.data)
        return json_response({
            'success': True,
            'message': 'Order created successfully',
            'data': order.to_dict(),
        }, status=201)


class OrderListView(ApiView):
    """Orders of the company, filtered by status and a free text search."""

    def get(self, request):
        orders = Order.get_tenant_filtered_queryset(self.company)
        order_status = request.GET.get('OrderStatus')
        if order_status:
            orders = orders.filter(order_status=order_status)
        payment_status = request.GET.get('PaymentStatus')
        if payment_status:
            orders = orders.filter(payment_status=payment_status)
        search = (request.GET.get('search') or '').strip()
        if search:
            orders = orders.filter(
                Q(client_name__icontains=search)
                | Q(service_title__icontains=search)
                | Q(order_number__icontains=search)
                | Q(client_email__icontains=search)
            )
        data = self.serialize(orders)
        return json_response({'success': True, 'count': len(data), 'data': data})


class OrderDetailView(ApiView):

    def get(self, request, pk):
        order = self.get_tenant_object(Order, pk, "Order not found")
        payments = order.payments.select_related('received_by')
        return json_response({
            'success': True,
            'data': {
                **order.to_dict(),
                'payments': self.serialize(payments),
            },
        })


class UpdateOrderView(AdminOrCARequiredMixin, ApiView):

    def put(self, request):
        order = self.get_tenant_object(Order, self.require('id', message="Order id is required"),
                                       "Order not found")
        order = OrderService.update_order(order, request.user, self.data)
        return json_response({
            'success': True,
            'message': 'Order updated successfully',
            'data': order.to_dict(),
        })


class DeleteOrderView(AdminOrCARequiredMixin, ApiView):

    def delete(self, request):
        order = self.get_tenant_object(Order, self.require('id', message="Order id is required"),
                                       "Order not found")
        OrderService.delete_order(order, request.user)
        return json_response({'success': True, 'message': 'Order deleted successfully'})


class ConfirmOrderView(AdminOrCARequiredMixin, ApiView):

    def put(self, request):
        order = self.get_tenant_object(Order, self.require('id', message="Order id is required"),
                                       "Order not found")
        payment = OrderService.confirm_order(order, request.user, self.data)
        return json_response({
            'success': True,
            'message': 'Order confirmed successfully',
            'data': order.to_dict(),
            'payment': payment.to_dict(),
        })


class RecordPaymentView(AdminOrCARequiredMixin, ApiView):

    def post(self, request):
        order = self.get_tenant_object(Order, self.require('id', message="Order id is required"),
                                       "Order not found")
        payment = OrderService.record_payment(order, request.user, self.data)
        return json_response({
            'success': True,
            'message': 'Payment recorded successfully',
            'data': order.to_dict(),
            'payment': payment.to_dict(),
        }, status=201)


class PaymentHistoryView(ApiView):

    def get(self, request, pk):
        order = self.get_tenant_object(Order, pk, "Order not found")
        payments = order.payments.select_related('received_by').order_by('-payment_date', '-created_at')
        return json_response({
            'success': True,
            'orderId': order.pk,
            'orderNumber': order.order_number,
            'payments': self.serialize(payments),
            **OrderService.payment_totals(order),
        })


class MonthWiseOrdersView(ApiView):
    """Per-month order count and amounts for a year (by creation date)."""

    def get(self, request):
        year = to_int(request.GET.get('year'), 'year', required=False, minimum=2000, maximum=2100) or today().year
        rows = (
            Order.get_tenant_filtered_queryset(self.company)
            .filter(created_at__year=year)
            .annotate(month=ExtractMonth('created_at'))
            .values('month')
            .annotate(
                total_orders=Count('id'),
                total_amount=Coalesce(Sum('amount'), ZERO),
                total_received=Coalesce(Sum('advance_paid'), ZERO),
                total_balance=Coalesce(Sum('balance_due'), ZERO),
            )
            .order_by('month')
        )
        data = [
            {
                'month': MONTH_NAMES[row['month'] - 1],
                'monthNumber': row['month'],
                'year': year,
                'totalOrders': row['total_orders'],
                'totalAmount': money(row['total_amount']),
                'totalReceived': money(row['total_received']),
                'totalBalance': money(row['total_balance']),
            }
            for row in rows
        ]
        return json_response({'success': True, 'year': year, 'data': data})


class MonthlyOrderDetailsView(ApiView):

    def get(self, request):
        month = to_int(request.GET.get('month'), 'month', minimum=1, maximum=12)
        year = to_int(request.GET.get('year'), 'year', minimum=2000, maximum=2100)
        orders = Order.get_tenant_filtered_queryset(self.company).filter(
            created_at__year=year, created_at__month=month
        )
        return json_response({
            'success': True,
            'month': f"{MONTH_NAMES[month - 1]} {year}",
            'count': orders.count(),
            **order_totals(orders),
            'orders': self.serialize(orders),
        })


class ExportOverallOrdersView(AdminOrCARequiredMixin, ApiView):

    HEADERS = [
        'Order Number', 'Tax Invoice Number', 'Client Name', 'Client GSTIN', 'Client State',
        'Service Title', 'HSN/SAC', 'Base Amount', 'GST Rate (%)', 'GST Type',
        'CGST', 'SGST', 'IGST', 'Total Amount', 'Amount Paid', 'Balance Due',
        'Order Status', 'Payment Status', 'Created Date',
    ]

    def get(self, request):
        orders = Order.get_tenant_filtered_queryset(self.company)
        start_date = to_date(request.GET.get('startDate'), 'startDate', required=False)
        end_date = to_date(request.GET.get('endDate'), 'endDate', required=False)
        if start_date:
            orders = orders.filter(created_at__date__gte=start_date)
        if end_date:
            orders = orders.filter(created_at__date__lte=end_date)

        rows = [
            [
                order.order_number,
                order.tax_invoice_number,
                order.client_name,
                order.client_gstin,
                order.client_state,
                order.service_title,
                order.hsn_code,
                float(order.base_amount),
                float(order.gst_rate),
                order.gst_type,
                float(order.cgst_amount),
                float(order.sgst_amount),
                float(order.igst_amount),
                float(order.amount),
                float(order.advance_paid),
                float(order.balance_due),
                order.order_status,
                order.payment_status,
                timezone.localtime(order.created_at).strftime('%Y-%m-%d'),
            ]
            for order in orders
        ]
        logger.info("Orders exported by %s (%s rows)", request.user.email, len(rows))
        return tabular_response(request.GET.get('format'), 'orders', 'Orders', self.HEADERS, rows)
