"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Order workflow services. Creating orders, confirming them
             with a first payment, recording further payments and the
             revenue each payment generates.
-------------------------------------------------------------------------
"""
from decimal import Decimal
from typing import Dict, Optional

from django.db import transaction

from apps.core.exceptions import (
    ImmutableRecordException,
    ValidationFailed,
    WorkflowTransitionException,
)
from apps.core.services import ActivityService
from apps.core.utils import money, to_bool, to_date, to_decimal
from apps.revenue.models import Revenue
from apps.sales.logging import SalesLogger
from apps.sales.models import (
    Order,
    OrderPayment,
    OrderPaymentMethod,
    OrderStatus,
    PaymentStatus,
)
from apps.sales.services_gst import (
    DEFAULT_GST_RATE,
    GSTCalculator,
    ALLOWED_GST_RATES,
    normalize_gstin,
    state_from_gstin,
    validate_gstin,
)

TEXT_FIELDS = {
    'ClientName': 'client_name',
    'ClientEmail': 'client_email',
    'ClientPhone': 'client_phone',
    'ClientAddress': 'client_address',
    'ServiceTitle': 'service_title',
    'ServiceDescription': 'service_description',
    'HSNCode': 'hsn_code',
}

# Fields that change the GST breakdown
PRICING_KEYS = ('BaseAmount', 'GSTRate', 'ClientState', 'ClientGSTIN', 'IsIGST')


class OrderService:
    """Business rules for orders and their payments."""

    @staticmethod
    def _gst_rate(value) -> Decimal:
        rate = to_decimal(value, 'GSTRate', required=False)
        if rate is None:
            return Decimal(DEFAULT_GST_RATE)
        if not GSTCalculator.is_valid_rate(rate):
            raise ValidationFailed(
                "Invalid GST rate",
                details={'allowedRates': list(ALLOWED_GST_RATES)},
            )
        return rate

    @staticmethod
    def _apply_client_tax(order: Order, data: Dict) -> None:
        """Set GSTIN, state and the IGST flag from the request."""
        if 'ClientGSTIN' in data:
            gstin = normalize_gstin(data.get('ClientGSTIN'))
            if not validate_gstin(gstin):
                raise ValidationFailed("Invalid GSTIN format. Expected format: 22AAAAA0000A1Z5")
            order.client_gstin = gstin
        if 'ClientState' in data:
            order.client_state = (data.get('ClientState') or '').strip()
        if not order.client_state and order.client_gstin:
            order.client_state = state_from_gstin(order.client_gstin) or ''

        company_state = order.company.state if order.company_id else ''
        if order.client_state and company_state:
            order.is_igst = GSTCalculator.is_inter_state(order.client_state, company_state)
        elif 'IsIGST' in data:
            order.is_igst = to_bool(data.get('IsIGST'))

    @staticmethod
    @transaction.atomic
    def create_order(company, user, data: Dict) -> Order:
        """
        Create a Pending order with its GST breakdown.

        Raises:
            ValidationFailed: Missing client/service, non-positive amount,
                bad GST rate or GSTIN.
        """
        client_name = str(data.get('ClientName') or '').strip()
        service_title = str(data.get('ServiceTitle') or '').strip()
        if not client_name:
            raise ValidationFailed("ClientName is required")
        if not service_title:
            raise ValidationFailed("ServiceTitle is required")
        base_amount = to_decimal(
            data.get('BaseAmount', data.get('Amount')), 'BaseAmount', positive=True
        )

        order = Order(
            company=company,
            created_by=user,
            base_amount=money(base_amount),
            gst_rate=OrderService._gst_rate(data.get('GSTRate')),
            start_date=to_date(data.get('StartDate'), 'StartDate', required=False),
            end_date=to_date(data.get('EndDate'), 'EndDate', required=False),
        )
        for key, field in TEXT_FIELDS.items():
            if data.get(key) not in (None, ''):
                setattr(order, field, str(data[key]).strip())
        if order.start_date and order.end_date and order.end_date < order.start_date:
            raise ValidationFailed("EndDate cannot be before StartDate")

        OrderService._apply_client_tax(order, data)
        order.apply_gst()
        order.save()

        ActivityService.log(company, user, 'created order', f"{order.order_number} for {order.client_name}")
        SalesLogger.log_order_created(order, user)
        return order

    @staticmethod
    @transaction.atomic
    def update_order(order: Order, user, data: Dict) -> Order:
        """
        Update an order.

        Completed and Cancelled orders are locked. Fully paid orders only
        accept a new OrderStatus.
        """
        if order.is_locked:
            raise ImmutableRecordException(f"{order.order_status} orders cannot be updated")

        editable = set(TEXT_FIELDS) | set(PRICING_KEYS) | {'Amount', 'StartDate', 'EndDate'}
        touched = editable.intersection(data.keys())
        if order.payment_status == PaymentStatus.PAID and touched:
            raise ImmutableRecordException("Paid orders can only have their status updated")

        for key, field in TEXT_FIELDS.items():
            if key in data:
                value = str(data[key] or '').strip()
                if field in ('client_name', 'service_title') and not value:
                    raise ValidationFailed(f"{key} cannot be empty")
                setattr(order, field, value)
        if 'StartDate' in data:
            order.start_date = to_date(data['StartDate'], 'StartDate', required=False)
        if 'EndDate' in data:
            order.end_date = to_date(data['EndDate'], 'EndDate', required=False)
        if order.start_date and order.end_date and order.end_date < order.start_date:
            raise ValidationFailed("EndDate cannot be before StartDate")

        if touched.intersection(PRICING_KEYS + ('Amount',)):
            if 'BaseAmount' in data or 'Amount' in data:
                order.base_amount = money(to_decimal(
                    data.get('BaseAmount', data.get('Amount')), 'BaseAmount', positive=True
                ))
            if 'GSTRate' in data:
                order.gst_rate = OrderService._gst_rate(data['GSTRate'])
            OrderService._apply_client_tax(order, data)
            order.apply_gst()
            if order.amount < order.advance_paid:
                raise ValidationFailed("Order amount cannot be less than the amount already paid")

        if 'OrderStatus' in data:
            new_status = data['OrderStatus']
            if new_status not in OrderStatus.values:
                raise ValidationFailed(
                    "Invalid OrderStatus",
                    details={'validStatuses': list(OrderStatus.values)},
                )
            order.order_status = new_status

        order.save()
        ActivityService.log(order.company, user, 'updated order', order.order_number)
        return order

    @staticmethod
    def _payment_from(order: Order, user, amount: Decimal, data: Dict) -> OrderPayment:
        method = data.get('PaymentMethod') or data.get('paymentMethod') or OrderPaymentMethod.BANK_TRANSFER
        if method not in OrderPaymentMethod.values:
            raise ValidationFailed(
                "Invalid PaymentMethod",
                details={'validMethods': list(OrderPaymentMethod.values)},
            )
        payment_date = to_date(
            data.get('PaymentDate') or data.get('paymentDate'), 'PaymentDate', required=False
        )
        payment = OrderPayment(
            order=order,
            amount=money(amount),
            payment_method=method,
            transaction_id=str(data.get('TransactionId') or data.get('transactionId') or '').strip(),
            notes=str(data.get('Notes') or data.get('notes') or '').strip(),
            received_by=user,
        )
        if payment_date:
            payment.payment_date = payment_date
        payment.save()

        Revenue.objects.create(
            company=order.company,
            source=f"Order {order.order_number} - {order.client_name}",
            amount=payment.amount,
            revenue_date=payment.payment_date,
            description=payment.notes or f"Payment for {order.service_title}",
            added_by=user,
            order=order,
            payment=payment,
        )
        return payment

    @staticmethod
    @transaction.atomic
    def confirm_order(order: Order, user, data: Dict) -> OrderPayment:
        """
        Confirm a Pending order with the first payment received.

        Raises:
            WorkflowTransitionException: Order is not Pending.
            ValidationFailed: Amount missing, not positive or above total.
        """
        if order.order_status != OrderStatus.PENDING:
            raise WorkflowTransitionException("Only Pending orders can be confirmed")
        amount = to_decimal(
            data.get('amountReceived', data.get('AmountReceived')), 'amountReceived', positive=True
        )
        if money(amount) > order.amount:
            raise ValidationFailed("Amount received cannot exceed the order amount")

        payment = OrderService._payment_from(order, user, amount, data)
        order.advance_paid = money(order.advance_paid + payment.amount)
        order.order_status = OrderStatus.CONFIRMED
        order.save()

        ActivityService.log(order.company, user, 'confirmed order', f"{order.order_number} ({order.client_name})")
        SalesLogger.log_order_confirmed(order, payment, user)
        return payment

    @staticmethod
    @transaction.atomic
    def record_payment(order: Order, user, data: Dict) -> OrderPayment:
        """
        Record a further payment on a confirmed order.

        The tax invoice number is assigned by Order.save once the
        balance reaches zero.
        """
        if order.order_status == OrderStatus.CANCELLED:
            raise WorkflowTransitionException("Cannot record payment for a cancelled order")
        if order.order_status == OrderStatus.PENDING:
            raise WorkflowTransitionException("Order must be confirmed before recording payments")
        if order.balance_due <= 0:
            raise ValidationFailed("Order is already fully paid")

        amount = to_decimal(data.get('amount', data.get('Amount')), 'amount', positive=True)
        if money(amount) > order.balance_due:
            raise ValidationFailed(
                "Payment amount cannot exceed the balance due",
                details={'balanceDue': order.balance_due},
            )

        payment = OrderService._payment_from(order, user, amount, data)
        order.advance_paid = money(order.advance_paid + payment.amount)
        order.save()

        ActivityService.log(order.company, user, 'recorded payment', f"Rs {payment.amount} for {order.order_number}")
        SalesLogger.log_payment_recorded(order, payment, user)
        return payment

    @staticmethod
    @transaction.atomic
    def delete_order(order: Order, user) -> None:
        if order.payments.exists():
            raise ValidationFailed("Cannot delete an order with recorded payments")
        SalesLogger.log_order_deleted(order, user)
        ActivityService.log(order.company, user, 'deleted order', order.order_number)
        order.delete()

    @staticmethod
    def payment_totals(order: Order) -> Dict[str, Optional[Decimal]]:
        return {
            'totalAmount': order.amount,
            'totalPaid': order.advance_paid,
            'balanceDue': order.balance_due,
            'paymentStatus': order.payment_status,
        }
