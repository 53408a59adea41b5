"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Centralized logging for sales module operations.
-------------------------------------------------------------------------
"""
import logging

logger = logging.getLogger('apps.sales')


class SalesLogger:
    """Centralized logging for order and payment operations"""

    @staticmethod
    def log_order_created(order, user):
        logger.info(
            f"Order created: {order.order_number} | "
            f"Client: {order.client_name} | "
            f"Amount: Rs {order.amount} ({order.gst_type}) | "
            f"Created by: {user.email}",
            extra={
                'order_id': order.pk,
                'amount': str(order.amount),
                'gst_type': order.gst_type,
                'user_id': user.pk,
                'company_id': order.company_id,
            }
        )

    @staticmethod
    def log_order_confirmed(order, payment, user):
        """Log order confirmation with the first payment"""
        logger.info(
            f"Order confirmed: {order.order_number} | "
            f"Received: Rs {payment.amount} | "
            f"Balance: Rs {order.balance_due} | "
            f"Confirmed by: {user.email}",
            extra={
                'order_id': order.pk,
                'payment_id': payment.pk,
                'amount': str(payment.amount),
                'balance_due': str(order.balance_due),
                'user_id': user.pk,
                'company_id': order.company_id,
            }
        )

    @staticmethod
    def log_payment_recorded(order, payment, user):
        logger.info(
            f"Payment recorded: {order.order_number} | "
            f"Amount: Rs {payment.amount} | "
            f"Method: {payment.payment_method} | "
            f"Status: {order.payment_status} | "
            f"Recorded by: {user.email}",
            extra={
                'order_id': order.pk,
                'payment_id': payment.pk,
                'amount': str(payment.amount),
                'payment_status': order.payment_status,
                'invoice': order.tax_invoice_number,
                'user_id': user.pk,
                'company_id': order.company_id,
            }
        )

    @staticmethod
    def log_order_deleted(order, user):
        logger.warning(
            f"Order deleted: {order.order_number} | "
            f"Client: {order.client_name} | "
            f"Deleted by: {user.email}",
            extra={
                'order_id': order.pk,
                'user_id': user.pk,
                'company_id': order.company_id,
            }
        )
