"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Centralized logging for revenue module operations.
-------------------------------------------------------------------------
"""
import logging

logger = logging.getLogger('apps.revenue')


class RevenueLogger:
    """Centralized logging for revenue operations"""

    @staticmethod
    def log_revenue_added(revenue, user):
        """Log a manually entered revenue row"""
        logger.info(
            f"Revenue added: {revenue.source} | "
            f"Amount: Rs {revenue.amount} | "
            f"Date: {revenue.revenue_date} | "
            f"Added by: {user.email}",
            extra={
                'revenue_id': revenue.pk,
                'amount': str(revenue.amount),
                'order_id': revenue.order_id,
                'user_id': user.pk,
                'company_id': revenue.company_id,
            }
        )

    @staticmethod
    def log_revenue_deleted(revenue, user):
        logger.warning(
            f"Revenue deleted: {revenue.source} | "
            f"Amount: Rs {revenue.amount} | "
            f"Deleted by: {user.email}",
            extra={
                'revenue_id': revenue.pk,
                'amount': str(revenue.amount),
                'user_id': user.pk,
                'company_id': revenue.company_id,
            }
        )

    @staticmethod
    def log_delete_refused(revenue, user):
        """Log an attempt to delete payment-generated revenue"""
        logger.warning(
            f"Revenue delete refused: {revenue.source} is generated by payment {revenue.payment_id} | "
            f"Requested by: {user.email}",
            extra={
                'revenue_id': revenue.pk,
                'payment_id': revenue.payment_id,
                'user_id': user.pk,
                'company_id': revenue.company_id,
            }
        )
