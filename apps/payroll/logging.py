"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Centralized logging for payroll operations.
-------------------------------------------------------------------------
"""
import logging

logger = logging.getLogger('apps.payroll')


class PayrollLogger:
    """Centralized logging for salary settings, slips and slip requests"""

    @staticmethod
    def log_slip_generated(slip, user):
        logger.info(
            f"Salary slip generated: {slip.employee.email} | "
            f"Month: {slip.month} | "
            f"Gross: Rs {slip.gross_salary} | "
            f"Net: Rs {slip.net_salary} | "
            f"Generated by: {getattr(user, 'email', 'system')}",
            extra={
                'slip_id': slip.pk,
                'employee_id': slip.employee_id,
                'month': slip.month,
                'gross_salary': str(slip.gross_salary),
                'net_salary': str(slip.net_salary),
                'company_id': slip.company_id,
            }
        )

    @staticmethod
    def log_bulk_run(company, month, processed, skipped, errors, user):
        """Log the outcome of a whole-company payroll run"""
        log = logger.warning if errors else logger.info
        log(
            f"Bulk payroll run: {month} | "
            f"Processed: {processed} | "
            f"Skipped: {skipped} | "
            f"Errors: {len(errors)} | "
            f"Run by: {getattr(user, 'email', 'system')}",
            extra={
                'month': month,
                'processed': processed,
                'skipped': skipped,
                'errors': errors,
                'company_id': company.pk,
            }
        )

    @staticmethod
    def log_setting_saved(setting, user, created):
        logger.info(
            f"Salary setting {'created' if created else 'updated'}: {setting.employee.email} | "
            f"Tax applicable: {setting.is_tax_applicable} | "
            f"By: {user.email}",
            extra={
                'setting_id': setting.pk,
                'employee_id': setting.employee_id,
                'company_id': setting.company_id,
            }
        )

    @staticmethod
    def log_request_submitted(request_obj, user):
        logger.info(
            f"Salary configuration request submitted for {request_obj.employee.email} | "
            f"By: {user.email}",
            extra={
                'request_id': request_obj.pk,
                'employee_id': request_obj.employee_id,
                'company_id': request_obj.company_id,
            }
        )

    @staticmethod
    def log_request_reviewed(request_obj, user):
        logger.info(
            f"Salary configuration request {request_obj.status}: {request_obj.employee.email} | "
            f"Reviewed by: {user.email}",
            extra={
                'request_id': request_obj.pk,
                'status': request_obj.status,
                'company_id': request_obj.company_id,
            }
        )

