"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Authentication signal handlers.
-------------------------------------------------------------------------
"""
import logging

from django.contrib.auth.signals import user_login_failed
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(user_login_failed)
def log_failed_login(sender, credentials, request, **kwargs):
    """Log failed login attempts with the attempted email and client IP."""
    email = credentials.get('email') or credentials.get('username')

    ip = None
    if request is not None:
        ip = request.META.get('HTTP_X_FORWARDED_FOR') or request.META.get('REMOTE_ADDR')

    logger.warning(
        "Failed login attempt - email=%s ip=%s path=%s",
        email,
        ip,
        getattr(request, 'path', None)
    )
