"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Core services for the activity feed and outgoing
             notification emails.
-------------------------------------------------------------------------
"""
import logging
from typing import List, Optional

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

from apps.core.models import RecentActivity

logger = logging.getLogger(__name__)


class ActivityService:
    """
    Service class for the company activity feed.

    Writes are best effort: a failure to record an activity is logged
    and never breaks the business operation that triggered it.
    """

    @staticmethod
    def log(company, user, action: str, target: str = '') -> Optional[RecentActivity]:
        """
        Record an activity line.

        Args:
            company: Company owning the activity.
            user: Acting user (may be None for system actions).
            action: Verb phrase, e.g. "added" or "Generated Salary".
            target: Free text naming the object acted upon.

        Returns:
            The created RecentActivity or None when it could not be saved.

        Example:
            >>> ActivityService.log(company, request.user, 'added', 'Employee Rahul Sharma')
        """
        if company is None:
            return None
        try:
            with transaction.atomic():
                return RecentActivity.objects.create(
                    company=company,
                    user=user if getattr(user, 'pk', None) else None,
                    action=action[:100],
                    target=(target or '')[:255],
                )
        except Exception:
            logger.exception("Failed to record activity '%s %s'", action, target)
            return None

    @staticmethod
    def get_recent(company, limit: int = 20):
        """
        Get the newest visible activities for a company.

        Args:
            company: Company to read.
            limit: Maximum number of entries (default: 20).

        Returns:
            QuerySet of RecentActivity, newest first.
        """
        return (
            RecentActivity.objects.visible()
            .filter(company=company)
            .select_related('user')
            .order_by('-created_at')[:limit]
        )

    @staticmethod
    @transaction.atomic
    def purge_expired() -> int:
        """
        Delete activities older than the retention window.

        Returns:
            Number of rows deleted.
        """
        deleted, _ = RecentActivity.objects.expired().delete()
        return deleted


class NotificationMailer:
    """Outgoing emails triggered by business events."""

    @staticmethod
    def notify_new_employee(user, created_by=None, activity: Optional[RecentActivity] = None) -> bool:
        """
        Tell the configured recipients that an employee was added.

        Failures are logged and reported as False; the caller's
        request still succeeds.

        Returns:
            True when the email was handed to the mail backend.
        """
        recipients: List[str] = list(getattr(settings, 'NEW_EMPLOYEE_NOTIFY_EMAILS', []))
        if not recipients:
            return False

        added_by = getattr(created_by, 'name', '') or 'an administrator'
        subject = f"New Employee Added: {user.name}"
        body = (
            f"A new {user.role} has been added to {user.company}.\n\n"
            f"Name: {user.name}\n"
            f"Email: {user.email}\n"
            f"Employee Code: {user.employee_code or 'N/A'}\n"
            f"Added By: {added_by}\n"
        )
        try:
            send_mail(
                subject,
                body,
                settings.DEFAULT_FROM_EMAIL,
                recipients,
                fail_silently=False,
            )
        except Exception:
            logger.exception("Failed to send new employee email for %s", user.email)
            return False

        if activity is not None:
            activity.is_email_sent = True
            activity.save(update_fields=['is_email_sent'])
        logger.info("New employee email sent for %s", user.email)
        return True
