"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Management command to purge activity feed entries past retention
Usage: python manage.py purge_activities [--dry-run]
-------------------------------------------------------------------------
"""
import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import models

from apps.core.models import RecentActivity
from apps.core.services import ActivityService

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Delete recent activities older than RECENT_ACTIVITY_RETENTION_DAYS'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without actually deleting'
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        days = getattr(settings, 'RECENT_ACTIVITY_RETENTION_DAYS', 10)

        self.stdout.write(self.style.WARNING('=' * 70))
        self.stdout.write(self.style.WARNING('PayrollHub Activity Purge'))
        self.stdout.write(self.style.WARNING('=' * 70))

        expired = RecentActivity.objects.expired()
        total_count = expired.count()

        if total_count == 0:
            self.stdout.write(self.style.SUCCESS('No activities to purge.'))
            return

        self.stdout.write(f'Activities older than {days} days: {total_count}')
        per_company = expired.values('company__name').annotate(
            count=models.Count('id')
        ).order_by('-count')
        for row in per_company:
            self.stdout.write(f"  - {row['company__name']}: {row['count']}")

        if dry_run:
            self.stdout.write(self.style.WARNING('DRY RUN MODE: No activities were deleted.'))
            return

        try:
            deleted = ActivityService.purge_expired()
        except Exception as e:
            raise CommandError(f'Purge failed: {e}')

        logger.info(
            'Activity purge: deleted %s activities', deleted,
            extra={'deleted': deleted, 'days': days}
        )
        self.stdout.write(self.style.SUCCESS(f'Deleted {deleted} activities'))
