"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Unit tests for the core module - registration, login,
             bearer tokens, tenant scoping and the activity feed.
-------------------------------------------------------------------------
"""
from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase, Client
from django.urls import reverse
from django.utils import timezone

from apps.core.exceptions import ValidationFailed
from apps.core.models import Company, RecentActivity
from apps.core.services import ActivityService
from apps.core.tokens import issue_token
from apps.core.utils import clamp_day, money, parse_month_key
from apps.revenue.models import Revenue
from apps.users.models import UserRole

User = get_user_model()


class RegistrationAndLoginTests(TestCase):
    """Tests for company registration and token login."""

    def setUp(self):
        self.client = Client()

    def test_register_admin_creates_company_and_token(self):
        response = self.client.post(
            reverse('core:register_admin'),
            {
                'CompanyName': 'Acme Services',
                'Email': 'owner@acme.test',
                'Password': 'secret123',
                'Name': 'Asha Owner',
                'GSTIN': '27AAPFU0939F1ZV',
            },
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body['token'])
        self.assertEqual(body['user']['role'], UserRole.ADMIN)
        company = Company.objects.get(name='Acme Services')
        self.assertEqual(company.state, 'Maharashtra')

    def test_register_admin_rejects_duplicate_email(self):
        User.objects.create_user(email='taken@acme.test', password='secret123', name='Taken')
        response = self.client.post(
            reverse('core:register_admin'),
            {'CompanyName': 'Other', 'Email': 'taken@acme.test', 'Password': 'secret123', 'Name': 'X'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_register_admin_rejects_invalid_gstin(self):
        response = self.client.post(
            reverse('core:register_admin'),
            {
                'CompanyName': 'Acme', 'Email': 'a@acme.test', 'Password': 'secret123',
                'Name': 'A', 'GSTIN': 'NOT-A-GSTIN',
            },
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('GSTIN', response.json()['message'])

    def test_login_requires_email_and_password(self):
        response = self.client.post(reverse('core:login'), {'Email': 'x@y.test'},
                                    content_type='application/json')
        self.assertEqual(response.status_code, 400)

    def test_login_with_bad_credentials_is_401(self):
        company = Company.objects.create(name='Acme')
        User.objects.create_user(email='hr@acme.test', password='secret123', name='HR', role=UserRole.HR,
                                 company=company)
        response = self.client.post(
            reverse('core:login'),
            {'Email': 'hr@acme.test', 'Password': 'wrong'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 401)

    def test_login_token_authenticates_requests(self):
        company = Company.objects.create(name='Acme')
        User.objects.create_user(email='hr@acme.test', password='secret123', name='HR', role=UserRole.HR,
                                 company=company)
        response = self.client.post(
            reverse('core:admin_login'),
            {'email': 'hr@acme.test', 'password': 'secret123'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        token = response.json()['token']

        details = self.client.get(reverse('core:fetch_details'), HTTP_AUTHORIZATION=f'Bearer {token}')
        self.assertEqual(details.status_code, 200)
        self.assertEqual(details.json()['company']['CompanyName'], 'Acme')


class TokenAuthenticationTests(TestCase):

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )

    def test_missing_credentials_is_401(self):
        response = self.client.get(reverse('core:fetch_details'))
        self.assertEqual(response.status_code, 401)

    def test_tampered_token_is_401_token_invalid(self):
        token = issue_token(self.admin) + 'x'
        response = self.client.get(reverse('core:fetch_details'), HTTP_AUTHORIZATION=f'Bearer {token}')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['error'], 'TOKEN_INVALID')

    def test_token_of_inactive_user_is_rejected(self):
        token = issue_token(self.admin)
        self.admin.is_active = False
        self.admin.save()
        response = self.client.get(reverse('core:fetch_details'), HTTP_AUTHORIZATION=f'Bearer {token}')
        self.assertEqual(response.status_code, 401)


class CompanyViewsTests(TestCase):

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.other = Company.objects.create(name='Other Co')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )
        self.employee = User.objects.create_user(
            email='emp@acme.test', password='secret123', name='Emp',
            role=UserRole.EMPLOYEE, company=self.company,
        )

    def test_update_other_company_is_404(self):
        self.client.force_login(self.admin)
        response = self.client.put(
            reverse('core:update_company', args=[self.other.pk]),
            {'CompanyName': 'Hijacked'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 404)
        self.other.refresh_from_db()
        self.assertEqual(self.other.name, 'Other Co')

    def test_update_own_company(self):
        self.client.force_login(self.admin)
        response = self.client.put(
            reverse('core:update_company', args=[self.company.pk]),
            {'CompanyName': 'Acme Renamed', 'State': 'Karnataka'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.company.refresh_from_db()
        self.assertEqual(self.company.name, 'Acme Renamed')

    def test_employee_cannot_update_company(self):
        self.client.force_login(self.employee)
        response = self.client.put(
            reverse('core:update_company', args=[self.company.pk]),
            {'CompanyName': 'Nope'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['userRole'], UserRole.EMPLOYEE)

    def test_change_password_with_wrong_old_password(self):
        self.client.force_login(self.employee)
        response = self.client.post(
            reverse('core:change_password'),
            {'oldPassword': 'wrong', 'newPassword': 'newsecret'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)

    def test_change_password(self):
        self.client.force_login(self.employee)
        response = self.client.post(
            reverse('core:change_password'),
            {'oldPassword': 'secret123', 'newPassword': 'newsecret'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.employee.refresh_from_db()
        self.assertTrue(self.employee.check_password('newsecret'))


class ActivityFeedTests(TestCase):
    """Tests for ActivityService and the recent activities endpoint."""

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )

    def test_recent_activities_hides_expired_entries(self):
        ActivityService.log(self.company, self.admin, 'added', 'Employee Rahul')
        old = ActivityService.log(self.company, self.admin, 'deleted', 'Order ORD-1')
        RecentActivity.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=11))

        self.client.force_login(self.admin)
        response = self.client.get(reverse('core:recent_activities'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['count'], 1)
        self.assertEqual(response.json()['data'][0]['target'], 'Employee Rahul')

    def test_purge_activities_command(self):
        old = ActivityService.log(self.company, self.admin, 'deleted', 'Order ORD-1')
        RecentActivity.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=30))
        ActivityService.log(self.company, self.admin, 'added', 'Employee Rahul')

        call_command('purge_activities')
        self.assertEqual(RecentActivity.objects.count(), 1)

    def test_log_without_company_is_ignored(self):
        self.assertIsNone(ActivityService.log(None, self.admin, 'added', 'x'))

class TenantScopingTests(TestCase):
    """Tests for company scoping of business records."""

    def test_queryset_is_scoped_to_company(self):
        acme = Company.objects.create(name='Acme')
        other = Company.objects.create(name='Other Co')
        own = Revenue.objects.create(company=acme, source='Consulting', amount=Decimal('100'),
                                     revenue_date=date(2026, 3, 5))
        Revenue.objects.create(company=other, source='Elsewhere', amount=Decimal('200'),
                               revenue_date=date(2026, 3, 5))

        self.assertEqual(list(Revenue.get_tenant_filtered_queryset(acme)), [own])
        self.assertFalse(Revenue.get_tenant_filtered_queryset(None).exists())


class UtilsTests(TestCase):

    def test_money_rounds_half_up(self):
        self.assertEqual(money('10.005'), Decimal('10.01'))
        self.assertEqual(money(None), Decimal('0.00'))

    def test_clamp_day(self):
        self.assertEqual(clamp_day(2026, 2, 31).day, 28)
        self.assertEqual(clamp_day(2024, 2, 31).day, 29)

    def test_parse_month_key(self):
        self.assertEqual(parse_month_key('2026-03'), (2026, 3))
        with self.assertRaises(ValidationFailed):
            parse_month_key('2026-13')
        with self.assertRaises(ValidationFailed):
            parse_month_key('March')
        for raw in ('0000-01', '1999-12', '2101-01'):
            with self.assertRaises(ValidationFailed):
                parse_month_key(raw)
        self.assertEqual(parse_month_key('2100-12'), (2100, 12))
