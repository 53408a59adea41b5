"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Views for company registration, login, company profile,
             password change and the recent activity feed.
-------------------------------------------------------------------------
"""
import logging

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction

from apps.core.api import ApiView, json_response
from apps.core.exceptions import (
    AuthenticationFailed,
    DuplicateRecordException,
    ResourceNotFound,
    ValidationFailed,
)
from apps.core.models import Company
from apps.core.services import ActivityService
from apps.core.tokens import issue_token
from apps.core.utils import to_int
from apps.sales.services_gst import normalize_gstin, state_from_gstin, validate_gstin
from apps.users.models import UserRole
from apps.users.permissions import AdminRequiredMixin, StaffRequiredMixin

logger = logging.getLogger(__name__)
User = get_user_model()

MIN_PASSWORD_LENGTH = 6

COMPANY_FIELDS = {
    'CompanyName': 'name',
    'CompanyEmail': 'email',
    'Phone': 'phone',
    'Address': 'address',
    'State': 'state',
    'PAN': 'pan',
    'Website': 'website',
}


def _clean_gstin(value) -> str:
    gstin = normalize_gstin(value)
    if not validate_gstin(gstin):
        raise ValidationFailed("Invalid GSTIN format. Expected format: 22AAAAA0000A1Z5")
    return gstin


class RegisterAdminView(ApiView):
    """Create a company together with its first Admin user."""

    public = True

    @transaction.atomic
    def post(self, request):
        company_name = self.require('CompanyName', 'companyName', message="CompanyName is required")
        email = self.require('Email', 'email', message="Email is required")
        password = self.require('Password', 'password', message="Password is required")
        name = self.require('Name', 'name', message="Name is required")

        email = str(email).strip().lower()
        if User.objects.filter(email=email).exists():
            raise DuplicateRecordException("Email already registered")
        if len(str(password)) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        gstin = _clean_gstin(self.param('GSTIN', 'gstin', default=''))
        state = self.param('State', 'state', default='') or state_from_gstin(gstin) or ''

        company = Company.objects.create(
            name=str(company_name).strip(),
            email=self.param('CompanyEmail', default=email),
            phone=self.param('Phone', 'phone', default=''),
            address=self.param('Address', 'address', default=''),
            state=state,
            gstin=gstin,
            pan=self.param('PAN', 'pan', default=''),
            website=self.param('Website', 'website', default=''),
        )
        user = User.objects.create_user(
            email=email,
            password=str(password),
            name=str(name).strip(),
            phone=self.param('Phone', 'phone', default=''),
            role=UserRole.ADMIN,
            company=company,
        )
        ActivityService.log(company, user, 'registered', f"Company {company.name}")
        logger.info("Registered company %s with admin %s", company.pk, user.email)

        return json_response({
            'success': True,
            'message': 'Company and admin registered successfully',
            'company': company.to_dict(),
            'user': user.to_dict(),
            'token': issue_token(user),
        }, status=201)


class LoginView(ApiView):
    """Exchange email and password for a bearer token."""

    public = True

    def post(self, request):
        email = self.param('Email', 'email')
        password = self.param('Password', 'password')
        if not email or not password:
            raise ValidationFailed("Email and password are required")

        user = authenticate(request, email=str(email).strip().lower(), password=str(password))
        if user is None:
            raise AuthenticationFailed("Invalid email or password")

        return json_response({
            'success': True,
            'message': 'Login successful',
            'token': issue_token(user),
            'role': user.role,
            'user': user.to_dict(),
            'CompanyId': user.company_id,
        })


class FetchDetailsView(ApiView):
    """Current company and current user profile."""

    def get(self, request):
        return json_response({
            'success': True,
            'company': self.company.to_dict() if self.company else None,
            'user': request.user.to_dict(),
        })


class UpdateCompanyView(AdminRequiredMixin, ApiView):
    """Update the caller's own company profile."""

    def put(self, request, pk):
        if self.company is None or self.company.pk != pk:
            raise ResourceNotFound("Company not found")

        company = self.company
        for key, field in COMPANY_FIELDS.items():
            if key in self.data:
                setattr(company, field, self.data[key] or '')
        if not company.name:
            raise ValidationFailed("CompanyName is required")
        if 'GSTIN' in self.data:
            company.gstin = _clean_gstin(self.data['GSTIN'])
            if not company.state:
                company.state = state_from_gstin(company.gstin) or ''
        company.save()
        ActivityService.log(company, request.user, 'updated', f"Company {company.name}")

        return json_response({
            'success': True,
            'message': 'Company updated successfully',
            'company': company.to_dict(),
        })


class ChangePasswordView(ApiView):

    def post(self, request):
        old_password = self.require('oldPassword', message="oldPassword is required")
        new_password = self.require('newPassword', message="newPassword is required")
        if len(str(new_password)) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed(f"New password must be at least {MIN_PASSWORD_LENGTH} characters")

        user = request.user
        if not user.check_password(str(old_password)):
            raise ValidationFailed("Old password is incorrect")
        user.set_password(str(new_password))
        user.save(update_fields=['password'])
        logger.info("Password changed for user %s", user.pk)

        return json_response({'success': True, 'message': 'Password changed successfully'})


class RecentActivitiesView(StaffRequiredMixin, ApiView):
    """Newest activities of the last retention window."""

    def get(self, request):
        limit = to_int(request.GET.get('limit'), 'limit', required=False, minimum=1) or 20
        activities = ActivityService.get_recent(self.company, limit=limit)
        data = self.serialize(activities)
        return json_response({'success': True, 'count': len(data), 'data': data})
