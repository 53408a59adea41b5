"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Employee management services shared by the API views and
             the bulk import command.
-------------------------------------------------------------------------
"""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.core.exceptions import (
    DuplicateRecordException,
    ResourceNotFound,
    UnauthorizedRoleException,
    ValidationFailed,
)
from apps.core.services import ActivityService, NotificationMailer
from apps.core.utils import to_date
from apps.organization.models import Branch, Department, Designation
from apps.users.models import EmployeeType, UserRole

logger = logging.getLogger(__name__)
User = get_user_model()

PROFILE_FIELDS = {
    'Name': 'name',
    'Phone': 'phone',
    'EmployeeType': 'employee_type',
    'AadhaarNumber': 'aadhaar_number',
    'AdhaarNumber': 'aadhaar_number',
    'PANNumber': 'pan_number',
}

DATE_FIELDS = {
    'JoiningDate': 'joining_date',
    'DateOfBirth': 'date_of_birth',
}

BANK_FIELDS = {
    'bankName': 'bank_name',
    'accountHolderName': 'account_holder_name',
    'accountNumber': 'account_number',
    'ifscCode': 'ifsc_code',
    'branchName': 'bank_branch_name',
}


class EmployeeService:
    """Create and update users inside a company."""

    @staticmethod
    def _resolve(model, company, pk, label: str):
        if pk in (None, ''):
            return None
        try:
            return model.get_tenant_filtered_queryset(company).get(pk=int(pk))
        except (model.DoesNotExist, TypeError, ValueError):
            raise ResourceNotFound(f"{label} not found")

    @staticmethod
    def apply_profile(user, company, data: dict) -> None:
        """
        Copy profile fields from a request body onto a user.

        Only keys present in ``data`` are touched. Bank details are
        merged field by field, so a partial BankDetails object keeps the
        other stored values.
        """
        for key, field in PROFILE_FIELDS.items():
            if key in data:
                value = data[key]
                setattr(user, field, str(value).strip() if value is not None else '')
        if 'EmployeeType' in data and data['EmployeeType'] and data['EmployeeType'] not in EmployeeType.values:
            raise ValidationFailed(
                "Invalid EmployeeType",
                details={'validTypes': list(EmployeeType.values)},
            )
        for key, field in DATE_FIELDS.items():
            if key in data:
                setattr(user, field, to_date(data[key], key, required=False))

        if 'DepartmentId' in data:
            user.department = EmployeeService._resolve(Department, company, data['DepartmentId'], 'Department')
        if 'DesignationId' in data:
            user.designation = EmployeeService._resolve(Designation, company, data['DesignationId'], 'Designation')
        if 'BranchId' in data:
            user.branch = EmployeeService._resolve(Branch, company, data['BranchId'], 'Branch')

        bank = data.get('BankDetails')
        if isinstance(bank, dict):
            for key, field in BANK_FIELDS.items():
                if key in bank and bank[key] is not None:
                    setattr(user, field, str(bank[key]).strip())

    @staticmethod
    @transaction.atomic
    def create_employee(company, created_by, data: dict, notify: bool = True):
        """
        Create a user in ``company``.

        Args:
            company: Tenant of the new user.
            created_by: Acting user (Admin or HR), or None for imports.
            data: Request style dict (Name, Email, role, DepartmentId...).
            notify: Send the new employee email.

        Returns:
            The created CustomUser.

        Raises:
            ValidationFailed: Missing fields, invalid role or duplicate email.
            UnauthorizedRoleException: HR trying to create an Admin.
        """
        name = str(data.get('Name') or '').strip()
        email = str(data.get('Email') or '').strip().lower()
        role = data.get('role') or data.get('Role')

        if not name or not email or not role:
            raise ValidationFailed("Name, Email and role are required")
        if role not in UserRole.values:
            raise ValidationFailed("Invalid role", details={'validRoles': list(UserRole.values)})
        if created_by is not None and created_by.role == UserRole.HR and role == UserRole.ADMIN:
            raise UnauthorizedRoleException(
                "HR cannot create Admin users",
                details={'userRole': created_by.role, 'requiredRoles': [UserRole.ADMIN]},
            )
        if User.objects.filter(email=email).exists():
            raise DuplicateRecordException("Email already exists")

        user = User(
            email=email,
            name=name,
            role=role,
            company=company,
            created_by=created_by,
        )
        EmployeeService.apply_profile(user, company, data)
        password = data.get('Password')
        if password:
            user.set_password(str(password))
        else:
            user.set_unusable_password()
        user.save()

        activity = ActivityService.log(company, created_by, 'added', f"{role} {name}")
        logger.info(
            "User %s (%s) created in company %s", user.pk, role, company.pk,
            extra={'created_by': getattr(created_by, 'pk', None)},
        )
        if notify:
            transaction.on_commit(
                lambda: NotificationMailer.notify_new_employee(user, created_by, activity)
            )
        return user
