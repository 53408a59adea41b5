"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Custom User model with role-based access control (RBAC).
             Users log in with their email; every user except the
             platform superuser belongs to one Company.
-------------------------------------------------------------------------
"""
import re
from typing import Iterable, Optional

from django.conf import settings
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils.translation import gettext_lazy as _


class UserRole(models.TextChoices):
    """
    Enumeration of user roles.

    - Admin: Owns the company account, full access.
    - HR: Manages employees, attendance, leave and salary requests.
    - CA: Chartered accountant, manages orders, revenue and tax slabs.
    - Employee: Self service (attendance, leave, salary slips).
    """

    ADMIN = 'Admin', _('Admin')
    HR = 'HR', _('HR')
    CA = 'CA', _('CA')
    EMPLOYEE = 'Employee', _('Employee')


class EmployeeType(models.TextChoices):
    INTERN = 'Intern', _('Intern')
    PERMANENT = 'Permanent', _('Permanent')
    CONTRACT = 'Contract Base', _('Contract Base')
    OTHERS = 'Others', _('Others')


class CustomUserManager(BaseUserManager):
    """
    Custom manager for CustomUser model.

    Email is the login identifier, so there is no username argument.
    """

    def create_user(self, email: str, password: Optional[str] = None, **extra_fields) -> 'CustomUser':
        """
        Create and return a regular user.

        Args:
            email: User's email address (login identifier).
            password: User's password.
            **extra_fields: Additional fields for the user model.

        Returns:
            The created CustomUser instance.

        Raises:
            ValueError: If email is not provided.
        """
        if not email:
            raise ValueError(_('Email is required for user creation.'))

        email = self.normalize_email(email).lower()
        extra_fields.setdefault('role', UserRole.EMPLOYEE)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email: str, password: Optional[str] = None, **extra_fields) -> 'CustomUser':
        """Create and return a superuser with the Admin role."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.ADMIN)
        extra_fields.setdefault('name', 'Administrator')

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True.'))

        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """
    Employee / staff account.

    Attributes:
        role: One of Admin, HR, CA, Employee.
        company: Tenant the user belongs to.
        employee_code: Auto-assigned code (DIS-11001...) for Employees.
    """

    username = None
    first_name = None
    last_name = None

    name = models.CharField(
        max_length=150,
        verbose_name=_('Name')
    )
    email = models.EmailField(
        unique=True,
        verbose_name=_('Email Address')
    )
    phone = models.CharField(
        max_length=20,
        blank=True,
        verbose_name=_('Phone')
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.EMPLOYEE,
        verbose_name=_('Role')
    )
    company = models.ForeignKey(
        'core.Company',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='users',
        verbose_name=_('Company')
    )
    department = models.ForeignKey(
        'organization.Department',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='employees',
        verbose_name=_('Department')
    )
    designation = models.ForeignKey(
        'organization.Designation',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='employees',
        verbose_name=_('Designation')
    )
    branch = models.ForeignKey(
        'organization.Branch',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='employees',
        verbose_name=_('Branch')
    )
    employee_code = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        verbose_name=_('Employee Code')
    )
    employee_type = models.CharField(
        max_length=20,
        choices=EmployeeType.choices,
        blank=True,
        verbose_name=_('Employee Type')
    )
    joining_date = models.DateField(null=True, blank=True, verbose_name=_('Joining Date'))
    date_of_birth = models.DateField(null=True, blank=True, verbose_name=_('Date of Birth'))
    aadhaar_number = models.CharField(max_length=12, blank=True, verbose_name=_('Aadhaar Number'))
    pan_number = models.CharField(max_length=10, blank=True, verbose_name=_('PAN Number'))

    # Bank details
    bank_name = models.CharField(max_length=100, blank=True, verbose_name=_('Bank Name'))
    account_holder_name = models.CharField(max_length=150, blank=True, verbose_name=_('Account Holder Name'))
    account_number = models.CharField(max_length=30, blank=True, verbose_name=_('Account Number'))
    ifsc_code = models.CharField(max_length=11, blank=True, verbose_name=_('IFSC Code'))
    bank_branch_name = models.CharField(max_length=100, blank=True, verbose_name=_('Bank Branch'))

    created_by = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_users',
        verbose_name=_('Created By')
    )

    objects = CustomUserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        verbose_name = _('User')
        verbose_name_plural = _('Users')
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name} ({self.email})"

    def save(self, *args, **kwargs) -> None:
        """Assign an employee code to new Employees."""
        if self.email:
            self.email = self.email.strip().lower()
        if self.role == UserRole.EMPLOYEE and not self.employee_code:
            self.employee_code = self.next_employee_code()
        super().save(*args, **kwargs)

    @classmethod
    def next_employee_code(cls) -> str:
        """
        Next code in the PREFIX + 3 digit sequence (DIS-11001, DIS-11002...).

        Codes not following the pattern are ignored when finding the max.
        """
        prefix = getattr(settings, 'EMPLOYEE_CODE_PREFIX', 'DIS-11')
        pattern = re.compile(r'^' + re.escape(prefix) + r'(\d+)$')
        highest = 0
        codes = cls.objects.filter(employee_code__startswith=prefix).values_list('employee_code', flat=True)
        for code in codes:
            match = pattern.match(code)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"{prefix}{highest + 1:03d}"

    def has_role(self, role: str) -> bool:
        """Check if the user has the given role."""
        return self.role == role

    def has_any_role(self, roles: Iterable[str]) -> bool:
        """Check if the user has any of the given roles."""
        return self.role in roles

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_hr(self) -> bool:
        return self.role == UserRole.HR

    def is_employee(self) -> bool:
        return self.role == UserRole.EMPLOYEE

    def bank_details(self) -> dict:
        return {
            'bankName': self.bank_name,
            'accountHolderName': self.account_holder_name,
            'accountNumber': self.account_number,
            'ifscCode': self.ifsc_code,
            'branchName': self.bank_branch_name,
        }

    def to_dict(self) -> dict:
        return {
            'id': self.pk,
            'Name': self.name,
            'Email': self.email,
            'Phone': self.phone,
            'role': self.role,
            'CompanyId': self.company_id,
            'DepartmentId': self.department_id,
            'DepartmentName': self.department.department_name if self.department else None,
            'DesignationId': self.designation_id,
            'DesignationName': self.designation.designation_name if self.designation else None,
            'BranchId': self.branch_id,
            'BranchName': self.branch.branch_name if self.branch else None,
            'EmployeeCode': self.employee_code,
            'EmployeeType': self.employee_type,
            'JoiningDate': self.joining_date.isoformat() if self.joining_date else None,
            'DateOfBirth': self.date_of_birth.isoformat() if self.date_of_birth else None,
            'AadhaarNumber': self.aadhaar_number,
            'PANNumber': self.pan_number,
            'BankDetails': self.bank_details(),
            'IsActive': self.is_active,
            'CreatedBy': self.created_by_id,
        }
