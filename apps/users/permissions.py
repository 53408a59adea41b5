"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Permission classes for role-based access control on the
             JSON API views.
-------------------------------------------------------------------------
"""
from typing import List

from django.contrib.auth.mixins import UserPassesTestMixin

from apps.core.api import authentication_error
from apps.core.exceptions import UnauthorizedRoleException
from apps.users.models import UserRole


class RoleRequiredMixin(UserPassesTestMixin):
    """
    Base mixin for role-based view access control.

    Subclasses define ``required_roles``, the roles allowed to access
    the view. Anonymous callers get 401, authenticated callers with
    another role get 403 naming their role and the required ones.

    Attributes:
        required_roles: List of role codes that can access this view.
    """

    required_roles: List[str] = []

    def test_func(self) -> bool:
        user = self.request.user
        if not user.is_authenticated:
            return False
        if user.is_superuser:
            return True
        return user.has_any_role(self.required_roles)

    def handle_no_permission(self) -> None:
        """Raise 401 for anonymous callers and 403 for the wrong role."""
        user = self.request.user
        if not user.is_authenticated:
            raise authentication_error(self.request)
        raise UnauthorizedRoleException(
            details={
                'userRole': getattr(user, 'role', None),
                'requiredRoles': list(self.required_roles),
            }
        )


class AdminRequiredMixin(RoleRequiredMixin):
    """Company owner only."""

    required_roles = [UserRole.ADMIN]


class AdminOrHRRequiredMixin(RoleRequiredMixin):
    """
    Mixin that restricts access to Admin and HR.

    Used for employee management, attendance and leave decisions.
    """

    required_roles = [UserRole.ADMIN, UserRole.HR]


class AdminOrCARequiredMixin(RoleRequiredMixin):
    """
    Mixin that restricts access to Admin and CA.

    Used for orders, revenue and tax slabs.
    """

    required_roles = [UserRole.ADMIN, UserRole.CA]


class HRRequiredMixin(RoleRequiredMixin):
    required_roles = [UserRole.HR]


class StaffRequiredMixin(RoleRequiredMixin):
    """Any non-Employee role (Admin, HR, CA)."""

    required_roles = [UserRole.ADMIN, UserRole.HR, UserRole.CA]


def ensure_roles(user, roles: List[str]) -> None:
    """
    Inline role check for views that allow different roles per method.

    Raises:
        UnauthorizedRoleException: When the user's role is not in roles.
    """
    if user.is_superuser or user.has_any_role(roles):
        return
    raise UnauthorizedRoleException(
        details={'userRole': user.role, 'requiredRoles': list(roles)}
    )
