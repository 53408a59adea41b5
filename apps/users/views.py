"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: API views for employee management, employee counts,
             the HR self profile and the user CSV export.
-------------------------------------------------------------------------
"""
import logging

from django.contrib.auth import get_user_model
from django.db.models import Count

from apps.core.api import ApiView, json_response
from apps.core.exceptions import (
    UnauthorizedRoleException,
    ValidationFailed,
)
from apps.core.exports import csv_response, timestamped
from apps.core.services import ActivityService
from apps.users.models import UserRole
from apps.users.permissions import (
    AdminOrHRRequiredMixin,
    HRRequiredMixin,
    StaffRequiredMixin,
    ensure_roles,
)
from apps.users.services import EmployeeService

logger = logging.getLogger(__name__)
User = get_user_model()


def company_users(company):
    if company is None:
        return User.objects.none()
    return User.objects.filter(company=company).select_related('department', 'designation', 'branch')


class AddUserView(AdminOrHRRequiredMixin, ApiView):

    def post(self, request):
        user = EmployeeService.create_employee(self.company, request.user, self.data)
        return json_response({
            'success': True,
            'message': 'User added successfully',
            'data': user.to_dict(),
        }, status=201)


class UserListView(StaffRequiredMixin, ApiView):
    """All company users, optionally filtered by role, department or branch."""

    def get(self, request):
        users = company_users(self.company)
        role = request.GET.get('role')
        if role:
            users = users.filter(role=role)
        department_id = request.GET.get('DepartmentId')
        if department_id:
            users = users.filter(department_id=department_id)
        branch_id = request.GET.get('BranchId')
        if branch_id:
            users = users.filter(branch_id=branch_id)
        data = self.serialize(users)
        return json_response({'success': True, 'count': len(data), 'data': data})


class UserDetailView(ApiView):

    def get(self, request, pk):
        user = self.get_tenant_object(User, pk, "User not found", queryset=company_users(self.company))
        if request.user.role == UserRole.EMPLOYEE and user.pk != request.user.pk:
            raise UnauthorizedRoleException(
                "Employees can only view their own profile",
                details={'userRole': request.user.role, 'requiredRoles': [UserRole.ADMIN, UserRole.HR, UserRole.CA]},
            )
        return json_response({'success': True, 'data': user.to_dict()})


class UpdateUserView(ApiView):
    """
    Update a user.

    Admin and HR may update anyone in the company (HR cannot promote
    to Admin). Any user may update themselves, but never their role,
    company or employee code.
    """

    def put(self, request, pk):
        user = self.get_tenant_object(User, pk, "User not found", queryset=company_users(self.company))
        actor = request.user
        is_self = user.pk == actor.pk

        if not is_self:
            ensure_roles(actor, [UserRole.ADMIN, UserRole.HR])
            if actor.role == UserRole.HR and user.role == UserRole.ADMIN:
                raise UnauthorizedRoleException("HR cannot modify Admin users")

        data = dict(self.data)
        if is_self and not actor.has_any_role([UserRole.ADMIN]):
            for locked in ('role', 'CompanyId', 'EmployeeCode'):
                data.pop(locked, None)

        if 'Name' in data and not str(data['Name'] or '').strip():
            raise ValidationFailed("Name cannot be empty")
        if 'Email' in data:
            email = str(data['Email'] or '').strip().lower()
            if not email:
                raise ValidationFailed("Email cannot be empty")
            if User.objects.filter(email=email).exclude(pk=user.pk).exists():
                raise ValidationFailed("Email already exists")
            user.email = email

        if 'role' in data and data['role'] != user.role:
            new_role = data['role']
            if new_role not in UserRole.values:
                raise ValidationFailed("Invalid role", details={'validRoles': list(UserRole.values)})
            if actor.role == UserRole.HR and new_role == UserRole.ADMIN:
                raise UnauthorizedRoleException("HR cannot assign the Admin role")
            user.role = new_role

        EmployeeService.apply_profile(user, self.company, data)
        if data.get('Password'):
            user.set_password(str(data['Password']))
        user.save()

        ActivityService.log(self.company, actor, 'updated', f"{user.role} {user.name}")
        return json_response({
            'success': True,
            'message': 'User updated successfully',
            'data': user.to_dict(),
        })


class DeleteUserView(AdminOrHRRequiredMixin, ApiView):

    def delete(self, request, pk):
        user = self.get_tenant_object(User, pk, "User not found", queryset=company_users(self.company))
        if user.pk == request.user.pk:
            raise ValidationFailed("You cannot delete your own account")
        if request.user.role == UserRole.HR and user.role == UserRole.ADMIN:
            raise UnauthorizedRoleException("HR cannot delete Admin users")

        label = f"{user.role} {user.name}"
        user.delete()
        ActivityService.log(self.company, request.user, 'deleted', label)
        logger.info("User %s deleted by %s", pk, request.user.pk)
        return json_response({'success': True, 'message': 'User deleted successfully'})


class CountEmployeesView(ApiView):

    def get(self, request):
        total = company_users(self.company).count()
        return json_response({'success': True, 'total': total})


class CountEmployeesByDepartmentView(ApiView):

    def get(self, request):
        rows = (
            company_users(self.company)
            .filter(department__isnull=False)
            .values('department_id', 'department__department_name')
            .annotate(total=Count('id'))
            .order_by('department__department_name')
        )
        data = [
            {
                'DepartmentId': row['department_id'],
                'DepartmentName': row['department__department_name'],
                'total': row['total'],
            }
            for row in rows
        ]
        return json_response({'success': True, 'data': data})


class HRProfileView(HRRequiredMixin, ApiView):

    def get(self, request):
        return json_response({'success': True, 'data': request.user.to_dict()})


class HRUpdateProfileView(HRRequiredMixin, ApiView):

    def put(self, request):
        user = request.user
        data = {k: v for k, v in self.data.items() if k not in ('role', 'CompanyId', 'EmployeeCode')}
        if 'Name' in data and not str(data['Name'] or '').strip():
            raise ValidationFailed("Name cannot be empty")
        EmployeeService.apply_profile(user, self.company, data)
        user.save()
        return json_response({
            'success': True,
            'message': 'Profile updated successfully',
            'data': user.to_dict(),
        })


class EmployeeInfoView(ApiView):
    """Employee card with department, designation and branch names."""

    def get(self, request, pk):
        user = self.get_tenant_object(User, pk, "Employee not found", queryset=company_users(self.company))
        if request.user.role == UserRole.EMPLOYEE and user.pk != request.user.pk:
            raise UnauthorizedRoleException("Employees can only view their own profile")
        return json_response({
            'success': True,
            'data': {
                **user.to_dict(),
                'CompanyName': self.company.name if self.company else None,
            },
        })


class ExportUsersCSVView(AdminOrHRRequiredMixin, ApiView):

    HEADERS = [
        'Employee Code', 'Name', 'Email', 'Phone', 'Role', 'Employee Type',
        'Department', 'Designation', 'Branch', 'Joining Date',
        'Bank Name', 'Account Holder', 'Account Number', 'IFSC Code', 'Bank Branch',
    ]

    def get(self, request):
        rows = []
        for user in company_users(self.company):
            rows.append([
                user.employee_code or '',
                user.name,
                user.email,
                user.phone,
                user.role,
                user.employee_type,
                user.department.department_name if user.department else '',
                user.designation.designation_name if user.designation else '',
                user.branch.branch_name if user.branch else '',
                user.joining_date.strftime('%Y-%m-%d') if user.joining_date else '',
                user.bank_name,
                user.account_holder_name,
                user.account_number,
                user.ifsc_code,
                user.bank_branch_name,
            ])
        return csv_response(timestamped('users', 'csv'), self.HEADERS, rows)
