"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: API views for branches, departments and designations.
-------------------------------------------------------------------------
"""
import logging

from django.contrib.auth import get_user_model

from apps.core.api import ApiView, json_response
from apps.core.exceptions import DuplicateRecordException, ValidationFailed
from apps.core.services import ActivityService
from apps.organization.models import Branch, Department, Designation
from apps.users.permissions import AdminRequiredMixin, AdminOrHRRequiredMixin

logger = logging.getLogger(__name__)
User = get_user_model()


# Branches

class AddBranchView(AdminRequiredMixin, ApiView):

    def post(self, request):
        name = str(self.require('BranchName', 'branchName', message="BranchName is required")).strip()
        if Branch.get_tenant_filtered_queryset(self.company).filter(branch_name__iexact=name).exists():
            raise DuplicateRecordException("Branch with this name already exists")

        branch = Branch(
            company=self.company,
            branch_name=name,
            address=self.param('Address', 'address', default=''),
            city=self.param('City', 'city', default=''),
            state=self.param('State', 'state', default=''),
            pin_code=self.param('PinCode', 'pinCode', default=''),
        )
        branch.save_with_user(request.user)
        ActivityService.log(self.company, request.user, 'added', f"Branch {branch.branch_name}")
        return json_response({
            'success': True,
            'message': 'Branch added successfully',
            'data': branch.to_dict(),
        }, status=201)


class BranchListView(ApiView):

    def get(self, request):
        branches = Branch.get_tenant_filtered_queryset(self.company)
        return json_response({'success': True, 'data': self.serialize(branches)})


class UpdateBranchView(AdminRequiredMixin, ApiView):

    def put(self, request, pk):
        branch = self.get_tenant_object(Branch, pk, "Branch not found")
        if 'BranchName' in self.data:
            name = str(self.data['BranchName'] or '').strip()
            if not name:
                raise ValidationFailed("BranchName is required")
            clash = Branch.get_tenant_filtered_queryset(self.company).filter(
                branch_name__iexact=name
            ).exclude(pk=branch.pk)
            if clash.exists():
                raise DuplicateRecordException("Branch with this name already exists")
            branch.branch_name = name
        for key, field in (('Address', 'address'), ('City', 'city'),
                           ('State', 'state'), ('PinCode', 'pin_code')):
            if key in self.data:
                setattr(branch, field, self.data[key] or '')
        branch.save_with_user(request.user)
        return json_response({
            'success': True,
            'message': 'Branch updated successfully',
            'data': branch.to_dict(),
        })


class DeleteBranchView(AdminRequiredMixin, ApiView):

    def delete(self, request, pk):
        branch = self.get_tenant_object(Branch, pk, "Branch not found")
        if User.objects.filter(company=self.company, branch=branch).exists():
            raise ValidationFailed("Cannot delete branch with assigned employees")
        name = branch.branch_name
        branch.delete()
        ActivityService.log(self.company, request.user, 'deleted', f"Branch {name}")
        logger.info("Branch %s deleted in company %s", pk, self.company.pk)
        return json_response({'success': True, 'message': 'Branch deleted successfully'})


class CountBranchesView(ApiView):

    def get(self, request):
        total = Branch.get_tenant_filtered_queryset(self.company).count()
        return json_response({'success': True, 'total': total})


# Departments

class AddDepartmentView(AdminOrHRRequiredMixin, ApiView):

    def post(self, request):
        name = str(self.require('DepartmentName', 'departmentName',
                                message="DepartmentName is required")).strip()
        if Department.get_tenant_filtered_queryset(self.company).filter(
            department_name__iexact=name
        ).exists():
            raise DuplicateRecordException("Department already exists")

        department = Department(
            company=self.company,
            department_name=name,
            description=self.param('Description', 'description', default=''),
        )
        department.save_with_user(request.user)
        ActivityService.log(self.company, request.user, 'added', f"Department {name}")
        return json_response({
            'success': True,
            'message': 'Department added successfully',
            'data': department.to_dict(),
        }, status=201)


class DepartmentListView(ApiView):

    def get(self, request):
        departments = Department.get_tenant_filtered_queryset(self.company)
        return json_response({'success': True, 'data': self.serialize(departments)})


class UpdateDepartmentView(AdminOrHRRequiredMixin, ApiView):

    def put(self, request, pk):
        department = self.get_tenant_object(Department, pk, "Department not found")
        if 'DepartmentName' in self.data:
            name = str(self.data['DepartmentName'] or '').strip()
            if not name:
                raise ValidationFailed("DepartmentName is required")
            clash = Department.get_tenant_filtered_queryset(self.company).filter(
                department_name__iexact=name
            ).exclude(pk=department.pk)
            if clash.exists():
                raise DuplicateRecordException("Department already exists")
            department.department_name = name
        if 'Description' in self.data:
            department.description = self.data['Description'] or ''
        department.save_with_user(request.user)
        return json_response({
            'success': True,
            'message': 'Department updated successfully',
            'data': department.to_dict(),
        })


class DeleteDepartmentView(AdminOrHRRequiredMixin, ApiView):

    def delete(self, request, pk):
        department = self.get_tenant_object(Department, pk, "Department not found")
        if User.objects.filter(company=self.company, department=department).exists():
            raise ValidationFailed("Cannot delete department with assigned employees")
        name = department.department_name
        department.delete()
        ActivityService.log(self.company, request.user, 'deleted', f"Department {name}")
        return json_response({'success': True, 'message': 'Department deleted successfully'})


class CountDepartmentView(ApiView):

    def get(self, request):
        total = Department.get_tenant_filtered_queryset(self.company).count()
        return json_response({'success': True, 'total': total})


# Designations

class AddDesignationView(AdminOrHRRequiredMixin, ApiView):

    def post(self, request):
        name = str(self.require('DesignationName', 'designationName',
                                message="DesignationName is required")).strip()
        if Designation.get_tenant_filtered_queryset(self.company).filter(
            designation_name__iexact=name
        ).exists():
            raise DuplicateRecordException("Designation already exists")

        department = None
        department_id = self.param('DepartmentId', 'departmentId')
        if department_id:
            department = self.get_tenant_object(Department, department_id, "Department not found")

        designation = Designation(
            company=self.company,
            designation_name=name,
            department=department,
        )
        designation.save_with_user(request.user)
        return json_response({
            'success': True,
            'message': 'Designation added successfully',
            'data': designation.to_dict(),
        }, status=201)


class DesignationListView(ApiView):

    def get(self, request):
        designations = Designation.get_tenant_filtered_queryset(self.company).select_related('department')
        department_id = request.GET.get('DepartmentId')
        if department_id:
            designations = designations.filter(department_id=department_id)
        return json_response({'success': True, 'data': self.serialize(designations)})


class DeleteDesignationView(AdminOrHRRequiredMixin, ApiView):

    def delete(self, request, pk):
        designation = self.get_tenant_object(Designation, pk, "Designation not found")
        designation.delete()
        return json_response({'success': True, 'message': 'Designation deleted successfully'})
