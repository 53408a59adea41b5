"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Test cases for branch, department and designation views
-------------------------------------------------------------------------
"""
from django.contrib.auth import get_user_model
from django.test import TestCase, Client
from django.urls import reverse

from apps.core.models import Company
from apps.organization.models import Branch, Department, Designation
from apps.users.models import UserRole

User = get_user_model()


class BranchViewsTest(TestCase):
    """Test cases for branch endpoints"""

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.other_company = Company.objects.create(name='Other Co')
        self.admin = User.objects.create_user(
            email='admin@acme.test', password='secret123', name='Admin',
            role=UserRole.ADMIN, company=self.company,
        )
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='HR',
            role=UserRole.HR, company=self.company,
        )
        self.client.force_login(self.admin)

    def test_add_branch_records_creator(self):
        response = self.client.post(
            reverse('organization:add_branch'),
            {'BranchName': 'Pune', 'City': 'Pune', 'State': 'Maharashtra'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 201)
        branch = Branch.objects.get(branch_name='Pune')
        self.assertEqual(branch.company, self.company)
        self.assertEqual(branch.created_by, self.admin)

    def test_branch_names_are_unique_case_insensitively(self):
        Branch.objects.create(company=self.company, branch_name='Pune')
        response = self.client.post(
            reverse('organization:add_branch'), {'BranchName': 'pune'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)

    def test_same_branch_name_allowed_in_other_company(self):
        Branch.objects.create(company=self.other_company, branch_name='Pune')
        response = self.client.post(
            reverse('organization:add_branch'), {'BranchName': 'Pune'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)

    def test_hr_cannot_add_branch(self):
        self.client.force_login(self.hr)
        response = self.client.post(
            reverse('organization:add_branch'), {'BranchName': 'Goa'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 403)

    def test_branch_with_employees_cannot_be_deleted(self):
        branch = Branch.objects.create(company=self.company, branch_name='Pune')
        self.hr.branch = branch
        self.hr.save()
        response = self.client.delete(reverse('organization:delete_branch', args=[branch.pk]))
        self.assertEqual(response.status_code, 400)
        self.assertTrue(Branch.objects.filter(pk=branch.pk).exists())

    def test_other_company_branch_is_404(self):
        branch = Branch.objects.create(company=self.other_company, branch_name='Delhi')
        response = self.client.put(
            reverse('organization:update_branch', args=[branch.pk]),
            {'BranchName': 'Mine now'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 404)

    def test_count_branches(self):
        Branch.objects.create(company=self.company, branch_name='Pune')
        Branch.objects.create(company=self.other_company, branch_name='Delhi')
        response = self.client.get(reverse('organization:count_branches'))
        self.assertEqual(response.json()['total'], 1)


class DepartmentAndDesignationViewsTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.company = Company.objects.create(name='Acme')
        self.hr = User.objects.create_user(
            email='hr@acme.test', password='secret123', name='HR',
            role=UserRole.HR, company=self.company,
        )
        self.client.force_login(self.hr)

    def test_hr_adds_department(self):
        response = self.client.post(
            reverse('organization:add_department'),
            {'DepartmentName': 'Finance'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['DepartmentName'], 'Finance')

    def test_department_name_required(self):
        response = self.client.post(reverse('organization:add_department'), {}, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['message'], 'DepartmentName is required')

    def test_designation_linked_to_department(self):
        department = Department.objects.create(company=self.company, department_name='Finance')
        response = self.client.post(
            reverse('organization:add_designation'),
            {'DesignationName': 'Accountant', 'DepartmentId': department.pk},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['data']['DepartmentName'], 'Finance')

        listing = self.client.get(reverse('organization:designation_list'), {'DepartmentId': department.pk})
        self.assertEqual(len(listing.json()['data']), 1)

    def test_delete_designation(self):
        designation = Designation.objects.create(company=self.company, designation_name='Clerk')
        response = self.client.delete(reverse('organization:delete_designation', args=[designation.pk]))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Designation.objects.filter(pk=designation.pk).exists())
