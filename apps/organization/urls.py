"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL configuration for the organization module.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.organization import views

app_name = 'organization'

urlpatterns = [
    # Branches
    path('addbranch', views.AddBranchView.as_view(), name='add_branch'),
    path('getbranchbycompany', views.BranchListView.as_view(), name='branch_list'),
    path('updatebranch/<int:pk>', views.UpdateBranchView.as_view(), name='update_branch'),
    path('deletebranch/<int:pk>', views.DeleteBranchView.as_view(), name='delete_branch'),
    path('countbranches', views.CountBranchesView.as_view(), name='count_branches'),

    # Departments
    path('adddepartment', views.AddDepartmentView.as_view(), name='add_department'),
    path('getdepartment', views.DepartmentListView.as_view(), name='department_list'),
    path('updatedepartment/<int:pk>', views.UpdateDepartmentView.as_view(), name='update_department'),
    path('deletedepartment/<int:pk>', views.DeleteDepartmentView.as_view(), name='delete_department'),
    path('countdepartment', views.CountDepartmentView.as_view(), name='count_departments'),

    # Designations
    path('add-designation', views.AddDesignationView.as_view(), name='add_designation'),
    path('getdesignationbycompany', views.DesignationListView.as_view(), name='designation_list'),
    path('deletedesignation/<int:pk>', views.DeleteDesignationView.as_view(), name='delete_designation'),
]
