"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL configuration for employee management.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.users import views

app_name = 'users'

urlpatterns = [
    path('adduser', views.AddUserView.as_view(), name='add_user'),
    path('getallusers', views.UserListView.as_view(), name='user_list'),
    path('getuserbyid/<int:pk>', views.UserDetailView.as_view(), name='user_detail'),
    path('updateuser/<int:pk>', views.UpdateUserView.as_view(), name='update_user'),
    path('deleteuser/<int:pk>', views.DeleteUserView.as_view(), name='delete_user'),
    path('countemployees', views.CountEmployeesView.as_view(), name='count_employees'),
    path('countemployeesbydepartment', views.CountEmployeesByDepartmentView.as_view(),
         name='count_employees_by_department'),
    path('hr/profile', views.HRProfileView.as_view(), name='hr_profile'),
    path('hr/update-profile', views.HRUpdateProfileView.as_view(), name='hr_update_profile'),
    path('employee/<int:pk>', views.EmployeeInfoView.as_view(), name='employee_info'),
    path('export-users-csv', views.ExportUsersCSVView.as_view(), name='export_users_csv'),
]
