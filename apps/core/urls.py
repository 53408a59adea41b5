"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: URL configuration for registration, auth and activity feed.
-------------------------------------------------------------------------
"""
from django.urls import path

from apps.core import views

app_name = 'core'

urlpatterns = [
    path('registeradmin', views.RegisterAdminView.as_view(), name='register_admin'),
    path('login', views.LoginView.as_view(), name='login'),
    path('adminlogin', views.LoginView.as_view(), name='admin_login'),
    path('fetchdetails', views.FetchDetailsView.as_view(), name='fetch_details'),
    path('updatecompany/<int:pk>', views.UpdateCompanyView.as_view(), name='update_company'),
    path('changepassword', views.ChangePasswordView.as_view(), name='change_password'),
    path('recentactivities', views.RecentActivitiesView.as_view(), name='recent_activities'),
]
