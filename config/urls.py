"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Root URL configuration. Every app's endpoints live under
             /api/; the Django admin under /admin/.
-------------------------------------------------------------------------
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('apps.core.urls')),
    path('api/', include('apps.users.urls')),
    path('api/', include('apps.organization.urls')),
    path('api/', include('apps.sales.urls')),
    path('api/', include('apps.expenditure.urls')),
    path('api/', include('apps.revenue.urls')),
    path('api/', include('apps.attendance.urls')),
    path('api/', include('apps.payroll.urls')),
    path('api/', include('apps.dashboard.urls')),
]
