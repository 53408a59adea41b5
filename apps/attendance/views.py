"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: API views for attendance, holidays, leave requests, leave
             balances and the company leave setting.
-------------------------------------------------------------------------
"""
import re

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from apps.attendance.models import Holiday, LeaveRequest
from apps.attendance.services import AttendanceService, LeaveService
from apps.core.api import ApiView, json_response
from apps.core.exceptions import DuplicateRecordException, UnauthorizedRoleException, ValidationFailed
from apps.core.utils import month_bounds, month_key, parse_month_key, to_date, to_int
from apps.users.models import UserRole
from apps.users.permissions import AdminOrHRRequiredMixin, StaffRequiredMixin
from apps.users.views import company_users

User = get_user_model()

DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')


class EmployeeScopedView(ApiView):
    """
    Base for views where Employees may only address their own records.

    Other roles may name any user of the company through ``UserId``.
    """

    def target_user(self, required: bool = True):
        user_id = self.param('UserId', 'userId')
        caller = self.request.user
        if caller.is_employee():
            if user_id not in (None, '') and str(user_id) != str(caller.pk):
                raise UnauthorizedRoleException(
                    "Access denied. You can only view your own records.",
                    details={'userRole': caller.role},
                )
            return caller
        if user_id in (None, ''):
            if required:
                raise ValidationFailed("UserId is required")
            return caller
        return self.get_tenant_object(User, user_id, "User not found", queryset=company_users(self.company))


# Attendance

class MarkAttendanceView(AdminOrHRRequiredMixin, ApiView):
    """
    Mark attendance for one day.

    Body: ``{"Date": "YYYY-MM-DD", "Employees": [{"UserId": 1, "Status": "Present"}]}``
    """

    def post(self, request):
        raw_date = str(self.require('Date', message="Date is required")).strip()
        if not DATE_PATTERN.match(raw_date):
            raise ValidationFailed("Invalid date format. Expected YYYY-MM-DD")
        day = to_date(raw_date, 'Date')
        entries = self.data.get('Employees')
        if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
            raise ValidationFailed("Employees must be a list of {UserId, Status}")

        updated = AttendanceService.mark(self.company, request.user, day, entries)
        return json_response({
            'success': True,
            'message': 'Attendance marked successfully',
            'date': raw_date,
            'employeesUpdated': updated,
        })


class AttendanceReportView(StaffRequiredMixin, ApiView):
    """Monthly grid of every Employee: ``[{UserId, Name, Attendance: {day: status}}]``."""

    def get(self, request):
        year, month = parse_month_key(request.GET.get('Month'))
        grid = AttendanceService.month_map(self.company, year, month)
        employees = company_users(self.company).filter(role=UserRole.EMPLOYEE).order_by('name')
        data = [
            {
                'UserId': employee.pk,
                'Name': employee.name,
                'EmployeeCode': employee.employee_code,
                'Attendance': grid.get(employee.pk, {}),
            }
            for employee in employees
        ]
        return json_response({'success': True, 'month': month_key(year, month), 'data': data})


class EmployeeAttendanceView(EmployeeScopedView):

    def get(self, request):
        employee = self.target_user()
        year, month = parse_month_key(request.GET.get('Month'))
        grid = AttendanceService.month_map(self.company, year, month, user=employee)
        return json_response({'success': True, 'data': grid.get(employee.pk, {})})


# Holidays

class AddHolidayView(AdminOrHRRequiredMixin, ApiView):

    def post(self, request):
        day = to_date(self.require('Date', message="Date and Name are required"), 'Date')
        name = str(self.require('Name', message="Date and Name are required")).strip()
        try:
            with transaction.atomic():
                holiday = Holiday.objects.create(company=self.company, date=day, name=name)
        except IntegrityError:
            raise DuplicateRecordException("Holiday already exists for this date")
        return json_response({'success': True, 'data': holiday.to_dict()}, status=201)


class HolidayListView(ApiView):
    """Holidays of the company, optionally limited to one ``Month`` (YYYY-MM)."""

    def get(self, request):
        holidays = Holiday.get_tenant_filtered_queryset(self.company)
        if request.GET.get('Month'):
            start, end = month_bounds(*parse_month_key(request.GET.get('Month')))
            holidays = holidays.filter(date__range=(start, end))
        return json_response({'success': True, 'data': self.serialize(holidays)})


class UpdateHolidayView(AdminOrHRRequiredMixin, ApiView):

    def put(self, request):
        holiday = self.get_tenant_object(
            Holiday, self.require('HolidayId', 'id', message="HolidayId required"), "Holiday not found"
        )
        if self.data.get('Name'):
            holiday.name = str(self.data['Name']).strip()
        if self.data.get('Date'):
            holiday.date = to_date(self.data['Date'], 'Date')
        try:
            with transaction.atomic():
                holiday.save()
        except IntegrityError:
            raise DuplicateRecordException("Holiday already exists for this date")
        return json_response({'success': True, 'data': holiday.to_dict()})


class DeleteHolidayView(AdminOrHRRequiredMixin, ApiView):

    def delete(self, request, pk):
        holiday = self.get_tenant_object(Holiday, pk, "Holiday not found")
        holiday.delete()
        return json_response({'success': True, 'message': 'Holiday deleted'})


# Leave

class ApplyLeaveView(EmployeeScopedView):
    """Employees apply for themselves. Admin and HR may apply for anyone."""

    def post(self, request):
        employee = self.target_user(required=False)
        leave = LeaveService.apply(self.company, employee, self.data)
        return json_response({'success': True, 'data': leave.to_dict()}, status=201)


class LeaveListView(AdminOrHRRequiredMixin, ApiView):

    def get(self, request):
        leaves = LeaveRequest.get_tenant_filtered_queryset(self.company).select_related('user', 'approved_by')
        status = request.GET.get('Status')
        if status:
            leaves = leaves.filter(status=status)
        return json_response({'success': True, 'data': self.serialize(leaves)})


class UpdateLeaveStatusView(AdminOrHRRequiredMixin, ApiView):

    def put(self, request):
        leave = self.get_tenant_object(
            LeaveRequest,
            self.require('RequestId', 'id', message="RequestId is required"),
            "Leave not found",
        )
        status = self.require('Status')
        leave = LeaveService.decide(
            leave, request.user, status, str(self.param('RejectionReason', default='')).strip()
        )
        return json_response({
            'success': True,
            'message': f"Leave {leave.status}",
            'data': leave.to_dict(),
        })


class LeaveBalanceView(EmployeeScopedView):

    def get(self, request):
        employee = self.target_user()
        year, month = parse_month_key(request.GET.get('Month'))
        balance = LeaveService.get_or_init_balance(self.company, employee, month_key(year, month))
        return json_response({'success': True, 'data': balance.to_dict()})


class LeavesByEmployeeView(EmployeeScopedView):

    def get(self, request):
        employee = self.target_user()
        leaves = (
            LeaveRequest.get_tenant_filtered_queryset(self.company)
            .filter(user=employee)
            .select_related('user', 'approved_by')
        )
        data = self.serialize(leaves)
        return json_response({'success': True, 'count': len(data), 'data': data})

    def post(self, request):
        return self.get(request)


class LeaveSettingsView(ApiView):

    def get(self, request):
        return json_response({
            'success': True,
            'data': {
                'CompanyId': self.company.pk if self.company else None,
                'DefaultMonthlyPaidLeaves': LeaveService.allocated_for(self.company),
            },
        })


class UpdateLeaveSettingsView(AdminOrHRRequiredMixin, ApiView):

    def put(self, request):
        value = to_int(
            self.require('DefaultMonthlyPaidLeaves'), 'DefaultMonthlyPaidLeaves', minimum=0, maximum=31
        )
        setting = LeaveService.update_setting(self.company, value)
        return json_response({'success': True, 'data': setting.to_dict()})

    def post(self, request):
        return self.put(request)
