"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: API views for salary heads, salary settings and their
             approval workflow, tax slabs, payroll runs, payroll analytics,
             payroll exports and salary slip downloads.
-------------------------------------------------------------------------
"""
import logging

from django.contrib.auth import get_user_model

from apps.core.api import ApiView, json_response
from apps.core.exceptions import ResourceNotFound, UnauthorizedRoleException, ValidationFailed
from apps.core.exports import csv_response, timestamped, xlsx_response
from apps.core.utils import to_int, today
from apps.payroll.calculator import json_lines, normalize_month
from apps.payroll.models import (
    RequestStatus,
    SalaryConfigurationRequest,
    SalaryHead,
    SalarySetting,
    SalarySlip,
    SalarySlipRequest,
    TaxSlab,
    format_month,
)
from apps.payroll.reports import PayrollReports, company_slips
from apps.payroll.services import (
    PayrollService,
    SalaryHeadService,
    SalarySettingService,
    SlipRequestService,
    TaxSlabService,
)
from apps.payroll.words import amount_in_words
from apps.users.permissions import (
    AdminOrCARequiredMixin,
    AdminOrHRRequiredMixin,
    AdminRequiredMixin,
    HRRequiredMixin,
    StaffRequiredMixin,
)
from apps.users.views import company_users

logger = logging.getLogger(__name__)
User = get_user_model()

NOT_AVAILABLE = 'N/A'


def text_or_na(value) -> str:
    return str(value) if value not in (None, '') else NOT_AVAILABLE


class PayrollView(ApiView):
    """Base view with the employee and month lookups shared by payroll endpoints."""

    def employee(self, required: bool = True):
        """
        Resolve ``EmployeeID`` inside the company.

        Employees may only address themselves.
        """
        employee_id = self.param('EmployeeID', 'employeeId', 'EmployeeId')
        caller = self.request.user
        if caller.is_employee():
            if employee_id not in (None, '') and str(employee_id) != str(caller.pk):
                raise UnauthorizedRoleException("Access denied. You can only view your own records.")
            return caller
        if employee_id in (None, ''):
            if required:
                raise ValidationFailed("EmployeeID is required")
            return None
        return self.get_tenant_object(User, employee_id, "Employee not found",
                                      queryset=company_users(self.company))

    def month(self, required: bool = True):
        raw = self.param('Month', 'month')
        if raw in (None, '') and not required:
            return None
        return normalize_month(raw)


# Salary heads

class AddSalaryHeadView(AdminOrHRRequiredMixin, ApiView):

    def post(self, request):
        head = SalaryHeadService.create(self.company, self.data)
        return json_response({
            'success': True,
            'message': 'Salary head added successfully',
            'data': head.to_dict(),
        }, status=201)


class SalaryHeadListView(AdminOrHRRequiredMixin, ApiView):

    def get(self, request):
        heads = SalaryHead.get_tenant_filtered_queryset(self.company)
        data = self.serialize(heads)
        return json_response({'success': True, 'count': len(data), 'data': data})


class DeleteSalaryHeadView(AdminOrHRRequiredMixin, ApiView):

    def delete(self, request):
        head = self.get_tenant_object(SalaryHead, self.require('id', message="Salary head id is required"),
                                      "Salary head not found")
        SalaryHeadService.delete(head)
        return json_response({'success': True, 'message': 'Salary head deleted successfully'})


# Salary settings

class AddSalarySettingView(AdminOrHRRequiredMixin, ApiView):
    """
    Save an employee's salary structure.

    Admin writes the setting directly; HR submits it for Admin approval.
    """

    def post(self, request):
        result = SalarySettingService.submit(self.company, request.user, self.data)
        if 'request' in result:
            return json_response({
                'success': True,
                'message': 'Salary configuration submitted for Admin approval',
                'data': result['request'].to_dict(),
            }, status=201)
        created = result['created']
        return json_response({
            'success': True,
            'message': 'Salary settings saved successfully' if created else 'Salary settings updated successfully',
            'data': result['setting'].to_dict(),
        }, status=201 if created else 200)


class SalarySettingListView(PayrollView):

    def get(self, request):
        settings_qs = (
            SalarySetting.get_tenant_filtered_queryset(self.company)
            .select_related('employee')
            .prefetch_related('lines__salary_head')
        )
        employee = self.employee(required=False)
        if employee is not None:
            settings_qs = settings_qs.filter(employee=employee)
        data = self.serialize(settings_qs)
        if not data:
            raise ResourceNotFound("No salary settings found")
        return json_response({'success': True, 'count': len(data), 'data': data})


class DeleteSalarySettingView(AdminRequiredMixin, ApiView):

    def delete(self, request):
        setting = self.get_tenant_object(SalarySetting, self.require('id', message="Salary setting id is required"),
                                         "Salary setting not found")
        setting.delete()
        return json_response({'success': True, 'message': 'Salary setting deleted successfully'})


class SalaryRequestListView(AdminRequiredMixin, ApiView):

    def get(self, request):
        requests = (
            SalaryConfigurationRequest.get_tenant_filtered_queryset(self.company)
            .filter(status=RequestStatus.PENDING)
            .select_related('employee', 'requested_by')
        )
        data = self.serialize(requests)
        return json_response({'success': True, 'count': len(data), 'data': data})


class ApproveSalaryRequestView(AdminRequiredMixin, ApiView):

    def post(self, request):
        request_obj = self.get_tenant_object(
            SalaryConfigurationRequest,
            self.require('id', 'RequestId', 'requestId', message="Request id is required"),
            "Salary request not found",
        )
        setting = SalarySettingService.approve(request_obj, request.user)
        return json_response({
            'success': True,
            'message': 'Salary request approved',
            'data': setting.to_dict(),
        })


class RejectSalaryRequestView(AdminRequiredMixin, ApiView):

    def post(self, request):
        request_obj = self.get_tenant_object(
            SalaryConfigurationRequest,
            self.require('id', 'RequestId', 'requestId', message="Request id is required"),
            "Salary request not found",
        )
        reason = str(self.param('RejectionReason', 'rejectionReason', 'reason', default='')).strip()
        request_obj = SalarySettingService.reject(request_obj, request.user, reason)
        return json_response({
            'success': True,
            'message': 'Salary request rejected',
            'data': request_obj.to_dict(),
        })


class HRNotificationsView(HRRequiredMixin, ApiView):
    """The caller's resolved salary requests not yet read."""

    def get(self, request):
        notifications = (
            SalaryConfigurationRequest.get_tenant_filtered_queryset(self.company)
            .filter(requested_by=request.user, is_read=False)
            .exclude(status=RequestStatus.PENDING)
            .select_related('employee', 'requested_by')
        )
        data = self.serialize(notifications)
        return json_response({'success': True, 'count': len(data), 'data': data})


class MarkNotificationReadView(HRRequiredMixin, ApiView):

    def put(self, request):
        notification = self.get_tenant_object(
            SalaryConfigurationRequest,
            self.require('id', message="Notification id is required"),
            "Notification not found",
            queryset=SalaryConfigurationRequest.get_tenant_filtered_queryset(self.company).filter(
                requested_by=request.user
            ),
        )
        notification.is_read = True
        notification.save(update_fields=['is_read', 'updated_at'])
        return json_response({'success': True, 'message': 'Notification marked as read'})


# Tax slabs

class AddTaxSlabView(AdminOrCARequiredMixin, ApiView):

    def post(self, request):
        slab = TaxSlabService.apply(TaxSlab(company=self.company), self.data)
        return json_response({
            'success': True,
            'message': 'Tax slab added successfully',
            'data': slab.to_dict(),
        }, status=201)


class TaxSlabListView(AdminOrCARequiredMixin, ApiView):

    def get(self, request):
        slabs = TaxSlab.get_tenant_filtered_queryset(self.company).order_by('-effective_from', 'min_income')
        data = self.serialize(slabs)
        return json_response({'success': True, 'count': len(data), 'data': data})


class UpdateTaxSlabView(AdminOrCARequiredMixin, ApiView):

    def put(self, request, pk):
        slab = self.get_tenant_object(TaxSlab, pk, "Tax slab not found")
        slab = TaxSlabService.apply(slab, self.data, partial=True)
        return json_response({
            'success': True,
            'message': 'Tax slab updated successfully',
            'data': slab.to_dict(),
        })


class DeleteTaxSlabView(AdminOrCARequiredMixin, ApiView):

    def delete(self, request, pk):
        slab = self.get_tenant_object(TaxSlab, pk, "Tax slab not found")
        slab.delete()
        return json_response({'success': True, 'message': 'Tax slab deleted successfully'})


# Payroll runs

class CalculateSalaryView(AdminOrHRRequiredMixin, PayrollView):

    def post(self, request):
        slip = PayrollService.generate(self.company, self.employee(), self.month(), request.user)
        return json_response({
            'success': True,
            'message': 'Salary calculated successfully',
            'data': slip.to_dict(),
        }, status=201)


class PreviewSalaryView(AdminOrHRRequiredMixin, PayrollView):
    """Compute a slip without saving it."""

    def post(self, request):
        employee = self.employee()
        result = PayrollService.preview(self.company, employee, self.month())
        return json_response({
            'success': True,
            'data': {
                'EmployeeID': employee.pk,
                'EmployeeName': employee.name,
                'Month': result['month'],
                'Earnings': json_lines(result['earnings']),
                'Deductions': json_lines(result['deductions']),
                'totalEarnings': result['total_earnings'],
                'totalDeductions': result['total_deductions'],
                'grossSalary': result['gross_salary'],
                'TaxAmount': result['tax_amount'],
                'netSalary': result['net_salary'],
                'attendanceSummary': result['attendance_summary'],
            },
        })


class CalculateSalaryForAllView(AdminOrHRRequiredMixin, PayrollView):

    def post(self, request):
        month = self.month()
        result = PayrollService.generate_all(self.company, month, request.user)
        return json_response({
            'success': True,
            'message': f"Payroll processed for {format_month(month)}",
            **result,
        })


class SalaryDetailsView(PayrollView):
    """Stored slips for a month, optionally for one employee."""

    def get(self, request):
        slips = company_slips(self.company, self.month()).select_related('employee')
        employee = self.employee(required=False)
        if employee is not None:
            slips = slips.filter(employee=employee)
        data = self.serialize(slips)
        return json_response({'success': True, 'count': len(data), 'data': data})


# Analytics

class SalaryDistributionView(StaffRequiredMixin, PayrollView):

    def post(self, request):
        distribution = PayrollReports.distribution(self.company, self.month(required=False))
        if distribution is None:
            raise ResourceNotFound("No salary data found")
        return json_response({'success': True, 'data': distribution})


class DepartmentWiseSalaryView(StaffRequiredMixin, PayrollView):

    def get(self, request):
        data = PayrollReports.department_wise(self.company, self.month(required=False))
        return json_response({'success': True, 'data': data})


class PayrollTrendView(StaffRequiredMixin, ApiView):

    def get(self, request):
        return json_response({'success': True, 'data': PayrollReports.trend(self.company)})


class HighestPaidDepartmentView(StaffRequiredMixin, PayrollView):

    def get(self, request):
        department = PayrollReports.highest_paid_department(self.company, self.month(required=False))
        return json_response({'success': True, 'data': department})


class AverageSalaryView(StaffRequiredMixin, PayrollView):

    def get(self, request):
        average = PayrollReports.average_salary(self.company, self.month(required=False))
        if average is None:
            raise ResourceNotFound("No salary data found")
        return json_response({'success': True, **average})


class PayrollByBranchView(StaffRequiredMixin, ApiView):

    def get(self, request):
        current = today()
        month = to_int(request.GET.get('month'), 'month', required=False, minimum=1, maximum=12) or current.month
        year = to_int(request.GET.get('year'), 'year', required=False, minimum=2000, maximum=2100) or current.year
        return json_response({'success': True, **PayrollReports.by_branch(self.company, year, month)})


class PayrollHistoryView(StaffRequiredMixin, ApiView):

    def get(self, request):
        year = to_int(request.GET.get('year'), 'year', required=False, minimum=2000, maximum=2100) or today().year
        return json_response({'success': True, 'year': year, 'data': PayrollReports.history(self.company, year)})


# Exports

class MonthlySalaryExportMixin:

    HEADERS = [
        'Employee Name', 'Email', 'Department', 'Designation',
        'Bank Name', 'Account Holder', 'Account Number', 'IFSC Code', 'Bank Branch',
        'Gross Salary', 'Total Deductions', 'Tax Amount', 'Net Payable',
    ]

    def export_rows(self, month: str):
        slips = company_slips(self.company, month).select_related(
            'employee__department', 'employee__designation'
        )
        if not slips.exists():
            raise ResourceNotFound("No salary slips found for this month")
        rows = []
        for slip in slips:
            employee = slip.employee
            rows.append([
                text_or_na(employee.name),
                text_or_na(employee.email),
                text_or_na(employee.department.department_name if employee.department else None),
                text_or_na(employee.designation.designation_name if employee.designation else None),
                text_or_na(employee.bank_name),
                text_or_na(employee.account_holder_name),
                text_or_na(employee.account_number),
                text_or_na(employee.ifsc_code),
                text_or_na(employee.bank_branch_name),
                float(slip.gross_salary),
                float(slip.total_deductions),
                float(slip.tax_amount),
                float(slip.net_salary),
            ])
        return rows


class ExportMonthlySalaryCSVView(AdminOrHRRequiredMixin, MonthlySalaryExportMixin, PayrollView):

    def post(self, request):
        month = self.month()
        rows = self.export_rows(month)
        logger.info("Salary CSV for %s exported by %s", month, request.user.email)
        return csv_response(timestamped(f'salary_{month}', 'csv'), self.HEADERS, rows)


class ExportMonthlySalaryXLSXView(AdminOrHRRequiredMixin, MonthlySalaryExportMixin, PayrollView):

    def get(self, request):
        month = self.month()
        rows = self.export_rows(month)
        logger.info("Salary workbook for %s exported by %s", month, request.user.email)
        return xlsx_response(timestamped(f'salary_{month}', 'xlsx'), f'Salary {month}', self.HEADERS, rows)


# Salary slip requests and downloads

class RequestSalarySlipView(PayrollView):

    def post(self, request):
        slip_request = SlipRequestService.request(self.company, request.user, self.month())
        return json_response({
            'success': True,
            'message': 'Salary slip download requested',
            'data': slip_request.to_dict(),
        }, status=201)


class SalarySlipRequestListView(PayrollView):
    """Employees see their own requests; staff filter by status, EmployeeID and Month."""

    def get(self, request):
        requests = SalarySlipRequest.get_tenant_filtered_queryset(self.company).select_related('employee')
        employee = self.employee(required=False)
        if employee is not None:
            requests = requests.filter(employee=employee)
        status = request.GET.get('status')
        if status:
            requests = requests.filter(status=status)
        month = self.month(required=False)
        if month:
            requests = requests.filter(month=month)
        data = self.serialize(requests)
        return json_response({'success': True, 'count': len(data), 'data': data})


class UpdateSalarySlipRequestView(AdminOrHRRequiredMixin, ApiView):

    def put(self, request):
        slip_request = self.get_tenant_object(
            SalarySlipRequest,
            self.require('id', 'requestId', 'RequestId', message="Request id is required"),
            "Salary slip request not found",
        )
        slip_request = SlipRequestService.decide(
            slip_request,
            request.user,
            str(self.param('status', 'Status', default='')).strip().lower(),
            str(self.param('rejectionReason', 'RejectionReason', default='')).strip(),
        )
        return json_response({
            'success': True,
            'message': f"Request {slip_request.status}",
            'data': slip_request.to_dict(),
        })


class GenerateSalarySlipView(PayrollView):
    """
    Salary slip document for one employee and month.

    Employees may only download their own slip, once HR has approved
    their download request.
    """

    def post(self, request):
        employee_id = self.param('EmployeeID', 'employeeId', 'EmployeeId')
        if request.user.is_employee() and employee_id not in (None, '') \
                and str(employee_id) != str(request.user.pk):
            raise UnauthorizedRoleException("You can only download your own salary slip")
        employee = self.employee()
        month = self.month()

        slip = (
            SalarySlip.get_tenant_filtered_queryset(self.company)
            .select_related('employee__department', 'employee__designation', 'employee__branch')
            .filter(employee=employee, month=month)
            .first()
        )
        if slip is None:
            raise ResourceNotFound("Salary slip not found for this month")
        if request.user.is_employee():
            SlipRequestService.check_download(employee, month)

        company = self.company
        return json_response({
            'success': True,
            'data': {
                'company': {
                    'name': company.name,
                    'address': text_or_na(company.address),
                    'email': text_or_na(company.email),
                    'phone': text_or_na(company.phone),
                    'gstin': text_or_na(company.gstin),
                },
                'employee': {
                    'id': employee.pk,
                    'name': employee.name,
                    'employeeCode': text_or_na(employee.employee_code),
                    'email': employee.email,
                    'department': text_or_na(employee.department.department_name if employee.department else None),
                    'designation': text_or_na(
                        employee.designation.designation_name if employee.designation else None
                    ),
                    'branch': text_or_na(employee.branch.branch_name if employee.branch else None),
                    'joiningDate': employee.joining_date.isoformat() if employee.joining_date else NOT_AVAILABLE,
                    'panNumber': text_or_na(employee.pan_number),
                },
                'bankDetails': {key: text_or_na(value) for key, value in employee.bank_details().items()},
                'month': slip.month_label,
                'earnings': slip.earnings,
                'deductions': slip.deductions,
                'totalEarnings': slip.total_earnings,
                'totalDeductions': slip.total_deductions,
                'grossSalary': slip.gross_salary,
                'taxAmount': slip.tax_amount,
                'netSalary': slip.net_salary,
                'netSalaryInWords': amount_in_words(slip.net_salary),
                'attendanceSummary': slip.attendance_summary,
            },
        })
