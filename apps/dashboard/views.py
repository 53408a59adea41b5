"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Dashboard API views. Monthly chart series, the company
             summary, monthly and annual reports and the report export.
-------------------------------------------------------------------------
"""
from apps.core.api import ApiView, json_response
from apps.core.exceptions import ValidationFailed
from apps.core.exports import tabular_response
from apps.core.utils import to_int, today
from apps.dashboard.services import DashboardService
from apps.users.permissions import StaffRequiredMixin

EXPORT_SECTIONS = ('revenue', 'expenses', 'orders', 'purchases')


class DashboardView(StaffRequiredMixin, ApiView):
    """Base for dashboard endpoints; ``year`` defaults to the current year."""

    def year(self) -> int:
        return to_int(self.request.GET.get('year'), 'year', required=False,
                      minimum=2000, maximum=2100) or today().year

    def month_and_year(self):
        current = today()
        month = to_int(self.request.GET.get('month'), 'month', required=False, minimum=1, maximum=12)
        return month or current.month, self.year()


class RevenueVsExpenseView(DashboardView):

    def get(self, request):
        year = self.year()
        return json_response({
            'success': True,
            'year': year,
            'data': DashboardService.revenue_vs_expense(self.company, year),
        })


class OrderExpenseView(DashboardView):

    def get(self, request):
        year = self.year()
        return json_response({
            'success': True,
            'year': year,
            'data': DashboardService.order_expense(self.company, year),
        })


class ProfitExpenseView(DashboardView):

    def get(self, request):
        year = self.year()
        return json_response({
            'success': True,
            'year': year,
            'data': DashboardService.profit_expense(self.company, year),
        })


class ProfitPayrollView(DashboardView):

    def get(self, request):
        year = self.year()
        return json_response({
            'success': True,
            'year': year,
            'data': DashboardService.profit_payroll(self.company, year),
        })


class DashboardSummaryView(DashboardView):

    def get(self, request):
        return json_response({'success': True, 'data': DashboardService.get_summary(self.company)})


class MonthlyComprehensiveReportView(DashboardView):

    def get(self, request):
        month, year = self.month_and_year()
        return json_response({
            'success': True,
            'data': DashboardService.monthly_report(self.company, year, month),
        })


class AnnualReportView(DashboardView):

    def get(self, request):
        return json_response({
            'success': True,
            'data': DashboardService.annual_report(self.company, self.year()),
        })


class ExportMonthlyReportView(DashboardView):
    """One section of the monthly report as CSV or XLSX."""

    def get(self, request):
        month, year = self.month_and_year()
        section = (request.GET.get('section') or 'revenue').strip().lower()
        if section not in EXPORT_SECTIONS:
            raise ValidationFailed("Invalid section", details={'validSections': list(EXPORT_SECTIONS)})
        sheet, headers, rows = DashboardService.section_rows(self.company, section, year, month)
        return tabular_response(
            request.GET.get('format'), f'{section}_{year}_{month:02d}', sheet, headers, rows
        )
