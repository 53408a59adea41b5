"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Payroll business rules. Salary heads, salary settings and
             their HR approval workflow, tax slabs, slip generation and
             slip download requests.
-------------------------------------------------------------------------
"""
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.attendance.models import Attendance, Holiday
from apps.core.exceptions import (
    DuplicateRecordException,
    ResourceNotFound,
    UnauthorizedRoleException,
    ValidationFailed,
    WorkflowTransitionException,
)
from apps.core.services import ActivityService
from apps.core.utils import money, month_bounds, to_bool, to_date, to_decimal
from apps.expenditure.services import ExpenseService
from apps.payroll.calculator import SalaryCalculator, json_lines
from apps.payroll.logging import PayrollLogger
from apps.payroll.models import (
    HeadMethod,
    HeadType,
    RequestStatus,
    SalaryConfigurationRequest,
    SalaryHead,
    SalarySetting,
    SalarySettingHead,
    SalarySlip,
    SalarySlipRequest,
    SlipRequestStatus,
    TaxSlab,
)
from apps.users.models import UserRole

User = get_user_model()

ZERO = Decimal('0.00')


class SalaryHeadService:

    @staticmethod
    def create(company, data: Dict) -> SalaryHead:
        title = str(data.get('SalaryHeadsTitle') or data.get('Title') or '').strip()
        short_name = str(data.get('ShortName') or '').strip()
        if not title or not short_name:
            raise ValidationFailed("SalaryHeadsTitle and ShortName are required")
        head_type = data.get('SalaryHeadsType') or HeadType.EARNINGS
        if head_type not in HeadType.values:
            raise ValidationFailed("Invalid SalaryHeadsType", details={'validTypes': list(HeadType.values)})
        method = data.get('SalaryCalculateMethod') or HeadMethod.FIXED
        if method not in HeadMethod.values:
            raise ValidationFailed("Invalid SalaryCalculateMethod", details={'validMethods': list(HeadMethod.values)})

        if SalaryHead.get_tenant_filtered_queryset(company).filter(short_name__iexact=short_name).exists():
            raise DuplicateRecordException(f"Salary head with short name '{short_name}' already exists")
        return SalaryHead.objects.create(
            company=company,
            title=title,
            short_name=short_name,
            head_type=head_type,
            method=method,
            depend_on=str(data.get('DependOn') or '').strip(),
        )

    @staticmethod
    def delete(head: SalaryHead) -> None:
        if head.setting_lines.exists():
            raise ValidationFailed("Salary head is in use by salary settings and cannot be deleted")
        pending = SalaryConfigurationRequest.get_tenant_filtered_queryset(head.company).filter(
            status=RequestStatus.PENDING
        )
        if any(head.pk in request_obj.head_ids() for request_obj in pending):
            raise ValidationFailed("Salary head is used by a pending salary request and cannot be deleted")
        head.delete()


class SalarySettingService:
    """
    Salary settings are written directly by Admin. HR submissions become
    SalaryConfigurationRequests that an Admin approves or rejects.
    """

    @staticmethod
    def build_lines(company, heads_payload) -> List[Dict]:
        """
        Validate submitted heads and derive percentage-based values.

        The basic line is the one with percentage 0; every other line
        gets ``basic * percentage / 100``.

        Returns:
            ``[{"SalaryHeadId": id, "applicableValue": float|None, "percentage": float}]``
        """
        if not isinstance(heads_payload, list) or not heads_payload:
            raise ValidationFailed("SalaryHeads are required")

        heads = SalaryHead.get_tenant_filtered_queryset(company)
        parsed = []
        for entry in heads_payload:
            if not isinstance(entry, dict):
                raise ValidationFailed("Each salary head must be an object")
            head_id = entry.get('SalaryHeadId')
            if isinstance(head_id, dict):
                head_id = head_id.get('id')
            try:
                head = heads.get(pk=int(head_id))
            except (SalaryHead.DoesNotExist, TypeError, ValueError):
                raise ResourceNotFound(f"Salary head {head_id} not found")
            percentage = to_decimal(entry.get('percentage'), 'percentage', required=False) or ZERO
            if percentage < 0 or percentage > 100:
                raise ValidationFailed("percentage must be between 0 and 100")
            value = to_decimal(entry.get('applicableValue'), 'applicableValue', required=False)
            parsed.append((head, percentage, value))

        basic = next((item for item in parsed if item[1] == 0), None)
        if basic is None or not basic[2]:
            raise ValidationFailed("Basic salary must be entered before percentage-based heads")
        basic_value = money(basic[2])

        lines = []
        for head, percentage, value in parsed:
            if percentage != 0:
                value = money(basic_value * percentage / Decimal('100'))
            lines.append({
                'SalaryHeadId': head.pk,
                'applicableValue': float(money(value)) if value is not None else None,
                'percentage': float(percentage),
            })
        return lines

    @staticmethod
    def _comparable(lines) -> List[Tuple]:
        def as_decimal(value):
            return money(value) if value is not None else None

        return sorted(
            (int(line['SalaryHeadId']), as_decimal(line['applicableValue']), money(line['percentage']))
            for line in lines
        )

    @staticmethod
    def setting_lines(setting: SalarySetting) -> List[Dict]:
        return [
            {
                'SalaryHeadId': line.salary_head_id,
                'applicableValue': line.applicable_value,
                'percentage': line.percentage,
            }
            for line in setting.lines.all()
        ]

    @staticmethod
    def has_changes(setting: SalarySetting, lines: List[Dict], is_tax_applicable: bool) -> bool:
        if setting.is_tax_applicable != is_tax_applicable:
            return True
        return (SalarySettingService._comparable(SalarySettingService.setting_lines(setting))
                != SalarySettingService._comparable(lines))

    @staticmethod
    @transaction.atomic
    def apply(company, employee, lines: List[Dict], effect_from, is_tax_applicable: bool,
              user) -> Tuple[SalarySetting, bool]:
        """Create or replace the employee's salary setting."""
        setting, created = SalarySetting.objects.get_or_create(
            company=company,
            employee=employee,
            defaults={'effect_from': effect_from, 'is_tax_applicable': is_tax_applicable},
        )
        if not created:
            if effect_from:
                setting.effect_from = effect_from
            setting.is_tax_applicable = is_tax_applicable
            setting.save()
            setting.lines.all().delete()
        SalarySettingHead.objects.bulk_create([
            SalarySettingHead(
                setting=setting,
                salary_head_id=line['SalaryHeadId'],
                applicable_value=(
                    money(line['applicableValue']) if line['applicableValue'] is not None else None
                ),
                percentage=money(line['percentage']),
            )
            for line in lines
        ])
        PayrollLogger.log_setting_saved(setting, user, created)
        return setting, created

    @staticmethod
    def submit(company, actor, data: Dict) -> Dict:
        """
        Handle a salary setting submission by Admin or HR.

        Returns:
            ``{"setting": ..., "created": bool}`` for Admin, or
            ``{"request": ...}`` for HR.
        """
        employee_id = data.get('EmployeeID')
        try:
            employee = User.objects.get(company=company, pk=int(employee_id))
        except (User.DoesNotExist, TypeError, ValueError):
            raise ResourceNotFound("Employee not found")
        lines = SalarySettingService.build_lines(company, data.get('SalaryHeads'))
        effect_from = to_date(data.get('EffectFrom'), 'EffectFrom', required=False)
        is_tax_applicable = to_bool(data.get('isTaxApplicable'))

        if actor.role == UserRole.HR:
            existing = SalarySetting.get_tenant_filtered_queryset(company).filter(employee=employee).first()
            if existing and not SalarySettingService.has_changes(existing, lines, is_tax_applicable):
                raise ValidationFailed("No changes detected in salary configuration.")
            request_obj = SalaryConfigurationRequest.objects.create(
                company=company,
                employee=employee,
                requested_by=actor,
                heads=lines,
                effect_from=effect_from,
                is_tax_applicable=is_tax_applicable,
            )
            PayrollLogger.log_request_submitted(request_obj, actor)
            return {'request': request_obj}

        setting, created = SalarySettingService.apply(
            company, employee, lines, effect_from, is_tax_applicable, actor
        )
        return {'setting': setting, 'created': created}

    @staticmethod
    def _ensure_pending(request_obj: SalaryConfigurationRequest) -> None:
        if request_obj.status != RequestStatus.PENDING:
            raise WorkflowTransitionException(f"Request already {request_obj.status}")

    @staticmethod
    @transaction.atomic
    def approve(request_obj: SalaryConfigurationRequest, reviewer) -> SalarySetting:
        SalarySettingService._ensure_pending(request_obj)
        head_ids = request_obj.head_ids()
        known = set(
            SalaryHead.get_tenant_filtered_queryset(request_obj.company)
            .filter(pk__in=head_ids)
            .values_list('pk', flat=True)
        )
        missing = sorted(head_ids - known)
        if missing:
            raise ValidationFailed(
                "Salary heads in this request no longer exist",
                details={'missingSalaryHeadIds': missing},
            )
        setting, _ = SalarySettingService.apply(
            request_obj.company, request_obj.employee, request_obj.heads,
            request_obj.effect_from, request_obj.is_tax_applicable, reviewer,
        )
        request_obj.status = RequestStatus.APPROVED
        request_obj.reviewed_by = reviewer
        request_obj.save()
        PayrollLogger.log_request_reviewed(request_obj, reviewer)
        return setting

    @staticmethod
    def reject(request_obj: SalaryConfigurationRequest, reviewer, reason: str) -> SalaryConfigurationRequest:
        SalarySettingService._ensure_pending(request_obj)
        request_obj.status = RequestStatus.REJECTED
        request_obj.rejection_reason = reason
        request_obj.reviewed_by = reviewer
        request_obj.save()
        PayrollLogger.log_request_reviewed(request_obj, reviewer)
        return request_obj


class TaxSlabService:

    @staticmethod
    def apply(slab: TaxSlab, data: Dict, partial: bool = False) -> TaxSlab:
        if not partial or 'minIncome' in data:
            slab.min_income = money(to_decimal(data.get('minIncome'), 'minIncome'))
            if slab.min_income < 0:
                raise ValidationFailed("minIncome cannot be negative")
        if not partial or 'maxIncome' in data:
            max_income = to_decimal(data.get('maxIncome'), 'maxIncome', required=False)
            slab.max_income = money(max_income) if max_income is not None else None
        if not partial or 'taxRate' in data:
            slab.tax_rate = money(to_decimal(data.get('taxRate'), 'taxRate'))
        if not partial or 'effectiveFrom' in data:
            slab.effective_from = to_date(data.get('effectiveFrom'), 'effectiveFrom')

        if slab.max_income is not None and slab.min_income >= slab.max_income:
            raise ValidationFailed("minIncome must be less than maxIncome")
        if not Decimal('0') <= slab.tax_rate <= Decimal('100'):
            raise ValidationFailed("taxRate must be between 0 and 100")
        slab.save()
        return slab

    @staticmethod
    def effective_slabs(company, year: int, month: int) -> List[TaxSlab]:
        first_day, _ = month_bounds(year, month)
        return list(
            TaxSlab.get_tenant_filtered_queryset(company)
            .filter(effective_from__lte=first_day)
            .order_by('min_income')
        )


class PayrollService:
    """Salary slip generation for one employee or the whole company."""

    @staticmethod
    def _month_inputs(company, month: str):
        year, number = (int(part) for part in month.split('-'))
        start, end = month_bounds(year, number)
        holidays = set(
            Holiday.get_tenant_filtered_queryset(company)
            .filter(date__range=(start, end))
            .values_list('date', flat=True)
        )
        return start, end, holidays, TaxSlabService.effective_slabs(company, year, number)

    @staticmethod
    def _attendance(company, employee_ids, start, end) -> Dict[int, Dict]:
        records = (
            Attendance.get_tenant_filtered_queryset(company)
            .filter(user_id__in=employee_ids, date__range=(start, end))
            .values_list('user_id', 'date', 'status')
        )
        by_user: Dict[int, Dict] = {}
        for user_id, day, status in records:
            by_user.setdefault(user_id, {})[day] = status
        return by_user

    @staticmethod
    def get_setting(company, employee) -> SalarySetting:
        setting = (
            SalarySetting.get_tenant_filtered_queryset(company)
            .filter(employee=employee)
            .prefetch_related('lines__salary_head')
            .first()
        )
        if setting is None:
            raise ResourceNotFound("Salary settings not found")
        return setting

    @staticmethod
    def preview(company, employee, month: str) -> Dict:
        setting = PayrollService.get_setting(company, employee)
        start, end, holidays, slabs = PayrollService._month_inputs(company, month)
        attendance = PayrollService._attendance(company, [employee.pk], start, end).get(employee.pk, {})
        return SalaryCalculator(setting, month, holidays, attendance, slabs).calculate()

    @staticmethod
    def _save_slip(company, employee, result: Dict, user) -> SalarySlip:
        return SalarySlip.objects.create(
            company=company,
            employee=employee,
            month=result['month'],
            earnings=json_lines(result['earnings']),
            deductions=json_lines(result['deductions']),
            total_earnings=result['total_earnings'],
            total_deductions=result['total_deductions'],
            gross_salary=result['gross_salary'],
            tax_amount=result['tax_amount'],
            net_salary=result['net_salary'],
            attendance_summary=result['attendance_summary'],
            generated_by=user if getattr(user, 'pk', None) else None,
        )

    @staticmethod
    def sync_salary_expense(company, month: str, user):
        """Upsert the month's Salary expense with the total gross of its slips."""
        total = SalarySlip.get_tenant_filtered_queryset(company).filter(month=month).aggregate(
            total=Coalesce(Sum('gross_salary'), ZERO)
        )['total']
        return ExpenseService.upsert_salary_expense(company, user, month, total)

    @staticmethod
    @transaction.atomic
    def generate(company, employee, month: str, user) -> SalarySlip:
        """
        Generate and store one slip.

        Raises:
            DuplicateRecordException: Slip already exists for the month.
            ResourceNotFound: Employee has no salary setting.
        """
        if SalarySlip.get_tenant_filtered_queryset(company).filter(employee=employee, month=month).exists():
            raise DuplicateRecordException("Salary slip already exists")
        result = PayrollService.preview(company, employee, month)
        slip = PayrollService._save_slip(company, employee, result, user)
        PayrollService.sync_salary_expense(company, month, user)
        ActivityService.log(company, user, 'Generated Salary', f"{employee.name} ({month})")
        PayrollLogger.log_slip_generated(slip, user)
        return slip

    @staticmethod
    @transaction.atomic
    def generate_all(company, month: str, user) -> Dict:
        """
        Generate slips for every Employee of the company.

        Existing slips are skipped; employees without a setting (or with
        an unusable one) are reported in ``errors``.
        """
        employees = list(User.objects.filter(company=company, role=UserRole.EMPLOYEE))
        if not employees:
            raise ResourceNotFound("No employees found")

        start, end, holidays, slabs = PayrollService._month_inputs(company, month)
        employee_ids = [employee.pk for employee in employees]
        attendance = PayrollService._attendance(company, employee_ids, start, end)
        settings_by_employee = {
            setting.employee_id: setting
            for setting in SalarySetting.get_tenant_filtered_queryset(company)
            .filter(employee_id__in=employee_ids)
            .prefetch_related('lines__salary_head')
        }
        existing = set(
            SalarySlip.get_tenant_filtered_queryset(company)
            .filter(month=month)
            .values_list('employee_id', flat=True)
        )

        processed = 0
        skipped = 0
        errors = []
        for employee in employees:
            if employee.pk in existing:
                skipped += 1
                continue
            setting = settings_by_employee.get(employee.pk)
            if setting is None:
                skipped += 1
                errors.append({'employeeId': employee.pk, 'reason': 'Salary settings not found'})
                continue
            try:
                result = SalaryCalculator(
                    setting, month, holidays, attendance.get(employee.pk, {}), slabs
                ).calculate()
            except ValidationFailed as e:
                skipped += 1
                errors.append({'employeeId': employee.pk, 'reason': e.message})
                continue
            slip = PayrollService._save_slip(company, employee, result, user)
            PayrollLogger.log_slip_generated(slip, user)
            processed += 1

        PayrollService.sync_salary_expense(company, month, user)
        ActivityService.log(company, user, 'Generated Salary', f"Bulk payroll {month} ({processed} slips)")
        PayrollLogger.log_bulk_run(company, month, processed, skipped, errors, user)
        return {'processed': processed, 'skipped': skipped, 'errors': errors}


class SlipRequestService:

    @staticmethod
    def request(company, employee, month: str) -> SalarySlipRequest:
        if not SalarySlip.get_tenant_filtered_queryset(company).filter(employee=employee, month=month).exists():
            raise ResourceNotFound("Salary slip not found for this month")
        existing = SalarySlipRequest.objects.filter(employee=employee, month=month).first()
        if existing:
            raise ValidationFailed(f"Request already {existing.status}", details={'status': existing.status})
        return SalarySlipRequest.objects.create(company=company, employee=employee, month=month)

    @staticmethod
    def decide(request_obj: SalarySlipRequest, reviewer, status: str, reason: str = '') -> SalarySlipRequest:
        if status not in (SlipRequestStatus.APPROVED, SlipRequestStatus.REJECTED):
            raise ValidationFailed("Status must be 'approved' or 'rejected'")
        request_obj.status = status
        request_obj.approved_by = reviewer
        if status == SlipRequestStatus.APPROVED:
            request_obj.approved_at = timezone.now()
        else:
            request_obj.rejected_at = timezone.now()
            request_obj.rejection_reason = reason
        request_obj.save()
        return request_obj

    @staticmethod
    def check_download(employee, month: str) -> Optional[SalarySlipRequest]:
        """
        Employees need an approved request before downloading a slip.

        Raises:
            UnauthorizedRoleException: No request, or not approved yet.
        """
        request_obj = SalarySlipRequest.objects.filter(employee=employee, month=month).first()
        if request_obj is None:
            raise UnauthorizedRoleException(
                "Please request approval from HR before downloading",
                details={'needsRequest': True},
            )
        if request_obj.status == SlipRequestStatus.PENDING:
            raise UnauthorizedRoleException(
                "Your download request is pending HR approval",
                details={'status': request_obj.status, 'requestedAt': request_obj.requested_at.isoformat()},
            )
        if request_obj.status == SlipRequestStatus.REJECTED:
            raise UnauthorizedRoleException(
                "Your download request was rejected",
                details={'status': request_obj.status, 'rejectionReason': request_obj.rejection_reason},
            )
        request_obj.downloaded_at = timezone.now()
        request_obj.save(update_fields=['downloaded_at', 'updated_at'])
        return request_obj
