"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Unit tests for month parsing, progressive tax, slip
             computation and amount in words.
-------------------------------------------------------------------------
"""
from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase

from apps.attendance.models import AttendanceStatus
from apps.core.exceptions import ValidationFailed
from apps.core.models import Company
from apps.payroll.calculator import SalaryCalculator, SalaryNotConfigured, normalize_month, progressive_tax
from apps.payroll.models import HeadType, SalaryHead, SalarySetting, SalarySettingHead, TaxSlab
from apps.payroll.words import amount_in_words, number_to_words

User = get_user_model()


class NormalizeMonthTest(SimpleTestCase):

    def test_accepted_formats(self):
        self.assertEqual(normalize_month('2026-01'), '2026-01')
        self.assertEqual(normalize_month('202601'), '2026-01')
        self.assertEqual(normalize_month('1-2026'), '2026-01')
        self.assertEqual(normalize_month('01-2026'), '2026-01')
        self.assertEqual(normalize_month('2026-01-15'), '2026-01')

    def test_invalid_month(self):
        for raw in ('2026-13', 'January', '0-2026', '0000-01', '01-0000', '199912', '2101-01'):
            with self.assertRaises(ValidationFailed):
                normalize_month(raw)

    def test_missing_month(self):
        with self.assertRaisesMessage(ValidationFailed, 'Month is required'):
            normalize_month(None)


class ProgressiveTaxTest(SimpleTestCase):

    def setUp(self):
        self.slabs = [
            TaxSlab(min_income=Decimal('500000'), max_income=None, tax_rate=Decimal('20')),
            TaxSlab(min_income=Decimal('0'), max_income=Decimal('250000'), tax_rate=Decimal('0')),
            TaxSlab(min_income=Decimal('250000'), max_income=Decimal('500000'), tax_rate=Decimal('5')),
        ]

    def test_each_band_taxed_at_its_own_rate(self):
        self.assertEqual(progressive_tax(Decimal('600000'), self.slabs), Decimal('32500.00'))

    def test_income_inside_first_band(self):
        self.assertEqual(progressive_tax(Decimal('200000'), self.slabs), Decimal('0.00'))

    def test_income_inside_middle_band(self):
        self.assertEqual(progressive_tax(Decimal('300000'), self.slabs), Decimal('2500.00'))


class SalaryCalculatorTest(TestCase):

    def setUp(self):
        self.company = Company.objects.create(name='Acme')
        self.employee = User.objects.create_user(email='emp@acme.test', name='Emp', company=self.company)
        self.basic = SalaryHead.objects.create(company=self.company, title='Basic Salary', short_name='BS')
        self.hra = SalaryHead.objects.create(company=self.company, title='House Rent', short_name='HRA')
        self.pt = SalaryHead.objects.create(
            company=self.company, title='Professional Tax', short_name='PT', head_type=HeadType.DEDUCTIONS,
        )
        self.setting = SalarySetting.objects.create(company=self.company, employee=self.employee)
        SalarySettingHead.objects.create(setting=self.setting, salary_head=self.basic,
                                         applicable_value=Decimal('31000'))
        SalarySettingHead.objects.create(setting=self.setting, salary_head=self.hra,
                                         percentage=Decimal('40'))
        SalarySettingHead.objects.create(setting=self.setting, salary_head=self.pt,
                                         applicable_value=Decimal('200'))

    def test_slip_with_loss_of_pay(self):
        attendance = {
            date(2026, 3, 2): AttendanceStatus.ABSENT,
            date(2026, 3, 3): AttendanceStatus.HALF_DAY,
            date(2026, 3, 4): AttendanceStatus.PRESENT,
            date(2026, 3, 5): AttendanceStatus.PAID_LEAVE,
        }
        result = SalaryCalculator(self.setting, '2026-03', attendance=attendance).calculate()

        self.assertEqual(result['total_earnings'], Decimal('43400.00'))
        self.assertEqual(result['gross_salary'], Decimal('43400.00'))
        self.assertEqual(result['total_deductions'], Decimal('1700.00'))
        self.assertEqual(result['tax_amount'], Decimal('0.00'))
        self.assertEqual(result['net_salary'], Decimal('41700.00'))
        self.assertEqual(result['deductions'][-1]['title'], 'Leave Deduction (1.5 days)')

        summary = result['attendance_summary']
        self.assertEqual(summary['totalWorkingDays'], 26)
        self.assertEqual(summary['unpaidLeaves'], 1)
        self.assertEqual(summary['halfDays'], 1)
        self.assertEqual(summary['paidLeaves'], 1)
        self.assertEqual(summary['presentDays'], 1)
        self.assertEqual(summary['leaveDeductionAmount'], 1500.0)

    def test_holidays_and_sundays_are_not_deducted(self):
        attendance = {
            date(2026, 3, 1): AttendanceStatus.ABSENT,   # Sunday
            date(2026, 3, 10): AttendanceStatus.ABSENT,  # holiday
        }
        result = SalaryCalculator(
            self.setting, '2026-03', holidays={date(2026, 3, 10)}, attendance=attendance
        ).calculate()
        self.assertEqual(result['total_deductions'], Decimal('200.00'))
        self.assertEqual(result['attendance_summary']['totalWorkingDays'], 25)

    def test_tax_applied_monthly(self):
        self.setting.is_tax_applicable = True
        self.setting.save()
        slabs = [
            TaxSlab(min_income=Decimal('0'), max_income=Decimal('250000'), tax_rate=Decimal('0')),
            TaxSlab(min_income=Decimal('250000'), max_income=Decimal('500000'), tax_rate=Decimal('5')),
            TaxSlab(min_income=Decimal('500000'), max_income=None, tax_rate=Decimal('20')),
        ]
        result = SalaryCalculator(self.setting, '2026-03', tax_slabs=slabs).calculate()
        self.assertEqual(result['tax_amount'], Decimal('1388.33'))
        self.assertEqual(result['net_salary'], Decimal('41811.67'))

    def test_missing_basic(self):
        self.setting.lines.filter(salary_head=self.basic).delete()
        with self.assertRaises(SalaryNotConfigured):
            SalaryCalculator(self.setting, '2026-03').calculate()


class AmountInWordsTest(SimpleTestCase):

    def test_indian_grouping(self):
        self.assertEqual(number_to_words(125050), 'One Lakh Twenty Five Thousand and Fifty')
        self.assertEqual(number_to_words(100000000), 'Ten Crore')
        self.assertEqual(number_to_words(0), 'Zero')

    def test_paise(self):
        self.assertEqual(amount_in_words(Decimal('1500.50')), 'One Thousand Five Hundred and Fifty Paise')
