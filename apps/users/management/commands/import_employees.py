"""
-------------------------------------------------------------------------
System: PayrollHub (Payroll & Business Finance Management System)
Description: Management command to bulk import employees from a CSV or
             Excel sheet into one company.
Usage: python manage.py import_employees employees.xlsx --company "Acme" [--dry-run]
-------------------------------------------------------------------------
"""
from pathlib import Path

import pandas as pd
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.core.exceptions import PayrollHubException
from apps.core.models import Company
from apps.organization.models import Branch, Department, Designation
from apps.users.models import UserRole
from apps.users.services import EmployeeService

REQUIRED_COLUMNS = ['Name', 'Email']

OPTIONAL_COLUMNS = [
    'Phone', 'Role', 'EmployeeType', 'Department', 'Designation', 'Branch',
    'JoiningDate', 'DateOfBirth', 'AadhaarNumber', 'PANNumber',
    'BankName', 'AccountHolderName', 'AccountNumber', 'IFSCCode', 'BankBranch',
]


class DryRunRollback(Exception):
    """Raised to roll back the import transaction in dry-run mode."""


class Command(BaseCommand):
    help = 'Import employees from CSV/XLSX for one company'

    def add_arguments(self, parser):
        parser.add_argument(
            'file_path',
            type=str,
            help='Path to the CSV or Excel file containing employee data'
        )
        parser.add_argument(
            '--company',
            type=str,
            required=True,
            help='Company id or name'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Preview import without saving to database'
        )

    def handle(self, *args, **options):
        file_path = Path(options['file_path'])
        dry_run = options['dry_run']
        company = self._find_company(options['company'])

        self.stdout.write(f'Company: {company.name}')
        if dry_run:
            self.stdout.write(self.style.WARNING('[DRY RUN MODE - No changes will be saved]'))

        df = self._read(file_path)
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise CommandError(f'Missing required columns: {", ".join(missing)}')

        # Blank cells become empty strings so every value can be str()-ed
        df = df.fillna('')
        self.stdout.write(f'Found {len(df)} rows')

        created_count = 0
        skipped_count = 0
        errors = []

        try:
            with transaction.atomic():
                for idx, row in df.iterrows():
                    line = idx + 2  # header is row 1
                    name = str(row['Name']).strip()
                    email = str(row['Email']).strip()
                    if not name or not email:
                        self.stdout.write(self.style.WARNING(f'Row {line}: Skipping row without name or email'))
                        skipped_count += 1
                        continue

                    data = self._row_to_payload(company, row)
                    try:
                        with transaction.atomic():
                            user = EmployeeService.create_employee(company, None, data, notify=False)
                    except PayrollHubException as e:
                        errors.append(f'Row {line} ({email}): {e.message}')
                        continue

                    created_count += 1
                    self.stdout.write(f'  Created {user.name} <{user.email}> {user.employee_code or ""}')

                if dry_run:
                    raise DryRunRollback()
        except DryRunRollback:
            pass

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS(f'Created: {created_count}'))
        self.stdout.write(f'Skipped: {skipped_count}')
        if errors:
            self.stdout.write(self.style.ERROR(f'Errors: {len(errors)}'))
            for message in errors:
                self.stdout.write(self.style.ERROR(f'  {message}'))

    def _find_company(self, identifier: str) -> Company:
        company = None
        if identifier.isdigit():
            company = Company.objects.filter(pk=int(identifier)).first()
        if company is None:
            company = Company.objects.filter(name__iexact=identifier).first()
        if company is None:
            raise CommandError(f'Company not found: {identifier}')
        return company

    def _read(self, file_path: Path) -> pd.DataFrame:
        if not file_path.exists():
            raise CommandError(f'File not found: {file_path}')
        try:
            if file_path.suffix.lower() in ('.xlsx', '.xls'):
                return pd.read_excel(file_path, engine='openpyxl', dtype=str)
            return pd.read_csv(file_path, dtype=str, encoding='utf-8-sig')
        except Exception as e:
            raise CommandError(f'Error reading {file_path.name}: {e}')

    @staticmethod
    def _cell(row, column: str) -> str:
        if column not in row.index:
            return ''
        return str(row[column]).strip()

    def _row_to_payload(self, company: Company, row) -> dict:
        """Translate one sheet row into the payload EmployeeService expects."""
        data = {
            'Name': self._cell(row, 'Name'),
            'Email': self._cell(row, 'Email'),
            'Phone': self._cell(row, 'Phone'),
            'role': self._cell(row, 'Role') or UserRole.EMPLOYEE,
            'EmployeeType': self._cell(row, 'EmployeeType'),
            'AadhaarNumber': self._cell(row, 'AadhaarNumber'),
            'PANNumber': self._cell(row, 'PANNumber'),
            'BankDetails': {
                'bankName': self._cell(row, 'BankName'),
                'accountHolderName': self._cell(row, 'AccountHolderName'),
                'accountNumber': self._cell(row, 'AccountNumber'),
                'ifscCode': self._cell(row, 'IFSCCode'),
                'branchName': self._cell(row, 'BankBranch'),
            },
        }
        for column in ('JoiningDate', 'DateOfBirth'):
            value = self._cell(row, column)
            if value:
                data[column] = value

        # Structure is looked up by name and created on first sight
        department_name = self._cell(row, 'Department')
        if department_name:
            department, _ = Department.objects.get_or_create(
                company=company, department_name=department_name
            )
            data['DepartmentId'] = department.pk
        designation_name = self._cell(row, 'Designation')
        if designation_name:
            designation, _ = Designation.objects.get_or_create(
                company=company, designation_name=designation_name
            )
            data['DesignationId'] = designation.pk
        branch_name = self._cell(row, 'Branch')
        if branch_name:
            branch, _ = Branch.objects.get_or_create(
                company=company, branch_name=branch_name
            )
            data['BranchId'] = branch.pk
        return data
