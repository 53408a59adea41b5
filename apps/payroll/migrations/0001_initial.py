# Generated manually on 2026-03-02

import django.core.validators
import django.db.models.deletion
import django.db.models.functions.text
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SalaryHead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('title', models.CharField(max_length=100, verbose_name='Title')),
                ('short_name', models.CharField(max_length=20, verbose_name='Short Name')),
                ('head_type', models.CharField(choices=[('Earnings', 'Earnings'), ('Deductions', 'Deductions')], default='Earnings', max_length=12, verbose_name='Type')),
                ('method', models.CharField(choices=[('Fixed', 'Fixed'), ('Percentage', 'Percentage')], default='Fixed', max_length=12, verbose_name='Calculation Method')),
                ('depend_on', models.CharField(blank=True, help_text='Short name of the head a percentage is taken of.', max_length=20, verbose_name='Depends On')),
                ('company', models.ForeignKey(help_text='The company that owns this record.', on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_records', to='core.company', verbose_name='Company')),
            ],
            options={
                'verbose_name': 'Salary Head',
                'verbose_name_plural': 'Salary Heads',
                'ordering': ['head_type', 'title'],
                'constraints': [models.UniqueConstraint(django.db.models.functions.text.Lower('short_name'), models.F('company'), name='unique_salary_head_short_name_per_company')],
            },
        ),
        migrations.CreateModel(
            name='SalarySetting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('effect_from', models.DateField(blank=True, null=True, verbose_name='Effective From')),
                ('is_tax_applicable', models.BooleanField(default=False, verbose_name='Tax Applicable')),
                ('company', models.ForeignKey(help_text='The company that owns this record.', on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_records', to='core.company', verbose_name='Company')),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='salary_settings', to=settings.AUTH_USER_MODEL, verbose_name='Employee')),
            ],
            options={
                'verbose_name': 'Salary Setting',
                'verbose_name_plural': 'Salary Settings',
                'constraints': [models.UniqueConstraint(fields=('company', 'employee'), name='unique_salary_setting_per_employee')],
            },
        ),
        migrations.CreateModel(
            name='SalarySettingHead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('applicable_value', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name='Applicable Value')),
                ('percentage', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=6, validators=[django.core.validators.MinValueValidator(Decimal('0.00')), django.core.validators.MaxValueValidator(Decimal('100.00'))], verbose_name='Percentage of Basic')),
                ('salary_head', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='setting_lines', to='payroll.salaryhead', verbose_name='Salary Head')),
                ('setting', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lines', to='payroll.salarysetting', verbose_name='Salary Setting')),
            ],
            options={
                'verbose_name': 'Salary Setting Head',
                'verbose_name_plural': 'Salary Setting Heads',
                'ordering': ['salary_head_id'],
            },
        ),
        migrations.CreateModel(
            name='SalaryConfigurationRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('heads', models.JSONField(default=list, verbose_name='Salary Heads')),
                ('effect_from', models.DateField(blank=True, null=True, verbose_name='Effective From')),
                ('is_tax_applicable', models.BooleanField(default=False, verbose_name='Tax Applicable')),
                ('status', models.CharField(choices=[('Pending', 'Pending'), ('Approved', 'Approved'), ('Rejected', 'Rejected')], default='Pending', max_length=10, verbose_name='Status')),
                ('rejection_reason', models.TextField(blank=True, verbose_name='Rejection Reason')),
                ('is_read', models.BooleanField(default=False, verbose_name='Read by Requester')),
                ('company', models.ForeignKey(help_text='The company that owns this record.', on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_records', to='core.company', verbose_name='Company')),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='salary_requests', to=settings.AUTH_USER_MODEL, verbose_name='Employee')),
                ('requested_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='salary_requests_made', to=settings.AUTH_USER_MODEL, verbose_name='Requested By')),
                ('reviewed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='salary_requests_reviewed', to=settings.AUTH_USER_MODEL, verbose_name='Reviewed By')),
            ],
            options={
                'verbose_name': 'Salary Configuration Request',
                'verbose_name_plural': 'Salary Configuration Requests',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='TaxSlab',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('min_income', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Minimum Income')),
                ('max_income', models.DecimalField(blank=True, decimal_places=2, help_text='Leave empty for the open-ended top slab.', max_digits=14, null=True, verbose_name='Maximum Income')),
                ('tax_rate', models.DecimalField(decimal_places=2, max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0.00')), django.core.validators.MaxValueValidator(Decimal('100.00'))], verbose_name='Tax Rate (%)')),
                ('effective_from', models.DateField(verbose_name='Effective From')),
                ('company', models.ForeignKey(help_text='The company that owns this record.', on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_records', to='core.company', verbose_name='Company')),
            ],
            options={
                'verbose_name': 'Tax Slab',
                'verbose_name_plural': 'Tax Slabs',
                'ordering': ['min_income'],
            },
        ),
        migrations.CreateModel(
            name='SalarySlip',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('month', models.CharField(db_index=True, max_length=7, verbose_name='Month')),
                ('earnings', models.JSONField(default=list, verbose_name='Earnings')),
                ('deductions', models.JSONField(default=list, verbose_name='Deductions')),
                ('total_earnings', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('total_deductions', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('gross_salary', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('tax_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('net_salary', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('attendance_summary', models.JSONField(default=dict, verbose_name='Attendance Summary')),
                ('company', models.ForeignKey(help_text='The company that owns this record.', on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_records', to='core.company', verbose_name='Company')),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='salary_slips', to=settings.AUTH_USER_MODEL, verbose_name='Employee')),
                ('generated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='salary_slips_generated', to=settings.AUTH_USER_MODEL, verbose_name='Generated By')),
            ],
            options={
                'verbose_name': 'Salary Slip',
                'verbose_name_plural': 'Salary Slips',
                'ordering': ['-month', 'employee__name'],
                'constraints': [models.UniqueConstraint(fields=('company', 'employee', 'month'), name='unique_salary_slip_per_month')],
            },
        ),
        migrations.CreateModel(
            name='SalarySlipRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('month', models.CharField(max_length=7, verbose_name='Month')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=10, verbose_name='Status')),
                ('requested_at', models.DateTimeField(auto_now_add=True, verbose_name='Requested At')),
                ('approved_at', models.DateTimeField(blank=True, null=True, verbose_name='Approved At')),
                ('rejected_at', models.DateTimeField(blank=True, null=True, verbose_name='Rejected At')),
                ('rejection_reason', models.TextField(blank=True, verbose_name='Rejection Reason')),
                ('downloaded_at', models.DateTimeField(blank=True, null=True, verbose_name='Downloaded At')),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='slip_requests_decided', to=settings.AUTH_USER_MODEL, verbose_name='Decided By')),
                ('company', models.ForeignKey(help_text='The company that owns this record.', on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_records', to='core.company', verbose_name='Company')),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='slip_requests', to=settings.AUTH_USER_MODEL, verbose_name='Employee')),
            ],
            options={
                'verbose_name': 'Salary Slip Request',
                'verbose_name_plural': 'Salary Slip Requests',
                'ordering': ['-requested_at'],
                'constraints': [models.UniqueConstraint(fields=('employee', 'month'), name='unique_slip_request_per_month')],
            },
        ),
    ]
