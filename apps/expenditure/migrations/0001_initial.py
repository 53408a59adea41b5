# Generated manually on 2026-03-02

import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        ('sales', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('expense_title', models.CharField(max_length=255, verbose_name='Expense Title')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Amount')),
                ('expense_date', models.DateField(verbose_name='Expense Date')),
                ('expense_type', models.CharField(choices=[('Salary', 'Salary'), ('Rent', 'Rent'), ('Utilities', 'Utilities'), ('Travel', 'Travel'), ('Office Supplies', 'Office Supplies'), ('Marketing', 'Marketing'), ('Software', 'Software'), ('Vendor', 'Vendor'), ('Other', 'Other')], default='Other', max_length=30, verbose_name='Expense Type')),
                ('payment_method', models.CharField(choices=[('Bank Transfer', 'Bank Transfer'), ('Cash', 'Cash'), ('Cheque', 'Cheque'), ('UPI', 'UPI'), ('Card', 'Card')], default='Bank Transfer', max_length=20, verbose_name='Payment Method')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('receipt', models.CharField(blank=True, help_text='Reference to the stored receipt document.', max_length=500, verbose_name='Receipt')),
                ('is_fixed', models.BooleanField(default=False, help_text='Fixed expenses can be copied into the next month.', verbose_name='Fixed Expense')),
                ('reference_key', models.CharField(blank=True, help_text='System key for generated expenses, e.g. SALARY_<company>_<month>.', max_length=100, null=True, verbose_name='Reference Key')),
                ('added_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses_added', to=settings.AUTH_USER_MODEL, verbose_name='Added By')),
                ('company', models.ForeignKey(help_text='The company that owns this record.', on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_records', to='core.company', verbose_name='Company')),
                ('order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses', to='sales.order', verbose_name='Order')),
            ],
            options={
                'verbose_name': 'Expense',
                'verbose_name_plural': 'Expenses',
                'ordering': ['-expense_date', '-created_at'],
                'indexes': [models.Index(fields=['company', 'expense_date'], name='expense_company_date_idx')],
                'constraints': [models.UniqueConstraint(condition=models.Q(('reference_key__isnull', False)), fields=('company', 'reference_key'), name='unique_expense_reference_per_company')],
            },
        ),
    ]
