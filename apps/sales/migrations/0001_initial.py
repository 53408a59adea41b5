# Generated manually on 2026-03-02

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
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
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('order_number', models.CharField(blank=True, db_index=True, help_text='Auto-generated: ORD-YYYYMM-NNN', max_length=30, verbose_name='Order Number')),
                ('tax_invoice_number', models.CharField(blank=True, help_text='Assigned when the order is fully paid: INV-YYYY-NNNN', max_length=30, verbose_name='Tax Invoice Number')),
                ('client_name', models.CharField(max_length=200, verbose_name='Client Name')),
                ('client_email', models.EmailField(blank=True, max_length=254, verbose_name='Client Email')),
                ('client_phone', models.CharField(blank=True, max_length=20, verbose_name='Client Phone')),
                ('client_gstin', models.CharField(blank=True, max_length=15, verbose_name='Client GSTIN')),
                ('client_state', models.CharField(blank=True, max_length=100, verbose_name='Client State')),
                ('client_address', models.TextField(blank=True, verbose_name='Client Address')),
                ('service_title', models.CharField(max_length=255, verbose_name='Service Title')),
                ('service_description', models.TextField(blank=True, verbose_name='Service Description')),
                ('hsn_code', models.CharField(default='998314', max_length=10, verbose_name='HSN/SAC Code')),
                ('start_date', models.DateField(blank=True, null=True, verbose_name='Start Date')),
                ('end_date', models.DateField(blank=True, null=True, verbose_name='End Date')),
                ('base_amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))], verbose_name='Base Amount')),
                ('gst_rate', models.DecimalField(decimal_places=2, default=18, max_digits=5, verbose_name='GST Rate (%)')),
                ('is_igst', models.BooleanField(default=False, verbose_name='Inter-state (IGST)')),
                ('gst_type', models.CharField(blank=True, max_length=10, verbose_name='GST Type')),
                ('cgst_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('sgst_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('igst_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Base amount plus GST.', max_digits=14, verbose_name='Total Amount')),
                ('advance_paid', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14, verbose_name='Amount Paid')),
                ('balance_due', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14, verbose_name='Balance Due')),
                ('order_status', models.CharField(choices=[('Pending', 'Pending'), ('Confirmed', 'Confirmed'), ('In Progress', 'In Progress'), ('Completed', 'Completed'), ('Cancelled', 'Cancelled')], default='Pending', max_length=20, verbose_name='Order Status')),
                ('payment_status', models.CharField(choices=[('Pending', 'Pending'), ('Partially Paid', 'Partially Paid'), ('Paid', 'Paid')], default='Pending', max_length=20, verbose_name='Payment Status')),
                ('company', models.ForeignKey(help_text='The company that owns this record.', on_delete=django.db.models.deletion.CASCADE, related_name='%(class)s_records', to='core.company', verbose_name='Company')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders_created', to=settings.AUTH_USER_MODEL, verbose_name='Created By')),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['company', 'order_status'], name='sales_order_status_idx'),
                    models.Index(fields=['company', 'payment_status'], name='sales_order_payment_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderPayment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, help_text='Timestamp when this record was created.', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when this record was last modified.', verbose_name='Updated At')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))], verbose_name='Amount')),
                ('payment_method', models.CharField(choices=[('Bank Transfer', 'Bank Transfer'), ('Cash', 'Cash'), ('Cheque', 'Cheque'), ('UPI', 'UPI'), ('Card', 'Card')], default='Bank Transfer', max_length=20, verbose_name='Payment Method')),
                ('transaction_id', models.CharField(blank=True, max_length=100, verbose_name='Transaction ID')),
                ('notes', models.TextField(blank=True, verbose_name='Notes')),
                ('payment_date', models.DateField(default=django.utils.timezone.localdate, verbose_name='Payment Date')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to='sales.order', verbose_name='Order')),
                ('received_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payments_received', to=settings.AUTH_USER_MODEL, verbose_name='Received By')),
            ],
            options={
                'verbose_name': 'Order Payment',
                'verbose_name_plural': 'Order Payments',
                'ordering': ['-payment_date', '-created_at'],
            },
        ),
    ]
