# Generated manually on 2026-10-19

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('core', '0001_initial'),
        ('sales', '0001_initial'),
    ]

    operations = [
        migrations.AddConstraint(
            model_name='order',
            constraint=models.UniqueConstraint(
                condition=models.Q(('order_number', ''), _negated=True),
                fields=('company', 'order_number'),
                name='sales_order_number_unique',
            ),
        ),
        migrations.AddConstraint(
            model_name='order',
            constraint=models.UniqueConstraint(
                condition=models.Q(('tax_invoice_number', ''), _negated=True),
                fields=('company', 'tax_invoice_number'),
                name='sales_order_invoice_unique',
            ),
        ),
    ]
