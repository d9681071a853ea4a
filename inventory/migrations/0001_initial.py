from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import inventory.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('sku', models.CharField(blank=True, help_text='Stock Keeping Unit', max_length=64, null=True, unique=True)),
                ('code', models.CharField(blank=True, default='', help_text='Additional product code', max_length=64)),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14)),
                ('stock_quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14)),
                ('stock_weight', models.DecimalField(decimal_places=3, default=Decimal('0'), help_text='Total stock weight (kg)', max_digits=14)),
                ('location', models.CharField(blank=True, default='', max_length=120)),
                ('weight', models.DecimalField(blank=True, decimal_places=3, help_text='Unit weight (kg)', max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('min_stock_level', models.DecimalField(decimal_places=3, default=inventory.models.default_min_stock_level, help_text='Low stock alert threshold', max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='StockIntake',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=14)),
                ('total_weight', models.DecimalField(blank=True, decimal_places=3, max_digits=14, null=True)),
                ('single_weight', models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ('received_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('received_by', models.CharField(blank=True, default='', max_length=150)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='intakes', to='inventory.product')),
            ],
            options={
                'verbose_name': 'Stock Intake',
                'verbose_name_plural': 'Stock Intakes',
                'ordering': ['-created_at', '-id'],
            },
        ),
    ]
