# Generated manually for the orders app

from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.CharField(max_length=32, primary_key=True, serialize=False)),
                ('customer_name', models.CharField(max_length=200)),
                ('contact_number', models.CharField(blank=True, max_length=20)),
                ('service_package', models.CharField(choices=[('package1', 'Package 1 - Wash, Dry, Fold'), ('package2', 'Package 2 - One-Way Transport'), ('package3', 'Package 3 - All-In')], default='package1', max_length=20)),
                ('weight', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=7, validators=[MinValueValidator(Decimal('0.00'))])),
                ('loads', models.PositiveIntegerField(default=1)),
                ('load_pieces', models.JSONField(blank=True, null=True)),
                ('distance', models.DecimalField(blank=True, decimal_places=2, max_digits=7, null=True, validators=[MinValueValidator(Decimal('0.00'))])),
                ('delivery_option', models.CharField(blank=True, max_length=50)),
                ('status', models.CharField(choices=[('Order Created', 'Order Created'), ('Order Placed', 'Order Placed'), ('Washing', 'Washing'), ('Drying', 'Drying'), ('Folding', 'Folding'), ('Ready for Pick Up', 'Ready for Pick Up'), ('Out for Delivery', 'Out for Delivery'), ('Delivered', 'Delivered'), ('Success', 'Success'), ('Partial Complete', 'Partial Complete'), ('Canceled', 'Canceled')], default='Order Created', max_length=32)),
                ('order_type', models.CharField(choices=[('customer', 'Customer'), ('internal', 'Internal')], default='customer', max_length=20)),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('is_paid', models.BooleanField(default=False)),
                ('balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('canceled_by', models.CharField(blank=True, choices=[('customer', 'Customer'), ('staff', 'Staff')], max_length=20)),
                ('canceled_at', models.DateTimeField(blank=True, null=True)),
                ('cancel_reason', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('identifier_assigned_at', models.DateTimeField(blank=True, null=True)),
                ('assigned_employees', models.ManyToManyField(blank=True, related_name='assigned_orders', to=settings.AUTH_USER_MODEL)),
                ('customer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='OrderStatusHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('Order Created', 'Order Created'), ('Order Placed', 'Order Placed'), ('Washing', 'Washing'), ('Drying', 'Drying'), ('Folding', 'Folding'), ('Ready for Pick Up', 'Ready for Pick Up'), ('Out for Delivery', 'Out for Delivery'), ('Delivered', 'Delivered'), ('Success', 'Success'), ('Partial Complete', 'Partial Complete'), ('Canceled', 'Canceled')], max_length=32)),
                ('note', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='status_history', to='orders.order')),
            ],
            options={
                'db_table': 'order_status_history',
                'ordering': ['created_at', 'id'],
                'verbose_name_plural': 'order status history',
            },
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['customer', 'created_at'], name='orders_custome_5e4c1d_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['status'], name='orders_status_8a6f0b_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['is_paid'], name='orders_is_paid_2c9e47_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['created_at'], name='orders_created_71b3d8_idx'),
        ),
        migrations.AddIndex(
            model_name='order',
            index=models.Index(fields=['identifier_assigned_at'], name='orders_identif_c04a9e_idx'),
        ),
    ]
