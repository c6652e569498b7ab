# Generated manually for the finance app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


PERIOD_TYPES = [('monthly', 'Monthly'), ('yearly', 'Yearly'), ('custom', 'All time')]


class Migration(migrations.Migration):

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('finance', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='BankSavingsDeposit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[MinValueValidator(Decimal('0.01'))])),
                ('period_type', models.CharField(choices=PERIOD_TYPES, default='custom', max_length=20)),
                ('period_start', models.DateField()),
                ('period_end', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bank_savings_deposits', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'bank_savings',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['period_type', 'period_start'], name='bank_savin_period__5b8e21_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='IncomeDistribution',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('owner_name', models.CharField(max_length=100)),
                ('period_type', models.CharField(choices=PERIOD_TYPES, max_length=20)),
                ('period_start', models.DateField()),
                ('period_end', models.DateField()),
                ('total_revenue', models.DecimalField(decimal_places=2, max_digits=14)),
                ('total_expenses', models.DecimalField(decimal_places=2, max_digits=14)),
                ('net_income', models.DecimalField(decimal_places=2, max_digits=14)),
                ('share_amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('personal_expenses', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=14)),
                ('net_share', models.DecimalField(decimal_places=2, max_digits=14)),
                ('is_claimed', models.BooleanField(default=False)),
                ('claimed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('claimed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='claimed_distributions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'income_distributions',
                'ordering': ['-period_start', 'owner_name'],
                'constraints': [
                    models.UniqueConstraint(fields=('owner_name', 'period_type', 'period_start'), name='unique_distribution_per_owner_period'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ElectricityReading',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('reading', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('reading_date', models.DateField(default=django.utils.timezone.localdate)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='electricity_readings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'electricity_readings',
                'ordering': ['-reading_date', '-created_at'],
            },
        ),
    ]
