# Generated manually for the finance app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('category', models.CharField(blank=True, max_length=100)),
                ('incurred_on', models.DateField(default=django.utils.timezone.localdate)),
                ('expense_for', models.CharField(default='RKR', max_length=100)),
                ('reimbursement_status', models.CharField(choices=[('none', 'Not applicable'), ('pending', 'Pending'), ('reimbursed', 'Reimbursed')], default='none', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_expenses', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'expenses',
                'ordering': ['-incurred_on', '-created_at'],
                'indexes': [
                    models.Index(fields=['incurred_on'], name='expenses_incurre_3f1a2b_idx'),
                    models.Index(fields=['expense_for', 'reimbursement_status'], name='expenses_expense_9d4c7e_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SalaryPayment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('is_paid', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='salary_payments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'salary_payments',
                'ordering': ['-date'],
                'constraints': [
                    models.UniqueConstraint(fields=('employee', 'date'), name='unique_salary_per_employee_day'),
                ],
            },
        ),
    ]
