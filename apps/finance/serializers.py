from decimal import Decimal
from django.conf import settings
from rest_framework import serializers
from .models import (
    Expense,
    SalaryPayment,
    BankSavingsDeposit,
    IncomeDistribution,
    ElectricityReading,
    BUSINESS_ACCOUNT,
)
from apps.accounts.models import User
from apps.accounts.serializers import UserMinimalSerializer


class ExpenseSerializer(serializers.ModelSerializer):
    """Serializer for expenses."""

    created_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Expense
        fields = [
            'id',
            'title',
            'amount',
            'category',
            'incurred_on',
            'expense_for',
            'reimbursement_status',
            'created_by',
            'created_at',
        ]
        read_only_fields = ['id', 'reimbursement_status', 'created_by', 'created_at']

    def validate_expense_for(self, value):
        if value != BUSINESS_ACCOUNT and value not in settings.BUSINESS_OWNERS:
            raise serializers.ValidationError(
                f"Must be {BUSINESS_ACCOUNT} or one of: {', '.join(settings.BUSINESS_OWNERS)}"
            )
        return value


class SalaryPaymentSerializer(serializers.ModelSerializer):
    """Serializer for recorded salary payments."""

    employee_detail = UserMinimalSerializer(source='employee', read_only=True)
    employee = serializers.PrimaryKeyRelatedField(queryset=User.objects.employees())

    class Meta:
        model = SalaryPayment
        fields = ['id', 'employee', 'employee_detail', 'date', 'amount', 'is_paid', 'created_at', 'updated_at']
        read_only_fields = ['id', 'employee_detail', 'created_at', 'updated_at']
        # Recording the same day again corrects the amount instead of failing
        validators = []


class MarkPaidRequestSerializer(serializers.Serializer):
    is_paid = serializers.BooleanField(default=True)


class EmployeeSalaryRowSerializer(serializers.Serializer):
    employee = UserMinimalSerializer()
    loads = serializers.DecimalField(max_digits=10, decimal_places=2)
    salary = serializers.DecimalField(max_digits=10, decimal_places=2)
    payment = SalaryPaymentSerializer(allow_null=True)


class DailySalarySerializer(serializers.Serializer):
    date = serializers.DateField()
    total_loads = serializers.IntegerField()
    total_salary = serializers.DecimalField(max_digits=12, decimal_places=2)
    employees = EmployeeSalaryRowSerializer(many=True)


class FinanceOverviewSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    regular_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    employee_salaries = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    paid_orders_count = serializers.IntegerField()
    total_loads = serializers.IntegerField()
    total_weight = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_orders = serializers.IntegerField()
    total_days_of_operation = serializers.IntegerField()


class OwnerShareSerializer(serializers.Serializer):
    name = serializers.CharField()
    share = serializers.DecimalField(max_digits=14, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    personal_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_share = serializers.DecimalField(max_digits=14, decimal_places=2)
    is_selected = serializers.BooleanField()
    is_disabled = serializers.BooleanField()
    is_claimed = serializers.BooleanField()
    claimed_at = serializers.DateTimeField(allow_null=True)
    distribution_id = serializers.UUIDField(allow_null=True)


class ClaimsSummarySerializer(serializers.Serializer):
    total_claimed = serializers.IntegerField()
    total_unclaimed = serializers.IntegerField()
    total_claimed_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_unclaimed_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class DistributionSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_income = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_personal_expenses = serializers.DecimalField(max_digits=14, decimal_places=2)
    bank_savings = serializers.DecimalField(max_digits=14, decimal_places=2)
    available_for_distribution = serializers.DecimalField(max_digits=14, decimal_places=2)
    distribution = OwnerShareSerializer(many=True)
    claims_summary = ClaimsSummarySerializer()
    period = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()


class DistributionQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=['monthly', 'yearly', 'all'], default='monthly')
    owners = serializers.CharField(required=False, allow_blank=True, help_text="Comma-separated owner names")


class ClaimRequestSerializer(DistributionQuerySerializer):
    owner = serializers.CharField(max_length=100)


class IncomeDistributionSerializer(serializers.ModelSerializer):
    claimed_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = IncomeDistribution
        fields = [
            'id',
            'owner_name',
            'period_type',
            'period_start',
            'period_end',
            'total_revenue',
            'total_expenses',
            'net_income',
            'share_amount',
            'personal_expenses',
            'net_share',
            'is_claimed',
            'claimed_at',
            'claimed_by',
        ]
        read_only_fields = fields


class BankSavingsDepositSerializer(serializers.ModelSerializer):
    """Bank savings deposit; ``period`` picks the month, year or all time."""

    period = serializers.ChoiceField(choices=['monthly', 'yearly', 'all'], default='all', write_only=True)
    created_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = BankSavingsDeposit
        fields = ['id', 'amount', 'period', 'period_type', 'period_start', 'period_end', 'created_by', 'created_at']
        read_only_fields = ['id', 'period_type', 'period_start', 'period_end', 'created_by', 'created_at']


class ElectricityReadingSerializer(serializers.ModelSerializer):
    created_by = UserMinimalSerializer(read_only=True)

    class Meta:
        model = ElectricityReading
        fields = ['id', 'reading', 'reading_date', 'created_by', 'created_at']
        read_only_fields = ['id', 'created_by', 'created_at']


class ElectricityUsageSerializer(serializers.Serializer):
    total_days = serializers.IntegerField()
    consumption = serializers.DecimalField(max_digits=10, decimal_places=2)
    price_per_kwh = serializers.DecimalField(max_digits=10, decimal_places=4)
    total_cost = serializers.DecimalField(max_digits=14, decimal_places=2)
    latest_reading_date = serializers.DateField(allow_null=True)


class ElectricityUsageQuerySerializer(serializers.Serializer):
    price_per_kwh = serializers.DecimalField(
        max_digits=10, decimal_places=4, min_value=Decimal('0'), required=False,
        help_text="Overrides the configured rate"
    )
