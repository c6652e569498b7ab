from django.contrib import admin
from .models import (
    Expense,
    SalaryPayment,
    ReimbursementStatus,
    BankSavingsDeposit,
    IncomeDistribution,
    ElectricityReading,
)


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Admin interface for Expenses."""

    list_display = ['title', 'amount', 'category', 'incurred_on', 'expense_for', 'reimbursement_status']
    list_filter = ['expense_for', 'reimbursement_status', 'category', 'incurred_on']
    search_fields = ['title', 'category']
    readonly_fields = ['created_by', 'created_at']
    date_hierarchy = 'incurred_on'
    ordering = ['-incurred_on']

    actions = ['mark_reimbursed']

    @admin.action(description='Mark selected expenses as reimbursed')
    def mark_reimbursed(self, request, queryset):
        count = queryset.filter(
            reimbursement_status=ReimbursementStatus.PENDING
        ).update(reimbursement_status=ReimbursementStatus.REIMBURSED)
        self.message_user(request, f'Reimbursed {count} expense(s).')


@admin.register(SalaryPayment)
class SalaryPaymentAdmin(admin.ModelAdmin):
    list_display = ['employee', 'date', 'amount', 'is_paid']
    list_filter = ['is_paid', 'date']
    search_fields = ['employee__email', 'employee__first_name']
    date_hierarchy = 'date'
    ordering = ['-date']


@admin.register(BankSavingsDeposit)
class BankSavingsDepositAdmin(admin.ModelAdmin):
    list_display = ['amount', 'period_type', 'period_start', 'period_end', 'created_by', 'created_at']
    list_filter = ['period_type']
    readonly_fields = ['created_by', 'created_at']
    ordering = ['-created_at']


@admin.register(IncomeDistribution)
class IncomeDistributionAdmin(admin.ModelAdmin):
    """Admin interface for owner distributions."""

    list_display = ['owner_name', 'period_type', 'period_start', 'net_share', 'is_claimed', 'claimed_at']
    list_filter = ['is_claimed', 'period_type', 'owner_name']
    readonly_fields = ['claimed_at', 'claimed_by', 'created_at', 'updated_at']
    date_hierarchy = 'period_start'


@admin.register(ElectricityReading)
class ElectricityReadingAdmin(admin.ModelAdmin):
    list_display = ['reading', 'reading_date', 'created_by']
    readonly_fields = ['created_by', 'created_at']
    date_hierarchy = 'reading_date'
