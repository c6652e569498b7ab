from datetime import date

from rest_framework import status, mixins, viewsets, serializers as drf_serializers
from rest_framework.decorators import api_view, action, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from django.utils import timezone
from django.utils.dateparse import parse_date
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.accounts.permissions import IsAdmin, IsStaffMember
from .models import Expense, SalaryPayment, BankSavingsDeposit, IncomeDistribution, ElectricityReading
from .serializers import (
    ExpenseSerializer,
    SalaryPaymentSerializer,
    MarkPaidRequestSerializer,
    DailySalarySerializer,
    FinanceOverviewSerializer,
    DistributionSerializer,
    DistributionQuerySerializer,
    ClaimRequestSerializer,
    IncomeDistributionSerializer,
    BankSavingsDepositSerializer,
    ElectricityReadingSerializer,
    ElectricityUsageSerializer,
    ElectricityUsageQuerySerializer,
)
from .services import (
    create_expense,
    mark_expense_reimbursed,
    get_pending_reimbursements,
    get_salary_summary,
    record_salary_payment,
    mark_salary_paid,
    get_finance_overview,
    build_distribution,
    claim_distribution,
    record_bank_savings_deposit,
    get_bank_savings_history,
    get_distribution_records,
    record_reading,
    delete_reading,
    get_electricity_usage,
    ExpenseNotFoundError,
    SalaryPaymentNotFoundError,
    NotAnEmployeeError,
    DistributionNotAvailableError,
    DistributionAlreadyClaimedError,
    ElectricityReadingNotFoundError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


def _date_param(request, name, default=None) -> date:
    value = request.query_params.get(name)
    if not value:
        return default
    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError({name: 'Use the YYYY-MM-DD format'})
    return parsed


def _selected_owners(validated_data):
    """Owners named in the comma-separated ``owners`` value; None means all."""
    owners = validated_data.get('owners')
    if not owners:
        return None
    return [name.strip() for name in owners.split(',') if name.strip()]


class ExpenseViewSet(mixins.ListModelMixin,
                     mixins.CreateModelMixin,
                     mixins.RetrieveModelMixin,
                     mixins.DestroyModelMixin,
                     viewsets.GenericViewSet):
    """
    ViewSet for expenses (admins only).

    list: Get expenses (filters: date_from, date_to, expense_for, reimbursement_status)
    create: Record an expense
    retrieve: Get a specific expense
    destroy: Delete an expense
    reimburse: Settle an owner's pending expense
    pending_reimbursements: Outstanding totals per owner
    """

    queryset = Expense.objects.select_related('created_by')
    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def get_queryset(self):
        queryset = super().get_queryset()

        date_from = _date_param(self.request, 'date_from')
        if date_from:
            queryset = queryset.filter(incurred_on__gte=date_from)

        date_to = _date_param(self.request, 'date_to')
        if date_to:
            queryset = queryset.filter(incurred_on__lte=date_to)

        expense_for = self.request.query_params.get('expense_for')
        if expense_for:
            queryset = queryset.filter(expense_for=expense_for)

        reimbursement_status = self.request.query_params.get('reimbursement_status')
        if reimbursement_status:
            queryset = queryset.filter(reimbursement_status=reimbursement_status)

        return queryset

    def perform_create(self, serializer):
        """Create expense using service layer."""
        try:
            expense = create_expense(created_by=self.request.user, **serializer.validated_data)
        except ValueError as e:
            raise ValidationError(str(e))
        serializer.instance = expense

    @extend_schema(request=None, responses={200: ExpenseSerializer, 400: ErrorResponseSerializer})
    @action(detail=True, methods=['post'])
    def reimburse(self, request, pk=None):
        """Mark an owner's expense as reimbursed."""
        try:
            expense = mark_expense_reimbursed(pk)
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data)

    @extend_schema(responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=['get'])
    def pending_reimbursements(self, request):
        """Get outstanding reimbursements per owner."""
        return Response(get_pending_reimbursements())


class SalaryPaymentViewSet(mixins.ListModelMixin,
                           mixins.CreateModelMixin,
                           viewsets.GenericViewSet):
    """
    ViewSet for recorded salaries (admins only).

    list: Get salary payments (filters: employee, date_from, date_to)
    create: Record or correct an employee's salary for a day
    mark_paid: Set the paid flag
    """

    queryset = SalaryPayment.objects.select_related('employee')
    serializer_class = SalaryPaymentSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def get_queryset(self):
        queryset = super().get_queryset()

        employee_id = self.request.query_params.get('employee')
        if employee_id:
            queryset = queryset.filter(employee_id=employee_id)

        date_from = _date_param(self.request, 'date_from')
        if date_from:
            queryset = queryset.filter(date__gte=date_from)

        date_to = _date_param(self.request, 'date_to')
        if date_to:
            queryset = queryset.filter(date__lte=date_to)

        return queryset

    def perform_create(self, serializer):
        """Record salary using service layer."""
        try:
            payment = record_salary_payment(
                employee=serializer.validated_data['employee'],
                day=serializer.validated_data['date'],
                amount=serializer.validated_data['amount'],
                is_paid=serializer.validated_data.get('is_paid', False),
            )
        except NotAnEmployeeError as e:
            raise ValidationError(str(e))
        serializer.instance = payment

    @extend_schema(
        request=MarkPaidRequestSerializer,
        responses={200: SalaryPaymentSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        """Mark a salary payment as paid or unpaid."""
        serializer = MarkPaidRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment = mark_salary_paid(pk, serializer.validated_data['is_paid'])
        except SalaryPaymentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(SalaryPaymentSerializer(payment).data)


@extend_schema(
    parameters=[
        OpenApiParameter('date_from', OpenApiTypes.DATE, description='First day (default: today)'),
        OpenApiParameter('date_to', OpenApiTypes.DATE, description='Last day (default: date_from)'),
    ],
    responses={200: DailySalarySerializer(many=True)},
    description="Per-day employee loads and salaries. Recorded payments override computed salaries.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStaffMember])
def salary_summary(request):
    """Get the salary breakdown using service layer."""
    date_from = _date_param(request, 'date_from', timezone.localdate())
    date_to = _date_param(request, 'date_to', date_from)

    summary = get_salary_summary(date_from, date_to)
    serializer = DailySalarySerializer(summary, many=True)
    return Response(serializer.data)


@extend_schema(
    parameters=[
        OpenApiParameter('date_from', OpenApiTypes.DATE),
        OpenApiParameter('date_to', OpenApiTypes.DATE),
    ],
    responses={200: FinanceOverviewSerializer},
    description="Revenue, expenses, net income and business metrics.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def finance_overview(request):
    """Get the finance dashboard using service layer."""
    data = get_finance_overview(
        date_from=_date_param(request, 'date_from'),
        date_to=_date_param(request, 'date_to'),
    )
    serializer = FinanceOverviewSerializer(data)
    return Response(serializer.data)


@extend_schema(
    parameters=[DistributionQuerySerializer],
    responses={200: DistributionSerializer},
    description="Equal split of net income between the selected owners, less stored bank savings, with claim state.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def distribution(request):
    """Get the net income distribution using service layer."""
    query = DistributionQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    data = build_distribution(
        query.validated_data['period'],
        selected_owners=_selected_owners(query.validated_data),
    )
    serializer = DistributionSerializer(data)
    return Response(serializer.data)


class BankSavingsDepositViewSet(mixins.ListModelMixin,
                                mixins.CreateModelMixin,
                                viewsets.GenericViewSet):
    """
    ViewSet for bank savings (admins only).

    list: Deposit history, newest first (filter: period_type)
    create: Deposit money for the month, the year or all time
    """

    queryset = BankSavingsDeposit.objects.all()
    serializer_class = BankSavingsDepositSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def get_queryset(self):
        return get_bank_savings_history(self.request.query_params.get('period_type'))

    def perform_create(self, serializer):
        """Record deposit using service layer."""
        try:
            deposit = record_bank_savings_deposit(
                amount=serializer.validated_data['amount'],
                period=serializer.validated_data['period'],
                created_by=self.request.user,
            )
        except ValueError as e:
            raise ValidationError(str(e))
        serializer.instance = deposit


class IncomeDistributionViewSet(mixins.ListModelMixin,
                                viewsets.GenericViewSet):
    """
    ViewSet for owner distribution records (admins only).

    list: Stored distributions for a period (filter: period, default monthly)
    claim: Record that an owner took their share
    """

    queryset = IncomeDistribution.objects.all()
    serializer_class = IncomeDistributionSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def get_queryset(self):
        query = DistributionQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return get_distribution_records(query.validated_data['period']).select_related('claimed_by')

    @extend_schema(
        request=ClaimRequestSerializer,
        responses={
            201: IncomeDistributionSerializer,
            400: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
    )
    @action(detail=False, methods=['post'])
    def claim(self, request):
        """Claim an owner's share using service layer."""
        serializer = ClaimRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            record = claim_distribution(
                owner=serializer.validated_data['owner'],
                period=serializer.validated_data['period'],
                claimed_by=request.user,
                selected_owners=_selected_owners(serializer.validated_data),
            )
        except DistributionNotAvailableError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except DistributionAlreadyClaimedError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(IncomeDistributionSerializer(record).data, status=status.HTTP_201_CREATED)


class ElectricityReadingViewSet(mixins.ListModelMixin,
                                mixins.CreateModelMixin,
                                mixins.DestroyModelMixin,
                                viewsets.GenericViewSet):
    """
    ViewSet for the electricity tracker (admins only).

    list: Meter readings, latest first
    create: Record a meter reading
    destroy: Remove a mistaken reading
    usage: Consumption and cost since opening
    """

    queryset = ElectricityReading.objects.select_related('created_by')
    serializer_class = ElectricityReadingSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def perform_create(self, serializer):
        serializer.instance = record_reading(created_by=self.request.user, **serializer.validated_data)

    def destroy(self, request, pk=None):
        try:
            delete_reading(pk)
        except ElectricityReadingNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(parameters=[ElectricityUsageQuerySerializer], responses={200: ElectricityUsageSerializer})
    @action(detail=False, methods=['get'])
    def usage(self, request):
        """Get consumption and cost using service layer."""
        query = ElectricityUsageQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        data = get_electricity_usage(query.validated_data.get('price_per_kwh'))
        return Response(ElectricityUsageSerializer(data).data)
