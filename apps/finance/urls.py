from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'finance'

router = DefaultRouter()
router.register(r'expenses', views.ExpenseViewSet, basename='expense')
router.register(r'salaries', views.SalaryPaymentViewSet, basename='salary-payment')
router.register(r'bank-savings', views.BankSavingsDepositViewSet, basename='bank-savings')
router.register(r'distributions', views.IncomeDistributionViewSet, basename='income-distribution')
router.register(r'electricity', views.ElectricityReadingViewSet, basename='electricity-reading')

urlpatterns = [
    # GET    /api/finance/expenses/                          - List expenses
    # POST   /api/finance/expenses/                          - Record expense
    # POST   /api/finance/expenses/{id}/reimburse/           - Settle owner expense
    # GET    /api/finance/expenses/pending_reimbursements/   - Outstanding per owner
    # GET    /api/finance/salaries/                          - List salary payments
    # POST   /api/finance/salaries/                          - Record salary
    # POST   /api/finance/salaries/{id}/mark_paid/           - Set paid flag
    # GET    /api/finance/bank-savings/                      - Deposit history
    # POST   /api/finance/bank-savings/                      - Deposit savings
    # GET    /api/finance/distributions/                     - Stored owner distributions
    # POST   /api/finance/distributions/claim/               - Claim an owner's share
    # GET    /api/finance/electricity/                       - Meter readings
    # POST   /api/finance/electricity/                       - Record reading
    # DELETE /api/finance/electricity/{id}/                  - Remove reading
    # GET    /api/finance/electricity/usage/                 - Consumption and cost
    path('salary-summary/', views.salary_summary, name='salary-summary'),
    path('overview/', views.finance_overview, name='overview'),
    path('distribution/', views.distribution, name='distribution'),

    path('', include(router.urls)),
]
