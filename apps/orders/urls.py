from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter()
router.register(r'manage', views.OrderViewSet, basename='order')

urlpatterns = [
    # Staff order ViewSet routes
    # GET    /api/orders/manage/                 - List orders (filters)
    # POST   /api/orders/manage/                 - Create order
    # GET    /api/orders/manage/{id}/            - Get order
    # PATCH  /api/orders/manage/{id}/            - Edit order
    # POST   /api/orders/manage/{id}/status/     - Change status
    # POST   /api/orders/manage/{id}/pay/        - Record payment
    # GET    /api/orders/manage/statistics/      - Dashboard totals

    # Public endpoints
    path('quote/', views.quote, name='quote'),
    path('track/', views.track_order, name='track-order'),

    # Customer endpoints
    path('mine/', views.my_orders, name='my-orders'),
    path('submit/', views.submit_order, name='submit-order'),
    path('<str:order_id>/cancel/', views.cancel_order, name='cancel-order'),

    # Owner endpoints
    path('customers/', views.customer_directory, name='customer-directory'),

    # Include router URLs
    path('', include(router.urls)),
]
