from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'promos'

router = DefaultRouter()
router.register(r'manage', views.PromoViewSet, basename='promo')

urlpatterns = [
    # Public endpoints
    path('active/', views.active_promo, name='active-promo'),
    path('rates/', views.service_rates, name='service-rates'),

    # Admin endpoints
    # GET/POST         /api/promos/manage/
    # GET/PATCH/DELETE /api/promos/manage/{id}/
    # POST             /api/promos/manage/{id}/activate/
    path('rates/<uuid:rate_id>/', views.update_rate, name='update-rate'),

    path('', include(router.urls)),
]
