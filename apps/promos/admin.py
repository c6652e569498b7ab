from django.contrib import admin
from .models import Promo, ServiceRate


@admin.register(Promo)
class PromoAdmin(admin.ModelAdmin):
    """Admin interface for Promos."""

    list_display = ['display_date', 'price_per_load', 'start_date', 'end_date', 'is_active']
    list_filter = ['is_active', 'start_date']
    readonly_fields = ['created_by', 'created_at', 'updated_at']
    ordering = ['-start_date']


@admin.register(ServiceRate)
class ServiceRateAdmin(admin.ModelAdmin):
    list_display = ['name', 'type', 'price', 'is_active']
    list_filter = ['type', 'is_active']
    list_editable = ['price', 'is_active']
    search_fields = ['name']
