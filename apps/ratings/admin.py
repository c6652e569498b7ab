from django.contrib import admin
from .models import Rating


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ['order', 'customer', 'overall_rating', 'created_at']
    list_filter = ['overall_rating', 'created_at']
    search_fields = ['order__id', 'customer__email', 'feedback_message']
    readonly_fields = ['order', 'customer', 'created_at']
    ordering = ['-created_at']
