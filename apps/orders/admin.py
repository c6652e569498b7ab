from django.contrib import admin
from django.utils.html import format_html
from .constants import OrderStatus
from .models import Order, OrderStatusHistory


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    fields = ['status', 'note', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for Orders.

    Identifiers are allocated by the order services; status changes made
    here do not swap pending IDs, so use the API to place customer orders.
    """

    list_display = [
        'id',
        'customer_name',
        'service_package',
        'loads',
        'total',
        'is_paid',
        'status_badge',
        'order_type',
        'created_at',
    ]
    list_filter = [
        'status',
        'service_package',
        'order_type',
        'is_paid',
        'created_at',
    ]
    search_fields = [
        'id',
        'customer_name',
        'contact_number',
        'customer__email',
    ]
    readonly_fields = ['id', 'created_at', 'updated_at', 'identifier_assigned_at']
    filter_horizontal = ['assigned_employees']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']
    inlines = [OrderStatusHistoryInline]

    fieldsets = (
        ('Order', {
            'fields': ('id', 'customer', 'customer_name', 'contact_number', 'order_type', 'status')
        }),
        ('Service', {
            'fields': ('service_package', 'weight', 'loads', 'load_pieces', 'distance', 'delivery_option')
        }),
        ('Payment', {
            'fields': ('total', 'is_paid', 'balance')
        }),
        ('Staff', {
            'fields': ('assigned_employees',)
        }),
        ('Cancellation', {
            'fields': ('canceled_by', 'canceled_at', 'cancel_reason'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'identifier_assigned_at'),
            'classes': ('collapse',),
        }),
    )

    def status_badge(self, obj):
        """Display status as colored badge."""
        colors = {
            OrderStatus.ORDER_CREATED: '#999',
            OrderStatus.CANCELED: '#C0392B',
            OrderStatus.SUCCESS: '#2E8B57',
            OrderStatus.DELIVERED: '#2E8B57',
            OrderStatus.PARTIAL_COMPLETE: '#D68910',
        }
        color = colors.get(obj.status, '#1F4E79')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color, obj.status
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
