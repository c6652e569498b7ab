from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for shop users.

    Employees and admins are created here; customers self-register
    through the API.
    """

    list_display = [
        'email',
        'first_name',
        'last_name',
        'role_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'first_name',
        'last_name',
        'contact_number',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'first_name', 'last_name', 'contact_number', 'password')
        }),
        ('Role & Permissions', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        colors = {
            UserRole.ADMIN: ('#1F4E79', 'white'),
            UserRole.EMPLOYEE: ('#2E8B57', 'white'),
            UserRole.CUSTOMER: ('#ccc', '#333'),
        }
        bg, fg = colors.get(obj.role, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_role_display()
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    actions = ['make_employees', 'make_customers', 'deactivate_users']

    @admin.action(description='Give selected users the employee role')
    def make_employees(self, request, queryset):
        count = queryset.exclude(role=UserRole.ADMIN).update(role=UserRole.EMPLOYEE)
        self.message_user(request, f'{count} user(s) can now be assigned to orders.')

    @admin.action(description='Return selected employees to the customer role')
    def make_customers(self, request, queryset):
        count = queryset.filter(role=UserRole.EMPLOYEE).update(role=UserRole.CUSTOMER)
        self.message_user(request, f'{count} employee(s) moved to the customer role.')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Superusers are never deactivated from here."""
        count = queryset.filter(is_superuser=False).update(is_active=False)
        self.message_user(request, f'Deactivated {count} user(s).')
