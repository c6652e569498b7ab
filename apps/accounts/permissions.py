"""
Role-based permission classes shared by all apps.

Usage:
    from apps.accounts.permissions import IsStaffMember

    class OrderViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticated, IsStaffMember]
"""

from rest_framework.permissions import BasePermission


class IsAdmin(BasePermission):
    """Shop owners/admins only (finance, promos, rates)."""

    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin)


class IsStaffMember(BasePermission):
    """Employees and admins (order dashboards)."""

    message = 'Only shop staff can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_shop_staff)
