from rest_framework import permissions


class IsOrderCustomer(permissions.BasePermission):
    """
    Permission: Only the customer who submitted the order can act on it.
    """

    def has_object_permission(self, request, view, obj):
        return obj.customer_id is not None and obj.customer_id == request.user.id
