"""Enumerations shared by the order models, serializers and services."""

from django.db import models


class ServicePackage(models.TextChoices):
    PACKAGE1 = 'package1', 'Package 1 - Wash, Dry, Fold'
    PACKAGE2 = 'package2', 'Package 2 - One-Way Transport'
    PACKAGE3 = 'package3', 'Package 3 - All-In'


class OrderStatus(models.TextChoices):
    ORDER_CREATED = 'Order Created', 'Order Created'
    ORDER_PLACED = 'Order Placed', 'Order Placed'
    WASHING = 'Washing', 'Washing'
    DRYING = 'Drying', 'Drying'
    FOLDING = 'Folding', 'Folding'
    READY_FOR_PICK_UP = 'Ready for Pick Up', 'Ready for Pick Up'
    OUT_FOR_DELIVERY = 'Out for Delivery', 'Out for Delivery'
    DELIVERED = 'Delivered', 'Delivered'
    SUCCESS = 'Success', 'Success'
    PARTIAL_COMPLETE = 'Partial Complete', 'Partial Complete'
    CANCELED = 'Canceled', 'Canceled'


class OrderType(models.TextChoices):
    CUSTOMER = 'customer', 'Customer'
    INTERNAL = 'internal', 'Internal'


class CanceledBy(models.TextChoices):
    CUSTOMER = 'customer', 'Customer'
    STAFF = 'staff', 'Staff'


COMPLETED_STATUSES = (
    OrderStatus.SUCCESS,
    OrderStatus.DELIVERED,
)

# Orders that count towards employee salary (work is done)
SALARY_ELIGIBLE_STATUSES = (
    OrderStatus.READY_FOR_PICK_UP,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
    OrderStatus.SUCCESS,
    OrderStatus.PARTIAL_COMPLETE,
)
