from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal

from .constants import ServicePackage, OrderStatus, OrderType, CanceledBy


class Order(models.Model):
    """
    Laundry order.

    The primary key is the human-readable identifier: ``RKR###`` once the
    order is placed, ``RKR-Pending-###`` while a customer submission waits
    for approval.
    """

    id = models.CharField(primary_key=True, max_length=32)

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders'
    )
    customer_name = models.CharField(max_length=200)
    contact_number = models.CharField(max_length=20, blank=True)

    # Service details
    service_package = models.CharField(
        max_length=20,
        choices=ServicePackage.choices,
        default=ServicePackage.PACKAGE1
    )
    weight = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    loads = models.PositiveIntegerField(default=1)
    load_pieces = models.JSONField(null=True, blank=True)
    distance = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    delivery_option = models.CharField(max_length=50, blank=True)

    status = models.CharField(
        max_length=32,
        choices=OrderStatus.choices,
        default=OrderStatus.ORDER_CREATED
    )
    order_type = models.CharField(
        max_length=20,
        choices=OrderType.choices,
        default=OrderType.CUSTOMER
    )

    # Financial details
    total = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    is_paid = models.BooleanField(default=False)
    balance = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00')
    )

    assigned_employees = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='assigned_orders'
    )

    # Cancellation
    canceled_by = models.CharField(max_length=20, choices=CanceledBy.choices, blank=True)
    canceled_at = models.DateTimeField(null=True, blank=True)
    cancel_reason = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    # When the current identifier was issued; orders the RKR### series
    identifier_assigned_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['customer', 'created_at'], name='orders_custome_5e4c1d_idx'),
            models.Index(fields=['status'], name='orders_status_8a6f0b_idx'),
            models.Index(fields=['is_paid'], name='orders_is_paid_2c9e47_idx'),
            models.Index(fields=['created_at'], name='orders_created_71b3d8_idx'),
            models.Index(fields=['identifier_assigned_at'], name='orders_identif_c04a9e_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.id} - {self.customer_name} ({self.status})"

    @property
    def is_canceled(self):
        return self.status == OrderStatus.CANCELED

    @property
    def is_internal(self):
        return self.order_type == OrderType.INTERNAL

    def outstanding_balance(self):
        """Unpaid amount; falls back to the total when no balance was recorded."""
        if self.is_paid:
            return Decimal('0.00')
        return self.balance or self.total


class OrderStatusHistory(models.Model):
    """One row per status change, newest last."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='status_history'
    )
    status = models.CharField(max_length=32, choices=OrderStatus.choices)
    note = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_status_history'
        ordering = ['created_at', 'id']
        verbose_name_plural = 'order status history'

    def __str__(self):
        return f"{self.order_id}: {self.status}"
