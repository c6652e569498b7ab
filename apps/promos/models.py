from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


class Promo(models.Model):
    """
    Limited-time flat price per load.

    Only one promo is active at a time. An active promo is announced from
    the moment it is activated and applies between ``start_date`` and
    ``end_date``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    price_per_load = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    display_date = models.CharField(max_length=100, help_text="Date text shown on the banner")
    is_active = models.BooleanField(default=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_promos'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'promos'
        ordering = ['-start_date']
        indexes = [
            models.Index(fields=['is_active', 'end_date'], name='promos_is_acti_6b2e91_idx'),
        ]

    def __str__(self):
        return f"{self.price_per_load}/load ({self.display_date})"

    def is_running(self, now=None):
        now = now or timezone.now()
        return self.is_active and self.start_date <= now <= self.end_date


class RateType(models.TextChoices):
    SERVICE = 'service', 'Service'
    DELIVERY = 'delivery', 'Delivery'


class ServiceRate(models.Model):
    """Published price list entry (service rates page)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    type = models.CharField(max_length=20, choices=RateType.choices, default=RateType.SERVICE)
    is_active = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'service_rates'
        # 'service' sorts after 'delivery'
        ordering = ['-type', 'name']

    def __str__(self):
        return f"{self.name}: {self.price}"
