from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.utils import timezone


def default_min_stock_level():
    return Decimal(settings.INVENTORY_CONFIG['LOW_STOCK_THRESHOLD'])


class Product(models.Model):
    """
    A stocked item with a unit weight, price and warehouse location.

    `quantity` is the on-hand count; `stock_quantity` and `stock_weight`
    are the running totals fed by stock intakes.
    """

    name = models.CharField(max_length=200)
    sku = models.CharField(max_length=64, unique=True, blank=True, null=True, help_text="Stock Keeping Unit")
    code = models.CharField(max_length=64, blank=True, default='', help_text="Additional product code")
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
    )
    quantity = models.DecimalField(max_digits=14, decimal_places=3, default=Decimal('0'))
    stock_quantity = models.DecimalField(max_digits=14, decimal_places=3, default=Decimal('0'))
    stock_weight = models.DecimalField(
        max_digits=14, decimal_places=3, default=Decimal('0'), help_text="Total stock weight (kg)"
    )
    location = models.CharField(max_length=120, blank=True, default='')
    weight = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        blank=True,
        null=True,
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Unit weight (kg)",
    )
    min_stock_level = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        default=default_min_stock_level,
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Low stock alert threshold",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = "Product"
        verbose_name_plural = "Products"

    def __str__(self):
        return f"{self.name} ({self.sku or 'no SKU'})"

    @property
    def is_low_stock(self):
        return (self.quantity or 0) < (self.min_stock_level or 0)

    @property
    def has_unit_weight(self):
        return self.weight is not None and self.weight > 0

    def generate_sku(self):
        """Build a SKU from the code (or name) prefix and the primary key."""
        config = settings.INVENTORY_CONFIG
        source = self.code or self.name or 'PRD'
        prefix = ''.join(ch for ch in source.upper() if ch.isalnum())[:config['SKU_PREFIX_LENGTH']] or 'PRD'
        return f"{prefix}{self.pk:0{config['SKU_NUMBER_LENGTH']}d}"

    def save(self, *args, **kwargs):
        if self.sku is not None:
            self.sku = self.sku.strip() or None

        # Generated SKUs need the primary key, so they are written after the first insert;
        # a clashing SKU rolls the insert back with it
        with transaction.atomic():
            super().save(*args, **kwargs)

            if not self.sku and settings.INVENTORY_CONFIG['AUTO_GENERATE_SKU']:
                self.sku = self.generate_sku()
                super().save(update_fields=['sku'])


class StockIntake(models.Model):
    """A received delivery for one product."""

    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='intakes',
    )
    quantity = models.DecimalField(max_digits=14, decimal_places=3)
    total_weight = models.DecimalField(max_digits=14, decimal_places=3, blank=True, null=True)
    single_weight = models.DecimalField(max_digits=12, decimal_places=3, blank=True, null=True)
    received_at = models.DateTimeField(default=timezone.now)
    received_by = models.CharField(max_length=150, blank=True, default='')
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = "Stock Intake"
        verbose_name_plural = "Stock Intakes"

    def __str__(self):
        product_name = self.product.name if self.product else 'deleted product'
        return f"{product_name} +{self.quantity} ({self.received_at:%Y-%m-%d})"
