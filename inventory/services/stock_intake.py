# inventory/services/stock_intake.py

"""
STOCK INTAKE SERVICE

Purpose:
- Turn a received delivery (quantity and/or total weight) into a StockIntake row.
- Keep Product.quantity, Product.stock_quantity and Product.stock_weight in step
  with the intakes recorded against the product.

Rules:
- quantity wins when both quantity and weight are given
- weight-only intakes need a product unit weight; quantity = floor(weight / unit weight)
- quantity and weight cannot be negative (zero is a valid, no-op intake)
- editing an intake reverts it from its old product, then applies it to the new one
- reverting never takes a counter below zero
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_FLOOR, ROUND_HALF_UP
import logging

from django.conf import settings
from django.db import transaction
from django.db.models import F

from inventory import signals
from inventory.models import Product, StockIntake

logger = logging.getLogger(__name__)

THREE_PLACES = Decimal('0.001')
ZERO = Decimal('0')
# DecimalField(max_digits=14, decimal_places=3) holds at most 11 whole digits
MAX_AMOUNT = Decimal('1e11')


class StockIntakeError(Exception):
    """Domain error for intake failures."""

    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ProductNotFound(StockIntakeError):
    status_code = 404

    def __init__(self, message="Product not found"):
        super().__init__(message)


@dataclass(frozen=True)
class IntakeAmounts:
    quantity: Decimal
    total_weight: Decimal
    single_weight: Decimal


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(THREE_PLACES, rounding=ROUND_HALF_UP)


def _to_decimal(value, label: str) -> Decimal:
    if isinstance(value, bool):
        # bool is an int subclass in Python
        raise StockIntakeError(f"Invalid {label}")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise StockIntakeError(f"Invalid {label}")
    if not number.is_finite() or abs(number) >= MAX_AMOUNT:
        raise StockIntakeError(f"Invalid {label}")
    return number


def _within_limit(value: Decimal, label: str) -> Decimal:
    if abs(value) >= MAX_AMOUNT:
        raise StockIntakeError(f"{label} is too large")
    return value


def resolve_amounts(product: Product, quantity=None, total_weight=None) -> IntakeAmounts:
    """
    Work out quantity, total weight and unit weight for an intake.

    quantity given  -> weight is the given weight, else quantity x unit weight, else quantity
    weight only     -> quantity = floor(weight / unit weight)
    """
    unit_weight = product.weight if product.has_unit_weight else None

    if not _is_blank(quantity):
        qty = _to_decimal(quantity, "quantity")
        if qty < 0:
            raise StockIntakeError("Quantity cannot be negative")

        if not _is_blank(total_weight):
            weight = _to_decimal(total_weight, "total weight")
            if weight < 0:
                raise StockIntakeError("Total weight cannot be negative")
        elif unit_weight is not None:
            weight = _within_limit(qty * unit_weight, "Total weight")
        else:
            weight = qty

        return IntakeAmounts(
            quantity=_quantize(qty),
            total_weight=_quantize(weight),
            single_weight=_quantize(unit_weight or Decimal('1')),
        )

    if not _is_blank(total_weight):
        weight = _to_decimal(total_weight, "total weight")
        if weight < 0:
            raise StockIntakeError("Total weight cannot be negative")
        if unit_weight is None:
            raise StockIntakeError("Selected product does not have a valid unit weight configured")

        qty = (weight / unit_weight).to_integral_value(rounding=ROUND_FLOOR) if weight > 0 else ZERO
        _within_limit(qty, "Quantity")
        return IntakeAmounts(
            quantity=_quantize(qty),
            total_weight=_quantize(weight),
            single_weight=_quantize(unit_weight),
        )

    raise StockIntakeError("Either quantity or weight must be provided")


def get_product(product_id, *, for_update: bool = False) -> Product:
    """Look up the target product, translating bad ids into domain errors."""
    if _is_blank(product_id):
        raise StockIntakeError("productId is required")

    try:
        pk = int(str(product_id).strip())
    except (TypeError, ValueError):
        raise StockIntakeError("Invalid product ID format")

    queryset = Product.objects.select_for_update() if for_update else Product.objects.all()
    try:
        return queryset.get(pk=pk)
    except Product.DoesNotExist:
        raise ProductNotFound()


def _apply(product: Product, quantity: Decimal, total_weight) -> None:
    """Add an intake to the counters; raises before touching them if any would overflow."""
    new_quantity = _within_limit((product.quantity or ZERO) + quantity, "Product quantity")
    new_stock_quantity = _within_limit((product.stock_quantity or ZERO) + quantity, "Product stock quantity")
    new_stock_weight = product.stock_weight
    if total_weight:
        new_stock_weight = _within_limit((product.stock_weight or ZERO) + total_weight, "Product stock weight")

    product.quantity = new_quantity
    product.stock_quantity = new_stock_quantity
    product.stock_weight = new_stock_weight


def _revert(product: Product, quantity, total_weight) -> None:
    quantity = quantity or ZERO
    product.quantity = max(ZERO, (product.quantity or ZERO) - quantity)
    product.stock_quantity = max(ZERO, (product.stock_quantity or ZERO) - quantity)
    if total_weight:
        product.stock_weight = max(ZERO, (product.stock_weight or ZERO) - total_weight)


def _save_counters(product: Product) -> None:
    product.save(update_fields=['quantity', 'stock_quantity', 'stock_weight', 'min_stock_level', 'updated_at'])


def _check_low_stock(product: Product) -> None:
    if product.is_low_stock:
        signals.low_stock_alert.send(sender=Product, product=product)


def default_receiver(user=None) -> str:
    if user is not None and getattr(user, 'is_authenticated', False):
        return user.email or user.get_username()
    return settings.INVENTORY_CONFIG['DEFAULT_RECEIVER']


@transaction.atomic
def record_intake(
    *,
    product_id,
    quantity=None,
    total_weight=None,
    received_by: str = "",
    notes=None,
    min_stock_level=None,
    user=None,
) -> StockIntake:
    """Create an intake and add it to the product's stock counters."""
    product = get_product(product_id, for_update=True)
    amounts = resolve_amounts(product, quantity, total_weight)

    threshold = None
    if not _is_blank(min_stock_level):
        threshold = _to_decimal(min_stock_level, "minimum stock level")
        if threshold < 0:
            raise StockIntakeError("Minimum stock level cannot be negative")

    intake = StockIntake.objects.create(
        product=product,
        quantity=amounts.quantity,
        total_weight=amounts.total_weight,
        single_weight=amounts.single_weight,
        received_by=(received_by or "").strip() or default_receiver(user),
        notes=None if _is_blank(notes) else notes,
    )

    _apply(product, amounts.quantity, amounts.total_weight)
    if threshold is not None:
        product.min_stock_level = _quantize(threshold)
    _save_counters(product)

    logger.info(
        f"Stock intake #{intake.pk} recorded for {product.sku}: "
        f"+{amounts.quantity} units / +{amounts.total_weight} kg"
    )

    signals.stock_intake_created.send(sender=StockIntake, intake=intake)
    _check_low_stock(product)
    return intake


@transaction.atomic
def revise_intake(
    intake: StockIntake,
    *,
    product_id,
    quantity=None,
    total_weight=None,
    received_by: str = "",
    notes=None,
    user=None,
) -> StockIntake:
    """Revert an intake from its old product and re-apply it with new values."""
    intake = StockIntake.objects.select_for_update().get(pk=intake.pk)
    new_product = get_product(product_id, for_update=True)
    amounts = resolve_amounts(new_product, quantity, total_weight)

    old_product = None
    if intake.product_id is not None:
        if intake.product_id == new_product.pk:
            old_product = new_product
        else:
            old_product = Product.objects.select_for_update().filter(pk=intake.product_id).first()

    if old_product is not None:
        _revert(old_product, intake.quantity, intake.total_weight)
        if old_product is not new_product:
            _save_counters(old_product)

    intake.product = new_product
    intake.quantity = amounts.quantity
    intake.total_weight = amounts.total_weight
    intake.single_weight = amounts.single_weight
    intake.received_by = (received_by or "").strip() or default_receiver(user)
    if notes is not None:
        intake.notes = None if _is_blank(notes) else notes
    intake.save()

    _apply(new_product, amounts.quantity, amounts.total_weight)
    _save_counters(new_product)

    logger.info(
        f"Stock intake #{intake.pk} revised: product {new_product.sku}, "
        f"{amounts.quantity} units / {amounts.total_weight} kg"
    )

    signals.stock_intake_updated.send(sender=StockIntake, intake=intake)
    _check_low_stock(new_product)
    if old_product is not None and old_product is not new_product:
        _check_low_stock(old_product)
    return intake


@transaction.atomic
def remove_intake(intake: StockIntake) -> None:
    """Delete an intake and take its amounts back off the product."""
    product = None
    if intake.product_id is not None:
        product = Product.objects.select_for_update().filter(pk=intake.product_id).first()

    if product is not None:
        _revert(product, intake.quantity, intake.total_weight)
        _save_counters(product)

    intake_id = intake.pk
    intake.delete()
    logger.info(f"Stock intake #{intake_id} deleted and reverted")

    signals.stock_intake_deleted.send(sender=StockIntake, intake_id=intake_id, product=product)
    if product is not None:
        _check_low_stock(product)


def low_stock_products():
    """Products whose on-hand quantity is below their own threshold."""
    return Product.objects.filter(quantity__lt=F('min_stock_level')).order_by('quantity', 'name')
