from django.db.models.signals import post_save, pre_save, post_delete
from django.dispatch import receiver, Signal
from .models import Product, StockIntake
import logging

logger = logging.getLogger(__name__)


# ============================================
# INVENTORY EVENTS
# ============================================
# Sent by inventory.services.stock_intake once the database rows are written.

stock_intake_created = Signal()   # kwargs: intake
stock_intake_updated = Signal()   # kwargs: intake
stock_intake_deleted = Signal()   # kwargs: intake_id, product
low_stock_alert = Signal()        # kwargs: product


# ============================================
# PRODUCT SIGNALS
# ============================================

@receiver(pre_save, sender=Product)
def product_pre_save(sender, instance, **kwargs):
    if not instance.pk:
        logger.info(f"Creating new product: {instance.name}")


@receiver(post_save, sender=Product)
def product_post_save(sender, instance, created, **kwargs):
    """
    Log product creation/updates.
    """
    if created:
        logger.info(
            f"Product created: {instance.name} "
            f"(Location: {instance.location or 'N/A'}, Quantity: {instance.quantity})"
        )
    else:
        logger.debug(
            f"Product updated: {instance.sku} - {instance.name} "
            f"(Quantity: {instance.quantity}, Stock weight: {instance.stock_weight})"
        )


@receiver(post_delete, sender=Product)
def log_product_deletion(sender, instance, **kwargs):
    logger.warning(
        f"[AUDIT] Product DELETED: ID: {instance.pk} | "
        f"SKU: {instance.sku} | Name: {instance.name} | "
        f"Quantity at deletion: {instance.quantity}"
    )


# ============================================
# STOCK INTAKE AUDIT TRAIL
# ============================================

@receiver(stock_intake_created)
def audit_intake_created(sender, intake, **kwargs):
    """
    Write an audit line for every recorded delivery.
    """
    product = intake.product
    logger.info(
        f"[STOCK INTAKE] Created #{intake.pk} | "
        f"Product: {product.sku if product else 'N/A'} ({product.name if product else 'deleted'}) | "
        f"Quantity: {intake.quantity} | "
        f"Total weight: {intake.total_weight} kg | "
        f"Unit weight: {intake.single_weight} kg | "
        f"Received by: {intake.received_by or 'N/A'} | "
        f"New stock: {product.stock_quantity if product else 'N/A'}"
    )


@receiver(stock_intake_updated)
def audit_intake_updated(sender, intake, **kwargs):
    product = intake.product
    logger.info(
        f"[STOCK INTAKE] Updated #{intake.pk} | "
        f"Product: {product.sku if product else 'N/A'} | "
        f"Quantity: {intake.quantity} | "
        f"Total weight: {intake.total_weight} kg"
    )


@receiver(stock_intake_deleted)
def audit_intake_deleted(sender, intake_id, product=None, **kwargs):
    logger.warning(
        f"[STOCK INTAKE] Deleted #{intake_id} | "
        f"Product: {product.sku if product else 'N/A'} | "
        f"Remaining stock: {product.stock_quantity if product else 'N/A'}"
    )


# ============================================
# LOW STOCK ALERTS
# ============================================

@receiver(low_stock_alert)
def log_low_stock(sender, product, **kwargs):
    """
    Warn when a product drops under its minimum stock level.
    """
    if product.quantity <= 0:
        logger.error(f"OUT OF STOCK: {product.name} ({product.sku}) is out of stock")
    else:
        logger.warning(
            f"LOW STOCK ALERT: {product.name} ({product.sku}) "
            f"has only {product.quantity} units remaining "
            f"(threshold {product.min_stock_level})"
        )


@receiver(post_delete, sender=StockIntake)
def log_intake_row_deletion(sender, instance, **kwargs):
    logger.debug(f"Stock intake row {instance.pk} removed from database")
