from django.apps import AppConfig


class InventoryConfig(AppConfig):
    """
    Configuration for the Inventory application.

    This app manages warehouse stock:
    - Products (unit weight, price, location, running stock counters)
    - Stock Intakes (received deliveries that feed the product counters)

    Features:
    - Quantity/weight conversion through the product's unit weight
    - Low stock thresholds per product
    - CSV/PDF exports and Code128 barcodes
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'inventory'
    verbose_name = 'Inventory Management'

    def ready(self):
        """
        Import signal handlers when the app is ready.

        Signals handle:
        - Audit trail for stock intakes
        - Low stock alerts
        """
        import inventory.signals  # noqa: F401
