"""
Inventory Management Application

Warehouse stock tracking for products measured by count and by weight.

MODELS:
- Product: name, SKU, unit weight, price, location, min stock level and the
  running counters quantity / stock_quantity / stock_weight
- StockIntake: a received delivery (quantity, total weight, unit weight,
  who received it and when)

BUSINESS LOGIC (inventory.services.stock_intake):
  - An intake can be entered by quantity or by total weight; weight-only
    intakes are converted with the product's unit weight (rounded down)
  - Recording an intake adds to the product counters
  - Editing an intake reverts the old values and applies the new ones
  - Deleting an intake reverts it; counters never go below zero

USAGE:
    from inventory.services.stock_intake import record_intake

    intake = record_intake(product_id=product.pk, total_weight="250")
    # product.quantity grows by floor(250 / product.weight)
"""

__version__ = '1.0.0'
