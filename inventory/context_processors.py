# ====================================
#  LOW STOCK
# ====================================
from django.db.models import F

from inventory.models import Product


def low_stock(request):
    """Make the low stock count available to all templates (navbar badge)"""
    if not request.user.is_authenticated:
        return {'low_stock_count': 0}
    return {
        'low_stock_count': Product.objects.filter(quantity__lt=F('min_stock_level')).count()
    }
