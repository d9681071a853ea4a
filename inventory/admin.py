from django.contrib import admin
from django.utils.html import format_html
from django.urls import reverse
import csv

from django.http import HttpResponse

from .models import Product, StockIntake
from .services.stock_intake import remove_intake

# ============================================
# CUSTOM ACTIONS
# ============================================

def export_to_csv(modeladmin, request, queryset):
    """Export selected items to CSV"""
    opts = modeladmin.model._meta
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename={opts.model_name}s.csv'

    writer = csv.writer(response, quoting=csv.QUOTE_ALL)
    fields = [field for field in opts.concrete_fields]

    writer.writerow([field.verbose_name for field in fields])
    for obj in queryset:
        writer.writerow([field.value_from_object(obj) for field in fields])

    return response
export_to_csv.short_description = "Export to CSV"


# ============================================
# INLINE ADMINS
# ============================================

class StockIntakeInline(admin.TabularInline):
    model = StockIntake
    extra = 0
    can_delete = False
    fields = ['received_at', 'quantity', 'total_weight', 'single_weight', 'received_by']
    readonly_fields = fields
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


# ============================================
# PRODUCT ADMIN
# ============================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = [
        'sku',
        'name',
        'location',
        'quantity_display',
        'stock_quantity',
        'stock_weight',
        'weight',
        'min_stock_level',
        'price',
    ]
    list_filter = ['location', 'created_at']
    search_fields = ['name', 'sku', 'code', 'location']
    readonly_fields = ['stock_quantity', 'stock_weight', 'created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'sku', 'code', 'location')
        }),
        ('Stock', {
            'fields': ('quantity', 'min_stock_level', 'stock_quantity', 'stock_weight')
        }),
        ('Weight & Pricing', {
            'fields': ('weight', 'price')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    inlines = [StockIntakeInline]
    actions = [export_to_csv]
    date_hierarchy = 'created_at'
    list_per_page = 50

    def quantity_display(self, obj):
        qty = obj.quantity or 0
        if qty <= 0:
            color, label = '#dc3545', 'OUT'
        elif obj.is_low_stock:
            color, label = '#ffc107', 'LOW'
        else:
            color, label = '#28a745', ''
        return format_html(
            '<span style="color: {}; font-weight: bold;">{} {}</span>',
            color,
            qty.normalize() if hasattr(qty, 'normalize') else qty,
            label,
        )
    quantity_display.short_description = 'Quantity'
    quantity_display.admin_order_field = 'quantity'


# ============================================
# STOCK INTAKE ADMIN
# ============================================

@admin.register(StockIntake)
class StockIntakeAdmin(admin.ModelAdmin):
    """Amounts are read-only; stock counters only move through inventory.services.stock_intake."""
    list_display = [
        'id',
        'product_link',
        'quantity',
        'total_weight',
        'single_weight',
        'received_by',
        'received_at',
    ]
    list_filter = ['received_at', 'received_by']
    search_fields = ['product__name', 'product__sku', 'received_by', 'notes']
    date_hierarchy = 'received_at'
    actions = [export_to_csv]
    list_per_page = 50
    readonly_fields = ['product', 'quantity', 'total_weight', 'single_weight', 'created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('product')

    def has_add_permission(self, request):
        return False

    def delete_model(self, request, obj):
        remove_intake(obj)

    def delete_queryset(self, request, queryset):
        for intake in queryset:
            remove_intake(intake)

    def product_link(self, obj):
        if obj.product:
            url = reverse('admin:inventory_product_change', args=[obj.product.id])
            return format_html('<a href="{}">{}</a>', url, obj.product.name)
        return '-'
    product_link.short_description = 'Product'
    product_link.admin_order_field = 'product__name'
