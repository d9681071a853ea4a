# inventory/forms.py

from decimal import Decimal

from django import forms
from django.conf import settings

from .models import Product


class ProductForm(forms.ModelForm):
    """
    Create/edit form for products.
    Price, quantity and threshold may be left blank: new products fall back
    to the model defaults, edited products keep their current values.
    """

    OPTIONAL_NUMBERS = ('price', 'quantity', 'min_stock_level')

    class Meta:
        model = Product
        fields = [
            'name',
            'sku',
            'code',
            'price',
            'quantity',
            'location',
            'weight',
            'min_stock_level',
        ]
        labels = {
            'sku': 'SKU',
            'weight': 'Unit weight (kg)',
            'min_stock_level': 'Minimum stock level',
        }
        widgets = {
            'name': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Product name'
            }),
            'sku': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'Leave blank to generate'
            }),
            'code': forms.TextInput(attrs={'class': 'form-control'}),
            'price': forms.NumberInput(attrs={
                'class': 'form-control',
                'step': '0.01',
                'min': 0
            }),
            'quantity': forms.NumberInput(attrs={
                'class': 'form-control',
                'step': 'any'
            }),
            'location': forms.TextInput(attrs={
                'class': 'form-control',
                'placeholder': 'e.g. Warehouse A, Rack 3'
            }),
            'weight': forms.NumberInput(attrs={
                'class': 'form-control',
                'step': 'any',
                'min': 0
            }),
            'min_stock_level': forms.NumberInput(attrs={
                'class': 'form-control',
                'step': 'any',
                'min': 0
            }),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in self.OPTIONAL_NUMBERS:
            self.fields[name].required = False

    def _fallback(self, name):
        if self.instance.pk:
            return getattr(self.instance, name)
        if name == 'min_stock_level':
            return Decimal(settings.INVENTORY_CONFIG['LOW_STOCK_THRESHOLD'])
        return Decimal('0')

    def clean_price(self):
        price = self.cleaned_data.get('price')
        return self._fallback('price') if price is None else price

    def clean_quantity(self):
        quantity = self.cleaned_data.get('quantity')
        return self._fallback('quantity') if quantity is None else quantity

    def clean_min_stock_level(self):
        level = self.cleaned_data.get('min_stock_level')
        return self._fallback('min_stock_level') if level is None else level

    def clean_sku(self):
        sku = (self.cleaned_data.get('sku') or '').strip()
        return sku or None


class StockIntakeForm(forms.Form):
    """
    New delivery form. Either the received quantity or the total weight is
    needed; with weight only, the quantity is worked out from the product's
    unit weight.
    """

    product = forms.ModelChoiceField(
        queryset=Product.objects.order_by('name'),
        widget=forms.Select(attrs={'class': 'form-control'}),
        empty_label='Select a product',
    )
    total_weight = forms.DecimalField(
        max_digits=14,
        decimal_places=3,
        required=False,
        label='Total weight (kg)',
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': 'any'}),
    )
    quantity = forms.DecimalField(
        max_digits=14,
        decimal_places=3,
        required=False,
        help_text='Leave blank to calculate from the total weight',
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': 'any'}),
    )
    min_stock_level = forms.DecimalField(
        max_digits=14,
        decimal_places=3,
        required=False,
        label='Minimum stock threshold',
        help_text='Optional: updates the product low stock threshold',
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': 'any'}),
    )
    received_by = forms.CharField(
        max_length=150,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('quantity') is None and cleaned_data.get('total_weight') is None:
            if not self.errors:
                raise forms.ValidationError('Either quantity or weight must be provided')
        return cleaned_data


class StockIntakeUpdateForm(forms.Form):
    """Edit form: the delivery is re-weighed, so a positive total weight is required."""

    product = forms.ModelChoiceField(
        queryset=Product.objects.order_by('name'),
        widget=forms.Select(attrs={'class': 'form-control'}),
    )
    total_weight = forms.DecimalField(
        max_digits=14,
        decimal_places=3,
        label='Total weight (kg)',
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': 'any'}),
    )
    received_by = forms.CharField(
        max_length=150,
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'}),
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
    )

    def clean_total_weight(self):
        total_weight = self.cleaned_data['total_weight']
        if total_weight <= 0:
            raise forms.ValidationError('Invalid total weight')
        return total_weight
