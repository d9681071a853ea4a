from django.shortcuts import render, get_object_or_404, redirect
from django.views import View
from django.http import JsonResponse, HttpResponse, Http404
from django.db import IntegrityError
from django.db.models import Sum, Q
from django.contrib import messages
from rest_framework import generics
from rest_framework.response import Response
from rest_framework.utils.encoders import JSONEncoder
from rest_framework.views import APIView
import json
import logging

from users.permissions import LoginRequiredJSONMixin, wants_json
from .barcodes import barcode_svg, product_label_pdf
from .exports import export_products_csv, export_products_pdf, export_intakes_csv, export_intakes_pdf
from .forms import ProductForm, StockIntakeForm, StockIntakeUpdateForm
from .models import Product, StockIntake
from .serializers import ProductSerializer, LowStockProductSerializer, StockIntakeSerializer
from .services.stock_intake import (
    StockIntakeError,
    low_stock_products,
    record_intake,
    remove_intake,
    revise_intake,
)


logger = logging.getLogger(__name__)


# ====================================
# REQUEST HELPERS
# ====================================

class BadRequestBody(ValueError):
    pass


def load_json(request):
    """Parse a JSON object body; an empty body is an empty object."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise BadRequestBody("Invalid JSON body")
    if not isinstance(data, dict):
        raise BadRequestBody("JSON body must be an object")
    return data


def pick(data, *keys):
    """First non-empty value among alias keys (product / product_id / productId ...)."""
    for key in keys:
        value = data.get(key)
        if value is not None and value != '':
            return value
    return None


def intake_arguments(data, default_product_id=None):
    return {
        'product_id': pick(data, 'product', 'product_id', 'productId') or default_product_id,
        'quantity': pick(data, 'quantity'),
        'total_weight': pick(data, 'total_weight', 'weight', 'totalWeight'),
        'received_by': pick(data, 'received_by', 'receivedBy') or '',
        'notes': data.get('notes'),
    }


def json_response(data, status=200):
    # DRF's encoder writes decimals as numbers, matching the /data/ endpoints
    return JsonResponse(data, status=status, safe=False, encoder=JSONEncoder)


def json_error(message, status=400):
    return JsonResponse({'error': message}, status=status)


def first_error(errors):
    """Flatten DRF/Django form errors into one readable line."""
    for field, field_errors in errors.items():
        if isinstance(field_errors, (list, tuple)) and field_errors:
            message = str(field_errors[0])
        else:
            message = str(field_errors)
        return message if field in ('non_field_errors', '__all__') else f"{field}: {message}"
    return 'Invalid data'


# ====================================
# PRODUCT PAGES
# ====================================

class ProductCollectionView(LoginRequiredJSONMixin, View):
    """GET: product list (with ?q= search). POST: create from form or JSON."""

    def get_queryset(self):
        queryset = Product.objects.all()

        search = self.request.GET.get('q', '').strip()
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) |
                Q(sku__icontains=search) |
                Q(code__icontains=search) |
                Q(location__icontains=search)
            )
        return queryset

    def get(self, request):
        products = self.get_queryset()

        if wants_json(request):
            return json_response(ProductSerializer(products, many=True).data)

        context = {
            'products': products,
            'search': request.GET.get('q', ''),
            'total_products': products.count(),
        }
        return render(request, 'inventory/product_list.html', context)

    def post(self, request):
        if 'application/json' in request.headers.get('Content-Type', ''):
            return self.create_from_json(request)

        form = ProductForm(request.POST)
        if form.is_valid():
            try:
                product = form.save()
            except IntegrityError as e:
                logger.warning(f"Product create rejected: {e}")
                return self.form_error(request, form, "Error creating product: SKU already exists")

            logger.info(f"Product {product.sku} created by {request.user}")
            messages.success(request, f'Product "{product.name}" created')
            return redirect('products:list')

        return self.form_error(request, form, f"Error creating product: {first_error(form.errors)}")

    def form_error(self, request, form, message):
        context = {'form': form, 'title': 'New Product', 'error': message}
        return render(request, 'inventory/product_form.html', context, status=400)

    def create_from_json(self, request):
        try:
            data = load_json(request)
        except BadRequestBody as e:
            return json_error(str(e))

        serializer = ProductSerializer(data=data)
        if not serializer.is_valid():
            return JsonResponse({
                'error': f"Error creating product: {first_error(serializer.errors)}",
                'errors': serializer.errors,
            }, status=400)

        try:
            product = serializer.save()
        except IntegrityError as e:
            logger.warning(f"Product create rejected: {e}")
            return json_error("Error creating product: SKU already exists")

        logger.info(f"Product {product.sku} created via API by {request.user}")
        return json_response(ProductSerializer(product).data, status=201)


class ProductNewView(LoginRequiredJSONMixin, View):

    def get(self, request):
        return render(request, 'inventory/product_form.html', {'form': ProductForm(), 'title': 'New Product'})


class ProductDetailView(LoginRequiredJSONMixin, View):
    """Detail page; PUT and DELETE are the JSON counterparts."""

    def get(self, request, pk):
        product = get_object_or_404(Product, pk=pk)

        if wants_json(request):
            return json_response(ProductSerializer(product).data)

        context = {
            'product': product,
            'intakes': product.intakes.all(),
            'total_intakes': product.intakes.count(),
        }
        return render(request, 'inventory/product_detail.html', context)

    def put(self, request, pk):
        try:
            product = Product.objects.get(pk=pk)
        except Product.DoesNotExist:
            return json_error('Product not found', status=404)

        try:
            data = load_json(request)
        except BadRequestBody as e:
            return json_error(str(e))

        serializer = ProductSerializer(product, data=data, partial=True)
        if not serializer.is_valid():
            return JsonResponse({
                'error': f"Error updating product: {first_error(serializer.errors)}",
                'errors': serializer.errors,
            }, status=400)

        try:
            product = serializer.save()
        except IntegrityError as e:
            logger.warning(f"Product {pk} update rejected: {e}")
            return json_error("Error updating product: SKU already exists")

        logger.info(f"Product {product.sku} updated via API by {request.user}")
        return json_response(ProductSerializer(product).data)

    def delete(self, request, pk):
        try:
            product = Product.objects.get(pk=pk)
        except Product.DoesNotExist:
            return json_error('Product not found', status=404)

        name = product.name
        product.delete()
        return JsonResponse({'message': f'Product "{name}" deleted'})


class ProductEditView(LoginRequiredJSONMixin, View):

    def get(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        form = ProductForm(instance=product)
        return render(request, 'inventory/product_form.html', {
            'form': form,
            'product': product,
            'title': f'Edit {product.name}',
        })

    def post(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        form = ProductForm(request.POST, instance=product)

        if form.is_valid():
            try:
                form.save()
            except IntegrityError as e:
                logger.warning(f"Product {pk} update rejected: {e}")
                form.add_error('sku', 'SKU already exists')
            else:
                messages.success(request, f'Product "{product.name}" updated')
                return redirect('products:detail', pk=product.pk)

        return render(request, 'inventory/product_form.html', {
            'form': form,
            'product': product,
            'title': f'Edit {product.name}',
            'error': f"Error updating product: {first_error(form.errors)}",
        }, status=400)


class ProductDeleteView(LoginRequiredJSONMixin, View):
    """Form delete: always back to the list, even for an unknown product."""

    def post(self, request, pk):
        product = Product.objects.filter(pk=pk).first()
        if product is None:
            messages.error(request, 'Product not found')
        else:
            name = product.name
            product.delete()
            messages.success(request, f'Product "{name}" deleted')
        return redirect('products:list')


class ProductBarcodeView(LoginRequiredJSONMixin, View):

    def get(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        if not product.sku:
            raise Http404("Product has no SKU")

        if request.GET.get('format') == 'pdf':
            response = HttpResponse(product_label_pdf(product), content_type='application/pdf')
            response['Content-Disposition'] = f'inline; filename="label-{product.sku}.pdf"'
            return response

        return HttpResponse(barcode_svg(product.sku), content_type='image/svg+xml')


class ProductExportCSVView(LoginRequiredJSONMixin, View):

    def get(self, request):
        return export_products_csv(Product.objects.all())


class ProductExportPDFView(LoginRequiredJSONMixin, View):

    def get(self, request):
        return export_products_pdf(list(Product.objects.all()))


# ====================================
# PRODUCT JSON API
# ====================================

class ProductDataListView(generics.ListAPIView):
    """All products, newest first"""
    queryset = Product.objects.all()
    serializer_class = ProductSerializer


class ProductDataDetailView(generics.RetrieveAPIView):
    queryset = Product.objects.all()
    serializer_class = ProductSerializer


class ProductTotalQuantityView(APIView):

    def get(self, request):
        total = Product.objects.aggregate(total=Sum('quantity'))['total'] or 0
        return Response({'totalQuantity': total})


# ====================================
# STOCK INTAKE PAGES
# ====================================

def render_intake_form(request, form, error=None, status=200):
    return render(request, 'inventory/stockintake_form.html', {
        'form': form,
        'title': 'New Stock Intake',
        'error': error,
    }, status=status)


class StockIntakeCollectionView(LoginRequiredJSONMixin, View):
    """GET: intake history. POST: record a delivery from the form or JSON."""

    def get(self, request):
        intakes = StockIntake.objects.select_related('product')

        if wants_json(request):
            return json_response(StockIntakeSerializer(intakes, many=True).data)

        return render(request, 'inventory/stockintake_list.html', {
            'intakes': intakes,
            'title': 'Stock Intake',
        })

    def post(self, request):
        if wants_json(request):
            return self.create_from_json(request)

        form = StockIntakeForm(request.POST)
        if not form.is_valid():
            return render_intake_form(request, form, error=first_error(form.errors), status=400)

        cleaned = form.cleaned_data
        try:
            record_intake(
                product_id=cleaned['product'].pk,
                quantity=cleaned['quantity'],
                total_weight=cleaned['total_weight'],
                received_by=cleaned['received_by'],
                notes=cleaned['notes'],
                min_stock_level=cleaned['min_stock_level'],
                user=request.user,
            )
        except StockIntakeError as e:
            return render_intake_form(request, form, error=e.message, status=400)

        messages.success(request, 'Stock intake recorded')
        return redirect('stock_intake:list')

    def create_from_json(self, request):
        try:
            data = load_json(request)
            intake = record_intake(
                **intake_arguments(data),
                min_stock_level=pick(data, 'min_stock_level', 'minStockLevel'),
                user=request.user,
            )
        except (BadRequestBody, StockIntakeError) as e:
            status = getattr(e, 'status_code', 400)
            return json_error(getattr(e, 'message', str(e)), status=status)
        except Exception:
            logger.exception("Error creating stock intake")
            return json_error('Server error', status=500)

        return json_response(StockIntakeSerializer(intake).data, status=201)


class StockIntakeNewView(LoginRequiredJSONMixin, View):

    def get(self, request):
        initial = {}
        if request.GET.get('product'):
            initial['product'] = request.GET['product']
        return render_intake_form(request, StockIntakeForm(initial=initial))


def render_intake_edit(request, intake, form, error=None, status=200):
    return render(request, 'inventory/stockintake_edit.html', {
        'form': form,
        'intake': intake,
        'error': error,
    }, status=status)


class StockIntakeEditView(LoginRequiredJSONMixin, View):

    def get(self, request, pk):
        intake = get_object_or_404(StockIntake.objects.select_related('product'), pk=pk)
        form = StockIntakeUpdateForm(initial={
            'product': intake.product_id,
            'total_weight': intake.total_weight,
            'received_by': intake.received_by,
            'notes': intake.notes,
        })
        return render_intake_edit(request, intake, form)


class StockIntakeUpdateView(LoginRequiredJSONMixin, View):
    """Form update: the quantity is recalculated from the new total weight."""

    def post(self, request, pk):
        intake = get_object_or_404(StockIntake, pk=pk)
        form = StockIntakeUpdateForm(request.POST)
        if not form.is_valid():
            return render_intake_edit(request, intake, form, error=first_error(form.errors), status=400)

        cleaned = form.cleaned_data
        try:
            revise_intake(
                intake,
                product_id=cleaned['product'].pk,
                total_weight=cleaned['total_weight'],
                received_by=cleaned['received_by'],
                notes=cleaned['notes'],
                user=request.user,
            )
        except StockIntakeError as e:
            return render_intake_edit(request, intake, form, error=e.message, status=400)

        messages.success(request, 'Stock intake updated')
        return redirect('stock_intake:list')


def update_intake_from_data(request, pk, data):
    """Shared JSON update for PUT /stock-intake/<id>/ and PUT /stock-intake/data/<id>/."""
    try:
        intake = StockIntake.objects.get(pk=pk)
    except StockIntake.DoesNotExist:
        return 404, {'error': 'Stock intake not found'}

    try:
        intake = revise_intake(
            intake,
            **intake_arguments(data, default_product_id=intake.product_id),
            user=request.user,
        )
    except StockIntakeError as e:
        return e.status_code, {'error': e.message}

    return 200, StockIntakeSerializer(intake).data


class StockIntakeDetailView(LoginRequiredJSONMixin, View):

    def get(self, request, pk):
        intake = get_object_or_404(StockIntake.objects.select_related('product'), pk=pk)
        if wants_json(request):
            return json_response(StockIntakeSerializer(intake).data)
        return redirect('stock_intake:edit', pk=intake.pk)

    def put(self, request, pk):
        try:
            data = load_json(request)
        except BadRequestBody as e:
            return json_error(str(e))

        try:
            status, payload = update_intake_from_data(request, pk, data)
        except Exception:
            logger.exception(f"Error updating stock intake {pk}")
            return json_error('Server error', status=500)
        return json_response(payload, status=status)


class StockIntakeDeleteView(LoginRequiredJSONMixin, View):

    def post(self, request, pk):
        intake = get_object_or_404(StockIntake, pk=pk)
        remove_intake(intake)
        messages.success(request, 'Stock intake deleted and stock reverted')
        return redirect('stock_intake:list')


class StockIntakeExportCSVView(LoginRequiredJSONMixin, View):

    def get(self, request):
        return export_intakes_csv(StockIntake.objects.select_related('product'))


class StockIntakeExportPDFView(LoginRequiredJSONMixin, View):

    def get(self, request):
        return export_intakes_pdf(StockIntake.objects.select_related('product'))


# ====================================
# STOCK INTAKE JSON API
# ====================================

class IntakeDataListView(generics.ListAPIView):
    """All intakes, newest first, with the product nested"""
    queryset = StockIntake.objects.select_related('product')
    serializer_class = StockIntakeSerializer


class IntakeDataDetailView(APIView):

    def get(self, request, pk):
        intake = get_object_or_404(StockIntake.objects.select_related('product'), pk=pk)
        return Response(StockIntakeSerializer(intake).data)

    def put(self, request, pk):
        status, payload = update_intake_from_data(request, pk, request.data)
        return Response(payload, status=status)


class LowStockCountView(APIView):

    def get(self, request):
        return Response({'count': low_stock_products().count()})


class LowStockProductsView(APIView):

    def get(self, request):
        products = low_stock_products()
        return Response({'products': LowStockProductSerializer(products, many=True).data})
