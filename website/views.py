# website/views.py
import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.db.models import Sum
from django.http import JsonResponse
from django.shortcuts import render, redirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View

from inventory.models import Product, StockIntake
from inventory.services.stock_intake import low_stock_products
from inventory.views import BadRequestBody, load_json
from users.models import role_for
from users.permissions import LoginRequiredJSONMixin, wants_json
from .forms import LoginForm, RegistrationForm

logger = logging.getLogger(__name__)


def user_payload(user):
    return {'id': user.id, 'email': user.email, 'role': role_for(user)}


def home(request):
    return redirect('dashboard')


# ====================================
# LOGIN / LOGOUT / REGISTER
# ====================================

class RoleBasedLoginView(View):
    """Email + password login for the pages and for JSON clients."""
    template_name = 'website/login.html'

    def get(self, request):
        if request.user.is_authenticated:
            return redirect(settings.LOGIN_REDIRECT_URL)
        return render(request, self.template_name, {'form': LoginForm()})

    def post(self, request):
        as_json = wants_json(request)
        if as_json:
            try:
                data = load_json(request)
            except BadRequestBody as e:
                return JsonResponse({'error': str(e)}, status=400)
        else:
            data = request.POST

        form = LoginForm(data)
        if not form.is_valid():
            if as_json:
                return JsonResponse({'error': 'Email and password are required'}, status=400)
            return render(request, self.template_name, {'form': form}, status=400)

        email = form.cleaned_data['email']
        user = authenticate(request, username=email, password=form.cleaned_data['password'])
        if user is None:
            logger.warning(f"Failed login for {email}")
            if as_json:
                return JsonResponse({'error': 'Invalid email or password'}, status=401)
            return render(request, self.template_name, {
                'form': form,
                'error': 'Invalid email or password',
            }, status=400)

        login(request, user)
        logger.info(f"User {email} logged in (role: {role_for(user)})")

        if as_json:
            return JsonResponse(user_payload(user))
        next_url = request.GET.get('next')
        if not next_url or not url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
            next_url = settings.LOGIN_REDIRECT_URL
        return redirect(next_url)


class LogoutView(View):

    def get(self, request):
        if request.user.is_authenticated:
            logger.info(f"User {request.user.email} logged out")
        logout(request)
        return redirect(settings.LOGIN_URL)

    post = get


class RegisterView(View):
    template_name = 'website/register.html'

    def get(self, request):
        return render(request, self.template_name, {'form': RegistrationForm()})

    def post(self, request):
        as_json = wants_json(request)
        if as_json:
            try:
                data = load_json(request)
            except BadRequestBody as e:
                return JsonResponse({'error': str(e)}, status=400)
        else:
            data = request.POST

        form = RegistrationForm(data)
        if not form.is_valid():
            if as_json:
                return JsonResponse({'error': 'Invalid registration data', 'errors': form.errors}, status=400)
            return render(request, self.template_name, {'form': form}, status=400)

        user = form.save()
        logger.info(f"New user registered: {user.email}")

        if as_json:
            return JsonResponse(user_payload(user), status=201)
        messages.success(request, 'Account created, please log in')
        return redirect(settings.LOGIN_URL)


class MeView(View):

    def get(self, request):
        if not request.user.is_authenticated:
            return JsonResponse({}, status=401)
        return JsonResponse(user_payload(request.user))


# ====================================
# DASHBOARD
# ====================================

class DashboardView(LoginRequiredJSONMixin, View):

    def get(self, request):
        totals = Product.objects.aggregate(
            total_quantity=Sum('quantity'),
            total_stock_weight=Sum('stock_weight'),
        )
        low_stock = low_stock_products()
        recent_count = settings.INVENTORY_CONFIG['RECENT_INTAKE_COUNT']

        context = {
            'product_count': Product.objects.count(),
            'intake_count': StockIntake.objects.count(),
            'total_quantity': totals['total_quantity'] or 0,
            'total_stock_weight': totals['total_stock_weight'] or 0,
            'low_stock_products': low_stock[:10],
            'low_stock_total': low_stock.count(),
            'recent_intakes': StockIntake.objects.select_related('product')[:recent_count],
        }
        return render(request, 'website/dashboard.html', context)
