"""
Tests for the management commands: recalculate_stock, clear_inventory, create_admin
"""

from decimal import Decimal
from io import StringIO

import pytest
from django.contrib.auth.models import User
from django.core.management import CommandError, call_command

from inventory.models import Product, StockIntake
from inventory.services.stock_intake import record_intake
from users.models import Profile, role_for

from tests.conftest import PASSWORD, create_user

pytestmark = pytest.mark.django_db


def run(*args, **options):
    out = StringIO()
    call_command(*args, stdout=out, **options)
    return out.getvalue()


# ============================================================================
# RECALCULATE STOCK
# ============================================================================

@pytest.fixture
def drifted_product(make_product):
    product = make_product(weight=Decimal('2'))
    record_intake(product_id=product.pk, quantity=3)
    record_intake(product_id=product.pk, total_weight=10)
    Product.objects.filter(pk=product.pk).update(stock_quantity=0, stock_weight=0)
    return product


def test_recalculate_dry_run_saves_nothing(drifted_product):
    output = run('recalculate_stock', dry_run=True)

    assert 'Products to update: 1' in output
    drifted_product.refresh_from_db()
    assert drifted_product.stock_quantity == Decimal('0')
    assert drifted_product.stock_weight == Decimal('0')


def test_recalculate_rebuilds_counters(drifted_product, make_product):
    make_product(name='Untouched')

    output = run('recalculate_stock')

    assert 'Products checked: 2' in output
    assert 'Products updated: 1' in output
    drifted_product.refresh_from_db()
    assert drifted_product.stock_quantity == Decimal('8')
    assert drifted_product.stock_weight == Decimal('16')


# ============================================================================
# CLEAR INVENTORY
# ============================================================================

def test_clear_inventory_with_yes(make_product, user):
    product = make_product()
    record_intake(product_id=product.pk, quantity=2)

    output = run('clear_inventory', yes=True)

    assert 'Inventory cleared' in output
    assert Product.objects.count() == 0
    assert StockIntake.objects.count() == 0
    assert User.objects.filter(pk=user.pk).exists()


def test_clear_inventory_aborts_without_confirmation(make_product, monkeypatch):
    make_product()
    monkeypatch.setattr('builtins.input', lambda prompt: 'no')

    output = run('clear_inventory')

    assert 'Aborted' in output
    assert Product.objects.count() == 1


def test_clear_inventory_confirmed_at_prompt(make_product, monkeypatch):
    make_product()
    monkeypatch.setattr('builtins.input', lambda prompt: ' YES ')

    run('clear_inventory')

    assert Product.objects.count() == 0


# ============================================================================
# CREATE ADMIN
# ============================================================================

def test_create_admin_creates_account():
    run('create_admin', email='Owner@Example.com', password='longsecret', superuser=True)

    account = User.objects.get(username='owner@example.com')
    assert account.check_password('longsecret')
    assert account.is_superuser and account.is_staff
    assert account.profile.role == Profile.ROLE_ADMIN


def test_create_admin_promotes_existing_user(monkeypatch):
    monkeypatch.delenv('ADMIN_PASSWORD', raising=False)
    existing = create_user('clerk@example.com')
    assert role_for(existing) == Profile.ROLE_USER

    output = run('create_admin', email='CLERK@example.com')

    assert 'already exists' in output
    existing.refresh_from_db()
    assert Profile.objects.get(user=existing).role == Profile.ROLE_ADMIN
    assert existing.check_password(PASSWORD)
    assert not existing.is_superuser
    assert User.objects.count() == 1


def test_create_admin_reads_environment(monkeypatch):
    monkeypatch.setenv('ADMIN_EMAIL', 'env-admin@example.com')
    monkeypatch.setenv('ADMIN_PASSWORD', 'fromenv123')

    run('create_admin')

    account = User.objects.get(username='env-admin@example.com')
    assert account.check_password('fromenv123')
    assert account.profile.role == Profile.ROLE_ADMIN


@pytest.mark.parametrize('options, message', [
    ({}, 'An email is required'),
    ({'email': 'new@example.com', 'password': '123'}, 'A password of at least 6 characters is required'),
])
def test_create_admin_rejects_bad_input(monkeypatch, options, message):
    monkeypatch.delenv('ADMIN_EMAIL', raising=False)
    monkeypatch.delenv('ADMIN_PASSWORD', raising=False)

    with pytest.raises(CommandError, match=message):
        run('create_admin', **options)
    assert not User.objects.exists()
