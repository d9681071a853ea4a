"""
Tests for the /stock-intake/ pages and JSON API
"""

from decimal import Decimal

import pytest

from inventory.models import StockIntake
from inventory.services.stock_intake import record_intake

pytestmark = pytest.mark.django_db


# ============================================================================
# AUTHENTICATION
# ============================================================================

def test_page_requires_login(client):
    response = client.get('/stock-intake/')
    assert response.status_code == 302
    assert response['Location'].startswith('/login/')


def test_json_request_gets_401(client, make_product):
    product = make_product()
    response = client.post(
        '/stock-intake/',
        {'productId': product.pk, 'quantity': 1},
        content_type='application/json',
    )
    assert response.status_code == 401
    assert response.json() == {}


def test_api_requires_login(client):
    assert client.get('/stock-intake/data/').status_code == 401


# ============================================================================
# PAGES
# ============================================================================

def test_list_page(auth_client, make_product):
    product = make_product(name='Copper Wire')
    record_intake(product_id=product.pk, quantity=2)

    response = auth_client.get('/stock-intake/')
    assert response.status_code == 200
    assert b'Stock Intake' in response.content
    assert b'Copper Wire' in response.content


def test_new_page(auth_client, make_product):
    make_product(name='Copper Wire')
    response = auth_client.get('/stock-intake/new/')
    assert response.status_code == 200
    assert b'New Stock Intake' in response.content
    assert b'min_stock_level' in response.content


def test_form_create_redirects(auth_client, make_product, user):
    product = make_product(weight=Decimal('2.5'))
    response = auth_client.post('/stock-intake/', {
        'product': product.pk,
        'total_weight': '10',
        'quantity': '',
        'min_stock_level': '',
        'received_by': '',
        'notes': '',
    })

    assert response.status_code == 302
    assert response['Location'] == '/stock-intake/'
    intake = StockIntake.objects.get()
    assert intake.quantity == Decimal('4')
    assert intake.received_by == user.email


def test_form_create_without_amounts(auth_client, make_product):
    product = make_product()
    response = auth_client.post('/stock-intake/', {'product': product.pk})

    assert response.status_code == 400
    assert b'Either quantity or weight must be provided' in response.content
    assert not StockIntake.objects.exists()


def test_form_create_without_unit_weight(auth_client, make_product):
    product = make_product(weight=None)
    response = auth_client.post('/stock-intake/', {'product': product.pk, 'total_weight': '10'})

    assert response.status_code == 400
    assert b'valid unit weight' in response.content


def test_edit_page(auth_client, make_product):
    product = make_product()
    intake = record_intake(product_id=product.pk, quantity=2)
    assert auth_client.get(f'/stock-intake/{intake.pk}/edit/').status_code == 200
    assert auth_client.get('/stock-intake/999999/edit/').status_code == 404


def test_form_update(auth_client, make_product):
    product = make_product(weight=Decimal('2'))
    intake = record_intake(product_id=product.pk, quantity=5)

    response = auth_client.post(f'/stock-intake/{intake.pk}/update/', {
        'product': product.pk,
        'total_weight': '4',
        'received_by': 'Night shift',
        'notes': '',
    })

    assert response.status_code == 302
    product.refresh_from_db()
    intake.refresh_from_db()
    assert intake.quantity == Decimal('2')
    assert intake.received_by == 'Night shift'
    assert product.quantity == Decimal('2')


def test_form_update_rejects_zero_weight(auth_client, make_product):
    product = make_product()
    intake = record_intake(product_id=product.pk, quantity=5)

    response = auth_client.post(f'/stock-intake/{intake.pk}/update/', {
        'product': product.pk,
        'total_weight': '0',
    })
    assert response.status_code == 400
    assert b'Invalid total weight' in response.content


def test_form_delete_reverts_stock(auth_client, make_product):
    product = make_product(weight=Decimal('1'))
    intake = record_intake(product_id=product.pk, quantity=5)

    response = auth_client.post(f'/stock-intake/{intake.pk}/delete/')

    assert response.status_code == 302
    product.refresh_from_db()
    assert product.quantity == Decimal('0')
    assert product.stock_weight == Decimal('0')
    assert auth_client.post(f'/stock-intake/{intake.pk}/delete/').status_code == 404


# ============================================================================
# JSON CREATE / UPDATE
# ============================================================================

def test_json_create_by_weight(auth_client, make_product):
    product = make_product(weight=Decimal('2.5'))
    response = auth_client.post(
        '/stock-intake/',
        {'productId': product.pk, 'weight': 11, 'receivedBy': 'Dock 2'},
        content_type='application/json',
    )

    assert response.status_code == 201
    body = response.json()
    assert body['product_id'] == product.pk
    assert body['product']['name'] == product.name
    assert body['quantity'] == 4
    assert body['weight'] == 11
    assert body['total_weight'] == 11
    assert body['single_weight'] == 2.5
    assert body['received_by'] == 'Dock 2'


def test_json_create_by_quantity(auth_client, make_product):
    product = make_product(weight=Decimal('0.5'))
    response = auth_client.post(
        '/stock-intake/',
        {'product': product.pk, 'quantity': 8},
        content_type='application/json',
    )

    assert response.status_code == 201
    product.refresh_from_db()
    assert product.quantity == Decimal('8')
    assert product.stock_weight == Decimal('4')


@pytest.mark.parametrize('payload, status, message', [
    ({'quantity': 1}, 400, 'productId is required'),
    ({'productId': 'abc', 'quantity': 1}, 400, 'Invalid product ID format'),
    ({'productId': 999999, 'quantity': 1}, 404, 'Product not found'),
])
def test_json_create_product_errors(auth_client, payload, status, message):
    response = auth_client.post('/stock-intake/', payload, content_type='application/json')
    assert response.status_code == status
    assert response.json() == {'error': message}


def test_json_create_negative_quantity(auth_client, make_product):
    product = make_product()
    response = auth_client.post(
        '/stock-intake/',
        {'productId': product.pk, 'quantity': -2},
        content_type='application/json',
    )
    assert response.status_code == 400
    assert response.json()['error'] == 'Quantity cannot be negative'


def test_json_create_oversized_quantity(auth_client, make_product):
    product = make_product()
    response = auth_client.post(
        '/stock-intake/',
        {'productId': product.pk, 'quantity': '1e12'},
        content_type='application/json',
    )

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid quantity'}
    assert StockIntake.objects.count() == 0
    assert auth_client.get('/products/data/').status_code == 200


def test_json_put_update(auth_client, make_product):
    product = make_product(weight=Decimal('1'))
    intake = record_intake(product_id=product.pk, quantity=5)

    response = auth_client.put(
        f'/stock-intake/{intake.pk}/',
        {'quantity': 7, 'notes': 'recount'},
        content_type='application/json',
    )

    assert response.status_code == 200
    assert response.json()['quantity'] == 7
    product.refresh_from_db()
    assert product.quantity == Decimal('7')


def test_json_put_missing_intake(auth_client):
    response = auth_client.put('/stock-intake/999999/', {'quantity': 1}, content_type='application/json')
    assert response.status_code == 404
    assert response.json() == {'error': 'Stock intake not found'}


# ============================================================================
# DATA API
# ============================================================================

def test_data_list_newest_first(auth_client, make_product):
    product = make_product(name='Nails')
    first = record_intake(product_id=product.pk, quantity=1)
    second = record_intake(product_id=product.pk, quantity=2)

    response = auth_client.get('/stock-intake/data/')
    assert response.status_code == 200
    body = response.json()
    assert [row['id'] for row in body] == [second.pk, first.pk]
    assert body[0]['product']['name'] == 'Nails'


def test_data_detail_and_put(auth_client, make_product):
    product = make_product(weight=Decimal('2'))
    intake = record_intake(product_id=product.pk, quantity=1)

    assert auth_client.get(f'/stock-intake/data/{intake.pk}/').json()['id'] == intake.pk
    assert auth_client.get('/stock-intake/data/999999/').status_code == 404

    response = auth_client.put(
        f'/stock-intake/data/{intake.pk}/',
        {'totalWeight': 8},
        content_type='application/json',
    )
    assert response.status_code == 200
    assert response.json()['quantity'] == 4


def test_data_put_error(auth_client, make_product):
    product = make_product(weight=None)
    intake = record_intake(product_id=product.pk, quantity=1)

    response = auth_client.put(
        f'/stock-intake/data/{intake.pk}/',
        {'weight': 8},
        content_type='application/json',
    )
    assert response.status_code == 400
    assert response.json() == {'error': 'Selected product does not have a valid unit weight configured'}


def test_data_put_oversized_quantity(auth_client, make_product):
    product = make_product(weight=Decimal('1'))
    intake = record_intake(product_id=product.pk, quantity=3)

    response = auth_client.put(
        f'/stock-intake/data/{intake.pk}/',
        {'quantity': '1e30'},
        content_type='application/json',
    )

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid quantity'}
    intake.refresh_from_db()
    product.refresh_from_db()
    assert intake.quantity == Decimal('3')
    assert product.quantity == Decimal('3')


def test_low_stock_endpoints(auth_client, make_product):
    make_product(name='Plenty', quantity=Decimal('40'), min_stock_level=Decimal('10'))
    short = make_product(name='Short', quantity=Decimal('2'), min_stock_level=Decimal('10'))

    count = auth_client.get('/stock-intake/data/low-stock/count/')
    assert count.status_code == 200
    assert count.json() == {'count': 1}

    products = auth_client.get('/stock-intake/data/low-stock/products/').json()['products']
    assert [p['id'] for p in products] == [short.pk]
    assert products[0]['min_stock_level'] == 10
    assert products[0]['shortfall'] == 8
