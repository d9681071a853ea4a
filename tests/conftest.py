"""Shared fixtures: users with roles, logged-in clients and a product factory."""

from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.core.cache import cache
from django.test import Client

from inventory.models import Product
from users.models import Profile

PASSWORD = 'secret123'


@pytest.fixture(autouse=True)
def clear_cache():
    # DRF throttle counters live in the cache
    cache.clear()
    yield
    cache.clear()


def create_user(email, role=Profile.ROLE_USER, **extra):
    user = User.objects.create_user(username=email, email=email, password=PASSWORD, **extra)
    user.profile.role = role
    user.profile.save()
    return user


@pytest.fixture
def user(db):
    return create_user('clerk@example.com')


@pytest.fixture
def admin_account(db):
    return create_user('boss@example.com', role=Profile.ROLE_ADMIN)


@pytest.fixture
def auth_client(user):
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def admin_role_client(admin_account):
    client = Client()
    client.force_login(admin_account)
    return client


@pytest.fixture
def make_product(db):
    def factory(name='Widget', weight=Decimal('2.5'), **fields):
        fields.setdefault('location', 'Aisle 1')
        fields.setdefault('price', Decimal('9.99'))
        return Product.objects.create(name=name, weight=weight, **fields)
    return factory
