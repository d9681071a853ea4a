"""
Tests for the role-gated /admin/users/ API
"""

import pytest
from django.contrib.auth.models import User

from tests.conftest import PASSWORD

pytestmark = pytest.mark.django_db


def test_anonymous_gets_401(client):
    assert client.get('/admin/users/').status_code == 401


def test_regular_user_gets_403(auth_client):
    assert auth_client.get('/admin/users/').status_code == 403
    response = auth_client.post(
        '/admin/users/',
        {'email': 'x@example.com', 'password': 'abcdef'},
        content_type='application/json',
    )
    assert response.status_code == 403


def test_list_users(admin_role_client, admin_account, user):
    response = admin_role_client.get('/admin/users/')

    assert response.status_code == 200
    rows = {row['email']: row for row in response.json()}
    assert rows[user.email]['role'] == 'user'
    assert rows[admin_account.email]['role'] == 'admin'
    assert 'password' not in rows[user.email]


def test_create_user(admin_role_client):
    response = admin_role_client.post(
        '/admin/users/',
        {'email': 'Picker@Example.com', 'password': 'abcdef', 'role': 'admin'},
        content_type='application/json',
    )

    assert response.status_code == 201
    assert response.json()['email'] == 'picker@example.com'
    created = User.objects.get(email='picker@example.com')
    assert created.profile.role == 'admin'
    assert created.check_password('abcdef')


@pytest.mark.parametrize('payload', [
    {'email': 'not-an-email', 'password': 'abcdef'},
    {'email': 'short@example.com', 'password': 'abc'},
    {'email': 'nopass@example.com'},
    {'email': 'bad-role@example.com', 'password': 'abcdef', 'role': 'owner'},
])
def test_create_user_validation(admin_role_client, payload):
    response = admin_role_client.post('/admin/users/', payload, content_type='application/json')
    assert response.status_code == 400


def test_create_duplicate_email(admin_role_client, user):
    response = admin_role_client.post(
        '/admin/users/',
        {'email': user.email, 'password': 'abcdef'},
        content_type='application/json',
    )
    assert response.status_code == 400


def test_retrieve_and_update(admin_role_client, user):
    assert admin_role_client.get(f'/admin/users/{user.pk}/').json()['email'] == user.email

    response = admin_role_client.put(
        f'/admin/users/{user.pk}/',
        {'role': 'admin'},
        content_type='application/json',
    )
    assert response.status_code == 200
    assert response.json()['role'] == 'admin'

    user.refresh_from_db()
    assert user.profile.role == 'admin'
    assert user.check_password(PASSWORD)


def test_update_password(admin_role_client, user):
    response = admin_role_client.put(
        f'/admin/users/{user.pk}/',
        {'password': 'brand-new'},
        content_type='application/json',
    )
    assert response.status_code == 200
    user.refresh_from_db()
    assert user.check_password('brand-new')


def test_delete_user(admin_role_client, user):
    response = admin_role_client.delete(f'/admin/users/{user.pk}/')

    assert response.status_code == 200
    assert user.email in response.json()['message']
    assert not User.objects.filter(pk=user.pk).exists()
    assert admin_role_client.get(f'/admin/users/{user.pk}/').status_code == 404


def test_superuser_is_admin(client, db):
    boss = User.objects.create_superuser(username='root@example.com', email='root@example.com', password=PASSWORD)
    client.force_login(boss)
    assert client.get('/admin/users/').status_code == 200
