"""
Shared fixtures: a Flask app whose products collection is an in-memory
mongomock collection, plus helpers for authenticated requests.
"""

import os
import sys
from unittest import mock

import mongomock
import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'backend'))

from catalog import create_app  # noqa: E402
from catalog.services.auth import issue_token  # noqa: E402
from config import TestingConfig  # noqa: E402


@pytest.fixture
def collection():
    return mongomock.MongoClient().catalog_test.products


@pytest.fixture
def app(collection):
    app = create_app(TestingConfig)
    with mock.patch('catalog.services.product_repository.get_products_collection',
                    return_value=collection):
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """Build Authorization headers for a given user id."""
    def _headers(user_id='alice'):
        with app.app_context():
            token = issue_token(user_id)
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest.fixture
def valid_product():
    return {
        'name': 'Lipstick',
        'picture': 'https://cdn.example.com/lipstick.png',
        'description': 'Long-lasting matte lipstick',
        'gender': 'female',
        'category': 'makeup',
        'price': 19.99,
    }
