"""Pytest fixtures for the order tests."""

import json

import pytest
from django.apps import apps
from django.core.cache import cache
from django.test import Client

from order.ioc import build_order_service
from order.store import OrderStore
from order.util import make_token
from tests.fakes import FakeProductService, FakeCreditService, FakePaymentService
from tests.helpers import TEST_UID


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def product_service():
    return FakeProductService()


@pytest.fixture
def credit_service():
    return FakeCreditService()


@pytest.fixture
def payment_service():
    return FakePaymentService()


@pytest.fixture
def order_service(product_service, credit_service, payment_service, monkeypatch):
    """A freshly wired service, also installed on the app config for the views."""
    service = build_order_service(product_service=product_service, credit_service=credit_service,
                                  payment_service=payment_service)
    monkeypatch.setattr(apps.get_app_config("order"), "service", service)
    yield service
    service.executor.shutdown(wait=True)


@pytest.fixture
def store():
    return OrderStore()


@pytest.fixture
def api(order_service):
    """Django test client posting json as TEST_UID."""
    client = Client(HTTP_AUTHORIZATION="Bearer {}".format(make_token(TEST_UID)))

    def post(path, body):
        return client.post(path, data=json.dumps(body), content_type="application/json")

    post.client = client
    return post

