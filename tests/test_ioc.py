"""Tests for the order composition root."""

import pytest
from django.core.exceptions import ImproperlyConfigured

from order.apps import get_order_service
from order.ioc import build_order_service, collaborators_configured
from order.service import OrderService
from tests.fakes import FakeProductService, FakePaymentService


def test_builds_from_settings():
    service = build_order_service()
    try:
        assert isinstance(service, OrderService)
        assert isinstance(service.pricing.product_service, FakeProductService)
        assert isinstance(service.composer.payment_service, FakePaymentService)
        assert service.lifecycle.store is service.store
    finally:
        service.executor.shutdown(wait=True)


def test_missing_collaborator(settings):
    settings.ORDER_PAYMENT_SERVICE = ""

    assert not collaborators_configured()
    with pytest.raises(ImproperlyConfigured):
        build_order_service()


def test_unconfigured_app_refuses_requests(monkeypatch):
    from django.apps import apps

    monkeypatch.setattr(apps.get_app_config("order"), "service", None)

    with pytest.raises(ImproperlyConfigured):
        get_order_service()
