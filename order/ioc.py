from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from order.collaborators import ProductService, CreditService, PaymentService
from order.lifecycle import OrderLifecycle
from order.payment_composer import PaymentComposer
from order.pricing import PricingChecker
from order.service import OrderService
from order.store import OrderStore

COLLABORATOR_SETTINGS = ("ORDER_PRODUCT_SERVICE", "ORDER_CREDIT_SERVICE", "ORDER_PAYMENT_SERVICE")


def collaborators_configured() -> bool:
    return all(getattr(settings, name, None) for name in COLLABORATOR_SETTINGS)


def _load_collaborator(setting_name: str):
    path = getattr(settings, setting_name, None)
    if not path:
        raise ImproperlyConfigured("{} is not configured".format(setting_name))
    return import_string(path)()


def build_order_service(product_service: ProductService = None, credit_service: CreditService = None,
                        payment_service: PaymentService = None) -> OrderService:
    """
    composition root of the order module, collaborators not passed in are
    instantiated from the dotted paths in settings
    """
    if product_service is None:
        product_service = _load_collaborator("ORDER_PRODUCT_SERVICE")
    if credit_service is None:
        credit_service = _load_collaborator("ORDER_CREDIT_SERVICE")
    if payment_service is None:
        payment_service = _load_collaborator("ORDER_PAYMENT_SERVICE")

    store = OrderStore()
    return OrderService(
        store=store,
        pricing=PricingChecker(product_service),
        composer=PaymentComposer(payment_service),
        lifecycle=OrderLifecycle(store),
        credit_service=credit_service,
        executor=ThreadPoolExecutor(max_workers=settings.ORDER_PREVIEW_WORKERS, thread_name_prefix="order-preview"),
    )
