from django.apps import AppConfig, apps
from django.core.exceptions import ImproperlyConfigured


class OrderConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "order"
    verbose_name = "订单"

    def ready(self):
        from order.ioc import build_order_service, collaborators_configured

        # management commands like migrate must work before collaborators are deployed
        self.service = build_order_service() if collaborators_configured() else None


def get_order_service():
    service = apps.get_app_config("order").service
    if service is None:
        raise ImproperlyConfigured("order collaborators are not configured")
    return service
