from django.core.management.base import BaseCommand, CommandError

from order.apps import get_order_service
from order.exceptions import OrderException


class Command(BaseCommand):
    help = "Expire one batch of unpaid orders older than the given minutes, meant to be run by cron"

    def add_arguments(self, parser):
        parser.add_argument("--limit", type=int, default=100)
        parser.add_argument("--minutes", type=int, default=30)

    def handle(self, *args, **options):
        try:
            expired = get_order_service().close_timeout_orders(options["limit"], options["minutes"])
        except OrderException as exception:
            raise CommandError(str(exception)) from exception
        self.stdout.write("expired {} orders".format(expired))
