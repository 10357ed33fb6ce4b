from datetime import timedelta
from typing import List, Iterable

from django.db import transaction, IntegrityError
from django.utils import timezone

from order.exceptions import OrderNotFoundException, DuplicateRequestException, InvalidArgumentException
from order.models.Order import Order
from order.models.OrderItem import OrderItem
from order.models.status import ORDER_STATUS_UNPAID


class OrderStore:
    """
    relational storage of orders and their items.
    Every status change goes through a guarded UPDATE whose WHERE clause
    carries the allowed source statuses, the affected row count tells the
    caller whether it won.
    """

    def create_order(self, order: Order, items: List[OrderItem]) -> int:
        """
        insert an order and all its items as one unit
        :param order: unsaved order
        :param items: unsaved items of the order, at least one
        :return: id of the new order
        """
        if len(items) == 0:
            raise InvalidArgumentException("订单至少包含一个商品")
        now = timezone.now()
        order.ctime = now
        order.utime = now
        try:
            with transaction.atomic():
                order.save(force_insert=True)
                for item in items:
                    item.order = order
                OrderItem.objects.bulk_create(items)
        except IntegrityError as error:
            order.pk = None
            if order.request_id is not None and Order.objects.filter(request_id=order.request_id).exists():
                raise DuplicateRequestException(order.request_id) from error
            raise
        return order.id

    def exists_by_request_id(self, request_id: str) -> bool:
        return Order.objects.filter(request_id=request_id).exists()

    def find_order_by_sn(self, sn: str) -> Order:
        order = Order.objects.filter(sn=sn).prefetch_related("items").first()
        if order is None:
            raise OrderNotFoundException(sn)
        return order

    def find_order_by_sn_and_buyer_id(self, sn: str, buyer_id: int) -> Order:
        # another buyer's order looks exactly like a missing one
        order = Order.objects.filter(sn=sn, buyer_id=buyer_id).prefetch_related("items").first()
        if order is None:
            raise OrderNotFoundException(sn)
        return order

    def list_orders(self, buyer_id: int, offset: int, limit: int) -> List[Order]:
        orders = Order.objects.filter(buyer_id=buyer_id).order_by("-ctime", "-id").prefetch_related("items")
        return list(orders[offset:offset + limit])

    def count_orders(self, buyer_id: int) -> int:
        return Order.objects.filter(buyer_id=buyer_id).count()

    def list_all_orders(self, buyer_id: int) -> List[Order]:
        return list(Order.objects.filter(buyer_id=buyer_id).order_by("-ctime", "-id").prefetch_related("items"))

    def update_status_by_sn(self, sn: str, buyer_id: int, from_statuses: Iterable[int], to_status: int) -> int:
        """
        compare-and-swap the status of one order
        :return: affected rows, 0 means the order is not owned by the buyer or already left from_statuses
        """
        return Order.objects.filter(sn=sn, buyer_id=buyer_id, status__in=list(from_statuses)) \
            .update(status=to_status, utime=timezone.now())

    def find_timeout_orders(self, older_than_minutes: int, limit: int) -> List[Order]:
        cutoff = timezone.now() - timedelta(minutes=older_than_minutes)
        orders = Order.objects.filter(status=ORDER_STATUS_UNPAID, ctime__lte=cutoff).order_by("id")
        return list(orders[:limit])

    def update_status_by_ids(self, ids: List[int], from_statuses: Iterable[int], to_status: int) -> int:
        if len(ids) == 0:
            return 0
        return Order.objects.filter(id__in=ids, status__in=list(from_statuses)) \
            .update(status=to_status, utime=timezone.now())
