"""Tests for OrderLifecycle."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import connection

from order.exceptions import InvalidArgumentException, OrderStatusConflictException
from order.lifecycle import OrderLifecycle
from order.models.Log import Log
from order.models.Order import Order
from order.models.status import ORDER_STATUS_UNPAID, ORDER_STATUS_COMPLETED, ORDER_STATUS_CANCELED, \
    ORDER_STATUS_EXPIRED
from tests.helpers import TEST_UID, make_order

pytestmark = pytest.mark.django_db


@pytest.fixture
def lifecycle(store):
    return OrderLifecycle(store)


def status_of(sn):
    return Order.objects.get(sn=sn).status


class TestTransitions:

    def test_complete(self, store, lifecycle):
        make_order(store, "orderSN-22")

        lifecycle.complete("orderSN-22", TEST_UID)

        assert status_of("orderSN-22") == ORDER_STATUS_COMPLETED
        assert Log.objects.filter(uid=TEST_UID, detail__contains="orderSN-22").exists()

    def test_cancel(self, store, lifecycle):
        make_order(store, "orderSN-44")

        lifecycle.cancel("orderSN-44", TEST_UID)

        assert status_of("orderSN-44") == ORDER_STATUS_CANCELED

    def test_cancel_after_complete_conflicts(self, store, lifecycle):
        make_order(store, "orderSN-1")
        lifecycle.complete("orderSN-1", TEST_UID)

        with pytest.raises(OrderStatusConflictException):
            lifecycle.cancel("orderSN-1", TEST_UID)
        assert status_of("orderSN-1") == ORDER_STATUS_COMPLETED

    def test_complete_after_cancel_conflicts(self, store, lifecycle):
        make_order(store, "orderSN-1")
        lifecycle.cancel("orderSN-1", TEST_UID)

        with pytest.raises(OrderStatusConflictException):
            lifecycle.complete("orderSN-1", TEST_UID)
        assert status_of("orderSN-1") == ORDER_STATUS_CANCELED

    def test_expired_order_cannot_be_completed(self, store, lifecycle):
        make_order(store, "orderSN-1")
        lifecycle.close_timeout_orders(10, 0)

        with pytest.raises(OrderStatusConflictException):
            lifecycle.complete("orderSN-1", TEST_UID)
        assert status_of("orderSN-1") == ORDER_STATUS_EXPIRED

    def test_other_buyer_conflicts(self, store, lifecycle):
        make_order(store, "orderSN-1")

        with pytest.raises(OrderStatusConflictException):
            lifecycle.cancel("orderSN-1", TEST_UID + 1)
        assert status_of("orderSN-1") == ORDER_STATUS_UNPAID

    def test_unknown_order_conflicts(self, lifecycle):
        with pytest.raises(OrderStatusConflictException):
            lifecycle.complete("InvalidOrderSN", TEST_UID)

    @pytest.mark.parametrize("sn, buyer_id", [("", TEST_UID), ("orderSN-1", 0), ("orderSN-1", -1)])
    def test_invalid_arguments(self, lifecycle, sn, buyer_id):
        with pytest.raises(InvalidArgumentException):
            lifecycle.complete(sn, buyer_id)


class TestCloseTimeoutOrders:

    @pytest.fixture
    def fifteen_orders(self, store):
        return [make_order(store, "OrderSN-close-{}".format(200 + idx), buyer_id=200 + idx, price=100)
                for idx in range(15)]

    def test_one_batch_expires_oldest_ids(self, lifecycle, fifteen_orders):
        expired = lifecycle.close_timeout_orders(10, 0)

        assert expired == 10
        statuses = [status_of(order.sn) for order in fifteen_orders]
        assert statuses[:10] == [ORDER_STATUS_EXPIRED] * 10
        assert statuses[10:] == [ORDER_STATUS_UNPAID] * 5

    def test_repeated_batches_drain_backlog(self, lifecycle, fifteen_orders):
        assert lifecycle.close_timeout_orders(10, 0) == 10
        assert lifecycle.close_timeout_orders(10, 0) == 5
        assert lifecycle.close_timeout_orders(10, 0) == 0

        assert all(status_of(order.sn) == ORDER_STATUS_EXPIRED for order in fifteen_orders)

    def test_limit_equal_to_backlog(self, lifecycle, fifteen_orders):
        assert lifecycle.close_timeout_orders(15, 0) == 15
        assert all(status_of(order.sn) == ORDER_STATUS_EXPIRED for order in fifteen_orders)

    def test_recent_orders_untouched(self, lifecycle, fifteen_orders):
        assert lifecycle.close_timeout_orders(10, 30) == 0
        assert Order.objects.filter(status=ORDER_STATUS_UNPAID).count() == 15

    def test_finished_orders_untouched(self, store, lifecycle, fifteen_orders):
        lifecycle.complete(fifteen_orders[0].sn, fifteen_orders[0].buyer_id)

        assert lifecycle.close_timeout_orders(10, 0) == 10

        assert status_of(fifteen_orders[0].sn) == ORDER_STATUS_COMPLETED
        assert status_of(fifteen_orders[10].sn) == ORDER_STATUS_EXPIRED
        assert status_of(fifteen_orders[11].sn) == ORDER_STATUS_UNPAID

    @pytest.mark.parametrize("limit, minutes", [(0, 0), (-1, 0), (10, -1)])
    def test_invalid_arguments(self, lifecycle, limit, minutes):
        with pytest.raises(InvalidArgumentException):
            lifecycle.close_timeout_orders(limit, minutes)


class TestRacingTransitions:

    @pytest.mark.django_db(transaction=True)
    def test_complete_and_cancel_race_one_wins(self, store, lifecycle):
        make_order(store, "orderSN-race")
        barrier = threading.Barrier(2)
        # sqlite allows a single writer, the lock only orders the two writes
        write_lock = threading.Lock()

        def attempt(transit):
            barrier.wait()
            try:
                with write_lock:
                    transit("orderSN-race", TEST_UID)
                return None
            except OrderStatusConflictException as error:
                return error
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=2) as executor:
            complete = executor.submit(attempt, lifecycle.complete)
            cancel = executor.submit(attempt, lifecycle.cancel)
            outcomes = {ORDER_STATUS_COMPLETED: complete.result(), ORDER_STATUS_CANCELED: cancel.result()}

        winners = [status for status, error in outcomes.items() if error is None]
        assert len(winners) == 1
        assert status_of("orderSN-race") == winners[0]
        assert Log.objects.filter(detail__contains="orderSN-race").count() == 1
