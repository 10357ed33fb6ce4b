import structlog

from order.exceptions import InvalidArgumentException, OrderStatusConflictException
from order.models.Log import Log
from order.models.status import ORDER_STATUS_UNPAID, ORDER_STATUS_COMPLETED, ORDER_STATUS_CANCELED, \
    ORDER_STATUS_EXPIRED
from order.store import OrderStore

logger = structlog.get_logger(__name__)

# target status -> statuses it may be reached from
TRANSITIONS = {
    ORDER_STATUS_COMPLETED: (ORDER_STATUS_UNPAID,),
    ORDER_STATUS_CANCELED: (ORDER_STATUS_UNPAID,),
    ORDER_STATUS_EXPIRED: (ORDER_STATUS_UNPAID,),
}


class OrderLifecycle:

    def __init__(self, store: OrderStore):
        self.store = store

    def _transit(self, sn: str, buyer_id: int, to_status: int) -> None:
        if not sn:
            raise InvalidArgumentException("订单序列号为空")
        if not isinstance(buyer_id, int) or buyer_id <= 0:
            raise InvalidArgumentException("买家ID非法: {}".format(buyer_id))
        affected = self.store.update_status_by_sn(sn, buyer_id, TRANSITIONS[to_status], to_status)
        if affected == 0:
            raise OrderStatusConflictException(sn, to_status)
        logger.info("Order status changed", order_sn=sn, buyer_id=buyer_id, to_status=to_status)

    def complete(self, sn: str, buyer_id: int) -> None:
        self._transit(sn, buyer_id, ORDER_STATUS_COMPLETED)
        Log.objects.create(uid=buyer_id, detail="完成订单SN:{}".format(sn))

    def cancel(self, sn: str, buyer_id: int) -> None:
        self._transit(sn, buyer_id, ORDER_STATUS_CANCELED)
        Log.objects.create(uid=buyer_id, detail="取消订单SN:{}".format(sn))

    def close_timeout_orders(self, limit: int, older_than_minutes: int) -> int:
        """
        expire one batch of stale unpaid orders, oldest id first.
        Repetition is left to the caller (cron), a batch shorter than limit
        means the backlog is drained.
        :param limit: max orders to expire in this batch
        :param older_than_minutes: only orders created at least this long ago
        :return: number of orders expired
        """
        if not isinstance(limit, int) or limit <= 0:
            raise InvalidArgumentException("批量大小非法: {}".format(limit))
        if not isinstance(older_than_minutes, int) or older_than_minutes < 0:
            raise InvalidArgumentException("超时分钟数非法: {}".format(older_than_minutes))
        orders = self.store.find_timeout_orders(older_than_minutes, limit)
        ids = [order.id for order in orders]
        expired = self.store.update_status_by_ids(ids, TRANSITIONS[ORDER_STATUS_EXPIRED], ORDER_STATUS_EXPIRED)
        if expired > 0:
            Log.objects.create(uid=0, detail="超时关闭订单{}个".format(expired))
        logger.info("Timeout orders closed", found=len(ids), expired=expired, limit=limit,
                    older_than_minutes=older_than_minutes)
        return expired
