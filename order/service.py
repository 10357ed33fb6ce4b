import uuid
from concurrent.futures import ThreadPoolExecutor, wait, FIRST_EXCEPTION
from dataclasses import dataclass, field
from typing import List, Tuple

import structlog
from django.conf import settings

from order.collaborators import CreditService, Channel
from order.exceptions import InvalidArgumentException, CreditServiceException, DuplicateRequestException
from order.lifecycle import OrderLifecycle
from order.models.Log import Log
from order.models.Order import Order
from order.models.OrderItem import OrderItem
from order.payment_composer import PaymentComposer, ChannelSummary
from order.pricing import PricingChecker, PricedItems
from order.store import OrderStore

logger = structlog.get_logger(__name__)


@dataclass
class Preview:
    priced: PricedItems
    credits: int
    channels: List[Channel] = field(default_factory=list)
    policy: str = ""


@dataclass
class OrderDetail:
    order: Order
    payments: List[ChannelSummary] = field(default_factory=list)


def generate_order_sn() -> str:
    return uuid.uuid4().hex


def _require_sn(sn: str) -> None:
    if not sn:
        raise InvalidArgumentException("订单序列号为空")


class OrderService:
    """
    facade of the order module, every endpoint maps onto one method here.
    Methods raise OrderException subclasses, the http layer turns them into
    the uniform error response.
    """

    def __init__(self, store: OrderStore, pricing: PricingChecker, composer: PaymentComposer,
                 lifecycle: OrderLifecycle, credit_service: CreditService, executor: ThreadPoolExecutor):
        self.store = store
        self.pricing = pricing
        self.composer = composer
        self.lifecycle = lifecycle
        self.credit_service = credit_service
        self.executor = executor

    def _get_credits(self, buyer_id: int) -> int:
        try:
            return self.credit_service.get_credits_by_uid(buyer_id).total_amount
        except Exception as exception:
            raise CreditServiceException(str(exception)) from exception

    def preview(self, buyer_id: int, sku_sn: str, quantity: int) -> Preview:
        """
        price a purchase without persisting anything.
        Pricing, credit balance and channel lookups are independent and run
        concurrently, the first failure aborts the preview.
        """
        priced_future = self.executor.submit(self.pricing.check, [(sku_sn, quantity)])
        credits_future = self.executor.submit(self._get_credits, buyer_id)
        channels_future = self.executor.submit(self.composer.channels)
        futures = [priced_future, credits_future, channels_future]
        done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
        for future in futures:
            if future in done and future.exception() is not None:
                for pending in not_done:
                    pending.cancel()
                raise future.exception()
        return Preview(priced=priced_future.result(), credits=credits_future.result(),
                       channels=channels_future.result(), policy=settings.ORDER_PURCHASE_POLICY)

    def create_order(self, buyer_id: int, request_id: str, products: List[Tuple[str, int]],
                     channel_types: List[int], original_total_price: int, real_total_price: int) -> Tuple[str, str]:
        """
        create an unpaid order together with its payment
        :return: (order sn, wechat code url or "")
        """
        self.composer.claim_request(request_id)
        for total in (original_total_price, real_total_price):
            if not isinstance(total, int) or isinstance(total, bool):
                raise InvalidArgumentException("商品总价非法: {}".format(total))
        priced = self.pricing.check(products, original_total_price, real_total_price)
        self.composer.validate_channels(channel_types)
        # the cache claim is per process and expires, the stored orders are not
        if self.store.exists_by_request_id(request_id):
            raise DuplicateRequestException(request_id)

        sn = generate_order_sn()
        composed = self.composer.compose(sn, priced.real_total_price, channel_types)
        order = Order(
            sn=sn,
            buyer_id=buyer_id,
            payment_id=composed.payment_id,
            payment_sn=composed.payment_sn,
            original_total_price=priced.original_total_price,
            real_total_price=priced.real_total_price,
            request_id=request_id,
        )
        items = [OrderItem(
            spu_id=item.product.spu.id,
            sku_id=item.product.sku.id,
            sku_name=item.product.sku.name,
            sku_description=item.product.sku.desc,
            sku_original_price=item.original_price,
            sku_real_price=item.real_price,
            quantity=item.quantity,
        ) for item in priced.items]
        self.store.create_order(order, items)
        Log.objects.create(uid=buyer_id, detail="创建订单SN:{}".format(sn))
        logger.info("Order created", order_sn=sn, buyer_id=buyer_id, payment_sn=composed.payment_sn,
                    real_total_price=priced.real_total_price)
        return sn, composed.wechat_code_url

    def retrieve_order_status(self, buyer_id: int, sn: str) -> int:
        _require_sn(sn)
        return self.store.find_order_by_sn_and_buyer_id(sn, buyer_id).status

    def retrieve_order_detail(self, buyer_id: int, sn: str) -> OrderDetail:
        _require_sn(sn)
        order = self.store.find_order_by_sn_and_buyer_id(sn, buyer_id)
        detail = OrderDetail(order=order)
        if order.payment_id > 0:
            detail.payments = self.composer.find_channels_of_payment(order.payment_id)
        return detail

    def list_orders(self, buyer_id: int, offset: int, limit: int) -> Tuple[List[Order], int]:
        if not isinstance(offset, int) or not isinstance(limit, int) or offset < 0 or limit <= 0:
            raise InvalidArgumentException("分页参数非法 offset:{} limit:{}".format(offset, limit))
        return self.store.list_orders(buyer_id, offset, limit), self.store.count_orders(buyer_id)

    def export_orders(self, buyer_id: int) -> List[Order]:
        return self.store.list_all_orders(buyer_id)

    def complete_order(self, buyer_id: int, sn: str) -> None:
        self.lifecycle.complete(sn, buyer_id)

    def cancel_order(self, buyer_id: int, sn: str) -> None:
        self.lifecycle.cancel(sn, buyer_id)

    def close_timeout_orders(self, limit: int, older_than_minutes: int) -> int:
        return self.lifecycle.close_timeout_orders(limit, older_than_minutes)
