from dataclasses import dataclass, field
from datetime import timedelta
from typing import List

import structlog
from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from order.collaborators import PaymentService, Payment, Record, Channel, CHANNEL_TYPES
from order.exceptions import InvalidArgumentException, InvalidPaymentChannelException, DuplicateRequestException, \
    PaymentServiceException
from order.models.Order import Order

logger = structlog.get_logger(__name__)

REQUEST_KEY_PREFIX = "order:create:request:"


@dataclass
class ChannelSummary:
    type: int
    amount: int = 0


@dataclass
class ComposedPayment:
    payment_id: int
    payment_sn: str
    channels: List[ChannelSummary] = field(default_factory=list)
    wechat_code_url: str = ""


def records_to_channels(records: List[Record]) -> List[ChannelSummary]:
    return [ChannelSummary(type=record.channel, amount=record.amount) for record in records]


class PaymentComposer:
    """
    turns the payment channels a buyer asked for into a payment created by the
    payment service. How the amount is split across channels is decided by the
    payment service, this class only feeds it and maps the records back.
    """

    def __init__(self, payment_service: PaymentService):
        self.payment_service = payment_service

    @staticmethod
    def claim_request(request_id: str) -> None:
        """
        reserve a client request id, a second claim of the same id fails
        :param request_id: client supplied idempotency key
        """
        if not request_id or not isinstance(request_id, str):
            raise InvalidArgumentException("请求ID为空")
        if len(request_id) > Order._meta.get_field("request_id").max_length:
            raise InvalidArgumentException("请求ID过长: {}".format(len(request_id)))
        key = REQUEST_KEY_PREFIX + request_id
        if not cache.add(key, 1, timeout=settings.ORDER_REQUEST_ID_TTL):
            raise DuplicateRequestException(request_id)

    @staticmethod
    def validate_channels(channel_types: List[int]) -> None:
        if len(channel_types) == 0:
            raise InvalidPaymentChannelException("支付渠道为空")
        for channel_type in channel_types:
            if not isinstance(channel_type, int) or isinstance(channel_type, bool) or channel_type not in CHANNEL_TYPES:
                raise InvalidPaymentChannelException("不合法的支付渠道: {}".format(channel_type))

    def channels(self) -> List[Channel]:
        try:
            return self.payment_service.get_payment_channels()
        except Exception as exception:
            raise PaymentServiceException(str(exception)) from exception

    def compose(self, order_sn: str, total_amount: int, channel_types: List[int]) -> ComposedPayment:
        """
        create a payment for the order
        :param order_sn: serial number of the order being paid
        :param total_amount: amount to collect
        :param channel_types: requested channels, the first one is offered first
        :return: the created payment mapped to channel summaries
        """
        self.validate_channels(channel_types)
        requested = Payment(
            order_sn=order_sn,
            total_amount=total_amount,
            pay_ddl=timezone.now() + timedelta(minutes=settings.ORDER_PAY_DEADLINE_MINUTES),
            records=[Record(channel=channel_type) for channel_type in channel_types],
        )
        try:
            payment = self.payment_service.create_payment(requested)
        except Exception as exception:
            raise PaymentServiceException(str(exception)) from exception

        composed = ComposedPayment(payment_id=payment.id, payment_sn=payment.sn,
                                   channels=records_to_channels(payment.records))
        for record in payment.records:
            if record.wechat_code_url:
                composed.wechat_code_url = record.wechat_code_url
                break
        logger.info("Payment composed", order_sn=order_sn, payment_sn=payment.sn, total_amount=total_amount,
                    channels=[summary.type for summary in composed.channels])
        return composed

    def find_channels_of_payment(self, payment_id: int) -> List[ChannelSummary]:
        try:
            payment = self.payment_service.find_payment_by_id(payment_id)
        except Exception as exception:
            raise PaymentServiceException(str(exception)) from exception
        return records_to_channels(payment.records)
