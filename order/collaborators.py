"""
Contracts of the services the order module consumes but does not own.

Product, credit and payment live in other modules of the platform. The order
module only depends on the shapes declared here; concrete implementations are
named in settings (ORDER_PRODUCT_SERVICE, ORDER_CREDIT_SERVICE,
ORDER_PAYMENT_SERVICE) and wired in order.ioc.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

STATUS_ON_SHELF = 2

SALE_TYPE_UNLIMITED = 1
SALE_TYPE_PROMOTION = 2

CHANNEL_TYPE_CREDIT = 1
CHANNEL_TYPE_WECHAT = 2

CHANNEL_TYPES = (CHANNEL_TYPE_CREDIT, CHANNEL_TYPE_WECHAT)


@dataclass
class SPU:
    id: int
    sn: str
    name: str
    desc: str = ""
    status: int = STATUS_ON_SHELF


@dataclass
class SKU:
    """
    price: 原价，单位为分
    discount: 优惠，实际购买价格 = price - discount
    stock: 库存
    stock_limit: 单次购买上限，0 表示不限
    """
    id: int
    sn: str
    name: str
    price: int
    stock: int
    desc: str = ""
    discount: int = 0
    stock_limit: int = 0
    sale_type: int = SALE_TYPE_UNLIMITED
    status: int = STATUS_ON_SHELF

    @property
    def real_price(self) -> int:
        return self.price - self.discount


@dataclass
class Product:
    spu: SPU
    sku: SKU


@dataclass
class Credit:
    total_amount: int = 0


@dataclass
class Channel:
    type: int
    desc: str = ""


@dataclass
class Record:
    channel: int
    amount: int = 0
    payment_no_3rd: str = ""
    status: int = 0
    wechat_code_url: str = ""


@dataclass
class Payment:
    order_sn: str
    total_amount: int
    id: int = 0
    sn: str = ""
    order_id: int = 0
    pay_ddl: Optional[datetime] = None
    records: List[Record] = field(default_factory=list)


class ProductService(ABC):

    @abstractmethod
    def find_by_sn(self, sn: str) -> Optional[Product]:
        """
        find a product by its sku serial number
        :param sn: sku serial number
        :return: the product, or None if no sku has this serial number
        """


class CreditService(ABC):

    @abstractmethod
    def get_credits_by_uid(self, uid: int) -> Credit:
        pass


class PaymentService(ABC):

    @abstractmethod
    def create_payment(self, payment: Payment) -> Payment:
        """
        create a payment for an order. The requested records only carry their
        channel, in preference order; the payment service decides how the total
        is split between them and returns the filled records.
        """

    @abstractmethod
    def find_payment_by_id(self, payment_id: int) -> Payment:
        pass

    @abstractmethod
    def get_payment_channels(self) -> List[Channel]:
        pass
