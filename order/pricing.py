from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import structlog

from order.collaborators import ProductService, Product, STATUS_ON_SHELF
from order.exceptions import InvalidArgumentException, ProductNotFoundException, InsufficientStockException, \
    PriceMismatchException, ProductServiceException, InvalidPriceException

logger = structlog.get_logger(__name__)


@dataclass
class PricedItem:
    """a purchase line with the sku snapshot locked in at pricing time"""
    product: Product
    quantity: int

    @property
    def original_price(self) -> int:
        return self.product.sku.price

    @property
    def real_price(self) -> int:
        return self.product.sku.real_price


@dataclass
class PricedItems:
    items: List[PricedItem] = field(default_factory=list)
    original_total_price: int = 0
    real_total_price: int = 0


class PricingChecker:

    def __init__(self, product_service: ProductService):
        self.product_service = product_service

    def _find_product(self, sku_sn: str) -> Product:
        try:
            product = self.product_service.find_by_sn(sku_sn)
        except Exception as exception:
            raise ProductServiceException(str(exception)) from exception
        if product is None or product.sku.status != STATUS_ON_SHELF or product.spu.status != STATUS_ON_SHELF:
            raise ProductNotFoundException(sku_sn)
        return product

    @staticmethod
    def _check_stock(product: Product, quantity: int) -> None:
        sku = product.sku
        if quantity > sku.stock:
            raise InsufficientStockException(sku.sn, quantity)
        if 0 < sku.stock_limit < quantity:
            raise InsufficientStockException(sku.sn, quantity)

    @staticmethod
    def _check_price(product: Product) -> None:
        sku = product.sku
        # a discount may lower the price to zero, never raise it
        if sku.price < 0 or sku.real_price < 0 or sku.real_price > sku.price:
            raise InvalidPriceException(sku.sn, sku.price, sku.real_price)

    def check(self, requested: List[Tuple[str, int]], original_total_price: Optional[int] = None,
              real_total_price: Optional[int] = None) -> PricedItems:
        """
        validate the requested skus against the product service and price them
        :param requested: list of (sku sn, quantity)
        :param original_total_price: total claimed by the client, checked when given
        :param real_total_price: total claimed by the client, checked when given
        :return: priced items with server side totals
        """
        if len(requested) == 0:
            raise InvalidArgumentException("商品信息为空")
        priced = PricedItems()
        for sku_sn, quantity in requested:
            if not sku_sn:
                raise InvalidArgumentException("商品SKU序列号为空")
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
                raise InvalidArgumentException("要购买的商品数量非法: {}".format(quantity))
            product = self._find_product(sku_sn)
            self._check_stock(product, quantity)
            self._check_price(product)
            item = PricedItem(product=product, quantity=quantity)
            priced.items.append(item)
            priced.original_total_price += item.original_price * quantity
            priced.real_total_price += item.real_price * quantity

        if original_total_price is not None and original_total_price != priced.original_total_price:
            raise PriceMismatchException("商品总原价", priced.original_total_price, original_total_price)
        if real_total_price is not None and real_total_price != priced.real_total_price:
            raise PriceMismatchException("商品总实价", priced.real_total_price, real_total_price)
        logger.debug("Priced order items", item_count=len(priced.items),
                     original_total_price=priced.original_total_price, real_total_price=priced.real_total_price)
        return priced
