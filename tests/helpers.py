"""Helpers shared by the order tests."""

from order.models.Order import Order
from order.models.OrderItem import OrderItem

TEST_UID = 234


def make_order(store, sn, buyer_id=TEST_UID, payment_id=0, price=9900, quantity=1, item_id=1):
    order = Order(sn=sn, buyer_id=buyer_id, payment_id=payment_id, payment_sn="paymentSN-{}".format(sn),
                  original_total_price=price * quantity, real_total_price=price * quantity)
    items = [OrderItem(spu_id=item_id, sku_id=item_id, sku_name="SKUName-{}".format(item_id),
                       sku_description="SKUDescription-{}".format(item_id), sku_original_price=price,
                       sku_real_price=price, quantity=quantity)]
    store.create_order(order, items)
    return order
