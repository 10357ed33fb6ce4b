from django.db import models

from order.models.Order import Order


class OrderItem(models.Model):
    """
    订单项模型：
    order: 所属订单
    spu_id / sku_id: 商品 SPU 与 SKU
    sku_name / sku_description / sku_original_price / sku_real_price: 下单时的商品快照，创建后不再修改
    quantity: 购买数量
    """
    order = models.ForeignKey(to=Order, on_delete=models.PROTECT, related_name="items")
    spu_id = models.BigIntegerField()
    sku_id = models.BigIntegerField()
    sku_name = models.CharField(max_length=255)
    sku_description = models.CharField(max_length=1024, default="")
    sku_original_price = models.BigIntegerField()
    sku_real_price = models.BigIntegerField()
    quantity = models.IntegerField()

    class Meta:
        db_table = "order_order_items"
