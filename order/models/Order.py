from django.db import models
from django.utils import timezone

from order.models.status import ORDER_STATUSES, ORDER_STATUS_UNPAID


class Order(models.Model):
    """
    订单模型：
    sn: 订单序列号，对外一律使用 sn 而不是 id，创建后不可修改
    buyer_id: 买家 uid
    payment_id: 关联的支付 id
    payment_sn: 关联的支付序列号
    original_total_price: 原始总价，单位为分
    real_total_price: 实付总价，单位为分，必须有 real_total_price <= original_total_price
    status: 状态，有：未支付、已完成、已取消、已超时，后三种为终态
    request_id: 客户端请求 id，用于防止重复下单
    ctime: 创建时间
    utime: 更新时间
    """
    sn = models.CharField(max_length=64, unique=True)
    buyer_id = models.BigIntegerField(db_index=True)
    payment_id = models.BigIntegerField(default=0)
    payment_sn = models.CharField(max_length=64, default="")
    original_total_price = models.BigIntegerField(default=0)
    real_total_price = models.BigIntegerField(default=0)
    status = models.IntegerField(choices=ORDER_STATUSES, default=ORDER_STATUS_UNPAID)
    request_id = models.CharField(max_length=64, null=True, unique=True)
    ctime = models.DateTimeField(default=timezone.now)
    utime = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "order_orders"
        indexes = [models.Index(fields=["status", "ctime"], name="order_status_ctime_idx")]
