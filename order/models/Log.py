from django.db import models
from django.utils import timezone


class Log(models.Model):
    """
    日志模型：
    uid: 操作用户，超时关闭等系统操作为 0
    op_time: 操作时间
    detail: 操作详情，如：创建订单 SN:xxx，取消订单 SN:xxx 等
    """
    uid = models.BigIntegerField(default=0)
    op_time = models.DateTimeField(default=timezone.now)
    detail = models.CharField(max_length=255)

    class Meta:
        db_table = "order_logs"
