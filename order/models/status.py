ORDER_STATUS_UNPAID = 1
ORDER_STATUS_COMPLETED = 2
ORDER_STATUS_CANCELED = 3
ORDER_STATUS_EXPIRED = 4

ORDER_STATUSES = [
    (ORDER_STATUS_UNPAID, "未支付"),
    (ORDER_STATUS_COMPLETED, "已完成"),
    (ORDER_STATUS_CANCELED, "已取消"),
    (ORDER_STATUS_EXPIRED, "已超时"),
]

ORDER_STATUS_DICT = dict(ORDER_STATUSES)
