class OrderException(Exception):
    def __init__(self, msg="订单处理失败"):
        Exception.__init__(self)
        self.msg = msg

    def __str__(self):
        return self.msg


class InvalidArgumentException(OrderException):
    def __init__(self, msg="不合法的参数"):
        OrderException.__init__(self, msg)


class ProductNotFoundException(OrderException):
    def __init__(self, sku_sn=""):
        OrderException.__init__(self, "商品不存在或已下架 SKU:{}".format(sku_sn))
        self.sku_sn = sku_sn


class InsufficientStockException(OrderException):
    def __init__(self, sku_sn="", quantity=0):
        OrderException.__init__(self, "商品库存不足 SKU:{} 数量:{}".format(sku_sn, quantity))
        self.sku_sn = sku_sn
        self.quantity = quantity


class PriceMismatchException(OrderException):
    def __init__(self, field, expected, actual):
        OrderException.__init__(self, "{}不一致 期望:{} 实际:{}".format(field, expected, actual))
        self.field = field
        self.expected = expected
        self.actual = actual


class InvalidPriceException(OrderException):
    def __init__(self, sku_sn="", price=0, real_price=0):
        OrderException.__init__(self, "商品价格非法 SKU:{} 原价:{} 实价:{}".format(sku_sn, price, real_price))
        self.sku_sn = sku_sn
        self.price = price
        self.real_price = real_price


class InvalidPaymentChannelException(OrderException):
    def __init__(self, msg="不合法的支付渠道"):
        OrderException.__init__(self, msg)


class DuplicateRequestException(OrderException):
    def __init__(self, request_id=""):
        OrderException.__init__(self, "重复的请求 RequestID:{}".format(request_id))
        self.request_id = request_id


class OrderNotFoundException(OrderException):
    def __init__(self, sn=""):
        OrderException.__init__(self, "订单不存在 SN:{}".format(sn))
        self.sn = sn


class OrderStatusConflictException(OrderException):
    def __init__(self, sn="", to_status=0):
        OrderException.__init__(self, "订单状态冲突 SN:{} 目标状态:{}".format(sn, to_status))
        self.sn = sn
        self.to_status = to_status


class CollaboratorException(OrderException):
    def __init__(self, service, detail=""):
        OrderException.__init__(self, "{}调用失败: {}".format(service, detail))
        self.service = service


class PaymentServiceException(CollaboratorException):
    def __init__(self, detail=""):
        CollaboratorException.__init__(self, "支付服务", detail)


class ProductServiceException(CollaboratorException):
    def __init__(self, detail=""):
        CollaboratorException.__init__(self, "商品服务", detail)


class CreditServiceException(CollaboratorException):
    def __init__(self, detail=""):
        CollaboratorException.__init__(self, "积分服务", detail)
