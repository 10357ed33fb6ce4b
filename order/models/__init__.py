from .Log import Log
from .Order import Order
from .OrderItem import OrderItem
from .status import ORDER_STATUS_UNPAID, ORDER_STATUS_COMPLETED, ORDER_STATUS_CANCELED, ORDER_STATUS_EXPIRED, \
    ORDER_STATUSES, ORDER_STATUS_DICT
