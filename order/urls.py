from django.urls import path

from order.api.order import preview_order, create_order, retrieve_order_status, retrieve_order_detail, \
    list_orders, complete_order, cancel_order, close_timeout_orders, export_order_list

urlpatterns = [
    path("order", retrieve_order_status),
    path("order/preview", preview_order),
    path("order/create", create_order),
    path("order/detail", retrieve_order_detail),
    path("order/list", list_orders),
    path("order/list_csv", export_order_list),
    path("order/complete", complete_order),
    path("order/cancel", cancel_order),
    path("order/close", close_timeout_orders),
]
