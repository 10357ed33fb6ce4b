from django.http import HttpRequest
from django.views.decorators.http import require_POST, require_GET

from order.apps import get_order_service
from order.models.Order import Order
from order.models.OrderItem import OrderItem
from order.models.status import ORDER_STATUS_DICT
from order.payment_composer import ChannelSummary
from order.util import response_wrapper, success_api_response, require_jwt, require_json_body, \
    recover_order_exception, data_export


def order_item_to_dict(item: OrderItem) -> dict:
    data = {
        "spu_id": item.spu_id,
        "sku_id": item.sku_id,
        "sku_name": item.sku_name,
        "sku_description": item.sku_description,
        "sku_original_price": item.sku_original_price,
        "sku_real_price": item.sku_real_price,
        "quantity": item.quantity,
    }
    return data


def channel_to_dict(channel: ChannelSummary) -> dict:
    return {"type": channel.type, "amount": channel.amount}


def order_to_dict(order: Order) -> dict:
    data = {
        "sn": order.sn,
        "payment_sn": order.payment_sn,
        "original_total_price": order.original_total_price,
        "real_total_price": order.real_total_price,
        "status": order.status,
        "items": list(map(order_item_to_dict, order.items.all())),
        "ctime": order.ctime,
        "utime": order.utime,
    }
    return data


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


@response_wrapper
@require_jwt()
@require_POST
@require_json_body
@recover_order_exception
def preview_order(request: HttpRequest, data: dict):
    """
    [POST] /order/preview
    """
    preview = get_order_service().preview(request.uid, data.get("sku_sn", ""), data.get("quantity", 0))
    products = [{
        "spu_sn": item.product.spu.sn,
        "sku_sn": item.product.sku.sn,
        "name": item.product.sku.name,
        "desc": item.product.sku.desc,
        "original_price": item.original_price,
        "real_price": item.real_price,
        "quantity": item.quantity,
    } for item in preview.priced.items]
    return success_api_response({
        "products": products,
        "credits": preview.credits,
        "payments": [{"type": channel.type, "desc": channel.desc} for channel in preview.channels],
        "policy": preview.policy,
    })


@response_wrapper
@require_jwt()
@require_POST
@require_json_body
@recover_order_exception
def create_order(request: HttpRequest, data: dict):
    """
    [POST] /order/create
    body: request_id, products [{sku_sn, quantity}], payments [{type}], original_total_price, real_total_price
    """
    products = [(product.get("sku_sn", ""), product.get("quantity", 0))
                for product in _as_list(data.get("products")) if isinstance(product, dict)]
    channel_types = [payment.get("type", 0)
                     for payment in _as_list(data.get("payments")) if isinstance(payment, dict)]
    order_sn, wechat_code_url = get_order_service().create_order(
        buyer_id=request.uid,
        request_id=data.get("request_id", ""),
        products=products,
        channel_types=channel_types,
        original_total_price=data.get("original_total_price", 0),
        real_total_price=data.get("real_total_price", 0),
    )
    return success_api_response({"order_sn": order_sn, "wechat_code_url": wechat_code_url})


@response_wrapper
@require_jwt()
@require_POST
@require_json_body
@recover_order_exception
def retrieve_order_status(request: HttpRequest, data: dict):
    """
    [POST] /order
    """
    status = get_order_service().retrieve_order_status(request.uid, data.get("order_sn", ""))
    return success_api_response({"order_status": status})


@response_wrapper
@require_jwt()
@require_POST
@require_json_body
@recover_order_exception
def retrieve_order_detail(request: HttpRequest, data: dict):
    """
    [POST] /order/detail
    """
    detail = get_order_service().retrieve_order_detail(request.uid, data.get("order_sn", ""))
    order = order_to_dict(detail.order)
    order["payments"] = list(map(channel_to_dict, detail.payments))
    return success_api_response({"order": order})


@response_wrapper
@require_jwt()
@require_POST
@require_json_body
@recover_order_exception
def list_orders(request: HttpRequest, data: dict):
    """
    [POST] /order/list
    """
    orders, total = get_order_service().list_orders(request.uid, data.get("offset", 0), data.get("limit", 0))
    return success_api_response({"total": total, "orders": list(map(order_to_dict, orders))})


@response_wrapper
@require_jwt()
@require_POST
@require_json_body
@recover_order_exception
def complete_order(request: HttpRequest, data: dict):
    """
    [POST] /order/complete
    internal route for the payment callback, the buyer comes from the body.
    Not to be exposed to buyers, any valid token is accepted here.
    """
    get_order_service().complete_order(data.get("buyer_id", 0), data.get("order_sn", ""))
    return success_api_response()


@response_wrapper
@require_jwt()
@require_POST
@require_json_body
@recover_order_exception
def cancel_order(request: HttpRequest, data: dict):
    """
    [POST] /order/cancel
    """
    get_order_service().cancel_order(request.uid, data.get("order_sn", ""))
    return success_api_response()


@response_wrapper
@require_jwt()
@require_POST
@require_json_body
@recover_order_exception
def close_timeout_orders(request: HttpRequest, data: dict):
    """
    [POST] /order/close
    internal route for the sweep scheduler, expires one batch of stale unpaid
    orders of every buyer. Not to be exposed to buyers.
    """
    get_order_service().close_timeout_orders(data.get("limit", 0), data.get("minute", 0))
    return success_api_response()


def order_to_dict_export(order: Order) -> dict:
    data = {
        "订单序列号": order.sn,
        "支付序列号": order.payment_sn,
        "商品": ",".join("{}x{}".format(item.sku_name, item.quantity) for item in order.items.all()),
        "原价": order.original_total_price,
        "实付": order.real_total_price,
        "订单状态": ORDER_STATUS_DICT[order.status],
        "创建时间": order.ctime,
        "更新时间": order.utime,
    }
    return data


@response_wrapper
@require_jwt()
@require_GET
def export_order_list(request: HttpRequest):
    """
    [GET] /order/list_csv
    """
    orders = get_order_service().export_orders(request.uid)
    columns = ["订单序列号", "支付序列号", "商品", "原价", "实付", "订单状态", "创建时间", "更新时间"]
    filename = "订单信息-{}.csv".format(request.uid)
    rows = [order_to_dict_export(order) for order in orders]
    return data_export(rows, columns, filename, bom=request.GET.get("bom") == "1")
