import json
from datetime import timedelta
from enum import unique, Enum

import jwt
import structlog
from django.conf import settings
from django.http import JsonResponse, HttpRequest, HttpResponse
from django.utils import timezone
from django.utils.encoding import escape_uri_path
from pandas import DataFrame

from order.exceptions import OrderException

logger = structlog.get_logger(__name__)


@unique
class ErrorCode(Enum):
    """
    api error code enumeration, http status = code // 1000
    """
    SUCCESS_CODE = 0
    BAD_REQUEST_ERROR = 400_001
    UNAUTHORIZED_ERROR = 401_001
    SYSTEM_ERROR = 500_001


ERROR_MESSAGES = {
    ErrorCode.SUCCESS_CODE: "OK",
    ErrorCode.BAD_REQUEST_ERROR: "请求格式错误",
    ErrorCode.UNAUTHORIZED_ERROR: "未登录",
    ErrorCode.SYSTEM_ERROR: "系统错误",
}


def _api_response(code: ErrorCode, data) -> dict:
    return {'code': code.value, 'msg': ERROR_MESSAGES[code], 'data': data}


def success_api_response(data=None) -> dict:
    """
    wrap a success response dict obj
    :param data: requested data
    :return: an api response dictionary
    """
    return _api_response(ErrorCode.SUCCESS_CODE, data)


def failed_api_response(code) -> dict:
    """
    wrap an failed response dict obj. The message is fixed per code, details
    of the failure never reach the client
    :param code: error code, refers to ErrorCode, can be an integer or a str (error name)
    :return: an api response dictionary
    """
    if isinstance(code, str):
        code = ErrorCode[code]
    elif isinstance(code, int):
        code = ErrorCode(code)
    return _api_response(code, None)


def response_wrapper(func):
    """
    decorate a given api-function, parse its return value from a dict to a HttpResponse
    :param func: an api-function
    :return: wrapped function
    """

    def _inner(*args, **kwargs):
        _response = func(*args, **kwargs)
        if isinstance(_response, dict):
            code = _response['code']
            _response = JsonResponse(_response, json_dumps_params={'ensure_ascii': False})
            if code != ErrorCode.SUCCESS_CODE.value:
                _response.status_code = code // 1000
        return _response

    return _inner


def recover_order_exception(func):
    """
    decorator turning OrderException raised by an api-function into the uniform
    system error, the detail only goes to the log
    :param func: an api-function
    :return: wrapped function
    """

    def wrapper(request: HttpRequest, *args, **kwargs):
        try:
            return func(request, *args, **kwargs)
        except OrderException as exception:
            logger.warning("Order request failed", path=request.path, uid=getattr(request, "uid", None),
                           error_type=type(exception).__name__, error=str(exception))
            return failed_api_response(ErrorCode.SYSTEM_ERROR)

    return wrapper


def make_token(uid: int, ttl: timedelta = timedelta(hours=12)) -> str:
    """
    issue a jwt for the given user id
    :param uid: user id
    :param ttl: token life time
    :return: encoded token
    """
    now = timezone.now()
    return jwt.encode({'exp': now + ttl, 'iat': now, 'uid': uid}, settings.SECRET_KEY, algorithm='HS256')


def require_jwt():
    """
    decorator to varify the request jwt token, the user id is put on request.uid
    :return: wrapped function
    """

    def decorator(view_func):
        def _wrapped_view(request: HttpRequest, *args, **kwargs):
            auth = request.META.get('HTTP_AUTHORIZATION', '').split(" ")
            if len(auth) != 2 or auth[0] != "Bearer":
                return failed_api_response(ErrorCode.UNAUTHORIZED_ERROR)
            try:
                dic = jwt.decode(auth[1], settings.SECRET_KEY, algorithms=['HS256'])
            except jwt.InvalidTokenError:
                return failed_api_response(ErrorCode.UNAUTHORIZED_ERROR)
            uid = dic.get("uid", None)
            if not isinstance(uid, int) or uid <= 0:
                return failed_api_response(ErrorCode.UNAUTHORIZED_ERROR)
            request.uid = uid
            return view_func(request, *args, **kwargs)

        return _wrapped_view

    return decorator


def parse_data(request: HttpRequest):
    """
    parse request body and return a dict
    :param request: HttpRequest
    :return: request body dict if success else None
    """
    try:
        data = json.loads(request.body.decode())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return data


def require_json_body(func):
    """
    decorator to reject requests whose body is not a json object
    :param func: an api-function
    :return: wrapped function
    """

    def wrapper(request: HttpRequest, *args, **kwargs):
        data = parse_data(request)
        if data is None:
            return failed_api_response(ErrorCode.BAD_REQUEST_ERROR)
        return func(request, data, *args, **kwargs)

    return wrapper


def data_export(rows: list[dict], columns: list[str], filename: str, bom: bool = False) -> HttpResponse:
    """
    render rows as a csv download
    :param rows: one dict per csv line, keyed by column name
    :param columns: csv header, also the column order
    :param filename: name offered to the browser
    :param bom: prepend a utf-8 bom so that excel detects the encoding
    :return: HttpResponse
    """
    encoding = "utf-8-sig" if bom else "utf-8"
    content = DataFrame(rows, columns=columns).to_csv(index=False)
    response = HttpResponse(content.encode(encoding), content_type="text/csv; charset={}".format(encoding))
    response["Content-Disposition"] = "attachment;filename*=utf-8''{}".format(escape_uri_path(filename))
    return response
