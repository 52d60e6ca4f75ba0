"""
wxpay - signed XML client for the WeChat Pay APP payment flow.

    trans = AppTrans(WxPayConfig(app_id=..., mch_id=..., app_key=..., notify_url=...))
    order = await trans.submit({"body": "...", "out_trade_no": "...", "total_fee": "100",
                                "spbill_create_ip": "..."})
    payload = trans.new_payment_request(order.prepay_id)
"""

from wxpay.config import WxPayConfig, configure_logging, settings
from wxpay.engine.orchestrator import AppTrans
from wxpay.errors import (
    ConfigValidationError,
    GatewayError,
    ParseError,
    RequestValidationError,
    SignatureMismatchError,
    TransportError,
    WxPayError,
)
from wxpay.models import (
    PaymentNotification,
    PaymentRequest,
    PlaceOrderResult,
    QueryOrderResult,
    SignType,
)

__all__ = [
    "AppTrans",
    "ConfigValidationError",
    "GatewayError",
    "ParseError",
    "PaymentNotification",
    "PaymentRequest",
    "PlaceOrderResult",
    "QueryOrderResult",
    "RequestValidationError",
    "SignType",
    "SignatureMismatchError",
    "TransportError",
    "WxPayConfig",
    "WxPayError",
    "configure_logging",
    "settings",
]
