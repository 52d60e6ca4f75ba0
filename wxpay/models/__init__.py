from wxpay.models.enums import ReturnCode, SignType, TradeState, TradeType
from wxpay.models.results import (
    PAYMENT_PACKAGE,
    GatewayResult,
    PaymentNotification,
    PaymentRequest,
    PlaceOrderResult,
    QueryOrderResult,
)

__all__ = [
    "PAYMENT_PACKAGE",
    "GatewayResult",
    "PaymentNotification",
    "PaymentRequest",
    "PlaceOrderResult",
    "QueryOrderResult",
    "ReturnCode",
    "SignType",
    "TradeState",
    "TradeType",
]
