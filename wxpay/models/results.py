"""
Typed views over gateway parameter maps.

Each response dataclass is built from the flat string map parsed out of the
gateway's XML body and offers to_map(), the reverse projection used for
signature verification. Fields the gateway sent that a dataclass does not
declare are kept in `extra`, so to_map() reproduces exactly the field set
the gateway signed.
"""

from dataclasses import dataclass, field, fields
from typing import ClassVar, Dict, Mapping, Tuple

from wxpay.errors import ParseError
from wxpay.models.enums import ReturnCode, TradeState

PAYMENT_PACKAGE = "Sign=WXPay"


@dataclass
class GatewayResult:
    """Fields common to every signed gateway response."""

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("return_code",)

    return_code: str = ""
    return_msg: str = ""
    appid: str = ""
    mch_id: str = ""
    nonce_str: str = ""
    sign: str = ""
    result_code: str = ""
    err_code: str = ""
    err_code_des: str = ""
    extra: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_map(cls, params: Mapping[str, str]) -> "GatewayResult":
        missing = [name for name in cls.REQUIRED_FIELDS if name not in params]
        if missing:
            raise ParseError(f"{cls.__name__} missing required fields: {', '.join(missing)}")

        declared = {f.name for f in fields(cls) if f.name != "extra"}
        known = {k: v for k, v in params.items() if k in declared}
        extra = {k: v for k, v in params.items() if k not in declared}
        return cls(**known, extra=extra)

    def to_map(self) -> Dict[str, str]:
        result = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        result.update(self.extra)
        return result

    @property
    def return_ok(self) -> bool:
        return self.return_code == ReturnCode.SUCCESS.value

    @property
    def result_ok(self) -> bool:
        return self.result_code == ReturnCode.SUCCESS.value


@dataclass
class PlaceOrderResult(GatewayResult):
    """Response of the place-order (unified order) endpoint."""

    device_info: str = ""
    trade_type: str = ""
    prepay_id: str = ""
    code_url: str = ""


@dataclass
class QueryOrderResult(GatewayResult):
    """Response of the query-order endpoint."""

    device_info: str = ""
    openid: str = ""
    is_subscribe: str = ""
    trade_type: str = ""
    trade_state: str = ""
    bank_type: str = ""
    total_fee: str = ""
    settlement_total_fee: str = ""
    fee_type: str = ""
    cash_fee: str = ""
    cash_fee_type: str = ""
    coupon_fee: str = ""
    coupon_count: str = ""
    transaction_id: str = ""
    out_trade_no: str = ""
    attach: str = ""
    time_end: str = ""
    trade_state_desc: str = ""

    @property
    def is_paid(self) -> bool:
        return self.trade_state == TradeState.SUCCESS.value


@dataclass
class PaymentNotification(GatewayResult):
    """Asynchronous payment result the gateway POSTs to notify_url."""

    device_info: str = ""
    openid: str = ""
    is_subscribe: str = ""
    trade_type: str = ""
    bank_type: str = ""
    total_fee: str = ""
    settlement_total_fee: str = ""
    fee_type: str = ""
    cash_fee: str = ""
    cash_fee_type: str = ""
    coupon_fee: str = ""
    coupon_count: str = ""
    transaction_id: str = ""
    out_trade_no: str = ""
    attach: str = ""
    time_end: str = ""


@dataclass(frozen=True)
class PaymentRequest:
    """
    Signed payload handed to the client app to start a payment.

    Never sent over the wire by this library; to_map() yields the field
    names the client SDK expects.
    """

    app_id: str
    partner_id: str
    prepay_id: str
    nonce_str: str
    timestamp: str
    sign: str
    package: str = PAYMENT_PACKAGE

    def to_map(self) -> Dict[str, str]:
        return {
            "appid": self.app_id,
            "partnerid": self.partner_id,
            "prepayid": self.prepay_id,
            "package": self.package,
            "noncestr": self.nonce_str,
            "timestamp": self.timestamp,
            "sign": self.sign,
        }
