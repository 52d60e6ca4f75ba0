"""Enumerations for the gateway protocol."""

from enum import Enum


class SignType(str, Enum):
    """Digest algorithms the gateway accepts for request signatures."""

    MD5 = "MD5"
    HMAC_SHA256 = "HMAC-SHA256"


class ReturnCode(str, Enum):
    """Values of return_code / result_code on gateway responses."""

    SUCCESS = "SUCCESS"
    FAIL = "FAIL"


class TradeType(str, Enum):
    """Trade types accepted by the place-order endpoint."""

    APP = "APP"
    JSAPI = "JSAPI"
    NATIVE = "NATIVE"
    MWEB = "MWEB"


class TradeState(str, Enum):
    """trade_state values reported by the query-order endpoint."""

    SUCCESS = "SUCCESS"
    REFUND = "REFUND"
    NOTPAY = "NOTPAY"
    CLOSED = "CLOSED"
    REVOKED = "REVOKED"
    USERPAYING = "USERPAYING"
    PAYERROR = "PAYERROR"
