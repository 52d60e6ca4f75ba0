"""Shared test fixtures."""

from typing import Dict, List, Optional, Tuple

import pytest

from wxpay.codec.xml_codec import to_xml_string
from wxpay.config import WxPayConfig
from wxpay.engine.orchestrator import AppTrans
from wxpay.signing.signer import sign
from wxpay.transport.base import Transport

SECRET = "192006250b4c09247ec02edce69f6a2d"
PLACE_ORDER_URL = "https://gateway.test/pay/unifiedorder"
QUERY_ORDER_URL = "https://gateway.test/pay/orderquery"


class FakeTransport(Transport):
    """In-memory transport: records requests, replays a canned body or error."""

    def __init__(self, response: bytes = b"", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[Tuple[str, bytes]] = []

    async def post(self, url: str, body: bytes) -> bytes:
        self.calls.append((url, body))
        if self.error is not None:
            raise self.error
        return self.response


def signed_xml(fields: Dict[str, str], secret: str = SECRET) -> bytes:
    """Gateway-style response body with a valid signature."""
    params = dict(fields)
    params["sign"] = sign(params, secret)
    return to_xml_string(params).encode("utf-8")


def make_config(**overrides) -> WxPayConfig:
    values = dict(
        app_id="wx123",
        mch_id="mch456",
        app_key=SECRET,
        notify_url="https://merchant.test/notify",
        query_order_url=QUERY_ORDER_URL,
        place_order_url=PLACE_ORDER_URL,
        trade_type="APP",
    )
    values.update(overrides)
    return WxPayConfig(**values)


@pytest.fixture
def config() -> WxPayConfig:
    return make_config()


@pytest.fixture
def fixed_nonce():
    return lambda: "5K8264ILTKCH16CQ2502SI8ZNMTM67VS"


@pytest.fixture
def fixed_clock():
    return lambda: "1412000000"


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def trans(config, transport, fixed_nonce, fixed_clock) -> AppTrans:
    return AppTrans(config, transport=transport, nonce_factory=fixed_nonce, clock=fixed_clock)


@pytest.fixture
def place_order_success() -> Dict[str, str]:
    return {
        "return_code": "SUCCESS",
        "return_msg": "OK",
        "appid": "wx123",
        "mch_id": "mch456",
        "device_info": "WEB",
        "nonce_str": "IITRi8Iabbblz1Jc",
        "result_code": "SUCCESS",
        "trade_type": "APP",
        "prepay_id": "wx201411101639507cbf6ffd8b0779950874",
    }


@pytest.fixture
def query_order_success() -> Dict[str, str]:
    return {
        "return_code": "SUCCESS",
        "return_msg": "OK",
        "appid": "wx123",
        "mch_id": "mch456",
        "nonce_str": "Pw0vS3K6VEGbfG7s",
        "result_code": "SUCCESS",
        "openid": "oUpF8uN95-Ptaags6E_roPHg7AG0",
        "is_subscribe": "Y",
        "trade_type": "APP",
        "trade_state": "SUCCESS",
        "bank_type": "CMC",
        "total_fee": "100",
        "fee_type": "CNY",
        "cash_fee": "100",
        "transaction_id": "1008450740201411110005820873",
        "out_trade_no": "1415757673",
        "time_end": "20141111170043",
        "trade_state_desc": "paid",
    }
