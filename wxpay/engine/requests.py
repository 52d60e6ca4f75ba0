"""
Canonical request assembly.

Builds the signed parameter maps for each transaction type:

  1. Order request   - caller fields + forced merchant fields
  2. Query request   - appid, mch_id, transaction_id, nonce_str
  3. Payment payload - the client-side payment trigger, as a PaymentRequest

Fields are validated when they are added to a ParamBuilder, so nothing
malformed ever reaches the signer or the wire.
"""

import re
import time
import uuid
from typing import Callable, Dict, Iterable, Mapping

from wxpay.codec.xml_codec import find_illegal_xml_char
from wxpay.config import WxPayConfig
from wxpay.errors import RequestValidationError
from wxpay.models.enums import SignType
from wxpay.models.results import PAYMENT_PACKAGE, PaymentRequest
from wxpay.signing.signer import SIGN_FIELD, sign

NonceFactory = Callable[[], str]
Clock = Callable[[], str]

# Must be a plain XML element name; rules out "@attr" and "#text" keys.
_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")

ORDER_REQUIRED_FIELDS = ("appid", "mch_id", "nonce_str", "notify_url", "device_info", "trade_type")
QUERY_REQUIRED_FIELDS = ("appid", "mch_id", "transaction_id", "nonce_str")
PAYMENT_REQUIRED_FIELDS = ("appid", "partnerid", "prepayid", "package", "noncestr", "timestamp")


def new_nonce_str() -> str:
    """32 hex chars from uuid4, fresh on every call."""
    return uuid.uuid4().hex


def new_timestamp() -> str:
    """Seconds since the epoch as a decimal string."""
    return str(int(time.time()))


class ParamBuilder:
    """
    Assembles a parameter map with named required fields.

    Extension fields supplied by the caller go through extend(), which never
    overwrites a field already set. set() always wins.
    """

    def __init__(self, required: Iterable[str] = ()):
        self._required = tuple(required)
        self._params: Dict[str, str] = {}

    def set(self, name: str, value: str) -> "ParamBuilder":
        self._check(name, value)
        self._params[name] = value
        return self

    def extend(self, extra: Mapping[str, str]) -> "ParamBuilder":
        for name, value in extra.items():
            if name == SIGN_FIELD or name in self._params:
                continue
            self._check(name, value)
            self._params[name] = value
        return self

    def build(self) -> Dict[str, str]:
        missing = [name for name in self._required if not self._params.get(name)]
        if missing:
            raise RequestValidationError(f"required request fields are empty: {', '.join(missing)}")
        return dict(self._params)

    def build_signed(self, secret: str, sign_type: SignType = SignType.MD5) -> Dict[str, str]:
        params = self.build()
        params[SIGN_FIELD] = sign(params, secret, sign_type)
        return params

    @staticmethod
    def _check(name: object, value: object) -> None:
        if not isinstance(name, str) or not _FIELD_NAME.match(name):
            raise RequestValidationError(f"invalid field name: {name!r}")
        if not isinstance(value, str):
            raise RequestValidationError(
                f"field {name!r} must be a string, got {type(value).__name__}"
            )
        bad = find_illegal_xml_char(value)
        if bad is not None:
            raise RequestValidationError(f"field {name!r} contains illegal XML character {bad!r}")


def _with_sign_type(builder: ParamBuilder, sign_type: SignType) -> ParamBuilder:
    # MD5 is the gateway default and is signalled by omitting the field
    if SignType(sign_type) is not SignType.MD5:
        builder.set("sign_type", SignType(sign_type).value)
    return builder


def build_order_request(
    params: Mapping[str, str],
    config: WxPayConfig,
    nonce_factory: NonceFactory = new_nonce_str,
) -> Dict[str, str]:
    """
    Signed place-order map: caller fields merged under the merchant fields.

    appid, mch_id, nonce_str, notify_url, device_info and trade_type always
    come from the config, whatever the caller passed.
    """
    builder = (
        ParamBuilder(required=ORDER_REQUIRED_FIELDS)
        .set("appid", config.app_id)
        .set("mch_id", config.mch_id)
        .set("nonce_str", nonce_factory())
        .set("notify_url", config.notify_url)
        .set("device_info", config.device_info)
        .set("trade_type", config.trade_type)
    )
    _with_sign_type(builder, config.sign_type)
    # sign_type must agree with the digest actually used
    builder.extend({k: v for k, v in params.items() if k != "sign_type"})
    return builder.build_signed(config.app_key, config.sign_type)


def build_query_request(
    transaction_id: str,
    config: WxPayConfig,
    nonce_factory: NonceFactory = new_nonce_str,
) -> Dict[str, str]:
    """Signed query-order map for a gateway transaction id."""
    builder = (
        ParamBuilder(required=QUERY_REQUIRED_FIELDS)
        .set("appid", config.app_id)
        .set("mch_id", config.mch_id)
        .set("transaction_id", transaction_id)
        .set("nonce_str", nonce_factory())
    )
    _with_sign_type(builder, config.sign_type)
    return builder.build_signed(config.app_key, config.sign_type)


def build_payment_request(
    prepay_id: str,
    config: WxPayConfig,
    nonce_factory: NonceFactory = new_nonce_str,
    clock: Clock = new_timestamp,
) -> PaymentRequest:
    """Signed payload for the client app's payment trigger."""
    nonce_str = nonce_factory()
    timestamp = clock()

    params = (
        ParamBuilder(required=PAYMENT_REQUIRED_FIELDS)
        .set("appid", config.app_id)
        .set("partnerid", config.mch_id)
        .set("prepayid", prepay_id)
        .set("package", PAYMENT_PACKAGE)
        .set("noncestr", nonce_str)
        .set("timestamp", timestamp)
        .build_signed(config.app_key, config.sign_type)
    )

    return PaymentRequest(
        app_id=config.app_id,
        partner_id=config.mch_id,
        prepay_id=prepay_id,
        nonce_str=nonce_str,
        timestamp=timestamp,
        sign=params[SIGN_FIELD],
    )
