"""
Transaction handler - the public entry point of the client.

Each operation is a single linear pipeline with one round trip at most:

  submit(params)         build order -> POST -> parse -> check codes -> verify
  query(transaction_id)  build query -> POST -> parse -> check code  -> verify
  new_payment_request()  build + sign the client payment payload (no I/O)

Every failure is raised to the caller: transport errors, unparseable
bodies, non-SUCCESS codes and signature mismatches alike. A response whose
signature does not verify is never returned, whatever its codes say.
"""

from typing import Mapping, Optional

from wxpay.codec.xml_codec import (
    parse_payment_notification,
    parse_place_order_result,
    parse_query_order_result,
    to_xml_string,
)
from wxpay.config import WxPayConfig, settings
from wxpay.errors import ConfigValidationError, GatewayError
from wxpay.engine.requests import (
    Clock,
    NonceFactory,
    build_order_request,
    build_payment_request,
    build_query_request,
    new_nonce_str,
    new_timestamp,
)
from wxpay.models.enums import ReturnCode
from wxpay.models.results import (
    GatewayResult,
    PaymentNotification,
    PaymentRequest,
    PlaceOrderResult,
    QueryOrderResult,
)
from wxpay.signing.verifier import verify_signature
from wxpay.transport.base import Transport
from wxpay.transport.httpx_transport import HttpxTransport


def _check_return_code(result: GatewayResult) -> None:
    if not result.return_ok:
        raise GatewayError("return", result.return_code, result.return_msg)


def _check_result_code(result: GatewayResult) -> None:
    if not result.result_ok:
        raise GatewayError("result", result.err_code, result.err_code_des)


class AppTrans:
    """
    Transaction handler for the APP payment flow.

    The config is validated once here; an incomplete config can never reach
    the network. The handler holds no per-call state, so one instance may
    serve concurrent callers.
    """

    def __init__(
        self,
        config: Optional[WxPayConfig] = None,
        transport: Optional[Transport] = None,
        nonce_factory: NonceFactory = new_nonce_str,
        clock: Clock = new_timestamp,
    ):
        self.config = config if config is not None else settings

        missing = self.config.missing_fields()
        if missing:
            raise ConfigValidationError(missing)

        self.transport = transport or HttpxTransport(timeout_seconds=self.config.http_timeout_seconds)
        self._nonce_factory = nonce_factory
        self._clock = clock

    async def submit(self, params: Mapping[str, str]) -> PlaceOrderResult:
        """
        Place an order and return the verified result carrying the prepay id.

        Args:
            params: Order fields (body, out_trade_no, total_fee, ...). Merchant
                fields from the config override any of the same name.

        Raises:
            RequestValidationError, TransportError, ParseError, GatewayError,
            SignatureMismatchError
        """
        order = build_order_request(params, self.config, self._nonce_factory)

        body = await self.transport.post(self.config.place_order_url, to_xml_string(order).encode("utf-8"))
        result = parse_place_order_result(body)

        _check_return_code(result)
        _check_result_code(result)
        verify_signature(result, self.config.app_key, self.config.sign_type)

        return result

    async def query(self, transaction_id: str) -> QueryOrderResult:
        """
        Query an order by the gateway's transaction id.

        The returned result may still carry result_code FAIL (e.g. unknown
        order); it is signed, so it is verified and handed back as is.

        Raises:
            RequestValidationError, TransportError, ParseError, GatewayError,
            SignatureMismatchError
        """
        request = build_query_request(transaction_id, self.config, self._nonce_factory)

        body = await self.transport.post(self.config.query_order_url, to_xml_string(request).encode("utf-8"))
        result = parse_query_order_result(body)

        # return_code FAIL responses carry no signature to verify
        _check_return_code(result)
        verify_signature(result, self.config.app_key, self.config.sign_type)

        return result

    def new_payment_request(self, prepay_id: str) -> PaymentRequest:
        """
        Build the signed payload the client app uses to start a payment.

        No network call is made.

        Raises:
            RequestValidationError: prepay_id is empty or not XML-safe.
        """
        return build_payment_request(prepay_id, self.config, self._nonce_factory, self._clock)

    def parse_notification(self, body: bytes) -> PaymentNotification:
        """
        Parse and verify a payment notification POSTed to notify_url.

        Raises:
            ParseError, GatewayError, SignatureMismatchError
        """
        notification = parse_payment_notification(body)
        _check_return_code(notification)
        verify_signature(notification, self.config.app_key, self.config.sign_type)
        return notification

    @staticmethod
    def notification_reply(success: bool, message: str = "") -> str:
        """XML acknowledgement the web layer sends back for a notification."""
        code = ReturnCode.SUCCESS if success else ReturnCode.FAIL
        return to_xml_string({
            "return_code": code.value,
            "return_msg": message or ("OK" if success else ReturnCode.FAIL.value),
        })
