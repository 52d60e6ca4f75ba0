from wxpay.transport.base import Transport
from wxpay.transport.httpx_transport import HttpxTransport

__all__ = ["HttpxTransport", "Transport"]
