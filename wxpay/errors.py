"""
Exception hierarchy for gateway calls.

Every failure surfaces to the immediate caller as one of these. Nothing is
retried and nothing is converted into a "soft" result:

  - ConfigValidationError: handler constructed with an incomplete config
  - RequestValidationError: caller-supplied request fields are unusable
  - TransportError: the HTTP round trip itself failed
  - ParseError: the response body is not a usable XML parameter document
  - GatewayError: well-formed response reporting a non-SUCCESS code
  - SignatureMismatchError: the response signature does not verify
"""

from typing import Optional, Sequence


class WxPayError(Exception):
    """Base exception for all gateway client errors."""


class ConfigValidationError(WxPayError):
    """One or more mandatory configuration fields are empty."""

    def __init__(self, missing_fields: Sequence[str]):
        super().__init__(f"config fields cannot be empty: {', '.join(missing_fields)}")
        self.missing_fields = list(missing_fields)


class RequestValidationError(WxPayError):
    """A request parameter map failed validation before being signed."""


class TransportError(WxPayError):
    """Network or connection failure talking to the gateway."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ParseError(WxPayError):
    """Malformed or incomplete response body."""


class GatewayError(WxPayError):
    """The gateway answered, but reported a non-SUCCESS return or result code."""

    def __init__(self, kind: str, code: str, description: str):
        super().__init__(f"{kind} code:{code}, {kind} desc:{description}")
        self.kind = kind
        self.code = code
        self.description = description


class SignatureMismatchError(WxPayError):
    """Recomputed signature disagrees with the one the response claims."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"sign not match, want:{expected}, got:{actual}")
        self.expected = expected
        self.actual = actual
