"""Signature verification for parsed gateway responses."""

import hmac
from typing import Dict, Protocol

from wxpay.errors import SignatureMismatchError
from wxpay.models.enums import SignType
from wxpay.signing.signer import SIGN_FIELD, sign


class Projectable(Protocol):
    def to_map(self) -> Dict[str, str]:
        ...


def verify_signature(
    result: Projectable,
    secret: str,
    sign_type: SignType = SignType.MD5,
) -> None:
    """
    Re-sign the fields of a response and compare against its claimed `sign`.

    A mismatch is always fatal, regardless of the response's return and
    result codes.

    Raises:
        SignatureMismatchError: The recomputed signature differs.
    """
    params = result.to_map()
    expected = sign(params, secret, sign_type)
    actual = params.get(SIGN_FIELD, "")

    if not hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8")):
        raise SignatureMismatchError(expected=expected, actual=actual)
