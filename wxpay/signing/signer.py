"""
Request/response signature computation.

The canonical string is every non-empty field except `sign`, sorted by key,
joined as `k=v&`, followed by `key=<secret>`. Its digest is rendered as
uppercase hex. This must match the gateway bit for bit.
"""

import hashlib
import hmac
from typing import Mapping

from wxpay.models.enums import SignType

SIGN_FIELD = "sign"
SECRET_FIELD = "key"


def canonical_string(params: Mapping[str, str], secret: str) -> str:
    """Build the string that gets digested. Pure; exposed for debugging."""
    keys = sorted(k for k, v in params.items() if v and k != SIGN_FIELD)
    parts = [f"{k}={params[k]}&" for k in keys]
    parts.append(f"{SECRET_FIELD}={secret}")
    return "".join(parts)


def sign(params: Mapping[str, str], secret: str, sign_type: SignType = SignType.MD5) -> str:
    """
    Compute the signature of a parameter map.

    Args:
        params: Request or response fields. A `sign` entry is ignored.
        secret: The merchant's shared API key.
        sign_type: Digest algorithm; MD5 unless the merchant opted in to HMAC-SHA256.

    Returns:
        Uppercase hexadecimal digest.
    """
    payload = canonical_string(params, secret).encode("utf-8")

    if SignType(sign_type) is SignType.HMAC_SHA256:
        digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    else:
        digest = hashlib.md5(payload).hexdigest()

    return digest.upper()
