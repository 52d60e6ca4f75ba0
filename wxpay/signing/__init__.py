from wxpay.signing.signer import SECRET_FIELD, SIGN_FIELD, canonical_string, sign
from wxpay.signing.verifier import verify_signature

__all__ = ["SECRET_FIELD", "SIGN_FIELD", "canonical_string", "sign", "verify_signature"]
