"""HMAC request signing for L2 (API key) authentication

Secrets issued by the exchange use the URL-safe base64 alphabet and are decoded
with it; the signature is URL-safe base64 with its `=` padding kept.
"""

import base64
import binascii
import hashlib
import hmac
from typing import Optional, Union
from polyclob.errors import EncodingError


def build_hmac_signature(
    secret: str,
    timestamp: Union[int, str],
    method: str,
    request_path: str,
    body: Optional[str] = None,
) -> str:
    """Sign timestamp + method + request_path + body with the API secret"""
    try:
        key = base64.b64decode(secret, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise EncodingError(f"Invalid base64 secret: {e}") from e

    message = f"{timestamp}{method}{request_path}"
    if body:
        message += body

    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("utf-8")
