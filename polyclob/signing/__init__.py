"""Request and message signing"""

from .signer import Signer, SignerProvider, StaticSignerProvider, CallableSignerProvider
from .eip712 import ClobAuth, build_clob_eip712_signature, domain_separator, eip712_digest
from .hmac_signer import build_hmac_signature
from .headers import (
    create_level_1_headers,
    create_level_2_headers,
    create_builder_headers,
    inject_builder_headers,
)

__all__ = [
    "Signer",
    "SignerProvider",
    "StaticSignerProvider",
    "CallableSignerProvider",
    "ClobAuth",
    "build_clob_eip712_signature",
    "domain_separator",
    "eip712_digest",
    "build_hmac_signature",
    "create_level_1_headers",
    "create_level_2_headers",
    "create_builder_headers",
    "inject_builder_headers",
]
