"""Authentication header sets for the CLOB session layer"""

import time
from typing import Dict, Optional
from polyclob.models import ApiCreds, BuilderCreds, RequestArgs
from .eip712 import build_clob_eip712_signature
from .hmac_signer import build_hmac_signature
from .signer import Signer

POLY_ADDRESS = "POLY_ADDRESS"
POLY_SIGNATURE = "POLY_SIGNATURE"
POLY_TIMESTAMP = "POLY_TIMESTAMP"
POLY_NONCE = "POLY_NONCE"
POLY_API_KEY = "POLY_API_KEY"
POLY_PASSPHRASE = "POLY_PASSPHRASE"

POLY_BUILDER_API_KEY = "POLY_BUILDER_API_KEY"
POLY_BUILDER_TIMESTAMP = "POLY_BUILDER_TIMESTAMP"
POLY_BUILDER_PASSPHRASE = "POLY_BUILDER_PASSPHRASE"
POLY_BUILDER_SIGNATURE = "POLY_BUILDER_SIGNATURE"

BUILDER_HEADER_KEYS = (
    POLY_BUILDER_API_KEY,
    POLY_BUILDER_TIMESTAMP,
    POLY_BUILDER_PASSPHRASE,
    POLY_BUILDER_SIGNATURE,
)


def create_level_1_headers(
    signer: Signer, nonce: Optional[int] = None, timestamp: Optional[int] = None
) -> Dict[str, str]:
    """Wallet-signature headers used for API key management"""
    ts = int(time.time()) if timestamp is None else timestamp
    n = 0 if nonce is None else nonce

    signature = build_clob_eip712_signature(signer, signer.get_chain_id(), ts, n)
    return {
        POLY_ADDRESS: signer.address(),
        POLY_SIGNATURE: signature,
        POLY_TIMESTAMP: str(ts),
        POLY_NONCE: str(n),
    }


def create_level_2_headers(
    signer: Signer,
    creds: ApiCreds,
    request_args: RequestArgs,
    timestamp: Optional[int] = None,
) -> Dict[str, str]:
    """HMAC headers used for trading calls"""
    ts = int(time.time()) if timestamp is None else timestamp

    signature = build_hmac_signature(
        creds.api_secret,
        ts,
        request_args.method,
        request_args.request_path,
        request_args.body,
    )
    return {
        POLY_ADDRESS: signer.address(),
        POLY_SIGNATURE: signature,
        POLY_TIMESTAMP: str(ts),
        POLY_API_KEY: creds.api_key,
        POLY_PASSPHRASE: creds.api_passphrase,
    }


def create_builder_headers(
    builder_creds: BuilderCreds,
    request_args: RequestArgs,
    timestamp: Optional[int] = None,
) -> Dict[str, str]:
    """Headers identifying the third party that originated the order flow"""
    ts = int(time.time()) if timestamp is None else timestamp

    signature = build_hmac_signature(
        builder_creds.secret,
        ts,
        request_args.method,
        request_args.request_path,
        request_args.body,
    )
    return {
        POLY_BUILDER_API_KEY: builder_creds.key,
        POLY_BUILDER_TIMESTAMP: str(ts),
        POLY_BUILDER_PASSPHRASE: builder_creds.passphrase,
        POLY_BUILDER_SIGNATURE: signature,
    }


def inject_builder_headers(
    l2_headers: Dict[str, str], builder_headers: Optional[Dict[str, str]]
) -> Dict[str, str]:
    """Merge builder headers into an L2 set.

    A missing or incomplete builder payload leaves the request with the plain
    L2 headers instead of failing it.
    """
    headers = dict(l2_headers)
    if not builder_headers or any(not builder_headers.get(k) for k in BUILDER_HEADER_KEYS):
        return headers
    for key in BUILDER_HEADER_KEYS:
        headers[key] = builder_headers[key]
    return headers
