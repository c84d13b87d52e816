"""
Tests for wallet attestation signatures, HMAC request signing and the
authentication header sets built on top of them.
"""

import base64
import pytest
from polyclob.errors import EncodingError, SigningError
from polyclob.models import ApiCreds, BuilderCreds, RequestArgs
from polyclob.signing import (
    CallableSignerProvider,
    Signer,
    StaticSignerProvider,
    build_clob_eip712_signature,
    build_hmac_signature,
    create_builder_headers,
    create_level_1_headers,
    create_level_2_headers,
    inject_builder_headers,
)
from polyclob.signing.headers import BUILDER_HEADER_KEYS

# Well-known development key (first hardhat/anvil account)
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
AMOY = 80002

EXPECTED_SIGNATURE = (
    "0xf62319a987514da40e57e2f4d7529f7bac38f0355bd88bb5adbb3768d80de6c1"
    "682518e0af677d5260366425f4361e7b70c25ae232aff0ab2331e2b164a1aedc1b"
)

SECRET = base64.urlsafe_b64encode(b"0123456789abcdef0123456789abcdef").decode()


def test_eip712_golden_vector():
    """Deterministic ClobAuth signature for a fixed key, chain, timestamp and nonce"""
    print("🧪 Testing ClobAuth EIP-712 signature...")

    signer = Signer(PRIVATE_KEY, AMOY)
    assert signer.address() == ADDRESS

    signature = build_clob_eip712_signature(signer, AMOY, 10000000, 23)
    assert signature == EXPECTED_SIGNATURE
    assert len(signature) == 132

    # Defaults: signer chain, nonce 0
    assert build_clob_eip712_signature(signer, timestamp=10000000, nonce=23) == signature
    assert build_clob_eip712_signature(signer, AMOY, 10000000) != signature

    print("   ✅ golden vector reproduced")


def test_invalid_private_key():
    with pytest.raises(SigningError):
        Signer("0x1234", AMOY)
    with pytest.raises(SigningError):
        Signer("", AMOY)


def test_hmac_determinism_and_sensitivity():
    print("\n🧪 Testing HMAC signatures...")

    base = build_hmac_signature(SECRET, 1000000, "POST", "/order", '{"hash":"0x123"}')
    assert base == build_hmac_signature(SECRET, 1000000, "POST", "/order", '{"hash":"0x123"}')

    assert base != build_hmac_signature(SECRET, 1000000, "POST", "/order")
    assert base != build_hmac_signature(SECRET, 1000000, "DELETE", "/order", '{"hash":"0x123"}')
    assert base != build_hmac_signature(SECRET, 1000000, "POST", "/orders", '{"hash":"0x123"}')
    assert base != build_hmac_signature(SECRET, 1000001, "POST", "/order", '{"hash":"0x123"}')

    # URL-safe alphabet, padding kept
    assert "+" not in base and "/" not in base
    assert base.endswith("=")
    assert len(base) == 44

    print("   ✅ HMAC deterministic and input sensitive")


def test_hmac_bad_secret():
    """Malformed secrets fail loudly instead of signing with a mangled key"""
    for secret in ("abc", "!!!!", "QUJD!!!!", "QUJD QUJD"):
        with pytest.raises(EncodingError):
            build_hmac_signature(secret, 1000000, "GET", "/auth/api-keys")

    # URL-safe characters are part of the accepted alphabet
    url_safe = base64.urlsafe_b64encode(b"\xfb\xff\xfe" * 8).decode()
    assert "-" in url_safe and "_" in url_safe
    assert build_hmac_signature(url_safe, 1000000, "GET", "/auth/api-keys")


def test_level_1_headers():
    signer = Signer(PRIVATE_KEY, AMOY)
    headers = create_level_1_headers(signer, nonce=23, timestamp=10000000)

    assert headers == {
        "POLY_ADDRESS": ADDRESS,
        "POLY_SIGNATURE": EXPECTED_SIGNATURE,
        "POLY_TIMESTAMP": "10000000",
        "POLY_NONCE": "23",
    }


def test_level_2_headers():
    signer = Signer(PRIVATE_KEY, AMOY)
    creds = ApiCreds("key-1", SECRET, "pass-1")
    args = RequestArgs("POST", "/order", '{"a":1}')

    headers = create_level_2_headers(signer, creds, args, timestamp=1700000000)

    assert set(headers) == {
        "POLY_ADDRESS",
        "POLY_SIGNATURE",
        "POLY_TIMESTAMP",
        "POLY_API_KEY",
        "POLY_PASSPHRASE",
    }
    assert headers["POLY_SIGNATURE"] == build_hmac_signature(
        SECRET, 1700000000, "POST", "/order", '{"a":1}'
    )
    assert headers["POLY_API_KEY"] == "key-1"
    assert headers["POLY_PASSPHRASE"] == "pass-1"


def test_builder_header_injection():
    print("\n🧪 Testing builder header injection...")

    signer = Signer(PRIVATE_KEY, AMOY)
    args = RequestArgs("POST", "/order", '{"a":1}')
    l2 = create_level_2_headers(signer, ApiCreds("key-1", SECRET, "pass-1"), args, 1700000000)

    builder_secret = base64.urlsafe_b64encode(b"builder-secret-bytes").decode()
    builder = create_builder_headers(BuilderCreds("b-key", builder_secret, "b-pass"), args, 1700000000)

    merged = inject_builder_headers(l2, builder)
    for key in BUILDER_HEADER_KEYS:
        assert merged[key] == builder[key]
    assert merged["POLY_API_KEY"] == "key-1"
    assert merged["POLY_BUILDER_SIGNATURE"] != merged["POLY_SIGNATURE"]
    assert "POLY_BUILDER_API_KEY" not in l2, "L2 headers must not be mutated"

    # Missing or partial builder payloads fall back to plain L2
    assert inject_builder_headers(l2, None) == l2
    partial = dict(builder)
    del partial["POLY_BUILDER_SIGNATURE"]
    assert inject_builder_headers(l2, partial) == l2

    print("   ✅ builder headers merged, fallback to L2 works")


def test_signer_providers():
    signer = Signer(PRIVATE_KEY, AMOY)
    assert StaticSignerProvider(signer).get_signer() is signer

    calls = []

    def resolve():
        calls.append(1)
        return signer

    provider = CallableSignerProvider(resolve)
    provider.get_signer()
    provider.get_signer()
    assert len(calls) == 2

    with pytest.raises(SigningError):
        CallableSignerProvider(lambda: "not a signer").get_signer()


if __name__ == "__main__":
    test_eip712_golden_vector()
    test_invalid_private_key()
    test_hmac_determinism_and_sensitivity()
    test_hmac_bad_secret()
    test_level_1_headers()
    test_level_2_headers()
    test_builder_header_injection()
    test_signer_providers()
    print("\n✅ All signing tests passed")
