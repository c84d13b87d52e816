"""Private key signer and per-call signer resolution"""

from typing import Callable
from eth_account import Account
from polyclob.errors import SigningError


class Signer:
    """Holds a private key and signs 32-byte digests with it"""

    def __init__(self, private_key: str, chain_id: int):
        if not private_key:
            raise SigningError("Private key is required")
        try:
            self._account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            raise SigningError(f"Invalid private key: {e}") from e
        self.private_key = private_key
        self.chain_id = chain_id

    def address(self) -> str:
        return self._account.address

    def get_chain_id(self) -> int:
        return self.chain_id

    def sign(self, digest: bytes) -> str:
        """Sign a digest, returning 0x + r || s || v as hex"""
        try:
            signed = Account.unsafe_sign_hash(digest, self.private_key)
        except Exception as e:
            raise SigningError(str(e)) from e
        return "0x" + bytes(signed.signature).hex()


class SignerProvider:
    """Produces the signer to use for one call"""

    def get_signer(self) -> Signer:
        raise NotImplementedError


class StaticSignerProvider(SignerProvider):
    def __init__(self, signer: Signer):
        self._signer = signer

    def get_signer(self) -> Signer:
        return self._signer


class CallableSignerProvider(SignerProvider):
    """Resolves the signer through a user supplied function on every call"""

    def __init__(self, resolve: Callable[[], Signer]):
        self._resolve = resolve

    def get_signer(self) -> Signer:
        signer = self._resolve()
        if not isinstance(signer, Signer):
            raise SigningError(f"Signer resolver returned {type(signer).__name__}")
        return signer
