"""
EIP-712 signing of the CLOB wallet-ownership attestation.

The digest is assembled by hand from its three parts so each one can be
checked in isolation:

    domainSeparator = keccak256(abi.encode(domainTypeHash, keccak256(name), keccak256(version), chainId))
    structHash      = keccak256(abi.encode(typeHash, address, keccak256(timestamp), nonce, keccak256(message)))
    digest          = keccak256(0x19 0x01 || domainSeparator || structHash)

Orders use the same pipeline with their own struct, which py-order-utils
hashes and signs.
"""

import time
from dataclasses import dataclass
from typing import Optional
from eth_abi import encode
from eth_utils import keccak, to_checksum_address
from .signer import Signer

CLOB_DOMAIN_NAME = "ClobAuthDomain"
CLOB_VERSION = "1"
MSG_TO_SIGN = "This message attests that I control the given wallet"

EIP712_DOMAIN_TYPE = "EIP712Domain(string name,string version,uint256 chainId)"
CLOB_AUTH_TYPE = "ClobAuth(address address,string timestamp,uint256 nonce,string message)"


@dataclass(frozen=True)
class ClobAuth:
    address: str
    timestamp: str
    nonce: int
    message: str = MSG_TO_SIGN

    def struct_hash(self) -> bytes:
        return keccak(
            encode(
                ["bytes32", "address", "bytes32", "uint256", "bytes32"],
                [
                    keccak(text=CLOB_AUTH_TYPE),
                    to_checksum_address(self.address),
                    keccak(text=self.timestamp),
                    self.nonce,
                    keccak(text=self.message),
                ],
            )
        )


def domain_separator(
    chain_id: int, name: str = CLOB_DOMAIN_NAME, version: str = CLOB_VERSION
) -> bytes:
    return keccak(
        encode(
            ["bytes32", "bytes32", "bytes32", "uint256"],
            [keccak(text=EIP712_DOMAIN_TYPE), keccak(text=name), keccak(text=version), chain_id],
        )
    )


def eip712_digest(domain_hash: bytes, struct_hash: bytes) -> bytes:
    return keccak(b"\x19\x01" + domain_hash + struct_hash)


def build_clob_eip712_signature(
    signer: Signer,
    chain_id: Optional[int] = None,
    timestamp: Optional[int] = None,
    nonce: Optional[int] = None,
) -> str:
    """
    Sign the ClobAuth message proving control of the signer's wallet.

    Args:
        signer: wallet to attest
        chain_id: defaults to the signer's chain
        timestamp: Unix seconds, defaults to now
        nonce: defaults to 0

    Returns:
        0x-prefixed 65-byte signature (132 characters)
    """
    if chain_id is None:
        chain_id = signer.get_chain_id()
    if timestamp is None:
        timestamp = int(time.time())
    if nonce is None:
        nonce = 0

    clob_auth = ClobAuth(address=signer.address(), timestamp=str(timestamp), nonce=nonce)
    digest = eip712_digest(domain_separator(chain_id), clob_auth.struct_hash())
    return signer.sign(digest)
