"""
Selector engine
===============

Keccak-256 hashing (the original Keccak padding used by Ethereum, *not* NIST
SHA3-256) and 4-byte function selectors::

    >>> function_selector("transfer(address,uint256)")
    '0xa9059cbb'

CPython's hashlib only ships NIST SHA3, so Keccak comes from PyCryptodome.
"""

from __future__ import annotations

from typing import Union

from Crypto.Hash import keccak as _keccak

BytesLike = Union[bytes, bytearray, memoryview]

SELECTOR_SIZE = 4


def keccak256(data: BytesLike) -> bytes:
    """Return the Keccak-256 digest of *data*."""
    h = _keccak.new(digest_bits=256)
    h.update(bytes(data))
    return h.digest()


def keccak256_hex(data: BytesLike, *, prefix: bool = True) -> str:
    digest = keccak256(data).hex()
    return "0x" + digest if prefix else digest


def selector_bytes(signature: str) -> bytes:
    """First four bytes of keccak256(signature)."""
    return keccak256(signature.encode("utf-8"))[:SELECTOR_SIZE]


def function_selector(signature: str) -> str:
    """Selector of a canonical signature as lowercase ``0x`` + 8 hex digits."""
    return "0x" + selector_bytes(signature).hex()


__all__ = [
    "SELECTOR_SIZE",
    "keccak256",
    "keccak256_hex",
    "selector_bytes",
    "function_selector",
]
