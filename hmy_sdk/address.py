"""
hmy_sdk.address
===============

Address encoding for Harmony accounts.

Format
------
An account address is the last 20 bytes of keccak256(uncompressed public key),
exactly as on Ethereum. It has two text forms:

- "human" form: Bech32 with HRP "one" (e.g. ``one1...``)
- canonical form: 0x-prefixed hex, EIP-55 checksummed

The RPC balance query takes the human form, the nonce query and the
transaction's ``to`` field use the canonical form.

This module provides:
- is_one_address(text) -> bool
- parse_bech32(text) -> canonical hex
- to_bech32(hex_or_bytes) -> one1 text
- Address: value object holding both forms
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import bech32
from eth_utils import is_hex_address, to_checksum_address

from .errors import AddressError
from .utils.bytes import from_hex, to_hex

DEFAULT_HRP = "one"
ADDRESS_LENGTH = 20

__all__ = [
    "DEFAULT_HRP",
    "ADDRESS_LENGTH",
    "Address",
    "is_one_address",
    "parse_bech32",
    "to_bech32",
    "to_canonical",
]


def _decode(text: str, hrp: str) -> bytes:
    got_hrp, data5 = bech32.bech32_decode(text)
    if got_hrp is None or data5 is None:
        raise AddressError(f"invalid bech32 address: {text!r}")
    if got_hrp != hrp:
        raise AddressError(f"unexpected address prefix {got_hrp!r}, want {hrp!r}")
    decoded = bech32.convertbits(data5, 5, 8, False)
    if decoded is None or len(decoded) != ADDRESS_LENGTH:
        raise AddressError(f"bech32 payload is not a {ADDRESS_LENGTH}-byte address: {text!r}")
    return bytes(decoded)


def is_one_address(text: str, hrp: str = DEFAULT_HRP) -> bool:
    """True if `text` is a well-formed human-form address."""
    if not isinstance(text, str):
        return False
    try:
        _decode(text, hrp)
    except AddressError:
        return False
    return True


def parse_bech32(text: str, hrp: str = DEFAULT_HRP) -> str:
    """Human form -> checksummed 0x hex."""
    return to_checksum_address(_decode(text, hrp))


def to_bech32(address: Union[str, bytes], hrp: str = DEFAULT_HRP) -> str:
    """Canonical hex (or the raw 20 bytes) -> human form."""
    raw = address if isinstance(address, (bytes, bytearray)) else _hex_bytes(address)
    if len(raw) != ADDRESS_LENGTH:
        raise AddressError(f"address must be {ADDRESS_LENGTH} bytes, got {len(raw)}")
    data5 = bech32.convertbits(bytes(raw), 8, 5)
    if data5 is None:
        raise AddressError("could not convert address to bech32 words")
    return bech32.bech32_encode(hrp, data5)


def _hex_bytes(text: str) -> bytes:
    if not is_hex_address(text):
        raise AddressError(f"not a hex address: {text!r}")
    return from_hex(text)


def to_canonical(text: str, hrp: str = DEFAULT_HRP) -> str:
    """
    Resolve a receiver string for storage in a transaction.

    Human-form input is decoded; anything else is assumed canonical already
    and returned unchanged.
    """
    if is_one_address(text, hrp):
        return parse_bech32(text, hrp)
    return text


@dataclass(frozen=True)
class Address:
    """Both text forms of one account address."""

    one: str
    hex: str

    @classmethod
    def parse(cls, text: str) -> "Address":
        """Accepts either form."""
        if is_one_address(text):
            return cls(one=text, hex=parse_bech32(text))
        raw = _hex_bytes(text)
        return cls(one=to_bech32(raw), hex=to_checksum_address(raw))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Address":
        return cls(one=to_bech32(raw), hex=to_checksum_address(raw))

    def to_bytes(self) -> bytes:
        return from_hex(self.hex)

    def __str__(self) -> str:
        return self.one

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Address({self.one}, {to_hex(self.to_bytes())})"
