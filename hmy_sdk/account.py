"""
Accounts: a secp256k1 keypair plus its derived address.

An `Account` is immutable. It is the credential bound to a `Handler` and the
source address for balance and nonce lookups.
"""

from __future__ import annotations

import secrets
from typing import Union

from eth_keys import keys
from eth_keys.exceptions import ValidationError

from .address import Address
from .errors import SigningFailed
from .utils.bytes import strip_0x

__all__ = ["Account", "load_private_key"]

# secp256k1 group order
_CURVE_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def load_private_key(secret: Union[str, bytes, int, keys.PrivateKey]) -> keys.PrivateKey:
    """
    Parse a private key given as hex text (with or without 0x), 32 raw bytes
    or an integer scalar. Short hex is left-padded, like a big-integer parse.

    Raises SigningFailed for anything that is not a valid secp256k1 scalar.
    """
    if isinstance(secret, keys.PrivateKey):
        return secret
    if isinstance(secret, str):
        text = strip_0x(secret.strip())
        try:
            scalar = int(text, 16)
        except ValueError as e:
            raise SigningFailed(f"private key is not hex: {e}") from e
    elif isinstance(secret, (bytes, bytearray)):
        scalar = int.from_bytes(bytes(secret), "big")
    elif isinstance(secret, int) and not isinstance(secret, bool):
        scalar = secret
    else:
        raise SigningFailed(f"unsupported private key type: {type(secret).__name__}")

    if not 0 < scalar < _CURVE_N:
        raise SigningFailed("private key is out of range for secp256k1")
    try:
        return keys.PrivateKey(scalar.to_bytes(32, "big"))
    except ValidationError as e:
        raise SigningFailed(str(e)) from e


class Account:
    """Owned keypair and derived address. Immutable after construction."""

    __slots__ = ("_key", "_address")

    def __init__(self, private_key: Union[str, bytes, int, keys.PrivateKey]) -> None:
        key = load_private_key(private_key)
        object.__setattr__(self, "_key", key)
        object.__setattr__(
            self, "_address", Address.from_bytes(key.public_key.to_canonical_address())
        )

    def __setattr__(self, name, value):  # noqa: ANN001
        raise AttributeError("Account is immutable")

    @classmethod
    def create(cls) -> "Account":
        """Fresh random account."""
        while True:
            scalar = int.from_bytes(secrets.token_bytes(32), "big")
            if 0 < scalar < _CURVE_N:
                return cls(scalar)

    @property
    def address(self) -> Address:
        return self._address

    @property
    def private_key(self) -> keys.PrivateKey:
        return self._key

    @property
    def public_key(self) -> keys.PublicKey:
        return self._key.public_key

    def __repr__(self) -> str:
        return f"Account({self._address.one})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Account) and other._key.to_bytes() == self._key.to_bytes()

    def __hash__(self) -> int:
        return hash(self._address.hex)
