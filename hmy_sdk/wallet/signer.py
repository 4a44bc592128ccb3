"""
hmy_sdk.wallet.signer
=====================

secp256k1 transaction signer.

A signer can be built from the handler's bound `Account` or from an ad-hoc
private key given as hex. Signatures use deterministic (RFC 6979) nonces, so
both shapes produce bit-identical raw transactions for the same key and
transaction.

The recovery id is folded together with the chain id into `v`
(``v = recovery_id + chain_id * 2 + 35``), matching the sign-bytes layout in
`hmy_sdk.tx.encode`.
"""

from __future__ import annotations

from typing import Union

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError
from rlp.exceptions import EncodingError

from ..account import Account, load_private_key
from ..address import Address
from ..errors import SigningFailed
from ..tx import encode
from ..types.core import Transaction
from ..utils.bytes import to_hex

__all__ = ["Credential", "Signer", "resolve_signer"]

# Either the handler's own account or a raw private key (hex text / bytes)
Credential = Union[Account, str, bytes]


class Signer:
    """Signs transactions with one secp256k1 key."""

    __slots__ = ("_key",)

    def __init__(self, private_key: keys.PrivateKey) -> None:
        self._key = private_key

    @classmethod
    def from_account(cls, account: Account) -> "Signer":
        return cls(account.private_key)

    @classmethod
    def from_private_key(cls, secret: Union[str, bytes, int]) -> "Signer":
        return cls(load_private_key(secret))

    @property
    def address(self) -> Address:
        return Address.from_bytes(self._key.public_key.to_canonical_address())

    def sign_transaction(self, tx: Transaction, chain_id: int) -> Transaction:
        """
        Return `tx` with its signature and raw encoding attached.

        Raises:
            SigningFailed if the transaction cannot be encoded or signed
        """
        if chain_id < 0:
            raise SigningFailed(f"invalid chain id {chain_id}")
        try:
            msg_hash = encode.signing_hash(tx, chain_id)
            sig = self._key.sign_msg_hash(msg_hash)
            v = sig.v + chain_id * 2 + 35
            raw = encode.encode_signed(tx, v=v, r=sig.r, s=sig.s)
        except (ValueError, ValidationError, BadSignature, EncodingError) as e:
            raise SigningFailed(str(e)) from e
        return tx.with_signature(v=v, r=sig.r, s=sig.s, raw=to_hex(raw))

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Signer({self.address.one})"


def resolve_signer(credential: Credential) -> Signer:
    """Build a signer from either credential shape."""
    if isinstance(credential, Account):
        return Signer.from_account(credential)
    return Signer.from_private_key(credential)
