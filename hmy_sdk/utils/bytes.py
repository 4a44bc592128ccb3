from __future__ import annotations

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


def ensure_bytes(data: Union[BytesLike, str]) -> bytes:
    """
    Ensure input is bytes.

    Accepts:
      - bytes / bytearray / memoryview  -> bytes(data)
      - str: treated as hex; optional '0x' prefix; even-length enforced

    Raises:
      ValueError on invalid hex strings.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return from_hex(data)
    raise TypeError(f"Unsupported type for ensure_bytes: {type(data)!r}")


def to_hex(b: BytesLike, prefix: bool = True) -> str:
    """
    Bytes -> hex string (lowercase). Prefix with '0x' by default.
    """
    s = bytes(b).hex()
    return f"0x{s}" if prefix else s


def strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def from_hex(s: str) -> bytes:
    """
    Hex string (optionally '0x' prefixed) -> bytes.

    Enforces even-length (nibbles must pair to bytes) and lowercase/uppercase agnostic.
    """
    if not isinstance(s, str):
        raise TypeError("from_hex expects a string")
    s = strip_0x(s)
    if len(s) % 2 != 0:
        raise ValueError("hex string must have even length")
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise ValueError(f"invalid hex string: {e}") from e


def quantity_to_int(value: Union[str, int]) -> int:
    """
    Decode a JSON-RPC quantity into an exact integer.

    Nodes return quantities as 0x-prefixed hex ("0x0", "0xde0b6b3a7640000");
    plain ints and decimal strings are tolerated for test doubles.
    """
    if isinstance(value, bool):
        raise TypeError("quantity must not be a bool")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise TypeError(f"Unsupported quantity type: {type(value)!r}")
    s = value.strip()
    if s.startswith(("0x", "0X")):
        body = s[2:]
        return int(body, 16) if body else 0
    return int(s, 10)


__all__ = [
    "BytesLike",
    "ensure_bytes",
    "to_hex",
    "strip_0x",
    "from_hex",
    "quantity_to_int",
]
