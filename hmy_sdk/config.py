"""
SDK configuration: RPC endpoint, chain id, timeouts and confirmation polling.

- Loads sane defaults and supports overrides via environment variables (HMY_*).
- Provides helpers for building HTTP headers and validating endpoints.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional

from .version import __version__

_DEFAULT_RPC = "http://localhost:9500"

_HEX_RE = re.compile(r"^0x[0-9a-fA-F]+$")


class ChainID(IntEnum):
    """Well-known Harmony chain ids mixed into every signature."""

    MAINNET = 1
    TESTNET = 2
    LOCALNET = 2
    PANGAEA = 3
    PARTNER = 4
    STRESSNET = 5


def _parse_chain_id(val: Any, default: int = ChainID.TESTNET) -> int:
    """
    Accepts int, decimal str, 0x-hex str or a ChainID name and returns int.
    """
    if val is None or val == "":
        return int(default)
    if isinstance(val, int):
        return int(val)
    s = str(val).strip()
    if _HEX_RE.match(s):
        return int(s, 16)
    if s.upper() in ChainID.__members__:
        return int(ChainID[s.upper()])
    return int(s, 10)


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...]) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ValueError(f"URL must start with {allowed}, got: {url!r}")
    return url


@dataclass
class SDKConfig:
    # Core
    rpc_url: str = field(default_factory=lambda: _DEFAULT_RPC)
    chain_id: int = field(default_factory=lambda: _parse_chain_id(None))
    # HTTP behavior; balance/nonce/broadcast failures surface to the caller
    # untouched unless max_retries is raised explicitly
    request_timeout: float = 10.0
    max_retries: int = 0
    backoff_factor: float = 0.25
    # Confirmation polling
    confirm_interval: float = 2.0
    # Gas price in nano units
    default_gas_price: int = 1
    # Headers / identity
    user_agent: str = field(default_factory=lambda: f"hmy-sdk-py/{__version__}")

    @classmethod
    def from_env(cls, prefix: str = "HMY_") -> "SDKConfig":
        """
        Create config from environment variables:

        HMY_RPC_URL             (http/https)
        HMY_CHAIN_ID            (int, 0x-hex or name such as "mainnet")
        HMY_TIMEOUT             (float seconds, HTTP)
        HMY_MAX_RETRIES         (int)
        HMY_BACKOFF             (float)
        HMY_CONFIRM_INTERVAL    (float seconds between receipt polls)
        HMY_GAS_PRICE           (int, nano units)
        HMY_USER_AGENT          (str)
        """
        rpc = _env(f"{prefix}RPC_URL", _DEFAULT_RPC)
        chain_id = _parse_chain_id(_env(f"{prefix}CHAIN_ID", None))
        timeout = float(_env(f"{prefix}TIMEOUT", "10.0"))
        retries = int(_env(f"{prefix}MAX_RETRIES", "0"))
        backoff = float(_env(f"{prefix}BACKOFF", "0.25"))
        interval = float(_env(f"{prefix}CONFIRM_INTERVAL", "2.0"))
        gas_price = int(_env(f"{prefix}GAS_PRICE", "1"))
        ua = _env(f"{prefix}USER_AGENT", f"hmy-sdk-py/{__version__}")

        _ensure_scheme(rpc, ("http", "https"))
        if interval <= 0:
            raise ValueError(f"{prefix}CONFIRM_INTERVAL must be positive, got {interval}")

        return cls(
            rpc_url=rpc or _DEFAULT_RPC,
            chain_id=chain_id,
            request_timeout=timeout,
            max_retries=retries,
            backoff_factor=backoff,
            confirm_interval=interval,
            default_gas_price=gas_price,
            user_agent=ua or f"hmy-sdk-py/{__version__}",
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["SDKConfig"] = None, **overrides: Any
    ) -> "SDKConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        if "chain_id" in overrides:
            data["chain_id"] = _parse_chain_id(overrides["chain_id"], base.chain_id)
        if "rpc_url" in overrides:
            _ensure_scheme(data["rpc_url"], ("http", "https"))
        return cls(**data)

    def http_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rpc_url": self.rpc_url,
            "chain_id": int(self.chain_id),
            "request_timeout": float(self.request_timeout),
            "max_retries": int(self.max_retries),
            "backoff_factor": float(self.backoff_factor),
            "confirm_interval": float(self.confirm_interval),
            "default_gas_price": int(self.default_gas_price),
            "user_agent": self.user_agent,
        }


__all__ = ["SDKConfig", "ChainID"]
