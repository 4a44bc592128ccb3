"""
Typed wrappers over the hmy_* JSON-RPC methods used by the transaction pipeline.

Each method returns decoded Python values (exact ints for quantities) and lets
`RpcError` propagate; the pipeline stages translate it into their own error
kinds. Any object exposing the same five methods can stand in for `HmyRpc`
(tests use in-memory fakes).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from ..config import SDKConfig
from ..errors import JsonRpcCode, RpcError
from ..utils.bytes import quantity_to_int
from .http import RpcClient

__all__ = ["NodeApi", "HmyRpc"]

BLOCK_LATEST = "latest"


class NodeApi(Protocol):
    """Minimal interface the pipeline expects from a node connection."""

    def get_balance(self, address: str) -> int: ...
    def get_transaction_count(self, address: str) -> int: ...
    def send_raw_transaction(self, raw_tx: str) -> str: ...
    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]: ...
    def get_sharding_structure(self) -> List[Dict[str, Any]]: ...


class HmyRpc:
    """Harmony node API over an `RpcClient`."""

    def __init__(self, client: RpcClient) -> None:
        self._client = client

    @classmethod
    def connect(cls, url: str, config: Optional[SDKConfig] = None, **kwargs: Any) -> "HmyRpc":
        cfg = config or SDKConfig(rpc_url=url)
        client = RpcClient(
            url,
            timeout=cfg.request_timeout,
            max_retries=cfg.max_retries,
            backoff_base=cfg.backoff_factor,
            headers=cfg.http_headers(),
            **kwargs,
        )
        return cls(client)

    @property
    def url(self) -> str:
        return self._client.url

    def close(self) -> None:
        self._client.close()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def __enter__(self) -> "HmyRpc":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    # --- methods -----------------------------------------------------------

    def get_balance(self, address: str) -> int:
        """Balance in base units; `address` in one1 form."""
        return self._quantity("hmy_getBalance", [address, BLOCK_LATEST])

    def get_transaction_count(self, address: str) -> int:
        """Number of transactions sent from `address` (0x hex form)."""
        return self._quantity("hmy_getTransactionCount", [address, BLOCK_LATEST])

    def send_raw_transaction(self, raw_tx: str) -> str:
        method = "hmy_sendRawTransaction"
        result = self._client.request(method, [raw_tx])
        if not isinstance(result, str) or not result:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message=f"unexpected transaction hash payload: {result!r}",
                method=method,
            )
        return result

    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        method = "hmy_getTransactionReceipt"
        result = self._client.request(method, [tx_hash])
        if result is None:
            return None
        if not isinstance(result, dict):
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message=f"unexpected receipt payload: {type(result).__name__}",
                method=method,
            )
        return result

    def get_sharding_structure(self) -> List[Dict[str, Any]]:
        method = "hmy_getShardingStructure"
        result = self._client.request(method, [])
        if not isinstance(result, list):
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message="sharding structure must be a list",
                data=result,
                method=method,
            )
        return result

    # --- internals -----------------------------------------------------------

    def _quantity(self, method: str, params: List[Any]) -> int:
        result = self._client.request(method, params)
        try:
            return quantity_to_int(result)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise RpcError(
                code=JsonRpcCode.INTERNAL_ERROR,
                message=f"invalid quantity in {method} result: {result!r}",
                method=method,
            ) from e
