"""
Shard topology: the node's routable shard list and shard-id validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping

from .rpc.methods import NodeApi

__all__ = ["ShardRoute", "get_sharding_structure", "validate_shard_ids"]


@dataclass(frozen=True)
class ShardRoute:
    shard_id: int
    http: str
    ws: str = ""
    current: bool = False

    @classmethod
    def from_rpc_dict(cls, d: Mapping[str, Any]) -> "ShardRoute":
        return cls(
            shard_id=int(d.get("shardID", 0)),
            http=str(d.get("http", "")),
            ws=str(d.get("ws", "")),
            current=bool(d.get("current", False)),
        )


def get_sharding_structure(rpc: NodeApi) -> List[ShardRoute]:
    """Ordered list of shard routes as reported by the node."""
    return [ShardRoute.from_rpc_dict(item) for item in rpc.get_sharding_structure()]


def validate_shard_ids(from_shard: int, to_shard: int, shard_count: int) -> bool:
    """Both shard ids must index into a topology of `shard_count` shards."""
    return 0 <= from_shard < shard_count and 0 <= to_shard < shard_count
