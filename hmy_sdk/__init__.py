"""
Harmony SDK for Python
Convenience exports for building, signing and submitting transactions.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import ChainID, SDKConfig  # noqa: F401
from .errors import (  # noqa: F401
    AddressError,
    BroadcastRejected,
    DeadlineExceeded,
    HmySdkError,
    InsufficientFunds,
    InvalidShardRoute,
    OutOfGas,
    ReceiptQueryFailed,
    RemoteQueryFailed,
    RpcError,
    SequenceLookupFailed,
    SigningFailed,
)

# RPC
from .rpc import HmyRpc, RpcClient  # noqa: F401

# Accounts & addresses
from .account import Account  # noqa: F401
from .address import Address, is_one_address, parse_bech32, to_bech32  # noqa: F401

# Sharding
from .sharding import ShardRoute, get_sharding_structure, validate_shard_ids  # noqa: F401

# Tx
from .types.core import Transaction  # noqa: F401
from .tx.build import TxParams, assemble, intrinsic_gas  # noqa: F401
from .tx.nonce import get_address_nonce  # noqa: F401
from .tx.send import submit_raw, wait_for_receipt  # noqa: F401
from .wallet.signer import Signer  # noqa: F401
from .tx.handler import ExecutionResult, Handler  # noqa: F401

# Units
from .utils.units import NANO, ONE, to_base_units  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "ChainID", "SDKConfig",
    "HmySdkError", "RpcError", "AddressError",
    "InvalidShardRoute", "OutOfGas", "InsufficientFunds",
    "RemoteQueryFailed", "SequenceLookupFailed", "BroadcastRejected",
    "ReceiptQueryFailed", "SigningFailed", "DeadlineExceeded",
    # RPC
    "HmyRpc", "RpcClient",
    # Accounts
    "Account", "Address", "is_one_address", "parse_bech32", "to_bech32",
    # Sharding
    "ShardRoute", "get_sharding_structure", "validate_shard_ids",
    # Tx
    "Transaction", "TxParams", "assemble", "intrinsic_gas",
    "get_address_nonce", "submit_raw", "wait_for_receipt",
    "Signer", "ExecutionResult", "Handler",
    # Units
    "NANO", "ONE", "to_base_units",
]
