"""
hmy_sdk.tx.handler
==================

End-to-end transaction pipeline.

    shard check -> intrinsic gas -> balance check -> receiver -> gas price
        -> nonce -> assemble -> sign -> (broadcast -> confirm) | dry run

Every stage either hands a new frozen `TxParams` / `Transaction` to the next
one or aborts the run with its own error kind. The handler keeps no per-run
state, so one handler can serve several threads; runs for the *same* sender
still race on the nonce (see `hmy_sdk.tx.nonce`).

Two entry points share the pipeline:

- `Handler.execute` signs with the bound account and talks to the network
  (shard topology, balance, nonce, broadcast, receipt).
- `Handler.set_raw_transaction_with_private_key` signs offline with an
  explicit key and caller-supplied nonce and never contacts the node.

Example:
    handler = Handler("https://api.s0.b.hmny.io", Account(private_key_hex))
    result = handler.execute(
        chain_id=ChainID.TESTNET,
        receiver="one1...",
        payload="",
        amount="0.5",
        wait_to_confirm_time=20,
    )
    print(result.tx_hash, result.confirmed)
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from ..account import Account
from ..address import Address
from ..config import SDKConfig
from ..errors import InvalidShardRoute, RemoteQueryFailed, RpcError, SigningFailed
from ..rpc.methods import HmyRpc, NodeApi
from ..sharding import get_sharding_structure, validate_shard_ids
from ..types.core import Transaction
from ..utils.retry import Deadline
from ..utils.units import Amount
from ..wallet.signer import Credential, Signer, resolve_signer
from . import nonce as nonce_lookup
from .balance import verify_balance
from .build import TxParams, assemble, intrinsic_gas, payload_bytes
from .send import submit_raw, wait_for_receipt

log = logging.getLogger(__name__)

__all__ = ["ExecutionResult", "Handler"]

Payload = Union[str, bytes, bytearray]


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of `Handler.execute`.

    In a dry run nothing is broadcast: `tx_hash` is None and only the locally
    signed `raw_transaction` is available.
    """

    transaction: Transaction
    dry_run: bool = False
    receipt: Optional[Dict[str, Any]] = None

    @property
    def tx_hash(self) -> Optional[str]:
        return self.transaction.tx_hash

    @property
    def raw_transaction(self) -> str:
        return self.transaction.raw or ""

    @property
    def confirmed(self) -> bool:
        return self.receipt is not None


class Handler:
    """Builds, signs and submits transactions against one node."""

    def __init__(
        self,
        url: str,
        account: Optional[Account] = None,
        *,
        config: Optional[SDKConfig] = None,
        rpc: Optional[NodeApi] = None,
        sleep: Callable[[float], None] = time.sleep,
        **client_kwargs: Any,
    ) -> None:
        self.url = url
        self.account = account
        self.config = SDKConfig.with_overrides(config or SDKConfig.from_env(), rpc_url=url)
        self._client_kwargs = client_kwargs
        # Only a connection opened here is closed by close()
        self._owns_rpc = rpc is None
        self.rpc: NodeApi = rpc if rpc is not None else HmyRpc.connect(url, self.config, **client_kwargs)
        self._sleep = sleep

    def close(self) -> None:
        if self._owns_rpc:
            self.rpc.close()  # type: ignore[attr-defined]

    def __enter__(self) -> "Handler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    # --- public API ----------------------------------------------------------

    def execute(
        self,
        chain_id: int,
        receiver: str,
        payload: Payload,
        amount: Amount,
        gas_price: Optional[Amount] = None,
        from_shard: int = 0,
        to_shard: int = 0,
        dry_run: bool = False,
        wait_to_confirm_time: float = 0,
        *,
        timeout: Optional[float] = None,
    ) -> ExecutionResult:
        """
        Run the full pipeline with the bound account.

        `wait_to_confirm_time` is a best-effort budget in seconds for the
        receipt wait; 0 or less means fire-and-forget. `timeout` sets an
        overall deadline for the remote calls; once it passes no new call is
        started and the receipt wait stops early.

        Raises:
            InvalidShardRoute, OutOfGas, InsufficientFunds, RemoteQueryFailed,
            SequenceLookupFailed, SigningFailed, BroadcastRejected,
            ReceiptQueryFailed, DeadlineExceeded
        """
        if self.account is None:
            raise ValueError("execute() needs a Handler bound to an Account")
        deadline = Deadline(timeout) if timeout is not None else None

        tx = self._build(
            receiver,
            payload,
            amount,
            gas_price,
            from_shard,
            to_shard,
            validate_network=True,
            nonce=None,
            deadline=deadline,
        )
        signed = self._sign(tx, chain_id, self.account)

        if dry_run:
            log.info("dry run, raw transaction: %s", signed.raw)
            return ExecutionResult(transaction=signed, dry_run=True)

        tx_hash = submit_raw(self.rpc, signed.raw, deadline=deadline)  # type: ignore[arg-type]
        signed = signed.with_hash(tx_hash)
        log.info("transaction %s broadcast from shard %d to shard %d", tx_hash, from_shard, to_shard)

        receipt = wait_for_receipt(
            self.rpc,
            tx_hash,
            budget=wait_to_confirm_time,
            interval=self.config.confirm_interval,
            sleep=self._sleep,
            deadline=deadline,
            on_wait=lambda attempt, nap: log.debug(
                "no receipt for %s yet (attempt %d), sleeping %.1fs", tx_hash, attempt, nap
            ),
        )
        if receipt is not None:
            log.info("received transaction confirmation, %s", json.dumps(receipt, default=str))
        elif wait_to_confirm_time > 0:
            log.warning("no receipt for %s within %ss", tx_hash, wait_to_confirm_time)
        return ExecutionResult(transaction=signed, receipt=receipt)

    def set_raw_transaction_with_private_key(
        self,
        chain_id: int,
        sender: Optional[str],
        receiver: str,
        payload: Payload,
        amount: Amount,
        nonce: int,
        gas_price: Optional[Amount],
        from_shard: int,
        to_shard: int,
        private_key: Union[str, bytes],
    ) -> str:
        """
        Offline signing: no topology, balance or nonce lookup and no broadcast.

        `sender`, when given, must be the address of `private_key`.
        Returns the raw signed transaction as 0x hex.
        """
        signer = Signer.from_private_key(private_key)
        if sender and Address.parse(sender).hex != signer.address.hex:
            raise SigningFailed(f"private key does not belong to sender {sender}")

        tx = self._build(
            receiver,
            payload,
            amount,
            gas_price,
            from_shard,
            to_shard,
            validate_network=False,
            nonce=nonce,
            deadline=None,
        )
        signed = self._sign(tx, chain_id, signer)
        return signed.raw  # type: ignore[return-value]

    def get_address_nonce(self, address: str, node_url: Optional[str] = None) -> int:
        """Current nonce of `address` (either text form), outside the pipeline."""
        if node_url is not None and node_url != self.url:
            return nonce_lookup.get_address_nonce(address, node_url, self.config, **self._client_kwargs)
        return nonce_lookup.next_nonce(self.rpc, Address.parse(address).hex)

    # --- stages --------------------------------------------------------------

    def _check_shards(self, from_shard: int, to_shard: int, deadline: Optional[Deadline]) -> None:
        if deadline is not None:
            deadline.check("sharding structure query")
        try:
            routes = get_sharding_structure(self.rpc)
        except RpcError as e:
            raise RemoteQueryFailed(e.message) from e
        if not validate_shard_ids(from_shard, to_shard, len(routes)):
            raise InvalidShardRoute(from_shard=from_shard, to_shard=to_shard, shard_count=len(routes))

    def _build(
        self,
        receiver: str,
        payload: Payload,
        amount: Amount,
        gas_price: Optional[Amount],
        from_shard: int,
        to_shard: int,
        *,
        validate_network: bool,
        nonce: Optional[int],
        deadline: Optional[Deadline],
    ) -> Transaction:
        if validate_network:
            self._check_shards(from_shard, to_shard, deadline)
        params = TxParams().with_shards(from_shard, to_shard)

        data = payload_bytes(payload)
        params = params.with_gas_limit(intrinsic_gas(data, contract_creation=False, homestead=True))
        params = params.with_amount(amount)

        if validate_network:
            verify_balance(self.rpc, self.account.address.one, amount, deadline=deadline)  # type: ignore[union-attr]

        params = params.with_receiver(receiver)
        params = params.with_gas_price(gas_price if gas_price is not None else self.config.default_gas_price)

        if nonce is None:
            nonce = nonce_lookup.next_nonce(
                self.rpc, self.account.address.hex, deadline=deadline  # type: ignore[union-attr]
            )
        params = params.with_nonce(nonce)
        return assemble(params, data)

    def _sign(self, tx: Transaction, chain_id: int, credential: Union[Credential, Signer]) -> Transaction:
        signer = credential if isinstance(credential, Signer) else resolve_signer(credential)
        signed = signer.sign_transaction(tx, chain_id)
        log.info("signed transaction with chainId %d", chain_id)
        log.info(json.dumps(signed.to_dict()))
        return signed
