from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from hmy_sdk.account import Account
from hmy_sdk.config import SDKConfig
from hmy_sdk.errors import RpcError
from hmy_sdk.tx.handler import Handler
from hmy_sdk.utils.units import ONE

# Well-known throwaway key (never fund it)
PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
PRIVATE_KEY_ADDRESS = "0x2c7536E3605D9C16a7a3D7b1898e529396a65c23"

# Address with a published one1 form
ONE_ADDRESS = "one1pdv9lrdwl0rg5vglh4xtyrv3wjk3wsqket7zxy"
HEX_ADDRESS = "0x0B585F8DaEfBC68a311FbD4cB20d9174aD174016"


class FakeNode:
    """
    In-memory stand-in for a Harmony node.

    - balance / nonce are plain attributes
    - each successful broadcast bumps the nonce
    - `receipts` is a script consumed one poll at a time; the last entry repeats
    - set `<method>_error` to make a method fail with an RpcError
    """

    def __init__(self, *, balance: int = 10 * ONE, nonce: int = 0, shards: int = 4) -> None:
        self.balance = balance
        self.nonce = nonce
        self.shards = [
            {"current": i == 0, "http": f"http://s{i}.local:9500", "shardID": i, "ws": f"ws://s{i}.local:9800"}
            for i in range(shards)
        ]
        self.receipts: List[Optional[Dict[str, Any]]] = [{"status": "0x1"}]
        self.calls: List[str] = []
        self.sent: List[str] = []
        self.get_balance_error: Optional[str] = None
        self.get_transaction_count_error: Optional[str] = None
        self.send_raw_transaction_error: Optional[str] = None
        self.get_transaction_receipt_error: Optional[str] = None
        self.get_sharding_structure_error: Optional[str] = None

    def _maybe_fail(self, method: str) -> None:
        self.calls.append(method)
        msg = getattr(self, f"{method}_error")
        if msg is not None:
            raise RpcError(code=-32000, message=msg, method=method)

    def get_balance(self, address: str) -> int:
        self._maybe_fail("get_balance")
        return self.balance

    def get_transaction_count(self, address: str) -> int:
        self._maybe_fail("get_transaction_count")
        return self.nonce

    def send_raw_transaction(self, raw_tx: str) -> str:
        self._maybe_fail("send_raw_transaction")
        self.sent.append(raw_tx)
        self.nonce += 1
        return "0x" + f"{len(self.sent):064x}"

    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        self._maybe_fail("get_transaction_receipt")
        if len(self.receipts) > 1:
            return self.receipts.pop(0)
        return self.receipts[0]

    def get_sharding_structure(self) -> List[Dict[str, Any]]:
        self._maybe_fail("get_sharding_structure")
        return list(self.shards)


class FakeClock:
    """Records sleeps instead of sleeping."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def monotonic(self) -> float:
        return self.now


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def account() -> Account:
    return Account(PRIVATE_KEY)


@pytest.fixture
def handler(node: FakeNode, clock: FakeClock, account: Account) -> Handler:
    return Handler(
        "http://localhost:9500",
        account,
        config=SDKConfig(),
        rpc=node,
        sleep=clock.sleep,
    )
