import json
import logging

import httpx
import pytest

from hmy_sdk.config import SDKConfig
from hmy_sdk.errors import (DeadlineExceeded, InsufficientFunds,
                            InvalidShardRoute, ReceiptQueryFailed,
                            RemoteQueryFailed, SigningFailed)
from hmy_sdk.tx import encode
from hmy_sdk.tx.handler import Handler
from hmy_sdk.utils.units import NANO, ONE

from .conftest import HEX_ADDRESS, ONE_ADDRESS, PRIVATE_KEY

CHAIN_ID = 2


def _nonce_of(raw: str) -> int:
    return int.from_bytes(encode.decode_raw(raw)[0], "big")


def test_dry_run_signs_without_broadcasting(handler, node):
    result = handler.execute(CHAIN_ID, ONE_ADDRESS, "", "0.5", dry_run=True)

    assert result.dry_run
    assert result.tx_hash is None
    assert result.receipt is None
    assert result.raw_transaction.startswith("0x")
    assert result.transaction.is_signed
    assert "send_raw_transaction" not in node.calls
    assert node.sent == []


def test_pipeline_queries_in_order(handler, node):
    handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1", wait_to_confirm_time=0)
    assert node.calls == [
        "get_sharding_structure",
        "get_balance",
        "get_transaction_count",
        "send_raw_transaction",
    ]


def test_assembled_fields(handler):
    tx = handler.execute(CHAIN_ID, ONE_ADDRESS, "hello", "2.5", from_shard=1, to_shard=3, dry_run=True).transaction
    assert tx.to == HEX_ADDRESS
    assert (tx.shard_id, tx.to_shard_id) == (1, 3)
    assert tx.amount == 2 * ONE + ONE // 2
    assert tx.gas_limit == 21000 + 5 * 68
    assert tx.gas_price == NANO
    assert tx.data == b"hello"


def test_explicit_gas_price_is_in_nano(handler):
    tx = handler.execute(CHAIN_ID, HEX_ADDRESS, "", "1", gas_price=3, dry_run=True).transaction
    assert tx.gas_price == 3 * NANO


def test_canonical_receiver_is_kept(handler):
    lower = HEX_ADDRESS.lower()
    assert handler.execute(CHAIN_ID, lower, "", "1", dry_run=True).transaction.to == lower


def test_live_run_waits_for_receipt(handler, node, clock):
    node.receipts = [None, None, {"status": "0x1", "blockNumber": "0x10"}]
    result = handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1", wait_to_confirm_time=10)

    assert result.tx_hash == "0x" + f"{1:064x}"
    assert result.transaction.tx_hash == result.tx_hash
    assert result.confirmed
    assert result.receipt["blockNumber"] == "0x10"
    assert sum(clock.sleeps) == pytest.approx(4)


def test_confirmation_timeout_still_returns_hash(handler, node, clock):
    node.receipts = [None]
    result = handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1", wait_to_confirm_time=3)
    assert result.tx_hash is not None
    assert not result.confirmed
    assert sum(clock.sleeps) <= 3


def test_fire_and_forget_skips_receipt_polling(handler, node):
    handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1", wait_to_confirm_time=0)
    assert "get_transaction_receipt" not in node.calls


def test_sequential_runs_get_increasing_nonces(handler, node):
    node.nonce = 7
    first = handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1")
    second = handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1")
    assert _nonce_of(first.raw_transaction) == 7
    assert _nonce_of(second.raw_transaction) == 8
    assert first.tx_hash != second.tx_hash


def test_receipt_errors_after_successful_broadcast(handler, node):
    node.get_transaction_receipt_error = "receipt lookup failed"
    with pytest.raises(ReceiptQueryFailed) as exc:
        handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1", wait_to_confirm_time=10)
    assert len(node.sent) == 1
    assert exc.value.tx_hash == "0x" + f"{1:064x}"
    assert exc.value.message == "receipt lookup failed"


@pytest.mark.parametrize("from_shard,to_shard", [(4, 0), (0, 4), (-1, 0)])
def test_invalid_shard_route(handler, node, from_shard, to_shard):
    with pytest.raises(InvalidShardRoute) as exc:
        handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1", from_shard=from_shard, to_shard=to_shard)
    assert exc.value.shard_count == 4
    assert node.calls == ["get_sharding_structure"]


def test_topology_query_failure(handler, node):
    node.get_sharding_structure_error = "unavailable"
    with pytest.raises(RemoteQueryFailed):
        handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1")


def test_insufficient_funds_stops_before_nonce(handler, node):
    node.balance = ONE
    with pytest.raises(InsufficientFunds):
        handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1.5")
    assert "get_transaction_count" not in node.calls
    assert node.sent == []


def test_offline_signing_never_contacts_node(handler, node):
    raw = handler.set_raw_transaction_with_private_key(
        CHAIN_ID, None, ONE_ADDRESS, "", "0.5", 0, 1, 0, 0, PRIVATE_KEY
    )
    assert raw.startswith("0x")
    assert node.calls == []


def test_offline_and_bound_account_paths_agree(handler, node):
    node.nonce = 5
    online = handler.execute(CHAIN_ID, ONE_ADDRESS, "memo", "0.5", gas_price=1, dry_run=True)
    offline = handler.set_raw_transaction_with_private_key(
        CHAIN_ID, handler.account.address.one, ONE_ADDRESS, "memo", "0.5", 5, 1, 0, 0, PRIVATE_KEY[2:]
    )
    assert online.raw_transaction == offline


def test_offline_sender_must_match_key(handler):
    with pytest.raises(SigningFailed):
        handler.set_raw_transaction_with_private_key(
            CHAIN_ID, HEX_ADDRESS, ONE_ADDRESS, "", "1", 0, 1, 0, 0, PRIVATE_KEY
        )


def test_offline_handler_needs_no_account(node):
    h = Handler("http://localhost:9500", config=SDKConfig(), rpc=node)
    raw = h.set_raw_transaction_with_private_key(CHAIN_ID, None, HEX_ADDRESS, "", "1", 0, 1, 0, 0, PRIVATE_KEY)
    assert _nonce_of(raw) == 0
    with pytest.raises(ValueError):
        h.execute(CHAIN_ID, HEX_ADDRESS, "", "1")


def test_get_address_nonce(handler, node):
    node.nonce = 12
    assert handler.get_address_nonce(ONE_ADDRESS) == 12
    assert handler.get_address_nonce(HEX_ADDRESS) == 12


def test_expired_timeout_raises_before_any_call(handler, node):
    with pytest.raises(DeadlineExceeded):
        handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1", timeout=0)
    assert node.calls == []


def test_signed_transaction_is_logged(handler, caplog):
    with caplog.at_level(logging.INFO, logger="hmy_sdk.tx.handler"):
        handler.execute(CHAIN_ID, ONE_ADDRESS, "", "1", dry_run=True)
    messages = [r.getMessage() for r in caplog.records]
    assert "signed transaction with chainId 2" in messages
    assert any(m.startswith("dry run, raw transaction: 0x") for m in messages)


def test_confirm_interval_comes_from_config(node, clock, account):
    h = Handler(
        "http://localhost:9500",
        account,
        config=SDKConfig(confirm_interval=0.5),
        rpc=node,
        sleep=clock.sleep,
    )
    node.receipts = [None, None, {"status": "0x1"}]
    h.execute(CHAIN_ID, ONE_ADDRESS, "", "1", wait_to_confirm_time=5)
    assert clock.sleeps == [0.5, 0.5]


def _count_node(count):
    seen = []

    def respond(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append(body)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": hex(count)})

    return httpx.MockTransport(respond), seen


def test_handler_closes_the_connection_it_opened(account):
    transport, _ = _count_node(3)
    with Handler("http://node.test:9500", account, config=SDKConfig(), transport=transport) as h:
        assert h.get_address_nonce(ONE_ADDRESS) == 3
        assert not h.rpc.is_closed
    assert h.rpc.is_closed


def test_injected_rpc_is_left_open(handler, node):
    closed = []
    node.close = lambda: closed.append(True)
    with handler:
        pass
    assert closed == []


def test_get_address_nonce_from_another_node(node):
    transport, seen = _count_node(9)
    h = Handler("http://localhost:9500", config=SDKConfig(), rpc=node, transport=transport)
    assert h.get_address_nonce(ONE_ADDRESS, node_url="http://other.test:9500") == 9
    assert seen[0]["method"] == "hmy_getTransactionCount"
    assert seen[0]["params"] == [HEX_ADDRESS, "latest"]
    assert node.calls == []


def test_mistyped_receiver_is_named_in_signing_error(handler):
    mistyped = ONE_ADDRESS[:-1] + ("q" if ONE_ADDRESS[-1] != "q" else "p")
    with pytest.raises(SigningFailed) as exc:
        handler.set_raw_transaction_with_private_key(CHAIN_ID, None, mistyped, "", "1", 0, 1, 0, 0, PRIVATE_KEY)
    assert mistyped in str(exc.value)
    assert "neither a one1 address nor 20-byte hex" in str(exc.value)
