"""
Pre-flight funds check.

Advisory only: nothing is reserved on the node, so a concurrent spend from the
same account can still make the transaction fail later.
"""

from __future__ import annotations

from typing import Optional

from ..errors import InsufficientFunds, RemoteQueryFailed, RpcError
from ..rpc.methods import NodeApi
from ..utils.retry import Deadline
from ..utils.units import Amount, to_base_units

__all__ = ["verify_balance"]


def verify_balance(
    rpc: NodeApi,
    address: str,
    amount: Amount,
    *,
    deadline: Optional[Deadline] = None,
) -> int:
    """
    Compare `amount` (display units) against the balance of `address` (one1 form).

    Returns the balance in base units.

    Raises:
        InsufficientFunds if the transfer exceeds the balance (equal is fine)
        RemoteQueryFailed if the node answers with an error
    """
    requested = to_base_units(amount)
    if deadline is not None:
        deadline.check("balance query")
    try:
        balance = rpc.get_balance(address)
    except RpcError as e:
        raise RemoteQueryFailed(e.message) from e
    if requested > balance:
        raise InsufficientFunds(requested=requested, balance=balance)
    return balance
