"""Sign, broadcast and confirm value transfers through web3.py."""

import logging
from typing import Optional

import requests
from eth_account import Account
from hexbytes import HexBytes
from web3.exceptions import TimeExhausted, Web3Exception

from . import config
from .builder import TRANSFER_GAS, TransferBuilder
from .exceptions import (
    ConfirmationTimeoutError,
    InsufficientBalanceError,
    SubmissionFailedError,
)
from .models import ResolvedSender, Transfer
from .types import ChecksumAddress

logger = logging.getLogger(__name__)

# Errors the transport or node can raise for a rejected request
NODE_ERRORS = (Web3Exception, ValueError, requests.RequestException, OSError)

INSUFFICIENT_FUNDS_MARKERS = (
    "insufficient funds",
    "insufficient balance",
    "sender doesn't have enough funds",
    "cannot afford txn",
)


def is_insufficient_funds(exc: BaseException) -> bool:
    """Tell whether a node error reports that the sender cannot pay."""
    message = str(exc).lower()
    return any(marker in message for marker in INSUFFICIENT_FUNDS_MARKERS)


def classify_node_error(exc: BaseException, sender: str, stage: str):
    """Map a node or transport error to the matching transfer error."""
    if is_insufficient_funds(exc):
        return InsufficientBalanceError(
            f"{sender} cannot cover the transfer: {exc}", address=sender, stage=stage
        )
    return SubmissionFailedError(f"{stage} failed: {exc}", stage=stage)


def check_balance(w3, sender: str, required: int) -> int:
    """Raise InsufficientBalanceError unless ``sender`` holds ``required`` wei."""
    balance = w3.eth.get_balance(sender)
    if balance < required:
        raise InsufficientBalanceError(
            f"{sender} has {balance} wei, needs {required} wei",
            address=sender,
            balance=balance,
            required=required,
        )
    return balance


def prepare_transfer(
    sender: ResolvedSender,
    to: ChecksumAddress,
    value: int,
    w3,
    gas: Optional[int] = None,
    gas_price: Optional[int] = None,
) -> Transfer:
    """
    Build a transfer with gas, fees and nonce from the node and make sure
    the sender can pay for it.

    Raises:
        InsufficientBalanceError: If balance < value + gas * fee
        SubmissionFailedError: If the node cannot be queried
    """
    try:
        check_balance(w3, sender.address, value)
        builder = (
            TransferBuilder(sender.address, to, value)
            .set_gas(gas)
            .set_gas_price(gas_price)
            .fill_fees(w3)
        )
        # No transfer costs less than its intrinsic gas; check that before estimating
        floor_gas = gas if gas is not None else TRANSFER_GAS
        check_balance(w3, sender.address, value + floor_gas * builder.fee_cap())
        tx = builder.fill_from(w3, with_chain_id=sender.signs_locally).build()
        check_balance(w3, sender.address, tx.max_cost())
    except InsufficientBalanceError:
        raise
    except NODE_ERRORS as exc:
        raise classify_node_error(exc, sender.address, "prepare") from exc
    return tx


def broadcast(sender: ResolvedSender, tx: Transfer, w3) -> HexBytes:
    """
    Send the transfer and return its hash once the node has accepted it.

    A local key signs here and only the signed payload leaves the
    process. Without a key the node signs with the account it holds.
    """
    try:
        if sender.signs_locally:
            tx.validate(require_signing_fields=True)
            signed = Account.sign_transaction(tx.as_tx_params(), sender.private_key)
            return w3.eth.send_raw_transaction(signed.raw_transaction)
        params = tx.as_tx_params()
        params.pop("chainId", None)
        return w3.eth.send_transaction(params)
    except NODE_ERRORS as exc:
        raise classify_node_error(exc, sender.address, "submit") from exc


def wait_for_receipt(
    tx_hash: HexBytes,
    w3,
    timeout: Optional[float] = None,
    poll_latency: Optional[float] = None,
):
    """
    Block until the transfer is mined and return its receipt.

    Raises:
        ConfirmationTimeoutError: If no receipt arrived in time. The
            transfer may still be mined; check ``tx_hash`` before resending.
        SubmissionFailedError: If the transfer was mined but reverted
    """
    timeout = config.CONFIRMATION_TIMEOUT if timeout is None else timeout
    poll_latency = config.POLL_LATENCY if poll_latency is None else poll_latency
    hash_hex = HexBytes(tx_hash).to_0x_hex()

    try:
        receipt = w3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=timeout, poll_latency=poll_latency
        )
    except TimeExhausted as exc:
        raise ConfirmationTimeoutError(
            f"transaction {hash_hex} not confirmed after {timeout}s; "
            "it may still be mined",
            tx_hash=hash_hex,
            timeout=timeout,
        ) from exc
    except NODE_ERRORS as exc:
        raise SubmissionFailedError(
            f"confirm failed: {exc}", tx_hash=hash_hex, stage="confirm"
        ) from exc

    if receipt.get("status") == 0:
        raise SubmissionFailedError(
            f"transaction {hash_hex} was mined but failed",
            tx_hash=hash_hex,
            stage="confirm",
        )
    return receipt


def submit_transfer(
    sender: ResolvedSender,
    to: ChecksumAddress,
    value: int,
    w3,
    *,
    gas: Optional[int] = None,
    gas_price: Optional[int] = None,
    timeout: Optional[float] = None,
    poll_latency: Optional[float] = None,
):
    """
    Send ``value`` wei from ``sender`` to ``to`` and wait for the receipt.

    Broadcast and confirmation are two separate round trips, in that
    order. Neither is retried.

    Returns:
        The mined transaction receipt
    """
    tx = prepare_transfer(sender, to, value, w3, gas=gas, gas_price=gas_price)
    tx_hash = broadcast(sender, tx, w3)
    logger.debug("Broadcast %s", HexBytes(tx_hash).to_0x_hex())
    return wait_for_receipt(tx_hash, w3, timeout=timeout, poll_latency=poll_latency)
