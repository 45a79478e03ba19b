"""Entry point: send ether from a resolved sender to an address."""

import logging
from typing import Optional

from hexbytes import HexBytes
from web3 import Web3
from web3.providers import BaseProvider

from .connection import get_web3
from .credentials import resolve_sender
from .exceptions import SendEtherError
from .models import SendConfig
from .transaction import submit_transfer
from .units import to_smallest_unit

logger = logging.getLogger(__name__)


def send(config: SendConfig, w3: Web3):
    """
    Run one transfer described by ``config`` over ``w3``.

    The amount is converted first, then the sender is resolved, then the
    transfer is broadcast and confirmed. Any failure stops the pipeline
    and propagates with its original error type.

    Returns:
        The mined transaction receipt

    Raises:
        SendEtherError: Or one of its subclasses, naming the failing stage
    """
    config.validate()
    value = to_smallest_unit(config.amount, config.base)
    sender = resolve_sender(config.credential, w3)

    if not config.quiet:
        logger.info("Sending %s wei from %s to %s", value, sender.address, config.to)

    try:
        receipt = submit_transfer(
            sender,
            config.to,
            value,
            w3,
            gas=config.gas,
            gas_price=config.gas_price,
            timeout=config.timeout,
            poll_latency=config.poll_latency,
        )
    except SendEtherError as exc:
        if not config.quiet:
            logger.info("Transfer failed at %s: %s", exc.stage, exc)
        raise

    if not config.quiet:
        logger.info(
            "Confirmed %s in block %s",
            HexBytes(receipt["transactionHash"]).to_0x_hex(),
            receipt.get("blockNumber"),
        )
    return receipt


def send_ether(
    to: str,
    amount,
    *,
    base: int = 0,
    from_address: Optional[str] = None,
    key=None,
    keystore=None,
    password: Optional[str] = None,
    mnemonic: Optional[str] = None,
    mnemonic_index: int = 0,
    web3: Optional[Web3] = None,
    provider: Optional[BaseProvider] = None,
    provider_uri: Optional[str] = None,
    network: Optional[str] = None,
    infura_key: Optional[str] = None,
    gas: Optional[int] = None,
    gas_price: Optional[int] = None,
    timeout: Optional[float] = None,
    poll_latency: Optional[float] = None,
    quiet: bool = False,
):
    """
    Send ``amount * 10**base`` wei to ``to``.

    Args:
        to: Destination address
        amount: Amount as int, decimal string, Decimal or float
        base: Power-of-ten denomination of ``amount`` (0 = wei, 18 = ether)
        from_address: Node-held account to send from
        key: Raw private key to sign with
        keystore: V3 keystore (dict, JSON text or path) to sign with
        password: Keystore password
        mnemonic: BIP-39 phrase to derive the signing key from
        mnemonic_index: Account index on m/44'/60'/0'/0/{index}
        web3: Existing Web3 connection
        provider: Web3 provider to connect through
        provider_uri: http(s) or ws(s) node URI
        network: Infura network name, used with ``infura_key``
        infura_key: Infura project key
        gas: Gas limit (default: estimated by the node)
        gas_price: Legacy gas price in wei (default: fees from the node)
        timeout: Seconds to wait for the receipt
        poll_latency: Seconds between receipt polls
        quiet: Suppress progress logging

    At most one of ``key``, ``keystore``, ``mnemonic`` and ``from_address``
    may be given. With none, the connection's default account signs.

    Returns:
        The mined transaction receipt

    Raises:
        SendEtherError: Or one of its subclasses. ConfirmationTimeoutError
            means the outcome is unknown, not that the transfer failed.
    """
    config = SendConfig.create(
        to,
        amount,
        base,
        from_address=from_address,
        key=key,
        keystore=keystore,
        password=password,
        mnemonic=mnemonic,
        mnemonic_index=mnemonic_index,
        gas=gas,
        gas_price=gas_price,
        timeout=timeout,
        poll_latency=poll_latency,
        quiet=quiet,
    )
    w3 = get_web3(
        web3=web3,
        provider=provider,
        provider_uri=provider_uri,
        network=network,
        infura_key=infura_key,
    )
    return send(config, w3)
