"""Build or reuse the web3 connection a transfer goes through."""

import logging
from typing import Optional

from web3 import Web3
from web3.providers import BaseProvider

from . import config
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

INFURA_URL_TEMPLATE = "https://{network}.infura.io/v3/{key}"


def provider_from_uri(uri: str) -> BaseProvider:
    """Pick an HTTP or WebSocket provider by URI scheme."""
    if uri.startswith(("http://", "https://")):
        return Web3.HTTPProvider(uri)
    if uri.startswith(("ws://", "wss://")):
        return Web3.LegacyWebSocketProvider(uri)
    raise ConfigurationError(
        f"provider_uri must use http(s):// or ws(s)://, got {uri!r}",
        field="provider_uri",
    )


def get_web3(
    web3: Optional[Web3] = None,
    provider: Optional[BaseProvider] = None,
    provider_uri: Optional[str] = None,
    network: Optional[str] = None,
    infura_key: Optional[str] = None,
) -> Web3:
    """
    Return the connection to send through.

    The first of these that is given wins: an existing ``web3`` instance,
    a ``provider`` object, a ``provider_uri``, a ``network`` name served
    through Infura, and finally the ``SENDETHER_RPC_URL`` default.
    """
    if web3 is not None:
        return web3
    if provider is not None:
        return Web3(provider)
    if provider_uri:
        return Web3(provider_from_uri(provider_uri))
    if network:
        key = infura_key or config.INFURA_KEY
        if not key:
            raise ConfigurationError(
                "network requires infura_key or SENDETHER_INFURA_KEY",
                field="infura_key",
            )
        return Web3(Web3.HTTPProvider(INFURA_URL_TEMPLATE.format(network=network, key=key)))

    logger.debug("Connecting to %s", config.RPC_URL)
    return Web3(provider_from_uri(config.RPC_URL))
