"""Resolve the sender of a transfer from one of its credential variants.

Four variants are supported:

- PrivateKey: the address is derived from the key
- Keystore: the key is decrypted from a V3 keystore with a password
- Mnemonic: the key is derived from a BIP-39 phrase along
  m/44'/60'/0'/0/{index}
- DefaultAccount: no key; the node signs with an account it holds

Resolution is never retried. A wrong password or malformed phrase is
final for the call.
"""

import json
import logging
import os
from typing import Union

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import ValidationError
from web3.exceptions import MethodUnavailable

from .config import MNEMONIC_PATH_TEMPLATE
from .exceptions import (
    ConfigurationError,
    DecryptionFailedError,
    InvalidKeyError,
    InvalidMnemonicError,
    NoDefaultAccountError,
    SubmissionFailedError,
)
from .models import (
    Credential,
    DefaultAccount,
    HARDENED_OFFSET,
    Keystore,
    Mnemonic,
    PrivateKey,
    ResolvedSender,
)
from .transaction import NODE_ERRORS
from .types import (
    BytesLike,
    ChecksumAddress,
    PrivateKeyBytes,
    as_checksum_address,
    as_private_key,
)

# Node replies for providers that do not expose eth_accounts
METHOD_UNAVAILABLE_MARKERS = (
    "does not exist",
    "not supported",
    "method not found",
    "not available",
)

# eth-account keeps HD wallet derivation behind an explicit opt-in
Account.enable_unaudited_hdwallet_features()

logger = logging.getLogger(__name__)


def account_from_key(key: BytesLike) -> LocalAccount:
    """Load a local account from a raw private key."""
    try:
        return Account.from_key(as_private_key(key))
    except (TypeError, ValueError, ValidationError) as exc:
        # Never echo the key itself
        raise InvalidKeyError(f"malformed private key: {exc}", field="key") from None


def load_keystore(keystore: Union[dict, str, os.PathLike]) -> dict:
    """Decode a keystore given as a dict, JSON text, or path to a file."""
    if isinstance(keystore, dict):
        return keystore
    try:
        if isinstance(keystore, os.PathLike):
            with open(keystore, encoding="utf-8") as fp:
                return json.load(fp)
        if isinstance(keystore, str):
            return json.loads(keystore)
    except (OSError, ValueError) as exc:
        raise DecryptionFailedError(f"cannot read keystore: {exc}", field="keystore") from exc
    raise DecryptionFailedError(
        f"keystore must be a dict, JSON text or path, got {type(keystore).__name__}",
        field="keystore",
    )


def account_from_keystore(keystore: Union[dict, str, os.PathLike], password: str) -> LocalAccount:
    """Decrypt a V3 keystore and load the account it holds."""
    blob = load_keystore(keystore)
    try:
        key = Account.decrypt(blob, password)
    except (KeyError, TypeError, ValueError) as exc:
        raise DecryptionFailedError(
            f"keystore decryption failed: {exc}", field="keystore"
        ) from exc
    return Account.from_key(key)


def account_from_mnemonic(phrase: str, index: int = 0) -> LocalAccount:
    """Derive the account at ``index`` of a BIP-39 phrase.

    The same phrase and index always give the same account.
    """
    if not isinstance(phrase, str) or not phrase.strip():
        raise InvalidMnemonicError("mnemonic must be a non-empty string", field="mnemonic")
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < HARDENED_OFFSET:
        raise ConfigurationError(
            f"mnemonic_index must be in [0, 2**31), got {index!r}", field="mnemonic_index"
        )
    path = MNEMONIC_PATH_TEMPLATE.format(index=index)
    try:
        return Account.from_mnemonic(" ".join(phrase.split()), account_path=path)
    except (ValueError, ValidationError) as exc:
        raise InvalidMnemonicError(
            f"invalid mnemonic phrase: {type(exc).__name__}", field="mnemonic"
        ) from None


def default_account(w3, from_address=None) -> ChecksumAddress:
    """
    Pick the node-held account that will sign.

    Order: ``from_address``, then ``w3.eth.default_account`` when it is
    set, then the first of ``w3.eth.accounts``.
    """
    if from_address is not None:
        return as_checksum_address(from_address)

    configured = w3.eth.default_account
    if isinstance(configured, str) and configured:
        return as_checksum_address(configured)

    try:
        accounts = w3.eth.accounts
    except NODE_ERRORS as exc:
        message = str(exc).lower()
        if isinstance(exc, MethodUnavailable) or any(
            marker in message for marker in METHOD_UNAVAILABLE_MARKERS
        ):
            raise NoDefaultAccountError(
                f"no credential given and the connection does not list accounts: {exc}"
            ) from exc
        raise SubmissionFailedError(
            f"account lookup failed: {exc}", stage="credentials"
        ) from exc
    if not accounts:
        raise NoDefaultAccountError(
            "no credential given and the connection holds no accounts"
        )
    return as_checksum_address(accounts[0])


def _local(account: LocalAccount) -> ResolvedSender:
    return ResolvedSender(
        address=as_checksum_address(account.address),
        private_key=PrivateKeyBytes(bytes(account.key)),
    )


def resolve_sender(credential: Credential, w3) -> ResolvedSender:
    """
    Resolve a credential variant into the sender of a transfer.

    Args:
        credential: One of DefaultAccount, PrivateKey, Keystore, Mnemonic
        w3: Web3 connection, only consulted for DefaultAccount

    Returns:
        ResolvedSender with a checksummed address, and a private key
        for every variant except DefaultAccount
    """
    if isinstance(credential, PrivateKey):
        sender = _local(account_from_key(credential.key))
        mode = "private key"
    elif isinstance(credential, Keystore):
        sender = _local(account_from_keystore(credential.keystore, credential.password))
        mode = "keystore"
    elif isinstance(credential, Mnemonic):
        sender = _local(account_from_mnemonic(credential.phrase, credential.index))
        mode = f"mnemonic index {credential.index}"
    elif isinstance(credential, DefaultAccount):
        sender = ResolvedSender(address=default_account(w3, credential.from_address))
        mode = "node account"
    else:
        raise TypeError(f"unknown credential type: {type(credential).__name__}")

    logger.debug("Resolved sender %s via %s", sender.address, mode)
    return sender
