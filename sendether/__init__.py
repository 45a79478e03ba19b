"""
sendether - send ether with web3.py

Transfers native currency from an account given as a private key, an
encrypted keystore, a mnemonic phrase, or an account held by the node.
"""

from .builder import TransferBuilder
from .credentials import (
    account_from_keystore,
    account_from_mnemonic,
    resolve_sender,
)
from .exceptions import (
    AmbiguousCredentialsError,
    ConfigurationError,
    ConfirmationTimeoutError,
    DecryptionFailedError,
    InsufficientBalanceError,
    InvalidAddressError,
    InvalidAmountError,
    InvalidKeyError,
    InvalidMnemonicError,
    NoDefaultAccountError,
    SendEtherError,
    SubmissionFailedError,
)
from .models import (
    DefaultAccount,
    Keystore,
    Mnemonic,
    PrivateKey,
    ResolvedSender,
    SendConfig,
    Transfer,
)
from .send import send, send_ether
from .transaction import submit_transfer
from .types import as_bytes, as_checksum_address, as_private_key
from .units import ETHER_BASE, GWEI_BASE, WEI_BASE, to_smallest_unit

__version__ = "0.1.0"

__all__ = [
    "AmbiguousCredentialsError",
    "ConfigurationError",
    "ConfirmationTimeoutError",
    "DecryptionFailedError",
    "DefaultAccount",
    "ETHER_BASE",
    "GWEI_BASE",
    "InsufficientBalanceError",
    "InvalidAddressError",
    "InvalidAmountError",
    "InvalidKeyError",
    "InvalidMnemonicError",
    "Keystore",
    "Mnemonic",
    "NoDefaultAccountError",
    "PrivateKey",
    "ResolvedSender",
    "SendConfig",
    "SendEtherError",
    "SubmissionFailedError",
    "Transfer",
    "TransferBuilder",
    "WEI_BASE",
    "account_from_keystore",
    "account_from_mnemonic",
    "as_bytes",
    "as_checksum_address",
    "as_private_key",
    "resolve_sender",
    "send",
    "send_ether",
    "submit_transfer",
    "to_smallest_unit",
]
