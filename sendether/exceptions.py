"""
Exceptions raised while sending ether.

Every failure carries the pipeline ``stage`` it came from and, where it
applies, the offending option ``field``.
"""
from typing import Optional


class SendEtherError(Exception):
    """Base exception for all transfer failures."""

    stage = "send"

    def __init__(
        self,
        message: str,
        *,
        stage: Optional[str] = None,
        field: Optional[str] = None,
    ):
        if stage is not None:
            self.stage = stage
        self.field = field
        super().__init__(message)


class ConfigurationError(SendEtherError):
    """Raised when the transfer options are malformed or incomplete."""

    stage = "config"


class AmbiguousCredentialsError(ConfigurationError):
    """Raised when more than one credential option is given."""

    def __init__(self, fields):
        self.fields = tuple(fields)
        super().__init__(
            "only one of key, keystore, mnemonic or from_address may be given "
            f"(got: {', '.join(self.fields)})"
        )


class InvalidAddressError(ConfigurationError):
    """Raised when an address option is not a valid 20-byte address."""


class InvalidAmountError(SendEtherError):
    """Raised when an amount is negative, non-numeric or not integral in wei."""

    stage = "amount"


class InvalidKeyError(SendEtherError):
    """Raised when a private key is malformed."""

    stage = "credentials"


class DecryptionFailedError(SendEtherError):
    """Raised when a keystore cannot be decrypted (bad password or corrupt blob)."""

    stage = "credentials"


class InvalidMnemonicError(SendEtherError):
    """Raised when a mnemonic phrase is not a valid BIP-39 phrase."""

    stage = "credentials"


class NoDefaultAccountError(SendEtherError):
    """Raised when no credential is given and the node holds no account."""

    stage = "credentials"


class InsufficientBalanceError(SendEtherError):
    """Raised when the sender cannot cover the value plus fees."""

    stage = "submit"

    def __init__(
        self,
        message: str,
        *,
        address: Optional[str] = None,
        balance: Optional[int] = None,
        required: Optional[int] = None,
        stage: Optional[str] = None,
    ):
        self.address = address
        self.balance = balance
        self.required = required
        super().__init__(message, stage=stage)


class SubmissionFailedError(SendEtherError):
    """Raised when the node rejects the transaction or the transport fails."""

    stage = "submit"

    def __init__(
        self,
        message: str,
        *,
        tx_hash: Optional[str] = None,
        stage: Optional[str] = None,
    ):
        self.tx_hash = tx_hash
        super().__init__(message, stage=stage)


class ConfirmationTimeoutError(SendEtherError):
    """
    Raised when no receipt arrived within the confirmation window.

    The transaction was broadcast and may still be mined. Look it up by
    ``tx_hash`` before sending again, or the transfer can happen twice.
    """

    stage = "confirm"

    def __init__(self, message: str, *, tx_hash: str, timeout: float):
        self.tx_hash = tx_hash
        self.timeout = timeout
        super().__init__(message)
