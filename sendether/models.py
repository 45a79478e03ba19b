"""Strongly-typed data models for ether transfers."""

import os
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .exceptions import (
    AmbiguousCredentialsError,
    ConfigurationError,
    InvalidAddressError,
)
from .types import ChecksumAddress, PrivateKeyBytes, as_checksum_address
from .units import Amount

# BIP-32 indexes at or above this are hardened
HARDENED_OFFSET = 2**31


@dataclass(frozen=True)
class DefaultAccount:
    """Let the node sign with one of the accounts it holds.

    ``from_address`` picks a specific unlocked account; when unset the
    connection's default account is used.
    """

    from_address: Optional[ChecksumAddress] = None


@dataclass(frozen=True)
class PrivateKey:
    """Sign locally with a raw secp256k1 private key."""

    key: Union[str, bytes] = field(repr=False)


@dataclass(frozen=True)
class Keystore:
    """Sign locally with a key decrypted from a V3 keystore.

    ``keystore`` is a decoded dict, JSON text, or a path to a keystore file.
    """

    keystore: Union[dict, str, os.PathLike] = field(repr=False)
    password: str = field(repr=False)


@dataclass(frozen=True)
class Mnemonic:
    """Sign locally with a key derived from a BIP-39 phrase."""

    phrase: str = field(repr=False)
    index: int = 0


Credential = Union[DefaultAccount, PrivateKey, Keystore, Mnemonic]


@dataclass(frozen=True)
class ResolvedSender:
    """Sender identity for one transfer.

    Without a private key, signing is left to the node.
    """

    address: ChecksumAddress
    private_key: Optional[PrivateKeyBytes] = field(default=None, repr=False)

    @property
    def signs_locally(self) -> bool:
        return self.private_key is not None


@dataclass(frozen=True)
class SendConfig:
    """
    Everything one call to ``send`` needs, apart from the connection.

    Build it with ``SendConfig.create`` so the credential options are
    checked and folded into a single ``credential`` variant.
    """

    to: ChecksumAddress
    amount: Amount
    base: int = 0
    credential: Credential = field(default_factory=DefaultAccount)

    gas: Optional[int] = None
    gas_price: Optional[int] = None
    timeout: Optional[float] = None
    poll_latency: Optional[float] = None
    quiet: bool = False

    def validate(self) -> None:
        if self.gas is not None and self.gas <= 0:
            raise ConfigurationError("gas must be > 0", field="gas")
        if self.gas_price is not None and self.gas_price < 0:
            raise ConfigurationError("gas_price must be >= 0", field="gas_price")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError("timeout must be > 0", field="timeout")
        if self.poll_latency is not None and self.poll_latency <= 0:
            raise ConfigurationError("poll_latency must be > 0", field="poll_latency")
        if isinstance(self.credential, Mnemonic) and not 0 <= self.credential.index < HARDENED_OFFSET:
            raise ConfigurationError(
                f"mnemonic_index must be in [0, 2**31), got {self.credential.index}",
                field="mnemonic_index",
            )

    @classmethod
    def create(
        cls,
        to: str,
        amount: Amount,
        base: int = 0,
        *,
        from_address: Optional[str] = None,
        key: Optional[Union[str, bytes]] = None,
        keystore: Optional[Union[dict, str, os.PathLike]] = None,
        password: Optional[str] = None,
        mnemonic: Optional[str] = None,
        mnemonic_index: int = 0,
        **options: Any,
    ) -> "SendConfig":
        """
        Create a SendConfig from flat options.

        At most one of ``key``, ``keystore`` (with ``password``), ``mnemonic``
        or ``from_address`` may be given; none means the connection's
        default account.

        Raises:
            AmbiguousCredentialsError: If more than one credential is given
            ConfigurationError: If a credential is incomplete
            InvalidAddressError: If ``to`` or ``from_address`` is not an address
        """
        given = [
            name
            for name, value in (
                ("key", key),
                ("keystore", keystore),
                ("mnemonic", mnemonic),
                ("from_address", from_address),
            )
            if value is not None
        ]
        if len(given) > 1:
            raise AmbiguousCredentialsError(given)

        if password is not None and keystore is None:
            raise ConfigurationError("password requires keystore", field="password")
        if mnemonic_index and mnemonic is None:
            raise ConfigurationError("mnemonic_index requires mnemonic", field="mnemonic_index")

        credential: Credential
        if key is not None:
            credential = PrivateKey(key=key)
        elif keystore is not None:
            if password is None:
                raise ConfigurationError("keystore requires password", field="password")
            credential = Keystore(keystore=keystore, password=password)
        elif mnemonic is not None:
            credential = Mnemonic(phrase=mnemonic, index=mnemonic_index)
        else:
            credential = DefaultAccount(
                from_address=_checked_address(from_address, "from_address")
                if from_address is not None
                else None
            )

        config = cls(
            to=_checked_address(to, "to"),
            amount=amount,
            base=base,
            credential=credential,
            **options,
        )
        config.validate()
        return config


def _checked_address(value, field_name: str) -> ChecksumAddress:
    try:
        return as_checksum_address(value)
    except (TypeError, ValueError) as exc:
        raise InvalidAddressError(str(exc), field=field_name) from exc


@dataclass(frozen=True)
class Transfer:
    """
    Plain value transfer.

    Either ``gas_price`` (legacy) or the EIP-1559 fee pair is set, never
    both. ``chain_id`` is only needed when signing locally.
    """

    sender: ChecksumAddress
    to: ChecksumAddress
    value: int
    gas: int = 21_000
    nonce: Optional[int] = None
    chain_id: Optional[int] = None

    gas_price: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None

    def validate(self, *, require_signing_fields: bool = False) -> None:
        """Validate the transaction fields."""
        if self.value < 0:
            raise ValueError("value must be >= 0")
        if self.gas <= 0:
            raise ValueError("gas must be > 0")
        if self.nonce is not None and self.nonce < 0:
            raise ValueError("nonce must be >= 0")
        is_dynamic = self.max_fee_per_gas is not None or self.max_priority_fee_per_gas is not None
        if self.gas_price is not None and is_dynamic:
            raise ValueError("gas_price cannot be combined with EIP-1559 fees")
        if is_dynamic:
            if self.max_fee_per_gas is None or self.max_priority_fee_per_gas is None:
                raise ValueError("max_fee_per_gas and max_priority_fee_per_gas go together")
            if self.max_priority_fee_per_gas > self.max_fee_per_gas:
                raise ValueError("max_priority_fee_per_gas cannot exceed max_fee_per_gas")
        if require_signing_fields:
            if self.nonce is None:
                raise ValueError("nonce is required to sign")
            if self.chain_id is None:
                raise ValueError("chain_id is required to sign")
            if self.gas_price is None and not is_dynamic:
                raise ValueError("a fee is required to sign")

    def fee_cap(self) -> int:
        """Highest price per gas this transaction may pay."""
        if self.max_fee_per_gas is not None:
            return self.max_fee_per_gas
        return self.gas_price or 0

    def max_cost(self) -> int:
        """Value plus the most the fee can come to, in wei."""
        return self.value + self.gas * self.fee_cap()

    def as_tx_params(self) -> dict:
        """Convert to a web3 transaction dict, leaving unset fields out."""
        params = {
            "from": self.sender,
            "to": self.to,
            "value": self.value,
            "gas": self.gas,
        }
        optional = {
            "nonce": self.nonce,
            "chainId": self.chain_id,
            "gasPrice": self.gas_price,
            "maxFeePerGas": self.max_fee_per_gas,
            "maxPriorityFeePerGas": self.max_priority_fee_per_gas,
        }
        params.update({k: v for k, v in optional.items() if v is not None})
        return params
