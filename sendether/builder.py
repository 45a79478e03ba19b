"""Builder pattern for constructing value transfers."""

import logging
from dataclasses import dataclass
from typing import Optional

from .models import Transfer
from .types import ChecksumAddress

logger = logging.getLogger(__name__)

# Intrinsic gas of a plain transfer to an account without code
TRANSFER_GAS = 21_000


@dataclass
class TransferBuilder:
    """
    Fluent builder for value transfers.

    Fields left unset are filled from the node by ``fill_from(w3)``.

    Example:
        tx = (TransferBuilder(sender, to, value=10**18)
            .set_gas(21_000)
            .fill_from(w3)
            .build())
    """

    sender: ChecksumAddress
    to: ChecksumAddress
    value: int = 0
    gas: Optional[int] = None
    nonce: Optional[int] = None
    chain_id: Optional[int] = None
    gas_price: Optional[int] = None
    max_fee_per_gas: Optional[int] = None
    max_priority_fee_per_gas: Optional[int] = None

    def set_gas(self, gas: Optional[int]) -> "TransferBuilder":
        """Set the gas limit."""
        self.gas = gas
        return self

    def set_gas_price(self, gas_price: Optional[int]) -> "TransferBuilder":
        """Set a legacy gas price, clearing any EIP-1559 fees."""
        self.gas_price = gas_price
        if gas_price is not None:
            self.max_fee_per_gas = None
            self.max_priority_fee_per_gas = None
        return self

    def set_fees(self, max_fee: int, priority_fee: int) -> "TransferBuilder":
        """Set EIP-1559 fees, clearing any legacy gas price."""
        self.max_fee_per_gas = max_fee
        self.max_priority_fee_per_gas = priority_fee
        self.gas_price = None
        return self

    def set_nonce(self, nonce: int) -> "TransferBuilder":
        """Set the nonce."""
        self.nonce = nonce
        return self

    def set_chain_id(self, chain_id: int) -> "TransferBuilder":
        """Set the chain ID."""
        self.chain_id = chain_id
        return self

    def _has_fee(self) -> bool:
        return self.gas_price is not None or self.max_fee_per_gas is not None

    def fee_cap(self) -> int:
        """Highest price per gas set so far (0 when no fee is set)."""
        if self.max_fee_per_gas is not None:
            return self.max_fee_per_gas
        return self.gas_price or 0

    def fill_fees(self, w3) -> "TransferBuilder":
        """
        Fill unset fees from the node.

        Fees are EIP-1559 (``2 * base_fee + priority_fee``) when the latest
        block carries a base fee, otherwise the node's legacy gas price.
        """
        if self._has_fee():
            return self
        base_fee = w3.eth.get_block("latest").get("baseFeePerGas")
        if base_fee is not None:
            priority_fee = w3.eth.max_priority_fee
            return self.set_fees(2 * base_fee + priority_fee, priority_fee)
        return self.set_gas_price(w3.eth.gas_price)

    def fill_from(self, w3, *, with_chain_id: bool = False) -> "TransferBuilder":
        """
        Fill unset nonce, fees and gas from the node.

        Args:
            w3: Web3 connection
            with_chain_id: Also fetch the chain ID (needed to sign locally)
        """
        if self.nonce is None:
            self.nonce = w3.eth.get_transaction_count(self.sender, "pending")
        self.fill_fees(w3)
        if self.gas is None:
            self.gas = w3.eth.estimate_gas(
                {"from": self.sender, "to": self.to, "value": self.value}
            )
        if with_chain_id and self.chain_id is None:
            self.chain_id = w3.eth.chain_id

        logger.debug(
            "Transfer params: nonce=%s gas=%s gas_price=%s max_fee=%s priority_fee=%s",
            self.nonce,
            self.gas,
            self.gas_price,
            self.max_fee_per_gas,
            self.max_priority_fee_per_gas,
        )
        return self

    def build(self) -> Transfer:
        """
        Build and validate the transfer.

        Returns:
            A validated, immutable Transfer

        Raises:
            ValueError: If validation fails
        """
        tx = Transfer(
            sender=self.sender,
            to=self.to,
            value=self.value,
            gas=self.gas if self.gas is not None else TRANSFER_GAS,
            nonce=self.nonce,
            chain_id=self.chain_id,
            gas_price=self.gas_price,
            max_fee_per_gas=self.max_fee_per_gas,
            max_priority_fee_per_gas=self.max_priority_fee_per_gas,
        )
        tx.validate()
        return tx
