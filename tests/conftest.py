"""Shared fixtures for sendether tests."""

from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes

# Account 0 of the well-known "test ... junk" development mnemonic
DEV_MNEMONIC = "test test test test test test test test test test test junk"
DEV_ADDRESS_0 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
DEV_ADDRESS_1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
DEV_KEY_0 = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"

NODE_ACCOUNT = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
RECIPIENT = "0x90F79bf6EB2c4f870365E785982E1f101E93b906"
TX_HASH = HexBytes("0x" + "ab" * 32)


@pytest.fixture
def mock_w3():
    """A Web3 stand-in that accepts every transfer."""
    w3 = MagicMock()
    w3.eth.accounts = [NODE_ACCOUNT]
    w3.eth.default_account = None
    w3.eth.chain_id = 1337
    w3.eth.get_balance.return_value = 10**18
    w3.eth.get_transaction_count.return_value = 3
    w3.eth.get_block.return_value = {"baseFeePerGas": 10}
    w3.eth.max_priority_fee = 1
    w3.eth.gas_price = 7
    w3.eth.estimate_gas.return_value = 21_000
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.send_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        "transactionHash": TX_HASH,
        "blockNumber": 5,
        "status": 1,
    }
    return w3
