"""End-to-end transfers against an in-process chain.

Mirrors the transfer scenarios of the original command-line tool: every
way of naming the sender moves exactly the requested amount.

These tests require the tester extra:
    pip install -e ".[test]"
"""

import secrets

import pytest
from eth_account import Account

pytest.importorskip("eth_tester")

from web3 import EthereumTesterProvider, Web3  # noqa: E402

from sendether import InsufficientBalanceError, account_from_mnemonic, send_ether  # noqa: E402

from .conftest import DEV_MNEMONIC  # noqa: E402

ONE_ETHER = 10**18


@pytest.fixture(scope="module")
def w3():
    """A chain whose node holds funded, unlocked accounts."""
    return Web3(EthereumTesterProvider())


def random_account():
    return Account.from_key(secrets.token_bytes(32))


def fund(w3, address, value=ONE_ETHER):
    tx_hash = w3.eth.send_transaction(
        {"from": w3.eth.accounts[0], "to": address, "value": value}
    )
    w3.eth.wait_for_transaction_receipt(tx_hash)


def random_amount():
    return secrets.randbelow(1000) + 1


class TestTransfers:
    def test_default_account(self, w3):
        amount = random_amount()
        to = random_account()
        receipt = send_ether(to.address, amount, web3=w3, quiet=True)
        assert receipt["transactionHash"]
        assert w3.eth.get_balance(to.address) == amount

    def test_from_node_account(self, w3):
        amount = random_amount()
        to = random_account()
        receipt = send_ether(
            to.address, amount, from_address=w3.eth.accounts[1], web3=w3, quiet=True
        )
        assert w3.eth.get_transaction(receipt["transactionHash"])["from"] == w3.eth.accounts[1]
        assert w3.eth.get_balance(to.address) == amount

    def test_private_key(self, w3):
        amount = random_amount()
        sender = random_account()
        fund(w3, sender.address)
        to = random_account()
        receipt = send_ether(to.address, amount, key=sender.key, web3=w3, quiet=True)
        assert receipt["transactionHash"]
        assert w3.eth.get_transaction(receipt["transactionHash"])["from"] == sender.address
        assert w3.eth.get_balance(to.address) == amount

    def test_keystore(self, w3):
        amount = random_amount()
        sender = random_account()
        fund(w3, sender.address)
        password = secrets.token_hex(8)
        keystore = Account.encrypt(sender.key, password, kdf="pbkdf2", iterations=2)
        to = random_account()
        receipt = send_ether(
            to.address, amount, keystore=keystore, password=password, web3=w3, quiet=True
        )
        assert receipt["transactionHash"]
        assert w3.eth.get_balance(to.address) == amount

    def test_mnemonic(self, w3):
        amount = random_amount()
        sender = account_from_mnemonic(DEV_MNEMONIC, 5)
        fund(w3, sender.address)
        to = random_account()
        receipt = send_ether(
            to.address, amount, mnemonic=DEV_MNEMONIC, mnemonic_index=5, web3=w3, quiet=True
        )
        assert receipt["transactionHash"]
        assert w3.eth.get_balance(to.address) == amount

    def test_different_base(self, w3):
        to = random_account()
        receipt = send_ether(to.address, 1, base=18, web3=w3, quiet=True)
        assert receipt["transactionHash"]
        assert w3.eth.get_balance(to.address) == ONE_ETHER

    def test_legacy_gas_price(self, w3):
        to = random_account()
        gas_price = w3.eth.get_block("latest")["baseFeePerGas"] * 2
        send_ether(to.address, 500, gas_price=gas_price, web3=w3, quiet=True)
        assert w3.eth.get_balance(to.address) == 500


class TestInsufficientBalance:
    def test_empty_sender(self, w3):
        amount = random_amount()
        sender = random_account()
        to = random_account()
        with pytest.raises(InsufficientBalanceError):
            send_ether(to.address, amount, key=sender.key, web3=w3, quiet=True)
        assert w3.eth.get_balance(to.address) == 0

    def test_value_plus_fees(self, w3):
        sender = random_account()
        fund(w3, sender.address, 1000)
        to = random_account()
        with pytest.raises(InsufficientBalanceError):
            send_ether(to.address, 1000, key=sender.key, web3=w3, quiet=True)
        assert w3.eth.get_balance(to.address) == 0
        assert w3.eth.get_balance(sender.address) == 1000
