"""
Example: Simple Send

Send 0.01 ether to an address, signing with a private key.

Usage:
    PRIVATE_KEY=0x... SENDETHER_RPC_URL=http://localhost:8545 python examples/simple_send.py
"""

import logging
import os

from sendether import ETHER_BASE, send_ether

logging.basicConfig(level=logging.INFO, format="%(message)s")

# Get private key from environment
private_key = os.environ.get("PRIVATE_KEY")
if not private_key:
    raise ValueError("PRIVATE_KEY environment variable not set")

receipt = send_ether(
    "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
    "0.01",
    base=ETHER_BASE,
    key=private_key,
)
print(f"Transaction hash: {receipt['transactionHash'].to_0x_hex()}")
print(f"Confirmed in block {receipt['blockNumber']} (gas used: {receipt['gasUsed']})")
