"""
Example: Send from a keystore file

Decrypts a V3 keystore and sends wei to an address. A timeout is not a
failure: the transaction may still be mined, so look it up before retrying.

Usage:
    KEYSTORE_PASSWORD=... python examples/keystore_send.py path/to/keystore.json 0xRecipient 1000
"""

import logging
import os
import sys
from pathlib import Path

from sendether import ConfirmationTimeoutError, SendEtherError, send_ether

logging.basicConfig(level=logging.INFO, format="%(message)s")

keystore_path, to, amount = sys.argv[1:4]

try:
    receipt = send_ether(
        to,
        amount,
        keystore=Path(keystore_path),
        password=os.environ["KEYSTORE_PASSWORD"],
    )
except ConfirmationTimeoutError as e:
    print(f"Not confirmed yet, check {e.tx_hash} before resending")
    sys.exit(2)
except SendEtherError as e:
    print(f"Failed at {e.stage}: {e}")
    sys.exit(1)

print(f"Transaction hash: {receipt['transactionHash'].to_0x_hex()}")
