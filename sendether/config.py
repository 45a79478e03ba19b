"""Environment-backed defaults. Explicit call options always take precedence."""

import os

from dotenv import load_dotenv

load_dotenv()

RPC_URL = os.getenv("SENDETHER_RPC_URL", "http://localhost:8545")
INFURA_KEY = os.getenv("SENDETHER_INFURA_KEY", "")
CONFIRMATION_TIMEOUT = float(os.getenv("SENDETHER_TIMEOUT", "120"))
POLL_LATENCY = float(os.getenv("SENDETHER_POLL_LATENCY", "0.1"))

# BIP-44 Ethereum path; {index} selects the account
MNEMONIC_PATH_TEMPLATE = "m/44'/60'/0'/0/{index}"
