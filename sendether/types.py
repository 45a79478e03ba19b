"""Type definitions and coercion helpers for transfer inputs.

These converters normalize caller input into the forms the rest of the
package works with: raw bytes, 32-byte private keys and checksummed
address strings.
"""

from typing import NewType, Union

from eth_utils import is_checksum_address, is_hex_address, to_bytes, to_checksum_address

ChecksumAddress = NewType("ChecksumAddress", str)
PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)

BytesLike = Union[bytes, str]


def as_bytes(value: BytesLike) -> bytes:
    """Convert hex string, bytes, bytearray, or memoryview to bytes."""
    if isinstance(value, str):
        if value == "" or value == "0x":
            return b""
        return to_bytes(hexstr=value)
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected str, bytes, got {type(value).__name__}")
    return bytes(value)


def as_private_key(value: BytesLike) -> PrivateKeyBytes:
    """Convert hex string or bytes to a validated 32-byte private key.

    Accepts hex with or without the 0x prefix.
    """
    b = as_bytes(value)
    if len(b) != 32:
        raise ValueError(f"private key must be 32 bytes, got {len(b)}")
    return PrivateKeyBytes(b)


def as_checksum_address(value: BytesLike) -> ChecksumAddress:
    """Convert hex string or bytes to an EIP-55 checksummed address.

    All-lowercase and all-uppercase hex is accepted as is. Mixed-case
    input must carry a valid checksum.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        b = bytes(value)
        if len(b) != 20:
            raise ValueError(f"address must be 20 bytes, got {len(b)}")
        return ChecksumAddress(to_checksum_address(b))

    if not isinstance(value, str):
        raise TypeError(f"expected str, bytes, got {type(value).__name__}")
    if not is_hex_address(value):
        raise ValueError(f"not a 20-byte hex address: {value!r}")
    body = value[2:] if value[:2] in ("0x", "0X") else value
    is_mixed_case = body != body.lower() and body != body.upper()
    if is_mixed_case and not is_checksum_address("0x" + body):
        raise ValueError(f"invalid address checksum: {value}")
    return ChecksumAddress(to_checksum_address(value))
