"""Shared address helpers.

Cache keys use the lowercase form; the subgraph is queried with the
EIP-55 checksum form because it compares addresses case-sensitively.
"""

from typing import Annotated

from pydantic import Field

# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]


def normalize_address(address: str) -> str:
    """Normalize an address to lowercase with a 0x prefix.

    Note:
        This does NOT check that the input is a valid address. Use
        is_valid_address() for that.
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address.

    Args:
        address: String to validate

    Returns:
        True if valid Ethereum address format
    """
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def checksum_address(address: str) -> str:
    """Return the EIP-55 checksum form of an address.

    Raises:
        ValueError: If the address is not a valid Ethereum address
    """
    from web3 import Web3

    normalized = normalize_address(address)
    if not is_valid_address(normalized):
        raise ValueError(f"Invalid address: {address}")
    return Web3.to_checksum_address(normalized)
