import re

WALLET_ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
TX_HASH_PATTERN = r"^0x[0-9a-fA-F]{64}$"


def validate_wallet_address(address: str) -> bool:
    """Validate an Ethereum-style address (0x + 40 hex chars).

    Checksum casing is not verified.
    """
    if not address:
        return False
    return bool(re.match(WALLET_ADDRESS_PATTERN, address.strip()))


def validate_tx_hash(tx_hash: str) -> bool:
    """Validate a transaction hash format (0x + 64 hex chars)."""
    if not tx_hash:
        return False
    return bool(re.match(TX_HASH_PATTERN, tx_hash.strip()))


def normalize_tx_hash(tx_hash: str) -> str:
    """Hex digits are case-insensitive; hashes are stored and looked up lower-cased."""
    return tx_hash.strip().lower()
