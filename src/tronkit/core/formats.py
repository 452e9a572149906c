"""
The TRON standard formats
"""
from typing import Final

__all__ = ["ECC", "WALLET", "XKEYS", "TRON", "BALANCE"]


class ECC:
    COORD_BYTES: Final[int] = 32
    PRIVKEY_BYTES: Final[int] = 32
    PRIVKEY_HEX_CHARS: Final[int] = 64


class WALLET:
    """
    We provide a Mnemonic dictionary which is BIP39 compliant. This forces the Mnemonic to be of a certain size
    depending on the entropy byte length chosen
    """
    MNEMONIC: Final[dict] = {
        16: {"bit_length": 128, "word_count": 12, "checksum_bits": 4},
        32: {"bit_length": 256, "word_count": 24, "checksum_bits": 8},
    }
    DEFAULT_WORD_COUNT: Final[int] = 12
    WORD_BITS: Final[int] = 11
    BITLEN_KEY: Final[str] = "bit_length"
    WORD_KEY: Final[str] = "word_count"
    CHECKSUM_KEY: Final[str] = "checksum_bits"
    SEED_ITERATIONS: Final[int] = 2048
    DKLEN: Final[int] = 64


class XKEYS:
    """
    Constants related to the extended public and private keys
    """
    SEED_KEY = b'Bitcoin seed'
    CHAIN_LENGTH = 32
    MAX_DEPTH = 255

    # Version bytes (TRON wallets reuse the BIP44 mainnet values)
    XPRV = bytes.fromhex("0488ade4")
    XPUB = bytes.fromhex("0488b21e")

    # Hardened derivation threshold
    HARDENED_OFFSET = 0x80000000
    MAX_INDEX = 0xffffffff


class TRON:
    """
    Address and derivation constants for the TRON mainnet
    """
    ADDRESS_PREFIX: Final[int] = 0x41
    ADDRESS_BYTES: Final[int] = 21
    PAYLOAD_BYTES: Final[int] = 20
    CHECKSUM_BYTES: Final[int] = 4
    BIP44_PURPOSE: Final[int] = 44
    COIN_TYPE: Final[int] = 195
    TRX_TOKEN_ID: Final[str] = "_"
    TRX_DECIMALS: Final[int] = 6
    USDT_CONTRACT: Final[str] = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"


class BALANCE:
    MAX_DECIMALS: Final[int] = 18
    MAX_BATCH: Final[int] = 100
