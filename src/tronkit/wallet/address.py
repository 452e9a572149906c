"""
The Address class - a TRON account address, 0x41 || last 20 bytes of KECCAK256(x || y)
"""
import string
from dataclasses import dataclass

from tronkit.core import TRON, InvalidAddress
from tronkit.cryptography import PrivateKey, PubKey, keccak256
from tronkit.data import Base58Codec

__all__ = ["Address", "derive_address"]

HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class Address:
    payload: bytes  # 21 bytes: version byte + 20-byte hash

    def __post_init__(self):
        if len(self.payload) != TRON.ADDRESS_BYTES:
            raise InvalidAddress(f"Address must be {TRON.ADDRESS_BYTES} bytes, received {len(self.payload)}")
        if self.payload[0] != TRON.ADDRESS_PREFIX:
            raise InvalidAddress(f"Address version byte must be {TRON.ADDRESS_PREFIX:#x}")

    def __str__(self):
        return self.base58

    # --- CONSTRUCTORS --- #
    @classmethod
    def from_public_key(cls, pubkey: PubKey) -> "Address":
        digest = keccak256(pubkey.raw())
        return cls(bytes([TRON.ADDRESS_PREFIX]) + digest[-TRON.PAYLOAD_BYTES:])

    @classmethod
    def from_private_key(cls, private_key: PrivateKey) -> "Address":
        return cls.from_public_key(private_key.public_key())

    @classmethod
    def from_base58(cls, text: str) -> "Address":
        version, payload = Base58Codec.decode(text)
        return cls(bytes([version]) + payload)

    @classmethod
    def from_hex(cls, hex_string: str) -> "Address":
        hex_string = hex_string.strip()
        if hex_string[:2].lower() == "0x":
            hex_string = hex_string[2:]
        if len(hex_string) != 2 * TRON.ADDRESS_BYTES or not HEX_DIGITS.issuperset(hex_string):
            raise InvalidAddress(f"Hex address must be {2 * TRON.ADDRESS_BYTES} hex characters")
        return cls(bytes.fromhex(hex_string))

    @classmethod
    def parse(cls, text: str) -> "Address":
        """
        Accept either a Base58Check ('T...') or a hex ('41...') address
        """
        if not isinstance(text, str) or not text.strip():
            raise InvalidAddress("Address cannot be empty")
        text = text.strip()
        if len(text) == 2 * TRON.ADDRESS_BYTES and HEX_DIGITS.issuperset(text):
            return cls.from_hex(text)
        return cls.from_base58(text)

    # --- PROPERTIES --- #
    @property
    def version(self) -> int:
        return self.payload[0]

    @property
    def hex(self) -> str:
        return self.payload.hex()

    @property
    def base58(self) -> str:
        return Base58Codec.encode(self.payload[0], self.payload[1:])


def derive_address(pubkey: PubKey) -> Address:
    """Pure and deterministic: the same public key always yields the same address"""
    return Address.from_public_key(pubkey)
