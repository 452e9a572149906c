"""
Methods for Base58 and Base58Check encoding and decoding
"""
from tronkit.core import TRON, ChecksumMismatch, InvalidAddress, InvalidCharacter, ValidationError
from tronkit.cryptography import hash256

__all__ = ["BASE58_ALPHABET", "b58encode", "b58decode", "b58encode_check", "b58decode_check", "Base58Codec"]

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_ALPHABET_INDEX = {char: index for index, char in enumerate(BASE58_ALPHABET)}
CHECKSUM_BYTES = TRON.CHECKSUM_BYTES


def b58encode(data: bytes) -> str:
    """
    Given bytes we return a base58 encoded string. Each leading zero byte becomes a leading '1'.
    """
    n = int.from_bytes(data, "big")
    encoded = []
    while n > 0:
        n, remainder = divmod(n, 58)
        encoded.append(BASE58_ALPHABET[remainder])

    leading_zeros = len(data) - len(data.lstrip(b'\x00'))
    return "1" * leading_zeros + "".join(reversed(encoded))


def b58decode(text: str) -> bytes:
    """
    Given a base58 encoded string, return the underlying bytes. Each leading '1' becomes a leading zero byte.
    """
    total = 0
    for position, char in enumerate(text):
        try:
            total = total * 58 + _ALPHABET_INDEX[char]
        except KeyError:
            raise InvalidCharacter(f"Invalid Base58 character {char!r} at position {position}") from None

    leading_zeros = len(text) - len(text.lstrip("1"))
    body = total.to_bytes((total.bit_length() + 7) // 8, "big")
    return b'\x00' * leading_zeros + body


def b58encode_check(data: bytes) -> str:
    """
    Append the first 4 bytes of HASH256(data) and base58 encode
    """
    return b58encode(data + hash256(data)[:CHECKSUM_BYTES])


def b58decode_check(text: str) -> bytes:
    """
    Decode and verify the trailing checksum, returning the data without it
    """
    decoded = b58decode(text)
    if len(decoded) <= CHECKSUM_BYTES:
        raise ChecksumMismatch("Decoded data too short to carry a checksum")

    data, checksum = decoded[:-CHECKSUM_BYTES], decoded[-CHECKSUM_BYTES:]
    if hash256(data)[:CHECKSUM_BYTES] != checksum:
        raise ChecksumMismatch("Decoded checksum does not equal given checksum")
    return data


class Base58Codec:
    """
    Version byte + 20-byte payload <-> Base58Check text
    """

    @staticmethod
    def encode(version: int, payload: bytes) -> str:
        if not 0 <= version <= 0xff:
            raise ValidationError(f"Version must be a single byte, received {version}")
        if len(payload) != TRON.PAYLOAD_BYTES:
            raise ValidationError(f"Payload must be {TRON.PAYLOAD_BYTES} bytes, received {len(payload)}")
        return b58encode_check(bytes([version]) + payload)

    @staticmethod
    def decode(text: str) -> tuple[int, bytes]:
        # Checksum is verified before the length so a tampered character surfaces as ChecksumMismatch
        data = b58decode_check(text)
        if len(data) != TRON.ADDRESS_BYTES:
            raise InvalidAddress(f"Decoded address must be {TRON.ADDRESS_BYTES} bytes, received {len(data)}")
        return data[0], data[1:]
