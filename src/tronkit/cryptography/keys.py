"""
The PrivateKey and PubKey classes - secp256k1 key material for TRON accounts
"""
import secrets
import string

from tronkit.core import ECC, CryptographicRangeError, ECCError, InvalidKeyFormat
from tronkit.cryptography.ecc import EllipticCurve, SECP256K1, Point

__all__ = ["PrivateKey", "PubKey"]

BYTE_LEN = ECC.COORD_BYTES
HEX_DIGITS = frozenset(string.hexdigits)


class PrivateKey:
    """
    A secp256k1 scalar 0 < k < n. The scalar is never shown by repr or str.
    """
    __slots__ = ("_secret",)

    def __init__(self, secret: int, curve: EllipticCurve = SECP256K1):
        if isinstance(secret, bool) or not isinstance(secret, int):
            raise TypeError(f"Private key must be an integer, received {type(secret)}")
        if not 0 < secret < curve.order:
            raise CryptographicRangeError("Private key scalar must lie in (0, n)")
        object.__setattr__(self, "_secret", secret)

    def __setattr__(self, key, value):
        raise AttributeError("PrivateKey is immutable")

    def __eq__(self, other) -> bool:
        if not isinstance(other, PrivateKey):
            return False
        return secrets.compare_digest(self.to_bytes(), other.to_bytes())

    def __hash__(self):
        return hash((PrivateKey, self._secret))

    def __repr__(self):
        return "PrivateKey(<redacted>)"

    __str__ = __repr__

    # --- CONSTRUCTORS --- #
    @classmethod
    def parse(cls, hex_string: str) -> "PrivateKey":
        """
        Parse a caller-supplied 64-char hex key. Any failure is reported as InvalidKeyFormat.
        """
        if not isinstance(hex_string, str):
            raise InvalidKeyFormat("Private key must be a hex string")
        key_hex = hex_string.strip()
        if key_hex[:2].lower() == "0x":
            key_hex = key_hex[2:]

        if len(key_hex) != ECC.PRIVKEY_HEX_CHARS:
            raise InvalidKeyFormat(f"Private key must be {ECC.PRIVKEY_HEX_CHARS} hex characters, got {len(key_hex)}")
        if not HEX_DIGITS.issuperset(key_hex):
            raise InvalidKeyFormat("Private key contains non-hex characters")

        try:
            return cls(int(key_hex, 16))
        except CryptographicRangeError as e:
            raise InvalidKeyFormat("Private key is outside the valid secp256k1 range") from e

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> "PrivateKey":
        if len(key_bytes) != ECC.PRIVKEY_BYTES:
            raise InvalidKeyFormat(f"Private key must be {ECC.PRIVKEY_BYTES} bytes")
        return cls(int.from_bytes(key_bytes, "big"))

    @classmethod
    def generate(cls, curve: EllipticCurve = SECP256K1) -> "PrivateKey":
        """
        Draw 32 bytes from the OS CSPRNG, resampling until 0 < k < n
        """
        while True:
            candidate = int.from_bytes(secrets.token_bytes(ECC.PRIVKEY_BYTES), "big")
            if 0 < candidate < curve.order:
                return cls(candidate, curve)

    # --- METHODS --- #
    @property
    def secret(self) -> int:
        return self._secret

    def to_bytes(self) -> bytes:
        return self._secret.to_bytes(ECC.PRIVKEY_BYTES, "big")

    def hex(self) -> str:
        return self.to_bytes().hex()

    def public_key(self, curve: EllipticCurve = SECP256K1) -> "PubKey":
        return PubKey(self._secret, curve)


class PubKey:
    __slots__ = ("pub_key",)

    def __init__(self, private_key: int, curve: EllipticCurve = SECP256K1):
        if not 0 < private_key < curve.order:
            raise CryptographicRangeError("Private key scalar must lie in (0, n)")
        self.pub_key = curve.multiply_generator(private_key)  # Point

    def __eq__(self, other):
        """Check equality based on the public key point"""
        if not isinstance(other, PubKey):
            return False
        return self.pub_key == other.pub_key

    def __hash__(self):
        return hash((self.pub_key.x, self.pub_key.y))

    def __repr__(self):
        return f"PubKey({self.compressed().hex()})"

    @classmethod
    def from_point(cls, point: Point, curve: EllipticCurve = SECP256K1) -> "PubKey":
        if not point or not curve.is_point_on_curve(point):
            raise ECCError("Point is not a valid public key on the curve")
        instance = cls.__new__(cls)
        instance.pub_key = point
        return instance

    @classmethod
    def from_bytes(cls, data: bytes, curve: EllipticCurve = SECP256K1) -> "PubKey":
        """
        Accepts 33-byte compressed, 65-byte uncompressed (0x04 prefix) or 64-byte raw x||y
        """
        if len(data) == 2 * BYTE_LEN:
            data = b'\x04' + data

        if len(data) == 1 + 2 * BYTE_LEN and data[0] == 4:
            x_int = int.from_bytes(data[1:1 + BYTE_LEN], "big")
            y_int = int.from_bytes(data[1 + BYTE_LEN:], "big")
            return cls.from_point(Point(x_int, y_int), curve)

        if len(data) == 1 + BYTE_LEN and data[0] in (2, 3):
            x_int = int.from_bytes(data[1:], "big")
            try:
                temp_y = curve.find_y_from_x(x_int)
            except ValueError as e:
                raise ECCError("Compressed key x coordinate is not on the curve") from e
            wants_odd = data[0] == 3
            y_int = temp_y if (temp_y % 2 == 1) == wants_odd else curve.p - temp_y
            return cls.from_point(Point(x_int, y_int), curve)

        raise ECCError("Unidentified public key encoding")

    def _x_bytes(self):
        return self.pub_key.x.to_bytes(length=BYTE_LEN, byteorder='big')

    def _y_bytes(self):
        return self.pub_key.y.to_bytes(length=BYTE_LEN, byteorder='big')

    def to_point(self) -> Point:
        return self.pub_key

    def raw(self) -> bytes:
        """The 64-byte x || y form hashed for TRON addresses"""
        return self._x_bytes() + self._y_bytes()

    def uncompressed(self) -> bytes:
        return b'\x04' + self.raw()

    def compressed(self) -> bytes:
        init_byte = b'\x02' if self.pub_key.y % 2 == 0 else b'\x03'
        return init_byte + self._x_bytes()
