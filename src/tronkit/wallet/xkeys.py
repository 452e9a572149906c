"""
Extended Keys (xpub/xprv) Implementation for tronkit
Implements BIP32 Hierarchical Deterministic key derivation
"""
from tronkit.core import ExtendedKeyError, ChecksumMismatch, XKEYS
from tronkit.cryptography import SECP256K1, PrivateKey, PubKey, hash160, hmac_sha512
from tronkit.data import b58encode_check, b58decode_check
from tronkit.wallet.derivation import DerivationPath

__all__ = ["ExtendedKey"]

XPRV = XKEYS.XPRV
XPUB = XKEYS.XPUB
HARDENED_INDEX = XKEYS.HARDENED_OFFSET
SEED_KEY = XKEYS.SEED_KEY
SERIAL_BYTES = 78


class ExtendedKey:
    """
    Extended key (private or public) with its chain code and position in the tree
    """
    __slots__ = ('version', 'depth', 'parent_fingerprint', 'child_number', 'chain_code', 'key_data')

    def __init__(self,
                 key_data: bytes,
                 chain_code: bytes,
                 depth: int = 0,
                 parent_fingerprint: bytes = b'\x00' * 4,
                 child_number: int = 0,
                 version: bytes | None = None,
                 ):
        """
        Initialize extended key

        Args:
            key_data: Key data (32 bytes for private, 33 bytes for compressed public)
            chain_code: Chain code for key derivation (32 bytes)
            depth: Depth in the derivation path
            parent_fingerprint: Fingerprint of parent key (4 bytes)
            child_number: Child key index
            version: Version bytes (defaults to xprv/xpub by key type)
        """
        # --- Validation --- #
        if len(parent_fingerprint) != 4:
            raise ExtendedKeyError("Parent fingerprint must be 4 bytes")
        if len(chain_code) != XKEYS.CHAIN_LENGTH:
            raise ExtendedKeyError("Chain code must be 32 bytes")
        if len(key_data) not in (32, 33):
            raise ExtendedKeyError("Key data must be 32 (private) or 33 (compressed public) bytes")
        if not 0 <= depth <= XKEYS.MAX_DEPTH:
            raise ExtendedKeyError(f"Depth must lie in [0, {XKEYS.MAX_DEPTH}]")
        if not 0 <= child_number <= XKEYS.MAX_INDEX:
            raise ExtendedKeyError("Child number must fit in 4 bytes")

        self.version = version if version is not None else (XPRV if len(key_data) == 32 else XPUB)
        self.depth = depth
        self.parent_fingerprint = parent_fingerprint
        self.child_number = child_number
        self.chain_code = chain_code
        self.key_data = key_data

    # --- OVERRIDES --- #
    def __eq__(self, other) -> bool:
        """
        Two ExtendedKey objects are equal if and only if their serialized bytes are equal
        """
        if not isinstance(other, ExtendedKey):
            return False
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self):
        kind = "xprv" if self.is_private else "xpub"
        return f"ExtendedKey({kind}, depth={self.depth}, child_number={self.child_number})"

    # --- CONSTRUCTORS --- #
    @classmethod
    def from_master_seed(cls, seed: bytes) -> "ExtendedKey":
        if not 16 <= len(seed) <= 64:
            raise ExtendedKeyError("Seed must be between 16 and 64 bytes")

        seed_hash = hmac_sha512(key=SEED_KEY, message=seed)
        privkey, chain_code = seed_hash[:32], seed_hash[32:]

        # Invalid master key with probability ~2^-127
        key_int = int.from_bytes(privkey, "big")
        if not 0 < key_int < SECP256K1.order:
            raise ExtendedKeyError("Seed produces an invalid master key")

        return cls(privkey, chain_code)

    @classmethod
    def from_address(cls, address: str) -> "ExtendedKey":
        """
        Given a Base58Check xprv/xpub string, we decode and return the from_serial method
        """
        try:
            serial = b58decode_check(address)
        except ChecksumMismatch as e:
            raise ExtendedKeyError("Decoding error. Checksum doesn't match serial value") from e
        return cls.from_serial(serial)

    @classmethod
    def from_serial(cls, serial: bytes) -> "ExtendedKey":
        """
        version || depth || parent fingerprint || child number || chain code || key data
        """
        if len(serial) != SERIAL_BYTES:
            raise ExtendedKeyError(f"Serialized extended key must be {SERIAL_BYTES} bytes")

        version = serial[:4]
        depth = serial[4]
        parent_fingerprint = serial[5:9]
        child_number = int.from_bytes(serial[9:13], "big")
        chain_code = serial[13:45]
        key_data = serial[45:]

        # Private keys carry a 0x00 pad byte
        if key_data[0] == 0:
            key_data = key_data[1:]
        elif key_data[0] not in (2, 3):
            raise ExtendedKeyError("Unknown key data prefix")

        return cls(key_data, chain_code, depth, parent_fingerprint, child_number, version)

    # --- PROPERTIES --- #
    @property
    def is_private(self) -> bool:
        return len(self.key_data) == 32

    @property
    def is_public(self) -> bool:
        return len(self.key_data) == 33

    # --- METHODS --- #
    def to_bytes(self) -> bytes:
        key_data = b'\x00' + self.key_data if self.is_private else self.key_data
        return b''.join([
            self.version,
            self.depth.to_bytes(1, "big"),
            self.parent_fingerprint,
            self.child_number.to_bytes(4, "big"),
            self.chain_code,
            key_data
        ])

    def address(self) -> str:
        return b58encode_check(self.to_bytes())

    def private_key(self) -> PrivateKey:
        if not self.is_private:
            raise ExtendedKeyError("Public extended key holds no private key")
        return PrivateKey.from_bytes(self.key_data)

    def public_key(self) -> PubKey:
        if self.is_private:
            return self.private_key().public_key()
        return PubKey.from_bytes(self.key_data)

    def fingerprint(self) -> bytes:
        return hash160(self.public_key().compressed())[:4]

    def derive_child(self, index: int) -> "ExtendedKey":
        """
        Derive a child at the given 32-bit index (>= 2^31 is hardened)
        """
        if not 0 <= index <= XKEYS.MAX_INDEX:
            raise ExtendedKeyError("Child index must fit in 4 bytes")
        if self.depth == XKEYS.MAX_DEPTH:
            raise ExtendedKeyError("Maximum derivation depth reached")

        index_bytes = index.to_bytes(4, "big")

        if index >= HARDENED_INDEX:
            # Hardened derivation: use private key
            if self.is_public:
                raise ExtendedKeyError("Cannot derive hardened child from public key")
            data = b'\x00' + self.key_data + index_bytes
        else:
            # Non-hardened derivation: use public key
            data = self.public_key().compressed() + index_bytes

        key_hash = hmac_sha512(key=self.chain_code, message=data)
        tweak_int = int.from_bytes(key_hash[:32], 'big')
        child_chain_code = key_hash[32:]

        # Invalid tweak: BIP32 says proceed with the next index
        if tweak_int >= SECP256K1.order:
            return self.derive_child(index + 1)

        if self.is_private:
            child_priv_key = (int.from_bytes(self.key_data, "big") + tweak_int) % SECP256K1.order
            if child_priv_key == 0:
                return self.derive_child(index + 1)
            child_key_data = child_priv_key.to_bytes(32, "big")
        else:
            tweak_pt = SECP256K1.multiply_generator(tweak_int)
            child_pt = SECP256K1.add_points(self.public_key().to_point(), tweak_pt)
            if not child_pt:
                return self.derive_child(index + 1)
            child_key_data = PubKey.from_point(child_pt).compressed()

        return ExtendedKey(
            key_data=child_key_data,
            chain_code=child_chain_code,
            depth=self.depth + 1,
            parent_fingerprint=self.fingerprint(),
            child_number=index,
            version=self.version
        )

    def derive_path(self, path: DerivationPath | str) -> "ExtendedKey":
        if isinstance(path, str):
            path = DerivationPath.parse(path)
        key = self
        for segment in path:
            key = key.derive_child(segment.child_number)
        return key

    def get_pubkey(self) -> "ExtendedKey":
        """
        Return the corresponding public ExtendedKey
        """
        if self.is_public:
            return self

        return ExtendedKey(
            key_data=self.public_key().compressed(),
            chain_code=self.chain_code,
            depth=self.depth,
            parent_fingerprint=self.parent_fingerprint,
            child_number=self.child_number,
            version=XPUB
        )
