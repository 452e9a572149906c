"""
The Mnemonic class - BIP39 phrase for seed retrieval. Constructed from 12 or 24 words, or generated from fresh entropy
"""
import os

import unicodedata

from tronkit.core import WALLET, InvalidMnemonic, ValidationError
from tronkit.cryptography import sha256, pbkdf2
from tronkit.data import load_wordlist, word_index

__all__ = ["Mnemonic"]

# --- CONSTANTS --- #
CHECKSUM_KEY = WALLET.CHECKSUM_KEY
WORD_KEY = WALLET.WORD_KEY
BITLEN_KEY = WALLET.BITLEN_KEY
WORD_BITS = WALLET.WORD_BITS
ENTROPY_BY_WORDS = {sizes[WORD_KEY]: bytelen for bytelen, sizes in WALLET.MNEMONIC.items()}


class Mnemonic:
    __slots__ = ("phrase",)

    def __init__(self, phrase: list | str):
        """
        Validate and normalize a caller-supplied phrase. Use Mnemonic.generate() for a random one.
        """
        words = self._normalize(phrase)
        self._validate(words)
        self.phrase = tuple(words)

    def __eq__(self, other):
        return isinstance(other, Mnemonic) and self.phrase == other.phrase

    def __hash__(self):
        return hash(self.phrase)

    def __repr__(self):
        return f"Mnemonic(<{len(self.phrase)} words>)"

    def __str__(self):
        return " ".join(self.phrase)

    # --- CONSTRUCTORS --- #
    @classmethod
    def generate(cls, word_count: int = WALLET.DEFAULT_WORD_COUNT) -> "Mnemonic":
        """
        Generates a phrase from OS CSPRNG entropy sized to the word count (16 bytes | 12 words, 32 bytes | 24 words)
        """
        if word_count not in ENTROPY_BY_WORDS:
            raise ValidationError(f"Word count {word_count} not supported. Must be one of {sorted(ENTROPY_BY_WORDS)}")
        return cls.from_entropy(os.urandom(ENTROPY_BY_WORDS[word_count]))

    @classmethod
    def from_entropy(cls, entropy: bytes) -> "Mnemonic":
        entropy_bytelen = len(entropy)
        if entropy_bytelen not in WALLET.MNEMONIC:
            raise ValidationError(
                f"Entropy byte length {entropy_bytelen} not supported. Must be one of {sorted(WALLET.MNEMONIC)}")

        # Append the checksum bits to the entropy (as an integer)
        checksum_bitlen = WALLET.MNEMONIC[entropy_bytelen][CHECKSUM_KEY]
        ent_check = (int.from_bytes(entropy, "big") << checksum_bitlen) | _checksum(entropy)

        # Extract 11-bit groups from right to left
        word_count = WALLET.MNEMONIC[entropy_bytelen][WORD_KEY]
        wordlist = load_wordlist()
        phrase = []
        for _ in range(word_count):
            phrase.insert(0, wordlist[ent_check & ((1 << WORD_BITS) - 1)])
            ent_check >>= WORD_BITS

        return cls(phrase)

    # --- INTERNAL --- #
    @staticmethod
    def _normalize(phrase: list | str) -> list[str]:
        if isinstance(phrase, str):
            words = phrase.split()
        elif isinstance(phrase, (list, tuple)):
            words = [w for item in phrase for w in str(item).split()]
        else:
            raise InvalidMnemonic(f"Mnemonic must be a string or list of words, received {type(phrase)}")
        return [unicodedata.normalize("NFKD", w).lower() for w in words]

    @staticmethod
    def _validate(words: list[str]):
        if not words:
            raise InvalidMnemonic("Mnemonic cannot be empty")
        if len(words) not in ENTROPY_BY_WORDS:
            raise InvalidMnemonic(f"Mnemonic must have {sorted(ENTROPY_BY_WORDS)} words, received {len(words)}")

        index = word_index()
        ent_check = 0
        for position, word in enumerate(words):
            if word not in index:
                raise InvalidMnemonic(f"Word {position + 1} is not in the BIP39 wordlist")
            ent_check = (ent_check << WORD_BITS) | index[word]

        entropy_bytelen = ENTROPY_BY_WORDS[len(words)]
        checksum_bitlen = WALLET.MNEMONIC[entropy_bytelen][CHECKSUM_KEY]
        checksum = ent_check & ((1 << checksum_bitlen) - 1)
        entropy = (ent_check >> checksum_bitlen).to_bytes(entropy_bytelen, "big")
        if _checksum(entropy) != checksum:
            raise InvalidMnemonic("Mnemonic checksum does not match")

    # --- METHODS --- #
    @property
    def word_count(self) -> int:
        return len(self.phrase)

    def entropy(self) -> bytes:
        index = word_index()
        ent_check = 0
        for word in self.phrase:
            ent_check = (ent_check << WORD_BITS) | index[word]
        entropy_bytelen = ENTROPY_BY_WORDS[len(self.phrase)]
        checksum_bitlen = WALLET.MNEMONIC[entropy_bytelen][CHECKSUM_KEY]
        return (ent_check >> checksum_bitlen).to_bytes(entropy_bytelen, "big")

    def to_seed(self, passphrase: str = "", iterations: int = WALLET.SEED_ITERATIONS,
                dklen: int = WALLET.DKLEN) -> bytes:
        """
        Returns the 64-byte seed. PBKDF2 is deliberately slow; do not call this in a loop over many candidates.
        """
        return pbkdf2(mnemonic=list(self.phrase), passphrase=passphrase, iterations=iterations, dklen=dklen)


def _checksum(entropy: bytes) -> int:
    """
    Return the first ENT/32 bits of SHA256(entropy) as an integer
    """
    checksum_bitlen = WALLET.MNEMONIC[len(entropy)][CHECKSUM_KEY]
    return int.from_bytes(sha256(entropy), "big") >> (256 - checksum_bitlen)
