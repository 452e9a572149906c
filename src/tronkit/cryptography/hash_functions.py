"""
Shortcuts for the most popular hash functions. Each function returns the bytes digest
"""
import hashlib
import hmac

import unicodedata
from eth_utils import keccak
from ripemd.ripemd160 import ripemd160 as _ripemd160

__all__ = ["hash160", "hash256", "hmac_sha512", "keccak256", "pbkdf2", "ripemd160", "sha256", "sha512"]


# --- SHA --- #
def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def sha512(data: bytes) -> bytes:
    return hashlib.sha512(data).digest()


# --- KECCAK --- #
def keccak256(data: bytes) -> bytes:
    """Keccak-256 with the pre-NIST padding used by Ethereum and TRON, not hashlib.sha3_256"""
    return keccak(primitive=data)


# --- RIPEMD --- #

def ripemd160(data: bytes) -> bytes:
    return _ripemd160(data)


# --- CHECKSUM / FINGERPRINT HASHES --- #

def hash256(data: bytes) -> bytes:
    """SHA256(SHA256(data))"""
    return sha256(sha256(data))


def hash160(data: bytes) -> bytes:
    """RIPEMD160(SHA256(data))"""
    return ripemd160(sha256(data))


# --- WALLET HASHES --- #
def hmac_sha512(key: bytes, message: bytes) -> bytes:
    return hmac.new(key=key, msg=message, digestmod=hashlib.sha512).digest()


def pbkdf2(mnemonic: list, passphrase='', iterations=2048, dklen=64) -> bytes:
    """
    Derives a cryptographic key from a mnemonic (list of words) using PBKDF2-HMAC-SHA512.

    mnemonic: A list of words representing the mnemonic.
    passphrase: An optional passphrase string (default: empty string).
    iterations: Number of iterations for PBKDF2 (default: 2048).
    dklen: Length of the derived key in bytes (default: 64 bytes).
    return: The derived key as bytes.
    """
    # Step 1: Concatenate the mnemonic list into a single string
    mnemonic_str = ' '.join(mnemonic)

    # Step 2: Normalize the mnemonic and passphrase using NFKD
    normalized_mnemonic = unicodedata.normalize('NFKD', mnemonic_str)
    normalized_passphrase = unicodedata.normalize('NFKD', passphrase)

    # Step 3: Prepare the salt ("mnemonic" + normalized passphrase)
    salt = f"mnemonic{normalized_passphrase}".encode('utf-8')

    # Step 4: Encode the normalized mnemonic as UTF-8 bytes
    password_bytes = normalized_mnemonic.encode('utf-8')

    # Step 5: Derive the key using PBKDF2-HMAC-SHA512
    return hashlib.pbkdf2_hmac('sha512', password_bytes, salt, iterations, dklen)
