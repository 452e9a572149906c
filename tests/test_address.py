"""
Tests for TRON address derivation
"""
import pytest

from tronkit.core import ChecksumMismatch, InvalidAddress, ValidationError
from tronkit.cryptography import PrivateKey, keccak256
from tronkit.wallet import Address, derive_address

USDT = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
USDT_HEX = "41a614f803b6fd780986a42c78ec9c7f77e6ded13c"

# Private key -> 0x41 || Ethereum-style 20-byte account
KNOWN_KEYS = {
    1: "417e5f4552091a69125d5dfcb7b8c2659029395bdf",
    2: "412b5ad5c4795c026514f8317c7a215e218dccd6cf",
}


def test_keccak_vector():
    """
    Keccak-256 (not NIST SHA3-256) of the empty string
    """
    assert keccak256(b"").hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


@pytest.mark.parametrize("secret, hex_address", KNOWN_KEYS.items())
def test_known_key_addresses(secret, hex_address):
    address = Address.from_private_key(PrivateKey(secret))
    assert address.hex == hex_address, f"Wrong address for private key {secret}"
    assert address.base58.startswith("T")
    assert len(address.base58) == 34


def test_known_contract_address():
    assert Address.from_base58(USDT).hex == USDT_HEX
    assert Address.from_hex(USDT_HEX).base58 == USDT
    assert str(Address.parse(USDT_HEX)) == USDT
    assert Address.parse(USDT) == Address.parse(USDT_HEX)


def test_derivation_is_deterministic():
    key = PrivateKey.generate()
    first = derive_address(key.public_key())
    second = Address.from_public_key(key.public_key())
    assert first == second
    assert first.version == 0x41
    assert len(first.payload) == 21


def test_address_from_hex_with_prefix():
    assert Address.from_hex("0x" + USDT_HEX).base58 == USDT


@pytest.mark.parametrize("bad_address", ["", "   ", "42" + USDT_HEX[2:]])
def test_invalid_addresses(bad_address):
    with pytest.raises(InvalidAddress):
        Address.parse(bad_address)


def test_truncated_address_rejected():
    with pytest.raises(ValidationError):
        Address.parse(USDT[:-6])


def test_tampered_address_fails_checksum():
    replacement = "X" if USDT[10] != "X" else "Y"
    tampered = USDT[:10] + replacement + USDT[11:]
    with pytest.raises(ChecksumMismatch):
        Address.parse(tampered)


def test_wrong_payload_length():
    with pytest.raises(InvalidAddress):
        Address(bytes.fromhex(USDT_HEX)[:-1])
