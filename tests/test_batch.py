"""
Tests for the Wallet class and BatchAddressGenerator
"""
import pytest

from tronkit.core import XKEYS, InvalidMnemonic, ValidationError
from tronkit.cryptography import PrivateKey
from tronkit.wallet import Address, BatchAddressGenerator, DerivationPath, Mnemonic, Wallet, derive_key

ABANDON_PHRASE = " ".join(["abandon"] * 11 + ["about"])


@pytest.fixture(scope="module")
def wallet():
    return Wallet(ABANDON_PHRASE)


def test_known_tron_address(wallet):
    """
    Public vector: "abandon x11 about" at m/44'/195'/0'/0/0
    """
    address, _ = wallet.address_at(0)
    assert address.base58 == "TUEZSdKsoDHQMeZwihtdoBiN46zxhGWYdH"

    batch = BatchAddressGenerator().generate(ABANDON_PHRASE, offset=0, count=1)
    assert batch.to_list()[0]["address"] == "TUEZSdKsoDHQMeZwihtdoBiN46zxhGWYdH"


def test_wallet_address_at(wallet):
    address, private_key = wallet.address_at(3)
    assert isinstance(private_key, PrivateKey)
    assert address == Address.from_private_key(private_key)
    assert private_key == derive_key(wallet.mnemonic.to_seed(), "m/44'/195'/0'/0/3")
    assert private_key == wallet.derive_key(DerivationPath.tron(3))


def test_passphrase_changes_addresses(wallet):
    other, _ = Wallet(ABANDON_PHRASE, passphrase="TREZOR").address_at(0)
    assert other != wallet.address_at(0)[0]


def test_batch_is_index_continuous(wallet):
    """
    Entry i is the key at m/44'/195'/0'/0/(offset + i)
    """
    batch = BatchAddressGenerator().generate(ABANDON_PHRASE, offset=5, count=3)
    assert batch.indices == [5, 6, 7]
    assert not batch.clamped
    for entry in batch:
        address, private_key = wallet.address_at(entry.index)
        assert entry.address == address, f"Batch address mismatch at index {entry.index}"
        assert entry.private_key == private_key


def test_batch_matches_single_derivation(wallet):
    batch = BatchAddressGenerator().generate(Mnemonic(ABANDON_PHRASE), offset=0, count=1)
    assert len(batch) == 1
    assert batch.entries[0].address == wallet.address_at(0)[0]


def test_batch_threaded_order():
    """
    A thread pool must not reorder entries
    """
    sequential = BatchAddressGenerator(max_workers=1).generate(ABANDON_PHRASE, offset=10, count=8)
    threaded = BatchAddressGenerator(max_workers=4).generate(ABANDON_PHRASE, offset=10, count=8)
    assert threaded.indices == list(range(10, 18))
    assert threaded.entries == sequential.entries


def test_batch_default_limit():
    """
    offset=5, count=10 gives indices 5..14; count=500 is clamped to 100 entries
    """
    generator = BatchAddressGenerator(max_workers=4)
    assert generator.generate(ABANDON_PHRASE, offset=5, count=10).indices == list(range(5, 15))

    clamped = generator.generate(ABANDON_PHRASE, offset=0, count=500)
    assert len(clamped) == 100
    assert clamped.indices == list(range(100))


def test_batch_clamped():
    batch = BatchAddressGenerator(max_count=4).generate(ABANDON_PHRASE, offset=0, count=25)
    assert len(batch) == 4
    assert batch.requested == 25
    assert batch.clamped


def test_batch_to_list():
    batch = BatchAddressGenerator().generate(ABANDON_PHRASE, offset=2, count=2)
    rows = batch.to_list()
    assert [row["offset"] for row in rows] == [2, 3]
    assert set(rows[0]) == {"offset", "address", "hexAddress", "privateKey"}
    assert rows[0]["address"].startswith("T")
    assert rows[0]["hexAddress"].startswith("41")


@pytest.mark.parametrize("offset, count", [(-1, 1), (0, 0), (0, -3), (XKEYS.HARDENED_OFFSET - 1, 2)])
def test_batch_invalid_ranges(offset, count):
    with pytest.raises(ValidationError):
        BatchAddressGenerator().generate(ABANDON_PHRASE, offset=offset, count=count)


def test_batch_invalid_mnemonic():
    with pytest.raises(InvalidMnemonic):
        BatchAddressGenerator().generate(" ".join(["abandon"] * 12))


def test_generator_limits():
    with pytest.raises(ValidationError):
        BatchAddressGenerator(max_count=0)
    with pytest.raises(ValidationError):
        BatchAddressGenerator(max_count=101)
    with pytest.raises(ValidationError):
        BatchAddressGenerator(max_workers=0)
