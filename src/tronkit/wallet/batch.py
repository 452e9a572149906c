"""
The BatchAddressGenerator class - an index-continuous run of addresses derived from one mnemonic.

Each entry is m/44'/195'/account'/0/index. The account node is derived once per call and every leaf is derived from it
independently, so entries may be computed on a thread pool while the output stays in index order.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from tronkit.core import BALANCE, XKEYS, ValidationError, get_logger
from tronkit.cryptography import PrivateKey
from tronkit.wallet.address import Address
from tronkit.wallet.mnemonic import Mnemonic
from tronkit.wallet.wallet import Wallet
from tronkit.wallet.xkeys import ExtendedKey

__all__ = ["BatchAddressGenerator", "BatchEntry", "BatchResult"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class BatchEntry:
    index: int
    address: Address
    private_key: PrivateKey

    def to_dict(self) -> dict:
        return {
            "offset": self.index,
            "address": self.address.base58,
            "hexAddress": self.address.hex,
            "privateKey": self.private_key.hex(),
        }


@dataclass(frozen=True)
class BatchResult:
    offset: int
    entries: tuple[BatchEntry, ...]
    requested: int

    @property
    def clamped(self) -> bool:
        return len(self.entries) < self.requested

    @property
    def indices(self) -> list[int]:
        return [entry.index for entry in self.entries]

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def to_list(self) -> list[dict]:
        return [entry.to_dict() for entry in self.entries]


class BatchAddressGenerator:

    def __init__(self, max_count: int = BALANCE.MAX_BATCH, max_workers: int = 1, account: int = 0):
        if not 1 <= max_count <= BALANCE.MAX_BATCH:
            raise ValidationError(f"max_count must lie in [1, {BALANCE.MAX_BATCH}]")
        if max_workers < 1:
            raise ValidationError("max_workers must be at least 1")
        self.max_count = max_count
        self.max_workers = max_workers
        self.account = account

    def generate(self, mnemonic: Mnemonic | list | str, offset: int = 0, count: int = 1,
                 passphrase: str = "") -> BatchResult:
        """
        Derive indices offset .. offset+count-1. count is silently clamped to max_count.
        """
        if offset < 0:
            raise ValidationError(f"Offset cannot be negative, received {offset}")
        if count < 1:
            raise ValidationError(f"Count must be at least 1, received {count}")

        effective = min(count, self.max_count)
        if offset + effective > XKEYS.HARDENED_OFFSET:
            raise ValidationError("Offset + count exceeds the non-hardened index range")

        account_node = Wallet(mnemonic, passphrase).account_key(self.account)
        indices = range(offset, offset + effective)

        if self.max_workers > 1 and effective > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="derive") as executor:
                # map() yields in submission order regardless of completion order
                entries = tuple(executor.map(lambda i: _derive_entry(account_node, i), indices))
        else:
            entries = tuple(_derive_entry(account_node, i) for i in indices)

        if effective < count:
            logger.debug(f"Batch request for {count} addresses clamped to {effective}")
        return BatchResult(offset=offset, entries=entries, requested=count)


def _derive_entry(account_node: ExtendedKey, index: int) -> BatchEntry:
    private_key = account_node.derive_child(index).private_key()
    return BatchEntry(index=index, address=Address.from_private_key(private_key), private_key=private_key)
