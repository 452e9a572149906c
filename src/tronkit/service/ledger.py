"""
The LedgerClient collaborator - signs and broadcasts transfers.

Transaction construction and broadcasting live outside this package; the service only prepares a validated
TransferRequest and hands it to whichever LedgerClient was configured.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from tronkit.balance import Asset
from tronkit.core import ValidationError
from tronkit.cryptography import PrivateKey
from tronkit.data import DecimalAmount
from tronkit.wallet import Address

__all__ = ["LedgerClient", "TransferRequest", "SignedTransaction"]


@dataclass(frozen=True)
class TransferRequest:
    owner: Address
    to: Address
    asset: Asset
    amount: DecimalAmount
    memo: str = ""

    def __post_init__(self):
        if self.amount.minor_units <= 0:
            raise ValidationError(f"Transfer amount must be positive, received {self.amount}")
        if self.amount.rescale(self.asset.decimals).is_zero():
            raise ValidationError(f"Transfer amount {self.amount} is below the precision of {self.asset.symbol}")

    @property
    def minor_units(self) -> int:
        """Amount in the asset's smallest unit, truncated to its precision"""
        return self.amount.rescale(self.asset.decimals).minor_units


@dataclass(frozen=True)
class SignedTransaction:
    tx_id: str
    transfer: TransferRequest
    raw: dict = field(default_factory=dict)


class LedgerClient(ABC):

    @abstractmethod
    def sign(self, private_key: PrivateKey, transfer: TransferRequest) -> SignedTransaction:
        ...

    @abstractmethod
    def broadcast(self, signed: SignedTransaction) -> str:
        """Submit the transaction and return its id"""
        ...

    def transfer(self, private_key: PrivateKey, transfer: TransferRequest) -> str:
        return self.broadcast(self.sign(private_key, transfer))
