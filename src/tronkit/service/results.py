"""
The ApiResult envelope and the payloads it carries.

Every service operation answers {code, msg, data, time}: code=1 on success, code=0 on a caller-facing failure.
"""
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from tronkit.balance import BalanceResult
from tronkit.cryptography import PrivateKey
from tronkit.wallet import Address, Mnemonic

__all__ = ["ApiResult", "AddressResult", "TransactionResult", "Trc10InfoResult", "StatusResult", "SERVICE_VERSION"]

SERVICE_VERSION = "3.0-Python"


def _serialize(data: Any):
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if hasattr(data, "to_list"):
        return data.to_list()
    if isinstance(data, (list, tuple)):
        return [_serialize(item) for item in data]
    return data


@dataclass(frozen=True)
class ApiResult:
    code: int
    msg: str
    data: Any = None
    time: int = field(default_factory=lambda: int(time.time()))

    @classmethod
    def success(cls, data: Any = None, msg: str = "ok") -> "ApiResult":
        return cls(code=1, msg=msg, data=data)

    @classmethod
    def failure(cls, msg: str) -> "ApiResult":
        return cls(code=0, msg=msg, data=None)

    @property
    def ok(self) -> bool:
        return self.code == 1

    def to_dict(self) -> dict:
        return {"code": self.code, "msg": self.msg, "data": _serialize(self.data), "time": self.time}


@dataclass(frozen=True)
class AddressResult:
    private_key: str
    address: str
    hex_address: str
    mnemonic: Optional[str] = None

    @classmethod
    def from_key(cls, private_key: PrivateKey, mnemonic: Optional[Mnemonic] = None) -> "AddressResult":
        address = Address.from_private_key(private_key)
        return cls(
            private_key=private_key.hex(),
            address=address.base58,
            hex_address=address.hex,
            mnemonic=str(mnemonic) if mnemonic is not None else None,
        )

    def __repr__(self):
        return f"AddressResult(address={self.address})"

    def to_dict(self) -> dict:
        payload = {"privateKey": self.private_key, "address": self.address, "hexAddress": self.hex_address}
        if self.mnemonic is not None:
            payload["mnemonic"] = self.mnemonic
        return payload


@dataclass(frozen=True)
class TransactionResult:
    result: bool
    tx_id: str

    def to_dict(self) -> dict:
        # Both spellings are published for existing clients
        return {"result": self.result, "txID": self.tx_id, "txid": self.tx_id}


@dataclass(frozen=True)
class StatusResult:
    version: str = SERVICE_VERSION
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "language": "Python",
            "timestamp": int(self.timestamp.timestamp()),
            "date": self.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        }


@dataclass(frozen=True)
class Trc10InfoResult:
    """
    TRX and TRC10 holdings of one account, fetched together
    """
    trx: BalanceResult
    token: BalanceResult

    def to_dict(self) -> dict:
        asset = self.token.asset
        return {
            "address": self.trx.address,
            "trxBalance": self.trx.balance,
            "tokenBalance": self.token.balance,
            "tokenInfo": {"id": asset.token_id, "symbol": asset.symbol, "decimals": self.token.amount.decimals},
            "source": {"trx": self.trx.source, "token": self.token.source},
        }
