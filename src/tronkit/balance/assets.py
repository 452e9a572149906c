"""
Asset, TokenBalance, BalanceQuery and BalanceResult - the typed shapes flowing through balance lookups
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from tronkit.core import BALANCE, TRON, ValidationError
from tronkit.data import DecimalAmount

__all__ = ["TokenType", "Asset", "TRX", "TokenBalance", "BalanceQuery", "BalanceResult"]


class TokenType(Enum):
    TRX = "trx"
    TRC10 = "trc10"
    TRC20 = "trc20"

    @property
    def is_native(self) -> bool:
        return self is TokenType.TRX

    @classmethod
    def from_tag(cls, tag: str) -> Optional["TokenType"]:
        """Provider-reported tag, case-insensitive. Unknown tags map to None"""
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Asset:
    token_id: str
    symbol: str
    decimals: int
    token_type: TokenType

    def __post_init__(self):
        if not self.token_id:
            raise ValidationError("Asset token id cannot be empty")
        if isinstance(self.decimals, bool) or not 0 <= self.decimals <= BALANCE.MAX_DECIMALS:
            raise ValidationError(f"Asset decimals must lie in [0, {BALANCE.MAX_DECIMALS}], received {self.decimals}")

    @classmethod
    def trc20(cls, contract: str, symbol: str = "", decimals: int = 6) -> "Asset":
        return cls(contract, symbol or contract, decimals, TokenType.TRC20)

    @classmethod
    def trc10(cls, token_id: str, symbol: str = "", decimals: int = 0) -> "Asset":
        return cls(str(token_id), symbol or str(token_id), decimals, TokenType.TRC10)

    @property
    def is_native(self) -> bool:
        return self.token_type.is_native

    def matches(self, entry: "TokenBalance") -> bool:
        """
        Case-insensitive token id AND identical token type. A TRC10 entry never satisfies a TRC20 query.
        """
        return (entry.token_type is self.token_type
                and entry.token_id.strip().lower() == self.token_id.strip().lower())


TRX = Asset(TRON.TRX_TOKEN_ID, "TRX", TRON.TRX_DECIMALS, TokenType.TRX)


@dataclass(frozen=True)
class TokenBalance:
    """
    One entry of a provider's token list, already parsed at the provider boundary
    """
    token_id: str
    token_type: Optional[TokenType]
    balance: int
    decimals: Optional[int] = None
    symbol: str = ""


@dataclass(frozen=True)
class BalanceQuery:
    address: str
    asset: Asset


@dataclass(frozen=True)
class BalanceResult:
    asset: Asset
    amount: DecimalAmount
    source: str
    address: str = ""
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def balance(self) -> str:
        return self.amount.to_text()

    def to_dict(self) -> dict:
        return {
            "balance": self.amount.to_text(),
            "address": self.address,
            "symbol": self.asset.symbol,
            "tokenId": self.asset.token_id,
            "tokenType": self.asset.token_type.value,
            "decimals": self.amount.decimals,
            "source": self.source,
            "fetchedAt": int(self.fetched_at.timestamp()),
        }
