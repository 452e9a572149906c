"""
Upstream balance providers.

BalanceProvider is the abstract collaborator the aggregator consumes; TronGridProvider and TronScanProvider are HTTP
clients to the two public TRON indexing services. Both parse JSON with parse_float=Decimal so no float ever reaches
balance arithmetic, and both raise UpstreamUnavailable (or UpstreamTimeout) for every transport or format failure.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

import requests

from tronkit.balance.assets import TokenBalance, TokenType
from tronkit.balance.normalizer import parse_minor_units
from tronkit.core import BALANCE, AmountFormatError, UpstreamTimeout, UpstreamUnavailable, get_logger

__all__ = ["BalanceProvider", "TronGridProvider", "TronScanProvider"]

logger = get_logger(__name__)

API_KEY_HEADER = "TRON-PRO-API-KEY"


class BalanceProvider(ABC):
    """
    Abstract upstream source of account balances
    """
    provider_id: str = "provider"

    @abstractmethod
    def get_native_balance(self, address: str, timeout: float) -> Optional[int]:
        """TRX balance in sun, or None when the account has no record"""
        ...

    @abstractmethod
    def get_token_balances(self, address: str, timeout: float) -> list[TokenBalance]:
        """Every token entry the provider reports for the account"""
        ...

    def __repr__(self):
        return f"{type(self).__name__}({self.provider_id})"


class HttpBalanceProvider(BalanceProvider):
    """
    Shared requests plumbing. A Session may be injected; it is only used for independent GETs.
    """

    def __init__(self, base_url: str, api_key: Optional[str] = None, session: Optional[requests.Session] = None,
                 provider_id: Optional[str] = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        if provider_id:
            self.provider_id = provider_id

    def _get_json(self, path: str, timeout: float, params: Optional[dict] = None) -> dict:
        url = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key

        try:
            response = self.session.get(url, params=params, headers=headers, timeout=timeout)
            response.raise_for_status()
            body = response.json(parse_float=Decimal)
        except requests.Timeout as e:
            raise UpstreamTimeout(f"{self.provider_id} timed out after {timeout:.2f}s", self.provider_id) from e
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"{self.provider_id} request failed: {e}", self.provider_id) from e
        except ValueError as e:
            raise UpstreamUnavailable(f"{self.provider_id} returned unparsable JSON", self.provider_id) from e

        if not isinstance(body, dict):
            raise UpstreamUnavailable(f"{self.provider_id} returned unexpected payload", self.provider_id)
        logger.debug(f"{self.provider_id} GET {path} -> {response.status_code}")
        return body

    def _minor_units(self, value) -> int:
        try:
            return parse_minor_units(value)
        except AmountFormatError as e:
            raise UpstreamUnavailable(f"{self.provider_id} returned a malformed balance: {e}", self.provider_id) from e

    def _decimals(self, value) -> Optional[int]:
        """Provider-reported scale, an integer in [0, MAX_DECIMALS]"""
        if value is None:
            return None
        text = str(value).strip()
        if isinstance(value, bool) or not (text.isdigit() and text.isascii()) or int(text) > BALANCE.MAX_DECIMALS:
            raise UpstreamUnavailable(f"{self.provider_id} returned malformed decimals: {value!r}", self.provider_id)
        return int(text)

    def _malformed(self, error: Exception) -> UpstreamUnavailable:
        return UpstreamUnavailable(f"{self.provider_id} token list has unexpected shape: {error}", self.provider_id)


class TronGridProvider(HttpBalanceProvider):
    """
    GET /v1/accounts/{address}

        {"success": true, "data": [{"balance": 1000000,
                                    "trc20": [{"TR7NHq...": "2500000"}],
                                    "assetV2": [{"key": "1002000", "value": 5}]}]}
    """
    provider_id = "trongrid"

    def _account(self, address: str, timeout: float) -> Optional[dict]:
        body = self._get_json(f"/v1/accounts/{address}", timeout)
        data = body.get("data")
        if body.get("success") is False or not data:
            return None
        if not isinstance(data, list) or not isinstance(data[0], dict):
            raise UpstreamUnavailable(f"{self.provider_id} account data has unexpected shape", self.provider_id)
        return data[0]

    def get_native_balance(self, address: str, timeout: float) -> Optional[int]:
        account = self._account(address, timeout)
        if account is None or account.get("balance") is None:
            return None
        return self._minor_units(account["balance"])

    def get_token_balances(self, address: str, timeout: float) -> list[TokenBalance]:
        account = self._account(address, timeout)
        if account is None:
            return []

        entries = []
        try:
            for holding in account.get("trc20") or []:
                # Each item is a single-key map {contract: balance}
                for contract, balance in holding.items():
                    entries.append(TokenBalance(str(contract), TokenType.TRC20, self._minor_units(balance)))
            for asset in account.get("assetV2") or []:
                entries.append(TokenBalance(str(asset.get("key", "")), TokenType.TRC10,
                                            self._minor_units(asset.get("value"))))
        except (AttributeError, TypeError, ValueError) as e:
            raise self._malformed(e) from e
        return entries


class TronScanProvider(HttpBalanceProvider):
    """
    GET /api/accountv2?address=...

        {"balance": 1000000,
         "withPriceTokens": [{"tokenId": "_", "tokenType": "trc10", "tokenDecimal": 6, "balance": "1000000"},
                             {"tokenId": "TR7NHq...", "tokenType": "trc20", "tokenDecimal": 6, "balance": "2500000"}]}
    """
    provider_id = "tronscan"

    def get_native_balance(self, address: str, timeout: float) -> Optional[int]:
        body = self._get_json("/api/accountv2", timeout, params={"address": address})
        if body.get("balance") is not None:
            return self._minor_units(body["balance"])
        # TronScan lists TRX itself as tokenId "_"
        try:
            for token in body.get("withPriceTokens") or []:
                if token.get("tokenId") == "_":
                    return self._minor_units(token.get("balance"))
        except (AttributeError, TypeError) as e:
            raise self._malformed(e) from e
        return None

    def get_token_balances(self, address: str, timeout: float) -> list[TokenBalance]:
        body = self._get_json("/api/accountv2", timeout, params={"address": address})
        entries = []
        try:
            for token in body.get("withPriceTokens") or []:
                entries.append(TokenBalance(
                    token_id=str(token.get("tokenId", "")),
                    token_type=TokenType.from_tag(token.get("tokenType", "")),
                    balance=self._minor_units(token.get("balance")),
                    decimals=self._decimals(token.get("tokenDecimal")),
                    symbol=str(token.get("tokenAbbr") or ""),
                ))
        except (AttributeError, TypeError, ValueError) as e:
            raise self._malformed(e) from e
        return entries
