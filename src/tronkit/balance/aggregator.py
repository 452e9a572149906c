"""
The BalanceSourceAggregator class - ordered provider failover for balance lookups.

Providers are configured per balance kind (native TRX or tokens). Each provider is retried max_retries times with an
exponential backoff before the next one is tried. A response without a matching entry is a zero balance, never an
error. Only when every provider has failed does the caller see AllSourcesUnavailable.
"""
import time
from typing import Callable, Optional

import requests

from tronkit.balance.assets import Asset, BalanceResult, TokenBalance
from tronkit.balance.normalizer import normalize
from tronkit.balance.providers import BalanceProvider, TronGridProvider, TronScanProvider
from tronkit.core import AllSourcesUnavailable, DeadlineExceeded, TronConfig, UpstreamUnavailable, ValidationError, \
    get_logger
from tronkit.wallet import Address

__all__ = ["BalanceSourceAggregator"]

logger = get_logger(__name__)


class BalanceSourceAggregator:

    def __init__(self, native_providers: list[BalanceProvider], token_providers: list[BalanceProvider],
                 request_timeout: float = 10.0, max_retries: int = 1, retry_backoff: float = 0.5,
                 sleep: Callable[[float], None] = time.sleep, clock: Callable[[], float] = time.monotonic):
        if not native_providers or not token_providers:
            raise ValidationError("At least one native and one token provider must be configured")
        if request_timeout <= 0:
            raise ValidationError("request_timeout must be positive")
        if max_retries < 0 or retry_backoff < 0:
            raise ValidationError("max_retries and retry_backoff cannot be negative")

        self.native_providers = tuple(native_providers)
        self.token_providers = tuple(token_providers)
        self.request_timeout = request_timeout
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(cls, config: TronConfig, session: Optional[requests.Session] = None) -> "BalanceSourceAggregator":
        """
        TronGrid first, TronScan second, for both kinds. A shared session pools connections per host.
        """
        session = session or requests.Session()
        grid = TronGridProvider(config.tron_api_url, config.api_key, session)
        scan = TronScanProvider(config.tronscan_api_url, config.api_key, session)
        return cls(
            native_providers=[grid, scan],
            token_providers=[grid, scan],
            request_timeout=config.request_timeout,
            max_retries=config.max_retries,
            retry_backoff=config.retry_backoff,
        )

    def fetch(self, address: str, asset: Asset, deadline: Optional[float] = None) -> BalanceResult:
        """
        Balance of `asset` held by `address`. `deadline` is an absolute time.monotonic() value.
        """
        # Base58Check is verified before any network call
        tron_address = Address.parse(address).base58

        providers = self.native_providers if asset.is_native else self.token_providers
        errors = []
        for provider in providers:
            for attempt in range(self.max_retries + 1):
                timeout = self._call_timeout(deadline, errors)
                try:
                    result = self._query(provider, tron_address, asset, timeout)
                    if attempt or errors:
                        logger.info(f"{asset.symbol} balance for {tron_address} served by {provider.provider_id}")
                    return result
                except UpstreamUnavailable as e:
                    errors.append(e)
                    logger.warning(f"{provider.provider_id} attempt {attempt + 1} failed for {tron_address}: {e}")

                if attempt < self.max_retries:
                    self._backoff(attempt, deadline, errors)

        raise AllSourcesUnavailable(
            f"All {len(providers)} providers failed for {asset.symbol} balance of {tron_address}", errors
        )

    def fetch_many(self, address: str, assets: list[Asset], deadline: Optional[float] = None) -> list[BalanceResult]:
        return [self.fetch(address, asset, deadline) for asset in assets]

    def _query(self, provider: BalanceProvider, address: str, asset: Asset, timeout: float) -> BalanceResult:
        if asset.is_native:
            minor_units = provider.get_native_balance(address, timeout)
            amount = normalize(minor_units, asset)
        else:
            entry = _find_entry(provider.get_token_balances(address, timeout), asset)
            if entry is None:
                amount = normalize(0, asset)
            else:
                amount = normalize(entry.balance, asset, entry.decimals)
        return BalanceResult(asset=asset, amount=amount, source=provider.provider_id, address=address)

    def _remaining(self, deadline: Optional[float]) -> Optional[float]:
        if deadline is None:
            return None
        return deadline - self._clock()

    def _call_timeout(self, deadline: Optional[float], errors: list) -> float:
        remaining = self._remaining(deadline)
        if remaining is None:
            return self.request_timeout
        if remaining <= 0:
            raise DeadlineExceeded("Deadline expired before a provider answered", errors)
        return min(self.request_timeout, remaining)

    def _backoff(self, attempt: int, deadline: Optional[float], errors: list):
        delay = self.retry_backoff * 2 ** attempt
        remaining = self._remaining(deadline)
        if remaining is not None:
            if remaining <= delay:
                raise DeadlineExceeded("Deadline expires before the next retry", errors)
        if delay > 0:
            self._sleep(delay)


def _find_entry(entries: list[TokenBalance], asset: Asset) -> Optional[TokenBalance]:
    for entry in entries:
        if asset.matches(entry):
            return entry
    return None
