"""
The TronService class - the operation facade behind the HTTP endpoints.

Every public method answers an ApiResult. Validation and upstream failures become code=0 results; no TronKitError
escapes. handle() maps an endpoint name plus raw query/form parameters onto the matching method.
"""
from functools import wraps
from typing import Callable, Mapping, Optional

from tronkit.balance import TRX, Asset, BalanceSourceAggregator
from tronkit.core import LedgerError, TronConfig, TronKitError, ValidationError, get_logger, \
    set_log_level
from tronkit.cryptography import PrivateKey
from tronkit.data import DecimalAmount
from tronkit.service.ledger import LedgerClient, TransferRequest
from tronkit.service.params import ParamReader
from tronkit.service.results import AddressResult, ApiResult, StatusResult, TransactionResult, Trc10InfoResult
from tronkit.wallet import Address, BatchAddressGenerator, Mnemonic, Wallet

__all__ = ["TronService"]

logger = get_logger(__name__)

API_GROUPS = {
    "address": {
        "createAddress": "Generate a TRON address",
        "generateAddressWithMnemonic": "Generate a mnemonic and its first address",
        "getAddressByKey": "Address for a private key",
        "mnemonicToAddress": "Mnemonic to address",
        "mnemonicToAddressBatch": "Batch of addresses from a mnemonic",
        "privateKeyToAddress": "Private key to address",
    },
    "balance": {
        "getTrxBalance": "TRX balance",
        "getTrc20Balance": "TRC20 token balance",
        "getTrc10Balance": "TRC10 token balance",
        "getTrc10Info": "TRX and TRC10 holdings of an account",
    },
    "transfer": {
        "sendTrx": "TRX transfer",
        "sendTrc20": "TRC20 token transfer",
        "sendTrc10": "TRC10 token transfer",
    },
    "tools": {
        "status": "Service status",
        "getApiList": "Endpoint list",
    },
}


def api_call(func: Callable[..., ApiResult]) -> Callable[..., ApiResult]:
    """
    Turns any TronKitError raised by `func` into a failure ApiResult
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> ApiResult:
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            return ApiResult.failure(str(e))
        except TronKitError as e:
            logger.warning(f"{func.__name__} failed: {type(e).__name__}: {e}")
            return ApiResult.failure(str(e))

    return wrapper


def _require(value: Optional[str], name: str) -> str:
    if value is None or value == "":
        raise ValidationError(f"Missing parameter: {name}")
    return value


def _parse_decimals(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"decimals must be an integer, received {value!r}")


class TronService:

    def __init__(self, config: TronConfig, aggregator: BalanceSourceAggregator,
                 batch_generator: BatchAddressGenerator, ledger: Optional[LedgerClient] = None):
        self.config = config
        self.aggregator = aggregator
        self.batch_generator = batch_generator
        self.ledger = ledger

        self._endpoints = {
            "status": lambda p: self.status(),
            "getApiList": lambda p: self.get_api_list(),
            "createAddress": lambda p: self.create_address(),
            "generateAddressWithMnemonic": lambda p: self.generate_address_with_mnemonic(
                p.get_int("words", default=12)),
            "getAddressByKey": lambda p: self.get_address_by_key(p.get("key", "privateKey")),
            "privateKeyToAddress": lambda p: self.private_key_to_address(p.get("privateKey", "key")),
            "mnemonicToAddress": lambda p: self.mnemonic_to_address(p.get("mnemonic"),
                                                                    p.get("passphrase", default="")),
            "mnemonicToAddressBatch": lambda p: self.mnemonic_to_address_batch(
                p.get("mnemonic"), p.get_int("offset", default=0), p.get_int("num", default=1),
                p.get("passphrase", default="")),
            "getTrxBalance": lambda p: self.get_trx_balance(p.get("address")),
            "getTrc20Balance": lambda p: self.get_trc20_balance(p.get("address"), p.get("contract"),
                                                                p.get("decimals")),
            "getTrc10Balance": lambda p: self.get_trc10_balance(p.get("address"), p.get("tokenId"),
                                                                p.get("decimals")),
            "getTrc10Info": lambda p: self.get_trc10_info(p.get("address"), p.get("tokenId"), p.get("decimals")),
            "sendTrx": lambda p: self.send_trx(p.get("to"), p.get("amount"), p.get("key"),
                                               p.get("message", default="")),
            "sendTrc20": lambda p: self.send_trc20(p.get("to"), p.get("amount"), p.get("key"), p.get("contract")),
            "sendTrc10": lambda p: self.send_trc10(p.get("to"), p.get("amount"), p.get("key"), p.get("tokenId")),
        }

    @classmethod
    def from_config(cls, config: TronConfig, ledger: Optional[LedgerClient] = None) -> "TronService":
        set_log_level(config.log_level)
        return cls(
            config=config,
            aggregator=BalanceSourceAggregator.from_config(config),
            batch_generator=BatchAddressGenerator(max_count=config.batch_limit, max_workers=config.batch_workers),
            ledger=ledger,
        )

    @property
    def endpoints(self) -> list[str]:
        return list(self._endpoints)

    def handle(self, name: str, query: Optional[Mapping] = None, form: Optional[Mapping] = None) -> ApiResult:
        route = self._endpoints.get(name)
        if route is None:
            return ApiResult.failure(f"Unknown endpoint: {name}")
        result = route(ParamReader(query, form))
        logger.debug(f"{name} -> code={result.code}")
        return result

    # --- TOOLS --- #
    def status(self) -> ApiResult:
        return ApiResult.success(StatusResult(), "TRON API service is running")

    def get_api_list(self) -> ApiResult:
        return ApiResult.success({group: dict(entries) for group, entries in API_GROUPS.items()},
                                 "Endpoint list")

    # --- ADDRESSES --- #
    @api_call
    def create_address(self) -> ApiResult:
        return ApiResult.success(AddressResult.from_key(PrivateKey.generate()), "Address created")

    @api_call
    def generate_address_with_mnemonic(self, words: int = 12) -> ApiResult:
        mnemonic = Mnemonic.generate(words)
        _, private_key = Wallet(mnemonic).address_at(0)
        return ApiResult.success(AddressResult.from_key(private_key, mnemonic), "Address created")

    @api_call
    def get_address_by_key(self, key: Optional[str]) -> ApiResult:
        private_key = PrivateKey.parse(_require(key, "key"))
        return ApiResult.success(AddressResult.from_key(private_key), "Address derived")

    @api_call
    def private_key_to_address(self, private_key: Optional[str]) -> ApiResult:
        key = PrivateKey.parse(_require(private_key, "privateKey"))
        return ApiResult.success(AddressResult.from_key(key), "Address derived")

    @api_call
    def mnemonic_to_address(self, mnemonic: Optional[str], passphrase: str = "") -> ApiResult:
        phrase = Mnemonic(_require(mnemonic, "mnemonic"))
        _, private_key = Wallet(phrase, passphrase).address_at(0)
        return ApiResult.success(AddressResult.from_key(private_key, phrase), "Address derived")

    @api_call
    def mnemonic_to_address_batch(self, mnemonic: Optional[str], offset: int = 0, num: int = 1,
                                  passphrase: str = "") -> ApiResult:
        phrase = Mnemonic(_require(mnemonic, "mnemonic"))
        batch = self.batch_generator.generate(phrase, offset=offset, count=num, passphrase=passphrase)
        return ApiResult.success(batch, f"Derived {len(batch)} addresses")

    # --- BALANCES --- #
    def _trc20_asset(self, contract: Optional[str], decimals: Optional[str]) -> Asset:
        contract = contract or self.config.contract_address
        scale = _parse_decimals(decimals)
        if contract.lower() == self.config.contract_address.lower():
            return Asset.trc20(contract, self.config.contract_symbol,
                               self.config.decimals if scale is None else scale)
        return Asset.trc20(contract, decimals=self.config.decimals if scale is None else scale)

    def _trc10_asset(self, token_id: Optional[str], decimals: Optional[str]) -> Asset:
        scale = _parse_decimals(decimals)
        return Asset.trc10(token_id or self.config.trc10_token_id,
                           decimals=self.config.trc10_decimals if scale is None else scale)

    @api_call
    def get_trx_balance(self, address: Optional[str]) -> ApiResult:
        result = self.aggregator.fetch(_require(address, "address"), TRX)
        return ApiResult.success(result, "Balance fetched")

    @api_call
    def get_trc20_balance(self, address: Optional[str], contract: Optional[str] = None,
                          decimals: Optional[str] = None) -> ApiResult:
        asset = self._trc20_asset(contract, decimals)
        result = self.aggregator.fetch(_require(address, "address"), asset)
        return ApiResult.success(result, "Balance fetched")

    @api_call
    def get_trc10_balance(self, address: Optional[str], token_id: Optional[str] = None,
                          decimals: Optional[str] = None) -> ApiResult:
        asset = self._trc10_asset(token_id, decimals)
        result = self.aggregator.fetch(_require(address, "address"), asset)
        return ApiResult.success(result, "Balance fetched")

    @api_call
    def get_trc10_info(self, address: Optional[str], token_id: Optional[str] = None,
                       decimals: Optional[str] = None) -> ApiResult:
        asset = self._trc10_asset(token_id, decimals)
        trx, token = self.aggregator.fetch_many(_require(address, "address"), [TRX, asset])
        return ApiResult.success(Trc10InfoResult(trx, token), "TRC10 info fetched")

    # --- TRANSFERS --- #
    def _send(self, to: Optional[str], amount: Optional[str], key: Optional[str], asset: Asset,
              memo: str = "") -> ApiResult:
        if self.ledger is None:
            raise LedgerError("Transfers are not available: no ledger client configured")

        private_key = PrivateKey.parse(_require(key, "key"))
        transfer = TransferRequest(
            owner=Address.from_private_key(private_key),
            to=Address.parse(_require(to, "to")),
            asset=asset,
            amount=DecimalAmount.from_text(_require(amount, "amount")),
            memo=memo or "",
        )
        tx_id = self.ledger.transfer(private_key, transfer)
        logger.info(f"Broadcast {transfer.amount} {asset.symbol} from {transfer.owner} to {transfer.to}: {tx_id}")
        return ApiResult.success(TransactionResult(True, tx_id), "Transfer broadcast")

    @api_call
    def send_trx(self, to: Optional[str], amount: Optional[str], key: Optional[str], message: str = "") -> ApiResult:
        return self._send(to, amount, key, TRX, message)

    @api_call
    def send_trc20(self, to: Optional[str], amount: Optional[str], key: Optional[str],
                   contract: Optional[str] = None) -> ApiResult:
        return self._send(to, amount, key, self._trc20_asset(contract, None))

    @api_call
    def send_trc10(self, to: Optional[str], amount: Optional[str], key: Optional[str],
                   token_id: Optional[str] = None) -> ApiResult:
        return self._send(to, amount, key, self._trc10_asset(token_id, None))
