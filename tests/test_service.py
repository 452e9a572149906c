"""
Tests for TronService, ParamReader and the ApiResult envelope
"""
import pytest

from tronkit.balance import BalanceSourceAggregator, TokenBalance, TokenType, TronScanProvider
from tronkit.core import LedgerError, TronConfig
from tronkit.cryptography import PrivateKey
from tronkit.service import ApiResult, LedgerClient, ParamReader, SignedTransaction, TronService
from tronkit.wallet import BatchAddressGenerator, Wallet

KEY_ONE = "0" * 63 + "1"
KEY_TWO = "0" * 63 + "2"
HEX_ONE = "417e5f4552091a69125d5dfcb7b8c2659029395bdf"
HEX_TWO = "412b5ad5c4795c026514f8317c7a215e218dccd6cf"
USDT = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
OTHER_TOKEN = "TXLAQ63Xg1NAzckPwKHvzw7CSEmLMEqcdj"
ABANDON_PHRASE = " ".join(["abandon"] * 11 + ["about"])


class RecordingLedger(LedgerClient):

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.transfers = []

    def sign(self, private_key, transfer):
        self.transfers.append(transfer)
        return SignedTransaction(tx_id=f"tx{len(self.transfers)}", transfer=transfer)

    def broadcast(self, signed):
        if self.fail:
            raise LedgerError("node rejected transaction")
        return signed.tx_id


@pytest.fixture()
def providers(fake_provider):
    tokens = [
        TokenBalance(USDT, TokenType.TRC20, 2_500_000),
        TokenBalance(OTHER_TOKEN, TokenType.TRC20, 12_345),
        TokenBalance("1002992", TokenType.TRC10, 12),
    ]
    return fake_provider("primary", native=1_500_000, tokens=tokens), fake_provider("secondary", native=0)


@pytest.fixture()
def service(providers):
    primary, secondary = providers
    aggregator = BalanceSourceAggregator([primary, secondary], [primary, secondary], sleep=lambda delay: None)
    return TronService(TronConfig(), aggregator, BatchAddressGenerator(max_count=5))


# --- Envelope and parameters --- #

def test_envelope_shape():
    result = ApiResult.success({"a": 1}, "done")
    envelope = result.to_dict()
    assert set(envelope) == {"code", "msg", "data", "time"}
    assert envelope["code"] == 1 and result.ok
    assert isinstance(envelope["time"], int)

    failure = ApiResult.failure("nope")
    assert failure.to_dict()["code"] == 0
    assert failure.data is None


def test_param_lookup_order():
    """
    query[primary], query[alias], form[primary], form[alias]; empty strings are absent
    """
    reader = ParamReader(query={"privateKey": "q-alias"}, form={"key": "f-primary"})
    assert reader.get("key", "privateKey") == "q-alias"

    reader = ParamReader(query={"key": "", "privateKey": ""}, form={"privateKey": "f-alias", "key": "f-primary"})
    assert reader.get("key", "privateKey") == "f-primary"

    reader = ParamReader()
    assert reader.get("key", default="fallback") == "fallback"
    assert reader.get("Key") is None


def test_param_ints():
    reader = ParamReader(query={"offset": "7", "num": "abc"})
    assert reader.get_int("offset", default=0) == 7
    assert reader.get_int("num", default=1) == 1
    assert reader.get_int("missing", default=3) == 3


# --- Tools --- #

def test_status_and_api_list(service):
    status = service.handle("status").to_dict()
    assert status["code"] == 1
    assert {"version", "timestamp", "date"} <= set(status["data"])

    api_list = service.handle("getApiList").to_dict()["data"]
    listed = {name for group in api_list.values() for name in group}
    assert listed == set(service.endpoints)


def test_unknown_endpoint(service):
    result = service.handle("getBlockHeight")
    assert result.code == 0
    assert "getBlockHeight" in result.msg


# --- Addresses --- #

def test_create_address(service):
    data = service.handle("createAddress").to_dict()["data"]
    assert data["address"].startswith("T")
    assert PrivateKey.parse(data["privateKey"])
    assert "mnemonic" not in data


def test_address_by_key_aliases(service):
    by_key = service.handle("getAddressByKey", query={"key": KEY_ONE}).to_dict()
    assert by_key["data"]["hexAddress"] == HEX_ONE

    by_alias = service.handle("getAddressByKey", form={"privateKey": KEY_TWO}).to_dict()
    assert by_alias["data"]["hexAddress"] == HEX_TWO

    # Any query name wins over the form, even the primary name
    mixed = service.handle("privateKeyToAddress", query={"key": KEY_ONE}, form={"privateKey": KEY_TWO}).to_dict()
    assert mixed["data"]["hexAddress"] == HEX_ONE, "Query alias must be consulted before the form"


@pytest.mark.parametrize("query", [{}, {"key": "xyz"}, {"key": "0" * 64}])
def test_address_by_key_invalid(service, query):
    result = service.handle("getAddressByKey", query=query)
    assert result.code == 0
    assert result.msg


def test_generate_address_with_mnemonic(service):
    data = service.handle("generateAddressWithMnemonic", query={"words": "24"}).to_dict()["data"]
    assert len(data["mnemonic"].split()) == 24
    address, _ = Wallet(data["mnemonic"]).address_at(0)
    assert data["address"] == address.base58

    assert service.handle("generateAddressWithMnemonic", query={"words": "15"}).code == 0


def test_mnemonic_to_address(service):
    data = service.handle("mnemonicToAddress", form={"mnemonic": ABANDON_PHRASE}).to_dict()["data"]
    address, private_key = Wallet(ABANDON_PHRASE).address_at(0)
    assert data["address"] == address.base58
    assert data["privateKey"] == private_key.hex()

    with_passphrase = service.handle("mnemonicToAddress",
                                     query={"mnemonic": ABANDON_PHRASE, "passphrase": "TREZOR"}).to_dict()["data"]
    assert with_passphrase["address"] != data["address"]


def test_mnemonic_invalid(service):
    result = service.handle("mnemonicToAddress", query={"mnemonic": " ".join(["abandon"] * 12)})
    assert result.code == 0


def test_mnemonic_batch(service):
    envelope = service.handle("mnemonicToAddressBatch",
                              query={"mnemonic": ABANDON_PHRASE, "offset": "2", "num": "3"}).to_dict()
    assert envelope["code"] == 1
    assert [row["offset"] for row in envelope["data"]] == [2, 3, 4]


def test_mnemonic_batch_defaults_and_clamp(service):
    default = service.handle("mnemonicToAddressBatch", query={"mnemonic": ABANDON_PHRASE, "num": "x"}).to_dict()
    assert [row["offset"] for row in default["data"]] == [0]

    clamped = service.handle("mnemonicToAddressBatch", query={"mnemonic": ABANDON_PHRASE, "num": "50"}).to_dict()
    assert len(clamped["data"]) == 5

    negative = service.handle("mnemonicToAddressBatch", query={"mnemonic": ABANDON_PHRASE, "offset": "-1"})
    assert negative.code == 0


# --- Balances --- #

def test_trx_balance(service):
    data = service.handle("getTrxBalance", query={"address": USDT}).to_dict()["data"]
    assert data["balance"] == "1.500000"
    assert data["symbol"] == "TRX"
    assert data["source"] == "primary"


def test_trc20_balance(service):
    data = service.handle("getTrc20Balance", query={"address": USDT}).to_dict()["data"]
    assert data["balance"] == "2.500000"
    assert data["symbol"] == "USDT"
    assert data["tokenType"] == "trc20"

    other = service.handle("getTrc20Balance",
                           query={"address": USDT, "contract": OTHER_TOKEN, "decimals": "2"}).to_dict()["data"]
    assert other["balance"] == "123.45"


def test_trc10_balance(service):
    data = service.handle("getTrc10Balance", query={"address": USDT}).to_dict()["data"]
    assert data["balance"] == "12"
    assert data["tokenId"] == "1002992"

    missing = service.handle("getTrc10Balance", query={"address": USDT, "tokenId": "1000001"}).to_dict()["data"]
    assert missing["balance"] == "0"


def test_trc10_info(service):
    envelope = service.handle("getTrc10Info", form={"address": USDT}).to_dict()
    assert envelope["code"] == 1
    data = envelope["data"]
    assert data["trxBalance"] == "1.500000"
    assert data["tokenBalance"] == "12"
    assert data["tokenInfo"] == {"id": "1002992", "symbol": "1002992", "decimals": 0}
    assert data["source"] == {"trx": "primary", "token": "primary"}

    scaled = service.handle("getTrc10Info", query={"address": USDT, "tokenId": "1002992",
                                                   "decimals": "1"}).to_dict()["data"]
    assert scaled["tokenBalance"] == "1.2"

    assert service.handle("getTrc10Info", query={"tokenId": "1002992"}).code == 0


def test_malformed_upstream_stays_inside_envelope(fake_session):
    """
    A TronScan token list with an empty tokenDecimal is an upstream fault and answers code=0
    """
    token = '{"tokenId": "%s", "tokenType": "trc20", "tokenDecimal": "", "balance": "1"}' % USDT
    scan = TronScanProvider("https://apilist.tronscanapi.com",
                            session=fake_session('{"withPriceTokens": [%s]}' % token))
    aggregator = BalanceSourceAggregator([scan], [scan], sleep=lambda delay: None)
    service = TronService(TronConfig(), aggregator, BatchAddressGenerator())

    result = service.handle("getTrc20Balance", query={"address": USDT})
    assert result.code == 0
    assert "providers failed" in result.msg


@pytest.mark.parametrize("query", [{}, {"address": "Tnotanaddress"}, {"address": USDT, "decimals": "six"}])
def test_balance_invalid_input(service, providers, query):
    result = service.handle("getTrc20Balance", query=query)
    assert result.code == 0
    assert providers[0].calls == 0


def test_balance_all_sources_down(fake_provider):
    down = [fake_provider("primary", down=True), fake_provider("secondary", down=True)]
    aggregator = BalanceSourceAggregator(down, down, sleep=lambda delay: None)
    service = TronService(TronConfig(), aggregator, BatchAddressGenerator())
    result = service.handle("getTrxBalance", query={"address": USDT})
    assert result.code == 0


# --- Transfers --- #

def test_send_without_ledger(service):
    result = service.handle("sendTrx", query={"to": USDT, "amount": "1", "key": KEY_ONE})
    assert result.code == 0


def test_send_trx(service):
    ledger = RecordingLedger()
    service.ledger = ledger
    envelope = service.handle("sendTrx", query={"to": USDT, "amount": "1.5", "key": KEY_ONE,
                                                "message": "memo"}).to_dict()

    assert envelope["code"] == 1
    assert envelope["data"] == {"result": True, "txID": "tx1", "txid": "tx1"}
    transfer = ledger.transfers[0]
    assert transfer.minor_units == 1_500_000
    assert transfer.owner.hex == HEX_ONE
    assert transfer.memo == "memo"


def test_send_tokens(service):
    ledger = RecordingLedger()
    service.ledger = ledger
    assert service.handle("sendTrc20", query={"to": USDT, "amount": "2", "key": KEY_ONE}).code == 1
    assert service.handle("sendTrc10", form={"to": USDT, "amount": "3", "key": KEY_TWO}).code == 1
    assert ledger.transfers[0].asset.token_id == USDT
    assert ledger.transfers[0].minor_units == 2_000_000
    assert ledger.transfers[1].asset.token_id == "1002992"
    assert ledger.transfers[1].minor_units == 3


@pytest.mark.parametrize("amount", ["0", "-1", "abc", "0.0000001"])
def test_send_invalid_amounts(service, amount):
    ledger = RecordingLedger()
    service.ledger = ledger
    result = service.handle("sendTrx", query={"to": USDT, "amount": amount, "key": KEY_ONE})
    assert result.code == 0
    assert ledger.transfers == []


def test_send_ledger_failure(service):
    service.ledger = RecordingLedger(fail=True)
    result = service.handle("sendTrx", query={"to": USDT, "amount": "1", "key": KEY_ONE})
    assert result.code == 0
    assert "rejected" in result.msg
