"""
Fixtures used in the tests
"""
import json

import pytest
import requests

from tronkit.balance import BalanceProvider
from tronkit.core import TronConfig, UpstreamUnavailable
from tronkit.cryptography import SECP256K1


# --- Upstream doubles --- #

class FakeProvider(BalanceProvider):
    """
    In-memory provider. The first `failures` calls raise `error`; down=True fails every call.
    """

    def __init__(self, provider_id: str, native=None, tokens=None, failures: int = 0, down: bool = False,
                 error=UpstreamUnavailable):
        self.provider_id = provider_id
        self.native = native
        self.tokens = tokens or []
        self.failures = failures
        self.down = down
        self.error = error
        self.calls = 0
        self.timeouts = []

    def _attempt(self, timeout: float):
        self.calls += 1
        self.timeouts.append(timeout)
        if self.down or self.calls <= self.failures:
            raise self.error(f"{self.provider_id} unavailable", self.provider_id)

    def get_native_balance(self, address: str, timeout: float):
        self._attempt(timeout)
        return self.native

    def get_token_balances(self, address: str, timeout: float):
        self._attempt(timeout)
        return list(self.tokens)


class FakeResponse:

    def __init__(self, body: str, status_code: int = 200):
        self.body = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self, **kwargs):
        return json.loads(self.body, **kwargs)


class FakeSession:
    """
    Records every GET. Answers with `response`, or raises `error` if one is given.
    """

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


class SleepRecorder:

    def __init__(self):
        self.delays = []

    def __call__(self, delay: float):
        self.delays.append(delay)


# --- Fixtures --- #

@pytest.fixture()
def curve():
    return SECP256K1


@pytest.fixture()
def config():
    return TronConfig()


@pytest.fixture()
def fake_provider():
    return FakeProvider


@pytest.fixture()
def fake_session():
    def _session(body: str = "{}", status_code: int = 200, error: Exception | None = None):
        return FakeSession(FakeResponse(body, status_code), error)

    return _session


@pytest.fixture()
def sleeper():
    return SleepRecorder()
