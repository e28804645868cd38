from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from crypto_gateway.api import create_app
from crypto_gateway.errors import BackendError, NotFoundError
from crypto_gateway.schemas import Coins, FilterPoint, FilterPoints, Pair, Quotation, SecurityTokenDetails, SecurityTokenSymbol
from crypto_gateway.services.dispatcher import QueryDispatcher
from crypto_gateway.services.supply import SupplyValidator
from crypto_gateway.stores.base import Datastore

FIXED_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeDatastore(Datastore):
    """In-memory primary store that records every call it receives."""

    def __init__(self):
        self.quotations = {}
        self.supplies = {}
        self.symbol_details = {}
        self.pairs = []
        self.coins = Coins()
        self.symbols = []
        self.series = {}
        self.calls = []
        self.fail = False

    def _check(self, operation):
        self.calls.append(operation)
        if self.fail:
            raise BackendError("Primary store unavailable")

    def _lookup(self, table, symbol, what):
        if symbol not in table:
            raise NotFoundError(f"{what} for {symbol} not found")
        return table[symbol]

    def get_quotation(self, symbol):
        self._check(("get_quotation", symbol))
        return self._lookup(self.quotations, symbol, "Quotation")

    def get_supply(self, symbol):
        self._check(("get_supply", symbol))
        return self._lookup(self.supplies, symbol, "Supply")

    def set_supply(self, supply):
        self._check(("set_supply", supply.symbol))
        self.supplies[supply.symbol] = supply

    def get_pairs(self):
        self._check(("get_pairs",))
        return list(self.pairs)

    def get_symbol_details(self, symbol):
        self._check(("get_symbol_details", symbol))
        return self._lookup(self.symbol_details, symbol, "Symbol")

    def get_coins(self):
        self._check(("get_coins",))
        return self.coins

    def get_all_symbols(self):
        self._check(("get_all_symbols",))
        return list(self.symbols)

    def get_filter_points(self, filter, exchange, symbol, scale):
        self._check(("get_filter_points", filter, exchange, symbol, scale))
        resolved = scale.value if scale else "5m"
        return FilterPoints(
            filter=filter,
            exchange=exchange or "",
            symbol=symbol,
            scale=resolved,
            data_points=self.series.get((filter, exchange, symbol, resolved), []),
        )

    def ping(self):
        return not self.fail


class FakeTokenStore:
    def __init__(self):
        self.tokens = {}
        self.fail = False

    def get_token_details(self, token_symbol):
        if self.fail:
            raise BackendError("Reference store unavailable")
        return self.tokens.get(token_symbol)

    def get_all_token_symbols(self):
        if self.fail:
            raise BackendError("Reference store unavailable")
        return [SecurityTokenSymbol(token_name=t.token_name, token_symbol=t.token_symbol) for t in self.tokens.values()]

    def ping(self):
        return not self.fail


@pytest.fixture
def datastore():
    store = FakeDatastore()
    store.quotations["BTC"] = Quotation(symbol="BTC", name="Bitcoin", price=42000.5, source="diadata.org", time=FIXED_TIME)
    store.pairs = [Pair(symbol="BTC", foreign_name="BTCUSDT", exchange="Binance")]
    store.symbols = ["BTC", "ETH"]
    store.series[("VWAP", "Binance", "ETH", "1h")] = [FilterPoint(time=FIXED_TIME, value=2300.0)]
    store.series[("VWAP", None, "ETH", "5m")] = [FilterPoint(time=FIXED_TIME, value=2301.5)]
    return store


@pytest.fixture
def token_store():
    store = FakeTokenStore()
    store.tokens["STO1"] = SecurityTokenDetails(token_name="Security One", token_symbol="STO1", industry="Real Estate")
    return store


@pytest.fixture
def validator():
    return SupplyValidator(default_source="diadata.org", clock=lambda: FIXED_TIME)


@pytest.fixture
def dispatcher(datastore, token_store, validator):
    return QueryDispatcher(datastore=datastore, token_store=token_store, supply_validator=validator)


@pytest.fixture
def client(dispatcher):
    return TestClient(create_app(dispatcher=dispatcher))
