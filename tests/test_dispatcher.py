import pytest

from crypto_gateway.errors import BackendError, InvalidRequestError, NotFoundError
from crypto_gateway.schemas import SupplyRequest
from crypto_gateway.services.dispatcher import QueryDispatcher
from crypto_gateway.utils.params import ChartPointsQuery, SymbolLookup, TokenLookup
from crypto_gateway.utils.scales import Scale


def test_submit_supply_writes_record(dispatcher, datastore):
    supply = dispatcher.submit_supply(SupplyRequest(Symbol="BTC", CirculatingSupply=19000000))
    assert datastore.supplies["BTC"] == supply
    assert supply.source == "diadata.org"


def test_rejected_supply_never_written(dispatcher, datastore):
    with pytest.raises(InvalidRequestError):
        dispatcher.submit_supply(SupplyRequest(Symbol="", CirculatingSupply=100))
    assert datastore.supplies == {}
    assert not any(call[0] == "set_supply" for call in datastore.calls)


def test_absent_symbol_is_not_found(dispatcher):
    for lookup in (dispatcher.get_quotation, dispatcher.get_supply, dispatcher.get_symbol_details):
        with pytest.raises(NotFoundError):
            lookup(SymbolLookup.parse("XYZ"))


def test_backend_failure_is_backend_error(dispatcher, datastore):
    datastore.fail = True
    with pytest.raises(BackendError):
        dispatcher.get_quotation(SymbolLookup.parse("BTC"))


def test_empty_pairs_is_success(dispatcher, datastore):
    datastore.pairs = []
    assert dispatcher.get_pairs().pairs == []


def test_all_symbols_empty_is_internal_error(dispatcher, datastore):
    datastore.symbols = []
    with pytest.raises(BackendError, match="cant find symbols"):
        dispatcher.get_all_symbols()


@pytest.mark.parametrize("symbols", [["BTC"], ["BTC", "ETH", "XRP"], [f"S{i}" for i in range(500)]])
def test_all_symbols_non_empty_is_success(dispatcher, datastore, symbols):
    datastore.symbols = symbols
    assert dispatcher.get_all_symbols().symbols == symbols


def test_exchange_and_all_exchange_queries_are_distinct(dispatcher, datastore):
    dispatcher.get_filter_points(ChartPointsQuery.parse("VWAP", "Binance", "ETH", "1h"))
    dispatcher.get_filter_points(ChartPointsQuery.parse("VWAP", "", "ETH", "1h"))
    assert datastore.calls == [
        ("get_filter_points", "VWAP", "Binance", "ETH", Scale.H1),
        ("get_filter_points", "VWAP", None, "ETH", Scale.H1),
    ]


def test_token_details_found_and_missing(dispatcher):
    found = dispatcher.get_token_details(TokenLookup.parse("STO1"))
    assert found.count == 1
    assert found.result.token_name == "Security One"

    missing = dispatcher.get_token_details(TokenLookup.parse("NOPE"))
    assert missing.count == 0
    assert missing.result is None


def test_token_errors_propagate_by_default(dispatcher, token_store):
    token_store.fail = True
    with pytest.raises(BackendError):
        dispatcher.get_token_details(TokenLookup.parse("STO1"))
    with pytest.raises(BackendError):
        dispatcher.get_all_token_symbols()


def test_token_errors_degrade_when_enabled(datastore, token_store, validator):
    token_store.fail = True
    dispatcher = QueryDispatcher(datastore, token_store, validator, degrade_token_errors=True)
    details = dispatcher.get_token_details(TokenLookup.parse("STO1"))
    assert (details.result, details.count) == (None, 0)
    tokens = dispatcher.get_all_token_symbols()
    assert (tokens.result, tokens.count) == ([], 0)


def test_all_token_symbols_counts(dispatcher):
    tokens = dispatcher.get_all_token_symbols()
    assert tokens.count == 1
    assert tokens.result[0].token_symbol == "STO1"
