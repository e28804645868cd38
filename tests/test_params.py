import pytest

from crypto_gateway.errors import InvalidRequestError
from crypto_gateway.utils.params import ChartPointsQuery, SymbolLookup, TokenLookup
from crypto_gateway.utils.scales import SUPPORTED_SCALES, Scale, resolve_scale


def test_symbol_passes_through_unchanged():
    assert SymbolLookup.parse("btc").symbol == "btc"
    assert SymbolLookup.parse(" ETH").symbol == " ETH"


def test_empty_symbol_rejected():
    with pytest.raises(InvalidRequestError):
        SymbolLookup.parse("")


def test_empty_token_symbol_rejected():
    with pytest.raises(InvalidRequestError):
        TokenLookup.parse("")


def test_chart_query_empty_exchange_is_absent():
    query = ChartPointsQuery.parse("VWAP", "", "ETH", "")
    assert query.exchange is None
    assert query.scale is None


def test_chart_query_keeps_exchange():
    query = ChartPointsQuery.parse("VWAP", "Binance", "ETH", "1h")
    assert query.exchange == "Binance"
    assert query.scale is Scale.H1
    assert query != ChartPointsQuery.parse("VWAP", "", "ETH", "1h")


def test_chart_query_requires_filter_and_symbol():
    with pytest.raises(InvalidRequestError):
        ChartPointsQuery.parse("", "Binance", "ETH", "1h")
    with pytest.raises(InvalidRequestError):
        ChartPointsQuery.parse("VWAP", "Binance", "", "1h")


def test_every_supported_scale_resolves():
    assert SUPPORTED_SCALES == ("5m", "30m", "1h", "4h", "1d", "1w")
    for raw in SUPPORTED_SCALES:
        assert resolve_scale(raw).value == raw


def test_missing_scale_defers_to_store():
    assert resolve_scale("") is None
    assert resolve_scale(None) is None


@pytest.mark.parametrize("raw", ["1m", "2h", "1H", "1d ", "week"])
def test_unknown_scale_rejected(raw):
    with pytest.raises(InvalidRequestError):
        resolve_scale(raw)
