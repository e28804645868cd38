from __future__ import annotations

from typing import Mapping, Protocol

_KNOWN_NAMES = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "XRP": "XRP",
    "LTC": "Litecoin",
    "BCH": "Bitcoin Cash",
    "EOS": "EOS",
    "XLM": "Stellar",
    "ADA": "Cardano",
    "TRX": "TRON",
    "USDT": "Tether",
    "BNB": "Binance Coin",
    "XMR": "Monero",
    "DASH": "Dash",
    "ETC": "Ethereum Classic",
    "NEO": "NEO",
    "ZEC": "Zcash",
    "DOGE": "Dogecoin",
}


class NameResolver(Protocol):
    def name_for_symbol(self, symbol: str) -> str:
        ...


class StaticNameResolver:
    """Resolves display names from a fixed symbol table.

    Unknown symbols resolve to the symbol itself.
    """

    def __init__(self, names: Mapping[str, str] | None = None):
        self._names = dict(_KNOWN_NAMES if names is None else names)

    def name_for_symbol(self, symbol: str) -> str:
        return self._names.get(symbol, symbol)
