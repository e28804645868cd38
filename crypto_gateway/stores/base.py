from __future__ import annotations

from abc import ABC, abstractmethod

from crypto_gateway.schemas import Coins, FilterPoints, Pair, Quotation, Supply, SymbolDetails
from crypto_gateway.utils.scales import Scale


class Datastore(ABC):
    """Primary key-value / time-series store.

    Lookups raise ``NotFoundError`` when the key is absent and
    ``BackendError`` for any other failure.
    """

    @abstractmethod
    def get_quotation(self, symbol: str) -> Quotation:
        raise NotImplementedError

    @abstractmethod
    def get_supply(self, symbol: str) -> Supply:
        raise NotImplementedError

    @abstractmethod
    def set_supply(self, supply: Supply) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_pairs(self) -> list[Pair]:
        raise NotImplementedError

    @abstractmethod
    def get_symbol_details(self, symbol: str) -> SymbolDetails:
        raise NotImplementedError

    @abstractmethod
    def get_coins(self) -> Coins:
        raise NotImplementedError

    @abstractmethod
    def get_all_symbols(self) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def get_filter_points(
        self, filter: str, exchange: str | None, symbol: str, scale: Scale | None
    ) -> FilterPoints:
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> bool:
        raise NotImplementedError
