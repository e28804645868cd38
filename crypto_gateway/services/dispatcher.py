"""
Query dispatch.
Routes each typed request to exactly one backing store.
"""
import logging
from typing import Optional

from crypto_gateway.errors import BackendError
from crypto_gateway.schemas import (
    Coins,
    FilterPoints,
    Pairs,
    Quotation,
    Supply,
    SupplyRequest,
    SymbolDetails,
    Symbols,
    TokenListResult,
    TokenResult,
)
from crypto_gateway.services.supply import SupplyValidator
from crypto_gateway.stores.base import Datastore
from crypto_gateway.stores.token_store import SecurityTokenStore
from crypto_gateway.utils.params import ChartPointsQuery, SymbolLookup, TokenLookup


class QueryDispatcher:
    """
    Single entry point for every gateway operation.

    Market data goes to the primary ``Datastore``; security token reference
    data goes to the ``SecurityTokenStore``. Failures surface as
    ``GatewayError`` subclasses and are never retried here.
    """

    def __init__(
        self,
        datastore: Datastore,
        token_store: SecurityTokenStore,
        supply_validator: SupplyValidator,
        degrade_token_errors: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.datastore = datastore
        self.token_store = token_store
        self.supply_validator = supply_validator
        self.degrade_token_errors = degrade_token_errors
        self.logger = logger or logging.getLogger(__name__)

    def submit_supply(self, request: SupplyRequest) -> Supply:
        """Validate a submission and persist the resulting record."""
        supply = self.supply_validator.validate(request)
        self.datastore.set_supply(supply)
        return supply

    def get_quotation(self, lookup: SymbolLookup) -> Quotation:
        return self.datastore.get_quotation(lookup.symbol)

    def get_supply(self, lookup: SymbolLookup) -> Supply:
        return self.datastore.get_supply(lookup.symbol)

    def get_pairs(self) -> Pairs:
        return Pairs(pairs=self.datastore.get_pairs())

    def get_symbol_details(self, lookup: SymbolLookup) -> SymbolDetails:
        return self.datastore.get_symbol_details(lookup.symbol)

    def get_coins(self) -> Coins:
        return self.datastore.get_coins()

    def get_all_symbols(self) -> Symbols:
        """Return every known symbol; an empty catalogue is an internal error."""
        symbols = self.datastore.get_all_symbols()
        if len(symbols) == 0:
            self.logger.error("Primary store returned no symbols")
            raise BackendError("cant find symbols")
        return Symbols(symbols=symbols)

    def get_filter_points(self, query: ChartPointsQuery) -> FilterPoints:
        return self.datastore.get_filter_points(query.filter, query.exchange, query.symbol, query.scale)

    def get_token_details(self, lookup: TokenLookup) -> TokenResult:
        try:
            details = self.token_store.get_token_details(lookup.token_symbol)
        except BackendError:
            if not self.degrade_token_errors:
                raise
            self.logger.warning(f"Serving empty token details for {lookup.token_symbol} after store failure")
            details = None

        if details is None:
            return TokenResult(result=None, count=0)
        return TokenResult(result=details, count=1)

    def get_all_token_symbols(self) -> TokenListResult:
        try:
            tokens = self.token_store.get_all_token_symbols()
        except BackendError:
            if not self.degrade_token_errors:
                raise
            self.logger.warning("Serving empty token list after store failure")
            tokens = []
        return TokenListResult(result=tokens, count=len(tokens))
