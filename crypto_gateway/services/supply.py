"""
Supply ingestion.
Validates circulating supply submissions and builds the record to persist.
"""
import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional

from crypto_gateway.errors import InvalidRequestError
from crypto_gateway.schemas import Supply, SupplyRequest
from crypto_gateway.utils.names import NameResolver, StaticNameResolver


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SupplyValidator:
    """Turns an inbound submission into a complete ``Supply`` record.

    Time and display name are always assigned here; the source falls back to
    the platform identifier when the caller leaves it empty.
    """

    def __init__(
        self,
        default_source: str,
        name_resolver: Optional[NameResolver] = None,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        self.default_source = default_source
        self.name_resolver = name_resolver or StaticNameResolver()
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, request: SupplyRequest) -> Supply:
        payload = request.model_dump()
        supply_value = request.circulating_supply
        if not request.symbol or supply_value == 0.0 or not math.isfinite(supply_value):
            self.logger.error(f"Rejected supply submission: {payload}", extra={"payload": payload})
            raise InvalidRequestError("Missing Symbol or CirculatingSupply value")

        self.logger.info(f"Received supply submission: {payload}", extra={"payload": payload})
        return Supply(
            time=self.clock(),
            name=self.name_resolver.name_for_symbol(request.symbol),
            symbol=request.symbol,
            source=request.source or self.default_source,
            circulating_supply=request.circulating_supply,
        )
