"""Redis-backed primary store.

One client with a bounded connection pool is shared by all requests; every
call carries the pool's socket timeout as its deadline.
"""
from __future__ import annotations

import logging
from typing import Optional, Type, TypeVar

import redis
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from crypto_gateway.config import Settings
from crypto_gateway.errors import BackendError, NotFoundError
from crypto_gateway.schemas import Coins, FilterPoint, FilterPoints, Pair, Quotation, Supply, SymbolDetails
from crypto_gateway.stores.base import Datastore
from crypto_gateway.utils.scales import Scale

M = TypeVar("M", bound=BaseModel)

_pairs_adapter = TypeAdapter(list[Pair])

KEY_PAIRS = "dia_pairs"
KEY_COINS = "dia_coins"
KEY_SYMBOLS = "dia_symbols"


def key_quotation(symbol: str) -> str:
    return f"dia_quotation_USD_{symbol}"


def key_supply(symbol: str) -> str:
    return f"dia_supply_{symbol}"


def key_symbol_details(symbol: str) -> str:
    return f"dia_symbol_details_{symbol}"


def key_filter_points(filter: str, exchange: str | None, symbol: str, scale: Scale) -> str:
    # All-exchange series live under an empty exchange segment.
    return f"dia_filter_{filter}_{exchange or ''}_{symbol}_{scale.value}"


class RedisDatastore(Datastore):
    def __init__(
        self,
        client: redis.Redis,
        default_scale: Scale = Scale.M5,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._redis = client
        self._default_scale = default_scale
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(cls, settings: Settings, logger: Optional[logging.Logger] = None) -> "RedisDatastore":
        pool = redis.ConnectionPool(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password,
            max_connections=settings.redis_max_connections,
            socket_timeout=settings.redis_socket_timeout_seconds,
            socket_connect_timeout=settings.redis_connect_timeout_seconds,
            decode_responses=True,
        )
        return cls(
            redis.Redis(connection_pool=pool),
            default_scale=Scale(settings.store_default_scale),
            logger=logger,
        )

    def close(self) -> None:
        self._redis.close()
        self._redis.connection_pool.disconnect()

    def _backend_error(self, operation: str, exc: Exception) -> BackendError:
        self._logger.error(f"Primary store {operation} failed: {exc}", extra={"operation": operation})
        return BackendError("Primary store unavailable")

    def _get_raw(self, operation: str, key: str) -> Optional[str]:
        try:
            return self._redis.get(key)
        except redis.RedisError as exc:
            raise self._backend_error(operation, exc) from exc

    def _decode(self, operation: str, model: Type[M], data: str) -> M:
        try:
            return model.model_validate_json(data)
        except PydanticValidationError as exc:
            raise self._backend_error(operation, exc) from exc

    def _get_record(self, operation: str, key: str, model: Type[M], what: str) -> M:
        data = self._get_raw(operation, key)
        if data is None:
            raise NotFoundError(f"{what} not found")
        return self._decode(operation, model, data)

    def get_quotation(self, symbol: str) -> Quotation:
        return self._get_record("get_quotation", key_quotation(symbol), Quotation, f"Quotation for {symbol}")

    def get_supply(self, symbol: str) -> Supply:
        return self._get_record("get_supply", key_supply(symbol), Supply, f"Supply for {symbol}")

    def get_symbol_details(self, symbol: str) -> SymbolDetails:
        return self._get_record(
            "get_symbol_details", key_symbol_details(symbol), SymbolDetails, f"Symbol {symbol}"
        )

    def set_supply(self, supply: Supply) -> None:
        payload = supply.model_dump_json(by_alias=True)
        try:
            pipe = self._redis.pipeline()
            pipe.set(key_supply(supply.symbol), payload)
            pipe.sadd(KEY_SYMBOLS, supply.symbol)
            pipe.execute()
        except redis.RedisError as exc:
            raise self._backend_error("set_supply", exc) from exc

    def get_pairs(self) -> list[Pair]:
        data = self._get_raw("get_pairs", KEY_PAIRS)
        if data is None:
            return []
        try:
            return _pairs_adapter.validate_json(data)
        except PydanticValidationError as exc:
            raise self._backend_error("get_pairs", exc) from exc

    def get_coins(self) -> Coins:
        data = self._get_raw("get_coins", KEY_COINS)
        if data is None:
            return Coins()
        return self._decode("get_coins", Coins, data)

    def get_all_symbols(self) -> list[str]:
        try:
            members = self._redis.smembers(KEY_SYMBOLS)
        except redis.RedisError as exc:
            raise self._backend_error("get_all_symbols", exc) from exc
        return sorted(members)

    def get_filter_points(
        self, filter: str, exchange: str | None, symbol: str, scale: Scale | None
    ) -> FilterPoints:
        scale = scale or self._default_scale
        key = key_filter_points(filter, exchange, symbol, scale)
        try:
            members = self._redis.zrange(key, 0, -1)
        except redis.RedisError as exc:
            raise self._backend_error("get_filter_points", exc) from exc
        points = [self._decode("get_filter_points", FilterPoint, member) for member in members]
        return FilterPoints(
            filter=filter,
            exchange=exchange or "",
            symbol=symbol,
            scale=scale.value,
            data_points=points,
        )

    def ping(self) -> bool:
        try:
            return bool(self._redis.ping())
        except redis.RedisError as exc:
            self._logger.warning(f"Primary store ping failed: {exc}")
            return False
