"""Typed request parameters, parsed once at the transport boundary.

Identifiers are kept exactly as supplied: no case folding, trimming or alias
resolution happens here.
"""
from __future__ import annotations

from dataclasses import dataclass

from crypto_gateway.errors import InvalidRequestError
from crypto_gateway.utils.scales import Scale, resolve_scale


def require(value: str | None, name: str) -> str:
    if not value:
        raise InvalidRequestError(f"Missing {name}")
    return value


def optional(value: str | None) -> str | None:
    # Empty string is the "absent" sentinel for optional dimensions.
    return value or None


@dataclass(frozen=True)
class SymbolLookup:
    symbol: str

    @classmethod
    def parse(cls, symbol: str | None) -> "SymbolLookup":
        return cls(symbol=require(symbol, "symbol"))


@dataclass(frozen=True)
class ChartPointsQuery:
    """Chart series request; ``exchange`` None means all exchanges."""

    filter: str
    exchange: str | None
    symbol: str
    scale: Scale | None

    @classmethod
    def parse(
        cls,
        filter: str | None,
        exchange: str | None,
        symbol: str | None,
        scale: str | None,
    ) -> "ChartPointsQuery":
        return cls(
            filter=require(filter, "filter"),
            exchange=optional(exchange),
            symbol=require(symbol, "symbol"),
            scale=resolve_scale(scale),
        )


@dataclass(frozen=True)
class TokenLookup:
    token_symbol: str

    @classmethod
    def parse(cls, token_symbol: str | None) -> "TokenLookup":
        return cls(token_symbol=require(token_symbol, "token symbol"))
