"""
Pydantic schemas for the gateway's records and responses.

Records keep the field names already used on the wire and in the primary
store (``Symbol``, ``CirculatingSupply``...). Python code addresses them by
their snake_case attribute names.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field


class StoreRecord(BaseModel):
    """Immutable record read from or written to a backing store."""

    class Config:
        frozen = True
        populate_by_name = True
        extra = "allow"


class Supply(StoreRecord):
    """Circulating supply of a coin as persisted by the gateway."""

    time: datetime = Field(alias="Time")
    name: str = Field(alias="Name")
    symbol: str = Field(alias="Symbol")
    source: str = Field(alias="Source")
    circulating_supply: float = Field(alias="CirculatingSupply")

    class Config:
        json_schema_extra = {
            "example": {
                "Time": "2024-01-01T00:00:00Z",
                "Name": "Bitcoin",
                "Symbol": "BTC",
                "Source": "diadata.org",
                "CirculatingSupply": 19000000.0,
            }
        }


class SupplyRequest(BaseModel):
    """Inbound supply submission. Missing fields fall through to validation."""

    symbol: str = Field("", validation_alias=AliasChoices("Symbol", "symbol"))
    circulating_supply: float = Field(
        0.0,
        validation_alias=AliasChoices("CirculatingSupply", "circulating_supply", "circulating-supply"),
    )
    source: str = Field("", validation_alias=AliasChoices("Source", "source"))

    class Config:
        frozen = True
        extra = "ignore"
        json_schema_extra = {"example": {"Symbol": "BTC", "CirculatingSupply": 19000000.0}}


class Quotation(StoreRecord):
    """Latest USD quotation for a symbol."""

    symbol: str = Field(alias="Symbol")
    name: str = Field("", alias="Name")
    price: float = Field(alias="Price")
    price_yesterday: Optional[float] = Field(None, alias="PriceYesterday")
    volume_yesterday_usd: Optional[float] = Field(None, alias="VolumeYesterdayUSD")
    source: str = Field("", alias="Source")
    time: datetime = Field(alias="Time")
    itin: Optional[str] = Field(None, alias="ITIN")


class Pair(StoreRecord):
    symbol: str = Field(alias="Symbol")
    foreign_name: str = Field("", alias="ForeignName")
    exchange: str = Field(alias="Exchange")
    ignore: bool = Field(False, alias="Ignore")


class Pairs(StoreRecord):
    pairs: List[Pair] = Field(default_factory=list, alias="Pairs")


class CurrencyChange(StoreRecord):
    symbol: str = Field(alias="Symbol")
    rate: float = Field(alias="Rate")
    rate_yesterday: float = Field(alias="RateYesterday")


class Change(StoreRecord):
    usd: List[CurrencyChange] = Field(default_factory=list, alias="USD")


class Coin(StoreRecord):
    symbol: str = Field(alias="Symbol")
    name: str = Field("", alias="Name")
    price: float = Field(alias="Price")
    price_yesterday: Optional[float] = Field(None, alias="PriceYesterday")
    volume_yesterday_usd: Optional[float] = Field(None, alias="VolumeYesterdayUSD")
    time: datetime = Field(alias="Time")
    circulating_supply: Optional[float] = Field(None, alias="CirculatingSupply")


class CoinSymbolAndName(StoreRecord):
    symbol: str = Field(alias="Symbol")
    name: str = Field("", alias="Name")


class Coins(StoreRecord):
    complete_coin_list: List[CoinSymbolAndName] = Field(default_factory=list, alias="CompleteCoinList")
    change: Optional[Change] = Field(None, alias="Change")
    coins: List[Coin] = Field(default_factory=list, alias="Coins")


class FilterPoint(StoreRecord):
    """One time-bucketed filter value."""

    time: datetime = Field(alias="Time")
    value: float = Field(alias="Value")


class FilterPoints(StoreRecord):
    """Chart series for a filter and symbol, optionally scoped to one exchange.

    ``exchange`` is empty for the series aggregated across all exchanges.
    """

    filter: str = Field(alias="Filter")
    exchange: str = Field("", alias="Exchange")
    symbol: str = Field(alias="Symbol")
    scale: str = Field(alias="Scale")
    data_points: List[FilterPoint] = Field(default_factory=list, alias="DataPoints")


class SymbolExchangeDetails(StoreRecord):
    name: str = Field(alias="Name")
    price: float = Field(alias="Price")
    price_yesterday: Optional[float] = Field(None, alias="PriceYesterday")
    volume_yesterday_usd: Optional[float] = Field(None, alias="VolumeYesterdayUSD")
    time: Optional[datetime] = Field(None, alias="Time")


class SymbolDetails(StoreRecord):
    change: Optional[Change] = Field(None, alias="Change")
    coin: Coin = Field(alias="Coin")
    rank: int = Field(0, alias="Rank")
    exchanges: List[SymbolExchangeDetails] = Field(default_factory=list, alias="Exchanges")
    gfx1: Optional[FilterPoints] = Field(None, alias="Gfx1")


class Symbols(StoreRecord):
    symbols: List[str] = Field(default_factory=list, alias="Symbols")


class SecurityTokenDetails(StoreRecord):
    """Descriptive reference record of a security token."""

    token_name: Optional[str] = Field(None, alias="Token_Name")
    token_status: Optional[str] = Field(None, alias="Token_Status")
    token_symbol: Optional[str] = Field(None, alias="Token_Symbol")
    industry: Optional[str] = Field(None, alias="Industry")
    amount_raised: Optional[str] = Field(None, alias="Amount_Raised")
    currency: Optional[str] = Field(None, alias="Currency")
    issuance_price: Optional[str] = Field(None, alias="Issuance_Price")
    min_invest: Optional[str] = Field(None, alias="Min_Invest")
    closing_date: Optional[str] = Field(None, alias="Closing_Date")
    target_investor_type: Optional[str] = Field(None, alias="Target_Investor_Type")
    jurisdictions_avail: Optional[str] = Field(None, alias="Jurisdictions_Avail")
    restricted_area: Optional[str] = Field(None, alias="Restricted_Area")
    secondary_market: Optional[str] = Field(None, alias="Secondary_Market")
    website: Optional[str] = Field(None, alias="Website")
    whitepaper: Optional[str] = Field(None, alias="Whitepaper")
    prospectus: Optional[str] = Field(None, alias="Prospectus")
    smart_contract: Optional[str] = Field(None, alias="Smart_Contract")
    github: Optional[str] = Field(None, alias="Github")
    blockchain: Optional[str] = Field(None, alias="Blockchain")
    issuer_address: Optional[str] = Field(None, alias="Issuer_Address")
    token_used: Optional[str] = Field(None, alias="Token_Used")
    dividend: Optional[str] = Field(None, alias="Dividend")
    voting: Optional[str] = Field(None, alias="Voting")
    equity_ownership: Optional[str] = Field(None, alias="Equity_Ownership")
    mme_class: Optional[str] = Field(None, alias="MME_Class")
    interest: Optional[str] = Field(None, alias="Interest")
    portfolio: Optional[str] = Field(None, alias="Portfolio")


class SecurityTokenSymbol(StoreRecord):
    token_name: Optional[str] = Field(None, alias="Token_Name")
    token_symbol: Optional[str] = Field(None, alias="Token_Symbol")


class TokenResult(BaseModel):
    """Single security token lookup; ``result`` is null when nothing matched."""

    result: Optional[SecurityTokenDetails] = None
    count: int


class TokenListResult(BaseModel):
    result: List[SecurityTokenSymbol]
    count: int


class ErrorResponse(BaseModel):
    """Standardized error payload for every failed request."""

    code: int
    message: str

    class Config:
        json_schema_extra = {"example": {"code": 404, "message": "BTC not found"}}


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    service: str
    primary_store: str
    reference_store: str
    timestamp: datetime


class ApiLatencyMetrics(BaseModel):
    request_count: int
    average: float
    max: float
    last: float


class MetricsResponse(BaseModel):
    """Response model for runtime service metrics."""

    service: str
    process_started_at: datetime
    uptime_seconds: float
    last_supply_write: Optional[datetime]
    api_latency_ms: ApiLatencyMetrics
    timestamp: datetime
