"""
FastAPI REST API endpoints.
Exposes market data, supply ingestion, and security token reference data.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from crypto_gateway.config import settings
from crypto_gateway.errors import GatewayError
from crypto_gateway.observability import RuntimeObservability
from crypto_gateway.responses import error_response, validation_error_response
from crypto_gateway.schemas import (
    Coins,
    ErrorResponse,
    FilterPoints,
    HealthResponse,
    MetricsResponse,
    Pairs,
    Quotation,
    Supply,
    SupplyRequest,
    SymbolDetails,
    Symbols,
    TokenListResult,
    TokenResult,
)
from crypto_gateway.services.dispatcher import QueryDispatcher
from crypto_gateway.services.supply import SupplyValidator
from crypto_gateway.stores.redis_store import RedisDatastore
from crypto_gateway.stores.token_store import SecurityTokenStore
from crypto_gateway.utils.params import ChartPointsQuery, SymbolLookup, TokenLookup
from crypto_gateway.utils.scales import SUPPORTED_SCALES

logger = logging.getLogger(__name__)

SERVICE_NAME = "crypto-market-gateway"
SCALE_DESCRIPTION = f"Time bucket width, one of {' '.join(SUPPORTED_SCALES)}"

ERROR_RESPONSES = {
    404: {
        "model": ErrorResponse,
        "description": "Symbol not found",
        "content": {"application/json": {"example": {"code": 404, "message": "Quotation for XYZ not found"}}},
    },
    500: {
        "model": ErrorResponse,
        "description": "Validation or backend error",
        "content": {"application/json": {"example": {"code": 500, "message": "Primary store unavailable"}}},
    },
}
LIST_ERROR_RESPONSES = {500: ERROR_RESPONSES[500]}

router = APIRouter()


def build_dispatcher() -> QueryDispatcher:
    """Wire the default dispatcher from process settings."""
    return QueryDispatcher(
        datastore=RedisDatastore.from_settings(settings, logger=logging.getLogger("crypto_gateway.stores.redis")),
        token_store=SecurityTokenStore(logger=logging.getLogger("crypto_gateway.stores.tokens")),
        supply_validator=SupplyValidator(
            default_source=settings.platform_source,
            logger=logging.getLogger("crypto_gateway.supply"),
        ),
        degrade_token_errors=settings.token_errors_degrade,
        logger=logging.getLogger("crypto_gateway.dispatcher"),
    )


def get_dispatcher(request: Request) -> QueryDispatcher:
    return request.app.state.dispatcher


def get_observability(request: Request) -> RuntimeObservability:
    return request.app.state.observability


def create_app(dispatcher: Optional[QueryDispatcher] = None) -> FastAPI:
    app = FastAPI(
        title="Crypto Market Data Gateway",
        description=(
            "Quotations, circulating supply, pairs, coins, chart points and "
            "security token reference data.\n\n"
            "Errors use the standardized shape `{code, message}`."
        ),
        version="1.0.0",
    )
    app.state.dispatcher = dispatcher or build_dispatcher()
    app.state.observability = RuntimeObservability()

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(_: Request, exc: GatewayError):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(_: Request, exc: RequestValidationError):
        logger.error(f"Rejected request: {exc.errors()}")
        return validation_error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException):
        details = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        payload = ErrorResponse(code=exc.status_code, message=details)
        return JSONResponse(status_code=exc.status_code, content=payload.model_dump())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.error(f"Unhandled API exception: {exc}", exc_info=True)
        return error_response(exc)

    @app.middleware("http")
    async def measure_request_latency(request: Request, call_next):
        """Capture basic request latency metrics for all API calls."""
        started = time.perf_counter()
        try:
            return await call_next(request)
        finally:
            app.state.observability.record_request((time.perf_counter() - started) * 1000)

    app.include_router(router)
    return app


@router.post("/v1/supply", response_model=Supply, responses=LIST_ERROR_RESPONSES, summary="Post the circulating supply", tags=["supply"])
def post_supply(
    body: SupplyRequest,
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
    observability: RuntimeObservability = Depends(get_observability),
):
    """Validate and persist a circulating supply submission; time, name and default source are assigned here."""
    supply = dispatcher.submit_supply(body)
    observability.mark_supply_write(supply.time)
    return supply


@router.get("/v1/quotation/{symbol}", response_model=Quotation, responses=ERROR_RESPONSES, summary="Get quotation", tags=["market"])
def get_quotation(symbol: str, dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    return dispatcher.get_quotation(SymbolLookup.parse(symbol))


@router.get("/v1/supply/{symbol}", response_model=Supply, responses=ERROR_RESPONSES, summary="Get supply", tags=["supply"])
def get_supply(symbol: str, dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    return dispatcher.get_supply(SymbolLookup.parse(symbol))


@router.get("/v1/pairs/", response_model=Pairs, responses=LIST_ERROR_RESPONSES, summary="Get pairs", tags=["market"])
def get_pairs(dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    return dispatcher.get_pairs()


@router.get("/v1/symbol/{symbol}", response_model=SymbolDetails, responses=ERROR_RESPONSES, summary="Get symbol details", tags=["market"])
def get_symbol_details(symbol: str, dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    return dispatcher.get_symbol_details(SymbolLookup.parse(symbol))


@router.get("/v1/coins", response_model=Coins, responses=LIST_ERROR_RESPONSES, summary="Get coins", tags=["market"])
def get_coins(dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    return dispatcher.get_coins()


@router.get(
    "/v1/chartPoints/{filter}/{exchange}/{symbol}",
    response_model=FilterPoints,
    responses=LIST_ERROR_RESPONSES,
    summary="Get chart points for one exchange",
    tags=["charts"],
)
def get_chart_points(
    filter: str,
    exchange: str,
    symbol: str,
    scale: str = Query("", description=SCALE_DESCRIPTION),
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
):
    return dispatcher.get_filter_points(ChartPointsQuery.parse(filter, exchange, symbol, scale))


@router.get(
    "/v1/chartPointsAllExchanges/{filter}/{symbol}",
    response_model=FilterPoints,
    responses=LIST_ERROR_RESPONSES,
    summary="Get chart points aggregated across exchanges",
    tags=["charts"],
)
def get_chart_points_all_exchanges(
    filter: str,
    symbol: str,
    scale: str = Query("", description=SCALE_DESCRIPTION),
    dispatcher: QueryDispatcher = Depends(get_dispatcher),
):
    return dispatcher.get_filter_points(ChartPointsQuery.parse(filter, None, symbol, scale))


@router.get("/v1/symbols", response_model=Symbols, responses=LIST_ERROR_RESPONSES, summary="Get all symbols", tags=["market"])
def get_all_symbols(dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    return dispatcher.get_all_symbols()


@router.get("/v1/securityToken/{token_symbol}", response_model=TokenResult, responses=LIST_ERROR_RESPONSES, summary="Get security token details", tags=["security tokens"])
def get_token_details(token_symbol: str, dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    """Returns `{result: null, count: 0}` when no token matches."""
    return dispatcher.get_token_details(TokenLookup.parse(token_symbol))


@router.get("/v1/securityTokens", response_model=TokenListResult, responses=LIST_ERROR_RESPONSES, summary="Get all security token symbols", tags=["security tokens"])
def get_all_tokens(dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    return dispatcher.get_all_token_symbols()


@router.get("/health", response_model=HealthResponse, responses={503: {"model": HealthResponse, "description": "A backing store is unreachable"}}, summary="Service health")
def health_check(dispatcher: QueryDispatcher = Depends(get_dispatcher)):
    """Pings both backing stores."""
    primary_ok = dispatcher.datastore.ping()
    reference_ok = dispatcher.token_store.ping()
    healthy = primary_ok and reference_ok
    payload = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        service=SERVICE_NAME,
        primary_store="healthy" if primary_ok else "unreachable",
        reference_store="healthy" if reference_ok else "unreachable",
        timestamp=datetime.now(timezone.utc),
    )
    if not healthy:
        return JSONResponse(status_code=503, content=payload.model_dump(mode="json"))
    return payload


@router.get("/metrics", response_model=MetricsResponse, summary="Runtime metrics")
def metrics(observability: RuntimeObservability = Depends(get_observability)):
    return {
        "service": SERVICE_NAME,
        "process_started_at": observability.process_started_at,
        "uptime_seconds": round(observability.uptime_seconds(), 3),
        "last_supply_write": observability.last_supply_write,
        "api_latency_ms": observability.latency_summary(),
        "timestamp": datetime.now(timezone.utc),
    }
