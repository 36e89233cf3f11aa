"""
Scan API Endpoints

Crypto signal scan polled by the dashboard.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.schemas.signals import ScanError, ScanRequest
from app.services.base import ServiceError
from app.services.market_data import get_supported_symbols
from app.services.signals import SignalService, get_signal_service

logger = logging.getLogger(__name__)

router = APIRouter()

NO_STORE = {"Cache-Control": "no-store"}


@router.get("")
async def scan(
    symbols: Optional[str] = Query(
        None, description="Comma-separated tickers (default: btc,eth,sol)"
    ),
    service: SignalService = Depends(get_signal_service),
):
    """
    Score each requested asset.

    Example:
    - `/scan` - btc, eth, sol
    - `/scan?symbols=btc,doge,ada`

    Unsupported tickers are ignored. Any failure of the batched snapshot
    returns HTTP 502 with `{ok: false, error, detail}`.
    """
    try:
        request = ScanRequest.from_csv(symbols or settings.default_symbols)
        response = await service.execute(request)
        return JSONResponse(
            content=response.model_dump(mode="json", by_alias=True),
            headers=NO_STORE,
        )
    except Exception as e:
        detail = e.message if isinstance(e, ServiceError) else str(e)
        logger.error(f"Scan failed for '{symbols}': {detail}")
        return JSONResponse(
            status_code=502,
            content=ScanError(detail=detail).model_dump(),
            headers=NO_STORE,
        )


@router.get("/symbols")
async def list_symbols():
    """Tickers the scan can resolve, with their provider ids."""
    supported = get_supported_symbols()
    return {"symbols": supported, "count": len(supported)}


@router.get("/health")
async def scan_health(service: SignalService = Depends(get_signal_service)):
    """Market data provider reachability."""
    healthy = await service.health_check()
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "healthy" if healthy else "degraded", "provider": "coingecko"},
        headers=NO_STORE,
    )
