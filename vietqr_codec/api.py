"""FastAPI application exposing the VietQR codec."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from .banks import BANKS, Bank
from .config import settings
from .errors import ServiceError
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware
from .monitoring import metrics_payload, record_service_error
from .schemas import (
    BankResponse,
    BuildPayloadRequest,
    BuildPayloadResponse,
    ParsePayloadRequest,
    ParsePayloadResponse,
)
from .services.generator import generate_payload
from .services.scan import scan_payload

app = FastAPI(title="vietqr-codec", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)

logger = logging.getLogger("vietqr.api")


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key":
        logger.warning(
            "api key is using the default value",
            extra={"config_key": "api_key", "environment": settings.environment},
        )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    _warn_insecure_defaults()


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    route = request.scope.get("route")
    route_path = route.path if route else request.url.path
    logger.warning(
        "service error",
        extra={"code": exc.code, "path": route_path, "method": request.method},
    )
    record_service_error(exc.code, route_path)
    return JSONResponse(status_code=exc.status_code, content={"code": exc.code, "message": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    route = request.scope.get("route")
    route_path = route.path if route else request.url.path
    logger.exception(
        "unhandled exception",
        extra={"path": route_path, "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


def _bank_response(bank: Bank) -> BankResponse:
    return BankResponse(code=bank.code, name=bank.name, bin=bank.bin)


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.get("/v1/banks", response_model=list[BankResponse], tags=["banks"], dependencies=[Depends(require_api_key)])
async def list_banks() -> list[BankResponse]:
    return [_bank_response(bank) for bank in BANKS]


@app.post("/v1/payloads", response_model=BuildPayloadResponse, tags=["payloads"], dependencies=[Depends(require_api_key)])
async def build_payload(payload: BuildPayloadRequest) -> BuildPayloadResponse:
    result = generate_payload(
        account_number=payload.account_number,
        bank_code=payload.bank,
        bank_bin=payload.bank_bin,
        amount=payload.amount,
        message=payload.message,
    )
    return BuildPayloadResponse(
        payload=result.encoded.payload,
        crc=result.encoded.crc,
        is_dynamic=result.descriptor.is_dynamic,
    )


@app.post(
    "/v1/payloads/parse",
    response_model=ParsePayloadResponse,
    tags=["payloads"],
    dependencies=[Depends(require_api_key)],
)
async def parse_payload(payload: ParsePayloadRequest) -> ParsePayloadResponse:
    parsed = scan_payload(payload.payload)
    return ParsePayloadResponse(
        bank=_bank_response(parsed.bank) if parsed.bank else None,
        bank_name=parsed.bank_name,
        bank_bin=parsed.bank_bin,
        account_number=parsed.account_number,
        amount=parsed.amount,
        formatted_amount=parsed.formatted_amount,
        message=parsed.message,
        is_dynamic=parsed.is_dynamic,
        payload_format=parsed.payload_format,
        point_of_initiation=parsed.point_of_initiation,
        currency=parsed.currency,
        country_code=parsed.country_code,
        crc=parsed.crc,
    )
