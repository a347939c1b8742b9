"""Route handlers for the itemledger REST API."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from itemledger.api.schemas import ErrorResponse, HealthResponse, InvokeRequest, InvokeResponse
from itemledger.models.responses import Response as Envelope

router = APIRouter()

# error code -> HTTP status
_STATUS_BY_CODE: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "UNKNOWN_OPERATION": 400,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "DESERIALIZATION_ERROR": 500,
    "STORE_ERROR": 503,
}


def _to_http(envelope: Envelope) -> JSONResponse:
    if not envelope.ok:
        code = envelope.error_code or "INTERNAL_ERROR"
        return JSONResponse(
            status_code=_STATUS_BY_CODE.get(code, 500),
            content=ErrorResponse(error=code, detail=envelope.message).model_dump(),
        )
    payload = envelope.payload.decode("utf-8") if envelope.payload is not None else None
    return JSONResponse(
        status_code=200,
        content=InvokeResponse(status=envelope.status, message=envelope.message, payload=payload).model_dump(),
    )


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    from itemledger import __version__

    return HealthResponse(status="ok", ccid=request.app.state.ccid, version=__version__)


@router.post(
    "/init",
    response_model=InvokeResponse,
    responses={500: {"model": ErrorResponse}},
)
def init(request: Request) -> JSONResponse:
    return _to_http(request.app.state.dispatcher.init())


@router.post(
    "/invoke",
    response_model=InvokeResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
def invoke(body: InvokeRequest, request: Request) -> JSONResponse:
    # sync handler: FastAPI runs it in the threadpool, the store may block
    envelope = request.app.state.dispatcher.invoke(body.function, body.args)
    return _to_http(envelope)


@router.get("/metrics")
async def metrics() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
