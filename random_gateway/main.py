import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .deps import get_invoker
from .fanout import Aggregator, dispatch
from .invoker import LambdaInvoker
from .params import InvalidParams, parse_fanout_params
from .report import render_report
from .settings import settings

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# FastAPI app
# -------------------------------------------------------------------

app = FastAPI(
    title="Random fan-out gateway",
    version=settings.GATEWAY_VERSION,
    # every GET path belongs to the fan-out route
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------------------------------------------
# Middleware: service headers
# -------------------------------------------------------------------

@app.middleware("http")
async def add_svc_headers(request: Request, call_next):
    resp = await call_next(request)
    resp.headers["X-Gateway-Version"] = settings.GATEWAY_VERSION
    resp.headers["X-Random-Function"] = settings.FUNCTION_NAME
    return resp


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------

@app.get("/{path:path}", response_class=PlainTextResponse)
async def fan_out(
    path: str,
    min: Optional[str] = None,
    max: Optional[str] = None,
    count: Optional[str] = None,
    invoker: LambdaInvoker = Depends(get_invoker),
):
    try:
        params = parse_fanout_params(min, max, count, max_count=settings.MAX_COUNT)
    except InvalidParams as e:
        # empty 200 is the public contract for bad input
        logger.info("rejected /%s: %s", path, e)
        return PlainTextResponse("")

    requests = [params.request] * params.count
    aggregator = Aggregator(len(requests))
    result = await dispatch(requests, invoker, aggregator)

    logger.info(
        "fan-out %s x%d: %d/%d succeeded",
        params.request.describe(),
        params.count,
        result.succeeded,
        result.attempted,
    )
    return PlainTextResponse(render_report(result))
