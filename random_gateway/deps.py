from typing import AsyncIterator, Optional

import httpx
from fastapi import Depends

from .invoker import LambdaInvoker
from .settings import Settings, get_settings


def build_lambda_client(settings: Settings, region: Optional[str] = None) -> httpx.AsyncClient:
    # no connection cap: every invocation of a fan-out goes out at once
    return httpx.AsyncClient(
        base_url=settings.endpoint_url(region),
        timeout=httpx.Timeout(settings.INVOKE_TIMEOUT_SECONDS),
        limits=httpx.Limits(max_connections=None, max_keepalive_connections=20),
    )


async def get_invoker(settings: Settings = Depends(get_settings)) -> AsyncIterator[LambdaInvoker]:
    async with build_lambda_client(settings) as client:
        yield LambdaInvoker(client, settings.FUNCTION_NAME)
