"""Single call to the remote random-number function.

The function is reached through the Lambda Invoke API over plain httpx. Every
network or payload problem comes back as a ``Failure``; nothing is retried.
"""

import base64
import binascii
import json
import logging
import math

import httpx

from .models import Failure, InvocationOutcome, RangeRequest, Success

logger = logging.getLogger(__name__)

INVOKE_PATH = "/2015-03-31/functions/{function_name}/invocations"


def decode_log_tail(raw):
    """base64 log tail from ``X-Amz-Log-Result``, empty string if unusable"""
    if not raw:
        return ""
    try:
        return base64.b64decode(raw, validate=True).decode("utf-8", errors="replace")
    except (binascii.Error, ValueError):
        return ""


def parse_number(body: bytes):
    value = json.loads(body)
    # bool is an int subclass, but true/false is not a random value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {body[:64]!r}")
    if not math.isfinite(value):
        raise ValueError(f"expected a finite number, got {value}")
    return value


class LambdaInvoker:
    def __init__(self, client: httpx.AsyncClient, function_name: str):
        self.client = client
        self.function_name = function_name

    @property
    def path(self) -> str:
        return INVOKE_PATH.format(function_name=self.function_name)

    def _failure(self, request: RangeRequest, cause: str) -> Failure:
        return Failure(reason=f"{self.function_name}({request.describe()}): {cause}")

    async def invoke(self, request: RangeRequest) -> InvocationOutcome:
        try:
            r = await self.client.post(
                self.path,
                json=request.model_dump(),
                headers={
                    "X-Amz-Invocation-Type": "RequestResponse",
                    "X-Amz-Log-Type": "Tail",
                },
            )
        except httpx.HTTPError as e:
            return self._failure(request, f"{type(e).__name__}: {e}")

        logs = decode_log_tail(r.headers.get("X-Amz-Log-Result"))
        if logs:
            logger.debug("%s log tail:\n%s", self.function_name, logs)

        if r.is_error:
            return self._failure(request, f"HTTP {r.status_code}")

        function_error = r.headers.get("X-Amz-Function-Error")
        if function_error:
            return self._failure(request, f"function error ({function_error}): {_error_message(r.content)}")

        try:
            value = parse_number(r.content)
        except ValueError as e:
            return self._failure(request, f"malformed response: {e}")

        return Success(value=value, logs=logs)


def _error_message(body: bytes) -> str:
    try:
        payload = json.loads(body)
    except ValueError:
        return body.decode("utf-8", errors="replace")[:200]
    if isinstance(payload, dict) and "errorMessage" in payload:
        return str(payload["errorMessage"])
    return str(payload)[:200]
