import base64
import random
import secrets

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI()

_rng = random.Random(secrets.randbits(64))


def _log_tail(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _function_error(message: str, logs: str) -> JSONResponse:
    # Lambda reports handler errors as 200 plus X-Amz-Function-Error
    return JSONResponse(
        {"errorMessage": message, "errorType": "ValueError"},
        headers={"X-Amz-Function-Error": "Unhandled", "X-Amz-Log-Result": _log_tail(logs)},
    )


@app.post("/2015-03-31/functions/{function_name}/invocations")
async def invoke(function_name: str, request: Request):
    # dev stand-in for the hosted GetRandom function, for local runs of the gateway
    try:
        event = await request.json()
    except ValueError:
        return _function_error("payload is not JSON", f"{function_name}: bad payload\n")

    lo = event.get("min") if isinstance(event, dict) else None
    hi = event.get("max") if isinstance(event, dict) else None
    if type(lo) is not int or type(hi) is not int:
        return _function_error("min and max must be integers", f"{function_name}: bad bounds {lo!r} {hi!r}\n")
    if lo > hi:
        return _function_error("min must not be greater than max", f"{function_name}: empty range {lo}..{hi}\n")

    value = _rng.randint(lo, hi)
    logs = f"START {function_name}\nrandom value {value} in [{lo}, {hi}]\nEND {function_name}\n"
    return JSONResponse(value, headers={"X-Amz-Log-Result": _log_tail(logs)})
