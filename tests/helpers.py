import asyncio
from typing import List

from random_gateway.models import Failure, RangeRequest, Success


class ScriptedInvoker:
    """Hands out preset outcomes in call order, after optional per-call delays."""

    def __init__(self, outcomes, delays=None):
        self.outcomes = list(outcomes)
        self.delays = list(delays or [])
        self.calls: List[RangeRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def invoke(self, request):
        i = len(self.calls)
        self.calls.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if i < len(self.delays):
                await asyncio.sleep(self.delays[i])
            outcome = self.outcomes[i]
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome
        finally:
            self.in_flight -= 1


def ok(value):
    return Success(value=value)


def failed(reason="GetRandom(min=1, max=1): HTTP 502"):
    return Failure(reason=reason)
