"""Parallel dispatch of invocations and the counter join over their outcomes.

Everything here runs on one event loop, so the aggregator's counter and lists
are only ever touched from the loop thread and need no locking.
"""

import asyncio
import enum
import functools
import logging
from typing import Callable, List, Optional, Sequence

from .models import AggregateResult, Failure, InvocationOutcome, RangeRequest, Success

logger = logging.getLogger(__name__)


class FanoutError(Exception):
    pass


class AggregatorClosed(FanoutError):
    """An outcome arrived after all expected outcomes were recorded."""


class AggregatorPending(FanoutError):
    """The result was read before all expected outcomes were recorded."""


class AggregatorState(enum.Enum):
    COLLECTING = "collecting"
    COMPLETE = "complete"


class Aggregator:
    """Collects ``expected`` outcomes and finalizes exactly once.

    ``on_complete`` is called with the final result the moment the last
    outcome is recorded. ``wait()`` resolves at the same point.
    """

    def __init__(
        self,
        expected: int,
        on_complete: Optional[Callable[[AggregateResult], None]] = None,
    ):
        if expected <= 0:
            raise ValueError(f"expected must be positive, got {expected}")
        self.expected = expected
        self.on_complete = on_complete
        self.state = AggregatorState.COLLECTING
        self.count = 0
        self.values: List = []
        self.failed: List[str] = []
        self._done = asyncio.Event()
        self._result: Optional[AggregateResult] = None

    @property
    def complete(self) -> bool:
        return self.state is AggregatorState.COMPLETE

    def record(self, outcome: InvocationOutcome) -> None:
        if self.complete:
            raise AggregatorClosed(f"all {self.expected} outcomes already recorded")

        if isinstance(outcome, Success):
            self.values.append(outcome.value)
        else:
            self.failed.append(outcome.reason)
        self.count += 1

        if self.count == self.expected:
            self._finalize()

    def _finalize(self) -> None:
        self.state = AggregatorState.COMPLETE
        self._result = AggregateResult(
            attempted=self.count,
            succeeded=len(self.values),
            failed_reasons=list(self.failed),
            values=list(self.values),
        )
        self._done.set()
        if self.on_complete is not None:
            self.on_complete(self._result)

    def result(self) -> AggregateResult:
        if self._result is None:
            raise AggregatorPending(f"{self.count} of {self.expected} outcomes recorded")
        return self._result

    async def wait(self) -> AggregateResult:
        await self._done.wait()
        return self.result()


async def _invoke_one(invoker, request: RangeRequest) -> InvocationOutcome:
    try:
        return await invoker.invoke(request)
    except Exception as e:
        # the join must still reach its count
        logger.exception("invoker raised for %s", request.describe())
        return Failure(reason=f"{request.describe()}: {type(e).__name__}: {e}")


async def dispatch(
    requests: Sequence[RangeRequest],
    invoker,
    aggregator: Aggregator,
) -> AggregateResult:
    """Start one invocation per request at once and feed outcomes as they land."""
    if len(requests) != aggregator.expected:
        raise ValueError(f"{len(requests)} requests for an aggregator expecting {aggregator.expected}")

    def _on_done(request: RangeRequest, task: "asyncio.Task[InvocationOutcome]") -> None:
        if task.cancelled():
            outcome = Failure(reason=f"{request.describe()}: cancelled")
        else:
            outcome = task.result()
        if isinstance(outcome, Failure):
            logger.warning("invocation failed: %s", outcome.reason)
        aggregator.record(outcome)

    tasks = []
    for request in requests:
        task = asyncio.ensure_future(_invoke_one(invoker, request))
        task.add_done_callback(functools.partial(_on_done, request))
        tasks.append(task)

    return await aggregator.wait()
