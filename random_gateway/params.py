"""Query parameter parsing for the fan-out endpoint."""

import re
import sys
from typing import NamedTuple, Optional

from pydantic import ValidationError

from .models import RangeRequest

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


class FanoutParams(NamedTuple):
    request: RangeRequest
    count: int


class InvalidParams(ValueError):
    pass


def parse_int(raw: Optional[str]) -> Optional[int]:
    """Leading integer of ``raw`` (``"12abc"`` -> 12), None when there is none."""
    if raw is None:
        return None
    m = _LEADING_INT.match(raw)
    if m is None:
        return None
    try:
        return int(m.group(1))
    except ValueError:
        # past the interpreter's digit limit
        return None


def parse_fanout_params(min_raw, max_raw, count_raw, max_count: Optional[int] = None) -> FanoutParams:
    lo = parse_int(min_raw)
    hi = parse_int(max_raw)
    count = parse_int(count_raw)

    if count is None or count <= 0:
        raise InvalidParams(f"count must be a positive integer, got {count_raw!r}")
    # a list of requests cannot be longer than sys.maxsize
    limit = sys.maxsize if max_count is None else min(max_count, sys.maxsize)
    if count > limit:
        raise InvalidParams(f"count must be at most {limit}, got {count}")
    if lo is None or hi is None:
        raise InvalidParams(f"min and max must be integers, got min={min_raw!r} max={max_raw!r}")
    try:
        request = RangeRequest(min=lo, max=hi)
    except ValidationError:
        raise InvalidParams(f"max must be >= min, got min={lo} max={hi}") from None
    return FanoutParams(request=request, count=count)
