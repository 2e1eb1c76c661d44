"""Clock abstraction for testable time handling.

Time-based decisions (clock skew checks, JWT issue/expiry bounds) take an
injected ``Clock`` instead of calling ``time.time()`` directly.

>>> from sourcelink_common.clock import default_clock
>>> isinstance(default_clock(), float)
True
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Callable protocol returning *seconds* since the UNIX epoch."""

    def __call__(self) -> float: ...


def default_clock() -> float:
    return time.time()


def utc_now(clock: Clock = default_clock) -> datetime:
    return datetime.fromtimestamp(clock(), tz=timezone.utc)


def utc_now_seconds(clock: Clock = default_clock) -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.fromtimestamp(int(clock()), tz=timezone.utc)
