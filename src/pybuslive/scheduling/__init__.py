"""Scheduling primitives: single-flight slots, polling and debouncing.

All of them run on the asyncio event loop; none of them start threads.
"""

from pybuslive.scheduling.debounce import DebounceScheduler
from pybuslive.scheduling.polling import PollingScheduler, PollState
from pybuslive.scheduling.slot import CancellableRequestSlot

__all__ = [
    "CancellableRequestSlot",
    "DebounceScheduler",
    "PollState",
    "PollingScheduler",
]
