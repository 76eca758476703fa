import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(slots=True)
class FakeTimers:
  """
  A deterministic replacement for a host timer facility.

  Callbacks only run when the timers are advanced explicitly.
  """

  now: float = 0.0

  _counter: itertools.count = field(default_factory=itertools.count, init=False, repr=False)
  _timers: list[tuple[float, int, Callable[[], object]]] = field(default_factory=list, init=False, repr=False)

  def set_timeout(self, callback: Callable[[], object], delay: float, /):
    heapq.heappush(self._timers, (self.now + delay, next(self._counter), callback))

  def run_only_pending(self):
    """
    Run the timers that are scheduled at the time of the call, in order of
    expiry. Timers scheduled by these callbacks are left pending.
    """

    pending = sorted(self._timers)
    self._timers.clear()

    for deadline, _, callback in pending:
      self.now = max(self.now, deadline)
      callback()

  def __len__(self):
    return len(self._timers)
