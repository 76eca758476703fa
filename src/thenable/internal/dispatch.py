import threading
from collections import deque
from collections.abc import Callable, Iterable
from typing import Optional


class _DispatchState(threading.local):
  queue: Optional[deque[Callable[[], object]]] = None


_state = _DispatchState()


def dispatch(callbacks: Iterable[Callable[[], object]], /):
  """
  Run callbacks in order on the current thread, without nesting.

  Callbacks dispatched while another dispatch is running on the same thread are
  appended to its queue and run by the outermost call before it returns, so
  long chains of settlements do not grow the stack. A callback that raises does
  not prevent the other callbacks from running.

  Parameters
  ----------
  callbacks
    The callbacks to run.

  Raises
  ------
  Exception
    The exception raised by a callback, if a single callback raised one.
  ExceptionGroup
    If more than one callback raised an exception.
  """

  if _state.queue is not None:
    _state.queue.extend(callbacks)
    return

  queue = deque(callbacks)
  exceptions = list[Exception]()

  _state.queue = queue

  try:
    while queue:
      callback = queue.popleft()

      try:
        callback()
      except Exception as e:
        exceptions.append(e)
  finally:
    _state.queue = None

  if len(exceptions) == 1:
    raise exceptions[0]

  if exceptions:
    raise ExceptionGroup("Observers raised exceptions", exceptions)


__all__ = [
  'dispatch',
]
