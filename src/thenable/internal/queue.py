from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(slots=True)
class ObserverQueue[**P]:
  """
  An append-only sequence of callbacks that is drained exactly once.
  """

  _callbacks: list[Callable[P, object]] = field(default_factory=list, init=False, repr=False)
  _drained: bool = field(default=False, init=False, repr=False)

  def __len__(self):
    return len(self._callbacks)

  def append(self, callback: Callable[P, object], /):
    assert not self._drained
    self._callbacks.append(callback)

  def drain(self):
    """
    Take every queued callback, in registration order, and close the queue.

    Returns
    -------
    list[Callable[P, object]]
      The callbacks that were queued.
    """

    assert not self._drained

    callbacks = self._callbacks
    self._callbacks = []
    self._drained = True

    return callbacks
