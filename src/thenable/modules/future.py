import asyncio
import functools
from collections.abc import Callable, Generator, Iterable
from threading import Lock, RLock
from typing import Any, ClassVar, Literal, Optional

from ..internal.dispatch import dispatch
from ..internal.future import transfer_threadsafe
from ..internal.queue import ObserverQueue
from .thenable import is_thenable


type FutureStatus = Literal["fulfilled", "pending", "rejected"]

type SettleFunction = Callable[..., None]
type Executor = Callable[[SettleFunction, SettleFunction], object]


class Future[T]:
  """
  A value that becomes available later, by being either fulfilled with a value
  or rejected with a reason.

  The executor passed to the constructor is called immediately with two
  settlement functions, `resolve` and `reject`. Only the first call to either
  of them has an effect. Observers registered with `then()`, `catch()` and
  `finally_()` are called synchronously when the future settles, in the order
  in which they were registered, or immediately if the future has already
  settled. There is no deferral to an event loop. Settlements triggered by
  observers are queued on the current thread and processed before the
  outermost settlement call returns.

  Exceptions raised by the executor are not caught and propagate to the caller
  of the constructor. Exceptions raised by observers propagate to the caller
  that triggered the settlement, once every other observer has run.
  """

  __slots__ = (
    '_finally_observers',
    '_fulfill_observers',
    '_lock',
    '_reject_observers',
    '_status',
    '_value',
  )

  # Number of required constructor parameters
  length: ClassVar[int] = 1

  def __init__(self, executor: Executor, /):
    if not callable(executor):
      raise TypeError(f"Future executor must be callable, not {type(executor).__name__}")

    self._finally_observers = ObserverQueue()
    self._fulfill_observers = ObserverQueue()
    self._lock = RLock()
    self._reject_observers = ObserverQueue()
    self._status: FutureStatus = "pending"
    self._value: Any = None

    executor(self._resolve, self._reject)

  def __repr__(self):
    if self._status == "pending":
      return f"<{type(self).__name__} pending>"

    return f"<{type(self).__name__} {self._status} value={self._value!r}>"

  @property
  def status(self) -> FutureStatus:
    return self._status

  @property
  def value(self) -> Any:
    """
    The fulfillment value or rejection reason, or `None` if the future is still
    pending.
    """

    return self._value

  def pending(self):
    return self._status == "pending"

  def fulfilled(self):
    return self._status == "fulfilled"

  def rejected(self):
    return self._status == "rejected"

  def _resolve(self, value: Any = None, /):
    self._settle("fulfilled", value)

  def _reject(self, reason: Any = None, /):
    self._settle("rejected", reason)

  def _settle(self, status: FutureStatus, value: Any, /):
    with self._lock:
      if self._status != "pending":
        return

      self._status = status
      self._value = value

      # Both queues are drained to release the observers of the other outcome
      fulfill_observers = self._fulfill_observers.drain()
      reject_observers = self._reject_observers.drain()
      finally_observers = self._finally_observers.drain()

    observers = fulfill_observers if status == "fulfilled" else reject_observers

    dispatch([
      *(functools.partial(observer, value) for observer in observers),
      *finally_observers,
    ])

  def _observe(self, on_fulfilled: Callable[[Any], object], on_rejected: Callable[[Any], object], /):
    with self._lock:
      if self._status == "pending":
        self._fulfill_observers.append(on_fulfilled)
        self._reject_observers.append(on_rejected)
        return

    if self._status == "fulfilled":
      on_fulfilled(self._value)
    else:
      on_rejected(self._value)

  def _observe_settlement(self, on_settled: Callable[[], object], /):
    with self._lock:
      if self._status == "pending":
        self._finally_observers.append(on_settled)
        return

    on_settled()

  def then[S](
    self,
    on_fulfilled: Optional[Callable[[T], S]] = None,
    on_rejected: Optional[Callable[[Any], S]] = None,
  ) -> 'Future[Any]':
    """
    Derive a new future from the outcome of this one.

    The value returned by a handler resolves the derived future. If that value
    is itself a thenable, the derived future is resolved with whatever the
    thenable settles with, including when it is rejected.

    Parameters
    ----------
    on_fulfilled
      Called with the fulfillment value. If `None`, the value is forwarded as
      is to the derived future.
    on_rejected
      Called with the rejection reason. If `None`, the reason is forwarded as
      is and the derived future is rejected too.

    Returns
    -------
    Future
      A new future, which is never this one.
    """

    def executor(resolve: SettleFunction, reject: SettleFunction):
      self._observe(
        _chain(on_fulfilled, resolve) if on_fulfilled is not None else resolve,
        _chain(on_rejected, resolve) if on_rejected is not None else reject,
      )

    return type(self)(executor)

  def catch[S](self, on_rejected: Optional[Callable[[Any], S]] = None) -> 'Future[T | S]':
    return self.then(None, on_rejected)

  def finally_(self, on_finally: Callable[[], object], /) -> 'Future[T]':
    """
    Derive a new future that settles like this one, after calling `on_finally`.

    Parameters
    ----------
    on_finally
      Called without arguments once this future settles, regardless of the
      outcome. Its return value is ignored.

    Returns
    -------
    Future[T]
    """

    def executor(resolve: SettleFunction, reject: SettleFunction):
      def observer():
        on_finally()

        if self._status == "fulfilled":
          resolve(self._value)
        else:
          reject(self._value)

      self._observe_settlement(observer)

    return type(self)(executor)

  def __await__(self) -> Generator[Any, None, T]:
    waiter = asyncio.get_running_loop().create_future()

    self._observe(
      lambda value: transfer_threadsafe(waiter, failed=False, value=value),
      lambda reason: transfer_threadsafe(waiter, failed=True, value=reason),
    )

    return (yield from waiter.__await__())

  @classmethod
  def resolve(cls, value: Any = None, /) -> 'Future[Any]':
    """
    Create a future fulfilled with the given value.

    Thenables are not unwrapped: the future is fulfilled with the thenable
    itself.
    """

    return cls(lambda resolve, reject: resolve(value))

  @classmethod
  def reject(cls, reason: Any = None, /) -> 'Future[Any]':
    return cls(lambda resolve, reject: reject(reason))

  @classmethod
  def all(cls, futures: Iterable[Any] = (), /) -> 'Future[list[Any]]':
    """
    Wait for all provided futures to be fulfilled.

    The returned future is rejected as soon as one of the provided futures is
    rejected, with the same reason. Items that are not thenables count as
    fulfilled values.

    Parameters
    ----------
    futures
      The futures to wait for. The returned future is fulfilled immediately if
      the iterable is empty.

    Returns
    -------
    Future[list[Any]]
      A future fulfilled with the results, in the same order as the provided
      items.
    """

    items = list(futures)

    def executor(resolve: SettleFunction, reject: SettleFunction):
      lock = Lock()
      remaining = len(items)
      results: list[Any] = [None] * len(items)

      if not items:
        resolve(results)
        return

      def fulfill_at(index: int):
        def observer(value: Any):
          nonlocal remaining

          with lock:
            results[index] = value
            remaining -= 1
            complete = (remaining == 0)

          if complete:
            resolve(results)

        return observer

      for index, item in enumerate(items):
        if is_thenable(item):
          item.then(fulfill_at(index), reject)
        else:
          fulfill_at(index)(item)

    return cls(executor)

  @classmethod
  def race(cls, futures: Iterable[Any] = (), /) -> 'Future[Any]':
    """
    Settle like the first provided future to settle.

    Parameters
    ----------
    futures
      The competing futures. Items that are not thenables win immediately. The
      returned future never settles if the iterable is empty.

    Returns
    -------
    Future[Any]
    """

    items = list(futures)

    def executor(resolve: SettleFunction, reject: SettleFunction):
      for item in items:
        if is_thenable(item):
          item.then(resolve, reject)
        else:
          resolve(item)

    return cls(executor)


def _chain(handler: Callable[[Any], Any], resolve: SettleFunction, /):
  def observer(value: Any):
    result = handler(value)

    # A rejected thenable resolves the derived future with its reason
    if is_thenable(result):
      result.then(resolve, resolve)
    else:
      resolve(result)

  return observer


__all__ = [
  'Executor',
  'Future',
  'FutureStatus',
  'SettleFunction',
]
