import asyncio
import logging
from collections.abc import Awaitable

from ..internal.future import ensure_future
from .future import Future, SettleFunction


logger = logging.getLogger('thenable')


def adopt[T](awaitable: Awaitable[T], /) -> Future[T]:
  """
  Create a future that settles with the outcome of an asyncio awaitable.

  Coroutines are wrapped in a task, which requires a running event loop.
  Futures and tasks are observed as they are.

  Parameters
  ----------
  awaitable
    The awaitable to adopt.

  Returns
  -------
  Future[T]
    A future fulfilled with the result of the awaitable, or rejected with the
    exception it raised. If the awaitable is cancelled, the future is rejected
    with an `asyncio.CancelledError` instance.
  """

  task = ensure_future(awaitable)

  def executor(resolve: SettleFunction, reject: SettleFunction):
    def callback(done_task: asyncio.Future[T]):
      if done_task.cancelled():
        logger.debug("Adopted awaitable was cancelled")
        reject(asyncio.CancelledError())
      elif (exception := done_task.exception()) is not None:
        reject(exception)
      else:
        resolve(done_task.result())

    task.add_done_callback(callback)

  return Future(executor)


__all__ = [
  'adopt',
]
