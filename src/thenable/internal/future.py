import asyncio
import logging
from asyncio import AbstractEventLoop
from collections.abc import Awaitable

from ..modules.errors import FutureRejectedError


logger = logging.getLogger('thenable')


# Alias for asyncio.ensure_future with correct typing
def ensure_future[T](obj: Awaitable[T], /) -> asyncio.Future[T]:
  return asyncio.ensure_future(obj)


def transfer_threadsafe(waiter: asyncio.Future, /, *, failed: bool, value: object):
  """
  Transfer an outcome to an asyncio future from any thread.

  Parameters
  ----------
  waiter
    The future to settle. It is left untouched if it is already done, for
    instance because the task awaiting it was cancelled.
  failed
    Whether `value` is a rejection reason rather than a result.
  value
    The result or rejection reason.
  """

  loop: AbstractEventLoop = waiter.get_loop()

  def transfer():
    if waiter.done():
      return

    if not failed:
      waiter.set_result(value)
    elif isinstance(value, asyncio.CancelledError):
      waiter.cancel()
    # asyncio refuses to set StopIteration and StopAsyncIteration as exceptions
    elif isinstance(value, BaseException) and not isinstance(value, StopIteration | StopAsyncIteration):
      waiter.set_exception(value)
    else:
      waiter.set_exception(FutureRejectedError(value))

  try:
    loop.call_soon_threadsafe(transfer)
  except RuntimeError:
    logger.debug("Dropping outcome for a waiter whose event loop is closed")
