from dataclasses import dataclass, field

from .future import Future, SettleFunction


@dataclass(init=False, slots=True)
class Deferred[T]:
  """
  A pending future together with the functions that settle it.

  This is the producer side of a future, for code that settles it outside of
  an executor.
  """

  future: Future[T]
  resolve: SettleFunction = field(repr=False)
  reject: SettleFunction = field(repr=False)

  def __init__(self):
    def executor(resolve: SettleFunction, reject: SettleFunction):
      self.resolve = resolve
      self.reject = reject

    self.future = Future(executor)


__all__ = [
  'Deferred',
]
