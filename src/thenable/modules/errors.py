class FutureRejectedError(Exception):
  """
  Raised when awaiting a future that was rejected with a reason which is not
  an exception.
  """

  def __init__(self, reason: object, /):
    super().__init__(reason)
    self.reason = reason

  def __str__(self):
    return f"Future rejected with {self.reason!r}"


__all__ = [
  'FutureRejectedError',
]
