from collections.abc import Callable
from typing import Any, Optional, Protocol, TypeGuard, runtime_checkable


@runtime_checkable
class Thenable[T](Protocol):
  """
  A value that behaves like a future, that is, one that exposes a `then`
  method accepting fulfillment and rejection callbacks.
  """

  def then(
    self,
    on_fulfilled: Optional[Callable[[T], Any]] = ...,
    on_rejected: Optional[Callable[[Any], Any]] = ...,
    /,
  ) -> Any:
    ...


def is_thenable(value: object, /) -> TypeGuard[Thenable[Any]]:
  """
  Check whether the given value is future-like.

  Only the presence of a callable `then` attribute is checked, the type of the
  value is irrelevant.

  Parameters
  ----------
  value
    The value to probe.

  Returns
  -------
  bool
  """

  return callable(getattr(value, 'then', None))


__all__ = [
  'Thenable',
  'is_thenable',
]
