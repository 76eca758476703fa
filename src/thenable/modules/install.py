import logging
from collections.abc import MutableMapping
from typing import Any

from .future import Future


logger = logging.getLogger('thenable')


def install(target: Any, /, *, name: str = 'Promise') -> Any:
  """
  Install `Future` as the default deferred-value type of a namespace.

  Nothing is installed on import, this function must be called explicitly.

  Parameters
  ----------
  target
    The namespace to install into. Mappings, such as the dictionary returned by
    `globals()`, receive an item, and other objects, such as modules, receive
    an attribute.
  name
    The name of the slot to assign.

  Returns
  -------
  Any
    The value previously held by the slot, or `None` if there was none.
  """

  if isinstance(target, MutableMapping):
    previous = target.get(name)
    target[name] = Future
  else:
    previous = getattr(target, name, None)
    setattr(target, name, Future)

  logger.debug("Installed Future as %r on %s", name, type(target).__name__)
  return previous


__all__ = [
  'install',
]
