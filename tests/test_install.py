import builtins
import types
from unittest import TestCase

import thenable
from thenable import Future, install


class TestInstall(TestCase):
  def test_mapping(self):
    namespace = dict[str, object]()
    previous = install(namespace)

    self.assertIsNone(previous)
    self.assertIs(namespace['Promise'], Future)

  def test_object(self):
    target = types.SimpleNamespace()
    install(target)

    self.assertIs(target.Promise, Future) # type: ignore

  def test_name(self):
    target = types.SimpleNamespace()
    install(target, name='Deferred')

    self.assertIs(target.Deferred, Future) # type: ignore
    self.assertFalse(hasattr(target, 'Promise'))

  def test_returns_previous_value(self):
    sentinel = object()
    namespace = {'Promise': sentinel}

    self.assertIs(install(namespace), sentinel)
    self.assertIs(namespace['Promise'], Future)

  def test_logs(self):
    with self.assertLogs('thenable', level='DEBUG') as context:
      install({})

    self.assertEqual(len(context.records), 1)

  def test_not_installed_on_import(self):
    self.assertNotIn('Promise', vars(builtins))
    self.assertFalse(hasattr(thenable, 'Promise'))
