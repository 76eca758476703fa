import threading
from unittest import TestCase
from unittest.mock import Mock

from thenable import Deferred


THREAD_COUNT = 16


class TestConcurrentSettlement(TestCase):
  def test_single_settlement(self):
    deferred = Deferred[int]()
    on_fulfilled = Mock()
    on_rejected = Mock()
    on_finally = Mock()

    deferred.future.then(on_fulfilled, on_rejected)
    deferred.future.finally_(on_finally)

    barrier = threading.Barrier(THREAD_COUNT)

    def settle(index: int):
      barrier.wait()

      if index % 2:
        deferred.resolve(index)
      else:
        deferred.reject(index)

    threads = [threading.Thread(target=settle, args=(index,)) for index in range(THREAD_COUNT)]

    for thread in threads:
      thread.start()

    for thread in threads:
      thread.join()

    self.assertEqual(on_fulfilled.call_count + on_rejected.call_count, 1)
    on_finally.assert_called_once_with()

  def test_registration_during_settlement(self):
    deferred = Deferred[str]()
    observers = [Mock() for _ in range(THREAD_COUNT * 8)]
    barrier = threading.Barrier(THREAD_COUNT + 1)

    def register(index: int):
      barrier.wait()

      for observer in observers[index::THREAD_COUNT]:
        deferred.future.then(observer)

    def settle():
      barrier.wait()
      deferred.resolve('foo')

    threads = [threading.Thread(target=register, args=(index,)) for index in range(THREAD_COUNT)]
    threads.append(threading.Thread(target=settle))

    for thread in threads:
      thread.start()

    for thread in threads:
      thread.join()

    for observer in observers:
      observer.assert_called_once_with('foo')
