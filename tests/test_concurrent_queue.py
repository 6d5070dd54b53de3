import threading

import pytest

from vamanatools.concurrent_queue import ConcurrentQueue


def test_pop_on_empty_returns_null_value():
    queue = ConcurrentQueue("none")
    assert queue.pop() == "none"


def test_default_null_value_is_none():
    queue = ConcurrentQueue()
    assert queue.pop() is None
    assert queue.empty()


def test_fifo_order():
    queue = ConcurrentQueue(-1)
    for value in (3, 1, 2):
        queue.push(value)
    assert [queue.pop(), queue.pop(), queue.pop()] == [3, 1, 2]
    assert queue.pop() == -1


def test_insert_and_size():
    queue = ConcurrentQueue(-1)
    queue.insert(range(5))
    assert queue.size() == 5
    assert len(queue) == 5
    assert not queue.empty()
    assert [queue.pop() for _ in range(5)] == list(range(5))
    assert queue.empty()


def test_wait_times_out_without_notification():
    queue = ConcurrentQueue()
    assert queue.wait_for_push_notify(0.01) is False
    assert queue.wait_for_pop_notify(0.01) is False


@pytest.mark.parametrize("kind", ["push_one", "push_all", "pop_one", "pop_all"])
def test_notification_wakes_waiter(kind):
    queue = ConcurrentQueue()
    waiter = {
        "push_one": queue.wait_for_push_notify,
        "push_all": queue.wait_for_push_notify,
        "pop_one": queue.wait_for_pop_notify,
        "pop_all": queue.wait_for_pop_notify,
    }[kind]
    notifier = {
        "push_one": queue.push_notify_one,
        "push_all": queue.push_notify_all,
        "pop_one": queue.pop_notify_one,
        "pop_all": queue.pop_notify_all,
    }[kind]
    stop = threading.Event()

    def keep_notifying():
        while not stop.is_set():
            notifier()
            stop.wait(0.002)

    thread = threading.Thread(target=keep_notifying)
    thread.start()
    try:
        woken = waiter(5.0)
    finally:
        stop.set()
        thread.join()
    assert woken is True


def test_concurrent_pushes_are_all_kept():
    queue = ConcurrentQueue()

    def worker(start):
        for i in range(start, start + 100):
            queue.push(i)

    threads = [threading.Thread(target=worker, args=(n * 100,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    popped = sorted(queue.pop() for _ in range(queue.size()))
    assert popped == list(range(400))