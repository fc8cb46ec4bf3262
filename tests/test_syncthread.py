import signal
import threading
from unittest import mock

import pytest

from fsaqueue.syncthread import DEFAULT_MAX_FILESYSTEMS, AtomicCounter, SyncState


def _no_pending():
    return mock.patch.object(signal, "sigpending", return_value=set(), create=True)


def test_counter_increment_decrement():
    counter = AtomicCounter(5)
    assert counter.increment() == 6
    assert counter.decrement() == 5
    assert counter.value == 5


def test_counter_threads_balance():
    counter = AtomicCounter()
    per_thread = 1000

    def work():
        for _ in range(per_thread):
            counter.increment()
        for _ in range(per_thread):
            counter.decrement()

    threads = [threading.Thread(target=work) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.value == 0


def test_counter_threads_sum():
    counter = AtomicCounter()
    per_thread = 500
    nthreads = 4

    def work():
        for _ in range(per_thread):
            counter.increment()

    threads = [threading.Thread(target=work) for _ in range(nthreads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.value == per_thread * nthreads


def test_fsbitmap_sized_and_zeroed():
    state = SyncState(8)
    assert len(state.fsbitmap) == 8
    assert not any(state.fsbitmap)
    assert len(SyncState().fsbitmap) == DEFAULT_MAX_FILESYSTEMS


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        SyncState(-1)


def test_stop_fill_queue_sets_interrupted():
    state = SyncState(4)
    with _no_pending():
        assert state.interrupted is False
        state.set_stop_fill_queue()
        assert state.stop_fill_queue is True
        assert state.interrupted is True
        assert state.aborted is False


def test_abort_sets_aborted_and_interrupted():
    state = SyncState(4)
    with _no_pending():
        assert state.aborted is False
        state.abort()
        assert state.aborted is True
        assert state.interrupted is True
        assert state.stop_fill_queue is False


@pytest.mark.parametrize("sig", [signal.SIGINT, signal.SIGTERM])
def test_pending_signal_aborts_and_sticks(sig):
    state = SyncState(4)
    with mock.patch.object(signal, "sigpending", return_value={sig}, create=True):
        assert state.aborted is True
    with _no_pending():
        assert state.aborted is True


def test_other_pending_signal_ignored():
    state = SyncState(4)
    with mock.patch.object(
        signal, "sigpending", return_value={signal.SIGABRT}, create=True
    ):
        assert state.aborted is False


def test_secthreads_counting():
    state = SyncState(4)
    assert state.secthreads == 0
    state.inc_secthreads()
    state.inc_secthreads()
    assert state.secthreads == 2
    state.dec_secthreads()
    assert state.secthreads == 1