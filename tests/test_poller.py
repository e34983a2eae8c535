import threading

import pytest

from microblog.poller import Poller


def test_start_stop_and_restart():
    poller = Poller(lambda: None, 3600)
    assert not poller.running
    poller.start()
    assert poller.running
    poller.start()
    assert poller.running
    poller.stop()
    assert not poller.running
    poller.start()
    assert poller.running
    poller.stop()
    poller.stop()
    assert not poller.running


def test_callback_runs_on_schedule():
    fired = threading.Event()
    poller = Poller(fired.set, 1)
    poller.start()
    try:
        assert fired.wait(timeout=5)
    finally:
        poller.stop()


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        Poller(lambda: None, 0)
