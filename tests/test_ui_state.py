import asyncio
import time

import pytest

from lowfi.audio import Sink
from lowfi.downloader import Loading
from lowfi.errors import UIError
from lowfi.tracks import Info
from lowfi.ui_state import State, UIHandle, Update, UpdateKind


def _state() -> State:
    return State(Sink(), "test")


def test_initial_state_is_loading_without_progress():
    state = _state()
    assert state.current == Loading(None)
    assert state.bookmarked is False
    assert state.volume_timer is None


def test_tick_clears_expired_volume_timer():
    state = _state()
    state.volume_timer = time.monotonic() - 5
    state.tick()
    assert state.volume_timer is None


def test_tick_keeps_fresh_volume_timer():
    state = _state()
    stamp = time.monotonic()
    state.volume_timer = stamp
    state.tick()
    assert state.volume_timer == stamp


def test_update_constructors():
    info = Info("p.mp3", "Track", 5, None)
    assert Update.track(info) == Update(UpdateKind.TRACK, info)
    assert Update.bookmarked(True) == Update(UpdateKind.BOOKMARKED, True)
    assert Update.volume().kind is UpdateKind.VOLUME
    assert Update.quit().kind is UpdateKind.QUIT


def test_update_without_subscribers_fails():
    handle = UIHandle()
    with pytest.raises(UIError):
        handle.update(Update.volume())


def test_update_reaches_every_subscriber():
    handle = UIHandle()
    first = handle.subscribe()
    second = handle.subscribe()
    handle.update(Update.bookmarked(True))
    assert first.get_nowait() == Update.bookmarked(True)
    assert second.get_nowait() == Update.bookmarked(True)


def test_lagging_subscriber_loses_oldest():
    handle = UIHandle(capacity=2)
    queue = handle.subscribe()
    handle.update(Update.bookmarked(True))
    handle.update(Update.volume())
    handle.update(Update.quit())
    assert queue.get_nowait() == Update.volume()
    assert queue.get_nowait() == Update.quit()
    with pytest.raises(asyncio.QueueEmpty):
        queue.get_nowait()


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        UIHandle(capacity=0)