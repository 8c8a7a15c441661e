import asyncio
import io
import time
from types import SimpleNamespace

import pytest

from lowfi.audio import Sink
from lowfi.components import bold
from lowfi.downloader import Loading, Progress
from lowfi.errors import UIError
from lowfi.interface import Interface, Params, run_ui
from lowfi.tracks import Info
from lowfi.ui_state import State, Update

CONTROLS = f"{bold('[s]')}kip    {bold('[p]')}ause    {bold('[q]')}uit"


def _args(**overrides):
    values = dict(fps=12, clock=False, width=3, minimalist=False, borderless=False)
    values.update(overrides)
    return SimpleNamespace(**values)


def test_loading():
    state = State(Sink(), "test")
    menu = Interface().menu(state)
    assert menu[0] == "loading                    "
    assert menu[1] == " [           ] 00:00/00:00 "
    assert menu[2] == CONTROLS


def test_volume():
    sink = Sink()
    sink.volume = 0.5
    state = State(sink, "test")
    state.volume_timer = time.monotonic()
    menu = Interface().menu(state)
    assert menu[0] == "loading                    "
    assert menu[1] == " volume: [/////     ]  50% "
    assert menu[2] == CONTROLS


def test_progress():
    Progress().set(0.5)
    state = State(Sink(), "test", current=Loading(Progress()))
    menu = Interface().menu(state)
    assert menu[0] == f"loading {bold('50%')}                "
    assert menu[1] == " [           ] 00:00/00:00 "
    assert menu[2] == CONTROLS


def test_track():
    track = Info(path="/path", display="Test Track", width=10, duration=8.0)
    state = State(Sink(), "test", current=track)
    menu = Interface().menu(state)
    assert menu[0] == f"playing {bold(track.display)}         "
    assert menu[1] == " [           ] 00:00/00:08 "
    assert menu[2] == CONTROLS


def test_minimalist_drops_controls():
    state = State(Sink(), "test")
    menu = Interface(Params(minimalist=True)).menu(state)
    assert len(menu) == 2


def test_params_from_args(monkeypatch):
    monkeypatch.delenv("LOWFI_DISABLE_UI", raising=False)
    params = Params.from_args(_args(fps=10, width=3, clock=True))
    assert params.width == 27
    assert params.delta == pytest.approx(0.1)
    assert params.clock is True
    assert params.enabled is True


def test_params_width_is_clamped(monkeypatch):
    monkeypatch.delenv("LOWFI_DISABLE_UI", raising=False)
    assert Params.from_args(_args(width=100)).width == 21 + 32 * 2


def test_params_reject_disabled_ui(monkeypatch):
    monkeypatch.setenv("LOWFI_DISABLE_UI", "1")
    with pytest.raises(UIError):
        Params.from_args(_args())


def test_params_reject_zero_fps(monkeypatch):
    monkeypatch.delenv("LOWFI_DISABLE_UI", raising=False)
    with pytest.raises(ValueError):
        Params.from_args(_args(fps=0))


@pytest.mark.asyncio
async def test_draw_writes_window():
    out = io.StringIO()
    interface = Interface(writer=out)
    await interface.draw(State(Sink(), "test"))
    assert "loading" in out.getvalue()
    assert out.getvalue().startswith("\x1b[J")


@pytest.mark.asyncio
async def test_run_ui_quits_immediately():
    updates: asyncio.Queue = asyncio.Queue()
    updates.put_nowait(Update.quit())
    state = State(Sink(), "test")
    await asyncio.wait_for(run_ui(updates, state, Params()), timeout=2)
    assert state.current == Loading(None)


@pytest.mark.asyncio
async def test_run_ui_applies_updates(capsys):
    updates: asyncio.Queue = asyncio.Queue()
    track = Info("/path", "Test Track", 10, 8.0)
    updates.put_nowait(Update.track(track))
    updates.put_nowait(Update.bookmarked(True))
    updates.put_nowait(Update.quit())
    state = State(Sink(), "test")
    await asyncio.wait_for(run_ui(updates, state, Params()), timeout=2)
    assert state.current == track
    assert state.bookmarked is True
    assert "Test Track" in capsys.readouterr().out