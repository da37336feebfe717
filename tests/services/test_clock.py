"""GameClock 테스트"""

from __future__ import annotations

import time

from wasteland.core.save_state import InMemorySaveStorage
from wasteland.services.clock import GameClock
from wasteland.services.game_service import GameService


def _wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


class TestGameClock:
    def test_ticks_sessions(self, content):
        service = GameService(content, InMemorySaveStorage(), default_slot="clock")
        session_id, _, _ = service.create_session()
        clock = GameClock(service, interval=0.01)
        clock.start()
        try:
            assert clock.is_running()
            assert _wait_for(lambda: service.get_state(session_id)["game_time"] >= 2)
        finally:
            clock.stop()
        assert not clock.is_running()

    def test_start_twice_is_noop(self, content):
        service = GameService(content, InMemorySaveStorage(), default_slot="clock")
        clock = GameClock(service, interval=0.05)
        clock.start()
        thread = clock._thread
        clock.start()
        assert clock._thread is thread
        clock.stop()

    def test_tick_failure_keeps_running(self, content, monkeypatch):
        service = GameService(content, InMemorySaveStorage(), default_slot="clock")
        calls = []

        def flaky(seconds=1):
            calls.append(seconds)
            raise RuntimeError("tick failed")

        monkeypatch.setattr(service, "tick_all", flaky)
        clock = GameClock(service, interval=0.01)
        clock.start()
        try:
            assert _wait_for(lambda: len(calls) >= 3)
            assert clock.is_running()
        finally:
            clock.stop()
