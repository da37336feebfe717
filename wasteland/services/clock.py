"""게임 시계 - 백그라운드 스레드가 모든 세션의 game_time을 진행시킨다.

게임플레이 상태는 건드리지 않는다 (표시용 경과 시간만).
"""

import logging
import threading
from typing import Optional

from wasteland.services.game_service import GameService

logger = logging.getLogger(__name__)


class GameClock:
    """interval초마다 GameService.tick_all(1) 호출"""

    def __init__(self, service: GameService, interval: float = 1.0):
        self._service = service
        self._interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self.is_running():
            logger.warning("Game clock already running")
            return

        self._stop.clear()
        self._thread = threading.Thread(target=self._run_loop, daemon=True, name="GameClock")
        self._thread.start()
        logger.info("Game clock started (interval=%.2fs)", self._interval)

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None
        logger.info("Game clock stopped")

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run_loop(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._service.tick_all(1)
            except Exception as e:
                logger.error("Game clock tick failed: %s", e, exc_info=True)
