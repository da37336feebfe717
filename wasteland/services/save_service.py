"""세이브 슬롯 Service - 저장소 프로토콜의 DB 구현

Core는 슬롯 키 → 문자열 blob 인터페이스만 안다.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wasteland.core.errors import PersistenceError
from wasteland.db.models import SaveSlotModel

logger = logging.getLogger(__name__)


class DatabaseSaveStorage:
    """save_slots 테이블 기반 저장소. 호출마다 세션을 열고 닫는다."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def read(self, slot: str) -> Optional[str]:
        try:
            with self._session_factory() as db:
                orm = db.get(SaveSlotModel, slot)
                return orm.payload if orm else None
        except SQLAlchemyError as e:
            logger.error("Failed to read save slot %s: %s", slot, e)
            raise PersistenceError("Error loading save file.") from e

    def write(self, slot: str, payload: str) -> None:
        try:
            with self._session_factory() as db:
                orm = db.get(SaveSlotModel, slot)
                now = datetime.now(timezone.utc).replace(tzinfo=None)
                if orm is None:
                    db.add(SaveSlotModel(slot_key=slot, payload=payload, updated_at=now))
                else:
                    orm.payload = payload
                    orm.updated_at = now
                db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to write save slot %s: %s", slot, e)
            raise PersistenceError("Error saving game.") from e
        logger.debug("Save slot %s written (%d bytes)", slot, len(payload))

