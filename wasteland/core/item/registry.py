"""아이템 원형 저장소 - 콘텐츠 로드 + 개체 생성"""

from __future__ import annotations

import logging
from typing import Optional

from .models import Item

logger = logging.getLogger(__name__)


class ItemRegistry:
    """
    아이템 원형 저장소.
    콘텐츠 키("stimpak") → 원형 Item. 월드 배치/보상 지급 시 create()로 새 개체를 만든다.
    """

    def __init__(self) -> None:
        self._templates: dict[str, Item] = {}

    def load_from_dict(self, raw_items: dict[str, dict]) -> int:
        """콘텐츠의 "items" 객체 로드. 반환: 로드된 수량.

        스키마 위반은 ContentError로 그대로 전파한다 (로드 시점 실패).
        """
        for key, raw in raw_items.items():
            self.register(key, Item.from_dict(raw))
        logger.info("Loaded %d item templates", len(raw_items))
        return len(raw_items)

    def register(self, key: str, template: Item) -> None:
        """이미 존재하는 키면 경고 로그 후 덮어쓴다."""
        if key in self._templates:
            logger.warning("Overwriting existing item template: %s", key)
        self._templates[key] = template

    def get(self, key: str) -> Optional[Item]:
        """원형 조회. 없으면 None."""
        return self._templates.get(key)

    def create(self, key: str, count: int = 1) -> Item:
        """원형에서 새 개체 생성. 없는 키면 KeyError."""
        template = self._templates.get(key)
        if template is None:
            raise KeyError(f"Unknown item template: {key}")
        return template.spawn(count)

    def keys(self) -> list[str]:
        return list(self._templates)

    def count(self) -> int:
        return len(self._templates)
