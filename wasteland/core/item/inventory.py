"""인벤토리 관리 - 스택 규칙, 무게 계산, 장착 슬롯

불변식:
- 모든 항목의 count >= 1 (0이 되면 즉시 제거)
- 스택 불가 항목의 count는 항상 1
- 병뚜껑(Bottle Cap) 화폐는 인벤토리에 들어오지 않는다 (Player.acquire에서 caps로 변환)
- 총 무게는 저장하지 않고 항목에서 계산한다
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, Optional

from .models import BOTTLE_CAP_NAME, Item, ItemType

logger = logging.getLogger(__name__)

STACKABLE_TYPES = frozenset({ItemType.CURRENCY, ItemType.CONSUMABLE, ItemType.AMMO})
STACKABLE_NAMES = frozenset({BOTTLE_CAP_NAME, "Pre-War Money"})


class EquipSlot(str, Enum):
    WEAPON = "weapon"
    ARMOR = "armor"


def is_stackable(item: Item) -> bool:
    return item.item_type in STACKABLE_TYPES or item.name in STACKABLE_NAMES


def matches_name(item_name: str, query: str) -> bool:
    """대소문자 무시 부분 문자열 매칭"""
    return query.lower() in item_name.lower()


class Inventory:
    """플레이어 소지품. 표시 순서 = 삽입 순서."""

    def __init__(
        self,
        items: Optional[list[Item]] = None,
        equipped: Optional[dict[EquipSlot, Optional[str]]] = None,
    ) -> None:
        self._items: list[Item] = list(items or [])
        self._equipped: dict[EquipSlot, Optional[str]] = {
            EquipSlot.WEAPON: None,
            EquipSlot.ARMOR: None,
        }
        if equipped:
            self._equipped.update(equipped)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[Item]:
        return list(self._items)

    @property
    def total_weight(self) -> float:
        return sum(item.total_weight for item in self._items)

    # === 조회 ===

    def get(self, uid: str) -> Optional[Item]:
        for item in self._items:
            if item.uid == uid:
                return item
        return None

    def find(self, query: str) -> Optional[Item]:
        """이름 부분 일치 첫 항목"""
        if not query:
            return None
        for item in self._items:
            if matches_name(item.name, query):
                return item
        return None

    def find_stack(self, name: str, item_type: ItemType) -> Optional[Item]:
        for item in self._items:
            if item.name == name and item.item_type == item_type:
                return item
        return None

    # === 추가/제거 ===

    def add(self, item: Item) -> Item:
        """아이템 추가. 들어간 항목(스택이면 기존 항목)을 반환.

        스택 가능: 같은 (name, type) 항목에 count 합산.
        스택 불가: 새 항목으로 추가. count > 1이면 1개씩 분리.
        """
        if is_stackable(item):
            existing = self.find_stack(item.name, item.item_type)
            if existing is not None:
                existing.count += item.count
                return existing
            self._items.append(item)
            return item

        if item.count > 1:
            units = [item.spawn() for _ in range(item.count - 1)]
            item.count = 1
            self._items.append(item)
            self._items.extend(units)
            return units[-1]

        self._items.append(item)
        return item

    def remove_one(self, uid: str) -> Optional[Item]:
        """1개 제거. count가 0이 되면 항목 자체를 삭제.

        Returns:
            제거된 1개 단위의 개체 (없으면 None)
        """
        entry = self.get(uid)
        if entry is None:
            return None

        if entry.count > 1:
            entry.count -= 1
            return entry.spawn()

        self._items.remove(entry)
        self._unequip_uid(uid)
        return entry

    def _unequip_uid(self, uid: str) -> None:
        for slot, equipped_uid in self._equipped.items():
            if equipped_uid == uid:
                self._equipped[slot] = None

    # === 장착 ===

    def equip(self, uid: str, slot: EquipSlot) -> Item:
        item = self.get(uid)
        if item is None:
            raise KeyError(uid)
        self._equipped[slot] = uid
        return item

    def equipped(self, slot: EquipSlot) -> Optional[Item]:
        uid = self._equipped.get(slot)
        return self.get(uid) if uid else None

    def equipped_slot_of(self, uid: str) -> Optional[EquipSlot]:
        for slot, equipped_uid in self._equipped.items():
            if equipped_uid == uid:
                return slot
        return None

    @property
    def equipped_uids(self) -> dict[EquipSlot, Optional[str]]:
        return dict(self._equipped)

    # === 정리 ===

    def consolidate(self) -> int:
        """로드 직후 호출. 쪼개진 스택 병합, 남은 병뚜껑 분리.

        Returns:
            caps로 환산해야 할 병뚜껑 수
        """
        caps_found = 0
        merged: list[Item] = []
        stacks: dict[tuple[str, ItemType], Item] = {}
        redirect: dict[str, str] = {}

        for item in self._items:
            if item.is_bottle_cap:
                caps_found += item.count
                continue

            if is_stackable(item):
                key = (item.name, item.item_type)
                stack = stacks.get(key)
                if stack is None:
                    stacks[key] = item
                    merged.append(item)
                else:
                    stack.count += item.count
                    redirect[item.uid] = stack.uid
            elif item.count > 1:
                units = [item.spawn() for _ in range(item.count - 1)]
                item.count = 1
                merged.append(item)
                merged.extend(units)
            else:
                merged.append(item)

        self._items = merged

        # 병합으로 사라진 항목을 가리키던 슬롯은 살아남은 스택으로 이동
        for slot, uid in self._equipped.items():
            if uid is None:
                continue
            uid = redirect.get(uid, uid)
            self._equipped[slot] = uid if self.get(uid) is not None else None

        if caps_found or redirect:
            logger.info(
                "Inventory consolidated: %d caps converted, %d stacks merged",
                caps_found,
                len(redirect),
            )
        return caps_found
