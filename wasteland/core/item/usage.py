"""아이템 사용/장착, 인벤토리 표시"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wasteland.core.effect_dispatch import apply_effect
from wasteland.core.errors import PreconditionError, UserInputError
from wasteland.core.narration import Panel

from .inventory import EquipSlot
from .models import Item, ItemType, format_weight

if TYPE_CHECKING:
    from wasteland.core.session import GameSession

logger = logging.getLogger(__name__)

_EQUIP_SLOTS = {
    ItemType.WEAPON: EquipSlot.WEAPON,
    ItemType.ARMOR: EquipSlot.ARMOR,
}


def find_owned(session: GameSession, query: str) -> Item:
    item = session.player.inventory.find(query)
    if item is None:
        raise UserInputError(f"You don't have {query}.")
    return item


def consume(session: GameSession, item: Item, announce: bool = True) -> None:
    """소모품 1개 사용: 효과 적용 후 1개 제거 (0개면 항목 삭제)

    announce=False면 사용 문구는 호출자가 직접 서술한다.
    """
    if item.effect is not None:
        apply_effect(session, item.effect)
    session.player.inventory.remove_one(item.uid)
    if announce:
        session.narrator.success(f"You use {item.name}.")
    session.narrator.refresh(Panel.INVENTORY)


def use_item(session: GameSession, query: str) -> None:
    """비전투 use. 무기/방어구는 장착, 소모품은 소비."""
    if not query:
        raise UserInputError("Use what?")
    item = find_owned(session, query)

    slot = _EQUIP_SLOTS.get(item.item_type)
    if slot is not None:
        session.player.inventory.equip(item.uid, slot)
        session.narrator.success(f"You equip {item.name}.")
        session.narrator.refresh(Panel.INVENTORY, Panel.VITALS)
        logger.debug("Equipped %s in %s slot", item.uid, slot.value)
    elif item.item_type == ItemType.CONSUMABLE:
        consume(session, item)
    elif item.item_type == ItemType.KEY:
        session.narrator.success(f"You use {item.name}.")
    else:
        raise PreconditionError(f"You can't use {item.name} that way.")


def show_inventory(session: GameSession) -> None:
    narrator = session.narrator
    inventory = session.player.inventory
    if not len(inventory):
        narrator.info("Your inventory is empty.")
        return

    narrator.highlight("Inventory:")
    for index, item in enumerate(inventory, start=1):
        line = f"{index}. {item.name}"
        if item.count > 1:
            line += f" (x{item.count})"
        line += f" ({format_weight(item.total_weight)} lbs)"
        if inventory.equipped_slot_of(item.uid) is not None:
            line += " [equipped]"
        narrator.info(line)
