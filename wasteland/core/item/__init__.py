"""아이템 시스템 Core - 순수 Python, DB 무관"""

from .models import BOTTLE_CAP_NAME, Item, ItemType
from .inventory import EquipSlot, Inventory, is_stackable
from .registry import ItemRegistry

__all__ = [
    "BOTTLE_CAP_NAME",
    "Item",
    "ItemType",
    "EquipSlot",
    "Inventory",
    "is_stackable",
    "ItemRegistry",
]
