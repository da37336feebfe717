"""플레이어 상태"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wasteland.core.errors import ContentError
from wasteland.core.item.inventory import EquipSlot, Inventory
from wasteland.core.item.models import Item
from wasteland.core.logging import get_logger
from wasteland.core.stats import DEFAULT_SKILL, DEFAULT_SPECIAL, SKILLS, SPECIAL_ATTRS

logger = get_logger(__name__)

UNARMED_DAMAGE = 5
XP_PER_LEVEL = 100
LEVEL_HP_BONUS = 10
LEVEL_AP_BONUS = 5


def _default_special() -> dict[str, int]:
    return {attr: DEFAULT_SPECIAL for attr in SPECIAL_ATTRS}


def _default_skills() -> dict[str, int]:
    return {skill: DEFAULT_SKILL for skill in SKILLS}


@dataclass
class PlayerState:
    """플레이어 상태. 소지 무게는 인벤토리에서 계산된다."""

    name: str = "Vault Dweller"
    level: int = 1
    experience: int = 0

    hp: int = 100
    max_hp: int = 100
    ap: int = 100
    max_ap: int = 100
    rads: int = 0
    max_rads: int = 100

    caps: int = 0
    max_weight: float = 150

    special: dict[str, int] = field(default_factory=_default_special)
    skills: dict[str, int] = field(default_factory=_default_skills)

    inventory: Inventory = field(default_factory=Inventory)

    # 퀘스트 목표 판정용 관측 상태
    talked_to: set[str] = field(default_factory=set)
    combat_encounters: int = 0

    @property
    def carried_weight(self) -> float:
        return self.inventory.total_weight

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    @property
    def weapon_damage(self) -> int:
        weapon = self.inventory.equipped(EquipSlot.WEAPON)
        return weapon.damage if weapon else UNARMED_DAMAGE

    def can_carry(self, item: Item) -> bool:
        if item.is_bottle_cap:
            return True
        return self.carried_weight + item.total_weight <= self.max_weight

    def acquire(self, item: Item) -> int:
        """아이템 획득. 병뚜껑은 caps로 환산하고 인벤토리에 넣지 않는다.

        Returns:
            획득한 caps 수 (병뚜껑이 아니면 0)
        """
        if item.is_bottle_cap:
            self.caps += item.count
            return item.count
        self.inventory.add(item)
        return 0

    def consolidate_inventory(self) -> None:
        self.caps += self.inventory.consolidate()

    # === 수치 변경 ===

    def heal(self, amount: int) -> int:
        old = self.hp
        self.hp = min(self.max_hp, self.hp + amount)
        return self.hp - old

    def adjust_rads(self, amount: int) -> int:
        old = self.rads
        self.rads = max(0, min(self.max_rads, self.rads + amount))
        return self.rads - old

    def adjust_stat(self, stat: str, delta: int) -> int:
        """SPECIAL 또는 스킬 증감. 0 미만으로 내려가지 않는다."""
        table = self.special if stat in self.special else self.skills
        table[stat] = max(0, table.get(stat, 0) + delta)
        return table[stat]

    def take_damage(self, amount: int) -> None:
        # 음수 HP 허용. 사망 판정은 hp <= 0
        self.hp -= amount

    def gain_experience(self, amount: int) -> bool:
        """경험치 획득. 레벨업하면 True.

        한 번의 획득에 레벨 임계치 검사는 1회만 한다 (연쇄 레벨업 없음).
        """
        self.experience += amount
        if self.experience >= self.level * XP_PER_LEVEL:
            self.level_up()
            return True
        return False

    def level_up(self) -> None:
        self.level += 1
        self.experience = 0
        self.max_hp += LEVEL_HP_BONUS
        self.hp = self.max_hp
        self.max_ap += LEVEL_AP_BONUS
        self.ap = self.max_ap
        logger.info("Player leveled up to %d", self.level)

    # === 직렬화 ===

    def to_dict(self) -> dict:
        equipped = self.inventory.equipped_uids
        return {
            "name": self.name,
            "level": self.level,
            "experience": self.experience,
            "hp": self.hp,
            "maxHp": self.max_hp,
            "ap": self.ap,
            "maxAp": self.max_ap,
            "rads": self.rads,
            "maxRads": self.max_rads,
            "caps": self.caps,
            "weight": self.carried_weight,
            "maxWeight": self.max_weight,
            "special": dict(self.special),
            "skills": dict(self.skills),
            "inventory": [item.to_dict() for item in self.inventory],
            "equipped": {slot.value: uid for slot, uid in equipped.items()},
            "talkedTo": sorted(self.talked_to),
            "combatEncounters": self.combat_encounters,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PlayerState:
        """세이브 dict에서 복원. 저장된 weight 값은 무시하고 인벤토리에서 다시 계산."""
        items = [Item.from_dict(raw) for raw in data.get("inventory", [])]
        raw_equipped = data.get("equipped") or {}
        equipped: dict[EquipSlot, Optional[str]] = {}
        for slot in EquipSlot:
            uid = raw_equipped.get(slot.value)
            if uid is not None and not isinstance(uid, str):
                raise ContentError(f"invalid equipped uid for {slot.value}: {uid!r}")
            equipped[slot] = uid

        special = _default_special()
        special.update({k: int(v) for k, v in data.get("special", {}).items()})
        skills = _default_skills()
        skills.update({k: int(v) for k, v in data.get("skills", {}).items()})

        return cls(
            name=data.get("name", "Vault Dweller"),
            level=int(data["level"]),
            experience=int(data.get("experience", 0)),
            hp=int(data["hp"]),
            max_hp=int(data["maxHp"]),
            ap=int(data.get("ap", 100)),
            max_ap=int(data.get("maxAp", 100)),
            rads=int(data.get("rads", 0)),
            max_rads=int(data.get("maxRads", 100)),
            caps=int(data.get("caps", 0)),
            max_weight=float(data.get("maxWeight", 150)),
            special=special,
            skills=skills,
            inventory=Inventory(items, equipped),
            talked_to=set(data.get("talkedTo", [])),
            combat_encounters=int(data.get("combatEncounters", 0)),
        )
