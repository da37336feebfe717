"""캐릭터 능력치 상수 (S.P.E.C.I.A.L. + 스킬)"""

SPECIAL_ATTRS = (
    "strength",
    "perception",
    "endurance",
    "charisma",
    "intelligence",
    "agility",
    "luck",
)

SKILLS = (
    "smallGuns",
    "bigGuns",
    "energyWeapons",
    "unarmed",
    "melee",
    "throwing",
    "firstAid",
    "doctor",
    "sneak",
    "lockpick",
    "steal",
    "traps",
    "science",
    "repair",
    "speech",
    "barter",
    "gambling",
    "outdoorsman",
)

DEFAULT_SPECIAL = 5
DEFAULT_SKILL = 0


def is_stat_name(name: str) -> bool:
    return name in SPECIAL_ATTRS or name in SKILLS
