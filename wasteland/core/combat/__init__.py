"""전투 시스템 Core 패키지"""

from wasteland.core.combat.models import CombatOutcome, CombatPhase, CombatState, Enemy

__all__ = [
    "CombatPhase",
    "CombatOutcome",
    "Enemy",
    "CombatState",
]
