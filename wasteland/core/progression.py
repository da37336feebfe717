"""경험치 획득과 레벨업 서술"""

from wasteland.core.narration import Narrator, Panel
from wasteland.core.player import PlayerState


def grant_experience(player: PlayerState, amount: int, narrator: Narrator) -> None:
    narrator.success(f"You gain {amount} experience points!")
    if player.gain_experience(amount):
        narrator.highlight(f"Level up! You are now level {player.level}!")
        narrator.success("Your health and action points have increased!")
    narrator.refresh(Panel.VITALS)


def grant_caps(player: PlayerState, amount: int, narrator: Narrator) -> None:
    player.caps += amount
    narrator.success(f"You receive {amount} caps.")
    narrator.refresh(Panel.INVENTORY)
