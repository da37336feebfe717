"""
Wasteland Chronicles Core Engine - Command Interpreter
======================================================
텍스트 커맨드 → 상태 머신 디스패치

우선순위:
1. 전투 중: 전투 커맨드만 (attack/flee/use)
2. 대화 중: bye/goodbye/end 종료, 숫자는 선택지. 그 외 입력은 대화를 닫고 일반 처리
   (뒤이은 커맨드가 거절되어도 대화는 이미 닫힌 상태로 남는다)
3. 일반 커맨드
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from wasteland.core import navigator
from wasteland.core.combat import machine as combat
from wasteland.core.content import GameContent
from wasteland.core.dialogue import machine as dialogue
from wasteland.core.errors import GameError, UserInputError
from wasteland.core.event_bus import EventBus
from wasteland.core.item import usage
from wasteland.core.item.models import format_weight
from wasteland.core.logging import get_logger
from wasteland.core.narration import Narration, Panel, Severity
from wasteland.core.player import XP_PER_LEVEL
from wasteland.core.save_state import SaveStorage, load_game, save_game
from wasteland.core.session import DEFAULT_SAVE_SLOT, GameSession, SessionStatus

logger = get_logger(__name__)

# 동의어 → 정규 동사
VERB_SYNONYMS: dict[str, str] = {
    "look": "look",
    "l": "look",
    "examine": "examine",
    "ex": "examine",
    "inspect": "examine",
    "go": "go",
    "move": "go",
    "walk": "go",
    "take": "take",
    "get": "take",
    "pick": "take",
    "use": "use",
    "talk": "talk",
    "speak": "talk",
    "attack": "attack",
    "fight": "attack",
    "flee": "flee",
    "run": "flee",
    "inventory": "inventory",
    "inv": "inventory",
    "i": "inventory",
    "stats": "stats",
    "character": "stats",
    "quests": "quests",
    "journal": "quests",
    "q": "quests",
    "help": "help",
    "h": "help",
    "save": "save",
    "load": "load",
    "quit": "quit",
    "exit": "quit",
    "restart": "restart",
}

DIALOGUE_EXIT_WORDS = frozenset({"bye", "goodbye", "end"})

# 게임 오버/종료 후에도 받는 커맨드
TERMINAL_VERBS = frozenset({"restart", "load", "help", "quit"})

HELP_LINES = (
    "look/l [target] - Look around, in a direction, or at something",
    "examine/ex/inspect [item] - Examine item stats in detail",
    "go/move/walk [direction] - Move in a direction",
    "take/get/pick [item] - Take an item",
    "take/get/pick all - Take all items here",
    "use [item] - Use or equip an item",
    "talk/speak [person] - Talk to someone",
    "attack/fight [enemy] - Attack an enemy",
    "flee/run - Run away from combat",
    "inventory/inv/i - Check your inventory",
    "stats/character - View character stats",
    "quests/journal/q - View your quest journal",
    "help/h - Show this help",
    "save - Save your game",
    "load - Load your game",
    "restart - Start a new game",
    "quit/exit - Quit the game",
)


@dataclass
class CommandResult:
    """커맨드 1회 처리 결과"""

    lines: list[Narration] = field(default_factory=list)
    panels: set[Panel] = field(default_factory=set)
    status: SessionStatus = SessionStatus.PLAYING
    mode: str = "explore"

    @property
    def texts(self) -> list[str]:
        return [line.text for line in self.lines]

    def to_dict(self) -> dict:
        return {
            "lines": [line.to_dict() for line in self.lines],
            "refresh": sorted(panel.value for panel in self.panels),
            "status": self.status.value,
            "mode": self.mode,
        }


def split_command(text: str) -> tuple[str, str]:
    """공백 기준 동사 + 나머지. 동사는 소문자."""
    parts = text.split(None, 1)
    verb = parts[0].lower()
    rest = parts[1].strip() if len(parts) > 1 else ""
    return verb, rest


class CommandInterpreter:
    """
    세션 하나에 묶인 커맨드 해석기.

    GameError는 여기서 잡아 서술로 바꾼다 (상태 변경 없음).
    그 밖의 예외는 로그를 남기고 다시 던진다.
    """

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self._handlers: dict[str, Callable[[str], None]] = {
            "look": self._look,
            "examine": self._examine,
            "go": self._go,
            "take": self._take,
            "use": self._use,
            "talk": self._talk,
            "attack": self._attack,
            "flee": self._flee,
            "inventory": self._inventory,
            "stats": self._stats,
            "quests": self._quests,
            "help": self._help,
            "save": self._save,
            "load": self._load,
            "quit": self._quit,
            "restart": self._restart,
        }

    # === 진입점 ===

    def start(self) -> CommandResult:
        """첫 화면 서술"""
        self._welcome()
        return self._result()

    def execute(self, text: str) -> CommandResult:
        text = text.strip()
        if not text:
            return self._result()

        session = self.session
        session.narrator.info(f"> {text}")
        verb, rest = split_command(text)

        try:
            self._dispatch(verb, rest)
        except GameError as e:
            session.narrator.say(e.message, Severity(e.severity))
        except Exception:
            logger.exception("Command failed: %r", text)
            session.narrator.flush()
            raise

        return self._result()

    def _dispatch(self, verb: str, rest: str) -> None:
        session = self.session

        if not session.is_playing:
            canonical = VERB_SYNONYMS.get(verb)
            if canonical not in TERMINAL_VERBS:
                if session.status == SessionStatus.GAME_OVER:
                    raise UserInputError(
                        "You are dead. Type 'restart' to begin again or 'load' to restore your save."
                    )
                raise UserInputError(
                    "The game has ended. Type 'restart' to play again or 'load' to continue."
                )
            self._handlers[canonical](rest)
            return

        if session.combat.active:
            self._dispatch_combat(verb, rest)
            return

        if session.dialogue.active:
            if verb in DIALOGUE_EXIT_WORDS:
                dialogue.end(session)
                return
            if verb.isdecimal() and not rest:
                dialogue.select(session, int(verb))
                return
            # 대화와 무관한 입력: 대화를 닫고 일반 커맨드로 처리.
            # 이후 커맨드가 실패해도 닫힌 대화는 되돌리지 않는다
            dialogue.end(session)

        canonical = VERB_SYNONYMS.get(verb)
        if canonical is None:
            raise UserInputError(
                f"Unknown command: {verb}. Type 'help' for available commands."
            )
        self._handlers[canonical](rest)

    def _dispatch_combat(self, verb: str, rest: str) -> None:
        canonical = VERB_SYNONYMS.get(verb)
        if canonical == "attack":
            combat.attack(self.session)
        elif canonical == "flee":
            combat.flee(self.session)
        elif canonical == "use":
            combat.use_in_combat(self.session, rest)
        else:
            raise UserInputError('In combat! Use "attack", "flee", or "use [item]".')

    def _result(self) -> CommandResult:
        lines, panels = self.session.narrator.flush()
        return CommandResult(
            lines=lines,
            panels=panels,
            status=self.session.status,
            mode=self.session.mode,
        )

    # === 핸들러 ===

    def _look(self, rest: str) -> None:
        navigator.look(self.session, rest)

    def _examine(self, rest: str) -> None:
        navigator.examine(self.session, rest)

    def _go(self, rest: str) -> None:
        navigator.go(self.session, rest)

    def _take(self, rest: str) -> None:
        navigator.take(self.session, rest)

    def _use(self, rest: str) -> None:
        usage.use_item(self.session, rest)

    def _talk(self, rest: str) -> None:
        dialogue.talk(self.session, rest)

    def _attack(self, rest: str) -> None:
        combat.start_combat(self.session, rest)

    def _flee(self, rest: str) -> None:
        raise UserInputError("You are not in combat.")

    def _inventory(self, rest: str) -> None:
        usage.show_inventory(self.session)

    def _stats(self, rest: str) -> None:
        player = self.session.player
        narrator = self.session.narrator
        narrator.highlight("Character Stats:")
        narrator.info(f"Level: {player.level}")
        narrator.info(f"Experience: {player.experience}/{player.level * XP_PER_LEVEL}")
        narrator.info(f"HP: {player.hp}/{player.max_hp}")
        narrator.info(f"AP: {player.ap}/{player.max_ap}")
        narrator.info(f"Rads: {player.rads}/{player.max_rads}")
        narrator.info(f"Caps: {player.caps}")
        narrator.info(
            f"Weight: {format_weight(player.carried_weight)}/{format_weight(player.max_weight)}"
        )
        narrator.highlight("S.P.E.C.I.A.L.:")
        for stat, value in player.special.items():
            narrator.info(f"{stat.upper()}: {value}")

    def _quests(self, rest: str) -> None:
        session = self.session
        session.quests.describe(session.player, session.visited, session.narrator)

    def _help(self, rest: str) -> None:
        narrator = self.session.narrator
        narrator.highlight("Available Commands:")
        for line in HELP_LINES:
            narrator.info(line)

    def _save(self, rest: str) -> None:
        save_game(self.session)
        self.session.narrator.success("Game saved successfully!")

    def _load(self, rest: str) -> None:
        load_game(self.session)
        self.session.narrator.success("Game loaded successfully!")
        navigator.look(self.session)

    def _quit(self, rest: str) -> None:
        session = self.session
        narrator = session.narrator
        narrator.highlight("Thanks for playing Fallout: Wasteland Chronicles!")
        if session.is_playing:
            save_game(session)
            narrator.info("Your progress has been saved automatically.")
        session.status = SessionStatus.ENDED

    def _restart(self, rest: str) -> None:
        self.session.reset()
        self._welcome()

    def _welcome(self) -> None:
        narrator = self.session.narrator
        narrator.highlight("Welcome to the Wasteland, Vault Dweller!")
        narrator.info("You have emerged from Vault 101 into a dangerous world.")
        narrator.info("Use your wits, skills, and whatever you can find to survive.")
        narrator.info('Type "help" for available commands.')
        navigator.look(self.session)
        narrator.refresh(*Panel)


def new_session(
    content: GameContent,
    storage: SaveStorage,
    *,
    slot: str = DEFAULT_SAVE_SLOT,
    seed: Optional[int] = None,
    bus: Optional[EventBus] = None,
) -> GameSession:
    """시드가 주어지면 전투 난수가 재현 가능하다."""
    return GameSession(
        content,
        storage,
        slot=slot,
        rng=random.Random(seed),
        bus=bus,
    )


# === CLI ===

_CLI_COLORS = {
    Severity.NORMAL: "",
    Severity.INFO: "\033[36m",
    Severity.SUCCESS: "\033[32m",
    Severity.ERROR: "\033[31m",
    Severity.HIGHLIGHT: "\033[33m",
}
_CLI_RESET = "\033[0m"


def run_cli():
    """간단한 CLI 게임 루프 (세이브는 설정된 DB에 저장)"""
    from wasteland.config import settings
    from wasteland.core.content import load_content
    from wasteland.core.event_types import EventTypes
    from wasteland.core.logging import setup_logging
    from wasteland.db.database import Base, SessionLocal, engine
    from wasteland.services.save_service import DatabaseSaveStorage

    setup_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)

    content = load_content(settings.CONTENT_PATH)
    bus = EventBus()

    def print_line(event):
        severity = Severity(event.data["severity"])
        color = _CLI_COLORS[severity]
        print(f"{color}{event.data['text']}{_CLI_RESET if color else ''}")

    bus.subscribe(EventTypes.NARRATION, print_line)

    session = new_session(
        content,
        DatabaseSaveStorage(SessionLocal),
        slot=settings.SAVE_SLOT,
        seed=settings.RNG_SEED,
        bus=bus,
    )
    interpreter = CommandInterpreter(session)

    print("\n" + "=" * 50)
    print("  FALLOUT: WASTELAND CHRONICLES")
    print("=" * 50)
    interpreter.start()

    last_tick = time.monotonic()
    while session.status != SessionStatus.ENDED:
        try:
            player = session.player
            prompt = f"\n[HP {player.hp}/{player.max_hp} | Caps {player.caps}] > "
            text = input(prompt)
        except (KeyboardInterrupt, EOFError):
            print()
            text = "quit"
        elapsed = int(time.monotonic() - last_tick)
        if elapsed:
            session.tick(elapsed)
            last_tick += elapsed
        interpreter.execute(text)


# === 메인 실행 ===

if __name__ == "__main__":
    run_cli()
