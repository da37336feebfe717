"""Wasteland Chronicles Core Engine"""

from wasteland.core.content import GameContent, load_content, parse_content
from wasteland.core.engine import CommandInterpreter, CommandResult, new_session
from wasteland.core.errors import (
    ContentError,
    GameError,
    PersistenceError,
    PreconditionError,
    UserInputError,
)
from wasteland.core.narration import Narration, Panel, Severity
from wasteland.core.player import PlayerState
from wasteland.core.save_state import InMemorySaveStorage, SaveStorage
from wasteland.core.session import GameSession, SessionStatus
from wasteland.core.world import Exit, Location, World

__all__ = [
    "GameContent",
    "load_content",
    "parse_content",
    "CommandInterpreter",
    "CommandResult",
    "new_session",
    "GameError",
    "UserInputError",
    "PreconditionError",
    "PersistenceError",
    "ContentError",
    "Narration",
    "Panel",
    "Severity",
    "PlayerState",
    "SaveStorage",
    "InMemorySaveStorage",
    "GameSession",
    "SessionStatus",
    "Exit",
    "Location",
    "World",
]
