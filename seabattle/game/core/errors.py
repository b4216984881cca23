"""Rule violations raised by core operations."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Caller-facing failure categories."""

    OUT_OF_BOUNDS = "OutOfBounds"
    OVERLAP = "Overlap"
    COLLISION = "Collision"
    NOT_FOUND = "NotFound"
    NO_ACTIVE_SHIP = "NoActiveShip"
    ALREADY_ATTACKED = "AlreadyAttacked"
    GAME_OVER = "GameOver"
    NOT_YOUR_TURN = "NotYourTurn"
    NO_TARGETS_AVAILABLE = "NoTargetsAvailable"
    PLACEMENT_FAILED = "PlacementFailed"
    PLACEMENT_INCOMPLETE = "PlacementIncomplete"
    NO_GAME_IN_PROGRESS = "NoGameInProgress"


class GameRuleError(Exception):
    """Deterministic rule violation; never retried."""

    kind: ErrorKind
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class OutOfBounds(GameRuleError):
    kind = ErrorKind.OUT_OF_BOUNDS


class Overlap(GameRuleError):
    kind = ErrorKind.OVERLAP


class Collision(GameRuleError):
    kind = ErrorKind.COLLISION


class NotFound(GameRuleError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class NoActiveShip(GameRuleError):
    kind = ErrorKind.NO_ACTIVE_SHIP


class AlreadyAttacked(GameRuleError):
    kind = ErrorKind.ALREADY_ATTACKED
    status_code = 409


class GameOver(GameRuleError):
    kind = ErrorKind.GAME_OVER
    status_code = 409


class NotYourTurn(GameRuleError):
    kind = ErrorKind.NOT_YOUR_TURN
    status_code = 409


class NoTargetsAvailable(GameRuleError):
    kind = ErrorKind.NO_TARGETS_AVAILABLE
    status_code = 409


class PlacementFailed(GameRuleError):
    kind = ErrorKind.PLACEMENT_FAILED
    status_code = 500


class PlacementIncomplete(GameRuleError):
    kind = ErrorKind.PLACEMENT_INCOMPLETE


class NoGameInProgress(GameRuleError):
    kind = ErrorKind.NO_GAME_IN_PROGRESS
    status_code = 409
