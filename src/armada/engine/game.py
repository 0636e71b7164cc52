"""Shot resolution and match statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from armada.telemetry import get_meter, get_tracer

from .fleet import BOARD_SIZE, Fleet
from .position import Position
from .ship import Ship

logger = logging.getLogger(__name__)
tracer = get_tracer("armada.engine.game")
meter = get_meter("armada.engine.game")

SHOT_COUNTER = meter.create_counter(
    "armada_engine_shots",
    unit="1",
    description="Shots fired at a fleet, by outcome",
)


class GamePhase(Enum):
    """Lifecycle of a match against one fleet."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    OVER = "over"


class ShotOutcome(Enum):
    """How a single shot was classified."""

    INVALID = "invalid"
    REPEATED = "repeated"
    MISS = "miss"
    HIT = "hit"
    SUNK = "sunk"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of the match statistics."""

    phase: GamePhase
    shots: tuple[Position, ...]
    invalid_shots: int
    repeated_shots: int
    hits: int
    sunk_ships: int
    remaining_ships: int


class Game:
    """Fires shots at a fleet and keeps score.

    The game borrows ``fleet``; it does not own it and must not outlive it.
    """

    def __init__(self, fleet: Fleet) -> None:
        self.fleet = fleet
        self._shots: list[Position] = []
        self._invalid_shots = 0
        self._repeated_shots = 0
        self._hits = 0
        self._sunk_ships = 0
        self.last_outcome: ShotOutcome | None = None

    def fire(self, pos: Position) -> Ship | None:
        """Resolve a shot at ``pos``.

        Returns the ship only when this shot sinks it. Misses, hits that leave
        the ship afloat, repeated and out-of-board shots all return None; the
        counters and ``last_outcome`` tell them apart.
        """
        with tracer.start_as_current_span("game.fire") as span:
            span.set_attribute("shot.row", pos.row)
            span.set_attribute("shot.column", pos.column)
            sunk, outcome = self._resolve(pos)
            self.last_outcome = outcome
            span.set_attribute("shot.outcome", outcome.value)
            SHOT_COUNTER.add(1, attributes={"outcome": outcome.value, "owner": self.fleet.owner})
            return sunk

    def _resolve(self, pos: Position) -> tuple[Ship | None, ShotOutcome]:
        target = Position(pos.row, pos.column)
        if not self.valid_shot(target):
            self._invalid_shots += 1
            logger.warning("shot_out_of_bounds", extra={"row": pos.row, "column": pos.column})
            return None, ShotOutcome.INVALID
        if self.repeated_shot(target):
            self._repeated_shots += 1
            logger.warning("shot_repeated", extra={"row": pos.row, "column": pos.column})
            return None, ShotOutcome.REPEATED

        self._shots.append(target)
        ship = self.fleet.ship_at(target)
        if ship is None:
            logger.info("shot_miss", extra={"row": pos.row, "column": pos.column})
            return None, ShotOutcome.MISS

        ship.shoot(target)
        self._hits += 1
        if ship.still_floating():
            logger.info(
                "shot_hit",
                extra={"row": pos.row, "column": pos.column, "category": ship.category},
            )
            return None, ShotOutcome.HIT

        self._sunk_ships += 1
        logger.info(
            "ship_sunk",
            extra={"row": pos.row, "column": pos.column, "category": ship.category},
        )
        return ship, ShotOutcome.SUNK

    @staticmethod
    def valid_shot(pos: Position) -> bool:
        return 0 <= pos.row < BOARD_SIZE and 0 <= pos.column < BOARD_SIZE

    def repeated_shot(self, pos: Position) -> bool:
        return pos in self._shots

    @property
    def shots(self) -> list[Position]:
        """Valid, non-repeated shots in firing order."""
        return list(self._shots)

    @property
    def invalid_shots(self) -> int:
        return self._invalid_shots

    @property
    def repeated_shots(self) -> int:
        return self._repeated_shots

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def sunk_ships(self) -> int:
        return self._sunk_ships

    @property
    def remaining_ships(self) -> int:
        return len(self.fleet.get_floating_ships())

    @property
    def phase(self) -> GamePhase:
        if self.remaining_ships == 0:
            return GamePhase.OVER
        if not self._shots:
            return GamePhase.IDLE
        return GamePhase.IN_PROGRESS

    def is_over(self) -> bool:
        return self.phase is GamePhase.OVER

    def get_state(self) -> GameState:
        return GameState(
            phase=self.phase,
            shots=tuple(self._shots),
            invalid_shots=self._invalid_shots,
            repeated_shots=self._repeated_shots,
            hits=self._hits,
            sunk_ships=self._sunk_ships,
            remaining_ships=self.remaining_ships,
        )
