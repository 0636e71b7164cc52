"""Engine exports."""

from .fleet import BOARD_SIZE, FLEET_SIZE, STANDARD_FLEET, Fleet, FleetStatus
from .game import Game, GamePhase, GameState, ShotOutcome
from .position import Position
from .ship import Bearing, InvalidBearingError, Ship, ShipKind, build_ship

__all__ = [
    "BOARD_SIZE",
    "FLEET_SIZE",
    "STANDARD_FLEET",
    "Bearing",
    "Fleet",
    "FleetStatus",
    "Game",
    "GamePhase",
    "GameState",
    "InvalidBearingError",
    "Position",
    "Ship",
    "ShipKind",
    "ShotOutcome",
    "build_ship",
]
